"""
Task Orchestrator — joins `parallel` e `series` sobre tarefas em estilo callback.

Uma tarefa é qualquer callable que recebe um único callback de conclusão:

    def task(done):
        ...
        done()          # sucesso
        done(error)     # falha (não interrompe o join)

Políticas:
    - series: executa as tarefas estritamente na ordem da lista; a próxima
      só inicia após o callback da anterior; não existe fail-fast
    - parallel: despacha todas as tarefas; o callback final dispara
      exatamente uma vez, após todas as conclusões, em qualquer ordem

Decisões arquiteturais:
    - Cada tarefa produz exatamente um desfecho: um segundo sinal de
      conclusão da mesma tarefa é ignorado
    - Uma exceção levantada de forma síncrona pela tarefa, antes de ela
      sinalizar, conta como conclusão com erro
    - Uma exceção levantada depois do sinal não é descartada: o join
      termina de despachar as tarefas e então a relança ao chamador
    - series avança em laço, sem recursão: listas longas de tarefas
      síncronas não esgotam a pilha
    - O callback final recebe a lista de erros na ordem de conclusão
      (vazia em caso de sucesso)
    - Contadores são protegidos por lock para tolerar conclusões
      tardias vindas de outra thread

Limites explícitos:
    - Não possui timeout nem cancelamento: uma tarefa que nunca sinaliza
      bloqueia o join indefinidamente
    - Não cria threads; tarefas são despachadas na thread do chamador
"""

from __future__ import annotations

import threading
from typing import Callable, List, Optional, Sequence

Done = Callable[..., None]
Task = Callable[[Done], None]
JoinCallback = Callable[[List[BaseException]], None]


class _Signal:
    """Callback de conclusão de uma tarefa; apenas o primeiro sinal conta."""

    __slots__ = ("_callback", "_lock", "fired")

    def __init__(self, callback: Callable[[Optional[BaseException]], None]):
        self._callback = callback
        self._lock = threading.Lock()
        self.fired = False

    def __call__(self, error: Optional[BaseException] = None) -> None:
        with self._lock:
            if self.fired:
                return
            self.fired = True
        self._callback(error)


def _dispatch(task: Task, signal: _Signal) -> Optional[BaseException]:
    """
    Executa `task(signal)`.

    Uma exceção levantada antes do sinal vira a conclusão com erro da
    tarefa. Uma exceção levantada depois do sinal é devolvida ao chamador,
    que a relança quando o join já está consistente.
    """
    try:
        task(signal)
    except Exception as exc:
        if signal.fired:
            return exc
        signal(exc)
    return None


def series(tasks: Sequence[Task], done: JoinCallback) -> None:
    """
    Executa `tasks` em ordem estrita; `done(errors)` após a última.

    O avanço é iterativo: uma conclusão síncrona apenas marca o passo
    como concluído e o laço ativo despacha a próxima tarefa, de modo que
    a profundidade de pilha não cresce com o tamanho da lista.

    Raises:
        Exception: a primeira exceção levantada por uma tarefa depois de
            ela já ter sinalizado, após o laço corrente terminar.
    """
    pending = list(tasks)
    errors: List[BaseException] = []
    lock = threading.Lock()
    index = 0
    running = False
    advanced = False

    def finished(error: Optional[BaseException]) -> None:
        nonlocal index, advanced
        with lock:
            if error is not None:
                errors.append(error)
            index += 1
            if running:
                advanced = True
                return
        drive()

    def drive() -> None:
        nonlocal running, advanced
        late: List[BaseException] = []
        complete = False
        while True:
            with lock:
                if index >= len(pending):
                    running = False
                    complete = True
                    break
                running = True
                advanced = False
                task = pending[index]
            exc = _dispatch(task, _Signal(finished))
            if exc is not None:
                late.append(exc)
            with lock:
                if not advanced:
                    # conclusão assíncrona retoma o laço em `finished`
                    running = False
                    break
        if complete:
            done(errors)
        if late:
            raise late[0]

    drive()


def parallel(tasks: Sequence[Task], done: JoinCallback) -> None:
    """
    Despacha todas as `tasks`; `done(errors)` exatamente uma vez, após todas.

    Raises:
        Exception: a primeira exceção levantada por uma tarefa depois de
            ela já ter sinalizado, após todas as tarefas serem despachadas.
    """
    pending = list(tasks)
    if not pending:
        done([])
        return

    lock = threading.Lock()
    remaining = len(pending)
    errors: List[BaseException] = []

    def finished(error: Optional[BaseException]) -> None:
        nonlocal remaining
        with lock:
            if error is not None:
                errors.append(error)
            remaining -= 1
            last = remaining == 0
        if last:
            done(errors)

    late: List[BaseException] = []
    for task in pending:
        exc = _dispatch(task, _Signal(finished))
        if exc is not None:
            late.append(exc)
    if late:
        raise late[0]

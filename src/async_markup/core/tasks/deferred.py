"""
Deferred — futuro de disparo único e assinante único.

Este módulo define o `Deferred`, o primitivo mínimo de resultado
assíncrono do Async Markup. Ele não é um runtime genérico de promises:
não existe encadeamento de valores, cancelamento nem combinadores.

Regras do contrato:
    - o desfecho passa de PENDING para RESOLVED ou REJECTED uma única vez
    - o primeiro `resolve`/`reject` vence; chamadas posteriores são ignoradas
    - cada ramo (sucesso/falha) aceita exatamente um assinante
    - uma segunda inscrição no mesmo ramo é erro de programação
      (`DuplicateSubscriber`), nunca sobrescrita silenciosa
    - valores de rejeição que não são exceções são encapsulados em
      `DeferredRejection` antes da entrega

Limites explícitos:
    - Não encadeia valores (`then` não produz um novo Deferred)
    - Não possui timeout nem cancelamento
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional, Tuple

from async_markup.core.exceptions import DuplicateSubscriber


class DeferredState(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class DeferredRejection(Exception):
    """Erro padrão que encapsula um motivo de rejeição não-exceção."""

    def __init__(self, reason: Any):
        super().__init__(str(reason))
        self.reason = reason


def _as_error(reason: Any) -> BaseException:
    if isinstance(reason, BaseException):
        return reason
    return DeferredRejection(reason)


class Deferred:
    """
    Futuro de disparo único com um assinante por ramo.

    Uso típico:
        d = Deferred()
        d.then(on_success).fail(on_error)
        ...
        d.resolve(value)
    """

    def __init__(self) -> None:
        self._state = DeferredState.PENDING
        self._args: Tuple[Any, ...] = ()
        self._error: Optional[BaseException] = None
        self._success: Optional[Callable[..., Any]] = None
        self._failure: Optional[Callable[[BaseException], Any]] = None

    @property
    def outcome(self) -> DeferredState:
        return self._state

    @property
    def promise(self) -> "Promise":
        return Promise(self)

    def resolve(self, *args: Any) -> None:
        if self._state is not DeferredState.PENDING:
            return
        self._state = DeferredState.RESOLVED
        self._args = args
        if self._success is not None:
            self._success(*args)

    def reject(self, reason: Any = None) -> None:
        if self._state is not DeferredState.PENDING:
            return
        self._state = DeferredState.REJECTED
        self._error = _as_error(reason)
        if self._failure is not None:
            self._failure(self._error)

    def then(self, callback: Callable[..., Any]) -> "Deferred":
        # um único leitor por ramo, mesmo após o desfecho
        if self._success is not None:
            raise DuplicateSubscriber(
                "Callback de sucesso já registrado",
                details={"branch": "then"},
            )
        self._success = callback
        if self._state is DeferredState.RESOLVED:
            callback(*self._args)
        return self

    def fail(self, callback: Callable[[BaseException], Any]) -> "Deferred":
        if self._failure is not None:
            raise DuplicateSubscriber(
                "Callback de erro já registrado",
                details={"branch": "fail"},
            )
        self._failure = callback
        if self._state is DeferredState.REJECTED:
            callback(self._error)
        return self


class Promise:
    """Visão somente-leitura de um Deferred (apenas `then` e `fail`)."""

    __slots__ = ("_deferred",)

    def __init__(self, deferred: Deferred):
        self._deferred = deferred

    def then(self, callback: Callable[..., Any]) -> "Promise":
        self._deferred.then(callback)
        return self

    def fail(self, callback: Callable[[BaseException], Any]) -> "Promise":
        self._deferred.fail(callback)
        return self

# tests/core/tasks/test_deferred.py
"""
Testes do Deferred (futuro de disparo único e assinante único).

Os testes garantem que:
- o primeiro desfecho (resolve ou reject) vence
- cada ramo aceita exatamente um assinante
- uma segunda inscrição é erro de programação (`DuplicateSubscriber`)
- assinantes tardios recebem o desfecho já estabelecido
- motivos de rejeição que não são exceções são encapsulados

Limites explícitos:
    - Não valida joins (ver test_orchestrator.py)
"""

import pytest

try:
    from async_markup.core.exceptions import DuplicateSubscriber
    from async_markup.core.tasks.deferred import Deferred, DeferredRejection, DeferredState
except Exception as e:  # noqa: BLE001
    Deferred = None
    DeferredRejection = None
    DeferredState = None
    DuplicateSubscriber = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o Deferred e suas exceções estejam disponíveis para os testes.

    Falha imediatamente, com mensagem explícita, quando o módulo
    `tasks.deferred` não pode ser importado.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing deferred module. Implement:\n"
            "- src/async_markup/core/tasks/deferred.py (Deferred)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_resolve_delivers_args_to_subscriber():
    _require_imports()
    received = []

    d = Deferred()
    d.then(lambda *args: received.append(args))
    d.resolve(1, "two")

    assert received == [(1, "two")]
    assert d.outcome is DeferredState.RESOLVED


def test_late_subscriber_receives_established_outcome():
    """
    Verifica que um assinante inscrito após o desfecho é chamado imediatamente.
    """
    _require_imports()
    received = []

    d = Deferred()
    d.resolve("done")
    d.then(received.append)

    assert received == ["done"]


def test_second_then_raises_duplicate_subscriber():
    """
    Verifica que uma segunda inscrição no ramo de sucesso falha explicitamente.

    Decisões arquiteturais:
        - Sobrescrita silenciosa do assinante nunca é permitida
    """
    _require_imports()
    d = Deferred()
    d.then(lambda *_: None)

    with pytest.raises(DuplicateSubscriber):
        d.then(lambda *_: None)


def test_second_fail_raises_duplicate_subscriber():
    _require_imports()
    d = Deferred()
    d.fail(lambda _e: None)

    with pytest.raises(DuplicateSubscriber):
        d.fail(lambda _e: None)


def test_resolve_after_reject_is_noop():
    """
    Verifica que resolver após rejeitar não altera o desfecho original.

    Invariantes:
        - O desfecho muda de PENDING apenas uma vez
        - O assinante de sucesso nunca é chamado
    """
    _require_imports()
    successes, failures = [], []

    d = Deferred()
    d.then(lambda *args: successes.append(args)).fail(failures.append)

    boom = RuntimeError("boom")
    d.reject(boom)
    d.resolve("late")

    assert d.outcome is DeferredState.REJECTED
    assert successes == []
    assert failures == [boom]


def test_reject_after_resolve_is_noop():
    _require_imports()
    failures = []

    d = Deferred()
    d.fail(failures.append)
    d.resolve()
    d.reject(ValueError("late"))

    assert d.outcome is DeferredState.RESOLVED
    assert failures == []


def test_non_exception_reason_is_wrapped():
    _require_imports()
    failures = []

    d = Deferred()
    d.reject("timeout")
    d.fail(failures.append)

    assert len(failures) == 1
    assert isinstance(failures[0], DeferredRejection)
    assert failures[0].reason == "timeout"


def test_promise_view_exposes_only_subscription():
    _require_imports()
    received = []

    d = Deferred()
    p = d.promise
    p.then(received.append)

    assert not hasattr(p, "resolve")
    assert not hasattr(p, "reject")

    with pytest.raises(DuplicateSubscriber):
        d.promise.then(received.append)

    d.resolve("ok")
    assert received == ["ok"]


def test_then_after_resolve_with_subscriber_raises_duplicate_subscriber():
    """
    Verifica que o ramo de sucesso continua ocupado após o desfecho.

    Invariantes:
        - O primeiro assinante recebe os argumentos de `resolve`
        - Um segundo `then`, mesmo após o desfecho, levanta DuplicateSubscriber
          e nunca é chamado
    """
    _require_imports()
    first, second = [], []

    d = Deferred()
    d.then(lambda *args: first.append(args))
    d.resolve(42)

    with pytest.raises(DuplicateSubscriber):
        d.then(lambda *args: second.append(args))

    assert first == [(42,)]
    assert second == []


def test_fail_after_reject_with_subscriber_raises_duplicate_subscriber():
    _require_imports()
    first, second = [], []
    boom = RuntimeError("boom")

    d = Deferred()
    d.fail(first.append)
    d.reject(boom)

    with pytest.raises(DuplicateSubscriber):
        d.fail(second.append)

    assert first == [boom]
    assert second == []

"""
Async Markup — Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do Async Markup.

Objetivo:
- Permitir que Registry, Binding Node, descritores e Deferred levantem
  exceções semânticas tipadas
- Facilitar o mapeamento determinístico para AmlErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Erros de registro e de binding são síncronos e fail-fast.
- Exceções devem carregar apenas dados estruturados (serializáveis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AmlException(Exception):
    """Base class para exceções internas do Async Markup.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Registro / Binding
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DuplicateRegistration(AmlException):
    """Nome endereçável `<prefix>-<name>` já registrado no Registry."""


@dataclass(frozen=True)
class RegistryLockedError(AmlException):
    """Mutação do Registry fora da fase de setup (render em andamento)."""


@dataclass(frozen=True)
class UnresolvedDescriptor(AmlException):
    """Nenhum descritor registrado corresponde ao elemento alvo do binding."""


@dataclass(frozen=True)
class AbstractBinding(AmlException):
    """O descritor resolvido é abstrato e não pode ser associado a um nó."""


# ---------------------------------------------------------------------------
# Atributos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MalformedAttribute(AmlException):
    """Valor de atributo tipado (json estrito) não pôde ser interpretado."""


@dataclass(frozen=True)
class DuplicateAttributeError(AmlException):
    """Atributo não-prefixo declarado duas vezes no mesmo descritor."""


# ---------------------------------------------------------------------------
# Deferred
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DuplicateSubscriber(AmlException):
    """Segunda inscrição `then`/`fail` no mesmo ramo de um Deferred."""

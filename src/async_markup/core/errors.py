"""
Async Markup — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Async Markup.
Erros reportados por callbacks de conclusão (hooks de atributo, render de
nós) não são levantados: são convertidos em payloads e registrados no
Event Log do Registry, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import AmlException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AmlErrorPayload:
    """
    Payload canônico de erro do Async Markup.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao autor do documento ou do descritor
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Registro / Binding
DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"
UNRESOLVED_DESCRIPTOR = "UNRESOLVED_DESCRIPTOR"
ABSTRACT_BINDING = "ABSTRACT_BINDING"

# Atributos
MALFORMED_ATTRIBUTE = "MALFORMED_ATTRIBUTE"
ATTRIBUTE_PROCESSING_ERROR = "ATTRIBUTE_PROCESSING_ERROR"

# Render
RENDER_ERROR = "RENDER_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def attribute_processing_error(
    *,
    descriptor: str,
    errors: int,
    first_error: Optional[str] = None,
    hint: str = "Verifique os hooks `process`/`process_attribute` do descritor; o render foi abortado.",
) -> AmlErrorPayload:
    return AmlErrorPayload(
        type=ATTRIBUTE_PROCESSING_ERROR,
        message="Falha no processamento de atributos",
        details={
            "descriptor": descriptor,
            "errors": errors,
            "first_error": first_error,
        },
        hint=hint,
    )


def render_error(
    *,
    node: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o hook `render` do descritor. Nenhum retry é aplicado automaticamente.",
) -> AmlErrorPayload:
    return AmlErrorPayload(
        type=RENDER_ERROR,
        message="Falha durante o render de um nó",
        details={
            "node": node,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


_CODES = {
    "DuplicateRegistration": DUPLICATE_REGISTRATION,
    "UnresolvedDescriptor": UNRESOLVED_DESCRIPTOR,
    "AbstractBinding": ABSTRACT_BINDING,
    "MalformedAttribute": MALFORMED_ATTRIBUTE,
}


def exception_to_error(exc: BaseException) -> AmlErrorPayload:
    """Converte exceções em AmlErrorPayload (serializável, acionável).

    Regras:
    - AmlException: já vem com message/details/hint; o código é estável
      quando catalogado, senão o nome da classe.
    - Outras exceções: encapsular como RENDER_ERROR sem expor stack trace.
    """
    if isinstance(exc, AmlException):
        name = exc.__class__.__name__
        return AmlErrorPayload(
            type=_CODES.get(name, name),
            message=str(exc) or "Erro do Async Markup",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return render_error(
        exc_type=exc.__class__.__name__,
        exc_message=str(exc) or None,
    )

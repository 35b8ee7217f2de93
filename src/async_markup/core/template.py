"""
Contrato de engine de template e descritor embutido `template`.

O core não compila templates: qualquer callable `(template, data) -> str`
satisfaz o `TemplateRenderer`. O `JinjaTemplateRenderer` é a
implementação distribuída com o pacote.

O descritor embutido `template` (registrado via
`register_template_descriptor`) renderiza o template capturado do
elemento usando os parâmetros globais do Registry e grava o resultado
como conteúdo do elemento.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Protocol

from jinja2 import BaseLoader, Environment, TemplateError

if TYPE_CHECKING:  # pragma: no cover
    from async_markup.core.descriptor.component import ComponentDescriptor
    from async_markup.core.registry import Registry


class TemplateRenderer(Protocol):
    def __call__(self, template: str, data: Mapping[str, Any]) -> str:
        ...


class JinjaTemplateRenderer:
    """Renderer Jinja2 para templates vindos de strings (sem loader de arquivos)."""

    def __init__(self, environment: Optional[Environment] = None):
        self.env = environment or Environment(
            loader=BaseLoader(),
            autoescape=False,  # o template já é markup do documento host
        )

    def __call__(self, template: str, data: Mapping[str, Any]) -> str:
        try:
            return self.env.from_string(template).render(**dict(data))
        except TemplateError as e:
            raise ValueError(f"Template rendering error: {e}") from e


def register_template_descriptor(registry: "Registry", name: str = "template") -> "ComponentDescriptor":
    """Registra o descritor `<prefix>-template` no Registry."""

    def render(descriptor: "ComponentDescriptor", element: Any, template: str, callback: Callable[..., None]) -> None:
        element.set_content(registry.parse_template(template))
        callback()

    return registry.register_descriptor(name, {"render": render})


def template_data(params: Mapping[str, Any], data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Preenche em `data` as chaves ausentes (ou vazias) a partir de `params`."""
    if data is None:
        return dict(params)
    for key, value in params.items():
        if not data.get(key):
            data[key] = value
    return data

"""
Binding Node — associação viva entre um elemento host e seu descritor.

Construção (fail-fast, sem mutação parcial):
    1. captura do template (conteúdo filho serializado), salvo quando
       um template explícito é fornecido
    2. resolução do descritor, nesta ordem:
        a. nome endereçável igual à tag do elemento
        b. atributo booleano com nome igual a um nome endereçável
        c. atributos do elemento iniciados pelo prefixo que nomeiam
           um descritor registrado
    3. `UnresolvedDescriptor` / `AbstractBinding` são levantados antes de
       qualquer alteração no elemento
    4. limpeza do conteúdo, leitura do marcador `<prefix>-rendered` e
       escrita do marcador `<prefix>-registered`

Render:
    - idempotente: um nó já renderizado apenas invoca o callback
    - caso contrário marca `rendered` (no nó e no elemento) e delega ao
      `render` do descritor
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from async_markup.core.exceptions import AbstractBinding, UnresolvedDescriptor

from .host import HostElement, capture_template

if TYPE_CHECKING:  # pragma: no cover
    from async_markup.core.descriptor.component import ComponentDescriptor
    from async_markup.core.registry import Registry


class BindingNode:
    def __init__(self, element: HostElement, registry: "Registry", template: Optional[str] = None):
        self.element = element
        self.registry = registry
        self.template = template if template else capture_template(element)
        self.rendered = False

        self.descriptor: "ComponentDescriptor" = self._resolve_descriptor()

        element.clear_children()
        rendered_marker = registry.marker("rendered")
        if element.has_attribute(rendered_marker):
            self.rendered = bool(element.get_attribute(rendered_marker))
        element.set_attribute(registry.marker("registered"), "true")

        registry.events.log(
            source=self.descriptor.addressable_name,
            level="INFO",
            message="node bound",
            tag=element.tag_name,
            rendered=self.rendered,
        )

    def __repr__(self) -> str:
        return f"BindingNode(<{self.element.tag_name}>, {self.descriptor.name!r})"

    def _resolve_descriptor(self) -> "ComponentDescriptor":
        registry = self.registry
        tag_name = (self.element.tag_name or "").lower()
        descriptors = registry.descriptors()

        match = None
        for descriptor in descriptors:
            if descriptor.addressable_name == tag_name:
                match = descriptor
                break

        if match is None:
            for descriptor in descriptors:
                if self.element.has_attribute(descriptor.addressable_name):
                    match = descriptor
                    break

        if match is None:
            by_name = {d.addressable_name: d for d in descriptors}
            for raw_name, _ in self.element.attributes():
                if raw_name and raw_name.startswith(registry.prefix) and raw_name in by_name:
                    match = by_name[raw_name]
                    break

        if match is None:
            raise UnresolvedDescriptor(
                f"Nenhum descritor corresponde ao elemento <{tag_name}>",
                details={"tag": tag_name, "prefix": registry.prefix},
                hint="Registre o descritor antes do binding ou corrija a tag/atributo do elemento.",
            )

        if match.is_abstract():
            raise AbstractBinding(
                f"Descritor abstrato não pode ser associado a um nó: {match.addressable_name}",
                details={"descriptor": match.addressable_name, "tag": tag_name},
                hint="Use um descritor concreto que herde do abstrato.",
            )

        return match

    def is_rendered(self) -> bool:
        return self.rendered

    def render(self, callback: Optional[Callable[..., Any]] = None) -> None:
        callback = callback or (lambda *_: None)

        if self.descriptor is None or self.rendered:
            callback()
            return

        self.rendered = True
        self.element.set_attribute(self.registry.marker("rendered"), "true")
        self.registry.events.log(
            source=self.descriptor.addressable_name,
            level="DEBUG",
            message="node render started",
            tag=self.element.tag_name,
        )
        self.descriptor.render(self.element, self.template, callback)

# src/async_markup/core/registry.py
"""
Registry de descritores e nós do Async Markup.

Este módulo define o `Registry`, o valor explícito e injetável que
substitui o estado global do documento: mapa nome → descritor, prefixo
de endereçamento, nós associados e render em massa.

Responsabilidades do módulo:
    - Registrar descritores validando unicidade de `<prefix>-<name>`
    - Preservar a ordem de registro (usada na resolução de binding)
    - Recalcular nomes endereçáveis quando o prefixo muda
    - Associar elementos host a Binding Nodes (idempotente)
    - Renderizar todos os nós via join `parallel`
    - Expor parâmetros globais de template e o renderer configurado

Decisões arquiteturais:
    - Registro é uma fase de setup: mutações durante `render_all`
      levantam `RegistryLockedError`
    - Erros de registro e binding são síncronos e não deixam estado parcial
    - Mudança de prefixo não revalida unicidade retroativamente

Invariantes:
    - Cada nome endereçável registrado sob o prefixo vigente é único
      no momento do registro
    - `descriptors()` reflete exatamente a ordem de registro
    - Um mesmo elemento nunca é associado a dois Binding Nodes

Limites explícitos:
    - Não descobre elementos no documento (o chamador fornece os elementos)
    - Não compila templates (delegado ao `TemplateRenderer`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set

from async_markup.core.binding.host import HostElement
from async_markup.core.binding.node import BindingNode
from async_markup.core.descriptor.component import ComponentDescriptor
from async_markup.core.errors import exception_to_error
from async_markup.core.exceptions import DuplicateRegistration, RegistryLockedError
from async_markup.core.tasks.orchestrator import parallel
from async_markup.core.template import JinjaTemplateRenderer, TemplateRenderer, template_data
from async_markup.core.traceability.event_log import EventLog

DEFAULT_PREFIX = "aml"


@dataclass
class Registry:
    """
    Registro canônico de descritores e nós.

    Campos:
        - params: parâmetros globais de template
        - renderer: engine de template usado por `parse_template`
        - events: Event Log estruturado deste Registry
    """

    params: Dict[str, Any] = field(default_factory=dict)
    renderer: TemplateRenderer = field(default_factory=JinjaTemplateRenderer)
    events: EventLog = field(default_factory=EventLog)

    _prefix: str = field(default=DEFAULT_PREFIX, init=False, repr=False)
    _descriptors: List[ComponentDescriptor] = field(default_factory=list, init=False, repr=False)
    # nomes endereçáveis vigentes no momento de cada registro
    _registered: Set[str] = field(default_factory=set, init=False, repr=False)
    _tag_names: List[str] = field(default_factory=list, init=False, repr=False)
    _nodes: List[BindingNode] = field(default_factory=list, init=False, repr=False)
    _rendering: int = field(default=0, init=False, repr=False)

    # -----------------------------
    # Prefixo / nomes endereçáveis
    # -----------------------------
    @property
    def prefix(self) -> str:
        return self._prefix

    @prefix.setter
    def prefix(self, value: str) -> None:
        if value == self._prefix:
            return
        self._ensure_setup_phase("prefix")
        old, self._prefix = self._prefix, value
        self._tag_names = [self.addressable_name(d.name) for d in self._descriptors]
        self.events.log(source="registry", level="INFO", message="prefix changed", old=old, new=value)

    def addressable_name(self, name: str) -> str:
        return f"{self._prefix}-{name}"

    def marker(self, suffix: str) -> str:
        return f"{self._prefix}-{suffix}"

    def tag_names(self) -> List[str]:
        return list(self._tag_names)

    # -----------------------------
    # Descritores
    # -----------------------------
    def register_descriptor(self, name: str, options: Optional[Mapping[str, Any]] = None) -> ComponentDescriptor:
        self._ensure_setup_phase("register_descriptor")

        tag_name = self.addressable_name(name)
        if tag_name in self._registered:
            raise DuplicateRegistration(
                f"Descritor {name} já registrado",
                details={"name": name, "addressable_name": tag_name},
                hint="Escolha outro nome ou altere o prefixo antes do registro.",
            )

        descriptor = ComponentDescriptor(name, options, registry=self)

        self._descriptors.append(descriptor)
        self._registered.add(tag_name)
        self._tag_names.append(tag_name)

        self.events.log(
            source=tag_name,
            level="INFO",
            message="descriptor registered",
            abstract=descriptor.is_abstract(),
            super=descriptor.super_descriptor.name if descriptor.super_descriptor else None,
            attributes=[a.name for a in descriptor.attributes],
        )
        return descriptor

    def descriptor_exists(self, name: str) -> bool:
        return self.addressable_name(name) in self._tag_names

    def get_descriptor_by_name(self, name: str) -> Optional[ComponentDescriptor]:
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def descriptors(self) -> List[ComponentDescriptor]:
        return list(self._descriptors)

    def extend(self, fn: Callable[["Registry"], Any]) -> "Registry":
        fn(self)
        return self

    # -----------------------------
    # Nós
    # -----------------------------
    def nodes(self) -> List[BindingNode]:
        return list(self._nodes)

    def register_node(self, node: BindingNode) -> "Registry":
        if node not in self._nodes:
            self._nodes.append(node)
        return self

    def bind(self, element: HostElement, template: Optional[str] = None) -> Optional[BindingNode]:
        for node in self._nodes:
            if node.element is element:
                return node

        if element.get_attribute(self.marker("registered")):
            self.events.add_warning(
                source="registry",
                message=f"elemento <{element.tag_name}> já registrado por outro Registry; ignorado",
            )
            return None

        node = BindingNode(element, self, template)
        self._nodes.append(node)
        return node

    def bind_all(self, elements: Iterable[HostElement]) -> List[BindingNode]:
        bound = []
        for element in elements:
            node = self.bind(element)
            if node is not None:
                bound.append(node)
        return bound

    def render_all(self, callback: Optional[Callable[[List[BaseException]], Any]] = None) -> None:
        self._rendering += 1

        def finished(errors: List[BaseException]) -> None:
            self._rendering -= 1
            for error in errors:
                self.events.log(
                    source="registry",
                    level="ERROR",
                    message="node render failed",
                    error=exception_to_error(error).to_dict(),
                )
            self.events.log(source="registry", level="INFO", message="render finished", errors=len(errors))
            if callback is not None:
                callback(errors)

        parallel([node.render for node in self._nodes], finished)

    # -----------------------------
    # Templates
    # -----------------------------
    def parse_template(self, template: str, data: Optional[Dict[str, Any]] = None) -> str:
        return self.renderer(template or "", template_data(self.params, data))

    def _ensure_setup_phase(self, operation: str) -> None:
        if self._rendering:
            raise RegistryLockedError(
                f"Operação '{operation}' não permitida durante o render",
                details={"operation": operation},
                hint="Registre descritores e ajuste o prefixo antes de chamar render_all.",
            )

"""
Component Descriptor — definição nomeada e componível de comportamento.

Este módulo define o `ComponentDescriptor`, a unidade registrada no
Registry que descreve quais atributos um elemento aceita e como ele é
renderizado.

Composição (executada uma única vez, na construção):
    1. `inherits` → mescla ordenada das opções resolvidas dos ancestrais;
       o primeiro ancestral resolvível torna-se o `super_descriptor`
    2. flags `abstract` / `async` (apenas das opções do próprio descritor)
    3. declarações `attr` → Attribute Descriptors, na ordem declarada
    4. opções fora do conjunto reservado → membros de extensão
    5. snapshot congelado em `resolved_options`

Pipeline de atributos (`process_attributes`):
    - cada atributo bruto do elemento é associado ao primeiro Attribute
      Descriptor declarado cujo nome é prefixo do nome bruto
    - valor vazio é normalizado para `True`
    - cada associação gera uma tarefa: hook `process` do atributo e, em
      série, hook `process_attribute` do descritor
    - descritores não-prefixo sem associação e com default geram uma
      tarefa com o valor default
    - todas as tarefas são unidas via `parallel`

Política de falhas (abort):
    - filtros rodam durante a varredura; `MalformedAttribute` aborta a
      chamada antes de qualquer tarefa ser despachada
    - erros reportados pelos hooks são aguardados (sem cancelamento) e
      impedem o hook de render; o callback de render recebe o primeiro erro

Limites explícitos:
    - Não descobre elementos nem resolve qual descritor se aplica
      (responsabilidade do Binding Node)
    - Não compila templates
"""

from __future__ import annotations

import types
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, MutableMapping, Optional, Sequence

from async_markup.core.config.merge import freeze, inherit_options
from async_markup.core.errors import attribute_processing_error
from async_markup.core.exceptions import DuplicateAttributeError
from async_markup.core.tasks.orchestrator import Done, JoinCallback, Task, parallel, series

from .attribute import AttributeDescriptor, RawAttribute
from .behavior import DescriptorBehavior

if TYPE_CHECKING:  # pragma: no cover
    from async_markup.core.binding.host import HostElement
    from async_markup.core.registry import Registry


# nomes estruturais usados pelo próprio engine; nunca injetados como extensão
RESERVED_OPTIONS = frozenset({
    "super", "extends", "construct", "abstract", "options", "async",
    "attributes", "is_abstract", "process_attribute", "process_attributes",
    "render", "attr",
})


def _noop(*_args: Any) -> None:
    return None


class ComponentDescriptor:
    """
    Descritor registrado de um elemento customizado.

    Args:
        name (str): Nome do descritor (sem prefixo).
        options (Mapping | None): Opções declaradas. Nunca são mutadas.
        registry (Registry | None): Registry usado para resolver ancestrais,
            o nome endereçável e o Event Log.
    """

    def __init__(
        self,
        name: str,
        options: Optional[Mapping[str, Any]] = None,
        registry: Optional["Registry"] = None,
    ):
        self.name = name
        self.registry = registry
        self.super_descriptor: Optional[ComponentDescriptor] = None
        self.abstract = False
        self.is_async = False
        self.attributes: List[AttributeDescriptor] = []
        self.behavior = DescriptorBehavior()
        self.resolved_options: Mapping[str, Any] = freeze({})

        self.apply_options(options or {})

        if self.behavior.construct is not None:
            self.behavior.construct(self)

    def __repr__(self) -> str:
        return f"ComponentDescriptor({self.name!r})"

    def __getattr__(self, item: str) -> Any:
        behavior = self.__dict__.get("behavior")
        if behavior is not None and item in behavior.extensions:
            return behavior.extensions[item]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {item!r}")

    # ------------------------------------------------------------------
    # Composição
    # ------------------------------------------------------------------

    @property
    def addressable_name(self) -> str:
        if self.registry is None:
            return self.name
        return self.registry.addressable_name(self.name)

    def apply_options(self, options: Mapping[str, Any]) -> None:
        inherits = options.get("inherits")
        if inherits is None:
            inherits = []
        elif isinstance(inherits, str):
            inherits = [inherits]

        ancestors: List[ComponentDescriptor] = []
        for parent_name in inherits:
            parent = None
            if self.registry is not None and self.registry.descriptor_exists(parent_name):
                parent = self.registry.get_descriptor_by_name(parent_name)
            if parent is None:
                self._warn(f"ancestral '{parent_name}' não registrado; ignorado")
                continue
            ancestors.append(parent)

        if ancestors:
            # o primeiro ancestral resolvível é o único super
            self.super_descriptor = ancestors[0]

        resolved = inherit_options(options, (a.resolved_options for a in ancestors))

        self.abstract = bool(resolved.get("abstract", False))
        self.is_async = bool(resolved.get("async", False))

        self._apply_attributes(resolved.get("attr"))

        self.resolved_options = freeze(resolved)
        self.behavior = DescriptorBehavior.from_options(
            self.resolved_options,
            self._collect_extensions(self.resolved_options),
        )

    def _apply_attributes(self, declared: Any) -> None:
        if isinstance(declared, Mapping):
            for attr_name, attr_options in declared.items():
                self.attr(attr_name, attr_options)
        elif isinstance(declared, Sequence) and not isinstance(declared, str):
            for item in declared:
                item = dict(item)
                self.attr(item.pop("name"), item)

    def _collect_extensions(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Separa as opções não reservadas em extensões do descritor.

        Opções que colidem com um membro existente nunca o substituem. A única
        exceção é um membro mapping mutável, que recebe as sub-chaves ausentes;
        como nenhum membro de instância é mapping, isso só se aplica a
        subclasses que declaram um dict como atributo de classe.
        """
        extensions: Dict[str, Any] = {}
        for key, value in options.items():
            if key in RESERVED_OPTIONS or key.startswith("_"):
                continue

            if not hasattr(self, key):
                if callable(value) and not isinstance(value, type):
                    extensions[key] = types.MethodType(value, self)
                else:
                    extensions[key] = value
                continue

            existing = getattr(self, key)
            if isinstance(existing, MutableMapping) and isinstance(value, Mapping):
                merged = dict(existing)
                for sub_key, sub_value in value.items():
                    merged.setdefault(sub_key, sub_value)
                self.__dict__[key] = merged

        return extensions

    def is_abstract(self) -> bool:
        return self.abstract

    def attr(self, name: str, options: Optional[Mapping[str, Any]] = None) -> "ComponentDescriptor":
        attribute = AttributeDescriptor(name, options)
        if not attribute.is_prefix and any(
            a.name == name and not a.is_prefix for a in self.attributes
        ):
            raise DuplicateAttributeError(
                f"Atributo '{name}' já declarado em '{self.name}'",
                details={"descriptor": self.name, "attribute": name},
            )
        self.attributes.append(attribute)
        return self

    # ------------------------------------------------------------------
    # Pipeline de atributos
    # ------------------------------------------------------------------

    def match_attribute(self, raw_name: str) -> Optional[AttributeDescriptor]:
        """Primeiro Attribute Descriptor, na ordem declarada, que casa com `raw_name`."""
        for attribute in self.attributes:
            if attribute.matches(raw_name):
                return attribute
        return None

    def process_attribute(
        self,
        element: "HostElement",
        attribute: AttributeDescriptor,
        raw_attr: RawAttribute,
        filtered: Any,
        continuation: Done,
    ) -> None:
        hook = self.behavior.process_attribute
        if hook is not None:
            hook(self, element, attribute, raw_attr, filtered, continuation)
            return
        continuation()

    def _attribute_task(
        self,
        element: "HostElement",
        attribute: AttributeDescriptor,
        raw_attr: RawAttribute,
        filtered: Any,
    ) -> Task:
        def task(done: Done) -> None:
            series(
                [
                    lambda cb: attribute.process(self, element, raw_attr, filtered, cb),
                    lambda cb: self.process_attribute(element, attribute, raw_attr, filtered, cb),
                ],
                lambda errors: done(errors[0] if errors else None),
            )

        return task

    def build_attribute_tasks(self, element: "HostElement") -> List[Task]:
        """Varre os atributos do elemento e monta uma tarefa por associação/default."""
        own_name = self.addressable_name
        found = set()
        tasks: List[Task] = []

        for raw_name, raw_value in element.attributes():
            if not raw_name or raw_name == own_name:
                continue

            attribute = self.match_attribute(raw_name)
            if attribute is None:
                continue

            # atributos booleanos (presença sem valor)
            value = True if raw_value == "" else raw_value
            raw_attr = RawAttribute(raw_name, value)
            tasks.append(self._attribute_task(element, attribute, raw_attr, attribute.filter(value)))
            found.add(attribute.name)

        for attribute in self.attributes:
            if attribute.is_prefix or attribute.default is None or attribute.name in found:
                continue
            raw_attr = RawAttribute(attribute.name, attribute.default)
            tasks.append(self._attribute_task(element, attribute, raw_attr, attribute.default))

        return tasks

    def process_attributes(self, element: "HostElement", on_complete: Optional[JoinCallback] = None) -> None:
        tasks = self.build_attribute_tasks(element)
        self._log("DEBUG", "processing attributes", tasks=len(tasks))
        parallel(tasks, on_complete or _noop)

    # ------------------------------------------------------------------
    # Render
    # ------------------------------------------------------------------

    def render(
        self,
        element: "HostElement",
        template: str,
        callback: Optional[Callable[..., None]] = None,
    ) -> None:
        callback = callback or _noop

        def attributes_done(errors: List[BaseException]) -> None:
            if errors:
                payload = attribute_processing_error(
                    descriptor=self.addressable_name,
                    errors=len(errors),
                    first_error=str(errors[0]) or errors[0].__class__.__name__,
                )
                self._log("ERROR", payload.message, error=payload.to_dict())
                callback(errors[0])
                return

            hook = self.behavior.render
            if hook is None and self.super_descriptor is not None:
                hook = self.super_descriptor.behavior.render

            if hook is not None:
                hook(self, element, template, callback)
                return

            element.clear_children()
            callback()

        self.process_attributes(element, attributes_done)

    # ------------------------------------------------------------------
    # Observabilidade
    # ------------------------------------------------------------------

    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self.registry is not None:
            self.registry.events.log(source=self.addressable_name, level=level, message=message, **extra)

    def _warn(self, message: str) -> None:
        if self.registry is not None:
            self.registry.events.add_warning(source=self.addressable_name, message=message)

"""
Registro de comportamento de um Component Descriptor.

O comportamento é selecionado uma única vez na construção do descritor,
a partir das opções já mescladas com os ancestrais, e congelado:
nenhum hook nem membro de extensão é trocado depois disso.

Componentes:
    - hooks de ciclo de vida: `construct`, `render`, `process_attribute`
    - `extensions`: membros injetados (callables já vinculados ao
      descritor, ou valores estruturados) acessíveis como atributos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class DescriptorBehavior:
    construct: Optional[Callable[..., Any]] = None
    render: Optional[Callable[..., Any]] = None
    process_attribute: Optional[Callable[..., Any]] = None
    extensions: Mapping[str, Any] = field(default_factory=_empty)

    @classmethod
    def from_options(cls, options: Mapping[str, Any], extensions: Mapping[str, Any]) -> "DescriptorBehavior":
        def hook(key: str) -> Optional[Callable[..., Any]]:
            value = options.get(key)
            return value if callable(value) else None

        return cls(
            construct=hook("construct"),
            render=hook("render"),
            process_attribute=hook("process_attribute"),
            extensions=MappingProxyType(dict(extensions)),
        )

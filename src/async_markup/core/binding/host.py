"""
Contrato canônico do elemento host.

O Async Markup não acessa diretamente nenhum modelo de documento: ele
consome qualquer estrutura que satisfaça o protocolo `HostElement`
(duck typing, verificável em runtime via `@runtime_checkable`).

Capacidades exigidas:
    - identidade de tag (`tag_name`)
    - enumeração de atributos como pares (nome, valor), em ordem definida
      pelo host e não necessariamente estável
    - teste de presença, leitura e escrita de atributos
    - leitura do conteúdo filho (`child_nodes`) e limpeza (`clear_children`)
    - escrita de conteúdo renderizado (`set_content`)

Contrato de serialização (único exigido do host):
    - nós de texto são `str` e entram literalmente no template
    - nós de elemento expõem `outer_html()` e entram como markup

Limites explícitos:
    - Não define descoberta de elementos (queries de documento)
    - Não define diffing nem reconciliação de conteúdo
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable


@runtime_checkable
class HostNode(Protocol):
    def outer_html(self) -> str:
        ...


@runtime_checkable
class HostElement(Protocol):
    """Interface mínima de um elemento do documento host."""

    tag_name: str

    def attributes(self) -> Iterable[Tuple[str, Any]]:
        ...

    def has_attribute(self, name: str) -> bool:
        ...

    def get_attribute(self, name: str) -> Optional[str]:
        ...

    def set_attribute(self, name: str, value: str) -> None:
        ...

    def child_nodes(self) -> Sequence[Union[str, HostNode]]:
        ...

    def clear_children(self) -> None:
        ...

    def set_content(self, markup: str) -> None:
        ...


def capture_template(element: HostElement) -> str:
    """Snapshot do conteúdo filho: texto literal, elementos como markup, em ordem."""
    parts = []
    for node in element.child_nodes():
        if isinstance(node, str):
            parts.append(node)
        else:
            parts.append(node.outer_html())
    return "".join(parts)

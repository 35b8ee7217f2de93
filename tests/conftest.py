# tests/conftest.py
"""
Fixtures compartilhados para testes do Async Markup.

Este módulo define fixtures reutilizáveis que fornecem:
- um elemento host em memória (`MemoryElement`) que satisfaz o
  protocolo `HostElement`
- um Registry novo e isolado por teste
- definições YAML de descritores semelhantes ao uso real

O objetivo destas fixtures é permitir testes do core
(tasks, descriptor, binding, registry e config) sem depender de:
- um modelo de documento real
- filesystem (exceto quando o teste escreve em `tmp_path`)
- estado global

Decisões arquiteturais:
    - O elemento em memória usa duck typing em vez de herança
    - A ordem de atributos é a ordem de inserção (determinística)
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture executa render
    - Nenhuma fixture compartilha estado entre testes

Limites explícitos:
    - Não simula parsing de HTML
    - Não substitui testes de integração com um host real
"""

import pytest


# =====================================================
# Host em memória
# =====================================================

class _TextLeaf:
    """Nó filho não-texto mínimo (expõe apenas `outer_html`)."""

    def __init__(self, markup: str):
        self.markup = markup

    def outer_html(self) -> str:
        return self.markup


class _MemoryElement:
    def __init__(self, tag_name, attributes=None, children=None):
        self.tag_name = tag_name
        self._attributes = dict(attributes or {})
        self.children = list(children or [])
        self.content = None
        self.clear_count = 0

    def attributes(self):
        return list(self._attributes.items())

    def has_attribute(self, name):
        return name in self._attributes

    def get_attribute(self, name):
        return self._attributes.get(name)

    def set_attribute(self, name, value):
        self._attributes[name] = value

    def child_nodes(self):
        return list(self.children)

    def clear_children(self):
        self.children = []
        self.content = ""
        self.clear_count += 1

    def set_content(self, markup):
        self.children = [markup]
        self.content = markup

    def outer_html(self):
        attrs = "".join(
            f' {k}="{v}"' if v != "" else f" {k}" for k, v in self._attributes.items()
        )
        inner = "".join(c if isinstance(c, str) else c.outer_html() for c in self.children)
        return f"<{self.tag_name}{attrs}>{inner}</{self.tag_name}>"


@pytest.fixture
def MemoryElement():
    """
    Fixture que fornece a classe de elemento host em memória.

    A classe satisfaz o protocolo `HostElement`:
    - `attributes()` devolve pares (nome, valor) na ordem de inserção
    - `child_nodes()` devolve `str` (texto) ou objetos com `outer_html()`
    - `clear_children()` e `set_content()` registram o conteúdo em `content`

    Retorna a classe (não uma instância) para que cada teste construa
    exatamente os elementos de que precisa.
    """
    return _MemoryElement


@pytest.fixture
def TextLeaf():
    """Classe de nó filho com markup fixo, para testes de captura de template."""
    return _TextLeaf


@pytest.fixture
def registry():
    """Registry novo, com prefixo padrão e Event Log vazio."""
    from async_markup.core.registry import Registry

    return Registry()


# =====================================================
# Definições declarativas (config)
# =====================================================

@pytest.fixture
def descriptor_defaults_yaml() -> str:
    """
    YAML de defaults semelhante a um `descriptors.defaults.yaml` real.

    Declara um descritor abstrato `base` e um descritor concreto
    `panel` que herda dele.
    """
    return """\
prefix: aml
params:
  site: Example
  theme: light
descriptors:
  base:
    abstract: true
    attr:
      title:
        type: string
        default: Untitled
  panel:
    inherits: base
    attr:
      collapsed:
        type: boolean
      data-:
        prefix: true
    tags: [card]
"""


@pytest.fixture
def descriptor_local_yaml() -> str:
    """YAML local que sobrescreve parte dos defaults."""
    return """\
params:
  theme: dark
descriptors:
  panel:
    tags: [card, wide]
"""

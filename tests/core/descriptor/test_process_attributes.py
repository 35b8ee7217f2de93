# tests/core/descriptor/test_process_attributes.py
"""
Testes do pipeline de atributos e do render do Component Descriptor.

Os testes garantem que:
- N atributos associados + M defaults não associados geram N+M tarefas
- o callback de conclusão dispara exatamente uma vez, após todas as
  tarefas, independentemente da ordem de conclusão
- o hook `process` do atributo roda antes do `process_attribute` do descritor
- valores default chegam aos hooks antes do render
- a política de falhas é abort (erro de filtro síncrono, erro de hook
  impede o render)
- a ordem de enumeração dos atributos do host não altera qual Attribute
  Descriptor cada atributo bruto recebe
"""

import itertools

import pytest

from async_markup.core.errors import ATTRIBUTE_PROCESSING_ERROR
from async_markup.core.exceptions import MalformedAttribute


def _collecting_hook(store):
    def process_attribute(descriptor, element, attribute, raw_attr, filtered, continuation):
        store[raw_attr.name] = filtered
        continuation()

    return process_attribute


def test_schedules_matched_plus_defaulted_tasks(registry, MemoryElement):
    """
    Verifica a contagem de tarefas: N associações + M defaults não associados.

    Cenário:
        - 3 atributos brutos associados (title, data-id, data-role)
        - 1 atributo bruto sem descritor (ignored)
        - 1 descritor com default e sem atributo bruto (size)
        - 1 descritor sem default e sem atributo bruto (note)
    """
    descriptor = registry.register_descriptor(
        "panel",
        {
            "attr": {
                "title": {"default": "Untitled"},
                "size": {"type": "integer", "default": 3},
                "note": {},
                "data-": {"prefix": True},
            }
        },
    )
    element = MemoryElement(
        "div",
        {"aml-panel": "", "title": "Hi", "data-id": "1", "data-role": "x", "ignored": "y"},
    )

    tasks = descriptor.build_attribute_tasks(element)

    assert len(tasks) == 4


def test_completion_fires_once_after_all_tasks(registry, MemoryElement):
    held = []
    results = []

    def process_attribute(descriptor, element, attribute, raw_attr, filtered, continuation):
        held.append(continuation)

    descriptor = registry.register_descriptor(
        "panel",
        {
            "attr": {"title": {"default": "Untitled"}, "data-": {"prefix": True}},
            "process_attribute": process_attribute,
        },
    )
    element = MemoryElement("aml-panel", {"data-a": "1", "data-b": "2"})

    descriptor.process_attributes(element, results.append)
    assert len(held) == 3

    for continuation in reversed(held):
        assert results == []
        continuation()

    assert results == [[]]


def test_filtered_values_reach_hooks(registry, MemoryElement):
    seen = {}
    descriptor = registry.register_descriptor(
        "panel",
        {
            "attr": {
                "title": {"default": "Untitled"},
                "collapsed": {"type": "boolean"},
                "size": {"type": "integer"},
                "data-": {"prefix": True},
            },
            "process_attribute": _collecting_hook(seen),
        },
    )
    element = MemoryElement("aml-panel", {"collapsed": "", "size": "12px", "data-role": "main"})

    descriptor.process_attributes(element)

    assert seen == {
        "collapsed": True,
        "size": 12,
        "data-role": "main",
        "title": "Untitled",
    }


def test_own_addressable_attribute_is_skipped(registry, MemoryElement):
    seen = {}
    descriptor = registry.register_descriptor(
        "panel",
        {"attr": {"aml-": {"prefix": True}}, "process_attribute": _collecting_hook(seen)},
    )
    element = MemoryElement("div", {"aml-panel": "", "aml-extra": "1"})

    descriptor.process_attributes(element)

    assert seen == {"aml-extra": "1"}


def test_attribute_process_runs_before_descriptor_hook(registry, MemoryElement):
    order = []

    def process(owner, element, raw_attr, filtered, continuation):
        order.append(("attr", raw_attr.name, owner.name))
        continuation()

    def process_attribute(descriptor, element, attribute, raw_attr, filtered, continuation):
        order.append(("descriptor", raw_attr.name, attribute.get_suffix(raw_attr.name)))
        continuation()

    descriptor = registry.register_descriptor(
        "panel",
        {
            "attr": {"data-": {"prefix": True, "process": process}},
            "process_attribute": process_attribute,
        },
    )

    descriptor.process_attributes(MemoryElement("aml-panel", {"data-role": "x"}))

    assert order == [("attr", "data-role", "panel"), ("descriptor", "data-role", "role")]


def test_malformed_json_aborts_before_dispatch(registry, MemoryElement):
    """
    Verifica a política abort para erros de filtro.

    Invariantes:
        - `MalformedAttribute` propaga de forma síncrona
        - Nenhum hook é invocado
        - O callback de conclusão nunca dispara
    """
    seen = {}
    results = []
    descriptor = registry.register_descriptor(
        "panel",
        {
            "attr": {"title": {}, "config": {"type": "json"}},
            "process_attribute": _collecting_hook(seen),
        },
    )
    element = MemoryElement("aml-panel", {"title": "ok", "config": "{bad"})

    with pytest.raises(MalformedAttribute):
        descriptor.process_attributes(element, results.append)

    assert seen == {}
    assert results == []


def test_hook_error_skips_render_and_reports_first_error(registry, MemoryElement):
    rendered = []
    outcomes = []
    boom = ValueError("bad title")

    def process_attribute(descriptor, element, attribute, raw_attr, filtered, continuation):
        continuation(boom if raw_attr.name == "title" else None)

    def render(descriptor, element, template, callback):
        rendered.append(template)
        callback()

    descriptor = registry.register_descriptor(
        "panel",
        {
            "attr": {"title": {}, "size": {"type": "integer", "default": 1}},
            "process_attribute": process_attribute,
            "render": render,
        },
    )
    element = MemoryElement("aml-panel", {"title": "x"})

    descriptor.render(element, "<p>t</p>", lambda *args: outcomes.append(args))

    assert rendered == []
    assert outcomes == [(boom,)]

    errors = [e for e in registry.events.by_source("aml-panel") if e["level"] == "ERROR"]
    assert len(errors) == 1
    assert errors[0]["error"]["type"] == ATTRIBUTE_PROCESSING_ERROR
    assert errors[0]["error"]["details"]["first_error"] == "bad title"


def test_render_without_hook_clears_content(registry, MemoryElement):
    outcomes = []
    descriptor = registry.register_descriptor("plain")
    element = MemoryElement("aml-plain", children=["text"])

    descriptor.render(element, "text", lambda *args: outcomes.append(args))

    assert element.children == []
    assert outcomes == [()]


def test_render_falls_back_to_super_render(registry, MemoryElement):
    rendered = []

    def render(descriptor, element, template, callback):
        rendered.append(descriptor.name)
        element.set_content(template.upper())
        callback()

    registry.register_descriptor("base", {"abstract": True, "render": render})
    child = registry.register_descriptor("child", {"inherits": "base"})
    element = MemoryElement("aml-child")

    child.render(element, "hello")

    assert rendered == ["child"]
    assert element.content == "HELLO"


def test_binding_is_independent_of_host_attribute_order(registry, MemoryElement):
    """
    Verifica que a associação atributo → descritor segue a ordem declarada.

    Cenário:
        - `data-` (prefixo) declarado antes de `data-role` (exato)
        - o mesmo elemento construído em todas as ordens de atributos

    Invariantes:
        - `data-role` casa sempre com `data-`, o primeiro declarado
        - valores filtrados e defaults sintetizados são os mesmos em toda ordem
    """
    records = []

    def process_attribute(descriptor, element, attribute, raw_attr, filtered, continuation):
        records.append((raw_attr.name, attribute.name, attribute.get_suffix(raw_attr.name), filtered))
        continuation()

    descriptor = registry.register_descriptor(
        "panel",
        {
            "attr": {
                "data-": {"prefix": True},
                "data-role": {},
                "size": {"type": "integer"},
                "hidden": {"type": "boolean"},
                "title": {"default": "Untitled"},
            },
            "process_attribute": process_attribute,
        },
    )
    raw = [("data-role", "main"), ("data-id", "7"), ("size", "12px"), ("hidden", ""), ("ignored", "x")]
    expected = sorted([
        ("data-id", "data-", "id", "7"),
        ("data-role", "data-", "role", "main"),
        ("hidden", "hidden", "hidden", True),
        ("size", "size", "size", 12),
        ("title", "title", "title", "Untitled"),
    ])

    for order in itertools.permutations(raw):
        records.clear()
        results = []

        descriptor.process_attributes(MemoryElement("aml-panel", dict(order)), results.append)

        assert results == [[]]
        assert sorted(records) == expected

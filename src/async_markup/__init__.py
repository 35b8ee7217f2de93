# src/async_markup/__init__.py
"""
Async Markup — descritores de elementos customizados com atributos
tipados, herança simples e ciclo de render assíncrono, sem etapa de build.

Princípios centrais:
    - Um documento host declara elementos; descritores registrados dizem
      quais atributos eles aceitam e como são renderizados
    - A composição (herança + injeção de capacidades) acontece uma única
      vez, no registro, e produz um snapshot congelado
    - O processamento de atributos é um conjunto de tarefas em estilo
      callback unidas por `parallel`/`series`

Arquitetura em alto nível:
    - core.descriptor → Attribute Descriptor e Component Descriptor
    - core.tasks      → Deferred e Task Orchestrator
    - core.binding    → contrato do host e Binding Node
    - core.registry   → Registry (ponto de entrada)
    - core.config     → definições declarativas em YAML/JSON

Uso mínimo:

    registry = Registry()
    registry.register_descriptor("panel", {"attr": {"title": {"default": "Untitled"}}})
    registry.bind(element)
    registry.render_all(on_done)
"""

from .core.binding import BindingNode, HostElement, capture_template
from .core.config import load_descriptor_config, register_from_config
from .core.descriptor import AttributeDescriptor, AttributeType, ComponentDescriptor, RawAttribute
from .core.exceptions import (
    AbstractBinding,
    AmlException,
    DuplicateAttributeError,
    DuplicateRegistration,
    DuplicateSubscriber,
    MalformedAttribute,
    RegistryLockedError,
    UnresolvedDescriptor,
)
from .core.registry import Registry
from .core.tasks import Deferred, DeferredRejection, DeferredState, parallel, series
from .core.template import JinjaTemplateRenderer, TemplateRenderer, register_template_descriptor

VERSION = "0.1.0"

__all__ = [
    "VERSION",
    "AbstractBinding",
    "AmlException",
    "AttributeDescriptor",
    "AttributeType",
    "BindingNode",
    "ComponentDescriptor",
    "Deferred",
    "DeferredRejection",
    "DeferredState",
    "DuplicateAttributeError",
    "DuplicateRegistration",
    "DuplicateSubscriber",
    "HostElement",
    "JinjaTemplateRenderer",
    "MalformedAttribute",
    "RawAttribute",
    "Registry",
    "RegistryLockedError",
    "TemplateRenderer",
    "UnresolvedDescriptor",
    "capture_template",
    "load_descriptor_config",
    "parallel",
    "register_from_config",
    "register_template_descriptor",
    "series",
]

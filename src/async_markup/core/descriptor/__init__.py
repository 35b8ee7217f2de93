"""
Descritores do Async Markup.

Componentes:
    - attribute → `AttributeDescriptor`, `AttributeType`, `RawAttribute`
    - behavior  → `DescriptorBehavior`: hooks + extensões, congelados
    - component → `ComponentDescriptor`: herança, pipeline de atributos, render
"""

from .attribute import AttributeDescriptor, AttributeType, RawAttribute
from .behavior import DescriptorBehavior
from .component import RESERVED_OPTIONS, ComponentDescriptor

__all__ = [
    "AttributeDescriptor",
    "AttributeType",
    "ComponentDescriptor",
    "DescriptorBehavior",
    "RESERVED_OPTIONS",
    "RawAttribute",
]

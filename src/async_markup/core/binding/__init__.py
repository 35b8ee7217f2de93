"""
Binding de elementos host a descritores.

Componentes:
    - host → protocolo `HostElement` e captura de template
    - node → `BindingNode`: elemento + descritor + template + estado de render
"""

from .host import HostElement, HostNode, capture_template
from .node import BindingNode

__all__ = ["BindingNode", "HostElement", "HostNode", "capture_template"]

"""
Primitivos de orquestração assíncrona do Async Markup.

Componentes:
    - deferred     → `Deferred`: futuro de disparo único, um assinante por ramo
    - orchestrator → `parallel` / `series`: joins sobre tarefas em estilo callback

Limites explícitos:
    - Não é um runtime genérico de promises (sem encadeamento, sem cancelamento)
    - Não define timeouts
"""

from .deferred import Deferred, DeferredRejection, DeferredState, Promise
from .orchestrator import parallel, series

__all__ = [
    "Deferred",
    "DeferredRejection",
    "DeferredState",
    "Promise",
    "parallel",
    "series",
]

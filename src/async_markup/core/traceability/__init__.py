"""
Rastreabilidade do Async Markup.

Este pacote contém o Event Log estruturado utilizado como camada de
observabilidade do core: registro de descritores, binding de nós,
processamento de atributos e render.

Limites explícitos:
    - Não persiste eventos automaticamente
    - Não executa render nem binding
"""

from .event_log import EventLog

__all__ = ["EventLog"]

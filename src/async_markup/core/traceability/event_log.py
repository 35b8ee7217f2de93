"""
Event Log estruturado do Async Markup.

Este módulo define o `EventLog`, a estrutura canônica utilizada para
registrar o que o Registry, os descritores e os Binding Nodes fazem
durante o setup (registro, binding) e durante o render.

O EventLog atua como o único meio de observabilidade do core:
    - registro de eventos estruturados (dicts, nunca strings livres)
    - coleta de warnings não fatais agrupados por origem

Princípios fundamentais:
    - Eventos são adicionados apenas por chamada explícita
    - A ordem da lista reflete a ordem real das chamadas
    - Timestamps são sempre UTC em ISO 8601

Invariantes:
    - Todo evento contém `source`, `level`, `message` e `timestamp`
    - Warnings são agrupados por `source`
    - Campos adicionais são preservados sem perda

Limites explícitos:
    - Não persiste dados automaticamente
    - Não decide políticas de execução
    - Não depende de handlers do módulo `logging`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class EventLog:
    """
    Registro incremental de eventos estruturados de um Registry.

    Campos:
        - events: lista ordenada de eventos
        - warnings: mensagens não fatais indexadas por origem

    Decisões arquiteturais:
        - Cada Registry possui o seu próprio EventLog (sem estado global)
        - A origem (`source`) é o nome endereçável do descritor ou o
          identificador do componente que emitiu o evento
    """

    events: List[Dict[str, Any]] = field(default_factory=list)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "source": source,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source: str, message: str) -> None:
        if source not in self.warnings:
            self.warnings[source] = []
        self.warnings[source].append(message)
        self.log(source=source, level="WARNING", message=message)

    def by_source(self, source: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["source"] == source]

    def to_dict(self) -> Dict[str, Any]:
        """Representação serializável e independente do estado interno."""
        return {
            "events": [dict(e) for e in self.events],
            "warnings": {k: list(v) for k, v in self.warnings.items()},
        }

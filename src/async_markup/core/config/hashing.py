# src/async_markup/core/config/hashing.py
"""
Hashing canônico de definições de descritores.

O hash representa a identidade estrutural de um conjunto de definições
declarativas e é registrado no Event Log quando um Registry é populado
a partir de configuração. Também aceita snapshots congelados
(`resolved_options`), permitindo comparar a composição efetiva de dois
descritores.

Política de hashing (v1):
    - mappings (inclusive `MappingProxyType`) → objetos JSON
    - tuplas e listas → arrays JSON
    - callables (hooks Python) são omitidos
    - serialização JSON canônica (chaves ordenadas, separadores compactos),
      UTF-8, SHA-256

Limites explícitos:
    - Não carrega nem resolve configuração
"""

import hashlib
import json
from typing import Any, Mapping

_OMITTED = object()


def _plain(value: Any) -> Any:
    if isinstance(value, Mapping):
        out = {}
        for key, item in value.items():
            item = _plain(item)
            if item is not _OMITTED:
                out[str(key)] = item
        return out
    if isinstance(value, (list, tuple)):
        return [v for v in (_plain(i) for i in value) if v is not _OMITTED]
    if callable(value):
        return _OMITTED
    return value


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Gera um hash determinístico de uma configuração ou snapshot de opções.

    Args:
        config (Mapping[str, Any]): Configuração efetiva ou `resolved_options`.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se o objeto fornecido não for um mapping.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser mapping, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        _plain(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()

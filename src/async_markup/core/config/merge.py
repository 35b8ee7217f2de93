# src/async_markup/core/config/merge.py
"""
Utilitários canônicos de merge de opções e de configuração.

Este módulo implementa as duas políticas oficiais de merge do Async Markup:

1. Herança de opções entre descritores (`inherit_options`):
    - chave ausente no descendente → copiada do ancestral
    - mapping + mapping → o ancestral preenche apenas sub-chaves ausentes
      (um nível de profundidade)
    - `abstract` e `async` nunca são herdados
    - ancestrais são aplicados na ordem declarada; o primeiro vence

2. Deep-merge de arquivos de configuração (`deep_merge`):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito

Princípios fundamentais:
    - Os merges são determinísticos e puramente funcionais
    - Nenhum input é mutado durante o processo
    - Não existem heurísticas implícitas ou mágicas

Limites explícitos:
    - Não resolve nomes de ancestrais (responsabilidade do Registry)
    - Não carrega arquivos de configuração
    - Não realiza coerção de tipos
"""

from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping

from .errors import ConfigTypeConflictError

# chaves que vêm apenas das opções do próprio descritor
NON_INHERITABLE = frozenset({"abstract", "async"})


def inherit_options(
    options: Mapping[str, Any],
    ancestors: Iterable[Mapping[str, Any]],
) -> Dict[str, Any]:
    """
    Mescla as opções resolvidas dos ancestrais nas opções de um descritor.

    Política de herança (v1):
        - chave ausente → valor do ancestral
        - mapping em ambos os lados → ancestral preenche apenas sub-chaves ausentes
        - `abstract` / `async` → nunca herdados
        - ordem declarada; o primeiro ancestral a preencher uma chave vence

    Invariantes:
        - O retorno é sempre um novo dicionário
        - Valores presentes nas opções do descritor nunca são sobrescritos
        - Mappings dos ancestrais nunca são mutados

    Args:
        options (Mapping[str, Any]): Opções declaradas pelo descritor.
        ancestors (Iterable[Mapping[str, Any]]): Opções resolvidas dos
            ancestrais, na ordem declarada em `inherits`.

    Returns:
        Dict[str, Any]: Opções efetivas do descritor.
    """
    result: Dict[str, Any] = dict(options)

    for ancestor in ancestors:
        for key, inherited in ancestor.items():
            if key in NON_INHERITABLE:
                continue

            if key not in result:
                result[key] = inherited
                continue

            own = result[key]
            if isinstance(own, Mapping) and isinstance(inherited, Mapping):
                merged = dict(own)
                for sub_key, sub_value in inherited.items():
                    if sub_key not in merged:
                        merged[sub_key] = sub_value
                result[key] = merged

    return result


def freeze(value: Any) -> Any:
    """Congela recursivamente mappings (→ MappingProxyType) e listas (→ tuple)."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(freeze(v) for v in value)
    return value


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    Política de merge (v1):
        - dict + dict → merge recursivo por chave
        - list        → sobrescrita total (sem merge elemento a elemento)
        - escalar     → sobrescrita direta pelo override
        - conflito de tipos → erro estrutural explícito

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos da configuração.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> sobrescrita total
        if isinstance(override_value, list):
            result[key] = deepcopy(override_value)
            continue

        # conflito de tipo (None no override apaga o valor)
        if override_value is not None and type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result

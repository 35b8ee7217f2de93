# src/async_markup/core/config/__init__.py

"""
Camada de configuração do Async Markup.

Este pacote contém as estruturas e utilitários responsáveis por:
    - mesclar opções herdadas entre descritores (herança de um nível)
    - carregar definições declarativas de descritores (YAML/JSON)
    - resolver defaults + overrides locais via deep-merge determinístico
    - gerar hash canônico para rastreabilidade

Princípios fundamentais:
    - Configuração não contém hooks: comportamento é fornecido em Python
    - Nenhuma heurística implícita durante merge
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não executa render nem binding
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidDescriptorDefinitionError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_descriptor_config, register_from_config
from .merge import deep_merge, freeze, inherit_options

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidDescriptorDefinitionError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "freeze",
    "inherit_options",
    "load_descriptor_config",
    "register_from_config",
]

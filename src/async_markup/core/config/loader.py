# src/async_markup/core/config/loader.py
"""
Loader canônico de definições declarativas de descritores.

Este módulo é responsável por carregar, validar estruturalmente e aplicar
definições de descritores declaradas em arquivos YAML ou JSON.

A configuração é resolvida a partir de:
    - um arquivo de defaults (obrigatório)
    - um arquivo local de overrides (opcional)

Formato (v1):

    prefix: aml             # opcional
    params:                 # opcional, parâmetros globais de template
      site: Example
    descriptors:            # mapeamento nome → opções, na ordem de registro
      base:
        abstract: true
        attr:
          title: {type: string, default: Untitled}
      panel:
        inherits: base

Hooks (render, process_attribute, construct, ...) não são declaráveis
em arquivo: são fornecidos em Python via `behaviors`, um mapeamento
nome do descritor → opções adicionais.

Invariantes:
    - O arquivo de defaults é obrigatório
    - O resultado de `load_descriptor_config` é sempre um `dict` puro
    - Descritores são registrados na ordem em que aparecem no arquivo
      (ancestrais devem ser declarados antes dos descendentes)

Limites explícitos:
    - Não descobre elementos nem executa render
"""

from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .hashing import compute_config_hash
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidDescriptorDefinitionError,
    UnsupportedConfigFormatError,
)

if TYPE_CHECKING:  # pragma: no cover
    from async_markup.core.descriptor.component import ComponentDescriptor
    from async_markup.core.registry import Registry


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Decisões arquiteturais:
        - Arquivos vazios são interpretados como dicionários vazios
        - Formatos não suportados geram erro explícito

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de defaults não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_descriptor_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve as definições declarativas de descritores.

    Política de resolução:
        - O arquivo de defaults é obrigatório
        - O arquivo local é opcional e ignorado quando não existe
        - Quando presente, o local sempre tem prioridade sobre defaults
        - A resolução utiliza `deep_merge` com política determinística

    Args:
        defaults_path (str): Caminho para o arquivo base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """

    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


def register_from_config(
    registry: "Registry",
    config: Mapping[str, Any],
    behaviors: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> List["ComponentDescriptor"]:
    """
    Aplica uma configuração resolvida a um Registry.

    Ordem de aplicação:
        1. `prefix` (se presente)
        2. `params` (preenche chaves ausentes em `registry.params`)
        3. `descriptors`, na ordem do arquivo, com as opções de
           `behaviors[name]` mescladas por cima das declaradas

    Args:
        registry (Registry): Registry em fase de setup.
        config (Mapping[str, Any]): Configuração resolvida.
        behaviors (Optional[Mapping]): Opções Python adicionais por descritor.

    Returns:
        List[ComponentDescriptor]: Descritores registrados, na ordem de registro.

    Raises:
        InvalidConfigRootTypeError: Se `descriptors` ou `params` não forem dicts.
        InvalidDescriptorDefinitionError: Se uma entrada de `descriptors` não
            for um mapeamento de opções.
        DuplicateRegistration: Se um nome já estiver registrado.
    """
    behaviors = behaviors or {}

    descriptors = config.get("descriptors") or {}
    params = config.get("params") or {}
    if not isinstance(descriptors, dict):
        raise InvalidConfigRootTypeError(
            f"'descriptors' deve ser dict, recebido: {type(descriptors).__name__}"
        )
    if not isinstance(params, dict):
        raise InvalidConfigRootTypeError(
            f"'params' deve ser dict, recebido: {type(params).__name__}"
        )
    for name, options in descriptors.items():
        if options is not None and not isinstance(options, dict):
            raise InvalidDescriptorDefinitionError(
                f"Descritor '{name}' deve ser dict, recebido: {type(options).__name__}"
            )

    if config.get("prefix"):
        registry.prefix = str(config["prefix"])

    for key, value in params.items():
        registry.params.setdefault(key, value)

    registered = []
    for name, options in descriptors.items():
        merged = dict(options or {})
        merged.update(behaviors.get(name, {}))
        registered.append(registry.register_descriptor(name, merged))

    registry.events.log(
        source="config",
        level="INFO",
        message="descriptors registered from config",
        config_hash=compute_config_hash(config),
        descriptors=[d.name for d in registered],
    )

    return registered

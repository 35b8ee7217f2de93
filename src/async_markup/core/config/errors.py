# src/async_markup/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Async Markup.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, validação estrutural e resolução de definições
declarativas de descritores.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de binding ou de render

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Registry, descritores ou host
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do Async Markup.

    Todas as exceções levantadas durante carregamento, validação estrutural
    e resolução de configuração devem herdar desta classe.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de definições base (defaults)
    não é encontrado no caminho especificado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório
        - O arquivo local de override é opcional
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração, ou a seção
    `descriptors`, não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"descriptors": {"panel": {...}}}
        - override: {"descriptors": "panel"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidDescriptorDefinitionError(ConfigError):
    """
    Exceção levantada quando uma entrada de `descriptors` não é um
    mapeamento de opções (ex.: `panel: true` ou `panel: [title]`).

    Uma entrada vazia (`panel:`) é aceita e equivale a `{}`.

    Invariantes:
        - Nenhum descritor da configuração é registrado quando alguma
          entrada é inválida
    """

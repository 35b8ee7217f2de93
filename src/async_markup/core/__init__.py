# src/async_markup/core/__init__.py
"""
Core do Async Markup.

Este pacote contém a implementação canônica do engine de composição de
descritores e do pipeline assíncrono de atributos.

O core é projetado para ser:
    - determinístico na composição (merge executado uma vez, no registro)
    - testável de forma isolada (host e engine de template são contratos)
    - livre de estado global (o Registry é um valor explícito)

Componentes principais:
    - tasks        → Deferred e joins parallel/series
    - descriptor   → Attribute Descriptor e Component Descriptor
    - binding      → contrato do elemento host e Binding Node
    - registry     → nomes, prefixo, nós e render em massa
    - config       → merge de herança e definições declarativas (YAML/JSON)
    - template     → contrato de engine de template (Jinja2 por padrão)
    - traceability → Event Log estruturado

Limites explícitos:
    - Não descobre elementos via queries de documento
    - Não é um runtime genérico de promises
    - Não faz diffing de conteúdo
"""

# tests/core/config/test_hashing.py
"""
Testes do hashing canônico de configuração (compute_config_hash).

O hash representa a identidade estrutural de um conjunto de definições
de descritores e deve ser:
- determinístico (independente da ordem de inserção das chaves)
- igual ao SHA-256 do JSON canônico
- sensível a qualquer alteração de valor
"""

import hashlib
import json

import pytest

try:
    from async_markup.core.config.hashing import compute_config_hash
except Exception as e:  # noqa: BLE001
    compute_config_hash = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing hashing module. Implement:\n"
            "- src/async_markup/core/config/hashing.py (compute_config_hash)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_hash_is_deterministic():
    _require_imports()
    a = {"prefix": "aml", "descriptors": {"panel": {"abstract": False}}}
    b = {"descriptors": {"panel": {"abstract": False}}, "prefix": "aml"}

    h1 = compute_config_hash(a)
    h2 = compute_config_hash(b)

    assert h1 == h2
    assert isinstance(h1, str)
    assert len(h1) == 64


def test_hash_matches_sha256_of_canonical_json():
    _require_imports()
    cfg = {"params": {"site": "Exemplo"}, "prefix": "aml"}

    canonical = json.dumps(cfg, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    expected = hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    assert compute_config_hash(cfg) == expected


def test_hash_changes_on_override():
    _require_imports()
    base = {"descriptors": {"panel": {"attr": {"title": {"default": "Untitled"}}}}}
    changed = {"descriptors": {"panel": {"attr": {"title": {"default": "Sem título"}}}}}

    assert compute_config_hash(base) != compute_config_hash(changed)


def test_hash_rejects_non_dict():
    _require_imports()
    with pytest.raises(TypeError):
        compute_config_hash(["not", "a", "dict"])


def test_hash_accepts_frozen_snapshots_and_ignores_callables():
    _require_imports()
    from types import MappingProxyType

    plain = {"attr": {"title": {"default": "Untitled"}}, "tags": ["card"]}
    frozen = MappingProxyType({
        "attr": MappingProxyType({"title": MappingProxyType({"default": "Untitled"})}),
        "tags": ("card",),
        "render": lambda *args: None,
    })

    assert compute_config_hash(frozen) == compute_config_hash(plain)

"""
Attribute Descriptor — definição tipada de atributo de um descritor.

Este módulo define o `AttributeDescriptor`, responsável por declarar um
atributo aceito por um Component Descriptor e por converter o valor bruto
encontrado no elemento host em um valor tipado.

Um Attribute Descriptor pode ser:
    - exato: casa com um atributo de mesmo nome
    - prefixo (`prefix=True`): casa com qualquer atributo cujo nome comece
      com `name` (ex.: `data-` casa `data-id`, `data-role`, ...)

Tipos suportados (`AttributeType`):
    - string      → conversão textual
    - integer     → prefixo numérico inteiro; sem prefixo → NaN
    - float       → prefixo numérico decimal; sem prefixo → NaN
    - json        → JSON estrito (sem NaN/Infinity); entrada malformada → MalformedAttribute
    - string|json → JSON tolerante; entrada malformada → texto bruto
    - boolean     → truthiness do host

Invariantes:
    - `default` é sempre armazenado já filtrado
    - `filter` nunca levanta exceção exceto para o tipo json estrito
    - tipos numéricos nunca levantam exceção

Limites explícitos:
    - Não enumera atributos do elemento (responsabilidade do descritor)
    - Não valida presença de atributos `required`
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from async_markup.core.exceptions import MalformedAttribute

if TYPE_CHECKING:  # pragma: no cover
    from .component import ComponentDescriptor


class AttributeType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    JSON = "json"
    STRING_JSON = "string|json"
    BOOLEAN = "boolean"

    @classmethod
    def _missing_(cls, value: object) -> Optional["AttributeType"]:
        # alias legado de `integer`
        if value == "number":
            return cls.INTEGER
        return None


@dataclass(frozen=True)
class RawAttribute:
    """Par (nome, valor) de um atributo do elemento host, ou sintetizado a partir de um default."""

    name: str
    value: Any


_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def _stringify(data: Any) -> str:
    if isinstance(data, bool):
        return "true" if data else "false"
    return str(data)


def _parse_int(data: Any) -> Any:
    if isinstance(data, bool):
        return math.nan
    if isinstance(data, int):
        return data
    if isinstance(data, float):
        return int(data) if math.isfinite(data) else math.nan
    match = _INT_PREFIX.match(_stringify(data))
    return int(match.group(1)) if match else math.nan


def _parse_float(data: Any) -> float:
    if isinstance(data, bool):
        return math.nan
    if isinstance(data, (int, float)):
        return float(data)
    match = _FLOAT_PREFIX.match(_stringify(data))
    if not match:
        return math.nan
    return float(match.group(1).replace("Infinity", "inf"))


def _reject_constant(name: str) -> Any:
    # NaN, Infinity e -Infinity não são JSON
    raise ValueError(f"Constante JSON não suportada: {name}")


def _loads(data: Any) -> Any:
    return json.loads(data, parse_constant=_reject_constant)


Processor = Callable[..., None]


class AttributeDescriptor:
    """
    Atributo declarado por um Component Descriptor.

    Args:
        name (str): Nome do atributo (ou radical, quando `prefix=True`).
        options (Mapping | None): `type`, `required`, `prefix`, `default`
            e, opcionalmente, `process` (hook por atributo).
    """

    def __init__(self, name: str, options: Optional[Mapping[str, Any]] = None):
        options = dict(options or {})

        self.name: str = name
        self.type: AttributeType = AttributeType(options.get("type", AttributeType.STRING))
        self.required: bool = bool(options.get("required", False))
        self.is_prefix: bool = bool(options.get("prefix", False))
        self.default: Any = None

        processor = options.get("process")
        self._processor: Optional[Processor] = processor if callable(processor) else None

        if options.get("default") is not None:
            self.default = self.filter(options["default"])

    def __repr__(self) -> str:
        kind = "prefix" if self.is_prefix else "exact"
        return f"AttributeDescriptor({self.name!r}, type={self.type.value}, {kind})"

    def matches(self, raw_name: str) -> bool:
        return raw_name.startswith(self.name)

    def filter(self, data: Any) -> Any:
        """Converte o valor bruto no valor tipado (ausente → `default`)."""
        if data is None:
            data = self.default
        if data is None:
            return False if self.type is AttributeType.BOOLEAN else None

        if self.type is AttributeType.STRING:
            return _stringify(data)

        if self.type is AttributeType.INTEGER:
            return _parse_int(data)

        if self.type is AttributeType.FLOAT:
            return _parse_float(data)

        if self.type is AttributeType.BOOLEAN:
            # presença sem valor
            return True if data == "" else bool(data)

        if not isinstance(data, (str, bytes)):
            return data

        if self.type is AttributeType.STRING_JSON:
            try:
                return _loads(data)
            except ValueError:
                return data

        try:
            return _loads(data)
        except ValueError as exc:
            raise MalformedAttribute(
                f"Valor JSON inválido para o atributo '{self.name}'",
                details={"attribute": self.name, "value": _stringify(data), "error": str(exc)},
                hint="Corrija o JSON do atributo ou declare o tipo como 'string|json'.",
            ) from exc

    def get_suffix(self, raw_name: Optional[str] = None) -> str:
        """Nome sem o radical, para descritores prefixo; `name` para os demais."""
        if not self.is_prefix:
            return self.name
        raw_name = raw_name or self.name
        if raw_name.startswith(self.name):
            return raw_name[len(self.name):]
        return raw_name

    def process(
        self,
        owner: "ComponentDescriptor",
        element: Any,
        raw_attr: RawAttribute,
        filtered: Any,
        continuation: Callable[..., None],
    ) -> None:
        if self._processor is not None:
            self._processor(owner, element, raw_attr, filtered, continuation)
            return
        continuation()

"""Value types and raw-value decoding."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from .arrays import array_inner, is_array_literal, split_array

_INT_RE = re.compile(r"^-?[0-9]+$")
_FLOAT_RE = re.compile(r"^-?[0-9]+\.[0-9]+$")


@dataclass(frozen=True)
class VStr:
    value: str
    quote: str = '"'  # '"' basic, "'" literal

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class VRaw:
    """Unquoted text whose type has not been decided yet."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(frozen=True)
class VNumber:
    text: str  # kept verbatim, never converted

    @property
    def is_float(self) -> bool:
        return "." in self.text

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class VArray:
    items: list["ScalarValue"] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


ScalarValue = Union[VStr, VRaw, VBool, VNumber, VArray]


class _NotFound:
    """Singleton returned when a lookup has no result."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotFound"

    def __bool__(self) -> bool:
        return False


NotFound = _NotFound()


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def extract(raw: str) -> VStr | VRaw:
    """Unwrap quoting only; no escape decoding, no type detection."""
    raw = raw.strip()
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "\"'":
        return VStr(raw[1:-1], quote=raw[0])
    return VRaw(raw)


def resolve(raw: str, protect_single_quotes: bool = False) -> ScalarValue:
    """Decide the full type of a raw value.

    Order: boolean, integer, float, array, quoted string, bare text.
    Bare text comes back as ``VRaw``.
    """
    if raw in ("true", "false"):
        return VBool(raw == "true")
    if _INT_RE.match(raw) or _FLOAT_RE.match(raw):
        return VNumber(raw)
    if is_array_literal(raw):
        return VArray([
            resolve(item, protect_single_quotes)
            for item in split_array(array_inner(raw), protect_single_quotes)
        ])
    return extract(raw)


def decode_elements(raw: str, protect_single_quotes: bool = False) -> list[str]:
    """Decoded text of each element of an array literal."""
    return [
        str(extract(item))
        for item in split_array(array_inner(raw), protect_single_quotes)
    ]


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------

def json_string(text: str) -> str:
    """Quote *text* for JSON, escaping only ``\\`` and ``"``."""
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def to_json_text(value: ScalarValue) -> str:
    if isinstance(value, VBool):
        return "true" if value.value else "false"
    if isinstance(value, VNumber):
        return value.text
    if isinstance(value, VArray):
        return "[" + ",".join(to_json_text(v) for v in value.items) + "]"
    return json_string(str(value))


def classify_for_json(raw: str, protect_single_quotes: bool = False) -> str:
    """Render a raw value as JSON text.

    >>> classify_for_json("42")
    '42'
    >>> classify_for_json("abc")
    '"abc"'
    """
    return to_json_text(resolve(raw, protect_single_quotes))

"""nutshell: TOML-subset reading, TOML to JSON conversion and text primitives."""

from .emitter import JSONEmitter, load, to_json
from .errors import BackendError, NutshellError, ToolNotFoundError
from .lines import KeyValue, LineKind, SectionHeader, Unrecognized, classify, clean_line
from .arrays import split_array
from .query import get, get_or, has, is_true, keys, section_pairs, sections, to_array
from .scope import SectionTracker
from .values import (
    NotFound,
    ScalarValue,
    VArray,
    VBool,
    VNumber,
    VRaw,
    VStr,
    classify_for_json,
    extract,
    resolve,
)
from .validate import is_falsy, is_truthy

__all__ = [
    "get",
    "get_or",
    "has",
    "is_true",
    "keys",
    "sections",
    "section_pairs",
    "to_array",
    "to_json",
    "load",
    "JSONEmitter",
    "SectionTracker",
    "clean_line",
    "classify",
    "KeyValue",
    "LineKind",
    "SectionHeader",
    "Unrecognized",
    "split_array",
    "extract",
    "resolve",
    "classify_for_json",
    "NotFound",
    "ScalarValue",
    "VArray",
    "VBool",
    "VNumber",
    "VRaw",
    "VStr",
    "is_truthy",
    "is_falsy",
    "NutshellError",
    "ToolNotFoundError",
    "BackendError",
]

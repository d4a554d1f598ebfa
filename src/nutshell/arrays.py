"""Quote-aware splitting of bracketed array literals."""

from __future__ import annotations

from enum import Enum, auto


class _State(Enum):
    Normal = auto()
    InQuotes = auto()


def is_array_literal(raw: str) -> bool:
    return raw.startswith("[") and raw.endswith("]")


def array_inner(raw: str) -> str:
    """Strip one leading ``[`` and one trailing ``]`` and trim."""
    if raw.startswith("["):
        raw = raw[1:]
    if raw.endswith("]"):
        raw = raw[:-1]
    return raw.strip()


def split_array(inner: str, protect_single_quotes: bool = False) -> list[str]:
    """Split array interior text on commas outside quoted regions.

    Elements are trimmed and keep their quote characters; empty elements
    are dropped. Only ``"`` opens a quoted region unless
    *protect_single_quotes* is set, in which case ``'`` does too and a
    region closes only on the character that opened it.

    Example::

        split_array('"a", "b,c", d')  →  ['"a"', '"b,c"', 'd']
    """
    quote_chars = "\"'" if protect_single_quotes else '"'
    state = _State.Normal
    opener = ""
    elements: list[str] = []
    current: list[str] = []

    for ch in inner:
        if state is _State.Normal:
            if ch in quote_chars:
                state = _State.InQuotes
                opener = ch
            elif ch == ",":
                _flush(current, elements)
                continue
        elif ch == opener:
            state = _State.Normal
        current.append(ch)

    _flush(current, elements)
    return elements


def _flush(current: list[str], elements: list[str]) -> None:
    item = "".join(current).strip()
    if item:
        elements.append(item)
    current.clear()

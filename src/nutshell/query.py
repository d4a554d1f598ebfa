"""Point lookups and enumeration over a TOML-subset file.

Every function opens the file and scans it from the top; nothing is
cached between calls. Absence is reported with ``NotFound`` (or an empty
result for enumerations), never with an exception.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Iterator

from .arrays import is_array_literal
from .lines import KeyValue, SectionHeader, read_lines, scan
from .scope import SectionTracker
from .validate import is_truthy
from .values import NotFound, VStr, VRaw, _NotFound, decode_elements, extract

logger = logging.getLogger(__name__)

_BARE_KEY_RE = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)\s*=")

PathLike = str | os.PathLike


def split_key(key: str) -> tuple[str, str]:
    """``"server.port"`` → ``("server", "port")``; no dot → root scope."""
    if "." in key:
        section, bare = key.split(".", 1)
        return section, bare
    return "", key


# ---------------------------------------------------------------------------
# Point lookups
# ---------------------------------------------------------------------------

def lookup(path: PathLike, key: str) -> VStr | VRaw | _NotFound:
    """First value for *key* in document order, quoting unwrapped."""
    if not key:
        return NotFound
    lines = read_lines(path)
    if lines is None:
        return NotFound

    section, bare = split_key(key)
    tracker = SectionTracker(section)
    for _, kind in scan(lines):
        if isinstance(kind, SectionHeader):
            tracker.enter(kind.name)
        elif isinstance(kind, KeyValue) and tracker.active and kind.key == bare:
            lines.close()
            return extract(kind.raw_value)
    return NotFound


def get(path: PathLike, key: str) -> str | _NotFound:
    value = lookup(path, key)
    if value is NotFound:
        return NotFound
    return str(value)


def get_or(path: PathLike, key: str, default: str = "") -> str:
    value = get(path, key)
    return default if value is NotFound else value


def has(path: PathLike, key: str) -> bool:
    return get(path, key) is not NotFound


def is_true(path: PathLike, key: str) -> bool:
    """True when *key* exists and its value is a truthy string."""
    value = get(path, key)
    return value is not NotFound and is_truthy(value)


def to_array(
    path: PathLike, key: str, protect_single_quotes: bool = False
) -> list[str] | _NotFound:
    """Decoded array elements for *key*.

    A non-array value is returned as a one-element list.
    """
    value = lookup(path, key)
    if value is NotFound:
        return NotFound
    # Bracket test runs on the unquoted text, so "[a, b]" splits too.
    text = str(value)
    if is_array_literal(text):
        return decode_elements(text, protect_single_quotes)
    return [text]


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------

class Sections:
    """Section names in document order, re-read on every iteration.

    Duplicate headers are reported each time they occur.
    """

    def __init__(self, path: PathLike) -> None:
        self.path = path

    def __iter__(self) -> Iterator[str]:
        lines = read_lines(self.path)
        if lines is None:
            return
        for _, kind in scan(lines):
            if isinstance(kind, SectionHeader):
                yield kind.name

    def __repr__(self) -> str:
        return f"Sections({os.fspath(self.path)!r})"


def sections(path: PathLike) -> Sections:
    return Sections(path)


def keys(path: PathLike, section: str = "") -> list[str]:
    """Bare key names in *section* (root when empty), in order."""
    lines = read_lines(path)
    if lines is None:
        return []

    tracker = SectionTracker(section)
    found: list[str] = []
    for cleaned, kind in scan(lines):
        if isinstance(kind, SectionHeader):
            tracker.enter(kind.name)
            continue
        if not tracker.active:
            continue
        # Lines starting with a quote look like array continuations.
        if cleaned[0] in "\"'":
            continue
        m = _BARE_KEY_RE.match(cleaned)
        if m:
            found.append(m.group(1))
    return found


def section_pairs(path: PathLike, section: str) -> list[tuple[str, str]] | _NotFound:
    """``(key, value)`` pairs of the first *section* block.

    Scanning stops at the first different header after the block.
    """
    if not section:
        return NotFound
    lines = read_lines(path)
    if lines is None:
        return NotFound

    tracker = SectionTracker(section)
    pairs: list[tuple[str, str]] = []
    for _, kind in scan(lines):
        if isinstance(kind, SectionHeader):
            tracker.enter(kind.name)
            if tracker.left:
                lines.close()
                break
        elif isinstance(kind, KeyValue) and tracker.active:
            pairs.append((kind.key, str(extract(kind.raw_value))))
    return pairs

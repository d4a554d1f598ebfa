"""Line layer: comment stripping, line classification and file scanning."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterator, Union

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^\[([^\]]+)\]$")
_KEY_VALUE_RE = re.compile(r"^([^=]+)=(.*)$")


# ---------------------------------------------------------------------------
# Line kinds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SectionHeader:
    name: str  # possibly dotted, e.g. "server.tls"

    @property
    def path(self) -> list[str]:
        """Header name split into its dotted segments."""
        return self.name.split(".")


@dataclass(frozen=True)
class KeyValue:
    key: str
    raw_value: str


@dataclass(frozen=True)
class Unrecognized:
    text: str


LineKind = Union[SectionHeader, KeyValue, Unrecognized]


# ---------------------------------------------------------------------------
# Cleaning / classification
# ---------------------------------------------------------------------------

def clean_line(raw: str) -> str:
    """Drop everything from the first ``#`` and trim whitespace.

    Quote context is not tracked: ``key = "a#b"`` is cut at the ``#``.
    """
    return raw.split("#", 1)[0].strip()


def classify(cleaned: str) -> LineKind:
    """Classify an already-cleaned line.

    Headers are tested first, so ``[a=b]`` is a header named ``a=b``.
    """
    m = _HEADER_RE.match(cleaned)
    if m:
        return SectionHeader(m.group(1))
    m = _KEY_VALUE_RE.match(cleaned)
    if m:
        return KeyValue(m.group(1).strip(), m.group(2).strip())
    return Unrecognized(cleaned)


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------

def read_lines(path: str | os.PathLike) -> Iterator[str] | None:
    """Open *path* for a fresh top-to-bottom pass.

    Returns ``None`` when the file is missing or unreadable. Bytes that
    are not valid UTF-8 decode to U+FFFD instead of failing mid-scan.
    """
    try:
        fh = open(path, encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return None
    return _iter_and_close(fh)


def _iter_and_close(fh) -> Iterator[str]:
    with fh:
        for raw in fh:
            yield raw.rstrip("\n")


def scan(lines) -> Iterator[tuple[str, LineKind]]:
    """Yield ``(cleaned_text, kind)`` for every non-blank line.

    Blank and comment-only lines are skipped; unrecognized lines are
    yielded so callers can decide to ignore them.
    """
    for raw in lines:
        cleaned = clean_line(raw)
        if not cleaned:
            continue
        kind = classify(cleaned)
        if isinstance(kind, Unrecognized):
            logger.debug("unrecognized line skipped: %r", cleaned)
        yield cleaned, kind

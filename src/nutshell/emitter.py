"""TOML-subset → JSON conversion."""

from __future__ import annotations

import logging
import os
from typing import Any

import orjson

from .lines import KeyValue, SectionHeader, read_lines, scan
from .values import NotFound, _NotFound, classify_for_json, json_string

logger = logging.getLogger(__name__)


class _Frame:
    __slots__ = ("name", "need_comma")

    def __init__(self, name: str) -> None:
        self.name = name
        self.need_comma = False


class JSONEmitter:
    """Builds compact JSON text from scanned lines.

    ``stack[0]`` is the root object; every other frame is an open
    ``"segment":{`` whose closing brace has not been written yet.
    """

    def __init__(self, protect_single_quotes: bool = False) -> None:
        self.protect_single_quotes = protect_single_quotes
        self.parts: list[str] = ["{"]
        self.stack: list[_Frame] = [_Frame("")]

    @property
    def depth(self) -> int:
        return len(self.stack) - 1

    def _separate(self) -> None:
        frame = self.stack[-1]
        if frame.need_comma:
            self.parts.append(",")
        frame.need_comma = True

    def _close(self) -> None:
        self.stack.pop()
        self.parts.append("}")

    def header(self, path: list[str]) -> None:
        open_path = [f.name for f in self.stack[1:]]
        # Keep the longest open prefix that the new path strictly extends.
        keep = 0
        while (
            keep < len(open_path)
            and keep < len(path) - 1
            and open_path[keep] == path[keep]
        ):
            keep += 1
        while self.depth > keep:
            self._close()
        for segment in path[keep:]:
            self._separate()
            self.parts.append(json_string(segment) + ":{")
            self.stack.append(_Frame(segment))

    def key_value(self, key: str, raw_value: str) -> None:
        self._separate()
        self.parts.append(json_string(key) + ":")
        self.parts.append(classify_for_json(raw_value, self.protect_single_quotes))

    def finish(self) -> str:
        while self.depth > 0:
            self._close()
        self.parts.append("}")
        return "".join(self.parts)


def to_json(path: str | os.PathLike, protect_single_quotes: bool = False) -> str | _NotFound:
    """Convert the whole file to one line of JSON text.

    Example::

        title = "demo"
        [server]
        port = 8080

    becomes ``{"title":"demo","server":{"port":8080}}``.
    """
    lines = read_lines(path)
    if lines is None:
        return NotFound

    emitter = JSONEmitter(protect_single_quotes)
    for _, kind in scan(lines):
        if isinstance(kind, SectionHeader):
            emitter.header(kind.path)
        elif isinstance(kind, KeyValue):
            emitter.key_value(kind.key, kind.raw_value)
    text = emitter.finish()
    logger.debug("converted %s to %d bytes of JSON", path, len(text))
    return text


def load(path: str | os.PathLike, protect_single_quotes: bool = False) -> dict[str, Any] | _NotFound:
    """Parse the converted JSON into Python objects.

    Duplicate keys (from repeated headers) keep the last occurrence.
    Returns ``NotFound`` when the emitted text is not valid JSON, for
    example a bare number with leading zeros.
    """
    text = to_json(path, protect_single_quotes)
    if text is NotFound:
        return NotFound
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        logger.debug("converted JSON for %s does not parse: %s", path, exc)
        return NotFound

"""Truthiness checks for configuration strings."""

from __future__ import annotations

_TRUTHY = frozenset({"1", "true", "yes", "on", "y"})
_FALSY = frozenset({"0", "false", "no", "off", "n", ""})


def is_truthy(text: str) -> bool:
    """Return True for ``1/true/yes/on/y`` (case-insensitive)."""
    return text.lower() in _TRUTHY


def is_falsy(text: str) -> bool:
    """Return True for ``0/false/no/off/n`` or an empty string."""
    return text.lower() in _FALSY

"""Discovery of external text-processing tools.

Tools are located once per :func:`probe_tools` call and returned in an
immutable :class:`ToolContext`; callers pass that context to whatever
needs a tool path.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .config import Settings
from .errors import ToolNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TOOLS = ("sed", "awk", "grep", "perl")
COMMON_LOCATIONS = ("/usr/bin", "/bin", "/usr/local/bin", "/opt/homebrew/bin")


@dataclass(frozen=True)
class ToolContext:
    """Resolved tool paths and their detected variants."""

    paths: Mapping[str, str] = field(default_factory=dict)
    variants: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", MappingProxyType(dict(self.paths)))
        object.__setattr__(self, "variants", MappingProxyType(dict(self.variants)))

    def has(self, name: str) -> bool:
        return name in self.paths

    def has_all(self, *names: str) -> bool:
        return all(n in self.paths for n in names)

    def has_any(self, *names: str) -> bool:
        return any(n in self.paths for n in names)

    def path(self, name: str) -> str | None:
        return self.paths.get(name)

    def variant(self, name: str) -> str:
        return self.variants.get(name, "unknown")

    def is_gnu(self, name: str) -> bool:
        return self.variant(name) in ("gnu", "gawk")

    def require(self, name: str) -> str:
        """Path of *name*, or raise :class:`ToolNotFoundError`."""
        found = self.paths.get(name)
        if found is None:
            raise ToolNotFoundError(name)
        return found


# ---------------------------------------------------------------------------
# Probing
# ---------------------------------------------------------------------------

def find_tool(name: str, override: str | None = None) -> str | None:
    """Locate *name*: explicit override, then ``PATH``, then common dirs."""
    if override and os.path.isfile(override) and os.access(override, os.X_OK):
        return override
    found = shutil.which(name)
    if found:
        return found
    for directory in COMMON_LOCATIONS:
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate
    return None


def _version_text(path: str, *args: str) -> str:
    try:
        proc = subprocess.run(
            [path, *args], capture_output=True, text=True, timeout=5, check=False
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("version probe failed for %s: %s", path, exc)
        return ""
    return proc.stdout + proc.stderr


def detect_variant(name: str, path: str) -> str:
    """Classify a tool implementation (``gnu``/``bsd``/awk flavours)."""
    if name == "sed":
        out = _version_text(path, "--version")
        if "GNU" in out:
            return "gnu"
        if "illegal option" in out:
            return "bsd"
        return "unknown"
    if name == "grep":
        return "gnu" if "GNU" in _version_text(path, "--version") else "bsd"
    if name == "awk":
        if "gnu awk" in _version_text(path, "--version").lower():
            return "gawk"
        if "mawk" in _version_text(path, "-W", "version").lower():
            return "mawk"
        if os.path.basename(path) == "nawk":
            return "nawk"
        return "bsd"
    return "unknown"


def probe_tools(settings: Settings | None = None, names=DEFAULT_TOOLS) -> ToolContext:
    """Resolve every tool in *names* into a fresh :class:`ToolContext`."""
    paths: dict[str, str] = {}
    variants: dict[str, str] = {}
    for name in names:
        override = settings.tool_override(name) if settings else None
        found = find_tool(name, override)
        if found is None:
            logger.debug("tool %s not found", name)
            continue
        paths[name] = found
        variants[name] = detect_variant(name, found)
        logger.debug("tool %s -> %s (%s)", name, found, variants[name])
    return ToolContext(paths, variants)

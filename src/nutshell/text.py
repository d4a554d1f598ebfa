"""Text search/replace through external tools, plus line primitives.

The four pattern operations (``replace``, ``search``, ``contains``,
``count_matches``) are provided by a :class:`TextBackend` chosen once by
:func:`resolve_backend` from a probed :class:`~nutshell.deps.ToolContext`.
Patterns are extended regular expressions (Perl syntax for
:class:`PerlBackend`).
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import tempfile

from .deps import ToolContext
from .errors import BackendError, ToolNotFoundError
from .values import NotFound, _NotFound

logger = logging.getLogger(__name__)


def _slash_escape(text: str) -> str:
    return text.replace("/", r"\/")


def _run(args: list[str]) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(args, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise BackendError(f"cannot run {args[0]}: {exc}") from exc


def _output_lines(proc: subprocess.CompletedProcess) -> list[str]:
    return proc.stdout.splitlines()


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class TextBackend:
    """Pattern operations over a file, backed by external tools.

    Missing files and empty patterns never raise: ``replace`` and
    ``contains`` give False, ``search`` gives ``[]`` and
    ``count_matches`` gives 0.
    """

    name = ""
    requires: tuple[str, ...] = ()

    def __init__(self, ctx: ToolContext) -> None:
        for tool in self.requires:
            ctx.require(tool)
        self.ctx = ctx

    @classmethod
    def available(cls, ctx: ToolContext) -> bool:
        return ctx.has_all(*cls.requires)

    def replace(self, pattern: str, replacement: str, path: str | os.PathLike) -> bool:
        if not pattern or not os.path.isfile(path):
            return False
        return self._replace(pattern, replacement, os.fspath(path))

    def search(self, pattern: str, path: str | os.PathLike) -> list[str]:
        if not pattern or not os.path.isfile(path):
            return []
        return self._search(pattern, os.fspath(path))

    def contains(self, pattern: str, path: str | os.PathLike) -> bool:
        if not pattern or not os.path.isfile(path):
            return False
        return self._contains(pattern, os.fspath(path))

    def count_matches(self, pattern: str, path: str | os.PathLike) -> int:
        if not pattern or not os.path.isfile(path):
            return 0
        return self._count_matches(pattern, os.fspath(path))

    # Subclasses override these; the defaults derive from _search.

    def _replace(self, pattern: str, replacement: str, path: str) -> bool:
        raise NotImplementedError

    def _search(self, pattern: str, path: str) -> list[str]:
        raise NotImplementedError

    def _contains(self, pattern: str, path: str) -> bool:
        return bool(self._search(pattern, path))

    def _count_matches(self, pattern: str, path: str) -> int:
        return len(self._search(pattern, path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SedBackend(TextBackend):
    name = "sed"
    requires = ("sed",)

    def _sed_inplace(self) -> list[str]:
        sed = self.ctx.require("sed")
        if self.ctx.variant("sed") == "bsd":
            return [sed, "-i", ""]
        return [sed, "-i"]

    def _replace(self, pattern: str, replacement: str, path: str) -> bool:
        script = f"s/{_slash_escape(pattern)}/{_slash_escape(replacement)}/g"
        proc = _run([*self._sed_inplace(), "-E", script, path])
        return proc.returncode == 0

    def _search(self, pattern: str, path: str) -> list[str]:
        proc = _run([self.ctx.require("sed"), "-n", "-E", f"/{_slash_escape(pattern)}/p", path])
        return _output_lines(proc) if proc.returncode == 0 else []


class GrepSedBackend(SedBackend):
    """grep for matching; sed for rewriting, skipped when grep finds nothing."""

    name = "grep_sed"
    requires = ("grep", "sed")

    def _replace(self, pattern: str, replacement: str, path: str) -> bool:
        if not self._contains(pattern, path):
            return True
        return super()._replace(pattern, replacement, path)

    def _search(self, pattern: str, path: str) -> list[str]:
        proc = _run([self.ctx.require("grep"), "-E", pattern, path])
        return _output_lines(proc) if proc.returncode == 0 else []

    def _contains(self, pattern: str, path: str) -> bool:
        return _run([self.ctx.require("grep"), "-qE", pattern, path]).returncode == 0

    def _count_matches(self, pattern: str, path: str) -> int:
        proc = _run([self.ctx.require("grep"), "-cE", pattern, path])
        try:
            return int(proc.stdout.strip() or 0)
        except ValueError:
            return 0


class PerlBackend(TextBackend):
    name = "perl"
    requires = ("perl",)

    def _replace(self, pattern: str, replacement: str, path: str) -> bool:
        script = f"s/{_slash_escape(pattern)}/{_slash_escape(replacement)}/g"
        return _run([self.ctx.require("perl"), "-i", "-pe", script, path]).returncode == 0

    def _search(self, pattern: str, path: str) -> list[str]:
        script = f"print if /{_slash_escape(pattern)}/"
        proc = _run([self.ctx.require("perl"), "-ne", script, path])
        return _output_lines(proc) if proc.returncode == 0 else []



class AwkBackend(TextBackend):
    """Slowest option: awk has no in-place mode, so rewrites go via a temp file."""

    name = "awk"
    requires = ("awk",)

    def _replace(self, pattern: str, replacement: str, path: str) -> bool:
        awk = self.ctx.require("awk")
        directory = os.path.dirname(os.path.abspath(path))
        fd, temp = tempfile.mkstemp(dir=directory, prefix=".nutshell-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as out:
                proc = subprocess.run(
                    [awk, "-v", f"pat={pattern}", "-v", f"rep={replacement}",
                     "{ gsub(pat, rep); print }", path],
                    stdout=out, stderr=subprocess.PIPE, text=True, check=False,
                )
            if proc.returncode != 0:
                logger.debug("awk replace failed: %s", proc.stderr.strip())
                return False
            shutil.copymode(path, temp)
            os.replace(temp, path)
            return True
        except OSError as exc:
            raise BackendError(f"awk replace failed for {path}: {exc}") from exc
        finally:
            if os.path.exists(temp):
                os.unlink(temp)

    def _search(self, pattern: str, path: str) -> list[str]:
        proc = _run([self.ctx.require("awk"), "-v", f"pat={pattern}", "$0 ~ pat", path])
        return _output_lines(proc) if proc.returncode == 0 else []


# Priority order for automatic selection.
BACKENDS: dict[str, type[TextBackend]] = {
    GrepSedBackend.name: GrepSedBackend,
    SedBackend.name: SedBackend,
    PerlBackend.name: PerlBackend,
    AwkBackend.name: AwkBackend,
}


def resolve_backend(ctx: ToolContext, prefer: str = "auto") -> TextBackend:
    """Pick the text backend for *ctx*.

    ``prefer="auto"`` takes the first available entry of :data:`BACKENDS`;
    any other value must name a backend whose tools are present.
    """
    if prefer != "auto":
        cls = BACKENDS.get(prefer)
        if cls is None:
            raise BackendError(f"unknown text backend: {prefer!r}")
        backend = cls(ctx)
        logger.debug("text backend %s (preferred)", backend.name)
        return backend

    for cls in BACKENDS.values():
        if cls.available(ctx):
            logger.debug("text backend %s", cls.name)
            return cls(ctx)
    raise ToolNotFoundError("sed, perl or awk")


# ---------------------------------------------------------------------------
# Line primitives (no external tools)
# ---------------------------------------------------------------------------

def _read(path: str | os.PathLike) -> list[str] | None:
    try:
        with open(path, encoding="utf-8", errors="replace") as fh:
            return fh.read().splitlines()
    except OSError as exc:
        logger.debug("cannot read %s: %s", path, exc)
        return None


def line_count(path: str | os.PathLike) -> int:
    text = _read(path)
    return 0 if text is None else len(text)


def word_count(path: str | os.PathLike) -> int:
    text = _read(path)
    return 0 if text is None else sum(len(line.split()) for line in text)


def head(path: str | os.PathLike, n: int = 10) -> list[str]:
    text = _read(path)
    return [] if text is None else text[:n]


def tail(path: str | os.PathLike, n: int = 10) -> list[str]:
    text = _read(path)
    if text is None or n <= 0:
        return []
    return text[-n:]


def line(path: str | os.PathLike, num: int = 1) -> str | _NotFound:
    """Line *num* (1-based)."""
    text = _read(path)
    if text is None or not 1 <= num <= len(text):
        return NotFound
    return text[num - 1]


def lines(path: str | os.PathLike, start: int = 1, end: int | None = None) -> list[str]:
    """Lines *start* through *end* inclusive (1-based); just *start* when *end* is missing or earlier."""
    text = _read(path)
    if text is None or start < 1:
        return []
    if end is None or end < start:
        end = start
    return text[start - 1:end]


def between(path: str | os.PathLike, start: str, end: str) -> list[str]:
    """Lines strictly between a *start* match and the next *end* match.

    Like ``sed -n '/start/,/end/p' | sed '1d;$d'``: every range is
    collected, then the first and last collected lines are dropped.
    """
    text = _read(path)
    if text is None or not start or not end:
        return []
    start_re, end_re = re.compile(start), re.compile(end)
    collected: list[str] = []
    inside = False
    for current in text:
        if not inside:
            if start_re.search(current):
                inside = True
                collected.append(current)
        else:
            collected.append(current)
            if end_re.search(current):
                inside = False
    return collected[1:-1]


def remove_blank(path: str | os.PathLike) -> list[str]:
    text = _read(path)
    return [] if text is None else [ln for ln in text if ln.strip()]


def remove_comments(path: str | os.PathLike) -> list[str]:
    """Non-blank lines that do not start with ``#`` (after indentation)."""
    text = _read(path)
    if text is None:
        return []
    return [ln for ln in text if ln.strip() and not ln.lstrip().startswith("#")]


def append(text: str, path: str | os.PathLike) -> bool:
    if not path:
        return False
    with open(path, "a", encoding="utf-8") as fh:
        fh.write(text + "\n")
    return True


def prepend(text: str, path: str | os.PathLike) -> bool:
    if not os.path.isfile(path):
        return False
    with open(path, encoding="utf-8") as fh:
        rest = fh.read()
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(text + "\n" + rest)
    return True

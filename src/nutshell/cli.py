"""``nutshell`` command-line entry point.

Exit status: 0 success, 1 not found / false, 2 tool or usage error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Sequence

from .config import Settings, get_settings
from .deps import probe_tools
from .emitter import to_json
from .errors import NutshellError
from .query import get, get_or, has, is_true, keys, section_pairs, sections, to_array
from .text import resolve_backend
from .values import NotFound

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _print_value(value, dest: IO[str]) -> int:
    if value is NotFound:
        return 1
    print(value, file=dest)
    return 0


def _print_lines(items, dest: IO[str]) -> int:
    if items is NotFound:
        return 1
    for item in items:
        print(item, file=dest)
    return 0


def _cmd_get(args, settings: Settings, dest: IO[str]) -> int:
    return _print_value(get(args.file, args.key), dest)


def _cmd_get_or(args, settings: Settings, dest: IO[str]) -> int:
    print(get_or(args.file, args.key, args.default), file=dest)
    return 0


def _cmd_has(args, settings: Settings, dest: IO[str]) -> int:
    return 0 if has(args.file, args.key) else 1


def _cmd_is_true(args, settings: Settings, dest: IO[str]) -> int:
    return 0 if is_true(args.file, args.key) else 1


def _cmd_sections(args, settings: Settings, dest: IO[str]) -> int:
    return _print_lines(sections(args.file), dest)


def _cmd_keys(args, settings: Settings, dest: IO[str]) -> int:
    return _print_lines(keys(args.file, args.section), dest)


def _cmd_pairs(args, settings: Settings, dest: IO[str]) -> int:
    pairs = section_pairs(args.file, args.section)
    if pairs is NotFound:
        return 1
    return _print_lines((f"{k}={v}" for k, v in pairs), dest)


def _cmd_array(args, settings: Settings, dest: IO[str]) -> int:
    return _print_lines(to_array(args.file, args.key, settings.protect_single_quotes), dest)


def _cmd_json(args, settings: Settings, dest: IO[str]) -> int:
    return _print_value(to_json(args.file, settings.protect_single_quotes), dest)


def _cmd_grep(args, settings: Settings, dest: IO[str]) -> int:
    backend = resolve_backend(probe_tools(settings), settings.text_backend)
    matches = backend.search(args.pattern, args.file)
    _print_lines(matches, dest)
    return 0 if matches else 1


def _cmd_replace(args, settings: Settings, dest: IO[str]) -> int:
    backend = resolve_backend(probe_tools(settings), settings.text_backend)
    return 0 if backend.replace(args.pattern, args.replacement, args.file) else 1


def _cmd_tools(args, settings: Settings, dest: IO[str]) -> int:
    ctx = probe_tools(settings)
    width = max((len(n) for n in ctx.paths), default=0)
    for name, path in ctx.paths.items():
        print(f"  {name:<{width}} : {path} ({ctx.variant(name)})", file=dest)
    backend = resolve_backend(ctx, settings.text_backend)
    print(f"  backend : {backend.name}", file=dest)
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nutshell", description="Read TOML-subset files and process text.")
    sub = parser.add_subparsers(dest="command", required=True)

    def add(name: str, handler, *params: str, summary: str) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=summary)
        for param in params:
            p.add_argument(param)
        p.set_defaults(handler=handler)
        return p

    add("get", _cmd_get, "file", "key", summary="print a value (section.key or key)")
    add("get-or", _cmd_get_or, "file", "key", "default", summary="print a value or a default")
    add("has", _cmd_has, "file", "key", summary="exit 0 if the key exists")
    add("is-true", _cmd_is_true, "file", "key", summary="exit 0 if the value is truthy")
    add("sections", _cmd_sections, "file", summary="list section headers")
    keys_p = add("keys", _cmd_keys, "file", summary="list keys of a section (root by default)")
    keys_p.add_argument("section", nargs="?", default="")
    add("pairs", _cmd_pairs, "file", "section", summary="print key=value lines of a section")
    add("array", _cmd_array, "file", "key", summary="print array elements, one per line")
    add("json", _cmd_json, "file", summary="convert the file to JSON")
    add("grep", _cmd_grep, "pattern", "file", summary="print lines matching a pattern")
    add("replace", _cmd_replace, "pattern", "replacement", "file", summary="replace a pattern in place")
    add("tools", _cmd_tools, summary="show detected tools and the text backend")
    return parser


def run(argv: Sequence[str] | None = None, dest: IO[str] | None = None,
        settings: Settings | None = None) -> int:
    """Parse *argv*, run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    logger.debug("command %s", args.command)
    try:
        return args.handler(args, settings, dest or sys.stdout)
    except NutshellError as exc:
        print(f"nutshell: {exc}", file=sys.stderr)
        return 2


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    sys.exit(run(settings=settings))


if __name__ == "__main__":
    main()

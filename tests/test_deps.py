"""Tests for tool discovery."""

import os
import shutil
import stat

import pytest

from nutshell.config import Settings
from nutshell.deps import ToolContext, detect_variant, find_tool, probe_tools
from nutshell.errors import ToolNotFoundError


def _fake_tool(tmp_path, name):
    path = tmp_path / name
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


# ---------------------------------------------------------------------------
# ToolContext
# ---------------------------------------------------------------------------

def test_context_queries():
    ctx = ToolContext({"sed": "/bin/sed", "grep": "/bin/grep"}, {"sed": "gnu"})
    assert ctx.has("sed")
    assert ctx.has_all("sed", "grep")
    assert not ctx.has_all("sed", "perl")
    assert ctx.has_any("perl", "grep")
    assert ctx.path("awk") is None
    assert ctx.variant("sed") == "gnu"
    assert ctx.variant("grep") == "unknown"
    assert ctx.is_gnu("sed")


def test_context_require_missing():
    with pytest.raises(ToolNotFoundError) as info:
        ToolContext().require("perl")
    assert info.value.name == "perl"


def test_context_is_read_only():
    ctx = ToolContext({"sed": "/bin/sed"})
    with pytest.raises(TypeError):
        ctx.paths["awk"] = "/bin/awk"


# ---------------------------------------------------------------------------
# find_tool / probe_tools
# ---------------------------------------------------------------------------

def test_find_tool_prefers_override(tmp_path):
    fake = _fake_tool(tmp_path, "sed")
    assert find_tool("sed", fake) == fake


def test_find_tool_ignores_non_executable_override(tmp_path, monkeypatch):
    plain = tmp_path / "sed"
    plain.write_text("")
    monkeypatch.setattr(shutil, "which", lambda name: None)
    monkeypatch.setattr("nutshell.deps.COMMON_LOCATIONS", ())
    assert find_tool("sed", str(plain)) is None


def test_probe_tools_uses_settings_override(tmp_path):
    fake = _fake_tool(tmp_path, "mysed")
    ctx = probe_tools(Settings(_env_file=None, sed=fake), names=("sed",))
    assert ctx.path("sed") == fake
    assert ctx.variant("sed") in ("gnu", "bsd", "unknown")


def test_probe_tools_skips_missing(monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: None)
    monkeypatch.setattr("nutshell.deps.COMMON_LOCATIONS", ())
    ctx = probe_tools(names=("sed", "perl"))
    assert dict(ctx.paths) == {}


# ---------------------------------------------------------------------------
# detect_variant
# ---------------------------------------------------------------------------

@pytest.mark.skipif(shutil.which("sed") is None, reason="sed not installed")
def test_detect_sed_variant_real():
    assert detect_variant("sed", shutil.which("sed")) in ("gnu", "bsd", "unknown")


def test_detect_variant_unrunnable(tmp_path):
    assert detect_variant("grep", str(tmp_path / "absent")) == "bsd"


def test_detect_awk_nawk_by_name(tmp_path):
    fake = _fake_tool(tmp_path, "nawk")
    assert detect_variant("awk", fake) == "nawk"


def test_detect_variant_other_tool():
    assert detect_variant("perl", "/usr/bin/perl") == "unknown"

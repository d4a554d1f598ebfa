"""Tests for line cleaning, classification and scanning."""

from nutshell.lines import (
    KeyValue,
    SectionHeader,
    Unrecognized,
    classify,
    clean_line,
    read_lines,
    scan,
)


# ---------------------------------------------------------------------------
# clean_line
# ---------------------------------------------------------------------------

def test_clean_line_trims():
    assert clean_line("   key = 1   ") == "key = 1"


def test_clean_line_strips_comment():
    assert clean_line("key = 1  # note") == "key = 1"


def test_clean_line_comment_only():
    assert clean_line("   # just a comment") == ""


def test_clean_line_blank():
    assert clean_line("") == ""


def test_clean_line_cuts_hash_inside_quotes():
    assert clean_line('color = "#fff"') == 'color = "'


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

def test_classify_header():
    assert classify("[server]") == SectionHeader("server")


def test_classify_dotted_header_path():
    kind = classify("[a.b.c]")
    assert kind == SectionHeader("a.b.c")
    assert kind.path == ["a", "b", "c"]


def test_classify_header_rejects_inner_bracket():
    assert isinstance(classify("[a]b]"), Unrecognized)


def test_classify_key_value_trims_sides():
    assert classify("name   =   \"x\"") == KeyValue("name", '"x"')


def test_classify_key_value_splits_on_first_equals():
    assert classify("expr = a=b") == KeyValue("expr", "a=b")


def test_classify_empty_value():
    assert classify("key =") == KeyValue("key", "")


def test_classify_unrecognized():
    assert classify("just words") == Unrecognized("just words")


def test_classify_bracketed_assignment_is_header():
    assert classify("[a=b]") == SectionHeader("a=b")


# ---------------------------------------------------------------------------
# read_lines / scan
# ---------------------------------------------------------------------------

def test_read_lines_missing_file(tmp_path):
    assert read_lines(tmp_path / "nope.toml") is None


def test_scan_skips_blank_and_comments():
    src = ["", "# c", "[a]", "  ", "x = 1"]
    kinds = [k for _, k in scan(src)]
    assert kinds == [SectionHeader("a"), KeyValue("x", "1")]


def test_scan_yields_unrecognized():
    kinds = [k for _, k in scan(["garbage"])]
    assert kinds == [Unrecognized("garbage")]


def test_scan_final_line_without_newline(write_toml):
    path = write_toml("a = 1\nb = 2")
    kinds = [k for _, k in scan(read_lines(path))]
    assert kinds[-1] == KeyValue("b", "2")

import pytest


@pytest.fixture
def write_toml(tmp_path):
    """Write *text* to a fresh file and return its path."""
    counter = {"n": 0}

    def _write(text: str, name: str | None = None):
        counter["n"] += 1
        path = tmp_path / (name or f"doc{counter['n']}.toml")
        path.write_text(text, encoding="utf-8")
        return path

    return _write

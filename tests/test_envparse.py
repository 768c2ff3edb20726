"""Tests for assignboard.lib.envparse module."""

import pytest

from assignboard.lib.envparse import load_env, parse_env


class TestParseEnv:
    """Tests for parse_env()."""

    def test_basic(self):
        text = """
# board settings
BOARD_TITLE=Staffing
BOARD_LOG_LEVEL = INFO
"""
        assert parse_env(text) == {"BOARD_TITLE": "Staffing", "BOARD_LOG_LEVEL": "INFO"}

    def test_quotes_stripped(self):
        assert parse_env('A="hello world"\nB=\'x\'') == {"A": "hello world", "B": "x"}

    def test_unbalanced_quotes_kept(self):
        assert parse_env('A="half') == {"A": '"half'}

    def test_export_prefix(self):
        assert parse_env("export BOARD_SEED=seed.yaml") == {"BOARD_SEED": "seed.yaml"}

    def test_value_may_contain_equals(self):
        assert parse_env("A=b=c") == {"A": "b=c"}

    def test_empty_value(self):
        assert parse_env("A=") == {"A": ""}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match=r"board.env:2: Invalid syntax"):
            parse_env("A=1\nBROKEN", source="board.env")

    def test_invalid_key(self):
        with pytest.raises(ValueError, match="Invalid key 'lower'"):
            parse_env("lower=1")

    @pytest.mark.parametrize("value", [
        "`whoami`",
        "$(whoami)",
        "${HOME}",
        "a; rm -rf /",
        "a && b",
        "a | b",
    ])
    def test_forbidden_patterns(self, value):
        with pytest.raises(ValueError, match="Forbidden pattern"):
            parse_env(f"A={value}")


class TestLoadEnv:
    """Tests for load_env()."""

    def test_load(self, tmp_path):
        path = tmp_path / "board.env"
        path.write_text("BOARD_TITLE=Team\n")
        assert load_env(path) == {"BOARD_TITLE": "Team"}

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_env(tmp_path / "missing.env")

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "board.env"
        path.write_text("nope\n")
        with pytest.raises(ValueError, match="board.env:1"):
            load_env(path)

"""Unit tests for config CLI commands."""

from pathlib import Path

import pytest
from ctxgen.cli.main import app
from ctxgen.core.config import TreeConfig, load_tree_config, save_tree_config
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated XDG config home; returns the ctxgen config file path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path / "ctxgen" / "config.toml"


class TestConfigShow:
    """Tests for ctxgen config show."""

    def test_shows_defaults(self, config_home: Path) -> None:
        """Without a config file, defaults are shown."""
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "exclude_hidden" in result.stdout
        assert "True" in result.stdout

    def test_shows_saved_values(self, config_home: Path) -> None:
        """Saved values are reflected."""
        save_tree_config(TreeConfig(hidden_prefix="@@"), config_home)
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "@@" in result.stdout


class TestConfigSet:
    """Tests for ctxgen config set."""

    def test_set_bool(self, config_home: Path) -> None:
        """Boolean keys accept yes/no style values."""
        result = runner.invoke(app, ["config", "set", "exclude_hidden", "no"])
        assert result.exit_code == 0
        assert load_tree_config(config_home).exclude_hidden is False

    def test_set_string(self, config_home: Path) -> None:
        """String keys are stored as given."""
        result = runner.invoke(app, ["config", "set", "hidden_prefix", "_"])
        assert result.exit_code == 0
        assert load_tree_config(config_home).hidden_prefix == "_"

    def test_set_keeps_other_values(self, config_home: Path) -> None:
        """Setting one key preserves previously saved keys."""
        runner.invoke(app, ["config", "set", "cache_file_sets", "true"])
        runner.invoke(app, ["config", "set", "exclude_hidden", "false"])
        config = load_tree_config(config_home)
        assert config.cache_file_sets is True
        assert config.exclude_hidden is False

    def test_unknown_key(self, config_home: Path) -> None:
        """Unknown keys are rejected with the list of known keys."""
        result = runner.invoke(app, ["config", "set", "colour", "red"])
        assert result.exit_code == 1
        assert "Unknown key" in result.output
        assert not config_home.exists()

    def test_invalid_bool(self, config_home: Path) -> None:
        """Unrecognized boolean words are rejected."""
        result = runner.invoke(app, ["config", "set", "exclude_hidden", "maybe"])
        assert result.exit_code == 1
        assert "Invalid boolean" in result.output

    def test_invalid_value(self, config_home: Path) -> None:
        """Values failing validation are rejected."""
        result = runner.invoke(app, ["config", "set", "hidden_prefix", ""])
        assert result.exit_code == 1
        assert "Invalid value" in result.output

"""Unit tests for config CLI commands.

Tests for the filelist config show and filelist config init commands.
"""

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from filelist.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def config_home(tmp_path: Path) -> Iterator[Path]:
    """Point the settings directory at a temporary location."""
    home = tmp_path / "xdg"
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(home)}):
        yield home


class TestConfigShow:
    """Tests for filelist config show."""

    def test_shows_defaults(self, config_home: Path) -> None:
        """Without a settings file, the defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "initial_capacity" in result.output
        assert "1048576" in result.output
        assert "No settings file" in result.output

    def test_shows_file_values(self, config_home: Path) -> None:
        """Values from the settings file are shown."""
        settings_dir = config_home / "filelist"
        settings_dir.mkdir(parents=True)
        (settings_dir / "config.toml").write_text("max_entries = 4242\n")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "4242" in result.output
        assert "No settings file" not in result.output

    def test_invalid_file(self, config_home: Path, tmp_path: Path) -> None:
        """An invalid settings file exits with code 1."""
        config = tmp_path / "broken.toml"
        config.write_text("max_entries = [\n")

        result = runner.invoke(app, ["config", "show", "--config", str(config)])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output


class TestConfigInit:
    """Tests for filelist config init."""

    def test_writes_defaults(self, config_home: Path) -> None:
        """init writes the default settings file."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Settings written" in result.output
        with open(config_home / "filelist" / "config.toml", "rb") as f:
            data = tomllib.load(f)
        assert data["initial_capacity"] == 512

    def test_existing_file_kept(self, config_home: Path, tmp_path: Path) -> None:
        """init does not overwrite an existing file without --force."""
        config = tmp_path / "config.toml"
        config.write_text("max_entries = 7\n")

        result = runner.invoke(app, ["config", "init", "--config", str(config)])

        assert result.exit_code == 0
        assert "already exists" in result.output
        assert config.read_text() == "max_entries = 7\n"

    def test_force_overwrites(self, config_home: Path, tmp_path: Path) -> None:
        """init --force replaces an existing file."""
        config = tmp_path / "config.toml"
        config.write_text("max_entries = 7\n")

        result = runner.invoke(app, ["config", "init", "--force", "--config", str(config)])

        assert result.exit_code == 0
        with open(config, "rb") as f:
            data = tomllib.load(f)
        assert data["max_entries"] == 1_048_576

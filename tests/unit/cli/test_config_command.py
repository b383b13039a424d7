"""Unit tests for the filesweep config commands."""

import tomllib
from pathlib import Path

from filesweep.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigPath:
    """Tests for filesweep config path."""

    def test_default_path(self, isolated_config_home: Path) -> None:
        """Prints the XDG settings location."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(isolated_config_home / "filesweep" / "config.toml")

    def test_explicit_config(self, tmp_path: Path) -> None:
        """--config on the main command changes the location."""
        custom = tmp_path / "custom.toml"
        result = runner.invoke(app, ["--config", str(custom), "config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(custom)


class TestConfigInit:
    """Tests for filesweep config init."""

    def test_writes_defaults(self, tmp_path: Path) -> None:
        """init writes a settings file with the built-in defaults."""
        target = tmp_path / "config.toml"

        result = runner.invoke(app, ["--config", str(target), "config", "init"])

        assert result.exit_code == 0
        assert "Settings written" in result.stdout
        with open(target, "rb") as f:
            assert tomllib.load(f) == {"sweep": {"root": ".", "ext": "", "size": 0, "log": ""}}

    def test_refuses_overwrite(self, tmp_path: Path) -> None:
        """init does not overwrite an existing file without --force."""
        target = tmp_path / "config.toml"
        target.write_text('[sweep]\next = ".log"\n')

        result = runner.invoke(app, ["--config", str(target), "config", "init"])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert target.read_text() == '[sweep]\next = ".log"\n'

    def test_force_overwrites(self, tmp_path: Path) -> None:
        """init --force replaces an existing file."""
        target = tmp_path / "config.toml"
        target.write_text('[sweep]\next = ".log"\n')

        result = runner.invoke(app, ["--config", str(target), "config", "init", "--force"])

        assert result.exit_code == 0
        with open(target, "rb") as f:
            assert tomllib.load(f)["sweep"]["ext"] == ""


class TestConfigShow:
    """Tests for filesweep config show."""

    def test_shows_builtin_defaults(self, tmp_path: Path) -> None:
        """Without a file the built-in defaults are shown."""
        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.toml"), "config", "show"]
        )

        assert result.exit_code == 0
        assert "Sweep Defaults" in result.stdout
        assert "No settings file" in result.stdout

    def test_shows_file_values(self, tmp_path: Path) -> None:
        """Values from the settings file are displayed."""
        target = tmp_path / "config.toml"
        target.write_text('[sweep]\next = ".log"\nsize = 2048\n')

        result = runner.invoke(app, ["--config", str(target), "config", "show"])

        assert result.exit_code == 0
        assert ".log" in result.stdout
        assert "2048" in result.stdout

    def test_invalid_file(self, tmp_path: Path) -> None:
        """An invalid settings file exits 1."""
        target = tmp_path / "config.toml"
        target.write_text("[sweep\n")

        result = runner.invoke(app, ["--config", str(target), "config", "show"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output

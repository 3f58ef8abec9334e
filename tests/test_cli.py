"""Tests for CLI commands."""

import pytest

from taskgraph.cli.app import app
from taskgraph.cli.commands import serve as serve_command
from taskgraph.config import get_config_path, load_config


class TestConfigCommand:
    """Tests for 'taskgraph config' command."""

    def test_config_init_writes_defaults(self, cli_runner):
        result = cli_runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert get_config_path().exists()
        assert load_config(get_config_path()).server.port == 4567

    def test_config_init_refuses_overwrite(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["config", "init", "--path", str(config_file)])
        assert result.exit_code == 1
        assert "already exists" in result.stdout
        assert "8080" in config_file.read_text()

    def test_config_init_force(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app, ["config", "init", "--path", str(config_file), "--force"]
        )
        assert result.exit_code == 0
        assert load_config(config_file).server.port == 4567

    def test_config_show_displays_content(self, cli_runner, config_file):
        result = cli_runner.invoke(app, ["config", "show", "--path", str(config_file)])
        assert result.exit_code == 0
        assert "[server]" in result.stdout

    def test_config_show_missing_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            app, ["config", "show", "--path", str(tmp_path / "missing.toml")]
        )
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_config_validate_success(self, cli_runner, config_file):
        result = cli_runner.invoke(
            app, ["config", "validate", "--path", str(config_file)]
        )
        assert result.exit_code == 0
        assert "valid" in result.stdout.lower()

    def test_config_validate_invalid_toml(self, cli_runner, tmp_path):
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("not valid toml [[[")

        result = cli_runner.invoke(
            app, ["config", "validate", "--path", str(invalid_file)]
        )
        assert result.exit_code == 1
        assert "validation failed" in result.stdout.lower()

    def test_config_unknown_action(self, cli_runner):
        result = cli_runner.invoke(app, ["config", "unknown"])
        assert result.exit_code == 1
        assert "Unknown action" in result.stdout


class TestServeCommand:
    """Tests for 'taskgraph serve' command."""

    @pytest.fixture
    def captured_run(self, monkeypatch):
        captured = {}

        async def fake_run_server(config_path, host, port, seed):
            captured.update(config_path=config_path, host=host, port=port, seed=seed)

        monkeypatch.setattr(serve_command, "_run_server", fake_run_server)
        return captured

    def test_serve_passes_options(self, cli_runner, captured_run):
        result = cli_runner.invoke(app, ["serve", "--port", "9001", "--seed"])
        assert result.exit_code == 0
        assert captured_run == {
            "config_path": None,
            "host": None,
            "port": 9001,
            "seed": True,
        }

    def test_serve_missing_config_file(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            app, ["serve", "--config", str(tmp_path / "missing.toml")]
        )
        assert result.exit_code == 1
        assert "not found" in result.stdout

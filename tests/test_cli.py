"""Tests for CLI commands."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from svc import __version__
from svc.cli.app import app


def invoke(cli_runner, config_file: Path, *args: str):
    return cli_runner.invoke(app, ["--config", str(config_file), *args])


class TestAppOptions:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"svc {__version__}" in result.output

    def test_no_args_shows_help(self, cli_runner):
        result = cli_runner.invoke(app, [])
        assert "Usage" in result.output

    def test_missing_config(self, cli_runner, tmp_path: Path):
        result = invoke(cli_runner, tmp_path / "missing.yaml", "status", "web")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_config(self, cli_runner, tmp_path: Path):
        bad = tmp_path / "services.yaml"
        bad.write_text("- name: web\n  path: /a\n  type: Daemon\n")

        result = invoke(cli_runner, bad, "status", "web")

        assert result.exit_code == 1
        assert "Invalid config" in result.output

    def test_unknown_service(self, cli_runner, config_file, cli_manager):
        result = invoke(cli_runner, config_file, "status", "nope")
        assert result.exit_code == 1
        assert "Service nope not found in the configuration." in result.output


class TestStatusCommand:
    def test_status_not_running(self, cli_runner, config_file, cli_manager):
        result = invoke(cli_runner, config_file, "status", "web")

        assert result.exit_code == 0
        assert "Service web" in result.output
        assert "/opt/web/server.exe" in result.output
        assert "not running" in result.output
        assert "disabled" in result.output

    def test_status_running_and_enabled(
        self, cli_runner, config_file, cli_manager, processes, autostart
    ):
        processes.processes["/opt/web/server.exe"] = {222, 111}
        autostart.entries["web"] = "/opt/web/server.exe"

        result = invoke(cli_runner, config_file, "status", "web")

        assert result.exit_code == 0
        assert "111, 222" in result.output
        assert "path match" in result.output
        assert "enabled" in result.output
        assert "Start-up command" in result.output

    def test_status_utility(self, cli_runner, config_file, cli_manager):
        result = invoke(cli_runner, config_file, "status", "tool")

        assert result.exit_code == 0
        assert "Utility" in result.output
        assert "Interpreter" in result.output
        assert "python" in result.output

    def test_status_query_failure(self, cli_runner, config_file, cli_manager):
        from svc.errors import SvcIOError

        cli_manager._processes.enumerate = AsyncMock(
            side_effect=SvcIOError("pgrep failed: boom")
        )

        result = invoke(cli_runner, config_file, "status", "web")

        assert result.exit_code == 1
        assert "pgrep failed: boom" in result.output

    def test_status_autostart_unsupported(
        self, cli_runner, config_file, monkeypatch, processes, records
    ):
        from svc.service.backends.generic import GenericAutoStartBackend
        from svc.service.manager import ServiceManager

        manager = ServiceManager(processes, GenericAutoStartBackend(), records)
        monkeypatch.setattr("svc.service.ServiceManager", lambda: manager)

        result = invoke(cli_runner, config_file, "status", "web")

        assert result.exit_code == 0, result.output
        assert "not supported on this system" in result.output

    def test_status_missing_process_tool(self, cli_runner, config_file, monkeypatch):
        from svc.errors import SvcIOError

        def unavailable():
            raise SvcIOError("pgrep is required to manage services but was not found")

        monkeypatch.setattr("svc.service.ServiceManager", unavailable)

        result = invoke(cli_runner, config_file, "status", "web")

        assert result.exit_code == 1
        assert "pgrep is required" in result.output


class TestListCommand:
    def test_list(self, cli_runner, config_file):
        result = invoke(cli_runner, config_file, "list")

        assert result.exit_code == 0
        assert "web" in result.output
        assert "tool" in result.output
        assert "Utility" in result.output

    def test_list_empty(self, cli_runner, tmp_path: Path):
        empty = tmp_path / "services.yaml"
        empty.write_text("[]\n")

        result = invoke(cli_runner, empty, "list")

        assert result.exit_code == 0
        assert "No services configured" in result.output


class TestRunCommand:
    @pytest.fixture
    def spawn(self, monkeypatch) -> MagicMock:
        mock = MagicMock(return_value=4242)
        monkeypatch.setattr("svc.service.manager.spawn_detached", mock)
        return mock

    def test_run_executable(self, cli_runner, config_file, cli_manager, spawn, records):
        result = invoke(cli_runner, config_file, "run", "web")

        assert result.exit_code == 0, result.output
        assert "started in the background (PID 4242)" in result.output
        spawn.assert_called_once_with(["/opt/web/server.exe"], Path("/opt/web"))
        assert records.path_for("web").exists()

    def test_run_at_directory(
        self, cli_runner, config_file, cli_manager, spawn, tmp_path: Path
    ):
        result = invoke(cli_runner, config_file, "run", "web", "at", str(tmp_path))

        assert result.exit_code == 0, result.output
        spawn.assert_called_once_with(["/opt/web/server.exe"], tmp_path)

    @pytest.mark.parametrize("args", [["web", "in", "/tmp"], ["web", "at"]])
    def test_run_bad_form(self, cli_runner, config_file, cli_manager, spawn, args):
        result = invoke(cli_runner, config_file, "run", *args)

        assert result.exit_code == 1
        assert "Usage: svc run" in result.output
        spawn.assert_not_called()

    def test_run_already_running(
        self, cli_runner, config_file, cli_manager, spawn, processes
    ):
        processes.processes["/opt/web/server.exe"] = {111}

        result = invoke(cli_runner, config_file, "run", "web")

        assert result.exit_code == 1
        assert "Service web is already running (PID 111)." in result.output
        spawn.assert_not_called()

    def test_run_utility(self, cli_runner, config_file, cli_manager, monkeypatch):
        completion = AsyncMock(return_value=0)
        monkeypatch.setattr("svc.service.manager.run_to_completion", completion)

        result = invoke(cli_runner, config_file, "run", "tool")

        assert result.exit_code == 0, result.output
        assert "Utility /srv/tool.py finished." in result.output
        completion.assert_awaited_once_with(["python", "/srv/tool.py"], Path("/srv"))

    def test_run_utility_failure(
        self, cli_runner, config_file, cli_manager, monkeypatch
    ):
        monkeypatch.setattr(
            "svc.service.manager.run_to_completion", AsyncMock(return_value=3)
        )

        result = invoke(cli_runner, config_file, "run", "tool")

        assert result.exit_code == 1
        assert "failed with exit status 3" in result.output


class TestKillCommand:
    def test_kill(self, cli_runner, config_file, cli_manager, processes):
        processes.processes["/opt/web/server.exe"] = {111}

        result = invoke(cli_runner, config_file, "kill", "web")

        assert result.exit_code == 0, result.output
        assert "Service web with PID 111 killed." in result.output
        assert processes.terminated == [111]

    def test_kill_not_running(self, cli_runner, config_file, cli_manager):
        result = invoke(cli_runner, config_file, "kill", "web")

        assert result.exit_code == 1
        assert "Service web is not running." in result.output

    def test_kill_partial_failure(
        self, cli_runner, config_file, cli_manager, processes
    ):
        processes.processes["/opt/web/server.exe"] = {111, 222}
        processes.fail_pids = {222}

        result = invoke(cli_runner, config_file, "kill", "web")

        assert result.exit_code == 1
        assert "Service web with PID 111 killed." in result.output
        assert "Access denied for PID 222" in result.output
        assert "Failed to kill 1 of 2 processes of service web." in result.output


class TestStartupCommands:
    def test_enable(self, cli_runner, config_file, cli_manager, autostart):
        result = invoke(cli_runner, config_file, "enable", "web")

        assert result.exit_code == 0, result.output
        assert "Service web enabled." in result.output
        assert autostart.entries == {"web": "/opt/web/server.exe"}

    def test_enable_twice(self, cli_runner, config_file, cli_manager, autostart):
        autostart.entries["web"] = "/opt/web/server.exe"

        result = invoke(cli_runner, config_file, "enable", "web")

        assert result.exit_code == 1
        assert "Service web is already enabled." in result.output

    def test_disable(self, cli_runner, config_file, cli_manager, autostart):
        autostart.entries["web"] = "/opt/web/server.exe"

        result = invoke(cli_runner, config_file, "disable", "web")

        assert result.exit_code == 0, result.output
        assert "Service web disabled." in result.output
        assert autostart.entries == {}

    def test_disable_when_disabled(self, cli_runner, config_file, cli_manager):
        result = invoke(cli_runner, config_file, "disable", "web")

        assert result.exit_code == 1
        assert "Service web is already disabled." in result.output


class TestConfigCommand:
    def test_config_show(self, cli_runner, config_file):
        result = invoke(cli_runner, config_file, "config", "show")

        assert result.exit_code == 0
        assert "Config file:" in result.output
        assert "server.exe" in result.output

    def test_config_validate(self, cli_runner, config_file):
        result = invoke(cli_runner, config_file, "config", "validate")

        assert result.exit_code == 0
        assert "Config valid: 2 services" in result.output
        assert "Services: web, tool" in result.output

    def test_config_validate_invalid(self, cli_runner, tmp_path: Path):
        bad = tmp_path / "services.toml"
        bad.write_text("not valid toml [[[")

        result = invoke(cli_runner, bad, "config", "validate")

        assert result.exit_code == 1
        assert "Cannot parse" in result.output

    def test_config_unknown_action(self, cli_runner, config_file):
        result = invoke(cli_runner, config_file, "config", "unknown")

        assert result.exit_code == 1
        assert "Unknown action" in result.output

    def test_config_no_action_shows_help(self, cli_runner, config_file):
        result = invoke(cli_runner, config_file, "config")

        assert result.exit_code == 0
        assert "show" in result.output

"""Shared test fixtures and fakes."""

from pathlib import Path

import pytest

from svc.config import ServiceConfig, ServiceType
from svc.errors import SvcIOError
from svc.service.base import AutoStartBackend, ProcessBackend
from svc.service.manager import ServiceManager
from svc.service.pid import LaunchRecords

# =============================================================================
# Fake Backends
# =============================================================================


class FakeProcessBackend(ProcessBackend):
    """In-memory process table keyed by path fragment."""

    def __init__(
        self,
        processes: dict[str, set[int]] | None = None,
        fail_pids: set[int] | None = None,
    ):
        self.processes = processes or {}
        self.fail_pids = fail_pids or set()
        self.enumerated: list[str] = []
        self.terminated: list[int] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def is_available(self) -> bool:
        return True

    async def enumerate(self, path_fragment: str) -> set[int]:
        self.enumerated.append(path_fragment)
        return set(self.processes.get(path_fragment, set()))

    async def terminate(self, pid: int) -> None:
        if pid in self.fail_pids:
            raise SvcIOError(f"Access denied for PID {pid}", exit_status=1)
        self.terminated.append(pid)
        for pids in self.processes.values():
            pids.discard(pid)


class FakeAutoStartBackend(AutoStartBackend):
    """In-memory auto-start store."""

    def __init__(self, entries: dict[str, str] | None = None):
        self.entries = entries or {}

    @property
    def name(self) -> str:
        return "fake"

    @property
    def supports_autostart(self) -> bool:
        return True

    async def query(self, name: str) -> bool:
        return name in self.entries

    async def add(self, name: str, path: str) -> None:
        self.entries[name] = path

    async def remove(self, name: str) -> None:
        del self.entries[name]

    async def command(self, name: str) -> str | None:
        return self.entries.get(name)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def exe_service() -> ServiceConfig:
    return ServiceConfig(
        name="web",
        path="/opt/web/server.exe",
        service_type=ServiceType.EXECUTABLE,
    )


@pytest.fixture
def util_service() -> ServiceConfig:
    return ServiceConfig(
        name="tool",
        path="/srv/tool.py",
        service_type=ServiceType.UTIL,
        interpreter="python",
    )


@pytest.fixture
def processes() -> FakeProcessBackend:
    return FakeProcessBackend()


@pytest.fixture
def autostart() -> FakeAutoStartBackend:
    return FakeAutoStartBackend()


@pytest.fixture
def records(tmp_path: Path) -> LaunchRecords:
    return LaunchRecords(tmp_path / "run")


@pytest.fixture
def manager(
    processes: FakeProcessBackend,
    autostart: FakeAutoStartBackend,
    records: LaunchRecords,
) -> ServiceManager:
    return ServiceManager(processes=processes, autostart=autostart, records=records)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def services_yaml_content() -> str:
    return """\
- name: web
  path: /opt/web/server.exe
  type: Executable
- name: tool
  path: /srv/tool.py
  type: Util
"""


@pytest.fixture
def config_file(tmp_path: Path, services_yaml_content: str) -> Path:
    """Create a temporary services file."""
    config_path = tmp_path / "services.yaml"
    config_path.write_text(services_yaml_content)
    return config_path


@pytest.fixture(autouse=True)
def svc_home(tmp_path: Path, monkeypatch) -> Path:
    """Keep launch records and config lookups out of the real home."""
    home = tmp_path / "svc-home"
    monkeypatch.setenv("SVC_HOME", str(home))
    monkeypatch.delenv("SVC_CONFIG", raising=False)
    return home


# =============================================================================
# CLI Test Helpers
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


@pytest.fixture
def cli_manager(monkeypatch, manager: ServiceManager) -> ServiceManager:
    """Make CLI commands use the manager wired to fake backends."""
    monkeypatch.setattr("svc.service.ServiceManager", lambda *a, **kw: manager)
    return manager

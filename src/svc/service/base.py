"""Abstract bases for process and auto-start backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ServiceStatus:
    """Point-in-time status snapshot of a service.

    The two facts are gathered by separate queries, so the snapshot is only
    true at the instant both completed.
    """

    pids: frozenset[int] = frozenset()
    enabled: bool = False
    tracked: bool = False  # pids came from a launch record

    @property
    def running(self) -> bool:
        return bool(self.pids)


@dataclass(frozen=True)
class LaunchResult:
    """Outcome of a successful run."""

    name: str
    path: str
    work_dir: Path
    pid: int | None = None  # Executable: spawned pid
    exit_status: int | None = None  # Util: exit status of the finished run


@dataclass(frozen=True)
class KillResult:
    """Outcome of terminating one process."""

    pid: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProcessBackend(ABC):
    """Abstract interface to the OS process table.

    Backends handle OS-specific process discovery and termination:
    - PowerShell + taskkill on Windows
    - pgrep + signals on POSIX
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name (e.g., 'powershell', 'pgrep')."""
        ...

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if this backend is available on the current system."""
        ...

    @abstractmethod
    async def enumerate(self, path_fragment: str) -> set[int]:
        """Find live processes whose path contains a fragment.

        Returns:
            Set of matching process identifiers.

        Raises:
            SvcIOError: If the process table cannot be queried.
        """
        ...

    @abstractmethod
    async def terminate(self, pid: int) -> None:
        """Terminate a process.

        Raises:
            SvcIOError: If the process could not be terminated.
        """
        ...


class AutoStartBackend(ABC):
    """Abstract interface to the per-user auto-start store."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def supports_autostart(self) -> bool:
        """Check if this backend can add and remove entries."""
        ...

    @abstractmethod
    async def query(self, name: str) -> bool:
        """Check whether an auto-start entry exists for a name."""
        ...

    @abstractmethod
    async def add(self, name: str, path: str) -> None:
        """Register `path` to launch at login under `name`."""
        ...

    @abstractmethod
    async def remove(self, name: str) -> None:
        """Remove the auto-start entry for `name`."""
        ...

    async def command(self, name: str) -> str | None:
        """Get the registered command for an entry, if the store can tell."""
        return None

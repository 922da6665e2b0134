"""High-level service lifecycle interface."""

import asyncio
import logging
from pathlib import Path

from svc.config.models import ServiceConfig
from svc.config.paths import get_run_path
from svc.errors import (
    AlreadyDisabledError,
    AlreadyEnabledError,
    AlreadyRunningError,
    NotRunningError,
    SvcError,
    SvcIOError,
    TerminationError,
)
from svc.service.backends import detect_backends
from svc.service.base import (
    AutoStartBackend,
    KillResult,
    LaunchResult,
    ProcessBackend,
    ServiceStatus,
)
from svc.service.launcher import run_to_completion, spawn_detached
from svc.service.oracle import StatusOracle
from svc.service.pid import LaunchRecords

logger = logging.getLogger(__name__)


def resolve_work_dir(service: ServiceConfig, override: str | None = None) -> Path:
    """Resolve the directory a service is launched in.

    Resolution order:
    1. Explicit override (e.g. `svc run NAME at DIR`)
    2. The service's `work_at`
    3. The parent directory of the service path
    4. The current directory
    """
    if override:
        return Path(override)
    if service.work_at:
        return Path(service.work_at)
    # Bare file names resolve to "."
    return Path(service.path).parent


def resolve_launch_path(service: ServiceConfig) -> str:
    """Get the path to launch, anchored to the current directory.

    Relative paths with a directory part are made absolute before the
    working directory changes. Bare names are left for PATH lookup.
    """
    path = Path(service.path)
    if path.root or path.parent == Path("."):
        return service.path
    return str(path.resolve())


class ServiceManager:
    """Run, kill, enable and disable configured services.

    Every command checks the current status first and raises a
    PreconditionError without side effects when it does not apply. The check
    and the action are not atomic; the OS state may change in between.

    Example:
        manager = ServiceManager()
        await manager.run(service)
        status = await manager.status(service)
    """

    def __init__(
        self,
        processes: ProcessBackend | None = None,
        autostart: AutoStartBackend | None = None,
        records: LaunchRecords | None = None,
    ):
        """Initialize the service manager.

        Args:
            processes: Process backend, or None for auto-detect.
            autostart: Auto-start backend, or None for auto-detect.
            records: Launch records, or None for $SVC_HOME/run.
        """
        if processes is None or autostart is None:
            detected_processes, detected_autostart = detect_backends()
            processes = processes or detected_processes
            autostart = autostart or detected_autostart
        self._processes = processes
        self._autostart = autostart
        self._records = (
            records if records is not None else LaunchRecords(get_run_path())
        )
        self._oracle = StatusOracle(processes, autostart, self._records)

    @property
    def backend_name(self) -> str:
        """Get the names of the active backends."""
        return f"{self._processes.name}/{self._autostart.name}"

    @property
    def supports_autostart(self) -> bool:
        return self._autostart.supports_autostart

    async def status(self, service: ServiceConfig) -> ServiceStatus:
        return await self._oracle.get_status(service)

    async def autostart_command(self, service: ServiceConfig) -> str | None:
        """Get the registered auto-start command for a service, if known."""
        return await self._autostart.command(service.name)

    async def run(
        self, service: ServiceConfig, work_at: str | None = None
    ) -> LaunchResult:
        """Start a service.

        Executables are spawned detached and recorded by PID. Utilities run
        in the foreground and must exit with status 0.

        Args:
            service: Service to start.
            work_at: One-shot working directory override.

        Raises:
            AlreadyRunningError: If the service has live processes.
            SvcIOError: If the launch fails or a utility exits non-zero.
        """
        status = await self.status(service)
        if status.running:
            raise AlreadyRunningError(service.name, status.pids)

        work_dir = resolve_work_dir(service, work_at)
        target = resolve_launch_path(service)

        if not service.is_util:
            pid = spawn_detached([target], work_dir)
            self._records.write(service.name, pid)
            logger.info("Started %s (PID %d) in %s", service.name, pid, work_dir)
            return LaunchResult(service.name, service.path, work_dir, pid=pid)

        exit_status = await run_to_completion([service.interpreter, target], work_dir)
        if exit_status != 0:
            raise SvcIOError(
                f"Utility {service.path} failed with exit status {exit_status}",
                path=service.path,
                exit_status=exit_status,
            )
        logger.info("Utility %s finished", service.name)
        return LaunchResult(
            service.name, service.path, work_dir, exit_status=exit_status
        )

    async def kill(self, service: ServiceConfig) -> list[KillResult]:
        """Terminate every live process of a service concurrently.

        All PIDs are attempted even if some fail.

        Returns:
            Per-PID results in completion order.

        Raises:
            NotRunningError: If the service has no live processes.
            TerminationError: If any PID could not be terminated.
        """
        status = await self.status(service)
        if not status.running:
            raise NotRunningError(service.name)

        results: list[KillResult] = []
        tasks = [
            asyncio.create_task(self._terminate(service, pid)) for pid in status.pids
        ]
        for finished in asyncio.as_completed(tasks):
            results.append(await finished)

        if not all(result.ok for result in results):
            # A tracked PID that survived keeps its record
            raise TerminationError(service.name, results)

        self._records.remove(service.name)
        return results

    async def _terminate(self, service: ServiceConfig, pid: int) -> KillResult:
        try:
            await self._processes.terminate(pid)
        except SvcError as e:
            logger.warning("Failed to kill %s PID %d: %s", service.name, pid, e)
            return KillResult(pid=pid, error=str(e))
        logger.info("Killed %s PID %d", service.name, pid)
        return KillResult(pid=pid)

    async def enable(self, service: ServiceConfig) -> None:
        """Register a service to start at login.

        Raises:
            AlreadyEnabledError: If an auto-start entry already exists.
            SvcIOError: If the entry cannot be written.
        """
        if (await self.status(service)).enabled:
            raise AlreadyEnabledError(service.name)
        await self._autostart.add(service.name, service.path)

    async def disable(self, service: ServiceConfig) -> None:
        """Remove a service's auto-start entry.

        Raises:
            AlreadyDisabledError: If no auto-start entry exists.
            SvcIOError: If the entry cannot be removed.
        """
        if not (await self.status(service)).enabled:
            raise AlreadyDisabledError(service.name)
        await self._autostart.remove(service.name)

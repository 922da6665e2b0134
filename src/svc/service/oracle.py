"""Point-in-time status queries for services."""

import logging

from svc.config.models import ServiceConfig, ServiceType
from svc.service.base import AutoStartBackend, ProcessBackend, ServiceStatus
from svc.service.pid import LaunchRecords

logger = logging.getLogger(__name__)


class StatusOracle:
    """Combine process discovery and auto-start lookup into one snapshot.

    Executables that svc started itself are identified by the PID in their
    launch record. Anything else, including services started before the
    record existed, is found by matching the service path against the
    process table.
    """

    def __init__(
        self,
        processes: ProcessBackend,
        autostart: AutoStartBackend,
        records: LaunchRecords | None = None,
    ):
        self._processes = processes
        self._autostart = autostart
        self._records = records

    async def live_pids(self, service: ServiceConfig) -> tuple[frozenset[int], bool]:
        """Get the live PIDs of a service.

        Returns:
            Tuple of (pids, tracked) where tracked is True when the PIDs
            came from a launch record.
        """
        if self._records is not None and service.service_type is ServiceType.EXECUTABLE:
            record = self._records.read(service.name)
            if record is not None:
                if record.alive:
                    return frozenset({record.pid}), True
                logger.debug(
                    "Removing stale launch record for %s (PID %d)",
                    service.name,
                    record.pid,
                )
                self._records.remove(service.name)

        pids = await self._processes.enumerate(service.path)
        return frozenset(pids), False

    async def get_status(self, service: ServiceConfig) -> ServiceStatus:
        """Get the current status of a service.

        Raises:
            SvcIOError: If either underlying query cannot be executed.
            SvcDecodeError: If query output is not valid text.
        """
        pids, tracked = await self.live_pids(service)
        enabled = await self._autostart.query(service.name)
        return ServiceStatus(pids=pids, enabled=enabled, tracked=tracked)

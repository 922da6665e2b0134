"""Service lifecycle management for svc.

Provides OS-native process and auto-start management:
- PowerShell, taskkill and the HKCU Run key on Windows
- pgrep and signals on POSIX (no auto-start store)

Example:
    from svc.service import ServiceManager

    manager = ServiceManager()
    await manager.run(service)
    status = await manager.status(service)
"""

from svc.service.base import (
    AutoStartBackend,
    KillResult,
    LaunchResult,
    ProcessBackend,
    ServiceStatus,
)
from svc.service.manager import (
    ServiceManager,
    resolve_launch_path,
    resolve_work_dir,
)
from svc.service.oracle import StatusOracle
from svc.service.pid import LaunchRecords, parse_pid_lines

__all__ = [
    "AutoStartBackend",
    "KillResult",
    "LaunchRecords",
    "LaunchResult",
    "ProcessBackend",
    "ServiceManager",
    "ServiceStatus",
    "StatusOracle",
    "parse_pid_lines",
    "resolve_launch_path",
    "resolve_work_dir",
]

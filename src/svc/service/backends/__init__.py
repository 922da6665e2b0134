"""Backend detection and factory."""

import importlib
import sys

from svc.errors import SvcIOError
from svc.service.base import AutoStartBackend, ProcessBackend

_BACKENDS = {
    "windows": (
        "svc.service.backends.windows.PowerShellProcessBackend",
        "svc.service.backends.windows.RegistryAutoStartBackend",
    ),
    "posix": (
        "svc.service.backends.posix.PgrepProcessBackend",
        "svc.service.backends.generic.GenericAutoStartBackend",
    ),
}


def _load(dotted: str):
    # Import dynamically to avoid loading unnecessary backends
    module_path, class_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)()


def detect_backends() -> tuple[ProcessBackend, AutoStartBackend]:
    """Detect the process and auto-start backends for the current system.

    Returns:
        Windows backends on win32, POSIX backends everywhere else.

    Raises:
        SvcIOError: If the process tool the platform needs is missing.
    """
    processes, autostart = get_backends(
        "windows" if sys.platform == "win32" else "posix"
    )
    if not processes.is_available:
        raise SvcIOError(
            f"{processes.name} is required to manage services but was not found",
            path=processes.name,
        )
    return processes, autostart


def get_backends(
    name: str | None = None,
) -> tuple[ProcessBackend, AutoStartBackend]:
    """Get a specific backend pair by name, or auto-detect.

    Args:
        name: Backend family ('windows', 'posix') or None for auto.

    Raises:
        ValueError: If the named backend doesn't exist.
    """
    if name is None:
        return detect_backends()

    if name not in _BACKENDS:
        raise ValueError(f"Unknown backend: {name}. Available: {list(_BACKENDS)}")

    process_path, autostart_path = _BACKENDS[name]
    return _load(process_path), _load(autostart_path)


__all__ = ["detect_backends", "get_backends"]

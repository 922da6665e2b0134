"""Error taxonomy for service lifecycle operations.

Precondition errors are raised before any side effect happens and are always
safe to report and ignore. Everything else means an external command or its
output could not be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svc.service.base import KillResult


class SvcError(Exception):
    """Base error for svc."""


class PreconditionError(SvcError):
    """A lifecycle command was rejected by its status check."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class AlreadyRunningError(PreconditionError):
    """Service has live processes."""

    def __init__(self, name: str, pids: frozenset[int] | set[int] = frozenset()):
        pid_list = ", ".join(str(pid) for pid in sorted(pids))
        suffix = f" (PID {pid_list})" if pid_list else ""
        super().__init__(name, f"Service {name} is already running{suffix}.")
        self.pids = frozenset(pids)


class NotRunningError(PreconditionError):
    def __init__(self, name: str):
        super().__init__(name, f"Service {name} is not running.")


class AlreadyEnabledError(PreconditionError):
    def __init__(self, name: str):
        super().__init__(name, f"Service {name} is already enabled.")


class AlreadyDisabledError(PreconditionError):
    def __init__(self, name: str):
        super().__init__(name, f"Service {name} is already disabled.")


class SvcIOError(SvcError):
    """An external command could not be executed or reported failure.

    Attributes:
        path: The program or service path involved, when known.
        exit_status: Exit status of the failed command, when it ran.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        exit_status: int | None = None,
    ):
        super().__init__(message)
        self.path = path
        self.exit_status = exit_status


class AutoStartUnsupportedError(SvcIOError):
    """The host has no auto-start store this tool knows how to drive."""


class TerminationError(SvcIOError):
    """One or more processes of a service could not be terminated."""

    def __init__(self, name: str, results: list[KillResult]):
        failed = [r for r in results if not r.ok]
        super().__init__(
            f"Failed to kill {len(failed)} of {len(results)} processes "
            f"of service {name}."
        )
        self.name = name
        self.results = results


class SvcDecodeError(SvcError):
    """Configuration or command output text could not be interpreted."""


class SvcLookupError(SvcError):
    """A value expected in command output was missing or unparsable."""

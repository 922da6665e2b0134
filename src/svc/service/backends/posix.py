"""POSIX process backend using pgrep and signals."""

import asyncio
import logging
import os
import re
import shutil
import signal

from svc.errors import SvcIOError
from svc.service.base import ProcessBackend
from svc.service.launcher import run_command
from svc.service.pid import is_process_alive, parse_pid_lines, send_signal

logger = logging.getLogger(__name__)

# pgrep exits with 1 when nothing matched
PGREP_NO_MATCH = 1

_ERE_SPECIAL = re.compile(r"([.^$*+?()[\]{}|\\])")

TERM_TIMEOUT_SECONDS = 3.0
POLL_INTERVAL_SECONDS = 0.1


def ere_escape(text: str) -> str:
    """Escape text for use as a literal POSIX extended regex."""
    return _ERE_SPECIAL.sub(r"\\\1", text)


class PgrepProcessBackend(ProcessBackend):
    """Process table access through `pgrep -f`.

    Matches against the full command line, so interpreted scripts are found
    by their script path as well.
    """

    @property
    def name(self) -> str:
        return "pgrep"

    @property
    def is_available(self) -> bool:
        return shutil.which("pgrep") is not None

    async def enumerate(self, path_fragment: str) -> set[int]:
        result = await run_command("pgrep", "-f", "--", ere_escape(path_fragment))
        if result.returncode == PGREP_NO_MATCH:
            return set()
        if result.returncode != 0:
            raise SvcIOError(
                f"pgrep failed: {result.stderr.strip()}",
                path=path_fragment,
                exit_status=result.returncode,
            )
        return parse_pid_lines(result.stdout) - {os.getpid()}

    async def terminate(self, pid: int) -> None:
        """Send SIGTERM, then SIGKILL if the process outlives the timeout."""
        if not send_signal(pid, signal.SIGTERM):
            if not is_process_alive(pid):
                return  # Already gone
            raise SvcIOError(f"Cannot signal PID {pid}")

        for _ in range(int(TERM_TIMEOUT_SECONDS / POLL_INTERVAL_SECONDS)):
            await asyncio.sleep(POLL_INTERVAL_SECONDS)
            if not is_process_alive(pid):
                return

        logger.warning("PID %d ignored SIGTERM, sending SIGKILL", pid)
        send_signal(pid, signal.SIGKILL)
        await asyncio.sleep(POLL_INTERVAL_SECONDS)
        if is_process_alive(pid):
            raise SvcIOError(f"PID {pid} is still alive after SIGKILL")

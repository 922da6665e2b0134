"""Launch records and process utilities."""

import logging
import os
import re
import signal
import time
from dataclasses import dataclass
from pathlib import Path

import psutil

logger = logging.getLogger(__name__)

# Slack between a process starting and its launch record being written
START_TIME_TOLERANCE_SECONDS = 2.0


@dataclass
class ProcessInfo:
    """Process information from a launch record."""

    pid: int
    start_time: float
    alive: bool


def parse_pid_lines(output: str) -> set[int]:
    """Parse one process identifier per line.

    Lines that are not unsigned integers are dropped.
    """
    pids: set[int] = set()
    for line in output.splitlines():
        value = line.strip()
        if value.isascii() and value.isdigit():
            pids.add(int(value))
    return pids


def write_pid_file(pid_path: Path, pid: int | None = None) -> None:
    """Write a PID file.

    Args:
        pid_path: Path to the PID file.
        pid: Process ID to write. Defaults to current process.
    """
    pid_path.parent.mkdir(parents=True, exist_ok=True)
    pid_path.write_text(f"{pid or os.getpid()}\n{time.time()}\n")


def read_pid_file(pid_path: Path) -> ProcessInfo | None:
    """Read PID file and check if process is alive.

    A record whose PID now belongs to a process started after the record
    was written is reported as not alive.

    Returns:
        ProcessInfo if file exists and is well formed, None otherwise.
    """
    if not pid_path.exists():
        return None

    try:
        content = pid_path.read_text().strip().split("\n")
        pid = int(content[0])
        start_time = float(content[1]) if len(content) > 1 else 0.0
    except (ValueError, IndexError, OSError):
        return None
    alive = is_process_alive(pid) and not started_after(pid, start_time)
    return ProcessInfo(pid=pid, start_time=start_time, alive=alive)


def remove_pid_file(pid_path: Path) -> None:
    pid_path.unlink(missing_ok=True)


def is_process_alive(pid: int) -> bool:
    """Check if a process with given PID is alive."""
    if pid <= 0:
        return False
    try:
        return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
    except psutil.Error:
        return False


def started_after(pid: int, timestamp: float) -> bool:
    """Check if a process was created after `timestamp` (PID reuse)."""
    try:
        create_time = psutil.Process(pid).create_time()
    except psutil.Error:
        return False
    return create_time > timestamp + START_TIME_TOLERANCE_SECONDS


def send_signal(pid: int, sig: signal.Signals) -> bool:
    """Send signal to process.

    Returns:
        True if signal was sent successfully.
    """
    try:
        os.kill(pid, sig)
        return True
    except OSError:
        return False


class LaunchRecords:
    """PID files for processes svc launched itself, one per service."""

    def __init__(self, run_dir: Path):
        self._run_dir = run_dir

    def path_for(self, name: str) -> Path:
        slug = re.sub(r"[^A-Za-z0-9._-]", "_", name)
        return self._run_dir / f"{slug}.pid"

    def read(self, name: str) -> ProcessInfo | None:
        return read_pid_file(self.path_for(name))

    def write(self, name: str, pid: int) -> None:
        write_pid_file(self.path_for(name), pid)
        logger.debug("Recorded PID %d for %s", pid, name)

    def remove(self, name: str) -> None:
        remove_pid_file(self.path_for(name))

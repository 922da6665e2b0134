"""Subprocess helpers for querying the OS and launching services."""

import asyncio
import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from svc.errors import SvcDecodeError, SvcIOError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Captured result of an external command."""

    returncode: int
    stdout: str
    stderr: str


async def run_command(*args: str) -> CommandResult:
    """Run an external command and capture its output.

    Raises:
        SvcIOError: If the command cannot be executed.
        SvcDecodeError: If its output is not valid UTF-8.
    """
    logger.debug("Running %s", subprocess.list2cmdline(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise SvcIOError(f"Cannot execute {args[0]}: {e}", path=args[0]) from e

    stdout, stderr = await proc.communicate()
    try:
        text = stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SvcDecodeError(f"Output of {args[0]} is not valid UTF-8") from e

    return CommandResult(
        returncode=proc.returncode or 0,
        stdout=text,
        stderr=stderr.decode("utf-8", errors="replace"),
    )


def _detach_kwargs() -> dict:
    if sys.platform == "win32":
        return {
            "creationflags": subprocess.DETACHED_PROCESS
            | subprocess.CREATE_NEW_PROCESS_GROUP
        }
    return {"start_new_session": True}


def spawn_detached(args: list[str], cwd: Path) -> int:
    """Start a process in the background without waiting for it.

    Returns:
        PID of the spawned process.

    Raises:
        SvcIOError: If the OS refuses the launch.
    """
    logger.debug("Spawning %s in %s", subprocess.list2cmdline(args), cwd)
    try:
        proc = subprocess.Popen(
            args,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            **_detach_kwargs(),
        )
    except OSError as e:
        raise SvcIOError(f"Failed to start {args[0]}: {e}", path=args[0]) from e
    return proc.pid


async def run_to_completion(args: list[str], cwd: Path) -> int:
    """Run a process with inherited stdio and wait for it to exit.

    Returns:
        The exit status.

    Raises:
        SvcIOError: If the process cannot be started.
    """
    logger.debug("Running %s in %s", subprocess.list2cmdline(args), cwd)
    try:
        proc = await asyncio.create_subprocess_exec(*args, cwd=cwd)
    except OSError as e:
        raise SvcIOError(f"Failed to start {args[0]}: {e}", path=args[0]) from e
    return await proc.wait()

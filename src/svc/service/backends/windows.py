"""Windows backends: WMI process queries, taskkill and the HKCU Run key."""

import logging
import re
import shutil

from svc.errors import SvcIOError, SvcLookupError
from svc.service.base import AutoStartBackend, ProcessBackend
from svc.service.launcher import CommandResult, run_command
from svc.service.pid import parse_pid_lines

logger = logging.getLogger(__name__)

RUN_KEY = r"HKCU\SOFTWARE\Microsoft\Windows\CurrentVersion\Run"

# reg.exe exits with 1 when the value does not exist
REG_NOT_FOUND = 1


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_process_query(path_fragment: str) -> str:
    """Build the PowerShell pipeline listing PIDs whose executable matches."""
    return (
        "[Console]::OutputEncoding = [Text.Encoding]::UTF8; "
        "Get-CimInstance Win32_Process | Where-Object { $_.ExecutablePath -and "
        f"$_.ExecutablePath.IndexOf({_ps_quote(path_fragment)}, "
        "[StringComparison]::OrdinalIgnoreCase) -ge 0 } | "
        "Select-Object -ExpandProperty ProcessId"
    )


class PowerShellProcessBackend(ProcessBackend):
    """Process table access through PowerShell and taskkill."""

    @property
    def name(self) -> str:
        return "powershell"

    @property
    def is_available(self) -> bool:
        return shutil.which("powershell") is not None

    async def enumerate(self, path_fragment: str) -> set[int]:
        result = await run_command(
            "powershell",
            "-NoProfile",
            "-NonInteractive",
            "-Command",
            build_process_query(path_fragment),
        )
        if result.returncode != 0:
            raise SvcIOError(
                f"Process query failed: {result.stderr.strip()}",
                path=path_fragment,
                exit_status=result.returncode,
            )
        return parse_pid_lines(result.stdout)

    async def terminate(self, pid: int) -> None:
        result = await run_command("taskkill", "/F", "/PID", str(pid))
        if result.returncode != 0:
            raise SvcIOError(
                f"taskkill failed for PID {pid}: {result.stderr.strip()}",
                exit_status=result.returncode,
            )


class RegistryAutoStartBackend(AutoStartBackend):
    """Per-user auto-start entries under the HKCU Run key."""

    @property
    def name(self) -> str:
        return "registry"

    @property
    def supports_autostart(self) -> bool:
        return True

    async def _reg_query(self, name: str) -> CommandResult:
        result = await run_command("reg", "query", RUN_KEY, "/v", name)
        if result.returncode not in (0, REG_NOT_FOUND):
            raise SvcIOError(
                f"Registry query for {name} failed: {result.stderr.strip()}",
                exit_status=result.returncode,
            )
        return result

    async def query(self, name: str) -> bool:
        result = await self._reg_query(name)
        return result.returncode == 0

    async def add(self, name: str, path: str) -> None:
        data = f'"{path}"' if " " in path and not path.startswith('"') else path
        result = await run_command(
            "reg", "add", RUN_KEY, "/v", name, "/t", "REG_SZ", "/d", data, "/f"
        )
        if result.returncode != 0:
            raise SvcIOError(
                f"Cannot add auto-start entry {name}: {result.stderr.strip()}",
                path=path,
                exit_status=result.returncode,
            )
        logger.info("Added auto-start entry %s -> %s", name, data)

    async def remove(self, name: str) -> None:
        result = await run_command("reg", "delete", RUN_KEY, "/v", name, "/f")
        if result.returncode != 0:
            raise SvcIOError(
                f"Cannot remove auto-start entry {name}: {result.stderr.strip()}",
                exit_status=result.returncode,
            )
        logger.info("Removed auto-start entry %s", name)

    async def command(self, name: str) -> str | None:
        result = await self._reg_query(name)
        if result.returncode != 0:
            return None
        return parse_reg_value(result.stdout, name)


_REG_VALUE_LINE = re.compile(r"^\s*(?P<name>.+?)\s{4}REG_\w+\s{4}(?P<value>.*)$")


def parse_reg_value(output: str, name: str) -> str:
    """Extract a value from `reg query /v` output.

    Raises:
        SvcLookupError: If the output has no value line for `name`.
    """
    for line in output.splitlines():
        match = _REG_VALUE_LINE.match(line)
        if match and match.group("name").lower() == name.lower():
            return match.group("value").strip()
    raise SvcLookupError(f"No value for {name} in registry query output")

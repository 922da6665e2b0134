"""CLI command modules."""

from svc.cli.commands import config, lifecycle, startup, status

__all__ = [
    "config",
    "lifecycle",
    "startup",
    "status",
]

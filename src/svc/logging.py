"""Centralized logging configuration for svc.

This module provides a single point of truth for logging setup.
The CLI calls configure_logging() before running any command.

Logging Levels:
- DEBUG: External command lines, config resolution, launch records
- INFO: Launches, kills and auto-start changes
- WARNING: Recoverable issues (a PID that ignored SIGTERM, a failed kill)
- ERROR: Failures that abort a command

Logs go to stderr only; nothing is written to disk.
"""

import logging
import os

ENV_VAR = "SVC_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - svc.service.backends.windows -> service
    - svc.config.loader -> config
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "svc":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None) -> str:
    """Resolve a log level name, falling back to SVC_LOG_LEVEL or WARNING."""
    if level is None:
        level = os.environ.get(ENV_VAR, DEFAULT_LEVEL)
    level = level.upper()
    if level not in LEVELS:
        level = DEFAULT_LEVEL
    return level


def configure_logging(level: str | None = None, use_rich: bool = True) -> None:
    """Configure logging for svc.

    Call this once at application startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses SVC_LOG_LEVEL env var or WARNING.
        use_rich: Use Rich handler for colorful output.
    """
    log_level = getattr(logging, resolve_level(level))

    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(level=log_level, handlers=[handler], force=True)
    # asyncio logs subprocess transport details at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)

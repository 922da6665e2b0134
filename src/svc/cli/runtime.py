"""Shared runtime helpers for CLI commands."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import typer

from svc.cli.console import error
from svc.errors import SvcError

if TYPE_CHECKING:
    from svc.config import ServiceConfig, SvcConfig
    from svc.service import ServiceManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class CliState:
    """Options shared by every command, set by the app callback."""

    config_path: Path | None = None


def load_services(ctx: typer.Context) -> SvcConfig:
    """Load the service configuration, exiting with status 1 on failure."""
    from svc.config import load_config

    state: CliState = ctx.obj or CliState()
    try:
        return load_config(state.config_path)
    except FileNotFoundError as e:
        error(str(e))
        raise typer.Exit(1) from None
    except SvcError as e:
        error(str(e))
        raise typer.Exit(1) from None


def get_service(ctx: typer.Context, name: str) -> ServiceConfig:
    """Look up a configured service, exiting with status 1 if unknown."""
    config = load_services(ctx)
    service = config.get_service(name)
    if service is None:
        error(f"Service {name} not found in the configuration.")
        raise typer.Exit(1)
    return service


def create_manager() -> ServiceManager:
    """Create a manager for this host, exiting with status 1 if unsupported."""
    from svc.service import ServiceManager

    try:
        manager = ServiceManager()
    except SvcError as e:
        error(str(e))
        raise typer.Exit(1) from None
    logger.debug("Using %s backends", manager.backend_name)
    return manager


def run_action(coro: Coroutine[Any, Any, T]) -> T:
    """Run a manager coroutine, turning svc errors into exit status 1."""
    try:
        return asyncio.run(coro)
    except SvcError as e:
        error(str(e))
        raise typer.Exit(1) from None

"""Commands that report on configured services."""

import logging
from typing import Annotated

import typer
from rich.markup import escape

from svc.cli.console import console, create_table, dim
from svc.cli.runtime import create_manager, get_service, load_services, run_action
from svc.config import ServiceConfig, ServiceType
from svc.errors import SvcLookupError
from svc.service import ServiceManager, ServiceStatus

logger = logging.getLogger(__name__)


async def _snapshot(
    manager: ServiceManager, service: ServiceConfig
) -> tuple[ServiceStatus, str | None]:
    status = await manager.status(service)
    command = None
    if status.enabled and service.service_type is ServiceType.EXECUTABLE:
        try:
            command = await manager.autostart_command(service)
        except SvcLookupError as e:
            logger.warning("%s", e)
    return status, command


def render_status(
    service: ServiceConfig,
    status: ServiceStatus,
    command: str | None = None,
    autostart_supported: bool = True,
) -> None:
    """Print one status snapshot as a table."""
    table = create_table(
        f"Service {escape(service.name)}",
        [
            ("Property", "cyan"),
            ("Value", ""),
        ],
    )
    table.add_row("Name", escape(service.name))
    table.add_row("Type", service.service_type.label)
    table.add_row("Path", escape(service.path))
    if service.work_at:
        table.add_row("Work dir", escape(service.work_at))

    if service.service_type is ServiceType.EXECUTABLE:
        if status.running:
            pid_str = ", ".join(str(pid) for pid in sorted(status.pids))
            table.add_row("PID", f"[green]{pid_str}[/green]")
            table.add_row(
                "PID source", "launch record" if status.tracked else "path match"
            )
        else:
            table.add_row("PID", "[yellow]not running[/yellow]")
        if not autostart_supported:
            startup = "[dim]not supported on this system[/dim]"
        elif status.enabled:
            startup = "[green]enabled[/green]"
        else:
            startup = "[yellow]disabled[/yellow]"
        table.add_row("Start-up", startup)
        if command:
            table.add_row("Start-up command", escape(command))
    else:
        table.add_row("Interpreter", escape(service.interpreter))

    console.print(table)


def register(app: typer.Typer) -> None:
    """Register status and list commands."""

    @app.command("status")
    def status(
        ctx: typer.Context,
        name: Annotated[str, typer.Argument(help="Service name")],
    ) -> None:
        """Show a service's processes and start-up state."""
        service = get_service(ctx, name)
        manager = create_manager()
        snapshot, command = run_action(_snapshot(manager, service))
        render_status(service, snapshot, command, manager.supports_autostart)

    @app.command("list")
    def list_services(ctx: typer.Context) -> None:
        """List configured services."""
        config = load_services(ctx)
        if not config.services:
            dim("No services configured")
            return

        table = create_table(
            "Services",
            [
                ("Name", "cyan"),
                ("Type", ""),
                ("Path", {"overflow": "fold"}),
            ],
        )
        for service in config.services:
            table.add_row(
                escape(service.name),
                service.service_type.label,
                escape(service.path),
            )
        console.print(table)

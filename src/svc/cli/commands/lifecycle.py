"""Commands that start and stop services."""

from typing import Annotated

import typer
from rich.markup import escape

from svc.cli.console import console, error, success
from svc.cli.runtime import create_manager, get_service, run_action
from svc.config import ServiceConfig
from svc.errors import TerminationError
from svc.service import KillResult, ServiceManager

RUN_USAGE = "Usage: svc run <service_name> [at <work_dir>]"


async def _kill(
    manager: ServiceManager, service: ServiceConfig
) -> tuple[list[KillResult], TerminationError | None]:
    try:
        return await manager.kill(service), None
    except TerminationError as e:
        return e.results, e


def register(app: typer.Typer) -> None:
    """Register run and kill commands."""

    @app.command("run")
    def run(
        ctx: typer.Context,
        name: Annotated[str, typer.Argument(help="Service name")],
        at: Annotated[
            str | None,
            typer.Argument(help="Literal 'at' to override the working directory"),
        ] = None,
        work_dir: Annotated[
            str | None,
            typer.Argument(help="Working directory for this run"),
        ] = None,
    ) -> None:
        """Start a service."""
        if at is not None and (at != "at" or not work_dir):
            error(RUN_USAGE)
            raise typer.Exit(1)

        service = get_service(ctx, name)
        manager = create_manager()
        result = run_action(manager.run(service, work_at=work_dir))

        if result.pid is not None:
            success(
                f"Executable {service.path} started in the background "
                f"(PID {result.pid})."
            )
        else:
            success(f"Utility {service.path} finished.")

    @app.command("kill")
    def kill(
        ctx: typer.Context,
        name: Annotated[str, typer.Argument(help="Service name")],
    ) -> None:
        """Terminate every process of a service."""
        service = get_service(ctx, name)
        manager = create_manager()
        results, failure = run_action(_kill(manager, service))

        for result in results:
            if result.ok:
                console.print(
                    f"Service [cyan]{escape(service.name)}[/cyan] with PID "
                    f"[green]{result.pid}[/green] killed."
                )
            else:
                error(f"PID {result.pid}: {result.error}")

        if failure is not None:
            error(str(failure))
            raise typer.Exit(1)

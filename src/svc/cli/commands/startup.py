"""Commands that register services to start at login."""

from typing import Annotated

import typer

from svc.cli.console import success
from svc.cli.runtime import create_manager, get_service, run_action


def register(app: typer.Typer) -> None:
    """Register enable and disable commands."""

    @app.command("enable")
    def enable(
        ctx: typer.Context,
        name: Annotated[str, typer.Argument(help="Service name")],
    ) -> None:
        """Start a service automatically at login."""
        service = get_service(ctx, name)
        run_action(create_manager().enable(service))
        success(f"Service {service.name} enabled.")

    @app.command("disable")
    def disable(
        ctx: typer.Context,
        name: Annotated[str, typer.Argument(help="Service name")],
    ) -> None:
        """Stop starting a service at login."""
        service = get_service(ctx, name)
        run_action(create_manager().disable(service))
        success(f"Service {service.name} disabled.")

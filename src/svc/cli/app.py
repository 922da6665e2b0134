"""Main CLI application."""

from pathlib import Path
from typing import Annotated

import typer

from svc import __version__
from svc.cli.commands import config, lifecycle, startup, status
from svc.cli.runtime import CliState

app = typer.Typer(
    name="svc",
    help="svc - start, stop and register local services",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"svc {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to services file (default: search ./, $SVC_HOME)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log external commands and lifecycle events",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Manage configured executables and utility scripts."""
    from svc.logging import configure_logging

    configure_logging("DEBUG" if verbose else None)
    ctx.obj = CliState(config_path=config_path)


lifecycle.register(app)
startup.register(app)
status.register(app)
config.register(app)


if __name__ == "__main__":
    app()

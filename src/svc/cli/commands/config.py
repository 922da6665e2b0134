"""Configuration management commands."""

from typing import Annotated

import typer

from svc.cli.console import console, error, success
from svc.cli.runtime import CliState


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        ctx: typer.Context,
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, validate"),
        ] = None,
    ) -> None:
        """Show or validate the services file."""
        if action is None:
            typer.echo(ctx.get_help())
            raise typer.Exit(0)

        from rich.markup import escape
        from rich.syntax import Syntax

        from svc.config import find_config_path, load_config
        from svc.config.models import DEFAULT_INTERPRETER
        from svc.errors import SvcError

        state: CliState = ctx.obj or CliState()
        try:
            config_path = find_config_path(state.config_path)
        except FileNotFoundError as e:
            error(str(e))
            raise typer.Exit(1) from None

        if action == "show":
            content = config_path.read_text(encoding="utf-8")
            lexer = "toml" if config_path.suffix == ".toml" else "yaml"
            console.print(f"[bold]Config file: {escape(str(config_path))}[/bold]\n")
            console.print(Syntax(content, lexer, line_numbers=True))

        elif action == "validate":
            try:
                config_obj = load_config(config_path)
            except SvcError as e:
                error(str(e))
                raise typer.Exit(1) from None

            success(
                f"Config valid: {len(config_obj.services)} services in {config_path}"
            )
            if config_obj.services:
                names = ", ".join(config_obj.list_services())
                console.print(f"Services: {escape(names)}")
            if config_obj.default_interpreter != DEFAULT_INTERPRETER:
                console.print(
                    f"Default interpreter: {escape(config_obj.default_interpreter)}"
                )

        else:
            error(f"Unknown action: {action}. Use: show, validate")
            raise typer.Exit(1)

"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from dew.cli.console import console, dim, error, success


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, validate"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: search standard locations)",
            ),
        ] = None,
    ) -> None:
        """Show or validate configuration."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        if action not in ("show", "validate"):
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, validate")
            raise typer.Exit(1)

        from rich.table import Table

        from dew.config import ConfigError, find_config_path, load_config

        try:
            config_path = find_config_path(path)
            config_obj = load_config(config_path)
        except FileNotFoundError as e:
            error(str(e))
            raise typer.Exit(1) from None
        except ConfigError as e:
            error("Configuration validation failed:")
            console.print(f"  {e}", markup=False)
            raise typer.Exit(1) from None

        if action == "validate":
            success("Configuration is valid!")
            return

        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Config file", str(config_path) if config_path else "(defaults)")
        table.add_row("Server", f"{config_obj.server.host}:{config_obj.server.port}")
        table.add_row("TLS", "enabled" if config_obj.server.tls_enabled else "disabled")
        table.add_row("Snapshot path", str(config_obj.snapshot.path))
        table.add_row("Snapshot interval", f"{config_obj.snapshot.interval:g}s")
        table.add_row("Log level", config_obj.logging.level or "INFO")
        table.add_row("Log to file", str(config_obj.logging.log_to_file))

        console.print(table)
        if config_path is None:
            dim("No config file found; using defaults and environment")

"""Snapshot inspection commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from dew.cli.console import console, dim, error, success


def register(app: typer.Typer) -> None:
    """Register the snapshot command."""

    @app.command()
    def snapshot(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: show, check"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to snapshot file (default: from config)",
            ),
        ] = None,
    ) -> None:
        """Inspect the todo snapshot."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        if action not in ("show", "check"):
            error(f"Unknown action: {action}")
            console.print("Valid actions: show, check")
            raise typer.Exit(1)

        from dew.config import ConfigError, load_config
        from dew.snapshot import CorruptSnapshotError, SnapshotManager

        if path is None:
            try:
                path = load_config().snapshot.path
            except ConfigError as e:
                error(str(e))
                raise typer.Exit(1) from None
        snapshot_path = path.expanduser()

        if not snapshot_path.exists():
            dim(f"No snapshot at {snapshot_path} (the service will start empty)")
            return

        try:
            store = SnapshotManager(snapshot_path).load_sync()
        except CorruptSnapshotError as e:
            error(str(e))
            raise typer.Exit(1) from None

        import asyncio

        records = asyncio.run(store.list())

        if action == "check":
            success(f"Snapshot is valid: {len(records)} todos in {snapshot_path}")
            return

        from rich.table import Table

        table = Table(title=f"Todos ({snapshot_path})")
        table.add_column("ID", style="dim")
        table.add_column("Title")
        table.add_column("Status", style="cyan")
        table.add_column("Created", style="green")

        for record in records:
            table.add_row(
                record.id,
                record.title,
                record.status.value,
                record.created.strftime("%Y-%m-%d %H:%M:%S"),
            )

        console.print(table)
        dim(f"{len(records)} todos")

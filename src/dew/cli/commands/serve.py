"""Server command for running the Dew service."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from dew.cli.console import error

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        host: Annotated[
            str | None,
            typer.Option(
                "--host",
                "-h",
                help="Host to bind to (default: from config)",
            ),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                "--port",
                "-p",
                help="Port to bind to (default: from config)",
            ),
        ] = None,
    ) -> None:
        """Start the Dew todo server."""
        from dew.config import ConfigError
        from dew.snapshot import CorruptSnapshotError

        try:
            asyncio.run(_run_server(config, host, port))
        except (ConfigError, FileNotFoundError) as e:
            error(str(e))
            raise typer.Exit(1) from None
        except CorruptSnapshotError as e:
            # Refuse to start empty on top of a snapshot we cannot read
            error(f"Refusing to start: {e}")
            raise typer.Exit(1) from None
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(
    config_path: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the server asynchronously."""
    from dew.config import load_config
    from dew.logging import configure_logging
    from dew.server import ServerRunner, create_app
    from dew.snapshot import SnapshotManager, SnapshotWriter
    from dew.todos import TodoService

    dew_config = load_config(config_path)

    configure_logging(
        level=dew_config.logging.level,
        use_rich=True,
        log_to_file=dew_config.logging.log_to_file,
    )

    logger.info(
        "snapshot_loading", extra={"file.path": str(dew_config.snapshot.path)}
    )
    manager = SnapshotManager(dew_config.snapshot.path)
    store = await manager.load()

    service = TodoService(store)
    writer = SnapshotWriter(store, manager, interval=dew_config.snapshot.interval)
    fastapi_app = create_app(service, snapshot_writer=writer, config=dew_config)

    runner = ServerRunner(
        fastapi_app,
        host=host or dew_config.server.host,
        port=port or dew_config.server.port,
        ssl_cert=dew_config.server.ssl_cert,
        ssl_key=dew_config.server.ssl_key,
    )
    await runner.run()

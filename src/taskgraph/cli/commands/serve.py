"""Server command for running the Taskgraph service."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from taskgraph.cli.console import error

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
                help="Host to bind to (default from config: 127.0.0.1)",
            ),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                "--port",
                "-p",
                help="Port to bind to (default from config: 4567)",
            ),
        ] = None,
        seed: Annotated[
            bool,
            typer.Option(
                "--seed",
                help="Load the demo data set at startup",
            ),
        ] = False,
    ) -> None:
        """Start the Taskgraph server."""
        from taskgraph.config import ConfigError

        try:
            asyncio.run(_run_server(config, host, port, seed))
        except (ConfigError, FileNotFoundError) as e:
            error(str(e))
            raise typer.Exit(1) from None
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(
    config_path: Path | None = None,
    host: str | None = None,
    port: int | None = None,
    seed: bool = False,
) -> None:
    """Run the server asynchronously."""
    from taskgraph.config import load_config_or_default
    from taskgraph.logging import configure_logging
    from taskgraph.server import ServerRunner, TaskgraphServer

    config = load_config_or_default(config_path)
    if seed:
        config.store.seed_demo_data = True

    configure_logging(
        level=config.logging.level,
        use_rich=True,
        log_to_file=config.logging.log_to_file,
        retention_days=config.logging.retention_days,
    )

    server = TaskgraphServer(config=config)
    runner = ServerRunner(
        server,
        host=host or config.server.host,
        port=port or config.server.port,
    )
    await runner.run()

"""Configuration management commands."""

from pathlib import Path
from typing import Annotated

import click
import typer

from taskgraph.cli.console import console, dim, error, success

DEFAULT_CONFIG_TOML = """\
default_format = "json"

[server]
host = "127.0.0.1"
port = 4567
allow_shutdown = true

[logging]
level = "INFO"
log_to_file = false
retention_days = 7

[store]
seed_demo_data = false
"""


def register(app: typer.Typer) -> None:
    """Register the config command."""

    @app.command()
    def config(
        action: Annotated[
            str | None,
            typer.Argument(help="Action: init, show, validate"),
        ] = None,
        path: Annotated[
            Path | None,
            typer.Option(
                "--path",
                "-p",
                help="Path to config file (default: $TASKGRAPH_HOME/config.toml)",
            ),
        ] = None,
        force: Annotated[
            bool,
            typer.Option("--force", "-f", help="Overwrite an existing file on init"),
        ] = False,
    ) -> None:
        """Manage configuration."""
        if action is None:
            ctx = click.get_current_context()
            click.echo(ctx.get_help())
            raise typer.Exit(0)

        from rich.syntax import Syntax
        from rich.table import Table

        from taskgraph.config import ConfigError, load_config
        from taskgraph.config.paths import get_config_path

        expanded_path = path.expanduser() if path else get_config_path()

        if action == "init":
            if expanded_path.exists() and not force:
                error(f"Config file already exists: {expanded_path}")
                dim("Use --force to overwrite")
                raise typer.Exit(1)
            expanded_path.parent.mkdir(parents=True, exist_ok=True)
            expanded_path.write_text(DEFAULT_CONFIG_TOML)
            success(f"Wrote {expanded_path}")

        elif action == "show":
            if not expanded_path.exists():
                error(f"Config file not found: {expanded_path}")
                console.print("Run 'taskgraph config init' to create one")
                raise typer.Exit(1)

            content = expanded_path.read_text()
            syntax = Syntax(content, "toml", theme="monokai", line_numbers=True)
            console.print(f"[bold]Config file: {expanded_path}[/bold]\n")
            console.print(syntax)

        elif action == "validate":
            try:
                config_obj = load_config(expanded_path)
            except FileNotFoundError as e:
                error(f"File not found: {e}")
                raise typer.Exit(1) from None
            except ConfigError as e:
                error("Configuration validation failed:")
                console.print(str(e))
                raise typer.Exit(1) from None

            table = Table(title="Configuration Summary")
            table.add_column("Setting", style="cyan")
            table.add_column("Value", style="green")
            table.add_row(
                "Server", f"{config_obj.server.host}:{config_obj.server.port}"
            )
            table.add_row("Shutdown endpoint", str(config_obj.server.allow_shutdown))
            table.add_row("Default format", config_obj.default_format)
            table.add_row("Log level", config_obj.logging.level)
            table.add_row("Demo data", str(config_obj.store.seed_demo_data))

            success("Configuration is valid!")
            console.print()
            console.print(table)

        else:
            error(f"Unknown action: {action}")
            console.print("Valid actions: init, show, validate")
            raise typer.Exit(1)

"""Main CLI application."""

import typer

from taskgraph.cli.commands import config, serve

app = typer.Typer(
    name="taskgraph",
    help="Taskgraph - todo manager REST service",
    no_args_is_help=True,
)

config.register(app)
serve.register(app)

"""CLI command modules."""

from taskgraph.cli.commands import config, serve

__all__ = [
    "config",
    "serve",
]

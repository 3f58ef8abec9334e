"""Entry point for ``python -m taskgraph``."""

from taskgraph.cli.app import app

if __name__ == "__main__":
    app()

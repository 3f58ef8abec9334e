"""HTTP server for Taskgraph."""

from taskgraph.server.app import TaskgraphServer, create_app
from taskgraph.server.runner import ServerRunner

__all__ = [
    "ServerRunner",
    "TaskgraphServer",
    "create_app",
]

"""Centralized path management for Taskgraph.

Config and log files live under a single base directory, overridable with
the TASKGRAPH_HOME environment variable.

Default locations:
- Linux/macOS: ~/.taskgraph
- Windows: %USERPROFILE%\\.taskgraph
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "TASKGRAPH_HOME"


@lru_cache(maxsize=1)
def get_taskgraph_home() -> Path:
    """Get the base directory for all Taskgraph files.

    Resolution order:
    1. TASKGRAPH_HOME environment variable (if set)
    2. Platform default (~/.taskgraph)
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".taskgraph"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_taskgraph_home() / "config.toml"


def get_logs_path() -> Path:
    """Get the JSONL log directory path."""
    return get_taskgraph_home() / "logs"

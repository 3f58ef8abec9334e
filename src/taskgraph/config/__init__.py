"""Configuration module."""

from taskgraph.config.loader import (
    get_default_config,
    load_config,
    load_config_or_default,
)
from taskgraph.config.models import (
    ConfigError,
    LoggingConfig,
    ServerConfig,
    StoreConfig,
    TaskgraphConfig,
)
from taskgraph.config.paths import get_config_path, get_logs_path, get_taskgraph_home

__all__ = [
    "ConfigError",
    "LoggingConfig",
    "ServerConfig",
    "StoreConfig",
    "TaskgraphConfig",
    "get_config_path",
    "get_default_config",
    "get_logs_path",
    "get_taskgraph_home",
    "load_config",
    "load_config_or_default",
]

"""Configuration loading from TOML files and environment variables."""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from taskgraph.config.models import ConfigError, TaskgraphConfig
from taskgraph.config.paths import get_config_path

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "TASKGRAPH_HOST": ("server", "host"),
    "TASKGRAPH_PORT": ("server", "port"),
    "TASKGRAPH_LOG_LEVEL": ("logging", "level"),
}


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("config.toml"),  # Current directory
        get_config_path(),  # ~/.taskgraph/config.toml (or TASKGRAPH_HOME)
        Path("/etc/taskgraph/config.toml"),  # System-wide
    ]


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Override config values from environment variables where set."""
    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if not value:
            continue
        if key == "level":
            value = value.upper()
        section_data = config.get(section)
        if not isinstance(section_data, dict):
            section_data = {}
            config[section] = section_data
        section_data[key] = value
    return config


def find_config_path(path: Path | None = None) -> Path | None:
    """Resolve the config file to load, or None if there is none."""
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return config_path

    for default_path in _get_default_config_paths():
        expanded = default_path.expanduser()
        if expanded.exists():
            return expanded
    return None


def load_config(path: Path | None = None) -> TaskgraphConfig:
    """Load configuration from TOML file.

    Args:
        path: Explicit path to config file. If None, searches default locations.

    Returns:
        Validated TaskgraphConfig instance.

    Raises:
        FileNotFoundError: If no config file is found.
        ConfigError: If the config file is invalid.
    """
    config_path = find_config_path(path)
    if config_path is None:
        raise FileNotFoundError(
            "No config file found. Searched: "
            + ", ".join(str(p) for p in _get_default_config_paths())
        )

    try:
        with config_path.open("rb") as f:
            raw_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    return _validate(_apply_env_overrides(raw_config))


def get_default_config() -> TaskgraphConfig:
    """Get the built-in configuration, with environment overrides applied."""
    return _validate(_apply_env_overrides({}))


def load_config_or_default(path: Path | None = None) -> TaskgraphConfig:
    """Load the config file if one exists, otherwise use defaults."""
    if path is None and find_config_path() is None:
        return get_default_config()
    return load_config(path)


def _validate(raw_config: dict[str, Any]) -> TaskgraphConfig:
    try:
        return TaskgraphConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(str(e)) from e

"""Configuration models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ServerConfig(BaseModel):
    """Configuration for HTTP server."""

    host: str = "127.0.0.1"
    port: int = Field(default=4567, ge=1, le=65535)
    # Expose GET /shutdown so test harnesses can stop the service
    allow_shutdown: bool = True


class LoggingConfig(BaseModel):
    """Configuration for logging output."""

    level: LogLevel = "INFO"
    log_to_file: bool = False
    retention_days: int = Field(default=7, ge=1)


class StoreConfig(BaseModel):
    """Configuration for the in-memory store."""

    seed_demo_data: bool = False


class ConfigError(Exception):
    """Configuration error."""

    pass


class TaskgraphConfig(BaseModel):
    """Root configuration model."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    default_format: Literal["json", "xml"] = "json"

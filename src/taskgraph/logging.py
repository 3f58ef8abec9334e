"""Centralized logging configuration for Taskgraph.

All entry points (CLI, server) should call configure_logging() early.

Logging Levels:
- DEBUG: Request negotiation details
- INFO: Entity and relation mutations, rejected requests, server lifecycle
- WARNING: Forced shutdown
- ERROR: Unexpected failures while handling a request
"""

import json
import logging
import os
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any, TextIO

# Default retention period for log files
DEFAULT_LOG_RETENTION_DAYS = 7

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "component"}


def prune_old_logs(
    logs_dir: Path,
    retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    suffix: str = ".jsonl",
) -> int:
    """Delete log files older than retention period.

    Args:
        logs_dir: Directory containing log files.
        retention_days: Number of days to retain logs.
        suffix: File suffix to match (default: .jsonl).

    Returns:
        Number of files deleted.
    """
    if not logs_dir.exists():
        return 0

    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    deleted = 0

    for entry in logs_dir.iterdir():
        if not entry.is_file() or not entry.name.endswith(suffix):
            continue
        try:
            mtime = datetime.fromtimestamp(entry.stat().st_mtime, UTC)
            if mtime < cutoff:
                entry.unlink()
                deleted += 1
        except OSError:
            pass  # Ignore errors on individual files

    return deleted


def _component(logger_name: str) -> str:
    parts = logger_name.split(".")
    if len(parts) >= 2 and parts[0] == "taskgraph":
        return parts[1]
    return parts[0]


def record_extra(record: logging.LogRecord) -> dict[str, Any]:
    """Fields passed to a logging call through ``extra=``."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONLHandler(logging.Handler):
    """Handler that writes structured log entries to a JSONL file.

    Logs are written to <logs_dir>/YYYY-MM-DD.jsonl with one JSON object per
    line, rotated daily. Old files are pruned on rotation.
    """

    def __init__(
        self,
        logs_dir: Path,
        retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
    ):
        super().__init__()
        self._logs_dir = logs_dir
        self._logs_dir.mkdir(parents=True, exist_ok=True)
        self._retention_days = retention_days
        self._current_date: str | None = None
        self._file: TextIO | None = None

    def _get_log_file(self) -> TextIO:
        """Get the current log file, rotating daily."""
        today = datetime.now(UTC).strftime("%Y-%m-%d")
        if self._current_date != today or self._file is None:
            if self._file:
                self._file.close()
            self._current_date = today
            log_path = self._logs_dir / f"{today}.jsonl"
            self._file = log_path.open("a", encoding="utf-8")

            prune_old_logs(self._logs_dir, self._retention_days)

        return self._file

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry: dict[str, Any] = {
                "ts": datetime.now(UTC).isoformat(),
                "level": record.levelname,
                "component": _component(record.name),
                "logger": record.name,
                "message": record.getMessage(),
            }

            if record.exc_info:
                formatter = self.formatter or logging.Formatter()
                entry["exception"] = formatter.formatException(record.exc_info)

            if extra := record_extra(record):
                entry["extra"] = extra

            log_file = self._get_log_file()
            log_file.write(json.dumps(entry, default=str) + "\n")
            log_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None
        super().close()


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - taskgraph.store.relationships -> store
    - taskgraph.server.routes.entities -> server

    Extra fields are appended as ``key=value`` pairs.
    """

    def format(self, record: logging.LogRecord) -> str:
        record.component = _component(record.name)
        message = super().format(record)
        extra = record_extra(record)
        if extra:
            pairs = " ".join(f"{k}={v}" for k, v in extra.items())
            message = f"{message} {pairs}"
        return message


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "httpx",
    "httpcore",
    "uvicorn.access",  # Request logging
]


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
    log_to_file: bool = False,
    logs_dir: Path | None = None,
    retention_days: int = DEFAULT_LOG_RETENTION_DAYS,
) -> None:
    """Configure logging for Taskgraph.

    Call this once at application startup (CLI or server).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses TASKGRAPH_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful output (server mode).
        log_to_file: Also write logs to JSONL files.
        logs_dir: Directory for JSONL logs (default: $TASKGRAPH_HOME/logs).
        retention_days: Days of JSONL logs to keep.
    """
    if level is None:
        level = os.environ.get("TASKGRAPH_LOG_LEVEL", "INFO")
    level = level.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = "INFO"

    log_level = getattr(logging, level)

    handlers: list[logging.Handler] = []

    if use_rich:
        from rich.logging import RichHandler

        console_handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        console_handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    handlers.append(console_handler)

    if log_to_file:
        if logs_dir is None:
            from taskgraph.config.paths import get_logs_path

            logs_dir = get_logs_path()
        file_handler = JSONLHandler(logs_dir, retention_days=retention_days)
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True,
    )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    # Route uvicorn through our handlers (server mode)
    if use_rich:
        for logger_name in ("uvicorn", "uvicorn.error"):
            uv_logger = logging.getLogger(logger_name)
            uv_logger.handlers = handlers
            uv_logger.propagate = False

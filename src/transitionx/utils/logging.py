"""
Logging helpers for TransitionX.

The library only emits records; applications opt into output with
setup_logging (or core.config.configure_logging). Each wrapped procedure
call runs under its own correlation ID so its lines can be grouped.
"""

import logging
import logging.handlers
import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any

NO_CORRELATION_ID = "no-correlation-id"

# Correlation ID of the wrapped call currently running, if any
correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the active correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id.get() or NO_CORRELATION_ID
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter that prefixes messages with their correlation ID when one is set."""

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "correlation_id", NO_CORRELATION_ID)
        if request_id != NO_CORRELATION_ID:
            record.msg = f"[{request_id}] {record.getMessage()}"
            record.args = ()  # already interpolated

        return super().format(record)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    log_file_path: str | None = None,
    log_file_max_bytes: int = 10485760,  # 10 MB
    log_file_backup_count: int = 5,
    enable_console: bool = True,
    enable_file: bool = False,
) -> None:
    """
    Replace the root logger's handlers with TransitionX's console and file handlers.

    Args:
        log_level: Root level name, e.g. "INFO"
        log_format: Format string for both handlers
        log_file_path: Rotating log file; file output is skipped without one
        log_file_max_bytes: Size at which the file rotates
        log_file_backup_count: Rotated files to keep
        enable_console: Write to stderr
        enable_file: Write to log_file_path
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    formatter = StructuredFormatter(log_format)
    correlation_filter = CorrelationIdFilter()
    handlers: list[logging.Handler] = []

    if enable_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if enable_file and log_file_path:
        Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file_path, maxBytes=log_file_max_bytes, backupCount=log_file_backup_count
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(correlation_filter)
        root_logger.addHandler(handler)

    logging.info(f"Logging configured with level: {log_level}")


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, normally called with __name__."""
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """
    Log message with key=value pairs appended after a pipe.

    Args:
        logger: Destination logger
        level: Numeric log level
        message: Message text
        **context: Fields appended in keyword order
    """
    if context:
        fields = " ".join(f"{key}={value}" for key, value in context.items())
        message = f"{message} | {fields}"

    logger.log(level, message)


class LogContext:
    """Run a block under a correlation ID, restoring the enclosing one on exit."""

    def __init__(self, request_id: str | None = None):
        """
        Args:
            request_id: ID to use; a UUID4 is generated when omitted
        """
        self.request_id = request_id
        self.token = None

    def __enter__(self) -> str:
        if self.request_id is None:
            self.request_id = str(uuid.uuid4())
        self.token = correlation_id.set(self.request_id)
        return self.request_id

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.token is not None:
            correlation_id.reset(self.token)
            self.token = None

"""
Logging configuration for mvnsettings.

Structured logging through structlog with a Rich console handler, correlation IDs
and timed operation contexts for CLI commands.
"""

import contextvars
import logging
import logging.handlers
import sys
import time
import uuid
from pathlib import Path
from typing import Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

# Context variables for correlation and operation tracking
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
operation_context: contextvars.ContextVar[dict[str, Any] | None] = (
    contextvars.ContextVar("operation_context", default=None)
)
operation_start_time: contextvars.ContextVar[float] = contextvars.ContextVar(
    "operation_start_time", default=0.0
)


class CorrelationIDProcessor:
    """Processor to add correlation ID to log records."""

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id_value = correlation_id.get("")
        if correlation_id_value:
            event_dict["correlation_id"] = correlation_id_value
        return event_dict


class OperationContextProcessor:
    """Processor to add operation context to log records."""

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        context = operation_context.get()
        if context:
            for key, value in context.items():
                event_dict.setdefault(key, value)
        return event_dict


class StructuredLogger:
    """Thin wrapper around a structlog logger with error-aware helpers."""

    def __init__(self, logger_name: str):
        self.logger = structlog.get_logger(logger_name)
        self._logger_name = logger_name

    def with_correlation_id(
        self, correlation_id_value: str | None = None
    ) -> "StructuredLogger":
        """Bind a correlation ID to the current context."""
        if correlation_id_value is None:
            correlation_id_value = generate_correlation_id()

        correlation_id.set(correlation_id_value)
        return self

    def info(self, message: str, **kwargs: Any) -> None:
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.logger.warning(message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.logger.debug(message, **kwargs)

    def error(
        self, message: str, error: Exception | None = None, **kwargs: Any
    ) -> None:
        """Log an error message with structured exception details."""
        if error:
            kwargs.update(
                {
                    "error": str(error),
                    "error_type": type(error).__name__,
                }
            )
        self.logger.error(message, **kwargs)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    json_logs: bool = False,
    log_file: str | Path | None = None,
    log_level: str = "INFO",
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 3,
) -> None:
    """
    Configure structured logging for the application.

    ``verbose`` and ``quiet`` take precedence over ``log_level``. Console output
    goes to stderr so command output on stdout stays clean.
    """

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.INFO)

    base_processors = [
        CorrelationIDProcessor(),
        OperationContextProcessor(),
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]

    handlers: list[logging.Handler] = []
    if json_logs:
        processors = [
            *base_processors,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
        handlers.append(logging.StreamHandler(sys.stderr))
    else:
        processors = [
            *base_processors,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=True),
        ]
        handlers.append(
            RichHandler(
                console=Console(stderr=True),
                show_time=False,  # structlog stamps the time
                show_path=False,
                markup=False,
                rich_tracebacks=True,
                tracebacks_show_locals=verbose,
            )
        )

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(name)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


class LoggingContextManager:
    """Context manager for timed, structured logging of one operation."""

    def __init__(
        self,
        logger: StructuredLogger,
        operation: str,
        correlation_id_value: str | None = None,
        **context: Any,
    ):
        self.logger = logger
        self.operation = operation
        self.correlation_id_value = correlation_id_value or generate_correlation_id()
        self.context = context
        self._old_correlation_id = ""
        self._old_context: dict[str, Any] | None = None
        self._old_start_time = 0.0

    def __enter__(self) -> StructuredLogger:
        self._old_correlation_id = correlation_id.get("")
        self._old_context = operation_context.get()
        self._old_start_time = operation_start_time.get(0.0)

        correlation_id.set(self.correlation_id_value)
        operation_context.set({"operation": self.operation, **self.context})
        operation_start_time.set(time.time())

        self.logger.debug(f"Starting operation: {self.operation}")
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration_ms = (time.time() - operation_start_time.get(time.time())) * 1000

        if exc_type:
            self.logger.debug(
                f"Operation failed: {self.operation}",
                error=str(exc_val),
                error_type=exc_type.__name__,
                duration_ms=round(duration_ms, 2),
            )
        else:
            self.logger.debug(
                f"Operation completed: {self.operation}",
                duration_ms=round(duration_ms, 2),
            )

        correlation_id.set(self._old_correlation_id)
        operation_context.set(self._old_context)
        operation_start_time.set(self._old_start_time)


def operation_logger(
    operation_name: str, correlation_id_value: str | None = None, **context: Any
) -> LoggingContextManager:
    """Create a logging context manager for operations."""
    logger = get_logger(__name__)
    return LoggingContextManager(
        logger, operation_name, correlation_id_value, **context
    )

"""Structured logging configuration for limit evaluation.

This module provides structured JSON logging with:
- Correlation IDs for tracing an admission decision across services
- Contextual fields (client, service)
- Consistent log formatting
"""
from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .config import LimitsSettings
    from .limits import LimitCheckResult

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
client_id_var: ContextVar[Optional[str]] = ContextVar("client_id", default=None)
service_id_var: ContextVar[Optional[str]] = ContextVar("service_id", default=None)

_CONTEXT_FIELDS = ("correlation_id", "client_id", "service_id")

_RESERVED_ATTRS = frozenset({
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
    *_CONTEXT_FIELDS,
})


class CorrelationIDFilter(logging.Filter):
    """Logging filter that adds correlation ID and context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        record.client_id = client_id_var.get()
        record.service_id = service_id_var.get()
        return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON structured logging (True) or simple format (False)
        log_file: Optional file path for logging output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if json_format:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - "
            "[%(correlation_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(CorrelationIDFilter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(CorrelationIDFilter())
        root_logger.addHandler(file_handler)


def configure_from_settings(settings: "LimitsSettings") -> None:
    """Apply the logging section of LimitsSettings."""
    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )


def generate_correlation_id() -> str:
    return f"cor_{uuid.uuid4().hex[:16]}"


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()


def clear_context() -> None:
    """Clear all context variables."""
    correlation_id_var.set(None)
    client_id_var.set(None)
    service_id_var.set(None)


class LogContext:
    """Context manager for temporary logging context."""

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        client_id: Optional[str] = None,
        service_id: Optional[str] = None,
    ):
        self.correlation_id = correlation_id
        self.client_id = client_id
        self.service_id = service_id
        self._tokens: list = []

    def __enter__(self) -> "LogContext":
        if self.correlation_id:
            self._tokens.append((correlation_id_var, correlation_id_var.set(self.correlation_id)))
        if self.client_id:
            self._tokens.append((client_id_var, client_id_var.set(self.client_id)))
        if self.service_id:
            self._tokens.append((service_id_var, service_id_var.set(self.service_id)))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens.clear()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_limit_check(
    logger: logging.Logger,
    result: "LimitCheckResult",
    payment_id: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Log a limit verdict; exceeded limits are logged at WARNING."""
    extra = kwargs.copy()
    extra["limit_name"] = result.limit_name
    extra["reason"] = result.reason
    extra["projected_amount"] = result.projected_amount
    extra["projected_count"] = result.projected_count
    if payment_id:
        extra["payment_id"] = payment_id
    level = logging.WARNING if result.exceeded else logging.INFO
    logger.log(level, "Payment limit check: %s", result.reason, extra=extra)


__all__ = [
    "CorrelationIDFilter",
    "StructuredFormatter",
    "setup_logging",
    "configure_from_settings",
    "generate_correlation_id",
    "get_correlation_id",
    "clear_context",
    "LogContext",
    "get_logger",
    "log_limit_check",
]

"""Exception hierarchy for Sardis payment limits.

All limit errors inherit from LimitError, so callers can catch one type and
still render a structured error with a machine-readable code.

Usage:
    from sardis_limits.exceptions import (
        LimitError,
        LimitConfigurationError,
        LimitValidationError,
    )

    try:
        exceeded = limit.is_payment_exceeded(payment, history)
    except LimitConfigurationError as e:
        return e.to_dict()

All exceptions have:
- error_code: Machine-readable error code (e.g., "CONFIGURATION_ERROR")
- message: Human-readable error message
- details: Optional additional context dictionary
- to_dict(): Convert to response format
"""
from __future__ import annotations

from typing import Any, Optional


class LimitError(Exception):
    """Base exception for all payment limit errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Optional additional context
    """

    error_code: str = "LIMIT_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response format."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class LimitConfigurationError(LimitError):
    """Limit is set up incorrectly. Not retryable."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if parameter:
            details["parameter"] = parameter
        super().__init__(message, details=details)


class LimitValidationError(LimitError):
    """Invalid payment data or limit document."""

    error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)


__all__ = [
    "LimitError",
    "LimitConfigurationError",
    "LimitValidationError",
]

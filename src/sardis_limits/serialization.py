"""JSON serialization helpers for PaymentLimit.

Limits are stored by callers as plain JSON documents. Windows are tagged with
a ``type`` so the two variants stay distinguishable.
"""

from __future__ import annotations

from datetime import time
from typing import Any

from .exceptions import LimitValidationError
from .limits import PaymentLimit
from .windows import ClockRange, RollingSpan, TimeUnit, Window

CLOCK_RANGE = "clock_range"
ROLLING_SPAN = "rolling_span"


def _parse_time(value: Any, field: str) -> time:
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        raise LimitValidationError(f"Invalid time of day: {value!r}", field=field) from None


def _parse_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise LimitValidationError(f"{field} must be an integer", field=field)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        return int(value.strip())
    raise LimitValidationError(
        f"{field} must be an integer",
        field=field,
        details={"value": repr(value)},
    )


def _parse_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    raise LimitValidationError(f"{field} must be a boolean", field=field)


def window_to_json(window: Window) -> dict[str, Any]:
    if isinstance(window, ClockRange):
        return {
            "type": CLOCK_RANGE,
            "start": window.start.isoformat(),
            "end": window.end.isoformat(),
        }
    return {
        "type": ROLLING_SPAN,
        "unit": window.unit.value,
        "length": window.length,
    }


def window_from_json(data: Any) -> Window:
    if not isinstance(data, dict):
        raise LimitValidationError("Window must be an object", field="window")

    window_type = data.get("type")
    if window_type == CLOCK_RANGE:
        return ClockRange(
            start=_parse_time(data.get("start"), "window.start"),
            end=_parse_time(data.get("end"), "window.end"),
        )
    if window_type == ROLLING_SPAN:
        length = _parse_int(data.get("length"), "window.length")
        return RollingSpan(unit=TimeUnit.parse(data.get("unit", "")), length=length)
    raise LimitValidationError(f"Unknown window type: {window_type!r}", field="window.type")


def payment_limit_to_json(limit: PaymentLimit) -> dict[str, Any]:
    return {
        "name": limit.name,
        "window": window_to_json(limit.window),
        "max_total_price": limit.max_total_price,
        "max_total_count": limit.max_total_count,
        "same_client": limit.same_client,
        "same_service": limit.same_service,
    }


def payment_limit_from_json(data: dict[str, Any]) -> PaymentLimit:
    if not isinstance(data, dict):
        raise LimitValidationError("Limit document must be an object")

    def threshold(key: str) -> int:
        value = data.get(key)
        return 0 if value is None else _parse_int(value, key)

    name = data.get("name")
    return PaymentLimit(
        window=window_from_json(data.get("window")),
        max_total_price=threshold("max_total_price"),
        max_total_count=threshold("max_total_count"),
        same_client=_parse_bool(data.get("same_client", False), "same_client"),
        same_service=_parse_bool(data.get("same_service", False), "same_service"),
        name=str(name) if name is not None else None,
    )


__all__ = [
    "window_to_json",
    "window_from_json",
    "payment_limit_to_json",
    "payment_limit_from_json",
]

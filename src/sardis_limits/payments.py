"""Payment records as seen by the limit evaluator.

Limits only depend on the ``PaymentLike`` protocol. ``Payment`` is the
reference record used by callers that do not bring their own type.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Protocol, Union, runtime_checkable

from .exceptions import LimitValidationError

Bound = Union[datetime, time]


def time_of_day_in_range(value: time, start: time, end: time) -> bool:
    """Half-open ``[start, end)`` membership on the 24h clock.

    ``end < start`` wraps past midnight, ``start == end`` is empty and
    ``time.max`` as ``end`` is inclusive.
    """
    if start == end:
        return False
    if end == time.max:
        return value >= start
    if start < end:
        return start <= value < end
    return value >= start or value < end


@runtime_checkable
class PaymentLike(Protocol):
    """What a limit needs from a payment."""

    time: datetime
    amount: int
    client_id: Any
    service_id: Any

    def is_between_to(self, start: Bound, end: Bound) -> bool: ...

    def is_same_client(self, other: "PaymentLike") -> bool: ...

    def is_same_service(self, other: "PaymentLike") -> bool: ...


@dataclass(frozen=True, slots=True)
class Payment:
    """An accepted or candidate payment.

    ``amount`` is an integer in the smallest currency unit.
    """
    time: datetime
    amount: int
    client_id: str
    service_id: str
    payment_id: str = field(default_factory=lambda: f"pay_{uuid.uuid4().hex[:16]}")

    def __post_init__(self) -> None:
        if not isinstance(self.time, datetime):
            raise LimitValidationError("Payment time must be a datetime", field="time")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise LimitValidationError("Payment amount must be an integer", field="amount")
        if self.amount < 0:
            raise LimitValidationError(
                "Payment amount cannot be negative",
                field="amount",
                details={"amount": self.amount},
            )
        if self.client_id is None or self.client_id == "":
            raise LimitValidationError("Payment client_id is required", field="client_id")
        if self.service_id is None or self.service_id == "":
            raise LimitValidationError("Payment service_id is required", field="service_id")

    def is_between_to(self, start: Bound, end: Bound) -> bool:
        """Check whether this payment falls in ``[start, end)``.

        With datetimes the range is absolute and empty when ``end <= start``.
        With times of day the check is done on the payment's wall clock.
        """
        if isinstance(start, datetime) and isinstance(end, datetime):
            return start <= self.time < end
        if isinstance(start, datetime) or isinstance(end, datetime):
            raise TypeError("start and end must both be datetimes or both be times")
        return time_of_day_in_range(self.time.time(), start, end)

    def is_same_client(self, other: PaymentLike) -> bool:
        return self.client_id == other.client_id

    def is_same_service(self, other: PaymentLike) -> bool:
        return self.service_id == other.service_id

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "payment_id": self.payment_id,
            "time": self.time.isoformat(),
            "amount": self.amount,
            "client_id": self.client_id,
            "service_id": self.service_id,
        }


__all__ = [
    "PaymentLike",
    "Payment",
    "time_of_day_in_range",
]

"""
Configurable payment limits.

A PaymentLimit bounds the total amount and/or number of payments inside a
window, optionally scoped to the candidate's client and/or service:

- Window resolution (clock range or rolling span)
- Filtering of registered payments by window, client and service
- Aggregation to a total amount and count
- Threshold comparison, counting the candidate as if already admitted

Limits are immutable and hold no state, so one instance can be shared across
threads and evaluated against any number of payment snapshots.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from .exceptions import LimitConfigurationError
from .payments import PaymentLike
from .windows import ClockRange, ResolvedWindow, RollingSpan, Window, resolve_window

logger = logging.getLogger(__name__)


REASON_OK = "OK"
REASON_OUTSIDE_WINDOW = "outside_window"
REASON_PRICE_EXCEEDED = "price_limit_exceeded"
REASON_COUNT_EXCEEDED = "count_limit_exceeded"
REASON_PRICE_AND_COUNT_EXCEEDED = "price_and_count_limit_exceeded"


@dataclass(frozen=True, slots=True)
class LimitUsage:
    """Total amount and number of matching registered payments."""
    total_amount: int = 0
    count: int = 0


@dataclass(frozen=True, slots=True)
class LimitCheckResult:
    """Outcome of checking one candidate against one limit."""
    exceeded: bool
    reason: str
    price_exceeded: bool = False
    count_exceeded: bool = False
    projected_amount: int = 0
    projected_count: int = 0
    window: Optional[ResolvedWindow] = None
    limit_name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "limit_name": self.limit_name,
            "exceeded": self.exceeded,
            "reason": self.reason,
            "price_exceeded": self.price_exceeded,
            "count_exceeded": self.count_exceeded,
            "projected_amount": self.projected_amount,
            "projected_count": self.projected_count,
            "window": self.window.to_dict() if self.window else None,
        }


def _check_threshold(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LimitConfigurationError(f"{name} must be an integer", parameter=name)
    if value < 0:
        raise LimitConfigurationError(
            f"{name} cannot be negative",
            parameter=name,
            details={name: value},
        )


@dataclass(frozen=True, slots=True)
class PaymentLimit:
    """
    An immutable limit configuration.

    A threshold of 0 disables that check. With both disabled the limit is
    never exceeded.
    """
    window: Window
    max_total_price: int = 0
    max_total_count: int = 0
    same_client: bool = False
    same_service: bool = False
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.window, (ClockRange, RollingSpan)):
            raise LimitConfigurationError(
                "Either a clock range or a rolling span must be configured",
                parameter="window",
            )
        _check_threshold("max_total_price", self.max_total_price)
        _check_threshold("max_total_count", self.max_total_count)

    @property
    def price_limit_enabled(self) -> bool:
        return self.max_total_price > 0

    @property
    def count_limit_enabled(self) -> bool:
        return self.max_total_count > 0

    def matches(self, payment: PaymentLike, candidate: PaymentLike, window: ResolvedWindow) -> bool:
        """Whether a registered payment counts towards this limit."""
        if not payment.is_between_to(window.start, window.end):
            return False
        if self.same_client and not payment.is_same_client(candidate):
            return False
        if self.same_service and not payment.is_same_service(candidate):
            return False
        return True

    def aggregate(
        self,
        window: ResolvedWindow,
        candidate: PaymentLike,
        registered_payments: Iterable[PaymentLike],
    ) -> LimitUsage:
        """Sum and count the registered payments matching this limit."""
        total = 0
        count = 0
        for payment in registered_payments:
            if self.matches(payment, candidate, window):
                total += payment.amount
                count += 1
        return LimitUsage(total_amount=total, count=count)

    def check(
        self,
        candidate: PaymentLike,
        registered_payments: Iterable[PaymentLike],
    ) -> LimitCheckResult:
        """
        Check whether admitting ``candidate`` would exceed this limit.

        Args:
            candidate: Payment about to be admitted
            registered_payments: Previously accepted payments, in any order

        Returns:
            LimitCheckResult with the verdict and the projected totals

        Raises:
            LimitConfigurationError: If no window is configured
        """
        window = resolve_window(self.window, candidate)
        if window is None:
            return LimitCheckResult(
                exceeded=False,
                reason=REASON_OUTSIDE_WINDOW,
                limit_name=self.name,
            )

        usage = self.aggregate(window, candidate, registered_payments)
        projected_amount = usage.total_amount + candidate.amount
        projected_count = usage.count + 1

        price_exceeded = self.max_total_price > 0 and projected_amount > self.max_total_price
        count_exceeded = self.max_total_count > 0 and projected_count > self.max_total_count

        if price_exceeded and count_exceeded:
            reason = REASON_PRICE_AND_COUNT_EXCEEDED
        elif price_exceeded:
            reason = REASON_PRICE_EXCEEDED
        elif count_exceeded:
            reason = REASON_COUNT_EXCEEDED
        else:
            reason = REASON_OK

        logger.debug(
            "Limit %s window %s..%s: %d payments totalling %d",
            self.name or "<unnamed>",
            window.start.isoformat(),
            window.end.isoformat(),
            usage.count,
            usage.total_amount,
        )

        exceeded = price_exceeded or count_exceeded
        if exceeded:
            logger.info(
                "Payment of %d exceeds limit %s: %s (amount %d/%d, count %d/%d)",
                candidate.amount,
                self.name or "<unnamed>",
                reason,
                projected_amount,
                self.max_total_price,
                projected_count,
                self.max_total_count,
            )

        return LimitCheckResult(
            exceeded=exceeded,
            reason=reason,
            price_exceeded=price_exceeded,
            count_exceeded=count_exceeded,
            projected_amount=projected_amount,
            projected_count=projected_count,
            window=window,
            limit_name=self.name,
        )

    def is_payment_exceeded(
        self,
        candidate: PaymentLike,
        registered_payments: Iterable[PaymentLike],
    ) -> bool:
        """True if admitting ``candidate`` would exceed this limit."""
        return self.check(candidate, registered_payments).exceeded


def evaluate_limits(
    limits: Sequence[PaymentLimit],
    candidate: PaymentLike,
    registered_payments: Iterable[PaymentLike],
) -> List[LimitCheckResult]:
    """Check ``candidate`` against every limit, in order."""
    history = list(registered_payments)
    return [limit.check(candidate, history) for limit in limits]


__all__ = [
    "REASON_OK",
    "REASON_OUTSIDE_WINDOW",
    "REASON_PRICE_EXCEEDED",
    "REASON_COUNT_EXCEEDED",
    "REASON_PRICE_AND_COUNT_EXCEEDED",
    "LimitUsage",
    "LimitCheckResult",
    "PaymentLimit",
    "evaluate_limits",
]

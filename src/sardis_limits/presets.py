"""Ready-made limit shapes."""
from __future__ import annotations

from datetime import time
from typing import Union

from .builder import PaymentLimitBuilder
from .limits import PaymentLimit
from .windows import TimeUnit


def create_max_price_on_period_limit(max_total_price: int, start: time, end: time) -> PaymentLimit:
    """Cap the amount spent on one service during a daily time range."""
    return (
        PaymentLimitBuilder.clock_range(start, end)
        .set_max_total_price(max_total_price)
        .set_same_service_restriction(True)
        .build()
    )


def create_max_price_on_timespan_limit(
    max_total_price: int,
    unit: Union[TimeUnit, str],
    length: int,
) -> PaymentLimit:
    """Cap the amount spent on one service over a trailing span."""
    return (
        PaymentLimitBuilder.rolling_span(unit, length)
        .set_max_total_price(max_total_price)
        .set_same_service_restriction(True)
        .build()
    )


def create_max_count_on_day_limit(max_total_count: int) -> PaymentLimit:
    """Cap how many times a client pays one service per calendar day."""
    return (
        PaymentLimitBuilder.clock_range(time.min, time.max)
        .set_max_total_count(max_total_count)
        .set_same_service_restriction(True)
        .set_same_client_restriction(True)
        .build()
    )


def create_complex_limit(
    max_total_price: int,
    max_total_count: int,
    unit: Union[TimeUnit, str],
    length: int,
) -> PaymentLimit:
    """Cap both amount and number of a client's payments over a trailing span."""
    return (
        PaymentLimitBuilder.rolling_span(unit, length)
        .set_max_total_count(max_total_count)
        .set_max_total_price(max_total_price)
        .set_same_client_restriction(True)
        .build()
    )


__all__ = [
    "create_max_price_on_period_limit",
    "create_max_price_on_timespan_limit",
    "create_max_count_on_day_limit",
    "create_complex_limit",
]

"""Fluent construction of PaymentLimit instances."""
from __future__ import annotations

from datetime import time
from typing import Optional, Union

from .limits import PaymentLimit
from .windows import ClockRange, RollingSpan, TimeUnit, Window


class PaymentLimitBuilder:
    """
    Builds immutable PaymentLimit instances.

    Start from one of the two windows, chain the setters, then ``build()``:

        limit = (
            PaymentLimitBuilder.rolling_span(TimeUnit.HOURS, 24)
            .set_max_total_price(5000)
            .set_same_client_restriction(True)
            .build()
        )
    """

    def __init__(self, window: Window):
        self._window = window
        self._max_total_price = 0
        self._max_total_count = 0
        self._same_client = False
        self._same_service = False
        self._name: Optional[str] = None

    @classmethod
    def clock_range(cls, start: time, end: time) -> "PaymentLimitBuilder":
        return cls(ClockRange(start=start, end=end))

    @classmethod
    def rolling_span(cls, unit: Union[TimeUnit, str], length: int) -> "PaymentLimitBuilder":
        return cls(RollingSpan(unit=TimeUnit.parse(unit), length=length))

    def set_max_total_price(self, price: int) -> "PaymentLimitBuilder":
        self._max_total_price = price
        return self

    def set_max_total_count(self, count: int) -> "PaymentLimitBuilder":
        self._max_total_count = count
        return self

    def set_same_client_restriction(self, enable: bool) -> "PaymentLimitBuilder":
        self._same_client = enable
        return self

    def set_same_service_restriction(self, enable: bool) -> "PaymentLimitBuilder":
        self._same_service = enable
        return self

    def set_name(self, name: Optional[str]) -> "PaymentLimitBuilder":
        self._name = name
        return self

    def build(self) -> PaymentLimit:
        return PaymentLimit(
            window=self._window,
            max_total_price=self._max_total_price,
            max_total_count=self._max_total_count,
            same_client=bool(self._same_client),
            same_service=bool(self._same_service),
            name=self._name,
        )


__all__ = ["PaymentLimitBuilder"]

"""Aggregation windows for payment limits.

A limit aggregates over one of two windows:

- ``ClockRange``: a recurring time-of-day range, anchored to the candidate's day
- ``RollingSpan``: a trailing duration that ends at the candidate's time
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Optional, Union

from .exceptions import LimitConfigurationError
from .payments import PaymentLike

logger = logging.getLogger(__name__)


class TimeUnit(str, Enum):
    """Fixed-length units for rolling spans."""
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    HALF_DAYS = "half_days"
    DAYS = "days"
    WEEKS = "weeks"

    def to_timedelta(self, length: int) -> timedelta:
        """Duration of ``length`` units."""
        return _UNIT_DURATIONS[self] * length

    @classmethod
    def parse(cls, value: Union["TimeUnit", str]) -> "TimeUnit":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise LimitConfigurationError(
                f"Unsupported time unit: {value!r}",
                parameter="unit",
                details={"allowed": [u.value for u in cls]},
            ) from None


_UNIT_DURATIONS = {
    TimeUnit.MILLISECONDS: timedelta(milliseconds=1),
    TimeUnit.SECONDS: timedelta(seconds=1),
    TimeUnit.MINUTES: timedelta(minutes=1),
    TimeUnit.HOURS: timedelta(hours=1),
    TimeUnit.HALF_DAYS: timedelta(hours=12),
    TimeUnit.DAYS: timedelta(days=1),
    TimeUnit.WEEKS: timedelta(weeks=1),
}


@dataclass(frozen=True, slots=True)
class ClockRange:
    """Daily recurring window between two wall-clock times."""
    start: time
    end: time

    def __post_init__(self) -> None:
        if not isinstance(self.start, time) or not isinstance(self.end, time):
            raise LimitConfigurationError(
                "Clock range bounds must be times of day",
                parameter="start" if not isinstance(self.start, time) else "end",
            )
        if self.start == self.end:
            raise LimitConfigurationError(
                "Clock range start and end must differ",
                parameter="end",
                details={"start": self.start.isoformat(), "end": self.end.isoformat()},
            )

    @property
    def wraps_midnight(self) -> bool:
        return self.end < self.start


@dataclass(frozen=True, slots=True)
class RollingSpan:
    """Trailing window of ``length`` units ending at the candidate payment."""
    unit: TimeUnit
    length: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", TimeUnit.parse(self.unit))
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise LimitConfigurationError("Rolling span length must be an integer", parameter="length")
        if self.length <= 0:
            raise LimitConfigurationError(
                "Rolling span length must be positive",
                parameter="length",
                details={"length": self.length},
            )

    @property
    def duration(self) -> timedelta:
        return self.unit.to_timedelta(self.length)


Window = Union[ClockRange, RollingSpan]


@dataclass(frozen=True, slots=True)
class ResolvedWindow:
    """Concrete ``[start, end)`` interval to aggregate over."""
    start: datetime
    end: datetime

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}


def _at(day: datetime, moment: time) -> datetime:
    return datetime.combine(day.date(), moment, tzinfo=day.tzinfo)


def _resolve_clock_range(window: ClockRange, candidate: PaymentLike) -> Optional[ResolvedWindow]:
    if not candidate.is_between_to(window.start, window.end):
        return None

    day = candidate.time
    one_day = timedelta(days=1)
    if window.end == time.max:
        return ResolvedWindow(start=_at(day, window.start), end=_at(day, time.min) + one_day)
    if not window.wraps_midnight:
        return ResolvedWindow(start=_at(day, window.start), end=_at(day, window.end))

    # Wrapped range: use the night the candidate belongs to.
    if day.time() >= window.start:
        return ResolvedWindow(start=_at(day, window.start), end=_at(day + one_day, window.end))
    return ResolvedWindow(start=_at(day - one_day, window.start), end=_at(day, window.end))


def resolve_window(window: Optional[Window], candidate: PaymentLike) -> Optional[ResolvedWindow]:
    """
    Compute the interval a limit aggregates over for ``candidate``.

    Returns:
        The resolved interval, or None when the candidate is outside a
        clock range and the limit does not apply.

    Raises:
        LimitConfigurationError: If no window is configured.
    """
    if isinstance(window, ClockRange):
        resolved = _resolve_clock_range(window, candidate)
        if resolved is None:
            logger.debug(
                "Payment at %s outside clock range %s-%s",
                candidate.time.isoformat(),
                window.start.isoformat(),
                window.end.isoformat(),
            )
        return resolved
    if isinstance(window, RollingSpan):
        return ResolvedWindow(start=candidate.time - window.duration, end=candidate.time)
    raise LimitConfigurationError(
        "Either a clock range or a rolling span must be configured",
        parameter="window",
    )


__all__ = [
    "TimeUnit",
    "ClockRange",
    "RollingSpan",
    "Window",
    "ResolvedWindow",
    "resolve_window",
]

"""
Sardis Limits - Configurable spending and volume limits for payments.

This package answers one question per call: would admitting a payment push
the matching payment history over a configured threshold?

- Daily clock-range and rolling-span windows
- Amount and count thresholds (0 disables a threshold)
- Optional same-client / same-service scoping
- Builder and ready-made presets
- JSON serialization and declarative configuration

Example usage:
    from datetime import time
    from sardis_limits import (
        Payment,
        TimeUnit,
        create_max_price_on_period_limit,
        create_complex_limit,
    )

    limit = create_max_price_on_period_limit(1000, time(9), time(17))
    if limit.is_payment_exceeded(candidate, history):
        ...
"""

__version__ = "0.1.0"

# Errors
from .exceptions import (
    LimitError,
    LimitConfigurationError,
    LimitValidationError,
)

# Payments
from .payments import (
    Payment,
    PaymentLike,
    time_of_day_in_range,
)

# Windows
from .windows import (
    TimeUnit,
    ClockRange,
    RollingSpan,
    Window,
    ResolvedWindow,
    resolve_window,
)

# Limits
from .limits import (
    LimitUsage,
    LimitCheckResult,
    PaymentLimit,
    evaluate_limits,
)

# Construction
from .builder import PaymentLimitBuilder
from .presets import (
    create_max_price_on_period_limit,
    create_max_price_on_timespan_limit,
    create_max_count_on_day_limit,
    create_complex_limit,
)
from .serialization import (
    payment_limit_to_json,
    payment_limit_from_json,
)

__all__ = [
    "__version__",

    # Errors
    "LimitError",
    "LimitConfigurationError",
    "LimitValidationError",

    # Payments
    "Payment",
    "PaymentLike",
    "time_of_day_in_range",

    # Windows
    "TimeUnit",
    "ClockRange",
    "RollingSpan",
    "Window",
    "ResolvedWindow",
    "resolve_window",

    # Limits
    "LimitUsage",
    "LimitCheckResult",
    "PaymentLimit",
    "evaluate_limits",

    # Construction
    "PaymentLimitBuilder",
    "create_max_price_on_period_limit",
    "create_max_price_on_timespan_limit",
    "create_max_count_on_day_limit",
    "create_complex_limit",
    "payment_limit_to_json",
    "payment_limit_from_json",
]

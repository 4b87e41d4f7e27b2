"""
Pytest configuration for sardis-limits tests.
"""
from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add package source to path
package_src = Path(__file__).parent.parent / "src"
if str(package_src) not in sys.path:
    sys.path.insert(0, str(package_src))

# Set test environment
os.environ.setdefault("SARDIS_LIMITS_ENVIRONMENT", "dev")

from sardis_limits.payments import Payment  # noqa: E402


@pytest.fixture
def day():
    """Reference calendar day for payments."""
    return datetime(2024, 3, 14)


@pytest.fixture
def make_payment(day):
    """Factory for payments on the reference day."""

    def _make(
        hour: int,
        minute: int = 0,
        amount: int = 100,
        client_id: str = "client_c",
        service_id: str = "service_s",
        on: datetime | None = None,
    ) -> Payment:
        base = on or day
        return Payment(
            time=base.replace(hour=hour, minute=minute, second=0, microsecond=0),
            amount=amount,
            client_id=client_id,
            service_id=service_id,
        )

    return _make

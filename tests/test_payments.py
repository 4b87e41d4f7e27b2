"""
Tests for sardis_limits.payments.

Tests cover:
- Payment validation
- Absolute and time-of-day range membership
- Client and service matching
"""
from __future__ import annotations

from datetime import datetime, time, timedelta

import pytest

from sardis_limits.exceptions import LimitValidationError
from sardis_limits.payments import Payment, PaymentLike, time_of_day_in_range


class TestPaymentValidation:
    """Tests for Payment construction."""

    def test_create_payment(self, day):
        """Should create payment with generated id."""
        payment = Payment(time=day, amount=250, client_id="client_1", service_id="service_1")

        assert payment.amount == 250
        assert payment.payment_id.startswith("pay_")
        assert isinstance(payment, PaymentLike)

    def test_negative_amount_rejected(self, day):
        """Should reject negative amounts."""
        with pytest.raises(LimitValidationError) as exc_info:
            Payment(time=day, amount=-1, client_id="c", service_id="s")

        assert exc_info.value.details["field"] == "amount"
        assert exc_info.value.to_dict()["error"] == "VALIDATION_ERROR"

    def test_non_integer_amount_rejected(self, day):
        """Should reject floats and bools as amounts."""
        with pytest.raises(LimitValidationError):
            Payment(time=day, amount=1.5, client_id="c", service_id="s")
        with pytest.raises(LimitValidationError):
            Payment(time=day, amount=True, client_id="c", service_id="s")

    def test_time_must_be_datetime(self):
        """Should reject a bare time of day."""
        with pytest.raises(LimitValidationError) as exc_info:
            Payment(time=time(10, 0), amount=1, client_id="c", service_id="s")

        assert exc_info.value.details["field"] == "time"

    def test_identifiers_required(self, day):
        """Should reject empty identifiers."""
        with pytest.raises(LimitValidationError):
            Payment(time=day, amount=1, client_id="", service_id="s")
        with pytest.raises(LimitValidationError):
            Payment(time=day, amount=1, client_id="c", service_id=None)

    def test_to_dict(self, make_payment):
        """Should serialize to dictionary."""
        payment = make_payment(10, amount=42)
        data = payment.to_dict()

        assert data["amount"] == 42
        assert data["time"] == "2024-03-14T10:00:00"
        assert data["client_id"] == "client_c"


class TestAbsoluteRange:
    """Tests for is_between_to with datetimes."""

    def test_start_inclusive_end_exclusive(self, day, make_payment):
        start = day.replace(hour=9)
        end = day.replace(hour=17)

        assert make_payment(9).is_between_to(start, end) is True
        assert make_payment(16, 59).is_between_to(start, end) is True
        assert make_payment(17).is_between_to(start, end) is False
        assert make_payment(8, 59).is_between_to(start, end) is False

    def test_inverted_range_is_empty(self, day, make_payment):
        assert make_payment(12).is_between_to(day.replace(hour=17), day.replace(hour=9)) is False

    def test_mixed_bounds_rejected(self, day, make_payment):
        with pytest.raises(TypeError):
            make_payment(12).is_between_to(day, time(17))


class TestTimeOfDayRange:
    """Tests for is_between_to with times of day."""

    def test_plain_range(self, make_payment):
        assert make_payment(9).is_between_to(time(9), time(17)) is True
        assert make_payment(17).is_between_to(time(9), time(17)) is False
        assert make_payment(18).is_between_to(time(9), time(17)) is False

    def test_range_wrapping_midnight(self, make_payment):
        start, end = time(22), time(2)

        assert make_payment(22).is_between_to(start, end) is True
        assert make_payment(23, 30).is_between_to(start, end) is True
        assert make_payment(1, 59).is_between_to(start, end) is True
        assert make_payment(2).is_between_to(start, end) is False
        assert make_payment(12).is_between_to(start, end) is False

    def test_equal_bounds_are_empty(self, make_payment):
        """Should treat [t, t) as matching nothing."""
        assert make_payment(8).is_between_to(time(8), time(8)) is False
        assert make_payment(3).is_between_to(time(8), time(8)) is False

    def test_time_max_is_inclusive(self, day):
        last_instant = Payment(
            time=datetime.combine(day.date(), time.max),
            amount=1,
            client_id="c",
            service_id="s",
        )
        assert last_instant.is_between_to(time.min, time.max) is True

    def test_helper_matches_payment_check(self):
        assert time_of_day_in_range(time(0), time.min, time.max) is True
        assert time_of_day_in_range(time(23), time(9), time(17)) is False


class TestMatching:
    """Tests for client and service matching."""

    def test_same_client_and_service(self, make_payment):
        a = make_payment(9, client_id="c1", service_id="s1")
        b = make_payment(10, client_id="c1", service_id="s2")

        assert a.is_same_client(b) is True
        assert a.is_same_service(b) is False

    def test_matching_does_not_depend_on_time(self, make_payment, day):
        a = make_payment(9)
        b = make_payment(9, on=day + timedelta(days=3))

        assert a.is_same_client(b) and a.is_same_service(b)

from datetime import date
from decimal import Decimal

import pytest

from bookings.pricing import apply_cleaning_fee, compute_base_price, compute_total_price


def test_base_price_is_nightly_rate_times_nights():
    assert compute_base_price(Decimal("100.00"), date(2024, 6, 1), date(2024, 6, 5)) == Decimal("400.00")
    assert compute_base_price("95.50", date(2024, 6, 1), date(2024, 6, 2)) == Decimal("95.50")


def test_base_price_requires_at_least_one_night():
    with pytest.raises(ValueError):
        compute_base_price(Decimal("100.00"), date(2024, 6, 1), date(2024, 6, 1))


def test_total_price_adds_optional_cleaning_fee():
    assert compute_total_price(Decimal("400.00")) == Decimal("400.00")
    assert compute_total_price(Decimal("400.00"), Decimal("35.5")) == Decimal("435.50")


@pytest.mark.django_db
def test_apply_cleaning_fee_updates_total(make_booking):
    booking = make_booking("2024-06-01", "2024-06-05")
    assert booking.total_price == Decimal("400.00")

    apply_cleaning_fee(booking, Decimal("50"))

    booking.refresh_from_db()
    assert booking.cleaning_fee == Decimal("50.00")
    assert booking.total_price == Decimal("450.00")

    apply_cleaning_fee(booking, 0)
    booking.refresh_from_db()
    assert booking.total_price == booking.base_price

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from core.dates import nights_between

CENTS = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_base_price(nightly_price, check_in: date, check_out: date) -> Decimal:
    nights = nights_between(check_in, check_out)
    if nights < 1:
        raise ValueError("Check-out must be after check-in.")
    return _money(Decimal(str(nightly_price)) * nights)


def compute_total_price(base_price, cleaning_fee=None) -> Decimal:
    return _money(Decimal(str(base_price)) + Decimal(str(cleaning_fee or 0)))


def apply_cleaning_fee(booking, cleaning_fee) -> None:
    """Set the cleaning fee and keep total_price = base_price + cleaning_fee."""
    booking.cleaning_fee = _money(cleaning_fee)
    booking.total_price = compute_total_price(booking.base_price, booking.cleaning_fee)
    booking.save(update_fields=["cleaning_fee", "total_price", "updated_at"])

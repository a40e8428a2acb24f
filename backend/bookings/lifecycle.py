"""
Booking status state machine.

awaiting_payment -> awaiting_confirmation -> confirmed
        |                     |                  |
        +---------------------+------------------+--> cancelled

Only cancelled bookings release their dates; an unpaid hold keeps the
calendar blocked until someone cancels it.
"""
from __future__ import annotations

import logging

from .models import Booking

logger = logging.getLogger(__name__)

Status = Booking.Status

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    Status.AWAITING_PAYMENT: frozenset({Status.AWAITING_CONFIRMATION, Status.CANCELLED}),
    Status.AWAITING_CONFIRMATION: frozenset({Status.CONFIRMED, Status.CANCELLED}),
    Status.CONFIRMED: frozenset({Status.CANCELLED}),
    Status.CANCELLED: frozenset(),
}

ACTIVE_STATUSES = [
    Status.AWAITING_PAYMENT,
    Status.AWAITING_CONFIRMATION,
    Status.CONFIRMED,
]

BUCKET_CONFIRMED = "confirmed"
BUCKET_PENDING = "pending"
BUCKET_AWAITING_PAYMENT = "awaiting_payment"
OCCUPANCY_BUCKETS = (BUCKET_CONFIRMED, BUCKET_PENDING, BUCKET_AWAITING_PAYMENT)


class UnknownStatus(ValueError):
    pass


class InvalidStatusTransition(ValueError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot change booking status from {current} to {target}.")


def parse_status(value: str) -> Status:
    try:
        return Status(value)
    except ValueError:
        raise UnknownStatus(f"Unknown booking status: {value!r}") from None


def counts_toward_occupancy(status: str) -> bool:
    return occupancy_bucket(status) is not None


def occupancy_bucket(status: str) -> str | None:
    """Calendar bucket for a status; None for statuses that free the dates."""
    status = parse_status(status)
    if status == Status.CONFIRMED:
        return BUCKET_CONFIRMED
    if status == Status.AWAITING_CONFIRMATION:
        return BUCKET_PENDING
    if status == Status.AWAITING_PAYMENT:
        return BUCKET_AWAITING_PAYMENT
    if status == Status.CANCELLED:
        return None
    raise UnknownStatus(f"Unhandled booking status: {status!r}")


def can_transition(current: str, target: str) -> bool:
    return parse_status(target) in ALLOWED_TRANSITIONS[parse_status(current)]


def transition(booking: Booking, target: str, *, save: bool = True) -> Booking:
    """Move a booking to ``target`` or raise InvalidStatusTransition."""
    current = booking.status
    if not can_transition(current, target):
        logger.warning(
            "Refused status change for booking %s: %s -> %s", booking.pk, current, target
        )
        raise InvalidStatusTransition(current, target)
    booking.status = parse_status(target)
    if save:
        booking.save(update_fields=["status", "updated_at"])
    logger.info("Booking %s status %s -> %s", booking.pk, current, booking.status)
    return booking

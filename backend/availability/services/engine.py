from __future__ import annotations

import logging
from datetime import date

from django.db import DatabaseError

from bookings import lifecycle
from core.dates import coerce_date, iter_days, within

from .results import (
    DATA_ACCESS_FAILURE,
    DATE_BLOCKED,
    DATE_HAS_BOOKING,
    INVALID_ARGUMENT,
    AvailabilityResult,
    OccupiedDates,
)
from .store import BookingSpan, OrmAvailabilityStore

logger = logging.getLogger(__name__)


def normalize_property_id(value) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError("Invalid property ID")
    if isinstance(value, int):
        if value < 1:
            raise ValueError("Invalid property ID")
        return value
    text = str(value).strip()
    if not text.isdigit() or int(text) < 1:
        raise ValueError("Invalid property ID")
    return int(text)


def spans_overlap(span: BookingSpan, check_in: date, check_out: date) -> bool:
    """
    Inclusive on both ends: a booking ending on the day another starts
    counts as a conflict, so same-day turnover is never offered.
    """
    return (
        within(check_in, span.check_in, span.check_out)
        or within(check_out, span.check_in, span.check_out)
        or (check_in <= span.check_in and check_out >= span.check_out)
    )


class AvailabilityEngine:
    """Answers availability questions for one property at a time."""

    def __init__(self, store: OrmAvailabilityStore):
        self.store = store

    def check_availability(self, property_id, check_in, check_out) -> AvailabilityResult:
        try:
            property_id = normalize_property_id(property_id)
            check_in = coerce_date(check_in)
            check_out = coerce_date(check_out)
        except ValueError as exc:
            return AvailabilityResult(available=False, error=str(exc), error_code=INVALID_ARGUMENT)
        if check_out < check_in:
            return AvailabilityResult(
                available=False,
                error="Check-out must be after check-in.",
                error_code=INVALID_ARGUMENT,
            )

        try:
            spans = self.store.active_bookings(property_id)
        except DatabaseError as exc:
            logger.exception("Error loading bookings for property %s", property_id)
            return AvailabilityResult(available=False, error=str(exc), error_code=DATA_ACCESS_FAILURE)

        if any(spans_overlap(span, check_in, check_out) for span in spans):
            return AvailabilityResult(
                available=False,
                error="The selected dates overlap an existing booking.",
                error_code=DATE_HAS_BOOKING,
            )

        try:
            blocked = self.store.blocked_dates(property_id, check_in, check_out)
        except DatabaseError as exc:
            logger.exception("Error loading blocked dates for property %s", property_id)
            return AvailabilityResult(available=False, error=str(exc), error_code=DATA_ACCESS_FAILURE)

        if blocked:
            return AvailabilityResult(
                available=False,
                error="The selected dates include blocked dates.",
                error_code=DATE_BLOCKED,
            )
        return AvailabilityResult(available=True)

    def get_occupied_dates(self, property_id) -> OccupiedDates:
        try:
            property_id = normalize_property_id(property_id)
        except ValueError as exc:
            return OccupiedDates(error=str(exc), error_code=INVALID_ARGUMENT)

        try:
            spans = self.store.active_bookings(property_id)
            blocked = self.store.blocked_dates(property_id)
        except DatabaseError as exc:
            logger.exception("Error loading occupied dates for property %s", property_id)
            return OccupiedDates(error=str(exc), error_code=DATA_ACCESS_FAILURE)

        occupied = OccupiedDates(blocked=blocked)
        for span in spans:
            bucket = lifecycle.occupancy_bucket(span.status)
            if bucket is None:
                continue
            occupied.by_status[bucket].extend(iter_days(span.check_in, span.check_out))

        for days in occupied.by_status.values():
            occupied.all_dates.extend(days)
        occupied.all_dates.extend(blocked)
        return occupied

    def booking_conflict(self, spans: list[BookingSpan], day: date) -> BookingSpan | None:
        for span in spans:
            if within(day, span.check_in, span.check_out):
                return span
        return None

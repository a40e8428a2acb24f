from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from django.db import DatabaseError, transaction

from core.dates import coerce_date, format_date, iter_days

from .engine import AvailabilityEngine, normalize_property_id
from .results import (
    DATA_ACCESS_FAILURE,
    DATE_BLOCKED,
    DATE_HAS_BOOKING,
    DUPLICATE_BLOCK,
    INVALID_ARGUMENT,
    PARTIAL_CONFLICT,
    BlockResult,
    MultiBlockResult,
    UnblockResult,
)

logger = logging.getLogger(__name__)

PROPERTY_NOT_FOUND = "Property not found."


class BlockingWorkflow:
    """
    Administrative calendar blocks.

    Single dates and ranges are all-or-nothing; an explicit list of dates is
    best-effort and blocks whatever is still free. Mutations hold a row lock
    on the property so the conflict check and the insert happen together.
    """

    def __init__(self, engine: AvailabilityEngine):
        self.engine = engine
        self.store = engine.store

    def block_date(self, property_id, day, reason: str | None = None) -> BlockResult:
        try:
            property_id = normalize_property_id(property_id)
            day = coerce_date(day)
        except ValueError as exc:
            return BlockResult(success=False, error=str(exc), error_code=INVALID_ARGUMENT)

        try:
            with transaction.atomic():
                if not self.store.property_exists(property_id, lock=True):
                    return BlockResult(success=False, error=PROPERTY_NOT_FOUND, error_code=INVALID_ARGUMENT)
                if self.store.blocked_dates(property_id, day, day):
                    return BlockResult(
                        success=False,
                        error=f"{format_date(day)} is already blocked.",
                        error_code=DUPLICATE_BLOCK,
                    )
                spans = self.store.active_bookings(property_id)
                if self.engine.booking_conflict(spans, day) is not None:
                    return BlockResult(
                        success=False,
                        error=f"{format_date(day)} has a booking and cannot be blocked.",
                        error_code=DATE_HAS_BOOKING,
                    )
                created = self.store.add_blocked_dates(property_id, [day], reason)
        except DatabaseError as exc:
            logger.exception("Failed to block %s for property %s", day, property_id)
            return BlockResult(success=False, error=str(exc), error_code=DATA_ACCESS_FAILURE)

        logger.info("Blocked %s for property %s", day, property_id)
        return BlockResult(success=True, blocked_count=created)

    def block_date_range(self, property_id, start, end, reason: str | None = None) -> BlockResult:
        try:
            property_id = normalize_property_id(property_id)
            start = coerce_date(start)
            end = coerce_date(end)
        except ValueError as exc:
            return BlockResult(success=False, error=str(exc), error_code=INVALID_ARGUMENT)
        if end < start:
            return BlockResult(
                success=False,
                error="End date must be on or after start date.",
                error_code=INVALID_ARGUMENT,
            )

        try:
            with transaction.atomic():
                if not self.store.property_exists(property_id, lock=True):
                    return BlockResult(success=False, error=PROPERTY_NOT_FOUND, error_code=INVALID_ARGUMENT)
                availability = self.engine.check_availability(property_id, start, end)
                if not availability.available:
                    # an existing block inside the range is a duplicate from the admin's side
                    error_code = availability.error_code
                    if error_code == DATE_BLOCKED:
                        error_code = DUPLICATE_BLOCK
                    return BlockResult(
                        success=False,
                        error=availability.error,
                        error_code=error_code,
                    )
                created = self.store.add_blocked_dates(property_id, iter_days(start, end), reason)
        except DatabaseError as exc:
            logger.exception("Failed to block %s..%s for property %s", start, end, property_id)
            return BlockResult(success=False, error=str(exc), error_code=DATA_ACCESS_FAILURE)

        logger.info("Blocked %d day(s) %s..%s for property %s", created, start, end, property_id)
        return BlockResult(success=True, blocked_count=created)

    def block_multiple_dates(
        self,
        property_id,
        dates: Iterable,
        reason: str | None = None,
    ) -> MultiBlockResult:
        dates = list(dates)
        total = len(dates)
        try:
            property_id = normalize_property_id(property_id)
            requested = [coerce_date(value) for value in dates]
        except ValueError as exc:
            return MultiBlockResult(success=False, total_count=total, error=str(exc), error_code=INVALID_ARGUMENT)
        if not requested:
            return MultiBlockResult(success=False, error="No dates provided.", error_code=INVALID_ARGUMENT)

        try:
            with transaction.atomic():
                if not self.store.property_exists(property_id, lock=True):
                    return MultiBlockResult(
                        success=False, total_count=total, error=PROPERTY_NOT_FOUND, error_code=INVALID_ARGUMENT
                    )
                spans = self.store.active_bookings(property_id)
                already_blocked = set(
                    self.store.blocked_dates(property_id, min(requested), max(requested))
                )

                free: list[date] = []
                skipped: list[date] = []
                for day in requested:
                    if day in already_blocked or self.engine.booking_conflict(spans, day) is not None:
                        skipped.append(day)
                    elif day in free:
                        # repeated in the request; block once
                        continue
                    else:
                        free.append(day)

                if not free:
                    return MultiBlockResult(
                        success=False,
                        total_count=total,
                        skipped=skipped,
                        error="All selected dates are already blocked or booked.",
                        error_code=PARTIAL_CONFLICT,
                    )
                created = self.store.add_blocked_dates(property_id, free, reason)
        except DatabaseError as exc:
            logger.exception("Failed to block multiple dates for property %s", property_id)
            return MultiBlockResult(success=False, total_count=total, error=str(exc), error_code=DATA_ACCESS_FAILURE)

        logger.info(
            "Blocked %d of %d requested date(s) for property %s", created, total, property_id
        )
        return MultiBlockResult(
            success=True,
            blocked_count=created,
            total_count=total,
            skipped=skipped,
        )

    def unblock_date(self, property_id, day) -> UnblockResult:
        return self.unblock_date_range(property_id, day, day)

    def unblock_date_range(self, property_id, start, end) -> UnblockResult:
        try:
            property_id = normalize_property_id(property_id)
            start = coerce_date(start)
            end = coerce_date(end)
        except ValueError as exc:
            return UnblockResult(success=False, error=str(exc), error_code=INVALID_ARGUMENT)
        if end < start:
            return UnblockResult(
                success=False,
                error="End date must be on or after start date.",
                error_code=INVALID_ARGUMENT,
            )

        try:
            removed = self.store.remove_blocked_dates(property_id, start, end)
        except DatabaseError as exc:
            logger.exception("Failed to unblock %s..%s for property %s", start, end, property_id)
            return UnblockResult(success=False, error=str(exc), error_code=DATA_ACCESS_FAILURE)

        logger.info("Unblocked %d day(s) %s..%s for property %s", removed, start, end, property_id)
        return UnblockResult(success=True, unblocked_count=removed)

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from django.conf import settings

from availability.models import BlockedDate
from bookings.lifecycle import ACTIVE_STATUSES
from bookings.models import Booking
from properties.models import Property


@dataclass(frozen=True)
class BookingSpan:
    check_in: date
    check_out: date
    status: str


class OrmAvailabilityStore:
    """
    Data access for the availability engine and blocking workflow.

    Every read is materialised before returning so database errors surface
    here, inside the caller's error handling, instead of later on iteration.
    """

    def property_exists(self, property_id: int, *, lock: bool = False) -> bool:
        queryset = Property.objects.filter(pk=property_id)
        if lock:
            queryset = queryset.select_for_update()
        return bool(list(queryset.values_list("pk", flat=True)))

    def active_bookings(self, property_id: int) -> list[BookingSpan]:
        rows = (
            Booking.objects.filter(property_id=property_id, status__in=ACTIVE_STATUSES)
            .order_by("check_in")
            .values_list("check_in", "check_out", "status")
        )
        return [BookingSpan(check_in, check_out, status) for check_in, check_out, status in rows]

    def blocked_dates(
        self,
        property_id: int,
        start: date | None = None,
        end: date | None = None,
    ) -> list[date]:
        queryset = BlockedDate.objects.filter(property_id=property_id)
        if start is not None:
            queryset = queryset.filter(date__gte=start)
        if end is not None:
            queryset = queryset.filter(date__lte=end)
        return list(queryset.order_by("date").values_list("date", flat=True))

    def blocked_rows(self, property_id: int) -> list[BlockedDate]:
        return list(BlockedDate.objects.filter(property_id=property_id).order_by("date"))

    def add_blocked_dates(self, property_id: int, days: Iterable[date], reason: str | None = None) -> int:
        reason = reason or settings.DEFAULT_BLOCK_REASON
        created = BlockedDate.objects.bulk_create(
            [BlockedDate(property_id=property_id, date=day, reason=reason) for day in days]
        )
        return len(created)

    def remove_blocked_dates(self, property_id: int, start: date, end: date) -> int:
        deleted, _ = BlockedDate.objects.filter(
            property_id=property_id,
            date__gte=start,
            date__lte=end,
        ).delete()
        return deleted

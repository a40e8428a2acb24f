from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from bookings.lifecycle import OCCUPANCY_BUCKETS

INVALID_ARGUMENT = "invalid_argument"
DATA_ACCESS_FAILURE = "data_access_failure"
DUPLICATE_BLOCK = "duplicate_block"
DATE_BLOCKED = "date_blocked"
DATE_HAS_BOOKING = "date_has_booking"
PARTIAL_CONFLICT = "partial_conflict"


@dataclass
class AvailabilityResult:
    available: bool
    error: str | None = None
    error_code: str | None = None


def _empty_buckets() -> dict[str, list[date]]:
    return {bucket: [] for bucket in OCCUPANCY_BUCKETS}


@dataclass
class OccupiedDates:
    all_dates: list[date] = field(default_factory=list)
    by_status: dict[str, list[date]] = field(default_factory=_empty_buckets)
    blocked: list[date] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None


@dataclass
class BlockResult:
    success: bool
    error: str | None = None
    error_code: str | None = None
    blocked_count: int = 0


@dataclass
class MultiBlockResult:
    success: bool
    blocked_count: int = 0
    total_count: int = 0
    skipped: list[date] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None


@dataclass
class UnblockResult:
    success: bool
    unblocked_count: int = 0
    error: str | None = None
    error_code: str | None = None

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str) -> date:
    """Parse a ``yyyy-MM-dd`` calendar date, raising ValueError on anything else."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("A date in YYYY-MM-DD format is required.")
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}. Expected YYYY-MM-DD.") from None


def format_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def coerce_date(value: date | str) -> date:
    # datetime is a date subclass; drop the time-of-day component
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start through end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def within(day: date, start: date, end: date) -> bool:
    return start <= day <= end


def nights_between(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days

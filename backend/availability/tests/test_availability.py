from datetime import date

import pytest
from django.db import DatabaseError

from availability.models import BlockedDate
from availability.services.engine import AvailabilityEngine, normalize_property_id
from availability.services.results import (
    DATA_ACCESS_FAILURE,
    DATE_BLOCKED,
    DATE_HAS_BOOKING,
    INVALID_ARGUMENT,
)
from availability.services.store import OrmAvailabilityStore
from bookings.models import Booking


class BrokenBookingsStore(OrmAvailabilityStore):
    def active_bookings(self, property_id):
        raise DatabaseError("connection refused")


class BrokenBlocksStore(OrmAvailabilityStore):
    def blocked_dates(self, property_id, start=None, end=None):
        raise DatabaseError("blocked_dates unavailable")


@pytest.fixture
def engine():
    return AvailabilityEngine(OrmAvailabilityStore())


@pytest.fixture
def june_booking(make_booking):
    return make_booking("2024-06-01", "2024-06-05", Booking.Status.CONFIRMED)


@pytest.mark.django_db
def test_check_in_inside_existing_booking_is_unavailable(engine, rental, june_booking):
    result = engine.check_availability(rental.pk, "2024-06-03", "2024-06-10")
    assert result.available is False
    assert result.error_code == DATE_HAS_BOOKING


@pytest.mark.django_db
def test_range_before_booking_is_available(engine, rental, june_booking):
    result = engine.check_availability(rental.pk, "2024-05-25", "2024-05-31")
    assert result.available is True
    assert result.error is None


@pytest.mark.django_db
def test_shared_turnover_day_conflicts(engine, rental, june_booking):
    assert engine.check_availability(rental.pk, "2024-05-31", "2024-06-01").available is False
    assert engine.check_availability(rental.pk, "2024-06-05", "2024-06-08").available is False
    assert engine.check_availability(rental.pk, "2024-06-06", "2024-06-08").available is True


@pytest.mark.django_db
def test_existing_booking_inside_requested_span_conflicts(engine, rental, june_booking):
    assert engine.check_availability(rental.pk, "2024-05-20", "2024-06-20").available is False


@pytest.mark.django_db
def test_non_overlapping_ranges_are_both_available(engine, rental):
    assert engine.check_availability(rental.pk, "2024-07-01", "2024-07-04").available
    assert engine.check_availability(rental.pk, "2024-07-10", "2024-07-12").available


@pytest.mark.django_db
def test_cancelled_bookings_never_block(engine, rental, make_booking):
    make_booking("2024-06-01", "2024-06-05", Booking.Status.CANCELLED)

    assert engine.check_availability(rental.pk, "2024-06-02", "2024-06-04").available is True
    occupied = engine.get_occupied_dates(rental.pk)
    assert occupied.all_dates == []
    assert all(days == [] for days in occupied.by_status.values())


@pytest.mark.django_db
def test_unpaid_holds_block_the_calendar(engine, rental, make_booking):
    make_booking("2024-06-01", "2024-06-05", Booking.Status.AWAITING_PAYMENT)
    assert engine.check_availability(rental.pk, "2024-06-02", "2024-06-04").available is False


@pytest.mark.django_db
def test_bookings_on_other_properties_are_ignored(engine, rental, make_booking):
    other = type(rental).objects.create(name="Studio", location="Downtown", price=50, guests=2)
    make_booking("2024-06-01", "2024-06-05", target=other)
    assert engine.check_availability(rental.pk, "2024-06-01", "2024-06-05").available is True


@pytest.mark.django_db
def test_blocked_date_inside_range_is_unavailable(engine, rental):
    BlockedDate.objects.create(property=rental, date=date(2024, 8, 10), reason="Maintenance")

    result = engine.check_availability(rental.pk, "2024-08-08", "2024-08-12")
    assert result.available is False
    assert result.error_code == DATE_BLOCKED
    # range bounds are inclusive for blocks too
    assert engine.check_availability(rental.pk, "2024-08-10", "2024-08-12").available is False
    assert engine.check_availability(rental.pk, "2024-08-05", "2024-08-10").available is False
    assert engine.check_availability(rental.pk, "2024-08-11", "2024-08-14").available is True


@pytest.mark.django_db
@pytest.mark.parametrize("property_id", ["", "  ", None, "abc", 0, -3, True])
def test_invalid_property_id_fails_closed(engine, property_id):
    result = engine.check_availability(property_id, "2024-06-01", "2024-06-02")
    assert result.available is False
    assert result.error_code == INVALID_ARGUMENT


@pytest.mark.django_db
def test_malformed_dates_fail_closed(engine, rental):
    result = engine.check_availability(rental.pk, "June 1st", "2024-06-02")
    assert result.available is False
    assert result.error_code == INVALID_ARGUMENT


@pytest.mark.django_db
def test_reversed_range_fails_closed(engine, rental):
    BlockedDate.objects.create(property=rental, date=date(2024, 7, 3))

    result = engine.check_availability(rental.pk, "2024-07-05", "2024-07-01")

    assert result.available is False
    assert result.error_code == INVALID_ARGUMENT
    assert result.error == "Check-out must be after check-in."


@pytest.mark.django_db
def test_single_day_range_is_checked(engine, rental):
    BlockedDate.objects.create(property=rental, date=date(2024, 7, 3))

    assert engine.check_availability(rental.pk, "2024-07-03", "2024-07-03").available is False
    assert engine.check_availability(rental.pk, "2024-07-04", "2024-07-04").available is True


def test_property_ids_from_strings_are_normalized():
    assert normalize_property_id("42") == 42
    assert normalize_property_id(" 7 ") == 7


@pytest.mark.django_db
def test_booking_query_failure_reports_message_without_raising(rental):
    engine = AvailabilityEngine(BrokenBookingsStore())
    result = engine.check_availability(rental.pk, "2024-06-01", "2024-06-02")
    assert result.available is False
    assert result.error == "connection refused"
    assert result.error_code == DATA_ACCESS_FAILURE


@pytest.mark.django_db
def test_blocked_dates_query_failure_fails_closed(rental):
    engine = AvailabilityEngine(BrokenBlocksStore())
    result = engine.check_availability(rental.pk, "2024-06-01", "2024-06-02")
    assert result.available is False
    assert result.error == "blocked_dates unavailable"


@pytest.mark.django_db
def test_occupied_dates_expand_each_booking_inclusively(engine, rental, june_booking):
    occupied = engine.get_occupied_dates(rental.pk)

    expected = [date(2024, 6, day) for day in range(1, 6)]
    assert occupied.by_status["confirmed"] == expected
    assert occupied.by_status["pending"] == []
    assert occupied.by_status["awaiting_payment"] == []
    assert occupied.all_dates == expected


@pytest.mark.django_db
def test_occupied_dates_bucket_by_status_and_include_blocks(engine, rental, make_booking):
    make_booking("2024-06-01", "2024-06-02", Booking.Status.CONFIRMED)
    make_booking("2024-06-10", "2024-06-11", Booking.Status.AWAITING_CONFIRMATION)
    make_booking("2024-06-20", "2024-06-22", Booking.Status.AWAITING_PAYMENT)
    make_booking("2024-06-25", "2024-06-28", Booking.Status.CANCELLED)
    BlockedDate.objects.create(property=rental, date=date(2024, 6, 15))

    occupied = engine.get_occupied_dates(rental.pk)

    assert occupied.by_status["confirmed"] == [date(2024, 6, 1), date(2024, 6, 2)]
    assert occupied.by_status["pending"] == [date(2024, 6, 10), date(2024, 6, 11)]
    assert occupied.by_status["awaiting_payment"] == [date(2024, 6, 20), date(2024, 6, 21), date(2024, 6, 22)]
    assert occupied.blocked == [date(2024, 6, 15)]
    assert len(occupied.all_dates) == 8
    assert date(2024, 6, 26) not in occupied.all_dates


@pytest.mark.django_db
def test_occupied_dates_tolerate_duplicates(engine, rental, make_booking):
    make_booking("2024-06-01", "2024-06-03", Booking.Status.CONFIRMED)
    make_booking("2024-06-03", "2024-06-04", Booking.Status.AWAITING_PAYMENT)

    occupied = engine.get_occupied_dates(rental.pk)
    assert occupied.all_dates.count(date(2024, 6, 3)) == 2


@pytest.mark.django_db
def test_occupied_dates_failure_returns_empty_lists(rental):
    occupied = AvailabilityEngine(BrokenBookingsStore()).get_occupied_dates(rental.pk)
    assert occupied.all_dates == []
    assert occupied.blocked == []
    assert occupied.error == "connection refused"

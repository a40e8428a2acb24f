import pytest

from bookings import lifecycle
from bookings.models import Booking

Status = Booking.Status


@pytest.mark.parametrize(
    "current,target",
    [
        (Status.AWAITING_PAYMENT, Status.AWAITING_CONFIRMATION),
        (Status.AWAITING_PAYMENT, Status.CANCELLED),
        (Status.AWAITING_CONFIRMATION, Status.CONFIRMED),
        (Status.AWAITING_CONFIRMATION, Status.CANCELLED),
        (Status.CONFIRMED, Status.CANCELLED),
    ],
)
def test_allowed_transitions(current, target):
    assert lifecycle.can_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        (Status.AWAITING_PAYMENT, Status.CONFIRMED),
        (Status.CONFIRMED, Status.AWAITING_PAYMENT),
        (Status.CANCELLED, Status.AWAITING_PAYMENT),
        (Status.CANCELLED, Status.CONFIRMED),
        (Status.CONFIRMED, Status.CONFIRMED),
    ],
)
def test_disallowed_transitions(current, target):
    assert not lifecycle.can_transition(current, target)


def test_occupancy_buckets():
    assert lifecycle.occupancy_bucket("confirmed") == "confirmed"
    assert lifecycle.occupancy_bucket("awaiting_confirmation") == "pending"
    assert lifecycle.occupancy_bucket("awaiting_payment") == "awaiting_payment"
    assert lifecycle.occupancy_bucket("cancelled") is None
    assert lifecycle.counts_toward_occupancy("awaiting_payment")
    assert not lifecycle.counts_toward_occupancy("cancelled")


def test_unknown_status_is_rejected():
    with pytest.raises(lifecycle.UnknownStatus):
        lifecycle.occupancy_bucket("pending")
    with pytest.raises(lifecycle.UnknownStatus):
        lifecycle.parse_status("")


def test_every_status_is_classified():
    active = set(lifecycle.ACTIVE_STATUSES)
    for status in Status:
        assert lifecycle.counts_toward_occupancy(status) == (status in active)


@pytest.mark.django_db
def test_transition_persists_new_status(make_booking):
    booking = make_booking("2024-06-01", "2024-06-05", Status.AWAITING_PAYMENT)

    lifecycle.transition(booking, "awaiting_confirmation")

    booking.refresh_from_db()
    assert booking.status == Status.AWAITING_CONFIRMATION


@pytest.mark.django_db
def test_cancelled_is_terminal(make_booking):
    booking = make_booking("2024-06-01", "2024-06-05", Status.CANCELLED)

    with pytest.raises(lifecycle.InvalidStatusTransition) as excinfo:
        lifecycle.transition(booking, Status.CONFIRMED)

    assert excinfo.value.current == Status.CANCELLED
    booking.refresh_from_db()
    assert booking.status == Status.CANCELLED

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

from availability.models import BlockedDate
from bookings.models import Booking
from properties.models import Property


@pytest.mark.django_db
def test_devseed_is_idempotent(settings):
    settings.DEBUG = True

    call_command("devseed")
    call_command("devseed")

    assert Property.objects.count() == 3
    assert Booking.objects.count() == 4
    assert set(Booking.objects.values_list("status", flat=True)) == set(Booking.Status.values)
    assert BlockedDate.objects.count() == 3
    admin = get_user_model().objects.get(email="admin@gounarentals.test")
    assert admin.is_superuser and admin.is_staff


@pytest.mark.django_db
def test_devseed_refuses_outside_debug(settings):
    settings.DEBUG = False
    with pytest.raises(CommandError):
        call_command("devseed")

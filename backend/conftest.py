from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from bookings.models import Booking
from bookings.pricing import compute_base_price, compute_total_price
from properties.models import Property

User = get_user_model()


@pytest.fixture
def rental(db):
    return Property.objects.create(
        name="Lagoon View Villa",
        location="West Golf, El Gouna",
        price=Decimal("100.00"),
        bedrooms=3,
        bathrooms=2,
        guests=6,
        features=["Pool"],
        images=["https://images.example.test/villa.jpg"],
    )


@pytest.fixture
def make_booking(db, rental):
    def _make(check_in, check_out, status=Booking.Status.CONFIRMED, *, target=None, **extra):
        target = target or rental
        check_in = date.fromisoformat(check_in) if isinstance(check_in, str) else check_in
        check_out = date.fromisoformat(check_out) if isinstance(check_out, str) else check_out
        base_price = compute_base_price(target.price, check_in, check_out)
        fields = {
            "name": "Greta Guest",
            "email": "greta@example.com",
            "phone": "+20 100 000 0000",
            "guests": 2,
        }
        fields.update(extra)
        return Booking.objects.create(
            property=target,
            check_in=check_in,
            check_out=check_out,
            base_price=base_price,
            total_price=compute_total_price(base_price),
            status=status,
            **fields,
        )

    return _make


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        username="admin@example.com",
        email="admin@example.com",
        password="adminpass123",
        first_name="Ada",
        last_name="Admin",
        is_staff=True,
    )


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client


@pytest.fixture
def api_client():
    return APIClient()

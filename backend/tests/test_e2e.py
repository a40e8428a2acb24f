import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from rest_framework.test import APIClient

User = get_user_model()


@pytest.mark.django_db
def test_end_to_end_booking_flow(settings, tmp_path, mailoutbox):
    settings.MEDIA_ROOT = tmp_path
    User.objects.create_user(
        username="owner@example.com",
        email="owner@example.com",
        password="pass12345",
        is_staff=True,
    )
    admin = APIClient()
    guest = APIClient()

    # Admin logs in and lists a property
    login_response = admin.post(
        "/api/auth/login/", {"email": "owner@example.com", "password": "pass12345"}, format="json"
    )
    assert login_response.status_code == 200
    admin.credentials(HTTP_AUTHORIZATION=f"Bearer {login_response.data['access']}")

    property_response = admin.post(
        "/api/admin/properties/",
        {
            "name": "Lagoon View Villa",
            "location": "West Golf, El Gouna",
            "property_type": "villa",
            "price": "150.00",
            "guests": 6,
            "images": ["https://images.example.test/villa.jpg"],
        },
        format="json",
    )
    assert property_response.status_code == 201
    property_id = property_response.data["id"]

    # Admin blocks a maintenance window
    today = timezone.localdate()
    check_in = today + timezone.timedelta(days=10)
    check_out = check_in + timezone.timedelta(days=3)
    maintenance = check_out + timezone.timedelta(days=5)
    block_response = admin.post(
        f"/api/admin/properties/{property_id}/calendar/block/",
        {"date": maintenance.isoformat(), "reason": "Pool maintenance"},
        format="json",
    )
    assert block_response.status_code == 201

    # Guest checks availability and books
    availability = guest.get(
        f"/api/properties/{property_id}/availability/",
        {"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
    )
    assert availability.data["available"] is True

    booking_response = guest.post(
        "/api/bookings/",
        {
            "property": property_id,
            "name": "Greta Guest",
            "email": "greta@example.com",
            "phone": "+20 100 000 0000",
            "check_in": check_in.isoformat(),
            "check_out": check_out.isoformat(),
            "guests": 2,
        },
        format="json",
    )
    assert booking_response.status_code == 201
    booking_id = booking_response.data["id"]
    assert booking_response.data["total_price"] == "450.00"

    # The same dates are now taken
    second_attempt = guest.get(
        f"/api/properties/{property_id}/availability/",
        {"check_in": check_out.isoformat(), "check_out": (check_out + timezone.timedelta(days=1)).isoformat()},
    )
    assert second_attempt.data["available"] is False

    occupied = guest.get(f"/api/properties/{property_id}/occupied-dates/").json()
    assert len(occupied["by_status"]["awaiting_payment"]) == 4
    assert occupied["blocked"] == [maintenance.isoformat()]

    # Guest uploads payment proof
    upload_response = guest.post(
        f"/api/bookings/{booking_id}/documents/",
        {"payment_proof": SimpleUploadedFile("proof.pdf", b"%PDF-1.4", content_type="application/pdf")},
        format="multipart",
    )
    assert upload_response.status_code == 200
    assert upload_response.data["status"] == "awaiting_confirmation"

    # Admin adds a cleaning fee and confirms
    fee_response = admin.post(
        f"/api/admin/bookings/{booking_id}/cleaning-fee/", {"cleaning_fee": "30.00"}, format="json"
    )
    assert fee_response.data["total_price"] == "480.00"

    confirm_response = admin.post(
        f"/api/admin/bookings/{booking_id}/status/", {"status": "confirmed"}, format="json"
    )
    assert confirm_response.status_code == 200

    status_response = guest.get(f"/api/bookings/{booking_id}/")
    assert status_response.data["status"] == "confirmed"
    assert status_response.data["total_price"] == "480.00"

    occupied = guest.get(f"/api/properties/{property_id}/occupied-dates/").json()
    assert len(occupied["by_status"]["confirmed"]) == 4

    # Cancelling releases the dates
    cancel_response = admin.post(
        f"/api/admin/bookings/{booking_id}/status/", {"status": "cancelled"}, format="json"
    )
    assert cancel_response.status_code == 200
    availability = guest.get(
        f"/api/properties/{property_id}/availability/",
        {"check_in": check_in.isoformat(), "check_out": check_out.isoformat()},
    )
    assert availability.data["available"] is True

    assert [message.to for message in mailoutbox] == [
        ["greta@example.com"],
        ["greta@example.com"],
        ["greta@example.com"],
    ]

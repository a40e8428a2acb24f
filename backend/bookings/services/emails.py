from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import send_mail

from bookings.models import Booking

logger = logging.getLogger(__name__)


def _format_from_email() -> str:
    default_from = settings.DEFAULT_FROM_EMAIL
    email_addr = default_from
    if '<' in default_from and default_from.endswith('>'):
        email_addr = default_from.split('<', 1)[1].rstrip('>')
    return f"Gouna Rentals <{email_addr}>"


def build_upload_url(booking: Booking) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/upload/{booking.pk}"


def build_status_url(booking: Booking) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/booking-status/{booking.pk}"


def _deliver(subject: str, body_lines: list[str], recipients: list[str]) -> bool:
    try:
        send_mail(
            subject,
            "\n".join(body_lines),
            _format_from_email(),
            recipients,
            fail_silently=False,
        )
    except OSError:
        logger.exception("Failed to send %r to %s", subject, ", ".join(recipients))
        return False
    return True


def send_booking_received_email(booking: Booking) -> bool:
    """Tell the guest their request was received and how to pay."""
    rental = booking.property
    body_lines = [
        f"Dear {booking.name},",
        "",
        "Thank you for booking with Gouna Rentals. Your booking request has been "
        "received and is awaiting payment.",
        "",
        f"Property: {rental.name} ({rental.location})",
        f"Check-in: {booking.check_in:%B %d, %Y}",
        f"Check-out: {booking.check_out:%B %d, %Y}",
        f"Guests: {booking.guests}",
        f"Total price: ${booking.total_price}",
        "",
        "Payment instructions:",
        settings.PAYMENT_INSTRUCTIONS,
        "",
        "After sending the payment, upload your payment proof and ID documents here:",
        build_upload_url(booking),
        "",
        "— The Gouna Rentals Team",
    ]
    sent = _deliver("Your Gouna Rentals booking request", body_lines, [booking.email])

    if settings.ADMIN_NOTIFICATION_EMAIL:
        _deliver(
            f"New booking: {rental.name}",
            [
                f"{booking.name} <{booking.email}>, {booking.phone}",
                f"{booking.check_in:%Y-%m-%d} to {booking.check_out:%Y-%m-%d}, {booking.guests} guest(s)",
                f"Total: ${booking.total_price}",
                f"Booking ID: {booking.pk}",
            ],
            [settings.ADMIN_NOTIFICATION_EMAIL],
        )
    return sent


def send_booking_status_email(booking: Booking) -> bool:
    rental = booking.property
    if booking.status == Booking.Status.CONFIRMED:
        subject = f"{rental.name} booking confirmed"
        headline = "Your booking is confirmed. We look forward to hosting you."
    elif booking.status == Booking.Status.CANCELLED:
        subject = f"{rental.name} booking cancelled"
        headline = "Your booking has been cancelled. Reply to this email if this is unexpected."
    else:
        return False

    body_lines = [
        f"Dear {booking.name},",
        "",
        headline,
        "",
        f"Property: {rental.name} ({rental.location})",
        f"Dates: {booking.check_in:%B %d, %Y} to {booking.check_out:%B %d, %Y}",
        f"Booking status: {build_status_url(booking)}",
        "",
        "— The Gouna Rentals Team",
    ]
    return _deliver(subject, body_lines, [booking.email])

from __future__ import annotations

import logging
from typing import Iterable

from django.db import transaction

from bookings import lifecycle
from bookings.models import Booking, BookingDocument
from core.uploads import UploadRejected, validate_upload

logger = logging.getLogger(__name__)


def attach_documents(booking: Booking, *, payment_proof=None, id_documents: Iterable = ()) -> Booking:
    """
    Store the guest's payment proof and ID documents.

    A booking still awaiting payment moves to awaiting_confirmation once it has
    a payment proof on file. Cancelled or confirmed bookings accept no uploads.
    """
    id_documents = list(id_documents)
    if booking.status not in (
        Booking.Status.AWAITING_PAYMENT,
        Booking.Status.AWAITING_CONFIRMATION,
    ):
        raise UploadRejected(
            f"Documents cannot be uploaded for a {booking.get_status_display().lower()} booking."
        )
    if payment_proof is None and not booking.payment_proof:
        raise UploadRejected("A payment proof is required.")

    for upload in [payment_proof, *id_documents]:
        if upload is not None:
            validate_upload(upload)

    with transaction.atomic():
        if payment_proof is not None:
            if booking.payment_proof:
                booking.payment_proof.delete(save=False)
            booking.payment_proof = payment_proof
            booking.save(update_fields=["payment_proof", "updated_at"])
        for upload in id_documents:
            BookingDocument.objects.create(booking=booking, file=upload, original_name=upload.name)
        if booking.status == Booking.Status.AWAITING_PAYMENT:
            lifecycle.transition(booking, Booking.Status.AWAITING_CONFIRMATION)

    logger.info(
        "Booking %s received %s payment proof and %d ID document(s)",
        booking.pk,
        "a new" if payment_proof is not None else "no new",
        len(id_documents),
    )
    return booking

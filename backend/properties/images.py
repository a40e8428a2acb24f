"""Listing photos kept in default storage, ordered on ``Property.images``."""

from __future__ import annotations

import logging
import uuid
from typing import Callable
from urllib.parse import unquote, urlparse

from django.core.files.storage import default_storage
from django.db import transaction

from core.uploads import IMAGE_CONTENT_TYPES, UploadRejected, validate_upload

from .models import Property

logger = logging.getLogger(__name__)

IMAGE_FOLDER = "property-images"


def image_storage_name(rental: Property, filename: str) -> str:
    return f"{IMAGE_FOLDER}/{rental.pk}/{uuid.uuid4().hex[:12]}-{filename}"


def stored_name_for(url: str) -> str | None:
    """Map an image URL back to its storage name, or None for external URLs."""
    path = unquote(urlparse(url).path)
    marker = f"{IMAGE_FOLDER}/"
    if marker not in path:
        return None
    return path[path.index(marker):]


def add_property_image(
    rental: Property,
    upload,
    *,
    url_for: Callable[[str], str],
    primary: bool = False,
) -> Property:
    """
    Store ``upload`` and add its URL to the listing's images.

    ``url_for`` turns a storage name into the public URL kept on the listing.
    A primary image goes to the front of the list, anything else is appended.
    """
    validate_upload(upload, IMAGE_CONTENT_TYPES)
    name = default_storage.save(image_storage_name(rental, upload.name), upload)
    url = url_for(name)

    with transaction.atomic():
        locked = Property.objects.select_for_update().get(pk=rental.pk)
        images = [image for image in locked.images if image != url]
        if primary:
            images.insert(0, url)
        else:
            images.append(url)
        locked.images = images
        locked.save(update_fields=["images", "updated_at"])

    logger.info("Stored image %s for property %s", name, rental.pk)
    return locked


def set_primary_image(rental: Property, url: str) -> Property:
    with transaction.atomic():
        locked = Property.objects.select_for_update().get(pk=rental.pk)
        if url not in locked.images:
            raise UploadRejected("That image does not belong to this property.")
        locked.images = [url] + [image for image in locked.images if image != url]
        locked.save(update_fields=["images", "updated_at"])
    return locked


def remove_property_image(rental: Property, url: str) -> Property:
    """Drop ``url`` from the listing and delete the file when it lives in our storage."""
    with transaction.atomic():
        locked = Property.objects.select_for_update().get(pk=rental.pk)
        if url not in locked.images:
            raise UploadRejected("That image does not belong to this property.")
        locked.images = [image for image in locked.images if image != url]
        locked.save(update_fields=["images", "updated_at"])

    name = stored_name_for(url)
    if name and default_storage.exists(name):
        default_storage.delete(name)
        logger.info("Deleted image %s for property %s", name, rental.pk)
    return locked

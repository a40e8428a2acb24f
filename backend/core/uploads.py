import mimetypes

from django.conf import settings

DOCUMENT_CONTENT_TYPES = {"application/pdf", "image/png", "image/jpeg", "image/webp"}
IMAGE_CONTENT_TYPES = {"image/png", "image/jpeg", "image/webp"}


class UploadRejected(ValueError):
    pass


def validate_upload(upload, allowed_content_types=DOCUMENT_CONTENT_TYPES) -> None:
    """Reject files over UPLOAD_MAX_BYTES or of a type outside ``allowed_content_types``."""
    if upload.size > settings.UPLOAD_MAX_BYTES:
        limit_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        raise UploadRejected(f"{upload.name} is larger than {limit_mb} MB.")
    content_type = upload.content_type or mimetypes.guess_type(upload.name)[0]
    if content_type not in allowed_content_types:
        kinds = ", ".join(sorted(kind.split("/")[-1].upper() for kind in allowed_content_types))
        raise UploadRejected(f"{upload.name}: unsupported file type. Upload {kinds}.")

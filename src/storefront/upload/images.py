"""Image upload rules applied before anything reaches the storage service."""

import structlog
from protean.exceptions import ValidationError

from storefront.config import get_settings
from storefront.upload import get_storage
from storefront.upload.port import StoredImage

logger = structlog.get_logger(__name__)

ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})
MAX_IMAGE_BYTES = 5 * 1024 * 1024
MAX_FILES_PER_UPLOAD = 5


def validate_image(data: bytes, content_type: str | None) -> None:
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError(
            {"file": [f"Unsupported file type {content_type!r}; allowed: jpeg, jpg, png, webp"]}
        )
    if not data:
        raise ValidationError({"file": ["The file is empty"]})
    if len(data) > MAX_IMAGE_BYTES:
        raise ValidationError({"file": ["The file exceeds the 5 MB limit"]})


def store_image(data: bytes, filename: str, content_type: str | None) -> StoredImage:
    validate_image(data, content_type)

    image = get_storage().upload(data, filename=filename, folder=get_settings().upload_folder)
    logger.info("image_uploaded", public_id=image.public_id, size=image.size, format=image.format)
    return image


def store_images(files: list[tuple[bytes, str, str | None]]) -> list[StoredImage]:
    """Validate every file first, then upload them in order."""
    if not files:
        raise ValidationError({"files": ["At least one file is required"]})
    if len(files) > MAX_FILES_PER_UPLOAD:
        raise ValidationError({"files": [f"At most {MAX_FILES_PER_UPLOAD} files can be uploaded at once"]})

    for data, _, content_type in files:
        validate_image(data, content_type)
    return [store_image(data, filename, content_type) for data, filename, content_type in files]


def discard_image(public_id: str) -> None:
    if not get_storage().delete(public_id):
        raise ValidationError({"public_id": [f"Could not delete image {public_id}"]})
    logger.info("image_deleted", public_id=public_id)

"""Image storage factory.

Provides get_storage() / set_storage() / reset_storage() to swap implementations:
- CloudinaryStorage when Cloudinary credentials are configured
- FakeStorage for development and testing
"""

from storefront.config import get_settings
from storefront.upload.fake_adapter import FakeStorage
from storefront.upload.port import ImageStorage

_current_storage: ImageStorage | None = None


def get_storage() -> ImageStorage:
    """Return the current image storage, choosing one from settings on first use."""
    global _current_storage
    if _current_storage is None:
        settings = get_settings()
        if settings.cloudinary_configured:
            from storefront.upload.cloudinary_adapter import CloudinaryStorage

            _current_storage = CloudinaryStorage(
                cloud_name=settings.cloudinary_cloud_name,
                api_key=settings.cloudinary_api_key,
                api_secret=settings.cloudinary_api_secret,
            )
        else:
            _current_storage = FakeStorage()
    return _current_storage


def set_storage(storage: ImageStorage) -> None:
    """Override the active image storage (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    """Reset to default storage."""
    global _current_storage
    _current_storage = None

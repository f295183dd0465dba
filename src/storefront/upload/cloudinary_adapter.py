"""Cloudinary image storage adapter.

Uploads are resized on Cloudinary's side to fit within 1920x1920 and served
with automatic quality and format selection.
"""

import io

import cloudinary
import cloudinary.uploader
import structlog

from storefront.upload.port import ImageStorage, StoredImage

logger = structlog.get_logger(__name__)

_TRANSFORMATION = [
    {"width": 1920, "height": 1920, "crop": "limit"},
    {"quality": "auto", "fetch_format": "auto"},
]


class CloudinaryStorage(ImageStorage):
    def __init__(self, cloud_name: str, api_key: str, api_secret: str) -> None:
        cloudinary.config(cloud_name=cloud_name, api_key=api_key, api_secret=api_secret, secure=True)

    def upload(self, data: bytes, filename: str, folder: str) -> StoredImage:
        result = cloudinary.uploader.upload(
            io.BytesIO(data),
            folder=folder,
            resource_type="image",
            transformation=_TRANSFORMATION,
        )
        return StoredImage(
            url=result["secure_url"],
            public_id=result["public_id"],
            format=result["format"],
            width=result["width"],
            height=result["height"],
            size=result["bytes"],
        )

    def delete(self, public_id: str) -> bool:
        result = cloudinary.uploader.destroy(public_id)
        if result.get("result") != "ok":
            logger.warning("cloudinary_delete_failed", public_id=public_id, result=result.get("result"))
            return False
        return True

"""Image storage port (abstract interface).

Defines the contract that image storage adapters implement, so the upload
endpoints work the same against Cloudinary in production and an in-memory
store in development and tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class StoredImage:
    """Where an uploaded image ended up, plus what the service measured."""

    url: str
    public_id: str
    format: str
    width: int
    height: int
    size: int


class ImageStorage(ABC):
    """Abstract image storage interface."""

    @abstractmethod
    def upload(self, data: bytes, filename: str, folder: str) -> StoredImage:
        """Store the image bytes under ``folder`` and return its public location."""
        ...

    @abstractmethod
    def delete(self, public_id: str) -> bool:
        """Remove a stored image. Returns False when the service reports a failure."""
        ...

"""In-memory image storage for development and testing.

Nothing leaves the process: uploads are kept in a dict keyed by public id and
served from a fake CDN host. ``calls`` records every interaction so tests can
assert on what the API asked for.
"""

from pathlib import PurePath
from uuid import uuid4

from storefront.upload.port import ImageStorage, StoredImage


class FakeStorage(ImageStorage):
    def __init__(self) -> None:
        self.images: dict[str, bytes] = {}
        self.calls: list[dict] = []

    def upload(self, data: bytes, filename: str, folder: str) -> StoredImage:
        self.calls.append({"method": "upload", "filename": filename, "folder": folder, "size": len(data)})

        public_id = f"{folder}/{uuid4().hex[:20]}"
        fmt = PurePath(filename).suffix.lstrip(".").lower() or "jpg"
        self.images[public_id] = data
        return StoredImage(
            url=f"https://images.example.com/{public_id}.{fmt}",
            public_id=public_id,
            format=fmt,
            width=0,
            height=0,
            size=len(data),
        )

    def delete(self, public_id: str) -> bool:
        self.calls.append({"method": "delete", "public_id": public_id})
        return self.images.pop(public_id, None) is not None

"""Fulcrum photo and signature operations."""
from __future__ import annotations
from typing import Any, BinaryIO, Dict, Optional

from ..models import Photo
from .client import FulcrumClient


class PhotoService:
    """Service for photo and signature resources."""

    def __init__(self, client: FulcrumClient):
        """Initialize photo service.

        Args:
            client: Configured Fulcrum client
        """
        self.client = client

    def get_photo(self, photo_id: str) -> Optional[Photo]:
        """Return photo metadata, or None when it does not exist."""
        payload = self.client.get_json(f"/photos/{photo_id}") or {}
        raw = payload.get("photo")
        return Photo(raw, client=self.client) if raw else None

    def get_signature(self, signature_id: str) -> Optional[Photo]:
        """Return signature metadata, or None when it does not exist."""
        payload = self.client.get_json(f"/signatures/{signature_id}") or {}
        raw = payload.get("signature")
        return Photo(raw, client=self.client) if raw else None

    def insert_photo(self, fields: Dict[str, Any], file: BinaryIO, filename: str = "photo.jpg") -> Optional[Photo]:
        """Upload a photo as multipart form data.

        Args:
            fields: Photo attributes (access_key, record_id, form_id, ...)
            file: Open binary file with the image
            filename: Name sent with the file part

        Returns:
            The created Photo, or None when the API returned no photo
        """
        data = {f"photo[{name}]": value for name, value in fields.items()}
        resp = self.client.post(
            "/photos.json",
            data=data,
            files={"photo[file]": (filename, file)},
        )
        payload = self.client.parse_json(resp) or {}
        raw = payload.get("photo")
        return Photo(raw, client=self.client) if raw else None

    def download_photo(self, url: str) -> Optional[bytes]:
        """Download photo bytes from an absolute URL or API path."""
        return self.client.download(url)

"""Typed wrappers around Fulcrum API resources.

Each entity declares the API attributes it knows about with ``raw_attribute``,
which maps a Python property onto a key of the decoded JSON payload.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from .exceptions import ClientNotConfiguredError


class raw_attribute:
    """Property reading (and optionally writing) one key of ``instance.raw``."""

    def __init__(self, name: str, writable: bool = False):
        self.name = name
        self.writable = writable

    def __set_name__(self, owner, attr_name):
        self.attr_name = attr_name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.raw.get(self.name)

    def __set__(self, instance, value):
        if not self.writable:
            raise AttributeError(f"'{type(instance).__name__}.{self.attr_name}' is read-only")
        instance.raw[self.name] = value


class Resource:
    """Base class for entities backed by a decoded API payload."""

    def __init__(self, raw: Optional[Dict[str, Any]] = None, client=None):
        self.raw: Dict[str, Any] = raw if raw is not None else {}
        self.client = client

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)

    def _require_client(self):
        if self.client is None:
            raise ClientNotConfiguredError(
                f"{type(self).__name__} was created without a FulcrumClient"
            )
        return self.client

    def __repr__(self) -> str:
        ident = self.raw.get("id") or self.raw.get("data_name") or self.raw.get("key")
        return f"<{type(self).__name__} {ident!r}>"


class User(Resource):
    """A Fulcrum account member."""

    id = raw_attribute("id")
    first_name = raw_attribute("first_name")
    last_name = raw_attribute("last_name")
    email = raw_attribute("email")
    contexts = raw_attribute("contexts")
    created_at = raw_attribute("created_at")
    updated_at = raw_attribute("updated_at")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Photo(Resource):
    """A photo or signature.

    Wraps either a reference stored in a record (``photo_id``/``signature_id``
    plus caption or timestamp) or the full resource returned by
    ``/photos/{id}`` and ``/signatures/{id}``.
    """

    photo_id = raw_attribute("photo_id")
    signature_id = raw_attribute("signature_id")
    caption = raw_attribute("caption")
    timestamp = raw_attribute("timestamp")

    access_key = raw_attribute("access_key")
    record_id = raw_attribute("record_id")
    form_id = raw_attribute("form_id")
    content_type = raw_attribute("content_type")
    file_size = raw_attribute("file_size")
    latitude = raw_attribute("latitude")
    longitude = raw_attribute("longitude")
    exif = raw_attribute("exif")
    original = raw_attribute("original")
    thumbnail = raw_attribute("thumbnail")
    large = raw_attribute("large")
    url = raw_attribute("url")
    created_at = raw_attribute("created_at")
    updated_at = raw_attribute("updated_at")

    @property
    def id(self) -> Optional[str]:
        return self.access_key or self.photo_id or self.signature_id

    @property
    def is_signature(self) -> bool:
        return self.signature_id is not None

    def download_image(self) -> Optional[bytes]:
        """Download the original image using the API credentials.

        A reference taken from a record only carries the id, so the full
        resource is fetched first to learn the download URL.

        Returns:
            Binary image data, or None when no URL is available
        """
        client = self._require_client()
        original = self.original
        if not original and self.id:
            from .api.photos import PhotoService

            service = PhotoService(client)
            resource = service.get_signature(self.id) if self.is_signature else service.get_photo(self.id)
            if resource is not None:
                self.raw.update(resource.raw)
                original = resource.original
        if not original:
            return None
        return client.download(original)

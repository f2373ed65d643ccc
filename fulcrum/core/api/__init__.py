"""Fulcrum REST API client library.

This package provides a modular, testable interface to the Fulcrum API.

Architecture:
- client.py: HTTP client with token header and error handling
- users.py: User listing
- forms.py: Form listing and lookup
- records.py: Record lifecycle operations (get, create, update, delete)
- photos.py: Photo and signature metadata, upload and download

Usage:
    from fulcrum.core.api import FulcrumClient, FormService, RecordService

    client = FulcrumClient("my-api-token")
    form = FormService(client).get_form("form-id")
    record = RecordService(client).get_record("record-id", form=form)
    record.get_field("notes").get_value()
"""
from .client import (
    FulcrumClient,
    REQUEST_TIMEOUT,
    DEFAULT_API_URL,
    DEFAULT_PHOTO_URL,
)
from ..exceptions import (
    FulcrumError,
    FulcrumAPIError,
    ClientNotConfiguredError,
)
from .users import UserService
from .forms import FormService
from .records import RecordService
from .photos import PhotoService

__all__ = [
    # Client
    "FulcrumClient",
    "REQUEST_TIMEOUT",
    "DEFAULT_API_URL",
    "DEFAULT_PHOTO_URL",

    # Exceptions
    "FulcrumError",
    "FulcrumAPIError",
    "ClientNotConfiguredError",

    # Services
    "UserService",
    "FormService",
    "RecordService",
    "PhotoService",
]

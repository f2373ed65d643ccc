"""Pytest shared fixtures for the Fulcrum client tests."""
import copy
import json
import pathlib
import sys
from typing import Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from fulcrum.core.api.client import FulcrumClient
from fulcrum.core.form import Form
from fulcrum.core.record import Record


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Fail loudly if a unit test reaches the real requests functions."""

    def _refuse(*args, **kwargs):
        raise AssertionError(f"Unexpected HTTP call: {args} {kwargs}")

    for verb in ("get", "post", "put", "delete"):
        monkeypatch.setattr(requests, verb, _refuse)


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, content: Optional[bytes] = None, url: str = "https://api.test/api/v2"):
        self._payload = payload
        self.status_code = status_code
        self.url = url
        if content is not None:
            self.content = content
        elif payload is not None:
            self.content = json.dumps(payload).encode()
        else:
            self.content = b""
        self.text = self.content.decode(errors="replace")

    def json(self):
        if self._payload is None:
            return json.loads(self.content)
        return self._payload


@pytest.fixture
def stub_response():
    return StubResponse


@pytest.fixture
def client():
    return FulcrumClient("test-token", base_url="https://api.test/api/v2", photo_url="https://web.test/api/v2")


# ─────────────────────────────────────────────────────────────────────────────
# Schema / record fixtures
# ─────────────────────────────────────────────────────────────────────────────
FORM_SCHEMA = {
    "id": "form-1",
    "name": "Site inspection",
    "record_count": 2,
    "elements": [
        {"type": "TextField", "key": "a001", "data_name": "site_name", "label": "Site name"},
        {
            "type": "Section",
            "key": "s100",
            "data_name": "details",
            "label": "Details",
            "elements": [
                {"type": "TextField", "key": "f1", "data_name": "notes", "label": "Notes"},
                {"type": "ChoiceField", "key": "c200", "data_name": "condition", "label": "Condition"},
                {
                    "type": "Section",
                    "key": "s110",
                    "data_name": "media",
                    "label": "Media",
                    "elements": [
                        {"type": "PhotoField", "key": "p300", "data_name": "photos", "label": "Photos"},
                        {
                            "type": "Section",
                            "key": "s111",
                            "data_name": "sign_off",
                            "label": "Sign off",
                            "elements": [
                                {"type": "SignatureField", "key": "g400", "data_name": "signature", "label": "Signature"},
                            ],
                        },
                    ],
                },
            ],
        },
        {
            "type": "Section",
            "key": "s200",
            "data_name": "measurements",
            "label": "Measurements",
            "elements": [
                {"type": "TextField", "key": "n500", "data_name": "depth", "label": "Depth", "numeric": True},
            ],
        },
    ],
}

RECORD_PAYLOAD = {
    "id": "rec-1",
    "form_id": "form-1",
    "status": "open",
    "latitude": 52.37,
    "longitude": 4.89,
    "assigned_to_id": "user-9",
    "updated_at": "2014-03-05T19:41:44Z",
    "form_values": {
        "a001": "Pier 4",
        "f1": "hello",
        "c200": {"choice_values": ["good"], "other_values": []},
        "p300": [{"photo_id": "ph-1", "caption": "front"}, {"photo_id": "ph-2", "caption": ""}],
        "g400": {"signature_id": "sig-1", "timestamp": "2014-03-05T19:40:00Z"},
    },
}


@pytest.fixture
def form_schema():
    return copy.deepcopy(FORM_SCHEMA)


@pytest.fixture
def raw_record():
    return copy.deepcopy(RECORD_PAYLOAD)


@pytest.fixture
def form(form_schema, client):
    return Form(form_schema, client=client)


@pytest.fixture
def record(raw_record, form):
    return Record(raw_record, form)

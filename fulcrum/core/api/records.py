"""Fulcrum record operations."""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from ..collection import Collection, parse_datetime
from ..exceptions import FulcrumAPIError
from ..form import Form
from ..record import Record
from .client import FulcrumClient
from .forms import FormService

logger = logging.getLogger(__name__)


class RecordService:
    """Service for reading and writing Fulcrum records.

    Every Record returned is bound to its Form so its fields resolve by data
    name. Pass ``form`` when it is already at hand to skip fetching it.
    """

    def __init__(self, client: FulcrumClient):
        """Initialize record service.

        Args:
            client: Configured Fulcrum client
        """
        self.client = client

    def get_records(
        self,
        form_id: str,
        params: Optional[Dict[str, Any]] = None,
        form: Optional[Form] = None,
    ) -> Collection[Record]:
        """Return the records of a form.

        Args:
            form_id: Fulcrum form id
            params: Extra query parameters (page, per_page, updated_since, ...)
            form: The Form, fetched once when omitted

        Returns:
            Collection of Record
        """
        query = dict(params or {})
        query["form_id"] = form_id
        payload = self.client.get_json("/records", params=query) or {}

        records = Collection(total_count=payload.get("total_count"))
        raws = payload.get("records") or []
        if raws and form is None:
            form = FormService(self.client).get_form(form_id)
        for raw in raws:
            records.add(Record(raw, form, client=self.client))
        return records

    def get_record(self, record_id: str, form: Optional[Form] = None) -> Optional[Record]:
        """Return a single record, or None when it does not exist."""
        payload = self.client.get_json(f"/records/{record_id}")
        return self._record_from_payload(payload, form)

    def record_has_remote_update(self, record_id: str, since: datetime) -> bool:
        """Test if a record was updated remotely after ``since``.

        Args:
            record_id: Fulcrum record id
            since: Local last-known update time (naive values are taken as UTC)

        Returns:
            True when the remote updated_at is later than ``since``
        """
        payload = self.client.get_json(f"/records/{record_id}") or {}
        raw = payload.get("record") or {}
        if not raw.get("updated_at"):
            return False
        return parse_datetime(raw["updated_at"]) > parse_datetime(since)

    def create_record(
        self,
        payload: Dict[str, Any],
        api_key: Optional[str] = None,
        form: Optional[Form] = None,
    ) -> Optional[Record]:
        """Create a record from a ``{"record": {...}}`` payload.

        Args:
            payload: Record payload (see Form.build_record_payload)
            api_key: Token overriding the client token for this call
            form: Form of the record, fetched when omitted

        Returns:
            The created Record, or None when the API returned no record
        """
        resp = self.client.post("/records", json=payload, api_key=api_key)
        return self._record_from_payload(self.client.parse_json(resp), form)

    def insert_record(self, raw: Dict[str, Any], form: Optional[Form] = None) -> Optional[Record]:
        """Insert an unsaved record payload as-is."""
        resp = self.client.post("/records", json={"record": raw})
        return self._record_from_payload(self.client.parse_json(resp), form)

    def update_record(
        self,
        record_id: str,
        payload: Dict[str, Any],
        form: Optional[Form] = None,
    ) -> Optional[Record]:
        """Replace a record with a ``{"record": {...}}`` payload.

        Returns:
            The updated Record, or None when the API returned no record
        """
        resp = self.client.put(f"/records/{record_id}", json=payload)
        return self._record_from_payload(self.client.parse_json(resp), form)

    def delete_record(self, record_id: str) -> bool:
        """Delete a record.

        Returns:
            True when deleted, False when the record did not exist
        """
        try:
            self.client.delete(f"/records/{record_id}")
        except FulcrumAPIError as exc:
            if exc.status_code == 404:
                logger.info("Record %s already gone", record_id)
                return False
            raise
        return True

    def _record_from_payload(self, payload: Optional[Dict[str, Any]], form: Optional[Form]) -> Optional[Record]:
        raw = (payload or {}).get("record")
        if not raw:
            return None
        if form is None and raw.get("form_id"):
            form = FormService(self.client).get_form(raw["form_id"])
        return Record(raw, form, client=self.client)

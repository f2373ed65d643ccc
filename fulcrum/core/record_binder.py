"""Binding of a raw record payload to a resolved form index."""
from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional

from . import field_codec
from .field import Field
from .schema_index import IndexEntry

logger = logging.getLogger(__name__)


class RecordBinder:
    """Answers per-field queries for one record and builds API payloads.

    The index is shared with the owning Form, never copied.
    """

    def __init__(self, index: Mapping[str, IndexEntry], raw_record: Optional[Dict[str, Any]] = None, client=None):
        """Initialize record binder.

        Args:
            index: Index of the record's form (see schema_index.build_index)
            raw_record: Decoded record payload
            client: FulcrumClient handed to the Fields built here
        """
        self.index = index
        self.raw_record = raw_record if raw_record is not None else {}
        self.client = client

    def lookup_field_value(self, key: Optional[str]) -> Any:
        """Return the stored value under a storage key, or None."""
        form_values = self.raw_record.get("form_values")
        if key is None or not isinstance(form_values, Mapping):
            return None
        return form_values.get(key)

    def get_field(self, data_name: str, return_empty: bool = False) -> Optional[Field]:
        """Get a Field by data name.

        Args:
            data_name: Data name of the field
            return_empty: Also return fields without a stored value

        Returns:
            Field wrapping element and stored value; None when the data name
            is unknown, or when the value is empty and return_empty is false
        """
        entry = self.index.get(data_name)
        if entry is None:
            return None

        stored = self.lookup_field_value(entry.key)
        if stored is None and not return_empty:
            return None
        return Field(entry.meta, stored, client=self.client)

    def set_field(self, data_name: str, value: Any) -> bool:
        """Encode a friendly value into the record's form_values, in place.

        Returns:
            False when the data name is not a field of the form
        """
        entry = self.index.get(data_name)
        if entry is None:
            logger.debug("Cannot set %r: not a field of this form", data_name)
            return False

        form_values = self.raw_record.get("form_values")
        if not isinstance(form_values, dict):
            form_values = self.raw_record["form_values"] = {}
        form_values[entry.key] = field_codec.encode(entry.meta, value)
        return True

    def build_payload(
        self,
        fields: Mapping[str, Any],
        form_id: Optional[str],
        longitude: Optional[float] = None,
        latitude: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Build a create/update payload from friendly field values.

        ``fields["location"]`` (``{"lat": ..., "lng": ...}``) and
        ``fields["assigned_to_id"]`` override the positional attributes;
        ``longitude``/``latitude`` are the fallbacks for missing or null coordinates.

        Returns:
            ``{"record": {...}}`` ready for the records endpoint
        """
        location = fields.get("location")
        if isinstance(location, Mapping):
            if location.get("lng") is not None:
                longitude = location["lng"]
            if location.get("lat") is not None:
                latitude = location["lat"]

        record: Dict[str, Any] = {
            "longitude": longitude,
            "latitude": latitude,
            "form_id": form_id,
            "form_values": field_codec.encode_fields(self.index, fields),
        }
        if fields.get("assigned_to_id") is not None:
            record["assigned_to_id"] = fields["assigned_to_id"]
        return {"record": record}

"""Fulcrum forms and their sections."""
from __future__ import annotations
import threading
from typing import Any, Dict, List, Mapping, Optional

from . import field_codec, schema_tree
from .field import Field
from .models import Resource, raw_attribute
from .record_binder import RecordBinder
from .schema_index import IndexEntry, build_index

DEFAULT_LONGITUDE = -68.899040
DEFAULT_LATITUDE = 12.115844


class Section(Resource):
    """A section element of a form schema."""

    key = raw_attribute("key")
    type = raw_attribute("type")
    label = raw_attribute("label")
    data_name = raw_attribute("data_name")
    description = raw_attribute("description")
    display = raw_attribute("display")
    hidden = raw_attribute("hidden")
    elements = raw_attribute("elements")

    def get_sections(self) -> List["Section"]:
        """Immediate child sections."""
        return [Section(element, client=self.client) for element in schema_tree.list_sections(self.raw)]

    def get_section(self, name: str) -> Optional["Section"]:
        """Find a section by data name anywhere below this one."""
        element = schema_tree.find_section(name, self.raw)
        return Section(element, client=self.client) if element is not None else None

    def get_fields(self, record=None) -> List[Field]:
        """Immediate child fields of this section.

        With a record, every field carries the record's value; fields the
        record leaves empty are still returned so a full form can be shown.

        Args:
            record: Optional Record of this section's form
        """
        fields = []
        for element in schema_tree.list_fields(self.raw):
            field = None
            if record is not None and element.get("data_name") is not None:
                field = record.get_field(element["data_name"], return_empty=True)
            fields.append(field if field is not None else Field(element, client=self.client))
        return fields


class Form(Resource):
    """A Fulcrum form (app) and its schema."""

    id = raw_attribute("id")
    name = raw_attribute("name")
    description = raw_attribute("description")
    status = raw_attribute("status")
    version = raw_attribute("version")
    record_count = raw_attribute("record_count")
    elements = raw_attribute("elements")
    title_field_keys = raw_attribute("title_field_keys")
    created_at = raw_attribute("created_at")
    updated_at = raw_attribute("updated_at")

    def __init__(self, raw: Optional[Dict[str, Any]] = None, client=None):
        super().__init__(raw, client=client)
        self._key_map: Optional[Dict[str, IndexEntry]] = None
        self._key_map_lock = threading.Lock()

    def get_key_map(self) -> Dict[str, IndexEntry]:
        """Data name -> IndexEntry(key, meta) for every field in the form.

        Built on first use and kept for the lifetime of this Form.
        """
        if self._key_map is None:
            with self._key_map_lock:
                if self._key_map is None:
                    self._key_map = build_index(self.raw)
        return self._key_map

    def get_field(self, name: str) -> Optional[Field]:
        """Value-less Field for a data name, or None if the form has no such field."""
        entry = self.get_key_map().get(name)
        return Field(entry.meta, client=self.client) if entry is not None else None

    def get_sections(self) -> List[Section]:
        """Immediate sections of the form."""
        return [Section(element, client=self.client) for element in schema_tree.list_sections(self.raw)]

    def get_section(self, name: str, section: Optional[Section] = None) -> Optional[Section]:
        """Find a section by data name, searching the whole form (or below ``section``)."""
        root = section.raw if section is not None else self.raw
        element = schema_tree.find_section(name, root)
        return Section(element, client=self.client) if element is not None else None

    def map_fields_to_keys(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Convert ``{data_name: value}`` to ``{storage key: stored value}``."""
        return field_codec.encode_fields(self.get_key_map(), fields)

    def build_record_payload(
        self,
        fields: Mapping[str, Any],
        longitude: float = DEFAULT_LONGITUDE,
        latitude: float = DEFAULT_LATITUDE,
    ) -> Dict[str, Any]:
        """Payload creating a record of this form from friendly field values."""
        return RecordBinder(self.get_key_map()).build_payload(fields, self.id, longitude, latitude)

    def create_record(
        self,
        fields: Mapping[str, Any],
        api_key: Optional[str] = None,
        longitude: float = DEFAULT_LONGITUDE,
        latitude: float = DEFAULT_LATITUDE,
    ):
        """Create a new record of this form.

        Args:
            fields: Friendly values by data name; ``location`` ({"lat", "lng"})
                and ``assigned_to_id`` are honoured
            api_key: Token overriding the client token for this call
            longitude: Fallback longitude when fields carry no location
            latitude: Fallback latitude when fields carry no location

        Returns:
            The created Record, or None when the API returned no record
        """
        from .api.records import RecordService

        payload = self.build_record_payload(fields, longitude, latitude)
        return RecordService(self._require_client()).create_record(payload, api_key=api_key, form=self)

    def get_records(self, params: Optional[Dict[str, Any]] = None):
        """All records of this form, as a Collection."""
        from .api.records import RecordService

        return RecordService(self._require_client()).get_records(self.id, params=params, form=self)

"""Fulcrum records bound to their form."""
from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional

from .field import Field
from .form import Form
from .models import Resource, raw_attribute
from .record_binder import RecordBinder


class Record(Resource):
    """A record (submission) of a Fulcrum form.

    A record without an id has not been saved yet; ``save()`` inserts it,
    after which it updates.
    """

    id = raw_attribute("id")
    form_id = raw_attribute("form_id")
    form_version = raw_attribute("form_version")
    project_id = raw_attribute("project_id", writable=True)
    status = raw_attribute("status", writable=True)
    version = raw_attribute("version")
    latitude = raw_attribute("latitude", writable=True)
    longitude = raw_attribute("longitude", writable=True)
    altitude = raw_attribute("altitude")
    assigned_to = raw_attribute("assigned_to")
    assigned_to_id = raw_attribute("assigned_to_id", writable=True)
    created_by = raw_attribute("created_by")
    created_by_id = raw_attribute("created_by_id")
    updated_by = raw_attribute("updated_by")
    updated_by_id = raw_attribute("updated_by_id")
    created_at = raw_attribute("created_at")
    updated_at = raw_attribute("updated_at")
    client_created_at = raw_attribute("client_created_at")
    client_updated_at = raw_attribute("client_updated_at")
    form_values = raw_attribute("form_values")

    def __init__(self, raw: Optional[Dict[str, Any]] = None, form: Optional[Form] = None, client=None):
        """Initialize record.

        Args:
            raw: Decoded record payload
            form: Form this record belongs to
            client: FulcrumClient; defaults to the form's client
        """
        if client is None and form is not None:
            client = form.client
        super().__init__(raw, client=client)
        self.form = form
        index = form.get_key_map() if form is not None else {}
        self._binder = RecordBinder(index, self.raw, client=client)

    @property
    def is_saved(self) -> bool:
        return bool(self.id)

    def get_form(self) -> Optional[Form]:
        return self.form

    def get_field(self, name: str, return_empty: bool = False) -> Optional[Field]:
        """Field by data name, carrying this record's value.

        Args:
            name: Data name of the field
            return_empty: Also return the field when it has no value

        Returns:
            Field, or None for unknown names and (unless return_empty) empty values
        """
        return self._binder.get_field(name, return_empty=return_empty)

    def get_fields(self) -> List[Field]:
        """Every field of the form with this record's values, empty ones included."""
        fields = []
        for name in self._binder.index:
            field = self._binder.get_field(name, return_empty=True)
            if field is not None and field.type != "Section":
                fields.append(field)
        return fields

    def set_field(self, name: str, value: Any) -> bool:
        """Assign a friendly value in place; call save() to persist it."""
        return self._binder.set_field(name, value)

    def lookup_field_value(self, key: str) -> Any:
        """Stored value by storage key."""
        return self._binder.lookup_field_value(key)

    def build_update_payload(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Payload replacing this record's form values with ``fields``.

        Location and assignee fall back to the record's current values.
        """
        form_id = self.form.id if self.form is not None else self.form_id
        payload = self._binder.build_payload(fields, form_id, self.longitude, self.latitude)
        if "assigned_to_id" not in payload["record"] and self.assigned_to_id is not None:
            payload["record"]["assigned_to_id"] = self.assigned_to_id
        return payload

    def update(self, fields: Mapping[str, Any]) -> Optional["Record"]:
        """Update the record's fields through the API.

        Returns:
            The updated Record as returned by the API, or None
        """
        from .api.records import RecordService

        payload = self.build_update_payload(fields)
        updated = RecordService(self._require_client()).update_record(self.id, payload, form=self.form)
        if updated is not None:
            self._adopt(updated)
        return updated

    def save(self) -> Optional["Record"]:
        """Insert the record when unsaved, update it otherwise."""
        from .api.records import RecordService

        service = RecordService(self._require_client())
        if self.is_saved:
            saved = service.update_record(self.id, {"record": self.raw}, form=self.form)
        else:
            saved = service.insert_record(self.raw, form=self.form)
        if saved is not None:
            self._adopt(saved)
        return saved

    def delete(self) -> bool:
        """Delete the record from Fulcrum."""
        from .api.records import RecordService

        return RecordService(self._require_client()).delete_record(self.id)

    def _adopt(self, other: "Record") -> None:
        self.raw.clear()
        self.raw.update(other.raw)

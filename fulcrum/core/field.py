"""Field of a Fulcrum form, optionally carrying a record's stored value."""
from __future__ import annotations
from typing import Any, Dict, Optional

from . import field_codec
from .models import Resource, raw_attribute


class Field(Resource):
    """A form element with an optional stored value.

    ``raw`` is the element from the form schema; ``stored_value`` is the value
    found under the element's key in a record, left untouched until
    ``get_value`` decodes it.
    """

    key = raw_attribute("key")
    type = raw_attribute("type")
    label = raw_attribute("label")
    data_name = raw_attribute("data_name")
    description = raw_attribute("description")
    required = raw_attribute("required")
    hidden = raw_attribute("hidden")
    disabled = raw_attribute("disabled")
    default_value = raw_attribute("default_value")
    choices = raw_attribute("choices")
    allow_other = raw_attribute("allow_other")
    multiple = raw_attribute("multiple")
    numeric = raw_attribute("numeric")
    visible_conditions = raw_attribute("visible_conditions")
    required_conditions = raw_attribute("required_conditions")

    def __init__(self, meta: Optional[Dict[str, Any]] = None, stored_value: Any = None, client=None):
        super().__init__(meta, client=client)
        self.stored_value = stored_value

    def get_value(self, format_array: bool = True) -> Any:
        """Return the decoded value.

        Args:
            format_array: Join multi-valued choice results with ", "

        Returns:
            None, a scalar, a list, a Photo or a list of Photo depending on
            the field type and the stored shape
        """
        return field_codec.decode(self.raw, self.stored_value, format_array=format_array, client=self.client)

    @property
    def value(self) -> Any:
        return self.get_value()

    @property
    def is_empty(self) -> bool:
        return self.stored_value is None

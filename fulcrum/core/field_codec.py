"""Stored value <-> friendly value transformations for form fields.

Fulcrum stores each field value in a shape that depends on the field type:

    TextField, NumberField, DateField, ...   "hello", 12, "2014-03-05"
    ChoiceField, ClassificationField         {"choice_values": [...], "other_values": [...]}
    PhotoField (and other media lists)       [{"photo_id": "...", "caption": ""}, ...]
    SignatureField                           {"signature_id": "...", "timestamp": "..."}

Usage:
    # stored -> friendly
    value = decode(element, record_payload["form_values"][element["key"]])

    # friendly -> stored
    form_values[element["key"]] = encode(element, "Option A")
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .models import Photo
from .schema_index import IndexEntry

logger = logging.getLogger(__name__)

SIGNATURE_FIELD = "SignatureField"
CHOICE_FIELD_TYPES = frozenset({"ChoiceField", "ClassificationField"})
MEDIA_FIELD_TYPES = frozenset({"PhotoField", "VideoField", "AudioField"})
CHOICE_KEYS = ("choice_values", "other_values")


def _single_or_list(values: Any) -> Union[None, Any, List[Any]]:
    if not values:
        return None
    values = list(values)
    return values[0] if len(values) == 1 else values


def merge_choice_values(stored: Mapping[str, Any]) -> Union[None, Any, List[Any]]:
    """Merge selected options and free-text "other" entries.

    ``choice_values`` is the base: a scalar when it holds exactly one entry, a
    list otherwise. ``other_values`` is appended the same way. A scalar base
    is promoted to a list when anything is appended to it.

    Example:
        >>> merge_choice_values({"choice_values": ["A", "B"], "other_values": ["C"]})
        ['A', 'B', 'C']
        >>> merge_choice_values({"choice_values": ["X"]})
        'X'
    """
    result = _single_or_list(stored.get("choice_values"))
    others = _single_or_list(stored.get("other_values"))
    if others is None:
        return result
    if result is None:
        return others

    others = others if isinstance(others, list) else [others]
    if isinstance(result, list):
        return result + others
    return [result] + others


def decode(
    meta: Mapping[str, Any],
    stored: Any,
    format_array: bool = True,
    client=None,
) -> Any:
    """Convert a stored value into its display/programmatic value.

    Args:
        meta: Element describing the field (its ``type`` drives the decoding)
        stored: Value from the record's ``form_values``
        format_array: Join multi-valued choice results with ", "
        client: FulcrumClient handed to Photo references

    Returns:
        Photo for signatures, list of Photo for media lists, merged choice
        value for choice objects, the stored value unchanged otherwise
    """
    field_type = meta.get("type")

    if isinstance(stored, Mapping):
        if field_type == SIGNATURE_FIELD:
            return Photo(dict(stored), client=client)
        if any(key in stored for key in CHOICE_KEYS):
            value = merge_choice_values(stored)
            if format_array and isinstance(value, list):
                value = ", ".join(str(item) for item in value)
            return value
        _log_mismatch(meta, stored)
        return stored

    if isinstance(stored, list):
        if all(isinstance(item, Mapping) for item in stored):
            return [Photo(dict(item), client=client) for item in stored]
        _log_mismatch(meta, stored)
        return stored

    if stored is not None and (field_type in MEDIA_FIELD_TYPES or field_type == SIGNATURE_FIELD):
        _log_mismatch(meta, stored)
    return stored


def encode(meta: Mapping[str, Any], value: Any) -> Any:
    """Convert a friendly value into the storage shape for its field.

    Choice fields take a single selection; multi-select encoding is not
    supported and a list value is wrapped as given.
    """
    if meta.get("type") in CHOICE_FIELD_TYPES:
        if isinstance(value, (list, tuple)):
            logger.warning(
                "Field %r: multi-select encoding is not supported, storing %r as one choice",
                meta.get("data_name"),
                value,
            )
        return {"choice_values": [value]}
    return value


def encode_fields(index: Mapping[str, IndexEntry], fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Map ``{data_name: friendly value}`` to ``{storage key: stored value}``.

    Data names missing from the index are dropped.
    """
    form_values: Dict[str, Any] = {}
    for data_name, value in fields.items():
        entry = index.get(data_name)
        if entry is None:
            logger.debug("Dropping %r: not a field of this form", data_name)
            continue
        form_values[entry.key] = encode(entry.meta, value)
    return form_values


def _log_mismatch(meta: Mapping[str, Any], stored: Any) -> None:
    logger.warning(
        "Field %r (%s): unexpected stored value of type %s, passing it through",
        meta.get("data_name"),
        meta.get("type"),
        type(stored).__name__,
    )

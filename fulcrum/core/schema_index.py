"""Flat lookup table over a Fulcrum form schema.

Form schemas are trees: the form root and every ``Section`` carry an ordered
``elements`` list, leaf fields carry a storage ``key`` and a human
``data_name``. Records store values under the key, callers talk in data names.
``build_index`` flattens the tree into ``data_name -> IndexEntry(key, meta)``.

Usage:
    index = build_index(form_payload)
    index["notes"].key   # -> "f1"
    index["notes"].meta  # -> the element dict
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexEntry:
    """Storage key and element metadata for one data name."""

    key: Optional[str]
    meta: Dict[str, Any]

    @property
    def type(self) -> Optional[str]:
        return self.meta.get("type")


def child_elements(node: Any) -> Iterable[Dict[str, Any]]:
    """Return the child elements of a schema node.

    A node without ``elements`` (or with a null list) has no children.
    """
    if not isinstance(node, Mapping):
        return []
    return [element for element in node.get("elements") or [] if isinstance(element, Mapping)]


def build_index(root: Any) -> Dict[str, IndexEntry]:
    """Map every data name in the schema to its storage key and element.

    Pre-order, depth-first. Containers without a data name contribute no entry
    but are still descended. Duplicate data names: the last one visited wins.

    Args:
        root: Form payload (or any element) carrying ``elements``

    Returns:
        Dict of data name to IndexEntry; empty for a missing or malformed root
    """
    index: Dict[str, IndexEntry] = {}
    _collect(root, index)
    return index


def _collect(node: Any, index: Dict[str, IndexEntry]) -> None:
    for element in child_elements(node):
        data_name = element.get("data_name")
        if data_name is not None:
            if data_name in index:
                logger.debug("Duplicate data_name %r in form schema; keeping key %r", data_name, element.get("key"))
            index[data_name] = IndexEntry(key=element.get("key"), meta=element)

        if element.get("elements") is not None:
            _collect(element, index)

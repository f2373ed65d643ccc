"""Hierarchical navigation over a form schema.

Works on the raw element dicts; ``Form`` and ``Section`` wrap the results.
Independent of the flat index built by ``schema_index``.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from .schema_index import child_elements

SECTION_TYPE = "Section"


def list_sections(node: Any) -> List[Dict[str, Any]]:
    """Immediate child sections of ``node``, in schema order."""
    return [element for element in child_elements(node) if element.get("type") == SECTION_TYPE]


def list_fields(node: Any) -> List[Dict[str, Any]]:
    """Immediate child elements of ``node`` that are not sections."""
    return [element for element in child_elements(node) if element.get("type") != SECTION_TYPE]


def find_section(name: str, node: Any) -> Optional[Dict[str, Any]]:
    """Find a section by data name anywhere below ``node``.

    The immediate sections are checked first; only when none of them matches
    is each one searched in turn, depth-first.

    Args:
        name: Data name of the section
        node: Form payload or section element to search from

    Returns:
        The section element, or None
    """
    sections = list_sections(node)
    for section in sections:
        if section.get("data_name") == name:
            return section

    for section in sections:
        found = find_section(name, section)
        if found is not None:
            return found
    return None

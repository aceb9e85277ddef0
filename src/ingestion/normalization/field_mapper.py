"""
Field Mapper for priority-ordered field extraction from raw tracking data.

Every canonical attribute is resolved from an ordered tuple of source paths;
the first path holding a present value wins. Supports:
- Dot notation for nested fields: "transportCall.location.locode"
- Array indexing: "events[0]", "events[-1].eventDateTime"
"""

import logging
import re
from typing import Any, Dict, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

_INDEX_PATH = re.compile(r"^([^[]+)\[(-?\d+)\](.*)$")


def is_present(value: Any) -> bool:
    """None and the empty string are absent; anything else (0, False) is present."""
    return value is not None and value != ""


def extract_field(data: Any, path: str) -> Any:
    """
    Extract a field using dot notation or array indexing.

    Supports:
    - "field" - simple field access
    - "parent.child" - nested field access
    - "items[0]" - array index access (negative indexes count from the end)
    - "items[0].name" - array index then nested access

    Args:
        data: Source data (dict or list)
        path: Field path with optional array notation

    Returns:
        Extracted value, or None when any step of the path is missing
    """
    if not path:
        return data

    # Handle array index: items[0].name or items[0]
    index_match = _INDEX_PATH.match(path)
    if index_match:
        field_name = index_match.group(1)
        index = int(index_match.group(2))
        remaining_path = index_match.group(3)
        if remaining_path.startswith("."):
            remaining_path = remaining_path[1:]

        items = extract_field(data, field_name)
        if not isinstance(items, list) or not -len(items) <= index < len(items):
            return None

        item = items[index]
        if remaining_path:
            return extract_field(item, remaining_path)
        return item

    # Simple dot notation: parent.child
    parts = path.split(".", 1)
    if len(parts) == 1:
        return _get_value(data, parts[0])

    # Nested access
    parent_value = _get_value(data, parts[0])
    if parent_value is None:
        return None
    return extract_field(parent_value, parts[1])


def _get_value(data: Any, key: str) -> Any:
    if isinstance(data, dict):
        return data.get(key)
    return None


def first_present(data: Any, paths: Sequence[str]) -> Any:
    """
    Return the value of the first path that holds a present value.

    Args:
        data: Source data
        paths: Ordered priority list of paths

    Returns:
        First present value, or None
    """
    for path in paths:
        value = extract_field(data, path)
        if is_present(value):
            return value
    return None


class FieldMapper:
    """
    Maps raw source data to canonical attributes using priority lists.

    Each target attribute is bound to an ordered tuple of source paths, so the
    fallback order is declared as data rather than buried in expressions.
    """

    def __init__(self, field_mappings: Mapping[str, Sequence[str]]):
        """
        Initialize the field mapper.

        Args:
            field_mappings: Dict mapping target field names to ordered source paths.
                Example: {"vessel_name": ("vessel.vesselName", "vessel.name")}
        """
        self.field_mappings = dict(field_mappings)

    def map_event(self, data: Any) -> Dict[str, Any]:
        """
        Resolve every configured target field.

        Args:
            data: Raw record (or a context dict of sub-objects)

        Returns:
            Dict with one entry per target field, None when nothing matched
        """
        result = {}
        for target_field, paths in self.field_mappings.items():
            value = first_present(data, paths)
            if value is None:
                logger.debug(f"No value for {target_field} in any of {list(paths)}")
            result[target_field] = value
        return result

    def get(self, data: Any, target_field: str) -> Optional[Any]:
        """Resolve a single target field."""
        return first_present(data, self.field_mappings.get(target_field, ()))

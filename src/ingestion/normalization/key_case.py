"""
Key-case normalization for upstream payloads.

Upstream tracking responses mix snake_case and camelCase keys at any depth.
Everything downstream looks fields up by their camelCase name, so payloads are
converted once, up front, into a camelCase copy.
"""

import re
from typing import Any

_SNAKE_SEGMENT = re.compile(r"_([a-z])")


def snake_to_camel(key: str) -> str:
    """
    Convert a snake_case key to camelCase.

    Only ``_`` followed by a lowercase letter is folded, so camelCase keys and
    upper-case acronyms (``UNLocationCode``) come back unchanged.

    Example:
        >>> snake_to_camel("shipment_event_type_code")
        'shipmentEventTypeCode'
    """
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), key)


def deep_camel_case(value: Any) -> Any:
    """
    Recursively convert every dict key to camelCase.

    Returns a new structure; the input is not modified. Lists are mapped
    element-wise and scalars are returned as is.
    """
    if isinstance(value, list):
        return [deep_camel_case(item) for item in value]
    if isinstance(value, dict):
        return {
            (snake_to_camel(k) if isinstance(k, str) else k): deep_camel_case(v)
            for k, v in value.items()
        }
    return value

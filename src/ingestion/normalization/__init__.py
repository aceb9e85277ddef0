"""
Normalization module for tracking responses.

This package provides:
- normalize_response: Full pipeline from raw payload to NormalizedResult
- Shape resolution: resolve_events, extract_metadata, extract_containers
- Event normalization: normalize_event and its field resolvers
- Correlation: locate_span, serialize_payload, TextSpan
- Key case helpers: snake_to_camel, deep_camel_case
- FieldMapper: Priority-list field extraction
"""

from .correlation import TextSpan, get_event_id, locate_span, serialize_payload
from .event_normalizer import (
    classify_event_type,
    get_classifier,
    get_date_time,
    get_location,
    get_type_code,
    get_vessel,
    normalize_event,
)
from .field_mapper import FieldMapper, extract_field, first_present, is_present
from .key_case import deep_camel_case, snake_to_camel
from .response_normalizer import normalize_response
from .shape_resolver import (
    EVENT_LIST_RESOLVERS,
    ResolvedPayload,
    extract_containers,
    extract_metadata,
    find_event_list,
    resolve_events,
)

__all__ = [
    # Pipeline
    "normalize_response",
    # Shape resolution
    "EVENT_LIST_RESOLVERS",
    "ResolvedPayload",
    "resolve_events",
    "find_event_list",
    "extract_metadata",
    "extract_containers",
    # Event normalization
    "normalize_event",
    "classify_event_type",
    "get_type_code",
    "get_date_time",
    "get_classifier",
    "get_location",
    "get_vessel",
    # Correlation
    "TextSpan",
    "locate_span",
    "serialize_payload",
    "get_event_id",
    # Key case
    "snake_to_camel",
    "deep_camel_case",
    # Field Mapper
    "FieldMapper",
    "extract_field",
    "first_present",
    "is_present",
]

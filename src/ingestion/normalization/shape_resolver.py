"""
Shape Resolver.

Locates the raw event list inside an upstream tracking response whose envelope
is not known in advance, and extracts response metadata and per-container
summaries.

Resolution is an ordered pipeline of strategies. Each strategy is a pure
function ``(payload, container_filter) -> Optional[list]``; the first one that
returns a list wins. The probe order is therefore the order of
EVENT_LIST_RESOLVERS, nothing else.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from src.ingestion.normalization.field_mapper import FieldMapper, first_present, is_present
from src.ingestion.normalization.key_case import deep_camel_case
from src.schemas.tracking import ContainerSummary, EventType, TrackingMetadata

logger = logging.getLogger(__name__)

EventListResolver = Callable[[Any, Optional[str]], Optional[List[Any]]]

ENVELOPE_KEYS: Tuple[str, ...] = ("events", "data", "results", "items", "records", "payload")

CONTAINER_REFERENCE_FIELDS: Tuple[str, ...] = ("equipmentReference", "containerNumber")

# Any of these on a bare object marks it as a single event
SINGLE_EVENT_MARKERS: Tuple[str, ...] = (
    "eventType",
    "eventId",
    "eventID",
    *(event_type.code_field for event_type in EventType),
    "eventTypeCode",
)

LATEST_STATUS_FIELDS: Tuple[str, ...] = (
    "eventDescription",
    "transportEventTypeCode",
    "equipmentEventTypeCode",
    "shipmentEventTypeCode",
)

LATEST_DATE_FIELDS: Tuple[str, ...] = ("eventDateTime", "eventDatetime")

METADATA_MAPPER = FieldMapper(
    {
        "identifier": ("identifier",),
        "identifier_type": ("identifierType",),
        "transport_status": ("transportStatus",),
        "number_of_related_equipments": ("numberOfRelatedEquipments",),
    }
)


@dataclass(frozen=True)
class ResolvedPayload:
    """
    Result of shape resolution.

    ``raw_events`` are elements of ``payload``, the camelCased copy of the
    response, so the Event Normalizer must not convert them again.
    """

    raw_events: List[Any] = field(default_factory=list)
    containers: List[ContainerSummary] = field(default_factory=list)
    metadata: TrackingMetadata = field(default_factory=TrackingMetadata)
    payload: Any = None
    strategy: Optional[str] = None


# ============================================================================
# HELPERS
# ============================================================================


def _containers(payload: Any) -> Optional[List[Any]]:
    if isinstance(payload, dict) and isinstance(payload.get("containers"), list):
        return payload["containers"]
    return None


def _container_events(container: Any) -> List[Any]:
    if isinstance(container, dict) and isinstance(container.get("events"), list):
        return container["events"]
    return []


def _container_reference(container: Any) -> Optional[Any]:
    return first_present(container, CONTAINER_REFERENCE_FIELDS)


# ============================================================================
# STRATEGIES
# ============================================================================


def resolve_container_filter(payload: Any, container_filter: Optional[str]) -> Optional[List[Any]]:
    """Events of the one container matching the filter; [] if none matches."""
    containers = _containers(payload)
    if containers is None or not container_filter:
        return None
    for container in containers:
        if _container_reference(container) == container_filter:
            return _container_events(container)
    logger.debug(f"No container matches filter {container_filter!r}")
    return []


def resolve_merged_containers(payload: Any, container_filter: Optional[str]) -> Optional[List[Any]]:
    """Every container's events, concatenated in container order."""
    containers = _containers(payload)
    if containers is None:
        return None
    merged: List[Any] = []
    for container in containers:
        merged.extend(_container_events(container))
    # Containers without any events fall through to the envelope probes
    return merged or None


def resolve_root_array(payload: Any, container_filter: Optional[str]) -> Optional[List[Any]]:
    """The response itself is the event list."""
    return payload if isinstance(payload, list) else None


def resolve_envelope(payload: Any, container_filter: Optional[str]) -> Optional[List[Any]]:
    """First envelope key at the top level holding an array."""
    if not isinstance(payload, dict):
        return None
    for key in ENVELOPE_KEYS:
        if isinstance(payload.get(key), list):
            return payload[key]
    return None


def resolve_nested_envelope(payload: Any, container_filter: Optional[str]) -> Optional[List[Any]]:
    """Envelope one level deeper, e.g. ``{"data": {"events": [...]}}``."""
    if not isinstance(payload, dict):
        return None
    for key in ENVELOPE_KEYS:
        inner = payload.get(key)
        if isinstance(inner, dict):
            found = resolve_envelope(inner, container_filter)
            if found is not None:
                return found
    return None


def resolve_single_event(payload: Any, container_filter: Optional[str]) -> Optional[List[Any]]:
    """A bare event object is wrapped into a one-element list."""
    if isinstance(payload, dict) and any(
        is_present(payload.get(marker)) for marker in SINGLE_EVENT_MARKERS
    ):
        return [payload]
    return None


EVENT_LIST_RESOLVERS: Tuple[Tuple[str, EventListResolver], ...] = (
    ("container_filter", resolve_container_filter),
    ("merged_containers", resolve_merged_containers),
    ("root_array", resolve_root_array),
    ("envelope", resolve_envelope),
    ("nested_envelope", resolve_nested_envelope),
    ("single_event", resolve_single_event),
)


# ============================================================================
# PUBLIC API
# ============================================================================


def find_event_list(
    payload: Any,
    container_filter: Optional[str] = None,
) -> Tuple[List[Any], Optional[str]]:
    """
    Run the strategies in order over an already camelCased payload.

    Returns:
        (raw event list, name of the matching strategy or None)
    """
    for name, resolver in EVENT_LIST_RESOLVERS:
        events = resolver(payload, container_filter)
        if events is not None:
            return events, name
    return [], None


def extract_metadata(payload: Any) -> TrackingMetadata:
    """Read response metadata off the top level; absent fields are None."""
    if not isinstance(payload, dict):
        return TrackingMetadata()
    return TrackingMetadata(**METADATA_MAPPER.map_event(payload))


def summarize_container(container: Any) -> ContainerSummary:
    """Digest of one container, from the last element of its own event list."""
    events = _container_events(container)
    latest = events[-1] if events else None
    return ContainerSummary(
        equipment_reference=_container_reference(container),
        event_count=len(events),
        latest_status=first_present(latest, LATEST_STATUS_FIELDS),
        latest_date=first_present(latest, LATEST_DATE_FIELDS),
    )


def extract_containers(payload: Any) -> List[ContainerSummary]:
    """One summary per entry of ``containers``; [] when there is none."""
    return [summarize_container(c) for c in _containers(payload) or []]


def resolve_events(payload: Any, container_filter: Optional[str] = None) -> ResolvedPayload:
    """
    Resolve the raw event list, container summaries and metadata of a response.

    The payload is camelCased exactly once here; the returned raw events belong
    to that copy.

    Args:
        payload: Raw JSON value as returned upstream
        container_filter: Optional equipment reference to restrict events to

    Returns:
        ResolvedPayload
    """
    camel = deep_camel_case(payload)
    raw_events, strategy = find_event_list(camel, container_filter)
    logger.debug(
        f"Resolved {len(raw_events)} raw events "
        f"(strategy={strategy}, container_filter={container_filter})"
    )
    return ResolvedPayload(
        raw_events=raw_events,
        containers=extract_containers(camel),
        metadata=extract_metadata(camel),
        payload=camel,
        strategy=strategy,
    )

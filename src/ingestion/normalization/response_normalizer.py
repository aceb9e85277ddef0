"""
Response normalization pipeline.

raw payload -> Shape Resolver -> raw event list -> Event Normalizer -> NormalizedResult

Stateless and synchronous: each call builds a fresh result from one response,
so re-running it on every container-filter change is safe.
"""

import logging
from typing import Any, Optional

from src.ingestion.normalization.event_normalizer import normalize_event
from src.ingestion.normalization.shape_resolver import resolve_events
from src.schemas.tracking import NormalizedResult

logger = logging.getLogger(__name__)


def normalize_response(
    payload: Any,
    container_filter: Optional[str] = None,
) -> NormalizedResult:
    """
    Normalize one upstream tracking response.

    Never raises for any JSON value: empty, minimal or unrecognized payloads
    yield a zero-event result with all-null metadata.

    Args:
        payload: Raw JSON value (object or array) from a tracking endpoint
        container_filter: Optional equipment reference; when the response has
            a ``containers`` list only that container's events are kept

    Returns:
        NormalizedResult
    """
    resolved = resolve_events(payload, container_filter)

    # Raw events are already camelCased by the resolver
    events = [normalize_event(raw, keys_normalized=True) for raw in resolved.raw_events]

    result = NormalizedResult.from_events(
        events,
        metadata=resolved.metadata,
        containers=resolved.containers,
    )
    logger.debug(
        f"Normalized {result.total_events} events "
        f"(transport={len(result.transport_events)}, "
        f"equipment={len(result.equipment_events)}, "
        f"shipment={len(result.shipment_events)}, "
        f"strategy={resolved.strategy})"
    )
    return result

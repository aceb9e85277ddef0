"""
Tracking references and their upstream endpoints.

A shipment is tracked by bill of lading, booking reference or container number;
each reference type has its own upstream endpoint. Endpoint templates live in
``src/configs/tracking.yaml``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from urllib.parse import quote, urlencode

from src.configs.config import Config
from src.schemas.tracking import ReferenceType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackingRequest:
    """Upstream request for one tracking reference."""

    reference_type: ReferenceType
    reference: str
    url: str
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def full_url(self) -> str:
        """URL including the query string."""
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(self.params)}"


def parse_reference_type(value: Union[str, ReferenceType]) -> ReferenceType:
    """
    Parse a reference-type tag ('bl', 'booking', 'container').

    Raises:
        ValueError: If the tag is not a known reference type
    """
    if isinstance(value, ReferenceType):
        return value
    try:
        return ReferenceType(str(value).strip().lower())
    except ValueError:
        valid = [t.value for t in ReferenceType]
        raise ValueError(f'Invalid type "{value}". Use one of {valid}.')


def build_tracking_request(
    reference_type: Union[str, ReferenceType],
    reference: str,
    config: Optional[Dict[str, Any]] = None,
) -> TrackingRequest:
    """
    Build the upstream request for a tracking reference.

    Args:
        reference_type: 'bl', 'booking' or 'container'
        reference: The reference number; URL-encoded into the path
        config: The ``tracking`` config section (loaded from YAML when omitted)

    Returns:
        TrackingRequest

    Raises:
        ValueError: On an unknown reference type, a blank reference, or a
            reference type missing from the config
    """
    ref_type = parse_reference_type(reference_type)
    reference = (reference or "").strip()
    if not reference:
        raise ValueError("Please enter a reference number.")

    if config is None:
        config = Config.load_tracking_config()["tracking"]

    endpoint = config.get("endpoints", {}).get(ref_type.value)
    if not endpoint:
        raise ValueError(f"No endpoint configured for reference type '{ref_type.value}'")

    base_url = str(config.get("base_url", "")).rstrip("/")
    path = endpoint["path"].format(reference=quote(reference, safe=""))
    request = TrackingRequest(
        reference_type=ref_type,
        reference=reference,
        url=f"{base_url}{path}",
        params=dict(config.get("query_params") or {}),
    )
    logger.debug(f"Built {ref_type.value} request: {request.full_url}")
    return request

# src/schemas/tracking.py
"""
Canonical Tracking Event Schema for the Oceanio tracker.

Upstream tracking endpoints (bill of lading, booking, container) return DCSA-like
event histories in several envelope shapes and naming conventions. This schema is
the single normalized model those responses are mapped into.

All models use snake_case attributes with camelCase aliases, so
``model_dump(by_alias=True)`` produces the DCSA-style output contract.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.schemas.labels import (
    CLASSIFIER_LABELS,
    EVENT_CODE_LABELS,
    EVENT_TYPE_LABELS,
    LEG_TYPE_LABELS,
    TRANSPORT_CALL_TYPE_LABELS,
    lookup_label,
)


def _coerce_text(v: Any) -> Optional[str]:
    """Coerce scalar upstream values to str; structured values become None."""
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, (bool, int, float)):
        return str(v)
    return None


def _coerce_number_or_text(v: Any) -> Optional[Union[int, str]]:
    """Keep integers as integers, everything else goes through _coerce_text."""
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return _coerce_text(v)


class TrackingModel(BaseModel):
    """Base model: immutable, camelCase aliases, populate by either name."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# ENUMS
# ============================================================================


class EventType(str, Enum):
    """
    DCSA event family.
    """

    TRANSPORT = "TRANSPORT"
    EQUIPMENT = "EQUIPMENT"
    SHIPMENT = "SHIPMENT"

    @property
    def code_field(self) -> str:
        """
        Family-specific type-code key.

        Example:
            >>> EventType.SHIPMENT.code_field
            'shipmentEventTypeCode'
        """
        return f"{self.value.lower()}EventTypeCode"


class EventClassifierCode(str, Enum):
    """
    DCSA classifier: Actual, Planned, Estimated, Requested.
    """

    ACT = "ACT"
    PLN = "PLN"
    EST = "EST"
    REQ = "REQ"


class ReferenceType(str, Enum):
    """Reference a shipment is tracked by."""

    BILL_OF_LADING = "bl"
    BOOKING = "booking"
    CONTAINER = "container"


# ============================================================================
# TRANSPORT CALL
# ============================================================================


class LocationInfo(TrackingModel):
    """
    Location of a transport call.
    """

    location_name: Optional[str] = None
    facility_name: Optional[str] = None
    country: Optional[str] = None
    locode: Optional[str] = Field(
        default=None, description="UN/LOCODE, e.g. 'NLRTM'"
    )

    @field_validator("location_name", "facility_name", "country", "locode", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)


class VesselInfo(TrackingModel):
    """
    Vessel serving a transport call.
    """

    vessel_name: Optional[str] = None

    @field_validator("vessel_name", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)


class TransportCall(TrackingModel):
    """
    Scheduled stop of a vessel or vehicle at a location.
    """

    location: LocationInfo = Field(default_factory=LocationInfo)
    vessel: VesselInfo = Field(default_factory=VesselInfo)
    carrier_voyage_number: Optional[str] = None
    mode_of_transport: Optional[str] = Field(
        default=None, description="e.g. 'VESSEL', 'TRUCK', 'RAIL', 'BARGE'"
    )
    transport_call_type: Optional[str] = None

    @field_validator(
        "carrier_voyage_number",
        "mode_of_transport",
        "transport_call_type",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)


# ============================================================================
# CANONICAL EVENT
# ============================================================================


class CanonicalEvent(TrackingModel):
    """
    One normalized DCSA event.

    ``raw`` is a read-only back-reference to the exact raw record the event was
    derived from. It is never serialized and is used to correlate the event with
    the original response text.
    """

    event_type: EventType = EventType.TRANSPORT
    type_code: Optional[str] = Field(
        default=None, description="Family-specific code, e.g. 'ARRI', 'GTIN', 'BOOT'"
    )
    event_classifier_code: Optional[str] = Field(
        default=None,
        description="ACT | PLN | EST | REQ, unknown codes pass through",
    )
    event_date_time: Optional[str] = None
    event_description: Optional[str] = None

    transport_call: TransportCall = Field(default_factory=TransportCall)

    # Shipment context
    leg_number: Optional[Union[int, str]] = None
    leg_type: Optional[str] = None
    source_type: Optional[str] = None
    equipment_reference: Optional[str] = None
    empty_indicator_code: Optional[str] = None
    iso_equipment_code: Optional[str] = None

    raw: Any = Field(default=None, exclude=True, repr=False)

    @field_validator(
        "type_code",
        "event_classifier_code",
        "event_date_time",
        "event_description",
        "leg_type",
        "source_type",
        "equipment_reference",
        "empty_indicator_code",
        "iso_equipment_code",
        mode="before",
    )
    @classmethod
    def coerce_text(cls, v):
        """Upstream scalars of any JSON type become strings."""
        return _coerce_text(v)

    @field_validator("leg_number", mode="before")
    @classmethod
    def coerce_leg_number(cls, v):
        return _coerce_number_or_text(v)

    @property
    def event_type_label(self) -> str:
        return EVENT_TYPE_LABELS[self.event_type.value]

    @property
    def type_code_label(self) -> Optional[str]:
        return lookup_label(EVENT_CODE_LABELS, self.type_code)

    @property
    def classifier_label(self) -> Optional[str]:
        return lookup_label(CLASSIFIER_LABELS, self.event_classifier_code)

    @property
    def leg_type_label(self) -> Optional[str]:
        return lookup_label(LEG_TYPE_LABELS, self.leg_type)

    @property
    def transport_call_type_label(self) -> Optional[str]:
        return lookup_label(
            TRANSPORT_CALL_TYPE_LABELS, self.transport_call.transport_call_type
        )

    def to_dcsa(self) -> Dict[str, Any]:
        """
        Serialize to the DCSA output shape.

        The type code is emitted under the family-specific key instead of
        ``typeCode``.

        Example:
            >>> CanonicalEvent(event_type=EventType.SHIPMENT, type_code="BOOT").to_dcsa()["shipmentEventTypeCode"]
            'BOOT'
        """
        body = self.model_dump(by_alias=True, exclude={"type_code"}, mode="json")
        event_type = body.pop("eventType")
        return {
            "eventType": event_type,
            self.event_type.code_field: self.type_code,
            **body,
        }


# ============================================================================
# AGGREGATES
# ============================================================================


class TrackingMetadata(TrackingModel):
    """
    Top-level metadata of a tracking response.
    """

    identifier: Optional[str] = None
    identifier_type: Optional[str] = Field(
        default=None, description="e.g. 'BILL_OF_LADING_NUMBER'"
    )
    transport_status: Optional[str] = Field(
        default=None, description="e.g. 'IN_TRANSIT', 'COMPLETED'"
    )
    number_of_related_equipments: Optional[Union[int, str]] = None

    @field_validator("identifier", "identifier_type", "transport_status", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)

    @field_validator("number_of_related_equipments", mode="before")
    @classmethod
    def coerce_count(cls, v):
        return _coerce_number_or_text(v)


class ContainerSummary(TrackingModel):
    """
    Per-container digest derived from the container's own event list.

    The upstream list order is trusted as chronological: the latest event is
    the last one.
    """

    equipment_reference: Optional[str] = None
    event_count: int = 0
    latest_status: Optional[str] = None
    latest_date: Optional[str] = None

    @field_validator("equipment_reference", "latest_status", "latest_date", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return _coerce_text(v)


class NormalizedResult(TrackingModel):
    """
    Aggregate output of one normalization pass.

    Built fresh for every response; the three family sublists keep the order
    of ``all_events``.
    """

    total_events: int = 0
    transport_events: List[CanonicalEvent] = Field(default_factory=list)
    equipment_events: List[CanonicalEvent] = Field(default_factory=list)
    shipment_events: List[CanonicalEvent] = Field(default_factory=list)
    all_events: List[CanonicalEvent] = Field(default_factory=list)
    metadata: TrackingMetadata = Field(default_factory=TrackingMetadata)
    containers: List[ContainerSummary] = Field(default_factory=list)

    @classmethod
    def from_events(
        cls,
        events: List[CanonicalEvent],
        metadata: Optional[TrackingMetadata] = None,
        containers: Optional[List[ContainerSummary]] = None,
    ) -> "NormalizedResult":
        """
        Build a result, splitting events by family.

        Args:
            events: Normalized events in upstream order
            metadata: Extracted response metadata
            containers: Container summaries

        Returns:
            NormalizedResult
        """
        events = list(events)
        return cls(
            total_events=len(events),
            transport_events=[e for e in events if e.event_type == EventType.TRANSPORT],
            equipment_events=[e for e in events if e.event_type == EventType.EQUIPMENT],
            shipment_events=[e for e in events if e.event_type == EventType.SHIPMENT],
            all_events=events,
            metadata=metadata or TrackingMetadata(),
            containers=list(containers or []),
        )

    @classmethod
    def empty(cls) -> "NormalizedResult":
        """Zero-event result with all-null metadata."""
        return cls.from_events([])

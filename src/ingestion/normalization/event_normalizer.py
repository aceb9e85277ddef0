"""
Event Normalizer.

Maps one raw tracking event, in any of the upstream naming conventions, onto a
CanonicalEvent. Every lookup goes through a declared priority list, and every
miss degrades to None: normalization never fails.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from src.ingestion.normalization.field_mapper import FieldMapper, first_present, is_present
from src.ingestion.normalization.key_case import deep_camel_case
from src.schemas.tracking import (
    CanonicalEvent,
    EventType,
    LocationInfo,
    TransportCall,
    VesselInfo,
)

logger = logging.getLogger(__name__)

# ============================================================================
# PRIORITY LISTS
# ============================================================================

DATE_TIME_FIELDS: Tuple[str, ...] = (
    "eventDateTime",
    "eventDatetime",
    "eventCreatedDateTime",
    "eventCreatedDatetime",
    "eventDatetimeLocale",
    "eventDate",
    "createdAt",
    "timestamp",
)

CLASSIFIER_FIELDS: Tuple[str, ...] = ("eventClassifierCode", "classifierCode")

# Checked in this order when inferring the family
FAMILY_CODE_FIELDS: Tuple[Tuple[EventType, str], ...] = tuple(
    (event_type, event_type.code_field) for event_type in EventType
)

GENERIC_CODE_FIELDS: Tuple[str, ...] = ("eventTypeCode", "typeCode")

TRANSPORT_CALL_FIELDS: Tuple[str, ...] = ("transportCall", "transportCallObject")

# Paths below are resolved against the context built by _build_context():
# {"event": ..., "transportCall": ..., "location": ..., "vessel": ...}
LOCATION_NAME_PATHS: Tuple[str, ...] = (
    "location.locationName",
    "location.facilityName",
    "location.name",
    "location.unLocationCode",
    "location.UNLocationCode",
    "transportCall.unLocationCode",
)

LOCODE_PATHS: Tuple[str, ...] = (
    "location.locode",
    "location.unLocationCode",
    "location.UNLocationCode",
    "transportCall.unLocationCode",
)

VESSEL_NAME_PATHS: Tuple[str, ...] = ("vessel.vesselName", "vessel.name")

VOYAGE_NUMBER_PATHS: Tuple[str, ...] = (
    "transportCall.carrierVoyageNumber",
    "transportCall.voyageNumber",
    "vessel.voyageNumber",
    "event.carrierVoyageNumber",
)

LOCATION_MAPPER = FieldMapper(
    {
        "location_name": LOCATION_NAME_PATHS,
        "facility_name": ("location.facilityName",),
        "country": ("location.country", "location.countryCode"),
        "locode": LOCODE_PATHS,
    }
)

VESSEL_MAPPER = FieldMapper({"vessel_name": VESSEL_NAME_PATHS})

TRANSPORT_CALL_MAPPER = FieldMapper(
    {
        "carrier_voyage_number": VOYAGE_NUMBER_PATHS,
        "mode_of_transport": ("transportCall.modeOfTransport",),
        "transport_call_type": ("transportCall.transportCallType",),
    }
)

# Shipment context scalars, copied straight off the event
SHIPMENT_CONTEXT_MAPPER = FieldMapper(
    {
        "leg_number": ("legNumber",),
        "leg_type": ("legType",),
        "source_type": ("sourceType",),
        "equipment_reference": ("equipmentReference",),
        "empty_indicator_code": ("emptyIndicatorCode",),
        "iso_equipment_code": ("isoEquipmentCode",),
    }
)


# ============================================================================
# FIELD RESOLUTION
# ============================================================================


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _build_context(evt: Dict[str, Any]) -> Dict[str, Any]:
    """
    Collect the sub-objects the nested priority lists are resolved against.

    The location comes from the transport call when it has one, else from the
    event itself; the vessel likewise.
    """
    transport_call = _as_dict(first_present(evt, TRANSPORT_CALL_FIELDS))
    location = transport_call.get("location")
    if not isinstance(location, dict):
        location = evt.get("location")
    vessel = transport_call.get("vessel")
    if not isinstance(vessel, dict):
        vessel = evt.get("vessel")
    return {
        "event": evt,
        "transportCall": transport_call,
        "location": _as_dict(location),
        "vessel": _as_dict(vessel),
    }


def classify_event_type(evt: Any) -> EventType:
    """
    Classify an event into its DCSA family.

    Order: explicit ``eventType`` (case-insensitive), then whichever
    family-specific code field is present (transport, equipment, shipment),
    then TRANSPORT. An unrecognized explicit value falls through to inference.

    Args:
        evt: camelCased raw event

    Returns:
        EventType, never None
    """
    evt = _as_dict(evt)

    explicit = evt.get("eventType")
    if isinstance(explicit, str):
        candidate = explicit.strip().upper()
        if candidate in EventType.__members__:
            return EventType(candidate)
        logger.debug(f"Unrecognized eventType {explicit!r}, inferring from code fields")

    for event_type, code_field in FAMILY_CODE_FIELDS:
        if is_present(evt.get(code_field)):
            return event_type

    return EventType.TRANSPORT


def get_type_code(evt: Any, event_type: Optional[EventType] = None) -> Optional[Any]:
    """
    Resolve the type code: the family's own code field first, then the other
    family fields, then the generic ``eventTypeCode`` and ``typeCode``.

    The family (explicit ``eventType`` or inferred) decides which code field
    wins on mixed-family records, not a fixed transport/equipment/shipment
    order. A record with ``eventType: "EQUIPMENT"`` carrying both
    ``transportEventTypeCode: "DEPA"`` and ``equipmentEventTypeCode: "LOAD"``
    resolves to ``"LOAD"``. The remaining family fields are tried in
    transport, equipment, shipment order.
    """
    evt = _as_dict(evt)
    if event_type is None:
        event_type = classify_event_type(evt)

    fields = [event_type.code_field]
    fields += [field for _, field in FAMILY_CODE_FIELDS if field != event_type.code_field]
    fields += GENERIC_CODE_FIELDS
    return first_present(evt, fields)


def get_date_time(evt: Any) -> Optional[Any]:
    """First present timestamp from DATE_TIME_FIELDS."""
    return first_present(evt, DATE_TIME_FIELDS)


def get_classifier(evt: Any) -> Optional[Any]:
    """ACT / PLN / EST / REQ, or any other code as given."""
    return first_present(evt, CLASSIFIER_FIELDS)


def get_location(evt: Any) -> LocationInfo:
    """Resolve the event location; name and locode have independent chains."""
    context = _build_context(_as_dict(evt))
    return LocationInfo(**LOCATION_MAPPER.map_event(context))


def get_vessel(evt: Any) -> VesselInfo:
    """Resolve the vessel serving the event's transport call."""
    context = _build_context(_as_dict(evt))
    return VesselInfo(**VESSEL_MAPPER.map_event(context))


# ============================================================================
# NORMALIZATION
# ============================================================================


def normalize_event(raw_event: Any, keys_normalized: bool = False) -> CanonicalEvent:
    """
    Map one raw event onto a CanonicalEvent.

    Pure and deterministic: the same raw record always yields the same event.
    Non-dict records produce an all-null TRANSPORT event.

    Args:
        raw_event: Raw event record, snake_case or camelCase
        keys_normalized: True when the record was already camelCased (the
            response pipeline converts the whole payload once)

    Returns:
        CanonicalEvent whose ``raw`` is ``raw_event`` itself
    """
    evt = raw_event if keys_normalized else deep_camel_case(raw_event)
    evt = _as_dict(evt)

    event_type = classify_event_type(evt)
    context = _build_context(evt)

    transport_call = TransportCall(
        location=LocationInfo(**LOCATION_MAPPER.map_event(context)),
        vessel=VesselInfo(**VESSEL_MAPPER.map_event(context)),
        **TRANSPORT_CALL_MAPPER.map_event(context),
    )

    return CanonicalEvent(
        event_type=event_type,
        type_code=get_type_code(evt, event_type),
        event_classifier_code=get_classifier(evt),
        event_date_time=get_date_time(evt),
        event_description=first_present(evt, ("eventDescription",)),
        transport_call=transport_call,
        raw=raw_event,
        **SHIPMENT_CONTEXT_MAPPER.map_event(evt),
    )

"""
Unit tests for the event_normalizer module.

Tests for classification, field fallback chains and normalize_event.
"""

import copy

import pytest

from src.ingestion.normalization.event_normalizer import (
    DATE_TIME_FIELDS,
    classify_event_type,
    get_classifier,
    get_date_time,
    get_location,
    get_type_code,
    get_vessel,
    normalize_event,
)
from src.schemas.tracking import EventType

# =============================================================================
# TEST CLASSES
# =============================================================================


class TestClassifyEventType:
    """Tests for classify_event_type."""

    def test_explicit_event_type(self):
        """Should use an explicit eventType."""
        assert classify_event_type({"eventType": "SHIPMENT"}) == EventType.SHIPMENT

    def test_explicit_is_case_insensitive(self):
        """Should upper-case the explicit eventType."""
        assert classify_event_type({"eventType": "equipment"}) == EventType.EQUIPMENT

    def test_explicit_wins_over_code_fields(self):
        """Should prefer the explicit value over inference."""
        evt = {"eventType": "EQUIPMENT", "transportEventTypeCode": "ARRI"}
        assert classify_event_type(evt) == EventType.EQUIPMENT

    @pytest.mark.parametrize(
        "field,expected",
        [
            ("transportEventTypeCode", EventType.TRANSPORT),
            ("equipmentEventTypeCode", EventType.EQUIPMENT),
            ("shipmentEventTypeCode", EventType.SHIPMENT),
        ],
    )
    def test_inferred_from_code_field(self, field, expected):
        """Should infer the family from the code field present."""
        assert classify_event_type({field: "XXXX"}) == expected

    def test_inference_order(self):
        """Should check transport before equipment before shipment."""
        evt = {"shipmentEventTypeCode": "BOOT", "equipmentEventTypeCode": "LOAD"}
        assert classify_event_type(evt) == EventType.EQUIPMENT

    def test_default_transport(self):
        """Should default to TRANSPORT."""
        assert classify_event_type({}) == EventType.TRANSPORT

    def test_unknown_explicit_falls_through(self):
        """Should ignore an unknown explicit value and infer instead."""
        evt = {"eventType": "CUSTOMS", "shipmentEventTypeCode": "ISSU"}
        assert classify_event_type(evt) == EventType.SHIPMENT
        assert classify_event_type({"eventType": "CUSTOMS"}) == EventType.TRANSPORT

    @pytest.mark.parametrize("raw", [None, "x", 1, [], {"eventType": 5}])
    def test_total(self, raw):
        """Should always return a known family."""
        assert classify_event_type(raw) in set(EventType)


class TestTypeCode:
    """Tests for get_type_code."""

    def test_family_field(self):
        """Should read the family's own code field."""
        evt = {"equipmentEventTypeCode": "GTIN"}
        assert get_type_code(evt) == "GTIN"

    def test_family_field_preferred(self):
        """Should prefer the classified family's field."""
        evt = {
            "eventType": "SHIPMENT",
            "transportEventTypeCode": "ARRI",
            "shipmentEventTypeCode": "CONF",
        }
        assert get_type_code(evt, EventType.SHIPMENT) == "CONF"

    def test_other_family_field_fallback(self):
        """Should fall back to another family's code field."""
        evt = {"eventType": "EQUIPMENT", "transportEventTypeCode": "ARRI"}
        assert get_type_code(evt, EventType.EQUIPMENT) == "ARRI"

    def test_mixed_family_record_follows_explicit_type(self):
        """Should let the explicit eventType pick the code on mixed records."""
        evt = {
            "eventType": "EQUIPMENT",
            "transportEventTypeCode": "DEPA",
            "equipmentEventTypeCode": "LOAD",
        }
        assert get_type_code(evt) == "LOAD"

    def test_generic_fields(self):
        """Should fall back to eventTypeCode, then typeCode."""
        assert get_type_code({"eventTypeCode": "LOAD", "typeCode": "DISC"}) == "LOAD"
        assert get_type_code({"typeCode": "DISC"}) == "DISC"

    def test_absent(self):
        """Should return None without any code."""
        assert get_type_code({}) is None


class TestDateTime:
    """Tests for get_date_time."""

    def test_event_date_only(self):
        """Should fall back to eventDate."""
        assert get_date_time({"eventDate": "2024-01-01"}) == "2024-01-01"

    def test_priority(self):
        """Should prefer earlier fields in the priority list."""
        evt = {"timestamp": "t", "createdAt": "c", "eventDatetime": "d"}
        assert get_date_time(evt) == "d"

    @pytest.mark.parametrize("field", DATE_TIME_FIELDS)
    def test_every_field(self, field):
        """Should read every listed timestamp field."""
        assert get_date_time({field: "2024-05-05T10:00:00Z"}) == "2024-05-05T10:00:00Z"

    def test_absent(self):
        """Should return None without any timestamp."""
        assert get_date_time({"eventDescription": "x"}) is None


class TestClassifier:
    """Tests for get_classifier."""

    def test_reads_classifier(self):
        """Should read eventClassifierCode, then classifierCode."""
        assert get_classifier({"eventClassifierCode": "ACT"}) == "ACT"
        assert get_classifier({"classifierCode": "PLN"}) == "PLN"

    def test_pass_through(self):
        """Should pass through unrecognized codes."""
        assert get_classifier({"eventClassifierCode": "XYZ"}) == "XYZ"


class TestLocation:
    """Tests for get_location."""

    def test_transport_call_location(self):
        """Should read from transportCall.location."""
        evt = {
            "transportCall": {
                "location": {
                    "locationName": "Rotterdam",
                    "facilityName": "ECT Delta",
                    "country": "NL",
                    "locode": "NLRTM",
                }
            }
        }
        loc = get_location(evt)
        assert loc.location_name == "Rotterdam"
        assert loc.facility_name == "ECT Delta"
        assert loc.country == "NL"
        assert loc.locode == "NLRTM"

    def test_top_level_location_fallback(self):
        """Should fall back to a top-level location."""
        loc = get_location({"location": {"name": "Hamburg"}})
        assert loc.location_name == "Hamburg"

    def test_transport_call_location_preferred(self):
        """Should prefer the transport call's location."""
        evt = {
            "transportCall": {"location": {"locationName": "A"}},
            "location": {"locationName": "B"},
        }
        assert get_location(evt).location_name == "A"

    def test_name_chain(self):
        """Should fall back through facilityName, name and UN/LOCODE."""
        assert get_location({"location": {"facilityName": "F"}}).location_name == "F"
        assert get_location({"location": {"unLocationCode": "DEHAM"}}).location_name == "DEHAM"
        assert get_location({"location": {"UNLocationCode": "USNYC"}}).location_name == "USNYC"

    def test_name_from_transport_call_locode(self):
        """Should finally use the transport call's unLocationCode."""
        evt = {"transportCall": {"unLocationCode": "SGSIN"}}
        loc = get_location(evt)
        assert loc.location_name == "SGSIN"
        assert loc.locode == "SGSIN"

    def test_locode_independent_of_name(self):
        """Should never copy the location name into the locode."""
        loc = get_location({"location": {"locationName": "Antwerp"}})
        assert loc.location_name == "Antwerp"
        assert loc.locode is None

    def test_locode_chain(self):
        """Should prefer locode, then unLocationCode."""
        evt = {"location": {"locode": "BEANR", "unLocationCode": "BEZEE"}}
        assert get_location(evt).locode == "BEANR"
        assert get_location({"location": {"unLocationCode": "BEZEE"}}).locode == "BEZEE"

    def test_transport_call_object_alias(self):
        """Should accept transportCallObject as the transport call."""
        evt = {"transportCallObject": {"location": {"locationName": "Busan"}}}
        assert get_location(evt).location_name == "Busan"

    def test_empty(self):
        """Should return an all-null location."""
        loc = get_location({})
        assert loc.location_name is None
        assert loc.locode is None


class TestVessel:
    """Tests for get_vessel and voyage resolution."""

    def test_transport_call_vessel(self):
        """Should read transportCall.vessel.vesselName."""
        evt = {"transportCall": {"vessel": {"vesselName": "MAERSK ESSEX"}}}
        assert get_vessel(evt).vessel_name == "MAERSK ESSEX"

    def test_top_level_vessel_name(self):
        """Should fall back to top-level vessel.name."""
        assert get_vessel({"vessel": {"name": "CMA CGM MARCO POLO"}}).vessel_name == "CMA CGM MARCO POLO"

    def test_voyage_chain(self):
        """Should resolve the voyage through the documented fallbacks."""
        assert (
            normalize_event(
                {"transportCall": {"carrierVoyageNumber": "1", "voyageNumber": "2"}}
            ).transport_call.carrier_voyage_number
            == "1"
        )
        assert (
            normalize_event({"transportCall": {"voyageNumber": "2"}}).transport_call.carrier_voyage_number
            == "2"
        )
        assert (
            normalize_event(
                {"transportCall": {"vessel": {"voyageNumber": "3"}}, "carrierVoyageNumber": "4"}
            ).transport_call.carrier_voyage_number
            == "3"
        )
        assert normalize_event({"carrierVoyageNumber": "4"}).transport_call.carrier_voyage_number == "4"


class TestNormalizeEvent:
    """Tests for normalize_event."""

    def test_snake_case_shipment_event(self):
        """Should normalize a snake_case shipment event."""
        event = normalize_event({"shipment_event_type_code": "BOOT"})
        assert event.event_type == EventType.SHIPMENT
        assert event.type_code == "BOOT"

    def test_full_event(self, make_event):
        """Should map every field of a rich DCSA event."""
        raw = make_event(
            event_type="TRANSPORT",
            transport_event_type_code="ARRI",
            event_classifier_code="ACT",
            event_description="Vessel arrival",
            leg_number=3,
            leg_type="OCEAN",
            source_type="CARRIER",
            equipment_reference="MSCU1234567",
            empty_indicator_code="LADEN",
            iso_equipment_code="22G1",
            transport_call={
                "mode_of_transport": "VESSEL",
                "transport_call_type": "PORT_OF_DESTINATION",
                "carrier_voyage_number": "055E",
                "vessel": {"vessel_name": "EVER ACE"},
                "location": {"location_name": "Felixstowe", "locode": "GBFXT", "country": "GB"},
            },
        )
        event = normalize_event(raw)
        assert event.event_type == EventType.TRANSPORT
        assert event.type_code == "ARRI"
        assert event.event_classifier_code == "ACT"
        assert event.event_date_time == "2024-01-01T00:00:00Z"
        assert event.event_description == "Vessel arrival"
        assert event.leg_number == 3
        assert event.leg_type == "OCEAN"
        assert event.source_type == "CARRIER"
        assert event.equipment_reference == "MSCU1234567"
        assert event.empty_indicator_code == "LADEN"
        assert event.iso_equipment_code == "22G1"
        tc = event.transport_call
        assert tc.mode_of_transport == "VESSEL"
        assert tc.transport_call_type == "PORT_OF_DESTINATION"
        assert tc.carrier_voyage_number == "055E"
        assert tc.vessel.vessel_name == "EVER ACE"
        assert tc.location.location_name == "Felixstowe"
        assert tc.location.locode == "GBFXT"
        assert tc.location.country == "GB"

    def test_back_reference_identity(self, make_event):
        """Should keep the exact raw object as back-reference."""
        raw = make_event(transport_event_type_code="DEPA")
        event = normalize_event(raw)
        assert event.raw is raw

    def test_raw_not_mutated(self, make_event):
        """Should never modify the raw record."""
        raw = make_event(transport_call={"location": {"un_location_code": "NLRTM"}})
        snapshot = copy.deepcopy(raw)
        normalize_event(raw)
        assert raw == snapshot

    def test_deterministic(self, make_event):
        """Should produce equal events for the same raw record."""
        raw = make_event(equipment_event_type_code="LOAD")
        assert normalize_event(raw) == normalize_event(raw)

    def test_keys_normalized_skips_conversion(self):
        """Should read camelCase keys directly when told keys are normalized."""
        event = normalize_event({"equipmentEventTypeCode": "DISC"}, keys_normalized=True)
        assert event.event_type == EventType.EQUIPMENT
        assert event.type_code == "DISC"

    def test_empty_event(self):
        """Should degrade to an all-null TRANSPORT event."""
        event = normalize_event({})
        assert event.event_type == EventType.TRANSPORT
        assert event.type_code is None
        assert event.event_date_time is None
        assert event.transport_call.location.location_name is None
        assert event.transport_call.vessel.vessel_name is None

    @pytest.mark.parametrize("raw", [None, "text", 7, ["a"]])
    def test_non_dict_record(self, raw):
        """Should never fail on non-object records."""
        event = normalize_event(raw)
        assert event.event_type == EventType.TRANSPORT
        assert event.raw == raw

    def test_odd_value_types(self):
        """Should coerce scalars and drop structured values."""
        event = normalize_event(
            {
                "transportEventTypeCode": 12,
                "eventDateTime": 1700000000,
                "eventDescription": {"text": "nested"},
                "legNumber": "2",
            }
        )
        assert event.type_code == "12"
        assert event.event_date_time == "1700000000"
        assert event.event_description is None
        assert event.leg_number == "2"

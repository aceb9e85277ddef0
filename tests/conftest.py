"""
Shared pytest fixtures for the Oceanio tracker test suite.

Provides reusable upstream tracking payloads in the shapes the tracking
endpoints return them (snake_case, containers[].events nesting).
"""

import copy

import pytest


# =============================================================================
# TEST DATA
# =============================================================================


BL_RESPONSE = {
    "identifier": "MEDU1234567",
    "identifier_type": "BILL_OF_LADING_NUMBER",
    "transport_status": "IN_TRANSIT",
    "number_of_related_equipments": 2,
    "containers": [
        {
            "equipment_reference": "MSCU1111111",
            "events": [
                {
                    "event_id": "E-001",
                    "event_type": "EQUIPMENT",
                    "equipment_event_type_code": "GTOT",
                    "event_classifier_code": "ACT",
                    "event_date_time": "2024-03-01T08:00:00Z",
                    "event_description": "Empty container gate out",
                    "equipment_reference": "MSCU1111111",
                    "iso_equipment_code": "45G1",
                    "empty_indicator_code": "EMPTY",
                    "transport_call": {
                        "mode_of_transport": "TRUCK",
                        "location": {
                            "location_name": "Shanghai",
                            "un_location_code": "CNSHA",
                            "country": "CN",
                        },
                    },
                },
                {
                    "event_id": "E-002",
                    "event_type": "TRANSPORT",
                    "transport_event_type_code": "DEPA",
                    "event_classifier_code": "ACT",
                    "event_date_time": "2024-03-05T18:30:00Z",
                    "event_description": "Vessel departure",
                    "leg_number": 2,
                    "leg_type": "OCEAN",
                    "transport_call": {
                        "carrier_voyage_number": "412W",
                        "mode_of_transport": "VESSEL",
                        "transport_call_type": "PORT_OF_LOADING",
                        "vessel": {"vessel_name": "MSC OSCAR"},
                        "location": {
                            "facility_name": "Yangshan Terminal",
                            "locode": "CNSHA",
                        },
                    },
                },
            ],
        },
        {
            "equipment_reference": "MSCU2222222",
            "events": [
                {
                    "event_id": "E-003",
                    "event_type": "TRANSPORT",
                    "transport_event_type_code": "ARRI",
                    "event_classifier_code": "EST",
                    "event_date_time": "2024-04-02T06:00:00Z",
                    "transport_call": {
                        "location": {"location_name": "Rotterdam", "locode": "NLRTM"},
                    },
                },
            ],
        },
    ],
}


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def bl_response():
    """Return a fresh copy of a bill-of-lading response with two containers."""
    return copy.deepcopy(BL_RESPONSE)


@pytest.fixture
def make_event():
    """
    Return a function that creates snake_case raw events with sensible defaults.

    Example:
        evt = make_event(event_id="X1", transport_event_type_code="ARRI")
    """

    def _make_event(**kwargs):
        event = {
            "event_id": "EVT-1",
            "event_date_time": "2024-01-01T00:00:00Z",
        }
        event.update(kwargs)
        return event

    return _make_event

"""
Unit tests for the key_case module.

Tests for snake_to_camel and deep_camel_case.
"""

import copy

from src.ingestion.normalization.key_case import deep_camel_case, snake_to_camel


class TestSnakeToCamel:
    """Tests for snake_to_camel."""

    def test_converts_snake_case(self):
        """Should fold every underscore-letter pair."""
        assert snake_to_camel("shipment_event_type_code") == "shipmentEventTypeCode"

    def test_single_word_unchanged(self):
        """Should leave single words alone."""
        assert snake_to_camel("events") == "events"

    def test_camel_case_unchanged(self):
        """Should leave camelCase keys alone."""
        assert snake_to_camel("eventDateTime") == "eventDateTime"

    def test_acronym_unchanged(self):
        """Should not touch upper-case acronyms."""
        assert snake_to_camel("UNLocationCode") == "UNLocationCode"

    def test_underscore_before_digit_kept(self):
        """Should only fold underscores followed by a lowercase letter."""
        assert snake_to_camel("leg_2") == "leg_2"


class TestDeepCamelCase:
    """Tests for deep_camel_case."""

    def test_nested_dicts_and_lists(self):
        """Should convert keys at every depth, including inside arrays."""
        data = {
            "containers": [
                {"equipment_reference": "C1", "events": [{"event_id": "E1"}]},
            ],
            "transport_status": "IN_TRANSIT",
        }
        result = deep_camel_case(data)
        assert result == {
            "containers": [
                {"equipmentReference": "C1", "events": [{"eventId": "E1"}]},
            ],
            "transportStatus": "IN_TRANSIT",
        }

    def test_values_not_converted(self):
        """Should never touch string values."""
        assert deep_camel_case({"leg_type": "PRE_OCEAN"}) == {"legType": "PRE_OCEAN"}

    def test_input_not_mutated(self):
        """Should return a new structure and leave the input intact."""
        data = {"event_id": "E1", "transport_call": {"un_location_code": "NLRTM"}}
        snapshot = copy.deepcopy(data)
        deep_camel_case(data)
        assert data == snapshot

    def test_idempotent(self, bl_response):
        """Normalizing an already camelCased payload should change nothing."""
        once = deep_camel_case(bl_response)
        assert deep_camel_case(once) == once

    def test_scalars_and_top_level_array(self):
        """Should pass scalars through and map top-level arrays."""
        assert deep_camel_case(None) is None
        assert deep_camel_case(42) == 42
        assert deep_camel_case([{"event_id": 1}, "x"]) == [{"eventId": 1}, "x"]

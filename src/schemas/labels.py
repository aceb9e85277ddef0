"""
Human-readable labels for DCSA codes.

Pure lookup data. Every lookup falls back to the raw code when the code is
not in the table, and returns None when there is no code at all.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

# DCSA event type code -> label (transport, equipment and shipment families)
EVENT_CODE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "ARRI": "Arrived",
        "DEPA": "Departed",
        "LOAD": "Loaded",
        "DISC": "Discharged",
        "GTIN": "Gate In",
        "GTOT": "Gate Out",
        "STUF": "Stuffed",
        "STRP": "Stripped",
        "PICK": "Picked Up",
        "DROP": "Dropped Off",
        "INSP": "Inspected",
        "MALU": "Malfunction",
        "BOOT": "Booked",
        "CONF": "Confirmed",
        "RECE": "Received",
        "REJE": "Rejected",
        "SURR": "Surrendered",
        "SUBM": "Submitted",
        "ISSU": "Issued",
        "AVAV": "Available",
        "CANN": "Cancelled",
        "HOLD": "On Hold",
        "RELS": "Released",
        "TRSH": "Transshipped",
    }
)

CLASSIFIER_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "ACT": "Actual",
        "PLN": "Planned",
        "EST": "Estimated",
        "REQ": "Requested",
    }
)

LEG_TYPE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "PRE_SHIPMENT": "Pre-Shipment",
        "PRE_OCEAN": "Pre-Ocean",
        "OCEAN": "Ocean",
        "POST_OCEAN": "Post-Ocean",
        "POST_SHIPMENT": "Post-Shipment",
    }
)

TRANSPORT_CALL_TYPE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "PORT_OF_LOADING": "Port of Loading",
        "PORT_OF_DESTINATION": "Port of Destination",
        "TRANSSHIPMENT_PORT": "Transshipment Port",
        "INTERMEDIATE_PORT": "Intermediate Port",
        "DEPOT_RELEASE_LOCATION": "Depot Release",
        "DEPOT_RETURN_LOCATION": "Depot Return",
    }
)

EVENT_TYPE_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "TRANSPORT": "Transport Event",
        "EQUIPMENT": "Equipment Event",
        "SHIPMENT": "Shipment Event",
    }
)


def lookup_label(table: Mapping[str, str], code: Any) -> Optional[str]:
    """
    Look up a label for a code.

    Args:
        table: One of the label tables in this module
        code: Raw code value (usually a string)

    Returns:
        The label, the code itself as a string when unknown, or None when
        the code is None or empty.
    """
    if code is None or code == "":
        return None
    key = str(code)
    return table.get(key, key)

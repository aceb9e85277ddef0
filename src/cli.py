#!/usr/bin/env python3
"""Command-line interface for the Oceanio tracker normalization engine.

Commands:
  - normalize : Normalize a saved tracking response and print the result
  - locate    : Print the raw source object of one normalized event
  - endpoint  : Print the upstream URL for a tracking reference

Typical usage:
  oceanio-track normalize response.json --container MSCU1234567
  oceanio-track normalize response.json --timeline
  oceanio-track locate response.json --index 3
  oceanio-track endpoint bl MEDU1234567
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from src.configs.settings import get_settings
from src.ingestion.normalization import locate_span, normalize_response, serialize_payload
from src.ingestion.references import build_tracking_request
from src.monitoring.logging import LoggingOptions, setup_logger
from src.schemas.tracking import CanonicalEvent, ReferenceType

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="oceanio-track", description="Oceanio tracking CLI")
    p.add_argument("--log-level", default=settings.LOG_LEVEL, help="Log level (default from settings)")
    p.add_argument(
        "--json-logs",
        action="store_true",
        default=settings.JSON_LOGS,
        help="Emit JSON logs",
    )
    sub = p.add_subparsers(dest="cmd")

    # normalize
    pn = sub.add_parser("normalize", help="Normalize a tracking response")
    pn.add_argument("file", help="Path to the JSON response ('-' for stdin)")
    pn.add_argument("--container", "-c", default=None, help="Only events of this container")
    pn.add_argument("--timeline", action="store_true", help="One line per event instead of JSON")

    # locate
    pl = sub.add_parser("locate", help="Show the raw source object of an event")
    pl.add_argument("file", help="Path to the JSON response ('-' for stdin)")
    pl.add_argument("--index", "-i", type=int, required=True, help="Event index in allEvents")
    pl.add_argument("--container", "-c", default=None, help="Only events of this container")

    # endpoint
    pe = sub.add_parser("endpoint", help="Print the upstream URL for a reference")
    pe.add_argument("type", choices=[t.value for t in ReferenceType], help="Reference type")
    pe.add_argument("reference", help="Reference number")

    return p.parse_args(argv)


def _load_json(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _format_event(idx: int, event: CanonicalEvent) -> str:
    """One timeline line: index, family, code/label, classifier, time, place, vessel."""
    parts = [f"{idx:>3}", event.event_type_label]
    if event.type_code:
        label = event.type_code_label
        parts.append(event.type_code if label == event.type_code else f"{event.type_code} / {label}")
    if event.classifier_label:
        parts.append(event.classifier_label)
    if event.event_date_time:
        parts.append(event.event_date_time)

    location = event.transport_call.location
    if location.location_name or location.locode:
        place = location.location_name or ""
        if location.locode and location.locode != place:
            place = f"{place} ({location.locode})".strip()
        parts.append(place)

    vessel = event.transport_call.vessel.vessel_name
    voyage = event.transport_call.carrier_voyage_number
    if vessel or voyage:
        parts.append(" / ".join(p for p in (vessel, f"Voyage {voyage}" if voyage else None) if p))

    if event.leg_type_label:
        parts.append(event.leg_type_label)
    if event.transport_call_type_label:
        parts.append(event.transport_call_type_label)
    if event.equipment_reference:
        parts.append(f"Container: {event.equipment_reference}")
    if event.event_description:
        parts.append(event.event_description)
    return " | ".join(parts)


def _cmd_normalize(args: argparse.Namespace, payload: Any) -> int:
    result = normalize_response(payload, args.container)
    if args.timeline:
        if result.total_events == 0:
            print("No events found for this reference.")
            return 0
        for idx, event in enumerate(result.all_events):
            print(_format_event(idx, event))
        return 0

    print(json.dumps(result.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False))
    return 0


def _cmd_locate(args: argparse.Namespace, payload: Any) -> int:
    result = normalize_response(payload, args.container)
    if not 0 <= args.index < result.total_events:
        print(f"Event index {args.index} out of range (0..{result.total_events - 1})", file=sys.stderr)
        return 1

    text = serialize_payload(payload)
    span = locate_span(result.all_events[args.index], text)
    if span is None:
        print("No highlight available for this event.", file=sys.stderr)
        return 1

    logger.info(f"Event {args.index} spans characters {span.start}..{span.end}")
    print(span.slice(text))
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = _parse_args(argv)
    setup_logger(LoggingOptions(level=args.log_level, json_logs=args.json_logs))

    if args.cmd is None:
        print("Missing command. Use --help.", file=sys.stderr)
        return 2

    if args.cmd == "endpoint":
        try:
            request = build_tracking_request(args.type, args.reference)
        except (ValueError, FileNotFoundError) as e:
            print(str(e), file=sys.stderr)
            return 2
        print(request.full_url)
        return 0

    try:
        payload = _load_json(args.file)
    except (OSError, ValueError) as e:
        print(f"Cannot read JSON from {args.file}: {e}", file=sys.stderr)
        return 2

    logger.debug(f"Loaded payload from {args.file}", extra={"command": args.cmd, "container": args.container})

    if args.cmd == "normalize":
        return _cmd_normalize(args, payload)
    return _cmd_locate(args, payload)


if __name__ == "__main__":
    sys.exit(main())

"""
Correlation Locator.

Finds where a canonical event's source object sits inside the pretty-printed
text of the original response, so the raw JSON view can highlight it.

The scan is textual, not structural: the span covers the literal original text
including field order and spacing. Braces inside string literals are ignored.
Correlation is a best-effort visual aid; every miss returns None.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from src.ingestion.normalization.field_mapper import first_present
from src.schemas.tracking import CanonicalEvent

logger = logging.getLogger(__name__)

# Snake_case first: that is how the upstream API emits it
EVENT_ID_KEYS: Tuple[str, ...] = ("event_id", "eventId")


@dataclass(frozen=True)
class TextSpan:
    """Half-open ``[start, end)`` range of string offsets."""

    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start:self.end]

    def split(self, text: str) -> Tuple[str, str, str]:
        """Split text into (before, match, after) for splicing in markup."""
        return text[: self.start], text[self.start:self.end], text[self.end:]


def serialize_payload(payload: Any) -> str:
    """Pretty-print a payload the way the raw JSON view displays it."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def get_event_id(event: CanonicalEvent) -> Optional[Any]:
    """Identifier of the event's raw record, in either key convention."""
    return first_present(event.raw, ("eventId", "event_id"))


def _occurrences(text: str, marker: str) -> Iterator[int]:
    """Offsets of ``marker`` where the value ends at a token boundary."""
    pos = text.find(marker)
    while pos != -1:
        end = pos + len(marker)
        # "event_id": 12 must not match a marker for id 1
        if end == len(text) or text[end] in ",}] \t\r\n":
            yield pos
        pos = text.find(marker, pos + 1)


def _enclosing_object(text: str, anchor: int) -> Optional[TextSpan]:
    """
    Span of the innermost object enclosing ``anchor``.

    Tokenizes from the start of the text, tracking open braces outside of
    string literals. Returns None when the anchor falls inside a string, has
    no enclosing object, or the braces do not balance.
    """
    stack = []
    start = None
    in_string = False
    escaped = False

    for i, ch in enumerate(text):
        if i == anchor:
            if in_string or not stack:
                return None
            start = stack[-1]

        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            stack.append(i)
        elif ch == "}":
            if not stack:
                return None
            opened = stack.pop()
            if opened == start:
                return TextSpan(start, i + 1)

    return None


def locate_span(event: CanonicalEvent, raw_text: str) -> Optional[TextSpan]:
    """
    Locate the source object of ``event`` in the serialized response.

    Searches for ``"event_id": <id>`` (then ``"eventId": <id>``) and expands
    the first real match to its enclosing object.

    Args:
        event: Canonical event selected by the user
        raw_text: Pretty-printed original response (see serialize_payload)

    Returns:
        TextSpan of the whole source object, or None for no highlight
    """
    event_id = get_event_id(event)
    if event_id is None or not isinstance(raw_text, str):
        logger.debug("No event identifier to correlate")
        return None

    try:
        value = json.dumps(event_id, ensure_ascii=False)
    except (TypeError, ValueError):
        return None

    for key in EVENT_ID_KEYS:
        marker = f'"{key}": {value}'
        for anchor in _occurrences(raw_text, marker):
            span = _enclosing_object(raw_text, anchor)
            if span is not None:
                return span

    logger.debug(f"Event {event_id!r} not found in raw text")
    return None

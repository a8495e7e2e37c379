"""Result projection — reshapes a ResultSet for output."""

from enum import Enum
from typing import Any

from src.groupsio.types import MessageRecord, ResultSet

SNIPPET_LENGTH = 150
_ELLIPSIS = "..."


class OutputMode(str, Enum):
    """Shape of the projected results."""

    FULL = "full"        # every record exactly as the server sent it
    BODY = "body"        # message bodies only
    SUMMARY = "summary"  # subject, from, date and a short snippet


Projected = list[Any]


def snippet(body: str, length: int = SNIPPET_LENGTH) -> str:
    """First ``length`` characters of body, with "..." only if text was cut."""
    if len(body) <= length:
        return body
    return body[:length] + _ELLIPSIS


def summarize(record: MessageRecord) -> dict[str, str]:
    return {
        "subject": record.subject,
        "from": record.sender,
        "date": record.date,
        "snippet": snippet(record.body),
    }


def project(results: ResultSet, mode: OutputMode = OutputMode.BODY) -> Projected:
    """Map records into the requested output shape. Pure; never raises on missing fields."""
    if mode is OutputMode.FULL:
        return [dict(r.raw) for r in results]
    if mode is OutputMode.SUMMARY:
        return [summarize(r) for r in results]
    return [r.body for r in results]

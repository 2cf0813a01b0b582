"""Parse upstream fixture timestamps into UTC instants."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from matchday.errors import InvalidTimestamp

# Provider formats seen outside ISO 8601, tried in order by parse_fallback.
FALLBACK_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d.%m.%Y %H:%M",
    "%B %d, %Y - %H:%M",
    "%b %d, %Y - %H:%M",
    "%a, %d %b %Y %H:%M:%S",
    "%a, %d %b %Y %H:%M",
    "%d %b %Y %H:%M:%S",
    "%d %b %Y %H:%M",
    "%Y-%m-%d",
    "%B %d, %Y",
    "%d/%m/%Y",
)

_ZONE_SUFFIX_RE = re.compile(r"\s+(CET|CEST|UTC|GMT|EST|EDT|PST|PDT|BST|Z)\s*$", re.IGNORECASE)


def parse_timestamp(raw: object) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    A timestamp without an offset is taken as UTC. One with an explicit
    offset is converted to UTC.
    """
    if not isinstance(raw, str):
        raise InvalidTimestamp(raw, "timestamp is not a string")

    text = raw.strip()
    if not text:
        raise InvalidTimestamp(raw, "empty timestamp")

    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidTimestamp(raw, "not an ISO 8601 timestamp") from e

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as e:
        raise InvalidTimestamp(raw, "timestamp outside the supported date range") from e


def parse_fallback(raw: object) -> datetime | None:
    """Best-effort parse for timestamps parse_timestamp rejects.

    Trailing zone abbreviations are dropped and the result is read as UTC.
    Returns None if no known format fits.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None

    text = _ZONE_SUFFIX_RE.sub("", raw.strip())

    for fmt in FALLBACK_FORMATS:
        try:
            dt = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return dt.replace(tzinfo=timezone.utc)

    return None

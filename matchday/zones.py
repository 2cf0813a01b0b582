"""Project UTC instants onto IANA timezone wall clocks."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from matchday.errors import UnknownTimezone


def resolve_zone(timezone_id: str) -> ZoneInfo:
    """Look up an IANA zone, raising UnknownTimezone if it does not exist."""
    if not isinstance(timezone_id, str) or not timezone_id.strip():
        raise UnknownTimezone(timezone_id)
    try:
        return ZoneInfo(timezone_id.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise UnknownTimezone(timezone_id) from e


def is_known_timezone(timezone_id: str) -> bool:
    try:
        resolve_zone(timezone_id)
    except UnknownTimezone:
        return False
    return True


def project(instant: datetime, timezone_id: str) -> datetime:
    """Wall-clock time of ``instant`` in ``timezone_id``.

    The zone's rules at that instant apply, including daylight saving.
    """
    if instant.tzinfo is None:
        raise ValueError("instant must be timezone-aware")
    return instant.astimezone(resolve_zone(timezone_id))

"""Errors raised by the parser and zone projector."""

from __future__ import annotations


class InvalidTimestamp(ValueError):
    """Raw event time could not be read as an absolute instant."""

    def __init__(self, raw: object, reason: str = "unparseable timestamp") -> None:
        super().__init__(f"{reason}: {raw!r}")
        self.raw = raw
        self.reason = reason


class UnknownTimezone(ValueError):
    """Timezone identifier is not in the IANA database."""

    def __init__(self, timezone_id: object) -> None:
        super().__init__(f"Unknown timezone: {timezone_id!r}")
        self.timezone_id = timezone_id

"""Match-day converter: shared data models."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from datetime import datetime, time

DEFAULT_DAY_START = time(6, 0)

_DAY_START_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_day_start(value: str | time) -> time:
    """Parse an ``HH:MM`` day-start offset (00:00 to 23:59)."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise ValueError(f"Day start must be 'HH:MM', got {value!r}")

    match = _DAY_START_RE.match(value.strip())
    if not match:
        raise ValueError(f"Day start must be 'HH:MM', got {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Day start out of range: {value!r}")
    return time(hour, minute)


@dataclass(frozen=True)
class TournamentTimeConfig:
    """Timezone and day boundary for one competition."""

    competition_id: int
    display_name: str
    timezone: str
    day_start_offset: time = DEFAULT_DAY_START
    country_label: str = "Unknown"

    def __post_init__(self) -> None:
        if isinstance(self.competition_id, bool) or not isinstance(self.competition_id, int):
            raise ValueError(f"competition_id must be an int, got {self.competition_id!r}")
        # Seed files carry "HH:MM" strings; normalise them here.
        object.__setattr__(self, "day_start_offset", parse_day_start(self.day_start_offset))

    @classmethod
    def from_dict(cls, data: dict) -> TournamentTimeConfig:
        return cls(
            competition_id=data["competition_id"],
            display_name=data.get("display_name", ""),
            timezone=data.get("timezone", "UTC"),
            day_start_offset=data.get("day_start_offset", "06:00"),
            country_label=data.get("country_label", "Unknown"),
        )

    def to_dict(self) -> dict:
        return {
            "competition_id": self.competition_id,
            "display_name": self.display_name,
            "timezone": self.timezone,
            "day_start_offset": self.day_start_offset.strftime("%H:%M"),
            "country_label": self.country_label,
        }


@dataclass(frozen=True)
class ConversionResult:
    """Where one fixture lands for a competition and for a viewer.

    ``competition_day`` is the grouping key. ``viewer_calendar_day`` and the
    ``is_*`` flags are for display only.
    """

    absolute_instant: datetime | None
    tournament_local_time: datetime | None
    tournament_timezone: str
    competition_day: str
    viewer_local_time: datetime | None
    viewer_timezone: str
    viewer_calendar_day: str
    display_time: str
    display_date: str
    is_today: bool = False
    is_tomorrow: bool = False
    is_yesterday: bool = False
    degraded: bool = False

    @property
    def tournament_time_string(self) -> str:
        return _format_wall_clock(self.tournament_local_time)

    @property
    def viewer_time_string(self) -> str:
        return _format_wall_clock(self.viewer_local_time)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for key in ("absolute_instant", "tournament_local_time", "viewer_local_time"):
            value = data[key]
            data[key] = value.isoformat() if value is not None else None
        return data


def _format_wall_clock(dt: datetime | None) -> str:
    if dt is None:
        return ""
    return dt.strftime("%Y-%m-%d %H:%M:%S %Z").strip()

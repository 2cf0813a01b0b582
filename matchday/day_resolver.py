"""Competition-day bucketing."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from matchday import DEFAULT_DAY_START


def minutes_since_midnight(value: datetime | time) -> int:
    return value.hour * 60 + value.minute


def resolve_competition_day(wall_clock: datetime, day_start_offset: time = DEFAULT_DAY_START) -> date:
    """Competition day a fixture belongs to.

    ``wall_clock`` is the kickoff in the competition's own timezone. A
    kickoff before ``day_start_offset`` counts towards the previous day, so a
    01:00 kickoff with a 06:00 boundary sits with the previous evening's card.
    """
    local_date = wall_clock.date()
    if minutes_since_midnight(wall_clock) < minutes_since_midnight(day_start_offset):
        return local_date - timedelta(days=1)
    return local_date

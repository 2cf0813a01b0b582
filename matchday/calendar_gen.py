"""ICS calendar export for one competition day."""

from __future__ import annotations

import re
from datetime import timedelta

from icalendar import Calendar, Event

from matchday import ConversionResult
from matchday.grouping import CONVERSION_KEY

MATCH_DURATION = timedelta(hours=2)


def create_matchday_calendar(day: str, events: list[dict], viewer_timezone: str = "UTC") -> Calendar:
    """Create an ICS calendar of the fixtures grouped under ``day``.

    ``events`` are fixtures as returned by group_by_competition_day, each
    carrying its ConversionResult. Fixtures without a usable kickoff are left
    out.
    """
    cal = Calendar()
    cal.add("prodid", "-//Matchday Schedule//matchday//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", f"Fixtures for {day}")
    cal.add("x-wr-timezone", viewer_timezone)

    for fixture in events:
        conversion = fixture.get(CONVERSION_KEY)
        if not isinstance(conversion, ConversionResult) or conversion.viewer_local_time is None:
            continue
        cal.add_component(_create_event(day, fixture, conversion))

    return cal


def _create_event(day: str, fixture: dict, conversion: ConversionResult) -> Event:
    """Create a calendar event from a converted fixture."""
    event = Event()
    start = conversion.viewer_local_time
    home, away = _team_names(fixture)
    competition = _league_name(fixture)

    event.add("summary", f"{home} vs {away}")
    event.add("dtstart", start)
    event.add("dtend", start + MATCH_DURATION)

    description = f"Competition: {competition}" if competition else "Competition: unknown"
    description += (
        f"\nKickoff: {conversion.tournament_time_string} ({conversion.tournament_timezone})"
    )
    if conversion.degraded:
        description += "\n\n(Kickoff time could not be verified)"
    event.add("description", description)
    event.add("categories", [day])

    # Stable UID based on kickoff + teams
    instant = conversion.absolute_instant
    stamp = int(instant.timestamp()) if instant is not None else 0
    uid = f"{stamp}-{_slug(home)}-{_slug(away)}@matchday"
    event.add("uid", uid)
    event.add("status", "CONFIRMED")

    return event


def _team_names(fixture: dict) -> tuple[str, str]:
    teams = fixture.get("teams")
    if not isinstance(teams, dict):
        return "TBD", "TBD"
    names = []
    for side in ("home", "away"):
        team = teams.get(side)
        names.append(team.get("name", "TBD") if isinstance(team, dict) else "TBD")
    return names[0], names[1]


def _league_name(fixture: dict) -> str:
    league = fixture.get("league")
    if isinstance(league, dict):
        return league.get("name", "")
    return ""


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")

"""Group and filter fixture collections by competition day."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING

from matchday import ConversionResult
from matchday.registry import coerce_competition_id

if TYPE_CHECKING:
    from matchday.converter import MatchDayConverter

CONVERSION_KEY = "conversion"


@dataclass(frozen=True)
class DateCheck:
    """Outcome of checking one fixture against a target day."""

    is_match: bool
    reason: str
    conversion: ConversionResult


def extract_event_time(event: object) -> tuple[object | None, int | None]:
    """Pull ``(raw kickoff time, competition id)`` out of a fixture record.

    Provider payloads carry the kickoff under ``fixture.date`` or a top-level
    ``date``, and the competition under ``league.id``.
    """
    if not isinstance(event, Mapping):
        return None, None

    raw_time = None
    fixture = event.get("fixture")
    if isinstance(fixture, Mapping):
        raw_time = fixture.get("date")
    if raw_time in (None, ""):
        raw_time = event.get("date")
    if raw_time == "":
        raw_time = None

    competition_id = None
    league = event.get("league")
    if isinstance(league, Mapping):
        competition_id = coerce_competition_id(league.get("id"))

    return raw_time, competition_id


def _describe(event: object) -> str:
    """Short label for log lines, e.g. ``Arsenal vs Chelsea``."""
    if isinstance(event, Mapping):
        teams = event.get("teams")
        if isinstance(teams, Mapping):
            home, away = (teams.get(side) for side in ("home", "away"))
            home = home.get("name", "?") if isinstance(home, Mapping) else "?"
            away = away.get("name", "?") if isinstance(away, Mapping) else "?"
            return f"{home} vs {away}"
        fixture = event.get("fixture")
        if isinstance(fixture, Mapping) and "id" in fixture:
            return f"fixture {fixture['id']}"
    return repr(event)[:80]


def _require_collection(events: object) -> None:
    if isinstance(events, (str, bytes, Mapping)) or not isinstance(events, Iterable):
        raise TypeError(f"Expected a collection of events, got {type(events).__name__}")


def _normalise_target(target_date: str | date) -> str:
    if isinstance(target_date, datetime):
        return target_date.date().isoformat()
    if isinstance(target_date, date):
        return target_date.isoformat()
    if not isinstance(target_date, str):
        raise TypeError(f"target_date must be 'YYYY-MM-DD' or a date, got {target_date!r}")
    return target_date


def group_by_competition_day(
    converter: MatchDayConverter, events: Iterable[dict]
) -> dict[str, list[dict]]:
    """Bucket fixtures by competition day.

    Each fixture is copied with its ConversionResult under ``"conversion"``.
    Fixtures without a kickoff time are skipped and logged. A fixture whose
    time could not be read at all lands in the ``""`` bucket.
    """
    _require_collection(events)

    grouped: dict[str, list[dict]] = {}
    for event in events:
        raw_time, competition_id = extract_event_time(event)
        if raw_time is None:
            converter.logger.warning("Skipping fixture without kickoff time: %s", _describe(event))
            continue

        conversion = converter.convert(raw_time, competition_id)
        grouped.setdefault(conversion.competition_day, []).append(
            {**event, CONVERSION_KEY: conversion}
        )
        converter.logger.debug("Grouped %s -> %s", _describe(event), conversion.competition_day)

    return grouped


def filter_for_day(
    converter: MatchDayConverter, events: Iterable[dict], target_date: str | date
) -> list[dict]:
    """Fixtures whose competition day is ``target_date``."""
    _require_collection(events)
    target = _normalise_target(target_date)

    matches = []
    for event in events:
        raw_time, competition_id = extract_event_time(event)
        if raw_time is None:
            continue
        if converter.convert(raw_time, competition_id).competition_day == target:
            matches.append(event)
    return matches


def is_event_on_date(
    converter: MatchDayConverter,
    raw_time: object,
    target_date: str | date,
    competition_id: object = None,
) -> DateCheck:
    target = _normalise_target(target_date)
    conversion = converter.convert(raw_time, competition_id)
    is_match = conversion.competition_day == target

    if is_match:
        reason = f"Competition day {conversion.competition_day} matches {target}"
    else:
        reason = f"Competition day {conversion.competition_day or 'unknown'} is not {target}"
    return DateCheck(is_match=is_match, reason=reason, conversion=conversion)

"""Convert fixture kickoff times into competition days and viewer-local times."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta, timezone

from matchday import ConversionResult, TournamentTimeConfig
from matchday import grouping
from matchday.day_resolver import resolve_competition_day
from matchday.errors import InvalidTimestamp, UnknownTimezone
from matchday.parser import parse_fallback, parse_timestamp
from matchday.registry import TournamentRegistry
from matchday.zones import project, resolve_zone

PLACEHOLDER_TIME = "--:--"
UTC = "UTC"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MatchDayConverter:
    """Maps UTC kickoff times to competition days for one viewer timezone.

    The registry, logger and clock are injected. Conversions never raise for
    bad event data: unparseable timestamps produce a degraded result and
    unknown zones are replaced with UTC.
    """

    def __init__(
        self,
        viewer_timezone: str,
        registry: TournamentRegistry | None = None,
        logger: logging.Logger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.viewer_timezone = viewer_timezone
        self.registry = registry if registry is not None else TournamentRegistry.from_json()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._clock = clock or _utc_now

    def convert(
        self,
        raw_time: object,
        competition_id: object = None,
        viewer_timezone: str | None = None,
    ) -> ConversionResult:
        config = self.registry.lookup(competition_id)
        viewer_tz = viewer_timezone or self.viewer_timezone

        try:
            instant = parse_timestamp(raw_time)
        except InvalidTimestamp as e:
            self.logger.warning("Falling back for competition %s: %s", competition_id, e)
            return self._degraded_result(raw_time, viewer_tz)

        try:
            tournament_tz, tournament_time = self._project_or_utc(instant, config.timezone)
            viewer_zone, viewer_time = self._project_or_utc(instant, viewer_tz)
            competition_day = resolve_competition_day(tournament_time, config.day_start_offset)
        except OverflowError as e:
            self.logger.warning("Kickoff %r out of range for competition %s: %s", raw_time, competition_id, e)
            return self._degraded_result(raw_time, viewer_tz)

        if competition_day != tournament_time.date():
            self.logger.debug(
                "Early kickoff %s in %s moved to competition day %s",
                tournament_time.strftime("%H:%M"),
                tournament_tz,
                competition_day.isoformat(),
            )

        viewer_day = viewer_time.date()
        today = self._clock().astimezone(viewer_time.tzinfo).date()

        return ConversionResult(
            absolute_instant=instant,
            tournament_local_time=tournament_time,
            tournament_timezone=tournament_tz,
            competition_day=competition_day.isoformat(),
            viewer_local_time=viewer_time,
            viewer_timezone=viewer_zone,
            viewer_calendar_day=viewer_day.isoformat(),
            display_time=viewer_time.strftime("%H:%M"),
            display_date=viewer_day.isoformat(),
            is_today=viewer_day == today,
            is_tomorrow=viewer_day == today + timedelta(days=1),
            is_yesterday=viewer_day == today - timedelta(days=1),
        )

    def _project_or_utc(self, instant: datetime, timezone_id: str) -> tuple[str, datetime]:
        try:
            return timezone_id, project(instant, timezone_id)
        except UnknownTimezone as e:
            self.logger.warning("%s, using UTC", e)
            return UTC, instant.astimezone(timezone.utc)

    def _degraded_result(self, raw_time: object, viewer_tz: str) -> ConversionResult:
        fallback = parse_fallback(raw_time)
        if fallback is None:
            self.logger.warning("No usable kickoff time in %r", raw_time)
            return ConversionResult(
                absolute_instant=None,
                tournament_local_time=None,
                tournament_timezone=UTC,
                competition_day="",
                viewer_local_time=None,
                viewer_timezone=viewer_tz,
                viewer_calendar_day="",
                display_time=PLACEHOLDER_TIME,
                display_date="",
                degraded=True,
            )

        day = fallback.date().isoformat()
        return ConversionResult(
            absolute_instant=fallback,
            tournament_local_time=fallback,
            tournament_timezone=UTC,
            competition_day=day,
            viewer_local_time=fallback,
            viewer_timezone=viewer_tz,
            viewer_calendar_day=day,
            display_time=fallback.strftime("%H:%M"),
            display_date=day,
            degraded=True,
        )

    # --- Registry passthrough ---

    def register_competition(self, config: TournamentTimeConfig) -> None:
        """Add or replace a competition; earlier results are unaffected."""
        try:
            resolve_zone(config.timezone)
        except UnknownTimezone as e:
            self.logger.warning("Registering %s with %s; conversions will use UTC", config.display_name, e)
        self.registry.register(config)

    def supported_competitions(self) -> list[TournamentTimeConfig]:
        return self.registry.supported()

    # --- Display helpers ---

    def current_viewer_date(self) -> str:
        """Today's date in the viewer's timezone."""
        try:
            zone = resolve_zone(self.viewer_timezone)
        except UnknownTimezone:
            zone = timezone.utc
        return self._clock().astimezone(zone).date().isoformat()

    def format_display_time(self, raw_time: object, competition_id: object = None) -> str:
        """Viewer-local ``HH:MM`` kickoff, or a placeholder for bad input."""
        result = self.convert(raw_time, competition_id)
        if result.degraded:
            return PLACEHOLDER_TIME
        return result.display_time

    # --- Bulk operations ---

    def group_by_competition_day(self, events: Iterable[dict]) -> dict[str, list[dict]]:
        return grouping.group_by_competition_day(self, events)

    def filter_for_day(self, events: Iterable[dict], target_date: str | date) -> list[dict]:
        return grouping.filter_for_day(self, events, target_date)

    def is_event_on_date(
        self,
        raw_time: object,
        target_date: str | date,
        competition_id: object = None,
    ) -> grouping.DateCheck:
        return grouping.is_event_on_date(self, raw_time, target_date, competition_id)


def convert_to_viewer_timezone(
    raw_time: object,
    viewer_timezone: str,
    competition_id: object = None,
    registry: TournamentRegistry | None = None,
) -> ConversionResult:
    """One-off conversion without keeping a converter around."""
    return MatchDayConverter(viewer_timezone, registry=registry).convert(raw_time, competition_id)


def is_fixture_on_date(
    raw_time: object,
    target_date: str | date,
    competition_id: object = None,
    viewer_timezone: str = UTC,
    registry: TournamentRegistry | None = None,
) -> tuple[bool, str]:
    """Quick check whether a fixture falls on ``target_date``.

    Returns ``(is_match, reason)``.
    """
    check = MatchDayConverter(viewer_timezone, registry=registry).is_event_on_date(
        raw_time, target_date, competition_id
    )
    return check.is_match, check.reason

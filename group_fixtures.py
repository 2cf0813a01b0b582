#!/usr/bin/env python3
"""
Match-day Fixture Grouper

Reads a fixture payload (JSON) from a provider and prints the fixtures
grouped by competition day, with kickoff times in the viewer's timezone.

Usage:
    python group_fixtures.py fixtures.json
    python group_fixtures.py fixtures.json --date 2024-03-09 --tz America/New_York
    python group_fixtures.py fixtures.json --date 2024-03-09 --ics public/2024-03-09.ics
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from matchday.calendar_gen import create_matchday_calendar
from matchday.converter import MatchDayConverter
from matchday.registry import TournamentRegistry


def load_fixtures(path: str | Path) -> list[dict]:
    """Load fixtures from a JSON file.

    Accepts a bare list or a provider envelope with a ``response`` list.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("response", data.get("fixtures", []))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of fixtures")
    return data


def fixture_label(fixture: dict) -> str:
    teams = fixture.get("teams")
    if not isinstance(teams, dict):
        teams = {}
    home, away = (teams.get(side) for side in ("home", "away"))
    home = home.get("name", "TBD") if isinstance(home, dict) else "TBD"
    away = away.get("name", "TBD") if isinstance(away, dict) else "TBD"
    league = fixture.get("league")
    league = league.get("name", "") if isinstance(league, dict) else ""
    label = f"{home} vs {away}"
    return f"{label} [{league}]" if league else label


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Group fixtures by competition day.")
    parser.add_argument("fixtures", help="Path to a fixtures JSON file")
    parser.add_argument("--date", help="Only show this competition day (YYYY-MM-DD)")
    parser.add_argument(
        "--tz",
        default=os.environ.get("TZ") or "UTC",
        help="Viewer timezone (default: $TZ or UTC)",
    )
    parser.add_argument("--competitions", help="Competition timezone table (JSON)")
    parser.add_argument("--ics", help="Write the selected day to this ICS file (needs --date)")
    parser.add_argument("--verbose", action="store_true", help="Log conversion diagnostics")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="  %(levelname)s %(name)s: %(message)s")

    if args.ics and not args.date:
        print("ERROR: --ics needs --date")
        return 1

    try:
        registry = TournamentRegistry.from_json(args.competitions)
        fixtures = load_fixtures(args.fixtures)
    except (OSError, ValueError, KeyError) as e:
        print(f"ERROR: {e}")
        return 1

    converter = MatchDayConverter(args.tz, registry=registry)
    grouped = converter.group_by_competition_day(fixtures)
    print(f"Loaded {len(fixtures)} fixtures, {len(grouped)} competition day(s), viewer timezone {args.tz}")

    days = [args.date] if args.date else sorted(grouped)
    for day in days:
        day_fixtures = grouped.get(day, [])
        print(f"\n{day or 'Unknown date'} ({len(day_fixtures)} fixtures)")
        for fixture in sorted(day_fixtures, key=lambda f: f["conversion"].viewer_calendar_day + f["conversion"].display_time):
            conversion = fixture["conversion"]
            print(f"  {conversion.display_date} {conversion.display_time}  {fixture_label(fixture)}")

    if args.ics:
        cal = create_matchday_calendar(args.date, grouped.get(args.date, []), args.tz)
        ics_path = Path(args.ics)
        ics_path.parent.mkdir(parents=True, exist_ok=True)
        ics_path.write_bytes(cal.to_ical())
        print(f"\nSaved {ics_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

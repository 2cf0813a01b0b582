"""Competition timezone registry, seeded from a JSON table."""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from matchday import DEFAULT_DAY_START, TournamentTimeConfig

logger = logging.getLogger(__name__)

SEED_PATH = Path(__file__).parent / "competitions.json"
SEED_ENV_VAR = "MATCHDAY_COMPETITIONS"


def default_seed_path() -> Path:
    """Seed table path, overridable with MATCHDAY_COMPETITIONS."""
    override = os.environ.get(SEED_ENV_VAR, "")
    return Path(override) if override else SEED_PATH


def load_competitions(path: str | Path | None = None) -> list[TournamentTimeConfig]:
    """Load competition configurations from a JSON file.

    The file holds ``{"competitions": [...]}`` with one object per
    competition. Duplicate ids raise ValueError.
    """
    path = Path(path) if path is not None else default_seed_path()
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    configs = [TournamentTimeConfig.from_dict(c) for c in data["competitions"]]

    seen: set[int] = set()
    for config in configs:
        if config.competition_id in seen:
            raise ValueError(f"Duplicate competition_id {config.competition_id} in {path}")
        seen.add(config.competition_id)

    return configs


def coerce_competition_id(value: object) -> int | None:
    """Competition id as an int, or None if ``value`` is not one.

    Provider payloads sometimes carry ids as strings (``"78"``).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def default_config(competition_id: int | None = None) -> TournamentTimeConfig:
    """Configuration used for competitions missing from the registry."""
    return TournamentTimeConfig(
        competition_id=competition_id if competition_id is not None else 0,
        display_name="Default",
        timezone="UTC",
        day_start_offset=DEFAULT_DAY_START,
        country_label="Unknown",
    )


class TournamentRegistry:
    """Maps competition ids to their timezone configuration.

    Lookups read the current mapping without locking. ``register`` builds a
    new mapping under a lock and swaps it in, so readers see either the old
    or the new entry and never a half-written one.
    """

    def __init__(self, configs: list[TournamentTimeConfig] | None = None) -> None:
        self._configs: dict[int, TournamentTimeConfig] = {
            c.competition_id: c for c in (configs or [])
        }
        self._write_lock = threading.Lock()

    @classmethod
    def from_json(cls, path: str | Path | None = None) -> TournamentRegistry:
        configs = load_competitions(path)
        logger.debug("Loaded %d competition timezone configs", len(configs))
        return cls(configs)

    def lookup(self, competition_id: object) -> TournamentTimeConfig:
        if competition_id is None:
            return default_config()

        key = coerce_competition_id(competition_id)
        if key is None:
            logger.warning("Unusable competition id %r, using default config", competition_id)
            return default_config()

        config = self._configs.get(key)
        if config is None:
            return default_config(key)
        return config

    def register(self, config: TournamentTimeConfig) -> None:
        with self._write_lock:
            configs = dict(self._configs)
            replaced = config.competition_id in configs
            configs[config.competition_id] = config
            self._configs = configs

        logger.info(
            "%s competition %d (%s) -> %s, day starts %s",
            "Replaced" if replaced else "Registered",
            config.competition_id,
            config.display_name,
            config.timezone,
            config.day_start_offset.strftime("%H:%M"),
        )

    def supported(self) -> list[TournamentTimeConfig]:
        return list(self._configs.values())

    def __contains__(self, competition_id: object) -> bool:
        return competition_id in self._configs

    def __len__(self) -> int:
        return len(self._configs)

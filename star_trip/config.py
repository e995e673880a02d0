"""
Game configuration.

Settings come from keyword arguments, a dictionary, a JSON file, or the
environment (a `.env` file is honoured via python-dotenv).
"""

from __future__ import annotations

import json
import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from .constants import (
    DIFFICULTY,
    LOG_PAGE_LINES,
    MISSION,
    PLAYER_ENERGY,
    PLAYER_RANGE,
    PLAYER_SHIELDS,
    PLAYER_TORPEDOES,
    STAT_MAX,
)
from .entity import Ship

# Below this the enemy range interval [2, difficulty // 20) is empty
MIN_DIFFICULTY = 60

ENV_PREFIX = "STAR_TRIP_"


@dataclass
class GameConfig:
    """
    Settings for a single game.

    Attributes:
        difficulty: Severity constant; raises enemy density and stats and
            lowers torpedo effectiveness.
        mission: Enemies to destroy for victory.
        seed: Seed for the game's random source (None for a fresh one).
        log_page_lines: Newlines per logbook page.
        player_energy: Starting player energy.
        player_shields: Starting player shields.
        player_torpedoes: Starting torpedo inventory.
        player_range: Player weapon range in sectors.
    """
    difficulty: int = DIFFICULTY
    mission: int = MISSION
    seed: Optional[int] = None
    log_page_lines: int = LOG_PAGE_LINES
    player_energy: int = PLAYER_ENERGY
    player_shields: int = PLAYER_SHIELDS
    player_torpedoes: int = PLAYER_TORPEDOES
    player_range: int = PLAYER_RANGE

    def validate(self) -> GameConfig:
        """
        Check the settings are playable.

        Returns:
            self, for chaining.

        Raises:
            ValueError: If a setting is out of range.
        """
        if not MIN_DIFFICULTY <= self.difficulty <= STAT_MAX:
            raise ValueError(
                f"difficulty must be within {MIN_DIFFICULTY}-{STAT_MAX}, got {self.difficulty}"
            )
        if self.mission < 1:
            raise ValueError(f"mission must be at least 1, got {self.mission}")
        if self.log_page_lines < 1:
            raise ValueError(f"log_page_lines must be at least 1, got {self.log_page_lines}")
        # Ship validates the byte ranges
        self.player_ship()
        return self

    def player_ship(self) -> Ship:
        """The player's ship at the start of a game."""
        return Ship(
            energy=self.player_energy,
            shields=self.player_shields,
            torpedoes=self.player_torpedoes,
            range=self.player_range,
        )

    def make_rng(self) -> random.Random:
        """Random source seeded from this configuration."""
        return random.Random(self.seed)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameConfig:
        """Create configuration from a dictionary. Unknown keys are ignored."""
        seed = data.get("seed")
        return cls(
            difficulty=int(data.get("difficulty", DIFFICULTY)),
            mission=int(data.get("mission", MISSION)),
            seed=int(seed) if seed is not None else None,
            log_page_lines=int(data.get("log_page_lines", LOG_PAGE_LINES)),
            player_energy=int(data.get("player_energy", PLAYER_ENERGY)),
            player_shields=int(data.get("player_shields", PLAYER_SHIELDS)),
            player_torpedoes=int(data.get("player_torpedoes", PLAYER_TORPEDOES)),
            player_range=int(data.get("player_range", PLAYER_RANGE)),
        ).validate()

    @classmethod
    def from_json(cls, path: str | Path) -> GameConfig:
        """Load configuration from a JSON file."""
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Game config not found: {path}")

        with open(config_path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> GameConfig:
        """
        Load configuration from STAR_TRIP_* environment variables.

        A `.env` file in the working directory is read first.
        """
        load_dotenv(find_dotenv(usecwd=True))

        data: Dict[str, Any] = {}
        for key in ("difficulty", "mission", "seed"):
            value = os.getenv(ENV_PREFIX + key.upper())
            if value:
                data[key] = value
        return cls.from_dict(data)

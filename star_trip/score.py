"""Final score calculation."""

from __future__ import annotations

import math

from .entity import Ship


def score(mission: int, date: int, ship: Ship) -> int:
    """
    Score a finished game.

    score = 5 * mission^2 + floor(100 * e^(-date / 100)) + 4 * energy + 3 * shields

    Args:
        mission: Enemies destroyed.
        date: Elapsed game date.
        ship: The player's final ship.

    Returns:
        The score.
    """
    date_bonus = int(100.0 * math.exp(-date / 100.0))
    return 5 * mission ** 2 + date_bonus + 4 * ship.energy + 3 * ship.shields

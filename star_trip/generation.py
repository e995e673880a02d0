"""
Procedural galaxy generation.

Each system gets two random caps, one for enemies and one for everything
else. Cells are offered an entity with probability 1/5 in row-major order
and accepted while the matching cap allows; the system is then shuffled so
the sequential acceptance leaves no positional bias.
"""

from __future__ import annotations

import math
import random

from .constants import DIFFICULTY, SECTORS, SPAWN_CHANCE, STAT_MAX, SYSTEMS
from .entity import Entity
from .grid import Galaxy, Position


def density_factor(difficulty: int = DIFFICULTY) -> float:
    """exp(difficulty / 255 - 1): approaches 1 as difficulty approaches 255."""
    return math.exp(difficulty / STAT_MAX - 1.0)


def generate_galaxy(rng: random.Random, difficulty: int = DIFFICULTY) -> Galaxy:
    """
    Randomly generate a galaxy full of enemies and other entities.

    Args:
        rng: Random source for every draw.
        difficulty: Severity constant controlling density and enemy stats.

    Returns:
        A populated Galaxy.
    """
    galaxy = Galaxy()
    factor = density_factor(difficulty)

    for system_y in range(SYSTEMS):
        for system_x in range(SYSTEMS):
            enemies = 0
            others = 0
            enemy_max = int(9.0 * rng.random() * factor)
            other_max = int(9.0 * rng.random() * factor)

            for y in range(SECTORS):
                for x in range(SECTORS):
                    if rng.random() >= SPAWN_CHANCE:
                        continue
                    entity = Entity.random(rng, difficulty)
                    if entity.is_enemy:
                        if enemies < enemy_max:
                            enemies += 1
                            galaxy[Position(x, y, system_x, system_y)] = entity
                    elif others < other_max:
                        others += 1
                        galaxy[Position(x, y, system_x, system_y)] = entity

            galaxy.shuffle_system(system_x, system_y, rng)

    return galaxy


def random_position(rng: random.Random) -> Position:
    """Uniformly random sector in a uniformly random system."""
    return Position(
        rng.randrange(SECTORS),
        rng.randrange(SECTORS),
        rng.randrange(SYSTEMS),
        rng.randrange(SYSTEMS),
    )


def spawn(rng: random.Random, difficulty: int = DIFFICULTY) -> tuple[Galaxy, Position]:
    """
    Generate a galaxy and a player spawn position.

    The spawn cell is cleared, so the player never starts on top of an entity.
    """
    galaxy = generate_galaxy(rng, difficulty)
    position = random_position(rng)
    galaxy.clear(position)
    return galaxy, position


if __name__ == "__main__":
    galaxy, position = spawn(random.Random(42))
    print(f"Generated {galaxy.count()} entities; player spawns at {tuple(position)}")

"""
Entity model: ships and the things that occupy galaxy cells.

Ship stats are unsigned bytes. Every update goes through the saturating
helpers below, so stats stay in [0, 255] whatever arithmetic is applied.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .constants import DIFFICULTY, STAT_MAX


# =============================================================================
# SATURATING BYTE ARITHMETIC
# =============================================================================

def clamp_byte(value: int) -> int:
    """Clamp an integer into [0, 255]."""
    return max(0, min(STAT_MAX, int(value)))


def saturating_add(a: int, b: int) -> int:
    """a + b, capped at 255."""
    return clamp_byte(a + b)


def saturating_sub(a: int, b: int) -> int:
    """a - b, floored at 0."""
    return clamp_byte(a - b)


# =============================================================================
# SHIP
# =============================================================================

@dataclass(frozen=True)
class Ship:
    """
    Status of a spaceship.

    Used both for the player and for every enemy entity. Instances are
    immutable; use `with_stats` (or `dataclasses.replace`) for updates.

    Attributes:
        energy: Power reserve. The ship is lost when it reaches 0.
        shields: Absorbs damage before energy does.
        torpedoes: Torpedo inventory.
        range: Weapon range in sectors.
    """
    energy: int
    shields: int
    torpedoes: int
    range: int

    def __post_init__(self):
        for name in ("energy", "shields", "torpedoes", "range"):
            value = getattr(self, name)
            if not 0 <= value <= STAT_MAX:
                raise ValueError(f"Ship {name} must be within 0-{STAT_MAX}, got {value}")

    def with_stats(self, **changes: int) -> Ship:
        """Copy of this ship with the given stats clamped into byte range."""
        return replace(self, **{name: clamp_byte(value) for name, value in changes.items()})

    @property
    def capacity(self) -> int:
        """Total damage the ship can absorb (energy plus shields)."""
        return self.energy + self.shields

    @classmethod
    def enemy(cls, rng: random.Random, difficulty: int = DIFFICULTY) -> Ship:
        """
        Randomly generate an enemy ship.

        Energy and shields are drawn from [20, difficulty), torpedoes from
        [1, difficulty // 20) and range from [2, difficulty // 20).
        """
        energy = rng.randrange(20, difficulty)
        shields = rng.randrange(20, difficulty)
        torpedoes = rng.randrange(1, difficulty // 20)
        weapon_range = rng.randrange(2, difficulty // 20)
        return cls(energy=energy, shields=shields, torpedoes=torpedoes, range=weapon_range)


# =============================================================================
# ENTITIES
# =============================================================================

class EntityKind(Enum):
    """Possible entities that might be encountered in the depths of space."""
    BLACK_HOLE = "Black hole"
    STAR = "Star"
    PLANET = "Planet"
    BASE = "Base"
    KLARGONS = "Klargons"
    REMULINS = "Remulins"
    FARINGA = "Faringa"
    BERG = "Berg"

    @property
    def is_enemy(self) -> bool:
        return self in ENEMY_KINDS

    @property
    def code(self) -> int:
        """Single-byte display code used on the scan chart."""
        return DISPLAY_CODES[self]

    @property
    def label(self) -> str:
        """Upper-case legend label."""
        return self.value.upper()


ENEMY_KINDS = frozenset({
    EntityKind.KLARGONS,
    EntityKind.REMULINS,
    EntityKind.FARINGA,
    EntityKind.BERG,
})

ENVIRONMENT_KINDS = frozenset(EntityKind) - ENEMY_KINDS

# Legend order matches the enum declaration order
DISPLAY_CODES: dict[EntityKind, int] = {
    EntityKind.BLACK_HOLE: 0x07,
    EntityKind.STAR: 0x08,
    EntityKind.PLANET: 0x09,
    EntityKind.BASE: 0x0B,
    EntityKind.KLARGONS: 0x03,
    EntityKind.REMULINS: 0x04,
    EntityKind.FARINGA: 0x05,
    EntityKind.BERG: 0x06,
}


@dataclass(frozen=True)
class Entity:
    """
    Occupant of a galaxy cell.

    Environmental kinds carry no data; enemy factions carry a `Ship`.

    Attributes:
        kind: What this entity is.
        ship: Enemy ship status (None for environmental kinds).
    """
    kind: EntityKind
    ship: Optional[Ship] = None

    def __post_init__(self):
        if self.kind.is_enemy and self.ship is None:
            raise ValueError(f"{self.kind.value} must carry a ship")
        if not self.kind.is_enemy and self.ship is not None:
            raise ValueError(f"{self.kind.value} cannot carry a ship")

    @property
    def is_enemy(self) -> bool:
        return self.kind.is_enemy

    @property
    def name(self) -> str:
        return self.kind.value

    def update(self, ship: Ship) -> Entity:
        """
        Same enemy faction carrying an updated ship.

        Raises:
            TypeError: If this entity is environmental.
        """
        if not self.is_enemy:
            raise TypeError(f"{self.kind.value} has no ship to update")
        return Entity(self.kind, ship)

    def __bytes__(self) -> bytes:
        return self.name.encode("ascii")

    @classmethod
    def random(cls, rng: random.Random, difficulty: int = DIFFICULTY) -> Entity:
        """Draw one of the eight kinds uniformly; enemies get random stats."""
        kind = rng.choice(list(EntityKind))
        if kind.is_enemy:
            return cls(kind, Ship.enemy(rng, difficulty))
        return cls(kind)


# Shorthands for the environmental singletons
BLACK_HOLE = Entity(EntityKind.BLACK_HOLE)
STAR = Entity(EntityKind.STAR)
PLANET = Entity(EntityKind.PLANET)
BASE = Entity(EntityKind.BASE)

"""
Structured game events.

Every state change a turn produces is also recorded as a `GameEvent`, so a
game can be inspected or replayed without parsing the narrative logbook.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class GameEventType(Enum):
    """Types of events that can occur during a game."""
    # Player actions
    MOVED = auto()
    WEAPON_FIRED = auto()
    TARGET_MISSED = auto()
    SHIELDS_RAISED = auto()
    SCANNED = auto()
    INVESTIGATED = auto()
    DOCKED = auto()
    COMMAND_REJECTED = auto()

    # Hazards
    COLLISION = auto()
    BLACK_HOLE = auto()

    # Enemy activity
    ENEMY_ATTACK = auto()
    ENEMY_MOVED = auto()
    ENEMY_DESTROYED = auto()

    # Time
    TURN_ENDED = auto()


@dataclass
class GameEvent:
    """
    An event that occurs during a game.

    Attributes:
        event_type: The type of event.
        date: Game date when the event occurred.
        sector: Sector (x, y) involved, if any, in the player's system.
        data: Additional event-specific data.
    """
    event_type: GameEventType
    date: int
    sector: Optional[tuple[int, int]] = None
    data: dict = field(default_factory=dict)

    def __str__(self) -> str:
        sector_str = f" {self.sector}" if self.sector is not None else ""
        return f"D+{self.date} {self.event_type.name}{sector_str}"

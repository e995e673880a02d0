"""
Movement engine.

Integrates a continuous straight-line move over the discrete sector grid.
The ship advances `speed` sectors per step (each axis rounded to a whole
sector) until it reaches the target, runs out of energy, or falls into a
black hole. Every intra-system step checks the cell it lands on for
collisions and gives the enemies a turn. Inter-system travel costs ten
times the energy, skips collision checks and does not give enemies a turn.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Sequence

from .constants import ARRIVAL_EPSILON, INTER_SYSTEM_COST
from .entity import EntityKind, saturating_sub
from .events import GameEventType
from .grid import Position, is_sector, is_system

if TYPE_CHECKING:
    from .state import GameState


USAGE = b"""MOVE requires at least three positive
numeric arguments:

    MOVE s x y [X Y]

The speed s must be greater than zero.

Run HELP for more commands."""

BLACK_HOLE_ENTRY = b"""
Your ship fell into a black hole!
The hull lost integrity under the intense
gravitational pull and was crushed along
with any remaining crew onboard.
"""


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def step_towards(
    x: float, y: float, target_x: int, target_y: int, speed: int
) -> tuple[float, float, int]:
    """
    Advance one step towards a target.

    Args:
        x: Current column.
        y: Current row.
        target_x: Target column.
        target_y: Target row.
        speed: Distance covered per step.

    Returns:
        Tuple of (new x, new y, distance units charged). When the target is
        closer than `speed` the step snaps onto it and charges the rounded
        remaining distance; otherwise it charges `speed`.
    """
    dx = target_x - x
    dy = target_y - y
    dr = math.hypot(dx, dy)

    if speed > dr:
        return float(target_x), float(target_y), round_half_away(dr)

    x += round_half_away(speed * dx / dr)
    y += round_half_away(speed * dy / dr)
    return x, y, speed


class MovementEngine:
    """Moves the player's ship through a GameState's galaxy."""

    def __init__(self, state: GameState) -> None:
        self.state = state

    def move(self, args: Sequence[int]) -> None:
        """
        Move the ship as commanded.

        Args:
            args: (speed, x, y) for a move within the current system, or
                (speed, x, y, X, Y) to continue on to system (X, Y).
        """
        state = self.state
        if (
            len(args) < 3
            or args[0] <= 0
            or not is_sector(args[1], args[2])
            or (len(args) >= 5 and not is_system(args[3], args[4]))
        ):
            state.usage(USAGE, command="MOVE")
            return

        speed, target_x, target_y = args[0], args[1], args[2]

        arrived = self._within_system(speed, target_x, target_y)
        if arrived is None:
            return

        if len(args) >= 5:
            arrived = self._between_systems(arrived, speed, args[3], args[4])

        # Enemies see the starting cell until the whole move is done
        state.position = arrived
        state.scan()

    def _within_system(self, speed: int, target_x: int, target_y: int) -> Optional[Position]:
        """
        Intra-system phase.

        Returns:
            The cell reached, or None if the ship was lost to a black hole.
        """
        state = self.state
        start = state.position
        here = start
        x, y = float(start.x), float(start.y)

        while state.player.energy > 0:
            if math.hypot(target_x - x, target_y - y) < ARRIVAL_EPSILON:
                break

            x, y, cost = step_towards(x, y, target_x, target_y, speed)
            state.player = state.player.with_stats(
                energy=saturating_sub(state.player.energy, cost)
            )
            here = start.with_sector(int(x), int(y))

            state.record(
                f"\nMoved to SECTOR: ({here.x}, {here.y}) in SYSTEM: "
                f"({start.system_x}, {start.system_y}).\n"
                f"Remaining ENERGY: {state.player.energy}\n".encode("ascii")
            )
            state.log_event(
                GameEventType.MOVED,
                sector=here.sector,
                data={"system": start.system, "energy": state.player.energy},
            )

            if not self._collide(here):
                return None

            state.evolve(True)

        return here

    def _collide(self, position: Position) -> bool:
        """
        Resolve a collision with whatever occupies `position`.

        Returns:
            False if the ship was lost to a black hole.
        """
        state = self.state
        entity = state.galaxy[position]
        if entity is None:
            return True

        if entity.kind is EntityKind.BLACK_HOLE:
            state.record(BLACK_HOLE_ENTRY)
            state.player = state.player.with_stats(energy=0)
            state.log_event(GameEventType.BLACK_HOLE, sector=position.sector)
            return False

        damage = state.rng.randrange(state.config.difficulty)
        player = state.player
        if player.shields > damage:
            state.player = player.with_stats(shields=player.shields - damage)
        else:
            state.player = player.with_stats(
                shields=0,
                energy=saturating_sub(player.energy, damage - player.shields),
            )

        state.record(
            f"\nCollided with: {entity.name}!\n"
            f"Remaining ENERGY: {state.player.energy}\n"
            f"Remaining SHIELDS: {state.player.shields}\n".encode("ascii")
        )
        state.log_event(
            GameEventType.COLLISION,
            sector=position.sector,
            data={"entity": entity.name, "damage": damage},
        )
        return True

    def _between_systems(self, here: Position, speed: int, target_x: int, target_y: int) -> Position:
        """
        Inter-system phase: no collisions and no enemy turns.

        Returns:
            The same sector in the system reached.
        """
        state = self.state
        system_x, system_y = float(here.system_x), float(here.system_y)

        while state.player.energy > 0:
            if math.hypot(target_x - system_x, target_y - system_y) < ARRIVAL_EPSILON:
                break

            system_x, system_y, cost = step_towards(
                system_x, system_y, target_x, target_y, speed
            )
            state.player = state.player.with_stats(
                energy=saturating_sub(state.player.energy, INTER_SYSTEM_COST * cost)
            )

            state.record(
                f"\nMoved to SECTOR: ({here.x}, {here.y}) in SYSTEM: "
                f"({int(system_x)}, {int(system_y)}).\n"
                f"Remaining ENERGY: {state.player.energy}\n".encode("ascii")
            )
            state.log_event(
                GameEventType.MOVED,
                sector=here.sector,
                data={"system": (int(system_x), int(system_y)), "energy": state.player.energy},
            )

        return Position(here.x, here.y, int(system_x), int(system_y))

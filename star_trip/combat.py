"""
Combat mechanics.

Damage arithmetic shared by the player's weapons and enemy attacks, plus
the player-side laser and torpedo resolution against enemy entities.

Damage is capped at the target's remaining capacity (energy plus shields)
and drains shields before energy. All stats saturate at 0 and 255.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Callable, Sequence

from .constants import DIFFICULTY, STAT_MAX, TORPEDO_DAMAGE
from .entity import Entity, Ship, clamp_byte, saturating_sub
from .events import GameEventType
from .grid import Position, is_sector

if TYPE_CHECKING:
    from .state import GameState


DESTROYED_NOTE = b"Their ship has been destroyed.\n"


def fire(beam: int, ship: Ship) -> tuple[int, Ship]:
    """
    Calculate a hit on a ship.

    Args:
        beam: Incoming beam energy.
        ship: The ship being hit.

    Returns:
        Tuple of (damage dealt, ship after the hit). Damage never exceeds
        the ship's energy plus shields; shields absorb first.
    """
    damage = min(beam, ship.capacity)
    if ship.shields > damage:
        return damage, ship.with_stats(shields=ship.shields - damage)

    remaining = damage - ship.shields
    return damage, ship.with_stats(shields=0, energy=saturating_sub(ship.energy, remaining))


def torpedo_beam(count: int, difficulty: int = DIFFICULTY) -> int:
    """
    Beam energy of a torpedo volley.

    Each torpedo delivers 100 damage scaled down by (255 - difficulty) / 255,
    and the total is capped at one byte.
    """
    beam = count * TORPEDO_DAMAGE * (STAT_MAX - difficulty) / STAT_MAX
    return clamp_byte(math.floor(beam))


# Weapon resolution signature used by CombatResolver.weapon
WeaponFn = Callable[["CombatResolver", Position, int, Entity], bytes]


class CombatResolver:
    """
    Resolves the player's attacks on enemy entities.

    Bound to a GameState, whose galaxy, player ship, mission counter and
    logbook it updates.
    """

    def __init__(self, state: GameState) -> None:
        self.state = state

    def hit(self, position: Position, beam: int, enemy: Entity) -> tuple[int, bool]:
        """
        Apply a hit to the enemy at `position` and update the galaxy.

        A surviving enemy is written back with its damaged ship; a destroyed
        one is removed, counted towards the mission and logged.

        Args:
            position: Cell holding the enemy.
            beam: Beam energy delivered.
            enemy: The enemy entity in that cell.

        Returns:
            Tuple of (damage dealt, whether the enemy was destroyed).

        Raises:
            TypeError: If `enemy` is not an enemy faction.
        """
        if not enemy.is_enemy:
            raise TypeError(f"Cannot fire on {enemy.name}")

        state = self.state
        damage, ship = fire(beam, enemy.ship)

        if ship.energy > 0:
            state.galaxy[position] = enemy.update(ship)
            return damage, False

        state.galaxy.clear(position)
        state.mission += 1
        state.record(f"\nEnemy {enemy.name} destroyed!\n".encode("ascii"))
        state.log_event(
            GameEventType.ENEMY_DESTROYED,
            sector=position.sector,
            data={"enemy": enemy.name, "mission": state.mission},
        )
        return damage, True

    def laser(self, position: Position, beam: int, enemy: Entity) -> bytes:
        """
        Fire the player's lasers.

        The player spends the full beam energy even when the target had
        less capacity left than the beam delivered.
        """
        damage, destroyed = self.hit(position, beam, enemy)

        state = self.state
        state.player = state.player.with_stats(energy=state.player.energy - beam)
        state.log_event(
            GameEventType.WEAPON_FIRED,
            sector=position.sector,
            data={"weapon": "laser", "beam": beam, "damage": damage, "destroyed": destroyed},
        )

        msg = f"\nHit {enemy.name} with lasers inflicting {damage} damage!\n".encode("ascii")
        return msg + (DESTROYED_NOTE if destroyed else b"")

    def torpedo(self, position: Position, requested: int, enemy: Entity) -> bytes:
        """
        Fire the player's torpedoes.

        The volley is clamped to the torpedoes actually in inventory.
        """
        state = self.state
        number = min(requested, state.player.torpedoes)
        beam = torpedo_beam(number, state.config.difficulty)

        damage, destroyed = self.hit(position, beam, enemy)

        state.player = state.player.with_stats(torpedoes=state.player.torpedoes - number)
        state.log_event(
            GameEventType.WEAPON_FIRED,
            sector=position.sector,
            data={"weapon": "torpedo", "count": number, "damage": damage, "destroyed": destroyed},
        )

        msg = (
            f"\nHit {enemy.name} with {number} torpedo(es),\n"
            f"inflicting {damage} damage!\n"
        ).encode("ascii")
        return msg + (DESTROYED_NOTE if destroyed else b"")

    def weapon(self, args: Sequence[int], weapon: WeaponFn, name: str) -> None:
        """
        Fire one of the player's weapons as commanded.

        Expects exactly (amount, x, y). Targets outside weapon range, or
        cells without an enemy, are reported and still cost a turn.

        Args:
            args: Numeric command arguments.
            weapon: `CombatResolver.laser` or `CombatResolver.torpedo`.
            name: Weapon name for messages.
        """
        state = self.state
        if len(args) != 3 or args[0] <= 0 or not is_sector(args[1], args[2]):
            state.usage(
                f"{name} requires three positive\n"
                f"numeric arguments:\n\n"
                f"{name} n x y\n\n"
                f"where n must be greater than zero.\n\n"
                f"Run HELP for more commands.".encode("ascii"),
                command=name,
            )
            return

        amount, x, y = args
        amount = clamp_byte(amount)
        target = state.position.with_sector(x, y)
        distance = int(state.position.sector_distance(x, y))
        enemy = state.galaxy[target]

        if enemy is None or not enemy.is_enemy:
            msg = f"Nothing to target at ({x}, {y})!".encode("ascii")
            state.log_event(GameEventType.TARGET_MISSED, sector=(x, y), data={"reason": "empty"})
        elif state.player.range < distance:
            msg = f"({x}, {y}) out of range!".encode("ascii")
            state.log_event(
                GameEventType.TARGET_MISSED,
                sector=(x, y),
                data={"reason": "range", "distance": distance},
            )
        else:
            msg = weapon(self, target, amount, enemy)

        state.record(msg)
        state.display.message(msg)
        state.display.update_console()
        state.evolve(True)

"""
Enemy turn ("evolution") for the player's current system.

Each enemy in the system may attack the player when the turn is hostile
and the player is within its range, then tries to close in by one sector.
An enemy that relocates is not processed again later in the same pass.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from .combat import fire
from .constants import ENEMY_TORPEDO_BEAM, SECTORS
from .entity import Entity, Ship, clamp_byte
from .events import GameEventType
from .grid import Position, adjacent

if TYPE_CHECKING:
    from .state import GameState


def enemy_attack(state: GameState, position: Position, enemy: Entity) -> Ship:
    """
    Have an enemy attack the player.

    A coin flip picks lasers (beam drawn from [energy // 4, energy // 2)) or
    torpedoes (count drawn from [0, torpedoes), 50 beam each).

    Returns:
        The enemy's ship after spending the energy or torpedoes used.
    """
    rng = state.rng
    ship = enemy.ship

    if rng.random() < 0.5:
        low, high = ship.energy // 4, ship.energy // 2
        beam = rng.randrange(low, high) if high > low else low
        ship = ship.with_stats(energy=ship.energy - beam)
        weapon = "laser"
    else:
        number = rng.randrange(ship.torpedoes) if ship.torpedoes > 0 else 0
        ship = ship.with_stats(torpedoes=ship.torpedoes - number)
        beam = clamp_byte(ENEMY_TORPEDO_BEAM * number)
        weapon = "torpedo"

    damage, state.player = fire(beam, state.player)

    state.record(
        f"\nEnemy {enemy.name} have attacked!\n"
        f"We've taken {damage} damage.\n"
        f"Remaining ENERGY:  {state.player.energy}\n"
        f"          SHIELDS: {state.player.shields}\n".encode("ascii")
    )
    state.log_event(
        GameEventType.ENEMY_ATTACK,
        sector=position.sector,
        data={"enemy": enemy.name, "weapon": weapon, "beam": beam, "damage": damage},
    )
    return ship


def advance(state: GameState, position: Position, enemy: Entity, distance: float) -> Position | None:
    """
    Move an enemy one sector closer to the player, if it can.

    Takes the first empty neighbour (in `adjacent` order) that is strictly
    closer to the player, costing one energy. Enemies with 1 energy or less
    stay put, and the player's own sector is never entered.

    Returns:
        The new position, or None if the enemy did not move.
    """
    ship = enemy.ship
    if ship.energy <= 1:
        return None

    player = state.position
    for x, y in adjacent(position.x, position.y):
        destination = position.with_sector(x, y)
        if destination == player or not state.galaxy.is_empty(destination):
            continue
        if player.sector_distance(x, y) >= distance:
            continue

        state.galaxy.clear(position)
        state.galaxy[destination] = enemy.update(ship.with_stats(energy=ship.energy - 1))
        state.record(f"\nEnemy {enemy.name} moved to SECTOR: ({x},{y}).\n".encode("ascii"))
        state.log_event(
            GameEventType.ENEMY_MOVED,
            sector=(x, y),
            data={"enemy": enemy.name, "from": position.sector},
        )
        return destination

    return None


def evolve(state: GameState, hostile: bool) -> None:
    """
    Evolve the entities in the player's system by one time period.

    Args:
        state: The game to advance.
        hostile: Whether enemies in range may attack this turn.
    """
    done: set[Position] = set()
    player = state.position

    for i in range(SECTORS):
        for j in range(SECTORS):
            position = player.with_sector(j, i)
            if position in done:
                continue

            enemy = state.galaxy[position]
            if enemy is None or not enemy.is_enemy:
                continue

            distance = math.hypot(player.x - j, player.y - i)

            if hostile and enemy.ship.range >= distance:
                enemy = enemy.update(enemy_attack(state, position, enemy))
                state.galaxy[position] = enemy

            moved_to = advance(state, position, enemy, distance)
            if moved_to is not None:
                done.add(moved_to)

    state.date += 1
    state.log_event(GameEventType.TURN_ENDED, data={"hostile": hostile})

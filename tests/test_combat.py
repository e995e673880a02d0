"""
Unit tests for the combat mechanics module.

Run with: python -m pytest tests/test_combat.py -v
"""

import random

import pytest

from star_trip.combat import DESTROYED_NOTE, CombatResolver, fire, torpedo_beam
from star_trip.config import GameConfig
from star_trip.entity import STAR, Entity, EntityKind, Ship
from star_trip.events import GameEventType
from star_trip.grid import Galaxy, Position
from star_trip.state import GameState


HOME = Position(0, 0, 4, 4)


# Fixtures

@pytest.fixture
def state() -> GameState:
    """A game in an otherwise empty galaxy, player in the corner of system (4, 4)."""
    return GameState(GameConfig(), rng=random.Random(42), galaxy=Galaxy(), position=HOME)


def place(state, x, y, energy=50, shields=50, torpedoes=2, range=0, kind=EntityKind.KLARGONS):
    """Put an enemy in the player's system and return it."""
    enemy = Entity(kind, Ship(energy=energy, shields=shields, torpedoes=torpedoes, range=range))
    state.galaxy[HOME.with_sector(x, y)] = enemy
    return enemy


def event_types(state):
    return [event.event_type for event in state.events]


# Damage Arithmetic Tests

class TestFire:
    """Tests for the shared hit calculation."""

    def test_zero_beam_is_identity(self):
        ship = Ship(energy=80, shields=30, torpedoes=1, range=2)
        assert fire(0, ship) == (0, ship)

    @pytest.mark.parametrize("beam", [0, 1, 29, 30, 31, 109, 110, 111, 255])
    def test_damage_capped_at_capacity(self, beam):
        ship = Ship(energy=80, shields=30, torpedoes=1, range=2)
        damage, after = fire(beam, ship)

        assert damage == min(beam, ship.capacity)
        assert after.capacity == ship.capacity - damage

    def test_shields_absorb_first(self):
        damage, after = fire(20, Ship(energy=80, shields=30, torpedoes=1, range=2))
        assert damage == 20
        assert after.shields == 10
        assert after.energy == 80

    def test_overflow_drains_energy(self):
        damage, after = fire(50, Ship(energy=80, shields=30, torpedoes=1, range=2))
        assert damage == 50
        assert after.shields == 0
        assert after.energy == 60

    def test_exact_shields(self):
        _, after = fire(30, Ship(energy=80, shields=30, torpedoes=1, range=2))
        assert after.shields == 0
        assert after.energy == 80

    def test_overkill(self):
        damage, after = fire(255, Ship(energy=10, shields=5, torpedoes=3, range=2))
        assert damage == 15
        assert after.energy == 0
        assert after.shields == 0
        assert after.torpedoes == 3


class TestTorpedoBeam:

    @pytest.mark.parametrize("count, expected", [
        (0, 0),
        (1, 60),
        (2, 121),
        (4, 243),
        (5, 255),
    ])
    def test_default_difficulty(self, count, expected):
        assert torpedo_beam(count, 100) == expected

    def test_weaker_at_high_difficulty(self):
        assert torpedo_beam(1, 255) == 0
        assert torpedo_beam(1, 60) == 76


# Resolver Tests

class TestCombatResolver:
    """Tests for hits against enemies in the galaxy."""

    def test_survivor_written_back(self, state):
        enemy = place(state, 3, 3, energy=90, shields=90)
        target = HOME.with_sector(3, 3)

        damage, destroyed = state.combat.hit(target, 50, enemy)

        assert (damage, destroyed) == (50, False)
        assert state.galaxy[target].ship.shields == 40
        assert state.galaxy[target].kind is EntityKind.KLARGONS
        assert state.mission == 0

    def test_destroyed_enemy_removed(self, state):
        enemy = place(state, 3, 3, energy=30, shields=20, kind=EntityKind.BERG)
        target = HOME.with_sector(3, 3)

        damage, destroyed = state.combat.hit(target, 100, enemy)

        assert (damage, destroyed) == (50, True)
        assert state.galaxy[target] is None
        assert state.mission == 1
        assert b"\nEnemy Berg destroyed!\n" in state.logbook.current()
        assert GameEventType.ENEMY_DESTROYED in event_types(state)

    def test_cannot_hit_environment(self, state):
        with pytest.raises(TypeError):
            state.combat.hit(HOME.with_sector(1, 1), 10, STAR)

    def test_laser_spends_full_beam(self, state):
        enemy = place(state, 1, 0, energy=10, shields=20)
        msg = state.combat.laser(HOME.with_sector(1, 0), 100, enemy)

        assert state.player.energy == 155
        assert b"inflicting 30 damage" in msg
        assert msg.endswith(DESTROYED_NOTE)

    def test_torpedo_clamped_to_inventory(self, state):
        enemy = place(state, 1, 0, energy=200, shields=100)
        msg = state.combat.torpedo(HOME.with_sector(1, 0), 9, enemy)

        assert state.player.torpedoes == 0
        assert b"5 torpedo(es)" in msg
        assert state.galaxy[HOME.with_sector(1, 0)].ship.capacity == 300 - 255

    def test_empty_magazine_does_nothing(self, state):
        state.player = state.player.with_stats(torpedoes=0)
        enemy = place(state, 1, 0, energy=200, shields=100)
        msg = state.combat.torpedo(HOME.with_sector(1, 0), 3, enemy)

        assert b"0 torpedo(es)" in msg
        assert state.galaxy[HOME.with_sector(1, 0)] == enemy


# Weapon Command Tests

class TestWeaponCommand:
    """Tests for LASER and TORPEDO as issued by the player."""

    def test_laser_destroys_target(self, state):
        place(state, 1, 0, energy=1, shields=0)
        state.laser([100, 1, 0])

        assert state.galaxy[HOME.with_sector(1, 0)] is None
        assert state.mission == 1
        assert state.player.energy == 155
        assert state.date == 1

    def test_laser_amount_clamped(self, state):
        place(state, 1, 0, energy=200, shields=200)
        state.laser([1000, 1, 0])

        assert state.player.energy == 0
        assert state.galaxy[HOME.with_sector(1, 0)].ship.shields == 0

    def test_torpedo_command(self, state):
        place(state, 1, 0, energy=200, shields=100)
        state.torpedo([9, 1, 0])

        assert state.player.torpedoes == 0
        assert state.date == 1

    def test_range_uses_truncated_distance(self, state):
        """(7, 1) is 7.07 sectors away, which counts as 7."""
        place(state, 7, 1, energy=1, shields=0)
        state.laser([10, 7, 1])
        assert state.mission == 1

    def test_out_of_range(self, state):
        enemy = place(state, 8, 0, energy=1, shields=0)
        state.laser([10, 8, 0])

        assert state.display.last == b"(8, 0) out of range!"
        assert state.galaxy[HOME.with_sector(8, 0)] == enemy
        assert state.player.energy == 255
        assert state.date == 1

    def test_nothing_to_target(self, state):
        state.galaxy[HOME.with_sector(2, 2)] = STAR
        state.laser([10, 2, 2])

        assert state.display.last == b"Nothing to target at (2, 2)!"
        assert state.galaxy[HOME.with_sector(2, 2)] == STAR
        assert state.player.energy == 255
        assert state.date == 1

    @pytest.mark.parametrize("args", [
        [],
        [0, 1, 0],
        [10, 1],
        [10, 1, 0, 5],
        [10, 10, 0],
    ])
    def test_usage_errors_change_nothing(self, state, args):
        place(state, 1, 0)
        state.laser(args)

        assert state.date == 0
        assert state.player.energy == 255
        assert b"LASER requires three positive" in state.display.last
        assert event_types(state) == [GameEventType.COMMAND_REJECTED]

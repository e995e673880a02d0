"""
Tests for command parsing and dispatch, and for the commands that do not
involve movement or weapons.

Run with: python -m pytest tests/test_dispatcher.py -v
"""

import random

import pytest

from star_trip.config import GameConfig
from star_trip.dispatcher import COMMANDS, Status, numeric_arguments, parse_number
from star_trip.entity import BASE, PLANET, STAR, Entity, EntityKind, Ship
from star_trip.events import GameEventType
from star_trip.grid import Galaxy, Position
from star_trip.state import HELP, SHIELDS_USAGE, GameState


HOME = Position(4, 4, 5, 5)


# Fixtures

@pytest.fixture
def state() -> GameState:
    """Player in the middle of system (5, 5), nothing else in the galaxy."""
    return GameState(GameConfig(), rng=random.Random(42), galaxy=Galaxy(), position=HOME)


def add_enemy(state, x, y, range=9):
    enemy = Entity(EntityKind.KLARGONS, Ship(energy=1, shields=0, torpedoes=0, range=range))
    state.galaxy[HOME.with_sector(x, y)] = enemy
    return enemy


# Parsing Tests

class TestArguments:

    @pytest.mark.parametrize("token, expected", [
        ("5", 5),
        ("+5", 5),
        ("007", 7),
        ("300", 300),
        ("-5", None),
        ("five", None),
        ("5.0", None),
        ("", None),
        ("٣", None),
    ])
    def test_parse_number(self, token, expected):
        assert parse_number(token) == expected

    def test_non_numeric_tokens_dropped(self):
        assert numeric_arguments(["fast", "5", "to", "2", "-1", "2"]) == [5, 2, 2]

    def test_aliases_registered(self):
        for short, full in [("h", "help"), ("m", "move"), ("l", "laser"), ("t", "torpedo"),
                            ("sh", "shields"), ("sc", "scan"), ("su", "survey"),
                            ("i", "investigate"), ("d", "dock"), ("q", "quit")]:
            assert short in COMMANDS
            assert full in COMMANDS
        assert "log" in COMMANDS


# Dispatch Tests

class TestProcessCommand:

    def test_blank_line(self, state):
        assert state.process_command("   \n") == Status.CONTINUE
        assert state.display.last is None

    def test_unknown_command(self, state):
        assert state.process_command("WARP 9") == Status.CONTINUE
        assert b"Unrecognised command:\n\n    'WARP'" in state.display.last
        assert state.date == 0

    def test_case_insensitive(self, state):
        state.process_command("sC")
        assert state.events[-1].event_type is GameEventType.SCANNED

    def test_accepts_bytes(self, state):
        state.process_command(b"HELP")
        assert state.display.last == HELP

    def test_stray_words_shift_numbers(self, state):
        state.process_command("MOVE fast 10 2 2")
        assert state.position == HOME.with_sector(2, 2)

    def test_scan_is_free(self, state):
        assert state.process_command("SCAN") == Status.CONTINUE
        assert state.player == state.config.player_ship()
        assert state.date == 0

    def test_quit(self, state):
        assert state.process_command("QUIT") == Status.DEFEAT
        assert state.player.energy == 0

    def test_quit_alias(self, state):
        assert state.process_command("q") == Status.DEFEAT

    def test_victory_on_final_kill(self, state):
        state.mission = state.config.mission - 1
        add_enemy(state, 5, 4)

        assert state.process_command("LASER 10 5 4") == Status.VICTORY
        assert state.mission == state.config.mission

    def test_victory_takes_precedence(self, state):
        state.mission = state.config.mission
        state.player = state.player.with_stats(energy=0)
        assert state.process_command("SCAN") == Status.VICTORY

    def test_usage_error_keeps_playing(self, state):
        assert state.process_command("LASER") == Status.CONTINUE
        assert state.events[-1].event_type is GameEventType.COMMAND_REJECTED


# Command Tests

class TestShields:

    def test_full_shields_rejected(self, state):
        state.process_command("SHIELDS 10")
        assert state.display.last == SHIELDS_USAGE
        assert state.date == 0

    def test_raise_shields(self, state):
        state.player = state.player.with_stats(shields=100)
        state.process_command("SHIELDS 100")

        assert state.player.shields == 200
        assert state.player.energy == 155
        assert state.date == 1

    def test_shields_saturate(self, state):
        state.player = state.player.with_stats(shields=200)
        state.process_command("SH 100")

        assert state.player.shields == 255
        assert state.player.energy == 155

    @pytest.mark.parametrize("command", ["SHIELDS", "SHIELDS 0", "SHIELDS 1 2"])
    def test_bad_arguments(self, state, command):
        state.player = state.player.with_stats(shields=0)
        state.process_command(command)

        assert state.display.last == SHIELDS_USAGE
        assert state.player.shields == 0

    def test_not_enough_energy(self, state):
        state.player = state.player.with_stats(shields=0, energy=50)
        state.process_command("SHIELDS 60")

        assert state.display.last == SHIELDS_USAGE
        assert state.player.energy == 50


class TestScanAndSurvey:

    def test_scan_counts_enemies(self, state):
        add_enemy(state, 0, 0, range=0)
        add_enemy(state, 9, 9, range=0)
        state.galaxy[HOME.with_sector(4, 5)] = STAR

        state.process_command("SCAN")

        assert b" ENEMIES:   2" in state.display.last
        assert state.final_log() == b"\nScan completed: 2 enemies detected in system!\n"

    def test_scan_draws_player(self, state):
        state.process_command("SCAN")
        assert bytes([0x01]) in state.display.last

        state.player = state.player.with_stats(energy=100)
        state.process_command("SCAN")
        assert bytes([0x02]) in state.display.last
        assert bytes([0x01]) not in state.display.last

    def test_scan_draws_entities(self, state):
        state.galaxy[HOME.with_sector(4, 5)] = BASE
        state.process_command("SCAN")
        # row 5 shows the base under the player's column
        assert b"\n  5" + b" \xfa" * 4 + b" \x0b" in state.display.last

    def test_survey_limits_view(self, state):
        add_enemy(state, 0, 0)
        state.galaxy[HOME.with_sector(4, 5)] = STAR
        state.galaxy[Position(1, 1, 6, 6)] = BASE
        state.galaxy[Position(1, 1, 0, 0)] = BASE

        state.process_command("SURVEY")
        out = state.display.last

        assert b"\n  5 *** *** *** *** 000 101 000 ***" in out
        assert b"\n  6 *** *** *** *** 000 000 010 ***" in out
        assert b"\n  0 *** ***" in out
        assert state.date == 0


class TestInvestigateAndDock:

    def test_investigate_star(self, state):
        state.player = state.player.with_stats(energy=100)
        state.galaxy[HOME.with_sector(5, 5)] = STAR

        state.process_command("INVESTIGATE")

        found = [e for e in state.events if e.event_type is GameEventType.INVESTIGATED]
        assert len(found) == 1
        assert found[0].sector == (5, 5)
        assert state.player.energy == min(255, 100 + found[0].data["energy"])
        assert state.date == 1

    def test_investigate_planet(self, state):
        state.galaxy[HOME.with_sector(3, 3)] = PLANET
        state.process_command("I")
        assert b"Investigated nearby Planet." in state.display.last

    def test_nothing_to_investigate(self, state):
        state.galaxy[HOME.with_sector(5, 5)] = BASE
        state.process_command("INVESTIGATE")

        assert state.display.last == b"Nothing interesting nearby, unable to investigate!"
        assert state.date == 1

    def test_dock_restores_and_protects(self, state):
        state.player = state.player.with_stats(energy=20, shields=0)
        state.galaxy[HOME.with_sector(3, 4)] = BASE
        add_enemy(state, 5, 5)

        state.process_command("DOCK")

        assert state.player.energy == 255
        assert state.player.shields == 255
        assert not [e for e in state.events if e.event_type is GameEventType.ENEMY_ATTACK]
        assert state.date == 1

    def test_dock_without_base(self, state):
        state.process_command("DOCK")
        assert state.display.last == b"No bases nearby, unable to dock!"
        assert state.date == 1


class TestLogCommand:

    def test_current_page(self, state):
        state.process_command("SCAN")
        state.process_command("LOG")
        assert state.display.last.startswith(b"Captain's Log [1 / 1]\n\n")

    def test_numbered_page(self, state):
        state.process_command("LOG 1")
        assert state.display.last == b"Captain's Log [1 / 1]\n\n"

    @pytest.mark.parametrize("command", ["LOG 2", "LOG 0", "LOG 1 2"])
    def test_not_found(self, state, command):
        state.process_command(command)
        assert state.display.last == b"Log page not found!"

"""
Game state for the Star Trip simulation.

`GameState` owns the galaxy, the player's ship and position, the mission
and date counters, the logbook and the structured event log. Commands
reach it through `process_command`; the combat, movement and evolution
engines operate on it in place.
"""

from __future__ import annotations

import random
from typing import Callable, Optional, Sequence

from .combat import CombatResolver
from .config import GameConfig
from .constants import (
    CODE_EMPTY,
    CODE_PLAYER,
    CODE_PLAYER_DAMAGED,
    HEALTHY_ENERGY,
    SECTORS,
    STAT_MAX,
    SYSTEMS,
)
from .dispatcher import process_command
from .display import Display, TextDisplay
from .entity import Entity, EntityKind, clamp_byte, saturating_add
from .events import GameEvent, GameEventType
from .evolution import evolve
from .generation import spawn
from .grid import Galaxy, Position, adjacent
from .logbook import Logbook
from .movement import MovementEngine
from .score import score


HELP = b"""HELP - print this list of commands

MOVE s x y [X Y] - move towards sector
position (x, y) [optionally in system (X, Y)]
at speed s, where s is between 1 and 10

LASER e x y - fire lasers with energy e towards
position (x, y)

TORPEDO t x y - fire t torpedoes towards
position (x, y)

SHIELDS e - raise shields using energy e

SCAN - perform a short range scan of the system

SURVEY - perform a long range scan of the galaxy

INVESTIGATE - search for energy supplies

DOCK - dock your ship at a base to resupply

LOG n - print page n of the ship's log"""

SHIELDS_USAGE = b"""SHIELDS command requires one positive argument!

Cannot raise shields beyond 255 energy."""

SURVEY_KEY = b"""


    XYZ (SYSTEM TOTALS)
    |||
    ||+-> STARS
    |+--> BASES
    +---> ENEMIES
"""

INVESTIGABLE = (EntityKind.PLANET, EntityKind.STAR, EntityKind.BLACK_HOLE)


class GameState:
    """
    The current state of the game, including the player's stats and every
    entity in the galaxy.

    Attributes:
        config: Settings this game was created with.
        rng: The single random source for every draw in the game.
        galaxy: All galaxy cells.
        position: The player's position.
        player: The player's ship.
        mission: Enemies destroyed so far.
        date: Elapsed time periods.
        logbook: Narrative record of the game.
        events: Structured record of the game.
        display: Where messages are shown.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        display: Optional[Display] = None,
        galaxy: Optional[Galaxy] = None,
        position: Optional[Position] = None,
    ) -> None:
        """
        Start a new game.

        Args:
            config: Game settings (defaults if None).
            rng: Random source; created from `config.seed` if None.
            display: Message sink; a silent TextDisplay if None.
            galaxy: Pre-built galaxy, skipping generation (for scenarios
                and tests). Requires `position`.
            position: Player position to use with `galaxy`.
        """
        self.config = (config or GameConfig()).validate()
        self.rng = rng or self.config.make_rng()
        self.display: Display = display if display is not None else TextDisplay()

        if galaxy is None:
            galaxy, spawned = spawn(self.rng, self.config.difficulty)
            position = position or spawned
        elif position is None:
            raise ValueError("A pre-built galaxy needs a player position")
        galaxy.clear(position)

        self.galaxy = galaxy
        self.position = position
        self.player = self.config.player_ship()
        self.mission = 0
        self.date = 0
        self.logbook = Logbook(self.config.log_page_lines)
        self.events: list[GameEvent] = []

        self._event_callbacks: list[Callable[[GameEvent], None]] = []
        self.combat = CombatResolver(self)
        self.movement = MovementEngine(self)

    # -------------------------------------------------------------------------
    # Bookkeeping
    # -------------------------------------------------------------------------

    def record(self, entry: bytes) -> None:
        """Write an entry to the logbook."""
        self.logbook.record(entry)

    def final_log(self) -> bytes:
        """The last entry written to the logbook."""
        return self.logbook.last_entry

    def score(self) -> int:
        """Score for the game as it stands."""
        return score(self.mission, self.date, self.player)

    def add_event_callback(self, callback: Callable[[GameEvent], None]) -> None:
        """Register a function called with every new event."""
        self._event_callbacks.append(callback)

    def log_event(
        self,
        event_type: GameEventType,
        sector: Optional[tuple[int, int]] = None,
        data: Optional[dict] = None,
    ) -> GameEvent:
        """Log a game event and notify callbacks."""
        event = GameEvent(event_type=event_type, date=self.date, sector=sector, data=data or {})
        self.events.append(event)

        for callback in self._event_callbacks:
            try:
                callback(event)
            except Exception as e:
                print(f"[GAME] Event callback error: {e}")

        return event

    def usage(self, msg: bytes, command: str) -> None:
        """Show a usage message for a rejected command. Nothing else changes."""
        self.display.message(msg)
        self.display.update_console()
        self.log_event(GameEventType.COMMAND_REJECTED, data={"command": command})

    def evolve(self, hostile: bool) -> None:
        """Give the enemies in the player's system their turn."""
        evolve(self, hostile)

    def nearby(self, *kinds: EntityKind) -> Optional[tuple[int, int, Entity]]:
        """
        First entity of one of `kinds` adjacent to the player.

        Returns:
            Tuple of (x, y, entity), or None if nothing matches.
        """
        for x, y in adjacent(self.position.x, self.position.y):
            entity = self.galaxy[self.position.with_sector(x, y)]
            if entity is not None and entity.kind in kinds:
                return x, y, entity
        return None

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def help(self) -> None:
        """Prints a helpful list of commands."""
        self.display.message(HELP)
        self.display.update_console()

    def move(self, args: Sequence[int]) -> None:
        self.movement.move(args)

    def laser(self, args: Sequence[int]) -> None:
        self.combat.weapon(args, CombatResolver.laser, "LASER")

    def torpedo(self, args: Sequence[int]) -> None:
        self.combat.weapon(args, CombatResolver.torpedo, "TORPEDO")

    def shields(self, args: Sequence[int]) -> None:
        """Divert energy to the shields."""
        if len(args) != 1 or args[0] <= 0:
            self.usage(SHIELDS_USAGE, command="SHIELDS")
            return

        energy = clamp_byte(args[0])
        if self.player.shields >= STAT_MAX or energy > self.player.energy:
            self.usage(SHIELDS_USAGE, command="SHIELDS")
            return

        self.player = self.player.with_stats(
            shields=saturating_add(self.player.shields, energy),
            energy=self.player.energy - energy,
        )

        msg = (
            f"\nEnergy diverted to shields:\n"
            f"ENERGY:  {self.player.energy}\n"
            f"SHIELDS: {self.player.shields}\n".encode("ascii")
        )
        self.display.message(msg)
        self.record(msg)
        self.display.update_console()
        self.log_event(GameEventType.SHIELDS_RAISED, data={"energy": energy})

        self.evolve(True)

    def scan(self) -> None:
        """Prints a star chart for the current system."""
        legend = list(EntityKind)
        player_code = CODE_PLAYER if self.player.energy > HEALTHY_ENERGY else CODE_PLAYER_DAMAGED
        here = self.position
        enemies = 0

        out = bytearray(b"\n\n    0 1 2 3 4 5 6 7 8 9")
        out += b"        PLAYER:     "
        out.append(player_code)

        for i in range(SECTORS):
            out += f"\n  {i}".encode("ascii")
            for j in range(SECTORS):
                out.append(0x20)
                if (j, i) == here.sector:
                    out.append(player_code)
                    continue
                entity = self.galaxy[here.with_sector(j, i)]
                if entity is None:
                    out.append(CODE_EMPTY)
                else:
                    if entity.is_enemy:
                        enemies += 1
                    out.append(entity.kind.code)

            if i < len(legend):
                label = legend[i].label.encode("ascii")
                out += b"        " + label + b":" + b" " * (11 - len(label))
                out.append(legend[i].code)

        out += (
            f"\n\n\n SECTOR:    ({here.x}, {here.y})"
            f"\n SYSTEM:    ({here.system_x}, {here.system_y})"
            f"\n ENERGY:    {self.player.energy}"
            f"\n SHIELDS:   {self.player.shields}"
            f"\n TORPEDOES: {self.player.torpedoes}"
            f"\n DATE:      {self.date}"
            f"\n ENEMIES:   {enemies}"
            f"\n MISSION:   {self.mission}"
        ).encode("ascii")

        self.record(f"\nScan completed: {enemies} enemies detected in system!\n".encode("ascii"))
        self.log_event(GameEventType.SCANNED, data={"enemies": enemies})
        self.display.message(bytes(out))
        self.display.update_console()

    def survey(self) -> None:
        """Prints a system chart for the galaxy."""
        _, _, home_x, home_y = self.position
        out = bytearray(b"\n\n     0   1   2   3   4   5   6   7   8   9")

        for i in range(SYSTEMS):
            out += f"\n  {i}".encode("ascii")
            for j in range(SYSTEMS):
                out.append(0x20)
                if abs(j - home_x) > 1 or abs(i - home_y) > 1:
                    out += b"***"
                    continue

                cells = [cell for cell in self.galaxy.system_cells(j, i) if cell is not None]
                enemies = sum(1 for cell in cells if cell.is_enemy)
                bases = sum(1 for cell in cells if cell.kind is EntityKind.BASE)
                stars = sum(1 for cell in cells if cell.kind is EntityKind.STAR)
                out += f"{enemies}{bases}{stars}".encode("ascii")

        out += SURVEY_KEY
        self.display.message(bytes(out))
        self.display.update_console()

    def investigate(self) -> None:
        """Investigates adjacent stars or planets."""
        found = self.nearby(*INVESTIGABLE)
        if found is not None:
            x, y, thing = found
            energy = self.rng.randrange(self.config.difficulty)
            self.display.message(
                f"Investigated nearby {thing.name}.\n"
                f"Discovered {energy} energy crystals!".encode("ascii")
            )
            self.record(
                f"\nInvestigated nearby {thing.name}.\n"
                f"At SECTOR ({x}, {y}).\n"
                f"Discovered {energy} energy crystals!\n".encode("ascii")
            )
            self.player = self.player.with_stats(
                energy=saturating_add(self.player.energy, energy)
            )
            self.log_event(
                GameEventType.INVESTIGATED,
                sector=(x, y),
                data={"entity": thing.name, "energy": energy},
            )
        else:
            self.display.message(b"Nothing interesting nearby, unable to investigate!")

        self.evolve(True)
        self.display.update_console()

    def dock(self) -> None:
        """Docks the player's ship at an adjacent starbase."""
        found = self.nearby(EntityKind.BASE)
        if found is not None:
            x, y, _ = found
            self.display.message(
                b"Docked with nearby base.\n"
                b"Energy and shields restored!\n"
                b"Protected from hostiles until next move."
            )
            self.record(
                f"\nDocked with base in SECTOR: ({x}, {y}).\n"
                f"Energy and shields restored!\n".encode("ascii")
            )
            self.player = self.player.with_stats(energy=STAT_MAX, shields=STAT_MAX)
            self.log_event(GameEventType.DOCKED, sector=(x, y))
            self.evolve(False)
        else:
            self.display.message(b"No bases nearby, unable to dock!")
            self.evolve(True)
        self.display.update_console()

    def log(self, args: Sequence[int]) -> None:
        """Displays a page of the log."""
        if len(args) > 1:
            self.display.message(b"Log page not found!")
        else:
            self.display.message(self.logbook.render(args[0] if args else None))
        self.display.update_console()

    def quit(self) -> None:
        """Abandon the mission."""
        self.player = self.player.with_stats(energy=0)

    def process_command(self, command: str | bytes) -> int:
        """
        Parse a command line and carry it out.

        Returns:
            0 to continue, 1 on victory, 2 on defeat.
        """
        return process_command(self, command)

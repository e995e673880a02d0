"""
Play Star Trip in a terminal.

Usage:
    python -m star_trip
    python -m star_trip --seed 42 --difficulty 150
    python -m star_trip --config game.json
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from . import __version__
from .config import GameConfig
from .dispatcher import Status
from .display import TextDisplay
from .state import GameState

PROMPT = "COMMAND => "

INTRO = """Welcome, Captain, to your new command, the
HMS Venture. Your mission is to defend the galaxy
from the threat of the Klargons, Remulins,
Faringa and Berg. Defeat {mission} enemies to win.

Your spaceship is well equipped with shields,
lasers and torpedoes. It can traverse great
distances at faster-than-light speeds!

Remember to keep track of your supplies,
especially the energy that powers your ship's
vital functions. Dock at a starbase or
investigate stars to resupply.

You're in command of an excellent crew, make sure
to take care of their morale by investigating
interesting planets on your journey.

Finally, watch out for astrophysical
phenomena such as supernovae and black holes!

Enter the HELP command for a listing of available
commands. Good luck!"""

VICTORY = """Well done, Captain, you've succeeded in
making the galaxy a safer place.

Your ship and crew have survived this difficult
mission. We thank you for your service.

You achieved a score of:

                         {score}
"""

DEFEAT = """Unfortunately you have failed your mission
of making the galaxy a safer place.

Your ship has been destroyed, and only a handful
of crew members made it to the escape pods in
time. Your final log entry reads:

==================================================
{final_log}
==================================================

You achieved a score of:

                         {score}
"""


def build_config(args: argparse.Namespace) -> GameConfig:
    """Combine the environment, an optional JSON file and CLI overrides."""
    config = GameConfig.from_json(args.config) if args.config else GameConfig.from_env()
    if args.seed is not None:
        config.seed = args.seed
    if args.difficulty is not None:
        config.difficulty = args.difficulty
    if args.mission is not None:
        config.mission = args.mission
    return config.validate()


def ending(state: GameState, result: int) -> str:
    """Victory or defeat screen for a finished game."""
    if result == Status.VICTORY:
        return VICTORY.format(score=state.score())
    final_log = state.final_log().decode("cp437").strip("\n")
    return DEFEAT.format(final_log=final_log, score=state.score())


def play(state: GameState, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    """
    Read commands until the game ends or input runs out.

    Args:
        state: The game to play.
        stdin: Command source (default: sys.stdin).
        stdout: Where prompts and the ending go (default: sys.stdout).

    Returns:
        The final status (0 if input ran out mid-game).
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    for line in stdin:
        result = state.process_command(line)
        if result != Status.CONTINUE:
            stdout.write(ending(state, result))
            return result
        stdout.write(PROMPT)
        stdout.flush()
    return Status.CONTINUE


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="star-trip",
        description="Turn-based space exploration: defend the galaxy from four enemy factions",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible galaxy")
    parser.add_argument("--difficulty", type=int, default=None, help="Difficulty 60-255 (default: 100)")
    parser.add_argument("--mission", type=int, default=None, help="Enemies to destroy for victory (default: 10)")
    parser.add_argument("--config", default=None, help="JSON file with game settings")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except (ValueError, FileNotFoundError) as e:
        parser.error(str(e))

    state = GameState(config, display=TextDisplay.stdout())
    print(INTRO.format(mission=config.mission))
    print(PROMPT, end="", flush=True)

    try:
        play(state)
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())

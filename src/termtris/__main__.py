"""Command line entry point.

Run with: `python -m termtris`

``--ascii`` skips the terminal UI and prints a few frames of the visible
board instead, which is handy as a smoke test on machines without a usable
terminal.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from .game_state import GameState, TickResult
from .utils import TICK_INTERVAL_MS, render_ascii


LOGGER = logging.getLogger(__name__)


def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {text}")
    return value


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="termtris", description=__doc__)
    parser.add_argument(
        "--tick-ms",
        type=float,
        default=TICK_INTERVAL_MS,
        help="Milliseconds between gravity steps.",
    )
    parser.add_argument(
        "--fps", type=positive_int, default=30, help="Frames drawn per second."
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for piece selection.")
    parser.add_argument(
        "--log-file",
        default="termtris.log",
        help="File receiving log output (the terminal is owned by the game).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--ascii",
        type=int,
        metavar="TICKS",
        default=None,
        help="Print the board after TICKS gravity steps instead of playing.",
    )
    return parser.parse_args(argv)


def run_ascii(state: GameState, ticks: int) -> None:
    for _ in range(ticks):
        if state.tick() is TickResult.GAME_OVER:
            print("Game over")
            break
    print(render_ascii(state.board))


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        filename=args.log_file,
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    LOGGER.info("Starting with tick=%sms fps=%d seed=%s", args.tick_ms, args.fps, args.seed)

    state = GameState(tick_interval_ms=args.tick_ms, rng=random.Random(args.seed))
    if args.ascii is not None:
        run_ascii(state, args.ascii)
        return

    from .run_curses import main as run_game

    run_game(state, fps=args.fps)


if __name__ == "__main__":
    main()

"""Simple curses front-end for the engine.

This module is the thin glue between a terminal and :class:`GameState`: it
polls the gravity clock once per frame, forwards key presses and paints the
visible part of the board, two character cells per column.
"""

from __future__ import annotations

import curses
import logging
from typing import Dict, Optional

from .board import Board
from .game_state import Action, GameState, TickResult
from .tetromino import TetrominoKind
from .utils import CELL_WIDTH, VIEW_SIZE, visible_grid

LOGGER = logging.getLogger(__name__)

# Frames per second to run the game loop at
FPS = 30

KEY_ACTIONS: Dict[int, Action] = {
    curses.KEY_LEFT: Action.MOVE_LEFT,
    curses.KEY_RIGHT: Action.MOVE_RIGHT,
    curses.KEY_DOWN: Action.SOFT_DROP,
    curses.KEY_UP: Action.ROTATE_CCW,
    ord("z"): Action.ROTATE_CCW,
    ord("x"): Action.ROTATE_CW,
}
QUIT_KEYS = frozenset({ord("q"), ord("Q")})

HELP_TEXT = "<-/-> move  v drop  ^/z/x rotate  q quit"

# Used when the terminal cannot take the exact RGB colours of the pieces.
BASIC_COLORS = {
    TetrominoKind.I: curses.COLOR_BLUE,
    TetrominoKind.J: curses.COLOR_GREEN,
    TetrominoKind.L: curses.COLOR_YELLOW,
    TetrominoKind.O: curses.COLOR_CYAN,
    TetrominoKind.S: curses.COLOR_RED,
    TetrominoKind.T: curses.COLOR_MAGENTA,
    TetrominoKind.Z: curses.COLOR_WHITE,
}

# Empty cells; none of the basic piece colours above may match it.
BACKGROUND_COLOR = curses.COLOR_BLACK
BACKGROUND_PAIR = len(TetrominoKind) + 1
# First colour slot redefined for the pieces, past the 16 standard colours.
CUSTOM_COLOR_BASE = 16

CellAttrs = Dict[Optional[TetrominoKind], int]


def key_to_action(key: int) -> Optional[Action]:
    """Return the action bound to ``key`` or ``None`` if it is unbound."""

    return KEY_ACTIONS.get(key)


def _rgb_to_curses(channel: int) -> int:
    return channel * 1000 // 255


def init_colors() -> CellAttrs:
    """Create a colour pair per kind plus one for the background.

    Must be called after curses has been initialised.
    """

    curses.start_color()
    custom = (
        curses.can_change_color()
        and curses.COLORS > CUSTOM_COLOR_BASE + len(TetrominoKind)
    )
    attrs: CellAttrs = {}
    for pair, kind in enumerate(TetrominoKind, start=1):
        if custom:
            color = CUSTOM_COLOR_BASE + pair
            curses.init_color(color, *(_rgb_to_curses(ch) for ch in kind.color))
        else:
            color = BASIC_COLORS[kind]
        curses.init_pair(pair, curses.COLOR_BLACK, color)
        attrs[kind] = curses.color_pair(pair)
    curses.init_pair(BACKGROUND_PAIR, curses.COLOR_WHITE, BACKGROUND_COLOR)
    attrs[None] = curses.color_pair(BACKGROUND_PAIR)
    LOGGER.debug("Initialised colours (custom RGB: %s)", custom)
    return attrs


def draw_board(window, board: Board, attrs: CellAttrs, top: int = 0, left: int = 0) -> None:
    """Paint the visible window of ``board`` with its top-left at ``(top, left)``."""

    blank = " " * CELL_WIDTH
    for r, row in enumerate(visible_grid(board)):
        for c, kind in enumerate(row):
            window.addstr(top + r, left + c * CELL_WIDTH, blank, attrs[kind])


class GameRunner:
    """Drive a :class:`GameState` from a curses window."""

    def __init__(self, state: Optional[GameState] = None, *, fps: int = FPS) -> None:
        self.state = state or GameState()
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.fps = fps
        self.running = False
        self.games_played = 0

    def handle_key(self, key: int) -> None:
        """Apply the action bound to ``key``; quit keys stop the loop."""

        if key in QUIT_KEYS:
            LOGGER.info("Quit requested")
            self.running = False
            return
        action = key_to_action(key)
        if action is not None:
            self.state.apply_action(action)

    def step(self) -> Optional[TickResult]:
        """Advance gravity if due, starting a new game after a game over."""

        result = self.state.maybe_tick()
        if result is TickResult.GAME_OVER:
            self.games_played += 1
            LOGGER.info("Game over after %d game(s). Resetting.", self.games_played)
            self.state.reset()
        return result

    def draw(self, window, attrs: CellAttrs) -> None:
        window.erase()
        height, width = window.getmaxyx()
        rows, cols = VIEW_SIZE
        if height < rows + 1 or width < cols:
            window.addstr(0, 0, "Terminal too small"[: max(width - 1, 0)])
        else:
            left = (width - cols) // 2
            draw_board(window, self.state.board, attrs, top=0, left=left)
            window.addstr(rows, 0, HELP_TEXT[: width - 1])
        window.refresh()

    def run(self, window) -> None:
        """Main loop; meant to be called through :func:`curses.wrapper`."""

        try:
            curses.curs_set(0)
        except curses.error:
            LOGGER.debug("Terminal does not support hiding the cursor")
        window.keypad(True)
        window.timeout(max(1, 1000 // self.fps))
        attrs = init_colors()

        LOGGER.info("Game started")
        self.running = True
        while self.running:
            self.step()
            self.draw(window, attrs)
            key = window.getch()
            if key != -1:
                self.handle_key(key)
        LOGGER.info("Game stopped")


def main(state: Optional[GameState] = None, *, fps: int = FPS) -> None:
    runner = GameRunner(state, fps=fps)
    curses.wrapper(runner.run)

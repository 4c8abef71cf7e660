"""Utility helpers for the engine: gravity timing and render views."""

from __future__ import annotations

import time
from typing import Callable, List, Optional

from .board import EMPTY, Board
from .tetromino import KINDS_BY_ID, TetrominoKind


TICK_INTERVAL_MS = 200

# Each board column is drawn two character cells wide so blocks look square.
CELL_WIDTH = 2
VIEW_SIZE = (Board.visible_height, Board.width * CELL_WIDTH)  # (rows, cols)


class GravityClock:
    """Track when the engine last advanced and whether it is due again.

    ``clock`` must be monotonic and return seconds; it defaults to
    :func:`time.monotonic` and can be replaced with a fake in tests.
    """

    def __init__(
        self,
        interval_ms: float = TICK_INTERVAL_MS,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._clock = clock or time.monotonic
        self.interval = interval_ms / 1000.0
        self.last_tick = self._clock()

    def stamp(self) -> None:
        """Record that a tick happened now."""

        self.last_tick = self._clock()

    def elapsed(self) -> float:
        return self._clock() - self.last_tick

    def due(self) -> bool:
        """Return ``True`` once strictly more than the interval has passed."""

        return self.elapsed() > self.interval


def visible_grid(board: Board) -> List[List[Optional[TetrominoKind]]]:
    """Return the visible window as kinds, ``None`` marking the background.

    Filled and active cells are reported the same way: renderers paint both
    in the piece's colour.
    """

    return [
        [None if value == EMPTY else KINDS_BY_ID[abs(int(value))] for value in row]
        for row in board.visible()
    ]


def render_ascii(board: Board) -> str:
    """Return the visible window as text, ``#`` for blocks and ``.`` otherwise."""

    return "\n".join(
        "".join("." if kind is None else "#" for kind in row)
        for row in visible_grid(board)
    )

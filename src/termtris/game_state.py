"""High level game state: the falling piece, gravity and player intents."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Optional

from .board import Board
from .tetromino import Move, RotateDirection, Tetromino, TetrominoKind
from .utils import TICK_INTERVAL_MS, GravityClock


LOGGER = logging.getLogger(__name__)


class TickResult(Enum):
    CONTINUE = "continue"
    GAME_OVER = "game_over"


class Action(Enum):
    """Discrete player inputs understood by :meth:`GameState.apply_action`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"


class GameState:
    """Mutable state for a game session.

    The engine has no timer of its own.  The front-end calls
    :meth:`maybe_tick` on every frame and forwards key presses to
    :meth:`apply_action`; all mutation happens on that single caller.
    """

    def __init__(
        self,
        *,
        tick_interval_ms: float = TICK_INTERVAL_MS,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.board = Board()
        self.active: Optional[Tetromino] = None
        self.gravity = GravityClock(tick_interval_ms, clock=clock)
        self._rng = rng or random.Random()

    def _random_kind(self) -> TetrominoKind:
        """Return a uniformly random kind, independent of earlier picks."""

        return self._rng.choice(list(TetrominoKind))

    def _commit(self, candidate: Tetromino) -> bool:
        if not self.board.can_place(candidate):
            return False
        self.board.place(candidate)
        self.active = candidate
        return True

    def move(self, move: Move) -> bool:
        """Shift the active piece, returning ``True`` if the move was made.

        Moves into a wall or a settled block are silently ignored.
        """

        if self.active is None:
            return False
        return self._commit(self.active.moved(move))

    def rotate(self, direction: RotateDirection) -> bool:
        """Rotate the active piece in place; no wall kicks are attempted."""

        if self.active is None:
            return False
        return self._commit(self.active.rotated(direction))

    def apply_action(self, action: Action) -> bool:
        if action is Action.MOVE_LEFT:
            return self.move(Move.LEFT)
        if action is Action.MOVE_RIGHT:
            return self.move(Move.RIGHT)
        if action is Action.SOFT_DROP:
            return self.move(Move.DOWN)
        if action is Action.ROTATE_CW:
            return self.rotate(RotateDirection.CLOCKWISE)
        if action is Action.ROTATE_CCW:
            return self.rotate(RotateDirection.COUNTERCLOCKWISE)
        raise ValueError(f"Unknown action: {action}")

    def spawn_tetromino(self) -> Optional[Tetromino]:
        """Spawn a random piece at its start position.

        Returns ``None`` without touching the board when the spawn area is
        blocked.
        """

        piece = Tetromino.spawn(self._random_kind())
        if not self._commit(piece):
            return None
        LOGGER.debug("Spawned %s at %s", piece.kind.value, piece.position)
        return piece

    def tick(self) -> TickResult:
        """Advance the game by one gravity step.

        Without an active piece a new one is spawned; if it does not fit the
        game is over.  Otherwise the piece falls one row, or locks in place
        (clearing complete rows) when it cannot.  A piece that locks at the
        very top is only reported as game over on the following tick, when
        the next spawn fails.
        """

        self.gravity.stamp()

        if self.active is None:
            if self.spawn_tetromino() is None:
                LOGGER.info("Game over: spawn area blocked")
                return TickResult.GAME_OVER
            return TickResult.CONTINUE

        if not self._commit(self.active.moved(Move.DOWN)):
            cleared = self.board.freeze_and_clear()
            LOGGER.debug("Locked %s, cleared %d row(s)", self.active.kind.value, cleared)
            self.active = None
        return TickResult.CONTINUE

    def maybe_tick(self) -> Optional[TickResult]:
        """Tick once if the gravity interval has elapsed, else do nothing."""

        if self.gravity.due():
            return self.tick()
        return None

    def reset(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board()
        self.active = None
        self.gravity.stamp()
        LOGGER.info("Game reset")

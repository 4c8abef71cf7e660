"""Terminal falling-block puzzle game."""

from .board import Board, CellState, InvariantViolation
from .tetromino import (
    Move,
    RotateDirection,
    Rotation,
    Tetromino,
    TetrominoKind,
    shape,
    start_position,
)
from .game_state import Action, GameState, TickResult
from .utils import GravityClock, render_ascii, visible_grid

__all__ = [
    "Action",
    "Board",
    "CellState",
    "GameState",
    "GravityClock",
    "InvariantViolation",
    "Move",
    "RotateDirection",
    "Rotation",
    "Tetromino",
    "TetrominoKind",
    "TickResult",
    "render_ascii",
    "shape",
    "start_position",
    "visible_grid",
]

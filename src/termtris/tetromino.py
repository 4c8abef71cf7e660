"""Tetromino definitions: kinds, rotations and the shape table.

The rotation bitmaps follow the Super Rotation System layout and are written
out by hand.  They are *not* derived from one another: the I and O pieces pad
their bitmaps asymmetrically so that every kind spawns at the same anchor.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

Bitmap = NDArray[np.bool_]
Position = Tuple[int, int]  # (row, col)
RGB = Tuple[int, int, int]


class TetrominoKind(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    J = "J"
    L = "L"
    O = "O"
    S = "S"
    T = "T"
    Z = "Z"

    @property
    def value_id(self) -> int:
        """Return the non-zero integer identifying this kind on the board."""

        return KIND_IDS[self]

    @property
    def color(self) -> RGB:
        return KIND_COLORS[self]


class Rotation(int, Enum):
    """The four orientations of a piece, in clockwise order."""

    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3

    def rotate(self, direction: "RotateDirection") -> "Rotation":
        """Return the next orientation in ``direction``, wrapping around."""

        return Rotation((self.value + direction.value) % len(Rotation))


class RotateDirection(int, Enum):
    CLOCKWISE = 1
    COUNTERCLOCKWISE = -1


class Move(Enum):
    """Translations a player may request, as ``(d_row, d_col)`` offsets."""

    LEFT = (0, -1)
    RIGHT = (0, 1)
    DOWN = (1, 0)


# Board values for each kind.  ``0`` is reserved for an empty cell.
KIND_IDS: Dict[TetrominoKind, int] = {k: i + 1 for i, k in enumerate(TetrominoKind)}
KINDS_BY_ID: Dict[int, TetrominoKind] = {i: k for k, i in KIND_IDS.items()}

KIND_COLORS: Dict[TetrominoKind, RGB] = {
    TetrominoKind.I: (3, 65, 174),
    TetrominoKind.J: (114, 203, 59),
    TetrominoKind.L: (255, 213, 0),
    TetrominoKind.O: (255, 151, 28),
    TetrominoKind.S: (255, 50, 19),
    TetrominoKind.T: (128, 0, 128),
    TetrominoKind.Z: (255, 127, 0),
}

SPAWN_POSITION: Position = (20, 4)


def _bitmap(*rows: str) -> Bitmap:
    return np.array([[ch == "#" for ch in row] for row in rows], dtype=np.bool_)


_O_BITMAP = _bitmap(
    ".##.",
    ".##.",
    "....",
    "....",
)

# https://tetris.fandom.com/wiki/SRS
SHAPES: Dict[TetrominoKind, List[Bitmap]] = {
    TetrominoKind.I: [
        _bitmap(
            "....",
            "####",
            "....",
            "....",
        ),
        _bitmap(
            "..#.",
            "..#.",
            "..#.",
            "..#.",
        ),
        _bitmap(
            "....",
            "....",
            "####",
            "....",
        ),
        _bitmap(
            ".#..",
            ".#..",
            ".#..",
            ".#..",
        ),
    ],
    TetrominoKind.J: [
        _bitmap(
            "#..",
            "###",
            "...",
        ),
        _bitmap(
            ".##",
            ".#.",
            ".#.",
        ),
        _bitmap(
            "...",
            "###",
            "..#",
        ),
        _bitmap(
            ".#.",
            ".#.",
            "##.",
        ),
    ],
    TetrominoKind.L: [
        _bitmap(
            "..#",
            "###",
            "...",
        ),
        _bitmap(
            ".#.",
            ".#.",
            ".##",
        ),
        _bitmap(
            "...",
            "###",
            "#..",
        ),
        _bitmap(
            "##.",
            ".#.",
            ".#.",
        ),
    ],
    TetrominoKind.O: [_O_BITMAP, _O_BITMAP, _O_BITMAP, _O_BITMAP],
    TetrominoKind.S: [
        _bitmap(
            ".##",
            "##.",
            "...",
        ),
        _bitmap(
            ".#.",
            ".##",
            "..#",
        ),
        _bitmap(
            "...",
            ".##",
            "##.",
        ),
        _bitmap(
            "#..",
            "##.",
            ".#.",
        ),
    ],
    TetrominoKind.T: [
        _bitmap(
            ".#.",
            "###",
            "...",
        ),
        _bitmap(
            ".#.",
            ".##",
            ".#.",
        ),
        _bitmap(
            "...",
            "###",
            ".#.",
        ),
        _bitmap(
            ".#.",
            "##.",
            ".#.",
        ),
    ],
    TetrominoKind.Z: [
        _bitmap(
            "##.",
            ".##",
            "...",
        ),
        _bitmap(
            "..#",
            ".##",
            ".#.",
        ),
        _bitmap(
            "...",
            "##.",
            ".##",
        ),
        _bitmap(
            ".#.",
            "##.",
            "#..",
        ),
    ],
}

for _states in SHAPES.values():
    for _state in _states:
        _state.setflags(write=False)


def shape(kind: TetrominoKind, rotation: Rotation) -> Bitmap:
    """Return the read-only bitmap for ``kind`` at ``rotation``."""

    return SHAPES[kind][rotation]


def shape_offsets(kind: TetrominoKind, rotation: Rotation) -> List[Position]:
    """Return the ``(row, col)`` offsets of the occupied sub-cells."""

    rows, cols = np.nonzero(shape(kind, rotation))
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def start_position(kind: TetrominoKind) -> Position:
    """Return the spawn anchor for ``kind``, just above the visible window."""

    return SPAWN_POSITION


@dataclass(frozen=True)
class Tetromino:
    """The falling piece: kind, anchor (top-left of its bitmap) and rotation."""

    kind: TetrominoKind
    position: Position = SPAWN_POSITION
    rotation: Rotation = Rotation.R0

    @classmethod
    def spawn(cls, kind: TetrominoKind) -> "Tetromino":
        return cls(kind, start_position(kind), Rotation.R0)

    def moved(self, move: Move) -> "Tetromino":
        """Return a copy of this piece shifted by ``move``."""

        d_row, d_col = move.value
        row, col = self.position
        return replace(self, position=(row + d_row, col + d_col))

    def rotated(self, direction: RotateDirection) -> "Tetromino":
        """Return a copy rotated one step; the anchor does not change."""

        return replace(self, rotation=self.rotation.rotate(direction))

    def blocks(self) -> List[Position]:
        """Return the absolute board coordinates of the occupied sub-cells.

        Coordinates may fall outside the board; callers are expected to
        validate them (see :meth:`termtris.board.Board.can_place`).
        """

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in shape_offsets(self.kind, self.rotation)]

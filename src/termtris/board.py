"""Board representation for the playfield.

Cells are stored in a single ``int8`` grid:

* ``0`` is an empty cell,
* ``+v`` is a settled (filled) block of the kind with id ``v``,
* ``-v`` is part of the falling (active) piece of the kind with id ``v``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import KINDS_BY_ID, Tetromino, TetrominoKind


LOGGER = logging.getLogger(__name__)

# Dimensions of the playfield.  Only the bottom ``NUM_VISIBLE_ROWS`` rows are
# drawn; the rows above give new pieces room to spawn.
NUM_ROWS = 40
NUM_VISIBLE_ROWS = 20
NUM_COLUMNS = 10

EMPTY = 0

Grid = NDArray[np.int8]


class CellState(Enum):
    EMPTY = "empty"
    FILLED = "filled"
    ACTIVE = "active"


class InvariantViolation(RuntimeError):
    """Raised when the grid is about to be corrupted.

    This signals a programming error (``place`` called without a successful
    ``can_place``) and is never handled by the engine.
    """


def create_empty_grid(rows: int = NUM_ROWS, columns: int = NUM_COLUMNS) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((rows, columns), dtype=np.int8)


class Board:
    """Grid of cells holding settled blocks and the falling piece."""

    height: int = NUM_ROWS
    width: int = NUM_COLUMNS
    visible_height: int = NUM_VISIBLE_ROWS

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid(self.height, self.width)

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the raw value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self._in_bounds(row, col):
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def cell_state(self, row: int, col: int) -> CellState:
        value = self.get_cell(row, col)
        if value == EMPTY:
            return CellState.EMPTY
        return CellState.FILLED if value > 0 else CellState.ACTIVE

    def cell_kind(self, row: int, col: int) -> Optional[TetrominoKind]:
        """Return the kind whose colour occupies ``(row, col)``, if any."""

        value = self.get_cell(row, col)
        if value == EMPTY:
            return None
        return KINDS_BY_ID[abs(value)]

    def fill(self, row: int, col: int, kind: TetrominoKind) -> None:
        """Settle a block of ``kind`` at ``(row, col)``.

        Used to build up board positions directly, e.g. in tests.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if not self._in_bounds(row, col):
            raise IndexError("Cell out of bounds")
        self.grid[row, col] = kind.value_id

    def can_place(self, piece: Tetromino) -> bool:
        """Return ``True`` if every block of ``piece`` lands on the board
        without overlapping a filled cell.

        Active cells never block, so a piece may be checked against a board
        that still shows its previous footprint.  This method has no side
        effects.
        """

        for row, col in piece.blocks():
            if not self._in_bounds(row, col):
                return False
            if self.grid[row, col] > 0:
                return False
        return True

    def clear_active(self) -> None:
        """Erase the falling piece's footprint, leaving filled cells alone."""

        self.grid[self.grid < 0] = EMPTY

    def place(self, piece: Tetromino) -> None:
        """Draw ``piece`` as the active footprint, replacing the previous one.

        Raises:
            InvariantViolation: If a block would land on a non-empty cell.
                ``can_place`` must succeed before calling this.
        """

        self.clear_active()
        marker = np.int8(-piece.kind.value_id)
        for row, col in piece.blocks():
            if not self._in_bounds(row, col) or self.grid[row, col] != EMPTY:
                raise InvariantViolation(
                    f"Cannot place {piece.kind.value} block at ({row}, {col})"
                )
            self.grid[row, col] = marker

    def active_cells(self) -> List[tuple[int, int]]:
        rows, cols = np.nonzero(self.grid < 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def freeze(self) -> None:
        """Turn every active cell into a filled cell of the same kind."""

        np.abs(self.grid, out=self.grid)

    def complete_rows(self) -> List[int]:
        """Return the indexes of rows in which every cell is filled."""

        return [int(r) for r in np.flatnonzero(np.all(self.grid > 0, axis=1))]

    def freeze_and_clear(self) -> int:
        """Lock the active piece, then drop every complete row.

        Surviving rows keep their relative order and are packed towards the
        bottom; the rows freed at the top become empty.  Returns how many rows
        were removed.
        """

        self.freeze()
        full_rows = np.all(self.grid > 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            LOGGER.debug("Clearing rows %s", np.flatnonzero(full_rows).tolist())
            remaining = self.grid[~full_rows]
            new_rows = create_empty_grid(cleared, self.width)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def visible(self) -> Grid:
        """Return a read-only view of the bottom ``visible_height`` rows."""

        view = self.grid[self.height - self.visible_height:]
        view = view.view()
        view.setflags(write=False)
        return view

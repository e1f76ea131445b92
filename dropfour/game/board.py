"""
board.py - Grid storage and column-drop mechanics

This module implements the Board class: a fixed-size grid of cells that pieces
fall into column by column. The board knows nothing about turn order or how a
game is won; GameSession and the rules module build on top of it.
"""

import operator

import numpy as np
from typing import Any, Dict, List, Optional, Sequence

from dropfour.debug import debug
from dropfour.errors import OutOfRangeError
from dropfour.utils import ROWS, COLS, render_board_ascii

EMPTY = None


class Board:
    """
    A height x width grid of cells, indexed (row, column) from the top-left.

    A cell is EMPTY (None) or holds the identifier of the player occupying it.
    Occupied cells are never cleared during a game.
    """

    def __init__(self, height: int = ROWS, width: int = COLS):
        """Create an all-empty board."""
        height, width = operator.index(height), operator.index(width)
        if height < 1 or width < 1:
            raise ValueError(f"Board dimensions must be positive, got {height}x{width}")

        debug.debug(f"Initializing new {height}x{width} Board", "board")
        self.height = height
        self.width = width
        self.grid = np.full((self.height, self.width), EMPTY, dtype=object)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> 'Board':
        """
        Build a board from rows of cells, top row first.

        Gravity is not enforced; this is for inspecting arbitrary positions.
        """
        if not rows or not rows[0]:
            raise ValueError("Cannot build a board from an empty grid")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length")

        board = cls(len(rows), width)
        for r, row in enumerate(rows):
            for c, cell in enumerate(row):
                board.grid[r, c] = cell
        return board

    def copy(self) -> 'Board':
        """
        Create a copy of the current board.

        Returns:
            A new Board with the same cells
        """
        debug.trace("Creating board copy", "board")
        new_board = Board(self.height, self.width)
        new_board.grid = self.grid.copy()
        return new_board

    def _check_column(self, column: int) -> int:
        c = operator.index(column)
        if not 0 <= c < self.width:
            debug.debug(f"Column {column} out of bounds", "board")
            raise OutOfRangeError("column", c, self.width)
        return c

    def _check_row(self, row: int) -> int:
        r = operator.index(row)
        if not 0 <= r < self.height:
            debug.debug(f"Row {row} out of bounds", "board")
            raise OutOfRangeError("row", r, self.height)
        return r

    def drop_column(self, column: int) -> Optional[int]:
        """
        Find where a piece dropped into a column would land.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            The lowest empty row of the column, or None if the column is full

        Raises:
            OutOfRangeError: If the column is outside the board
        """
        c = self._check_column(column)

        for row in range(self.height - 1, -1, -1):
            if self.grid[row, c] is EMPTY:
                debug.trace(f"Column {c} lands at row {row}", "board")
                return row

        debug.debug(f"Column {c} is full", "board")
        return None

    def place(self, row: int, column: int, player: Any) -> None:
        """
        Occupy an empty cell with a player's piece.

        Placing into an occupied cell means the caller skipped drop_column and
        is treated as a defect, not a game condition.
        """
        r = self._check_row(row)
        c = self._check_column(column)
        assert player is not EMPTY, "cannot place an empty piece"
        assert self.grid[r, c] is EMPTY, f"cell ({r}, {c}) already holds {self.grid[r, c]!r}"

        debug.trace(f"Placing {player} at ({r}, {c})", "board")
        self.grid[r, c] = player

    def cell_at(self, row: int, column: int) -> Any:
        """Read a cell; bounds are checked the same way as drop_column."""
        return self.grid[self._check_row(row), self._check_column(column)]

    def is_full(self) -> bool:
        """Check if every cell is occupied."""
        return all(cell is not EMPTY for cell in self.grid.flat)

    def valid_moves(self) -> List[int]:
        """
        Get the columns that can still take a piece.

        Returns:
            List of column indices whose top cell is empty
        """
        return [col for col in range(self.width) if self.grid[0, col] is EMPTY]

    def piece_count(self) -> int:
        """Number of occupied cells."""
        return sum(1 for cell in self.grid.flat if cell is not EMPTY)

    def to_array(self, encoding: Dict[Any, int], dtype=np.int8) -> np.ndarray:
        """
        Get the board as a numeric array.

        Args:
            encoding: Mapping from player identifier to the number stored for it
            dtype: numpy dtype of the result

        Returns:
            2D array with 0 for empty cells
        """
        state = np.zeros((self.height, self.width), dtype=dtype)
        for (r, c), cell in np.ndenumerate(self.grid):
            if cell is not EMPTY:
                state[r, c] = encoding[cell]
        return state

    def render(self, symbols: Optional[Dict[Any, str]] = None) -> str:
        """
        Render the board as a string.

        Args:
            symbols: Optional mapping from cell value to display character

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid.tolist(), self.width, symbols)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(height={self.height}, width={self.width}, pieces={self.piece_count()})"

"""
utils.py - Constants, enumerations and helpers shared across dropfour

This module provides the default board dimensions, the enums used by the game
core and its adapters, and the ASCII renderer used for terminal output.
"""

from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Tuple

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

Coord = Tuple[int, int]  # (row, col)


class Player(Enum):
    """Ready-made pair of player identifiers for adapters without their own."""
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        return Player.TWO if self == Player.ONE else Player.ONE

    def __str__(self):
        return "X" if self == Player.ONE else "O"


class SessionState(Enum):
    """Lifecycle of a game session."""
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()

    def is_terminal(self) -> bool:
        """Check if no further moves are accepted."""
        return self in (SessionState.WON, SessionState.TIED)


class OutcomeKind(Enum):
    """Result of a single move request."""
    COLUMN_FULL = auto()
    CONTINUE = auto()
    WON = auto()
    TIED = auto()


class Direction(Enum):
    """Directions a winning run can extend from its origin cell."""
    RIGHT = (0, 1)
    DOWN = (1, 0)
    DOWN_RIGHT = (1, 1)
    DOWN_LEFT = (1, -1)

    @property
    def vector(self) -> Coord:
        return self.value


DEFAULT_SYMBOLS: Dict[Any, str] = {
    None: " ",
    Player.ONE: "X",
    Player.TWO: "O",
}


def is_valid_position(row: int, col: int, rows: int = ROWS, cols: int = COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        rows: Board height
        cols: Board width

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < rows and 0 <= col < cols


def symbol_for(cell: Any, symbols: Optional[Dict[Any, str]] = None) -> str:
    """Single character used to draw a cell, falling back to the first letter of its str()."""
    table = DEFAULT_SYMBOLS if symbols is None else symbols
    if cell in table:
        return table[cell]
    text = str(cell)
    return text[0].upper() if text else "?"


def render_board_ascii(cells: Iterable[Iterable[Any]], cols: int,
                       symbols: Optional[Dict[Any, str]] = None) -> str:
    """
    Render a grid of cells as ASCII art.

    Args:
        cells: Rows of cells, top row first
        cols: Number of columns
        symbols: Optional mapping from cell value to display character

    Returns:
        ASCII representation of the board
    """
    border = "|" + "-" * (cols * 2 - 1) + "|"
    result: List[str] = [border]

    for row in cells:
        result.append("|" + " ".join(symbol_for(cell, symbols) for cell in row) + "|")

    result.append(border)
    # Column numbers wrap after 9 so the footer stays aligned
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)

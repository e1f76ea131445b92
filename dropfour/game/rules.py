"""
rules.py - Win detection for dropfour

Every function here is pure: the board, the run origin, the direction and the
player are passed in explicitly and nothing is mutated.
"""

from typing import Any, List, Optional, Set

from dropfour.debug import debug
from dropfour.game.board import Board, EMPTY
from dropfour.utils import CONNECT_N, Coord, Direction, is_valid_position


def run_cells(origin: Coord, direction: Coord, length: int = CONNECT_N) -> List[Coord]:
    """Coordinates of the run starting at origin and stepping by direction."""
    y, x = origin
    dy, dx = direction
    return [(y + i * dy, x + i * dx) for i in range(length)]


def is_winning_run(board: Board, origin: Coord, direction: Coord, player: Any,
                   length: int = CONNECT_N) -> bool:
    """
    Check whether a single run belongs entirely to a player.

    Args:
        board: The board to inspect
        origin: (row, col) of the first cell of the run
        direction: (d_row, d_col) step between consecutive cells
        player: Identifier the run must consist of
        length: Number of cells in the run

    Returns:
        True if every cell is on the board and holds player
    """
    for r, c in run_cells(origin, direction, length):
        if not is_valid_position(r, c, board.height, board.width):
            return False
        if board.grid[r, c] != player:
            return False
    return True


def find_winning_run(board: Board, player: Any,
                     length: int = CONNECT_N) -> Optional[List[Coord]]:
    """
    Scan the whole board for a run owned by player.

    Every cell is tried as an origin in each of the four directions; the first
    run found is returned. Only the player who just moved needs checking, since
    the opponent cannot have completed a run on that move.

    Returns:
        The run's coordinates, or None if player has no run
    """
    if player is EMPTY:
        return None

    for y in range(board.height):
        for x in range(board.width):
            if board.grid[y, x] != player:
                continue
            for direction in Direction:
                if is_winning_run(board, (y, x), direction.vector, player, length):
                    cells = run_cells((y, x), direction.vector, length)
                    debug.debug(f"Winning run for {player} {direction.name} from ({y}, {x})", "rules")
                    return cells
    return None


def has_won(board: Board, player: Any, length: int = CONNECT_N) -> bool:
    """Check if player owns at least one run anywhere on the board."""
    return find_winning_run(board, player, length) is not None


def winners(board: Board, length: int = CONNECT_N) -> Set[Any]:
    """
    Every identifier that owns a run on the board.

    Sessions never produce more than one; loaded positions can.
    """
    found = set()
    for cell in board.grid.flat:
        if cell is EMPTY or cell in found:
            continue
        if has_won(board, cell, length):
            found.add(cell)
    return found

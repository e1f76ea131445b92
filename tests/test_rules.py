"""Tests for win detection."""

import pytest

from dropfour.game.board import Board
from dropfour.game.rules import (find_winning_run, has_won, is_winning_run,
                                 run_cells, winners)
from dropfour.utils import Direction

A = "A"
B = "B"


def board_with(cells, height=6, width=7):
    """Board with the given {(row, col): player} cells set directly."""
    board = Board(height, width)
    for (r, c), player in cells.items():
        board.place(r, c, player)
    return board


def mirrored(board):
    return Board.from_rows([list(reversed(row)) for row in board.grid.tolist()])


def shifted(board, dy, dx):
    moved = Board(board.height, board.width)
    for r in range(board.height):
        for c in range(board.width):
            cell = board.grid[r, c]
            if cell is not None:
                moved.place(r + dy, c + dx, cell)
    return moved


class TestRuns:
    """Single-run checks."""

    def test_run_cells(self):
        assert run_cells((2, 3), (1, -1)) == [(2, 3), (3, 2), (4, 1), (5, 0)]

    def test_all_four_directions(self):
        for direction in Direction:
            dy, dx = direction.vector
            origin = (0, 3)
            cells = {(origin[0] + i * dy, origin[1] + i * dx): A for i in range(4)}
            board = board_with(cells)
            assert is_winning_run(board, origin, direction.vector, A), direction
            assert not is_winning_run(board, origin, direction.vector, B), direction

    def test_run_leaving_the_board_is_not_a_win(self):
        board = board_with({(5, c): A for c in range(4, 7)})
        assert not is_winning_run(board, (5, 4), (0, 1), A)

    def test_broken_run(self):
        board = board_with({(5, 0): A, (5, 1): A, (5, 2): B, (5, 3): A})
        assert not is_winning_run(board, (5, 0), (0, 1), A)


class TestWinDetection:
    """Whole-board scans."""

    def test_empty_board(self):
        assert find_winning_run(Board(), A) is None
        assert winners(Board()) == set()

    def test_horizontal(self):
        board = board_with({(5, c): A for c in range(2, 6)})
        assert find_winning_run(board, A) == [(5, 2), (5, 3), (5, 4), (5, 5)]

    def test_vertical(self):
        board = board_with({(r, 6): B for r in range(2, 6)})
        assert find_winning_run(board, B) == [(2, 6), (3, 6), (4, 6), (5, 6)]

    def test_down_right_diagonal(self):
        board = board_with({(i, i): A for i in range(4)})
        assert has_won(board, A)

    def test_down_left_diagonal(self):
        board = board_with({(2 + i, 6 - i): A for i in range(4)})
        assert find_winning_run(board, A) == [(2, 6), (3, 5), (4, 4), (5, 3)]

    def test_three_is_not_enough(self):
        board = board_with({(5, c): A for c in range(3)})
        assert not has_won(board, A)

    def test_only_the_given_player_is_checked(self):
        board = board_with({(5, c): B for c in range(4)})
        assert not has_won(board, A)
        assert has_won(board, B)

    def test_longer_run_still_wins(self):
        board = board_with({(5, c): A for c in range(7)})
        assert has_won(board, A)

    def test_board_narrower_than_a_run(self):
        board = board_with({(r, c): A for r in range(3) for c in range(3)}, 3, 3)
        assert not has_won(board, A)

    def test_winners_reports_every_owner(self):
        cells = {(5, c): A for c in range(4)}
        cells.update({(r, 6): B for r in range(2, 6)})
        assert winners(board_with(cells)) == {A, B}

    def test_no_win_on_checkerboard(self):
        pattern = {}
        for r in range(6):
            for c in range(7):
                pattern[(r, c)] = A if (r // 2 + c) % 2 == 0 else B
        board = board_with(pattern)
        assert board.is_full()
        assert winners(board) == set()


class TestSymmetry:
    """Detection does not depend on where or which way round a run sits."""

    @pytest.mark.parametrize("cells", [
        {(5, c): A for c in range(4)},
        {(r, 1): A for r in range(1, 5)},
        {(2 + i, i): A for i in range(4)},
        {(2 + i, 3 - i): A for i in range(4)},
    ])
    def test_mirroring(self, cells):
        board = board_with(cells)
        assert has_won(board, A)
        assert has_won(mirrored(board), A)

    def test_mirroring_a_non_win(self):
        board = board_with({(5, 0): A, (4, 1): A, (3, 2): A, (5, 3): A})
        assert not has_won(board, A)
        assert not has_won(mirrored(board), A)

    @pytest.mark.parametrize("dy,dx", [(0, 1), (1, 0), (2, 3), (0, 0)])
    def test_translation(self, dy, dx):
        board = board_with({(i, i): A for i in range(4)})
        assert has_won(board, A)
        assert has_won(shifted(board, dy, dx), A)

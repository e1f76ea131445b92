"""
dropfour.game - Core game mechanics

This package contains the board, win detection and the game session state
machine. It performs no I/O and holds no reference to any rendering surface.
"""

from dropfour.game.board import Board, EMPTY
from dropfour.game.rules import find_winning_run, has_won, is_winning_run, winners
from dropfour.game.session import GameSession, MoveOutcome

__all__ = ['Board', 'EMPTY', 'GameSession', 'MoveOutcome',
           'find_winning_run', 'has_won', 'is_winning_run', 'winners']

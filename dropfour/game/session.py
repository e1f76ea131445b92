"""
session.py - Turn order and game state machine

GameSession owns a Board and the two players, applies column drops for the
active player, runs win detection after every move and decides whether the
game continues, is won, or is tied.
"""

import operator
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from dropfour.debug import debug
from dropfour.errors import IllegalStateError, InvalidPlayersError
from dropfour.game.board import Board, EMPTY
from dropfour.game.rules import find_winning_run
from dropfour.utils import ROWS, COLS, Coord, OutcomeKind, SessionState


@dataclass(frozen=True)
class MoveOutcome:
    """
    What happened to a single play_move request.

    player is the next active player for CONTINUE, the winner for WON, the
    last mover for TIED and the player still to move for COLUMN_FULL.
    """
    kind: OutcomeKind
    player: Any
    column: int
    row: Optional[int] = None
    winning_line: Tuple[Coord, ...] = field(default_factory=tuple)

    @property
    def accepted(self) -> bool:
        """True if a piece was placed."""
        return self.kind != OutcomeKind.COLUMN_FULL

    @property
    def is_terminal(self) -> bool:
        return self.kind in (OutcomeKind.WON, OutcomeKind.TIED)


class GameSession:
    """
    A single game between two players on one board.

    States run NOT_STARTED -> IN_PROGRESS -> WON or TIED. Terminal states are
    only left through reset(), which replaces the board with a fresh one.
    """

    def __init__(self, height: int = ROWS, width: int = COLS,
                 player_rule: Optional[Callable[[Any], bool]] = None):
        """
        Args:
            height: Board rows
            width: Board columns
            player_rule: Optional predicate each player identifier must satisfy
        """
        debug.debug(f"Initializing GameSession ({height}x{width})", "session")
        self.height = height
        self.width = width
        self.player_rule = player_rule
        self._lock = threading.RLock()
        self._board = Board(height, width)
        self._clear()

    def _clear(self) -> None:
        self._state = SessionState.NOT_STARTED
        self._players: Tuple[Any, ...] = ()
        self._active = None
        self._winner = None
        self._winning_line: List[Coord] = []

    # Read-only views
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def board(self) -> Board:
        return self._board

    @property
    def players(self) -> Tuple[Any, ...]:
        return self._players

    @property
    def active_player(self) -> Any:
        return self._active

    @property
    def winner(self) -> Any:
        return self._winner

    @property
    def winning_line(self) -> List[Coord]:
        return list(self._winning_line)

    @property
    def is_over(self) -> bool:
        return self._state.is_terminal()

    def cell_at(self, row: int, column: int) -> Any:
        """Read access for renderers."""
        return self._board.cell_at(row, column)

    def valid_moves(self) -> List[int]:
        """Columns that accept a piece, empty unless the game is in progress."""
        if self._state != SessionState.IN_PROGRESS:
            return []
        return self._board.valid_moves()

    def _validate_players(self, player1: Any, player2: Any) -> None:
        if player1 is EMPTY or player2 is EMPTY:
            raise InvalidPlayersError("Player identifiers must not be None")
        if player1 == player2:
            raise InvalidPlayersError(f"Players must be distinct, both were {player1!r}")
        if self.player_rule is not None:
            for player in (player1, player2):
                if not self.player_rule(player):
                    raise InvalidPlayersError(f"Player {player!r} rejected")

    def start(self, player1: Any, player2: Any) -> None:
        """
        Begin a game between two distinct players; player1 moves first.

        Raises:
            IllegalStateError: If the session was already started
            InvalidPlayersError: If the players are equal or rejected by player_rule
        """
        with self._lock:
            if self._state != SessionState.NOT_STARTED:
                debug.warning(f"start() called in state {self._state.name}", "session")
                raise IllegalStateError(f"Cannot start a session in state {self._state.name}")

            try:
                self._validate_players(player1, player2)
            except InvalidPlayersError as e:
                debug.warning(f"Rejected players: {e}", "session")
                raise

            self._board = Board(self.height, self.width)
            self._players = (player1, player2)
            self._active = player1
            self._state = SessionState.IN_PROGRESS
            debug.info(f"Game started: {player1} vs {player2}", "session")

    def play_move(self, column: int) -> MoveOutcome:
        """
        Drop the active player's piece into a column.

        Args:
            column: The column to play (0-indexed)

        Returns:
            The MoveOutcome; COLUMN_FULL leaves the session untouched

        Raises:
            IllegalStateError: If no game is in progress
            OutOfRangeError: If the column is outside the board
            TypeError: If the column is not an integer
        """
        with self._lock:
            if self._state != SessionState.IN_PROGRESS:
                debug.warning(f"play_move({column}) called in state {self._state.name}", "session")
                raise IllegalStateError(f"Cannot play a move in state {self._state.name}")

            column = operator.index(column)
            mover = self._active
            row = self._board.drop_column(column)
            if row is None:
                debug.debug(f"Column {column} full, move by {mover} ignored", "session")
                return MoveOutcome(OutcomeKind.COLUMN_FULL, mover, column)

            self._board.place(row, column, mover)

            debug.start_timer("win_check")
            line = find_winning_run(self._board, mover)
            debug.end_timer("win_check", "session")

            if line is not None:
                self._state = SessionState.WON
                self._winner = mover
                self._winning_line = line
                debug.info(f"{mover} wins with move at ({row}, {column})", "session")
                return MoveOutcome(OutcomeKind.WON, mover, column, row, tuple(line))

            if self._board.is_full():
                self._state = SessionState.TIED
                debug.info("Game ends in a tie", "session")
                return MoveOutcome(OutcomeKind.TIED, mover, column, row)

            player1, player2 = self._players
            self._active = player2 if mover == player1 else player1
            debug.debug(f"Switching to player {self._active}", "session")
            return MoveOutcome(OutcomeKind.CONTINUE, self._active, column, row)

    def reset(self) -> None:
        """
        Discard the current game and return to NOT_STARTED with a fresh board.

        Raises:
            IllegalStateError: If the session was never started
        """
        with self._lock:
            if self._state == SessionState.NOT_STARTED:
                debug.warning("reset() called before start()", "session")
                raise IllegalStateError("Cannot reset a session that has not started")

            debug.debug(f"Resetting session from state {self._state.name}", "session")
            self._board = Board(self.height, self.width)
            self._clear()

    def render(self, symbols=None) -> str:
        return self._board.render(symbols)

    def __repr__(self) -> str:
        return (f"GameSession(state={self._state.name}, active={self._active!r}, "
                f"board={self._board!r})")

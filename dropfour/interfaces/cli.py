"""
cli.py - Terminal adapter for dropfour

Hot-seat play between two humans, inspection of arbitrary positions and a
small benchmark. Players are identified by color names; checking that the
names are real colors is this adapter's job, not the core's.
"""

import argparse
import random
import sys
from typing import Callable, Dict, List, Optional, Union

from dropfour.debug import debug, DebugLevel
from dropfour.errors import DropFourError, InvalidPlayersError
from dropfour.game.board import Board
from dropfour.game.rules import winners
from dropfour.game.session import GameSession
from dropfour.utils import ROWS, COLS, OutcomeKind, Player, SessionState

# ANSI foreground codes for the colors a player may pick
PLAYER_COLORS: Dict[str, str] = {
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
}
RESET = "\033[0m"

QUIT = "quit"
RESTART = "restart"


def positive_int(text: str) -> int:
    """argparse type for board dimensions and iteration counts."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def is_color(name: str) -> bool:
    """Check a player's color name against the supported palette."""
    return isinstance(name, str) and name.lower() in PLAYER_COLORS


def color_symbols(player1: str, player2: str, use_color: bool = True) -> Dict[Optional[str], str]:
    """Display characters for two color-identified players."""
    symbols = {None: " "}
    for player, mark in ((player1, "X"), (player2, "O")):
        symbols[player] = f"{PLAYER_COLORS[player]}{mark}{RESET}" if use_color else mark
    return symbols


def parse_position(text: str, rows: int = ROWS, cols: int = COLS) -> Board:
    """
    Build a board from a comma-separated, row-major list of cells.

    Args:
        text: Values 0 (empty), 1 (Player.ONE) or 2 (Player.TWO)
        rows: Board height
        cols: Board width

    Raises:
        ValueError: If the string has the wrong length or unknown values
    """
    values = [int(v) for v in text.split(',')]
    if len(values) != rows * cols:
        raise ValueError(f"Position string must have {rows * cols} values, got {len(values)}")

    cells = {0: None, 1: Player.ONE, 2: Player.TWO}
    if any(v not in cells for v in values):
        raise ValueError("Position values must be 0, 1 or 2")

    grid = [[cells[values[r * cols + c]] for c in range(cols)] for r in range(rows)]
    return Board.from_rows(grid)


class SimpleCLI:
    """Command-line interface for playing and inspecting games."""

    def __init__(self, input_fn: Callable[[str], str] = input):
        self.input_fn = input_fn
        self.args = None
        self.session: Optional[GameSession] = None
        self.symbols: Dict = {}

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='dropfour terminal interface')
        parser.add_argument('--rows', type=positive_int, default=ROWS, help='Board height')
        parser.add_argument('--cols', type=positive_int, default=COLS, help='Board width')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug_level',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            default='error', help='Logging verbosity')
        parser.add_argument('--log_file', type=str, default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game')
        play_parser.add_argument('--p1-color', dest='p1_color', default='red',
                                 help=f"Color of player 1 ({', '.join(PLAYER_COLORS)})")
        play_parser.add_argument('--p2-color', dest='p2_color', default='yellow',
                                 help='Color of player 2')
        play_parser.add_argument('--no-color', dest='use_color', action='store_false',
                                 help='Draw pieces without ANSI colors')

        test_parser = subparsers.add_parser('test', help='Inspect a board position')
        test_parser.add_argument('--position', type=str, required=True,
                                 help='Comma-separated cells, row-major (0 empty, 1, 2)')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations for benchmarking')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        level = DebugLevel.DEBUG if self.args.debug else DebugLevel[self.args.debug_level.upper()]
        debug.configure(level=level, log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command selected on the command line; returns an exit status."""
        if self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        if self.args.command == 'test':
            return self.test_position()
        if self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def new_session(self, player1: str, player2: str) -> GameSession:
        """
        Create and start a session for two color-named players.

        Raises:
            InvalidPlayersError: If a color is unknown or both are the same
        """
        session = GameSession(self.args.rows, self.args.cols, player_rule=is_color)
        session.start(player1.lower(), player2.lower())
        return session

    def play_game(self) -> int:
        """Play a hot-seat game."""
        p1, p2 = self.args.p1_color, self.args.p2_color
        try:
            self.session = self.new_session(p1, p2)
        except InvalidPlayersError:
            print("Please pick 2 valid different colors!")
            return 1

        p1, p2 = self.session.players
        self.symbols = color_symbols(p1, p2, self.args.use_color)
        print("Starting a new game!")
        print(f"Enter a column number (0-{self.args.cols - 1}). 'r' to restart, 'q' to quit.")
        print(self.session.render(self.symbols))

        while True:
            move = self.get_human_move(self.session.active_player)
            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return 0
            if move == RESTART:
                self.session.reset()
                self.session.start(p1, p2)
                print("Game restarted.")
                print(self.session.render(self.symbols))
                continue

            try:
                outcome = self.session.play_move(move)
            except DropFourError as e:
                print(f"Invalid move: {e}")
                continue

            if outcome.kind == OutcomeKind.COLUMN_FULL:
                print(f"Column {move} is full, pick another.")
                continue

            print(self.session.render(self.symbols))
            if outcome.kind == OutcomeKind.WON:
                print(f"The {outcome.player} player won!")
                return 0
            if outcome.kind == OutcomeKind.TIED:
                print("Tie!")
                return 0

    def get_human_move(self, player: str) -> Optional[Union[int, str]]:
        """
        Read one move from the active player.

        Returns:
            Column index, QUIT, RESTART, or None if the input was unusable
        """
        try:
            user_input = self.input_fn(f"{player} to move: ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            return int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or a command.")
            return None

    def test_position(self) -> int:
        """Report winners, fullness and valid moves for a loaded position."""
        try:
            board = parse_position(self.args.position, self.args.rows, self.args.cols)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        found = winners(board)
        if found:
            for player in sorted(found, key=lambda p: p.value):
                print(f"Win for {player.name} detected")
        else:
            print("No win detected for any player")

        if board.is_full():
            print("Board is full")
        else:
            empty_count = board.height * board.width - board.piece_count()
            print(f"Empty spaces: {empty_count}")

        print(f"Valid moves: {board.valid_moves()}")
        return 0

    def benchmark(self) -> int:
        """Time board creation, random games and rendering."""
        iterations = self.args.iterations
        rows, cols = self.args.rows, self.args.cols
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board(rows, cols)
        board_init_time = debug.end_timer("board_init", "cli")
        print(f"Board initialization: {board_init_time:.6f} seconds total, "
              f"{board_init_time / iterations * 1000:.6f} ms per board")

        games = max(1, iterations // 10)
        total_moves = 0
        session = GameSession(rows, cols)
        debug.start_timer("game_simulation")
        for _ in range(games):
            if session.state != SessionState.NOT_STARTED:
                session.reset()
            session.start(Player.ONE, Player.TWO)
            while not session.is_over:
                session.play_move(random.choice(session.valid_moves()))
                total_moves += 1
        simulation_time = debug.end_timer("game_simulation", "cli")
        print(f"Played {games} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games * 1000:.6f} ms per game, "
              f"{simulation_time / max(1, total_moves) * 1000:.6f} ms per move")

        debug.start_timer("rendering")
        for _ in range(iterations):
            session.render()
        rendering_time = debug.end_timer("rendering", "cli")
        print(f"Rendering board {iterations} times: {rendering_time:.6f} seconds total, "
              f"{rendering_time / iterations * 1000:.6f} ms per render")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())

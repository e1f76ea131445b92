"""
env.py - Gymnasium environment over a GameSession

Exposes a game through the gymnasium.Env interface so external code can drive
it one column at a time. Both sides are played through step(); the env keeps
no opponent of its own.
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, Optional, Tuple

from dropfour.debug import debug
from dropfour.errors import OutOfRangeError
from dropfour.game.session import GameSession
from dropfour.utils import ROWS, COLS, OutcomeKind, Player, SessionState

ENCODING = {Player.ONE: 1, Player.TWO: 2}


class ConnectFourEnv(gym.Env):
    """
    Four-in-a-row environment following the Gymnasium interface.

    Observations are the board as an int8 array: 0 empty, 1 for Player.ONE,
    2 for Player.TWO. Rewards are from the point of view of the player who
    just moved.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, rows: int = ROWS, cols: int = COLS):
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.rows = rows
        self.cols = cols
        self.action_space = spaces.Discrete(cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(rows, cols), dtype=np.int8
        )

        self.session = GameSession(rows, cols)
        self.render_mode = render_mode
        self.last_move = None

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game between Player.ONE and Player.TWO.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        if self.session.state != SessionState.NOT_STARTED:
            self.session.reset()
        self.session.start(Player.ONE, Player.TWO)
        self.last_move = None

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play a column for whoever is to move.

        Full or off-board columns leave the game untouched and are reported
        through the invalid-move reward.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action}", "env")

        try:
            outcome = self.session.play_move(action)
        except OutOfRangeError:
            debug.warning(f"Invalid action: column {action} is off the board", "env")
            return self._invalid_move()

        if outcome.kind == OutcomeKind.COLUMN_FULL:
            debug.warning(f"Invalid action: column {action} is full", "env")
            return self._invalid_move()

        self.last_move = (outcome.row, outcome.column)
        reward = self.reward_step
        terminated = False

        if outcome.kind == OutcomeKind.WON:
            debug.info(f"Game over: {outcome.player.name} wins", "env")
            reward = self.reward_win
            terminated = True
        elif outcome.kind == OutcomeKind.TIED:
            debug.info("Game over: Draw", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def _invalid_move(self) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """Nothing changes; the episode is truncated with the invalid-move reward."""
        info = self._get_info()
        info['invalid_move'] = True
        return self._get_observation(), self.reward_invalid_move, False, True, info

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.session.render()
        if self.render_mode == "human":
            print(self.session.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.session.board.to_array(ENCODING)

    def _get_info(self) -> Dict:
        valid_moves = self.session.valid_moves()
        active = self.session.active_player

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': active.value if active is not None else 0,
            'game_result': self.session.state.name,
            'moves_made': self.session.board.piece_count(),
            'winning_line': self.session.winning_line,
            'last_move': self.last_move,
        }

    def close(self):
        pass

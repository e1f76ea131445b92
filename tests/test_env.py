"""Tests for the Gymnasium environment adapter."""

import gymnasium
import numpy as np
import pytest

from dropfour.errors import IllegalStateError
from dropfour.interfaces.env import ConnectFourEnv
from dropfour.utils import Player


@pytest.fixture
def env():
    environment = ConnectFourEnv()
    environment.reset(seed=0)
    yield environment
    environment.close()


class TestConnectFourEnv:
    """Reset/step contract."""

    def test_spaces(self, env):
        assert isinstance(env, gymnasium.Env)
        assert env.action_space.n == 7
        assert env.observation_space.shape == (6, 7)

    def test_reset(self, env):
        observation, info = env.reset()
        assert observation.shape == (6, 7)
        assert observation.dtype == np.int8
        assert not observation.any()
        assert info['valid_moves'] == list(range(7))
        assert info['current_player'] == Player.ONE.value
        assert info['game_result'] == 'IN_PROGRESS'
        assert info['last_move'] is None
        assert env.observation_space.contains(observation)

    def test_step_places_for_active_player(self, env):
        observation, reward, terminated, truncated, info = env.step(3)
        assert observation[5, 3] == 1
        assert reward == env.reward_step
        assert not terminated and not truncated
        assert info['current_player'] == Player.TWO.value
        assert info['last_move'] == (5, 3)

        observation, *_ = env.step(3)
        assert observation[4, 3] == 2

    def test_full_column_is_an_invalid_move(self, env):
        for _ in range(6):
            env.step(0)
        observation, reward, terminated, truncated, info = env.step(0)
        assert reward == env.reward_invalid_move
        assert not terminated
        assert truncated
        assert info['invalid_move']
        assert 0 not in info['valid_moves']
        assert info['moves_made'] == 6

    @pytest.mark.parametrize("action", [7, -1, 100])
    def test_off_board_column_is_an_invalid_move(self, env, action):
        env.step(3)
        before = env.session.board.grid.copy()
        observation, reward, terminated, truncated, info = env.step(action)
        assert reward == env.reward_invalid_move
        assert not terminated
        assert truncated
        assert info['invalid_move']
        assert info['moves_made'] == 1
        assert info['current_player'] == Player.TWO.value
        assert (env.session.board.grid == before).all()
        assert observation[5, 3] == 1

    def test_win(self, env):
        for column in [0, 1, 0, 1, 0, 1]:
            env.step(column)
        observation, reward, terminated, truncated, info = env.step(0)
        assert terminated
        assert not truncated
        assert reward == env.reward_win
        assert info['game_result'] == 'WON'
        assert sorted(info['winning_line']) == [(2, 0), (3, 0), (4, 0), (5, 0)]
        assert info['valid_moves'] == []

    def test_step_after_game_over_needs_reset(self, env):
        for column in [0, 1, 0, 1, 0, 1, 0]:
            env.step(column)
        with pytest.raises(IllegalStateError):
            env.step(2)
        observation, info = env.reset()
        assert not observation.any()
        assert info['game_result'] == 'IN_PROGRESS'

    def test_custom_size_and_draw(self):
        env = ConnectFourEnv(rows=1, cols=2)
        env.reset()
        env.step(0)
        observation, reward, terminated, truncated, info = env.step(1)
        assert terminated
        assert reward == env.reward_draw
        assert info['game_result'] == 'TIED'
        np.testing.assert_array_equal(observation, [[1, 2]])

    def test_ascii_render(self):
        env = ConnectFourEnv(render_mode='ascii')
        env.reset()
        env.step(2)
        assert "|    X        |" in env.render()

    def test_unknown_render_mode(self):
        with pytest.raises(ValueError):
            ConnectFourEnv(render_mode='rgb_array')

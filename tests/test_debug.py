"""Tests for the logging manager."""

import logging
import threading
from unittest import mock

import pytest

from dropfour.debug import DebugLevel, DebugManager, debug, TRACE
from dropfour.game.session import GameSession
from dropfour.utils import OutcomeKind, Player


@pytest.fixture
def manager():
    return DebugManager(name="dropfour.tests")


class TestLevels:

    def test_default_level(self, manager):
        assert manager.level == DebugLevel.WARNING
        assert manager.logger.level == logging.WARNING

    def test_set_from_string(self, manager):
        manager.set_from_string("trace")
        assert manager.level == DebugLevel.TRACE
        assert manager.logger.level == TRACE

    def test_unknown_level_is_ignored(self, manager):
        manager.set_from_string("loud")
        assert manager.level == DebugLevel.WARNING

    def test_component_filter(self, manager):
        manager.configure(level=DebugLevel.INFO, components=["session"])
        with mock.patch.object(manager.logger, "log") as log:
            manager.info("kept", "session")
            manager.info("dropped", "board")
        log.assert_called_once_with(logging.INFO, "[session] kept")


class TestTimers:
    """Timers are tracked per marker and per thread."""

    def test_end_without_start(self, manager):
        with mock.patch.object(manager, "warning") as warning:
            assert manager.end_timer("never") is None
        warning.assert_called_once()

    def test_nested_markers_with_the_same_name(self, manager):
        manager.start_timer("x")
        manager.start_timer("x")
        assert manager.end_timer("x") >= 0.0
        assert manager.end_timer("x") >= 0.0
        with mock.patch.object(manager, "warning"):
            assert manager.end_timer("x") is None

    def test_threads_do_not_share_markers(self, manager):
        first_started = threading.Event()
        second_done = threading.Event()
        results = {}

        def first():
            manager.start_timer("win_check")
            first_started.set()
            second_done.wait(5)
            results["first"] = manager.end_timer("win_check")

        def second():
            first_started.wait(5)
            manager.start_timer("win_check")
            results["second"] = manager.end_timer("win_check")
            with mock.patch.object(manager, "warning"):
                results["extra"] = manager.end_timer("win_check")
            second_done.set()

        threads = [threading.Thread(target=first), threading.Thread(target=second)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert isinstance(results["first"], float)
        assert isinstance(results["second"], float)
        assert results["extra"] is None

    def test_sessions_on_separate_threads(self):
        outcomes = []

        def play():
            for _ in range(20):
                game = GameSession()
                game.start(Player.ONE, Player.TWO)
                for column in [0, 1, 0, 1, 0, 1, 0]:
                    outcome = game.play_move(column)
                outcomes.append(outcome.kind)

        with mock.patch.object(debug, "warning") as warning:
            threads = [threading.Thread(target=play) for _ in range(2)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert warning.call_count == 0
        assert outcomes == [OutcomeKind.WON] * 40

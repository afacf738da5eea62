"""Tests for keyboard dispatch onto engine commands."""

from snake_arcade.config import GameConfig
from snake_arcade.controls import KEY_TO_DIRECTION, dispatch_key
from snake_arcade.engine import GameEngine
from snake_arcade.phase import GamePhase
from snake_arcade.snake import Direction


def _engine() -> GameEngine:
    return GameEngine(GameConfig(seed=0))


class TestKeyMap:
    def test_arrows_and_wasd(self):
        assert KEY_TO_DIRECTION["ArrowUp"] is Direction.UP
        assert KEY_TO_DIRECTION["a"] is Direction.LEFT
        assert KEY_TO_DIRECTION["D"] is Direction.RIGHT


class TestDispatch:
    def test_space_starts_and_pauses(self):
        engine = _engine()
        assert dispatch_key(engine, " ")
        assert engine.phase is GamePhase.RUNNING
        dispatch_key(engine, "Space")
        assert engine.phase is GamePhase.PAUSED

    def test_direction_key_starts_game(self):
        engine = _engine()
        assert dispatch_key(engine, "w")
        assert engine.phase is GamePhase.RUNNING
        assert engine.queue.pending is Direction.UP

    def test_restart_key(self):
        engine = _engine()
        engine.toggle_pause_or_start()
        engine.step()
        assert dispatch_key(engine, "R")
        assert engine.phase is GamePhase.RUNNING
        assert engine.tick == 0

    def test_unbound_key(self):
        engine = _engine()
        assert not dispatch_key(engine, "x")
        assert engine.phase is GamePhase.START

    def test_direction_ignored_while_paused(self):
        engine = _engine()
        dispatch_key(engine, " ")
        dispatch_key(engine, " ")
        assert dispatch_key(engine, "ArrowUp")
        assert engine.queue.pending is None
        assert engine.phase is GamePhase.PAUSED

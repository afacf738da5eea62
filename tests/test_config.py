"""Tests for the game configuration dataclass."""

import json

import pytest

from snake_arcade.config import GameConfig
from snake_arcade.speed import Difficulty


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 24
        assert cfg.difficulty == "normal"
        assert cfg.wrap is False
        assert cfg.speed_scaling is True
        assert cfg.audio_enabled is True
        assert cfg.max_frame_delta_ms == 250.0
        assert cfg.difficulty_level is Difficulty.NORMAL

    def test_invalid_difficulty(self):
        with pytest.raises(ValueError, match="difficulty must be one of"):
            GameConfig(difficulty="nightmare")

    def test_grid_too_small(self):
        with pytest.raises(ValueError, match="at least 4"):
            GameConfig(grid_size=3)

    def test_initial_length_must_fit(self):
        with pytest.raises(ValueError, match="does not fit"):
            GameConfig(grid_size=6, initial_length=4)

    def test_frame_delta_positive(self):
        with pytest.raises(ValueError, match="positive"):
            GameConfig(max_frame_delta_ms=0)

    def test_with_changes(self):
        cfg = GameConfig().with_changes(wrap=True, difficulty=Difficulty.HARD)
        assert cfg.wrap is True
        assert cfg.difficulty == "hard"

    def test_with_changes_validates(self):
        with pytest.raises(ValueError):
            GameConfig().with_changes(difficulty="bogus")


class TestGameConfigPersistence:
    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_size=16, difficulty="easy", wrap=True, seed=3)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()
        assert GameConfig.load(path) == cfg

    def test_to_dict_serializable(self):
        serialized = json.dumps(GameConfig().to_dict())
        assert '"difficulty": "normal"' in serialized

    def test_load_rejects_unknown_keys(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"grid_size": 12, "speed": 3}))
        with pytest.raises(ValueError, match="Unknown config keys.*speed"):
            GameConfig.load(path)

    def test_load_rejects_non_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            GameConfig.load(path)

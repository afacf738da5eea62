"""Game configuration surface."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from snake_arcade.speed import Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Options recognised by the engine.

    Supports JSON serialization so a setup can be saved and reloaded.
    """

    grid_size: int = 24
    difficulty: str = "normal"
    wrap: bool = False
    speed_scaling: bool = True
    audio_enabled: bool = True
    max_frame_delta_ms: float = 250.0
    initial_length: int = 3
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        try:
            Difficulty(self.difficulty)
        except ValueError:
            choices = ", ".join(d.value for d in Difficulty)
            raise ValueError(
                f"difficulty must be one of: {choices}."
            ) from None
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.initial_length > self.grid_size // 2:
            raise ValueError(
                "initial_length does not fit the grid; increase grid_size "
                "or reduce initial_length."
            )
        if self.max_frame_delta_ms <= 0:
            raise ValueError("max_frame_delta_ms must be positive.")

    @property
    def difficulty_level(self) -> Difficulty:
        return Difficulty(self.difficulty)

    def with_changes(self, **changes) -> GameConfig:
        """Return a validated copy with *changes* applied."""
        if "difficulty" in changes and isinstance(changes["difficulty"], Difficulty):
            changes["difficulty"] = changes["difficulty"].value
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must hold a JSON object.")
        unknown = set(raw) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(
                f"Unknown config keys in {path}: {', '.join(sorted(unknown))}."
            )
        return cls(**raw)

"""High-score persistence collaborators."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Anything that can load and save a single best score."""

    def load(self) -> int: ...

    def save(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score in memory for the life of the process."""

    def __init__(self, initial: int = 0) -> None:
        self.value = initial

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = score


class JsonHighScoreStore:
    """Stores the high score as ``{"high_score": n}`` in a JSON file.

    Storage problems never interrupt a game: unreadable data loads as 0
    and a failed write is logged and otherwise ignored.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> int:
        try:
            raw = json.loads(self.path.read_text())
        except FileNotFoundError:
            return 0
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read high score from %s: %s", self.path, exc)
            return 0

        value = raw.get("high_score") if isinstance(raw, dict) else None
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("Ignoring malformed high score in %s.", self.path)
            return 0
        return value

    def save(self, score: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({"high_score": score}))
        except OSError as exc:
            logger.warning("Could not save high score to %s: %s", self.path, exc)
            return
        logger.debug("High score %d saved to %s", score, self.path)

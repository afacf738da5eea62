"""Headless games driven by a simple autopilot."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.engine import GameEngine
from snake_arcade.phase import GamePhase
from snake_arcade.snake import Direction
from snake_arcade.storage import HighScoreStore

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Aggregate results of a batch of autopilot games."""

    total_games: int
    total_ticks: int
    best_score: int
    mean_score: float
    wins: int
    wall_time_seconds: float
    games_per_second: float

    def summary(self) -> str:
        return (
            f"Simulation: {self.total_games} games, {self.total_ticks} ticks "
            f"in {self.wall_time_seconds:.2f}s | best score {self.best_score}, "
            f"mean {self.mean_score:.1f}, wins {self.wins} | "
            f"{self.games_per_second:.1f} games/s"
        )


def choose_direction(
    engine: GameEngine,
    rng: np.random.Generator,
    turn_prob: float = 0.1,
) -> Direction:
    """Pick a direction for the next tick.

    Prefers moves that do not collide and that bring the head closer to
    the food, turning at random with probability *turn_prob*.
    """
    current = engine.direction
    candidates = [d for d in Direction if d is not current.opposite]
    safe = [d for d in candidates if not engine.would_collide(d)]
    if not safe:
        return current

    if rng.random() < turn_prob:
        return safe[int(rng.integers(len(safe)))]

    food = engine.food
    if food is None:
        return current if current in safe else safe[0]

    hx, hy = engine.snake.head

    def distance(d: Direction) -> int:
        dx, dy = d.value
        return abs(hx + dx - food[0]) + abs(hy + dy - food[1])

    return min(safe, key=distance)


def play_game(
    engine: GameEngine,
    rng: np.random.Generator,
    max_ticks: int = 10_000,
) -> int:
    """Restart *engine* and autopilot it until the game ends.

    Returns the number of ticks played.
    """
    engine.restart()
    while engine.phase is GamePhase.RUNNING and engine.tick < max_ticks:
        engine.queue_direction(choose_direction(engine, rng))
        engine.step()
    return engine.tick


def run_simulation(
    *,
    num_games: int = 100,
    config: GameConfig | None = None,
    store: HighScoreStore | None = None,
    max_ticks: int = 10_000,
    seed: int = 42,
) -> SimulationResult:
    """Play *num_games* autopilot games and report aggregate results."""
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    cfg = replace(config or GameConfig(), seed=seed)
    engine = GameEngine(cfg, store=store)
    rng = np.random.default_rng(seed)

    scores: list[int] = []
    total_ticks = 0
    wins = 0
    start = time.perf_counter()

    for _ in range(num_games):
        total_ticks += play_game(engine, rng, max_ticks=max_ticks)
        scores.append(engine.score)
        if engine.phase is GamePhase.WIN:
            wins += 1

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        total_games=num_games,
        total_ticks=total_ticks,
        best_score=max(scores),
        mean_score=float(np.mean(scores)),
        wins=wins,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result

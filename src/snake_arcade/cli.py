"""Command-line tools for Snake Arcade."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade simulation and maintenance tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play headless games with an autopilot.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--num-games", type=int, default=100)
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument(
        "--difficulty", type=str, default=None,
        choices=["easy", "normal", "hard"],
    )
    sim_p.add_argument("--wrap", action="store_true", default=None)
    sim_p.add_argument("--max-ticks", type=int, default=10_000)
    sim_p.add_argument("--seed", type=int, default=42)
    sim_p.add_argument(
        "--high-score-file", type=str, default=None,
        help="Record the best score in this JSON file.",
    )

    # --- high-score ---
    hs_p = sub.add_parser("high-score", help="Show or reset the high score.")
    hs_p.add_argument("path", help="Path to the high score JSON file.")
    hs_p.add_argument(
        "--reset", action="store_true", help="Set the high score to 0.",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write a config file.")
    cfg_p.add_argument("output", help="Path for the JSON config.")
    cfg_p.add_argument("--grid-size", type=int, default=None)
    cfg_p.add_argument(
        "--difficulty", type=str, default=None,
        choices=["easy", "normal", "hard"],
    )
    cfg_p.add_argument("--wrap", action="store_true", default=None)
    cfg_p.add_argument(
        "--no-speed-scaling", dest="speed_scaling",
        action="store_false", default=None,
    )
    cfg_p.add_argument(
        "--no-audio", dest="audio_enabled",
        action="store_false", default=None,
    )

    return parser


def _config_from_args(args: argparse.Namespace):
    from snake_arcade.config import GameConfig

    config = (
        GameConfig.load(args.config)
        if getattr(args, "config", None) else GameConfig()
    )
    overrides: dict = {}
    for name in (
        "grid_size", "difficulty", "wrap", "speed_scaling", "audio_enabled",
    ):
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val
    if overrides:
        config = config.with_changes(**overrides)
    return config


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_arcade.simulate import run_simulation
    from snake_arcade.storage import JsonHighScoreStore

    store = (
        JsonHighScoreStore(args.high_score_file)
        if args.high_score_file else None
    )
    result = run_simulation(
        num_games=args.num_games,
        config=_config_from_args(args),
        store=store,
        max_ticks=args.max_ticks,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_high_score(args: argparse.Namespace) -> int:
    from snake_arcade.storage import JsonHighScoreStore

    store = JsonHighScoreStore(args.path)
    if args.reset:
        store.save(0)
        logger.info("High score reset in %s", args.path)
    print(f"High score: {store.load()}")  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "high-score": _run_high_score,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    sys.exit(main())

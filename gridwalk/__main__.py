"""Module entry point for `python -m gridwalk`."""

from __future__ import annotations

import argparse
import random

from gridwalk.app import (
    build_workbench,
    configure_logging,
    run_headless,
    run_interactive,
    scatter_terrain,
)
from gridwalk.engine.contracts import Algorithm, Level
from gridwalk.engine.errors import GridwalkError


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Interactive grid pathfinding visualizer.")
    parser.add_argument(
        "--algorithm",
        choices=[algorithm.value for algorithm in Algorithm],
        default=None,
        help="Search algorithm (default: astar, or $GRIDWALK_ALGORITHM).",
    )
    parser.add_argument(
        "--level",
        choices=[level.value for level in Level],
        default=None,
        help="Grid difficulty: easy=15, medium=20, hard=30 (or $GRIDWALK_LEVEL).",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help="Explicit grid side length; overrides --level.",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Animation speed factor (or $GRIDWALK_SPEED).",
    )
    parser.add_argument(
        "--delay-ms",
        type=float,
        default=None,
        help="Base delay per step in milliseconds (or $GRIDWALK_DELAY_MS).",
    )
    parser.add_argument(
        "--terrain",
        action="store_true",
        help="Enable terrain movement costs.",
    )
    parser.add_argument(
        "--random",
        action="store_true",
        help="Start with randomly placed obstacles.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random obstacles and terrain.",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run one search and print the result instead of opening the UI.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write logs to this file instead of the terminal.",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level, log_file=args.log_file, rich=args.headless)

    try:
        workbench = build_workbench(
            level=args.level,
            size=args.size,
            speed=args.speed,
            delay_ms=0.0 if args.headless and args.delay_ms is None else args.delay_ms,
            terrain=args.terrain,
            seed=args.seed,
        )
        if args.random:
            workbench.randomize_obstacles()
        if args.terrain:
            scatter_terrain(workbench.grid, rng=random.Random(args.seed))
        if args.headless:
            run_headless(workbench, algorithm=args.algorithm)
        else:
            run_interactive(workbench, algorithm=args.algorithm)
    except (GridwalkError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()

"""Headless ASCII demo for the simulation core.

Run with: `python -m tetriswave`

Drives the core with a fixed frame timestep and random inputs, then prints
the final frame (board plus active piece) and the run's totals.  Pass
``--help`` for options.
"""

from __future__ import annotations

import argparse
import logging
import random

from . import GameCore, Intent, Runner, render_grid
from .events import GameEvent


LOGGER = logging.getLogger(__name__)


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def _log_event(event: GameEvent) -> None:
    LOGGER.debug("%s %s", event.kind.value, event.data)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--frames", type=int, default=3600, help="Number of frames to simulate.")
    parser.add_argument("--frame-ms", type=float, default=1000.0 / 60, help="Milliseconds per frame.")
    parser.add_argument(
        "--input-every",
        type=int,
        default=6,
        help="Send a random input every N frames (0 disables input).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and inputs.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    inputs = random.Random(args.seed)
    runner = Runner(core=GameCore(seed=args.seed))
    runner.core.subscribe(_log_event)
    runner.start()

    intents = list(Intent)
    ts = 0.0
    for frame in range(args.frames):
        ts += args.frame_ms
        if args.input_every and frame % args.input_every == 0:
            runner.handle(inputs.choice(intents))
        if not runner.frame(ts) and not runner.continue_after_win():
            break

    snapshot = runner.core.snapshot()
    _print_grid(render_grid(snapshot.board, snapshot.current))
    print(f"score={snapshot.score} lines={snapshot.lines} wave={snapshot.wave} game_over={snapshot.game_over}")


if __name__ == "__main__":
    main()

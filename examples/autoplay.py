"""Play headless games with random commands and log a summary of each.

Run with::

    PYTHONPATH=src python examples/autoplay.py --games 5

The player presses one random key per frame; the engine is driven with a
fixed frame time so results are reproducible for a given seed.
"""

from __future__ import annotations

import argparse
import logging
import random

from blockfall.engine import GameEngine, GameOverEvent, GameStatus


LOGGER = logging.getLogger(__name__)

FRAME_MS = 1000 / 60

COMMANDS = ("move_left", "move_right", "rotate", "soft_drop", "hard_drop", None)


def play_game(seed: int, max_frames: int = 20_000) -> GameOverEvent:
    """Play one game and return its final figures."""

    results: list[GameOverEvent] = []
    engine = GameEngine(seed=seed, on_game_over=results.append)
    player = random.Random(seed)
    engine.start()
    for _ in range(max_frames):
        if engine.status is GameStatus.GAME_OVER:
            break
        command = player.choice(COMMANDS)
        if command is not None:
            getattr(engine, command)()
        engine.tick(FRAME_MS)
    if results:
        return results[-1]
    return GameOverEvent(final_score=engine.score, final_lines=engine.lines)


def log_summary(results: list[GameOverEvent], *, limit: int = 10) -> list[GameOverEvent]:
    """Log the best ``limit`` games and return them, best first."""

    best = sorted(results, key=lambda r: r.final_score, reverse=True)[:limit]
    if not best:
        LOGGER.info("No games played.")
        return best
    parts = [
        f"#{rank}: score={r.final_score}, lines={r.final_lines}{' *' if r.celebrate else ''}"
        for rank, r in enumerate(best, start=1)
    ]
    LOGGER.info("Top games: %s", "; ".join(parts))
    return best


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--games", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--limit", type=int, default=10)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    results = [play_game(args.seed + i) for i in range(args.games)]
    log_summary(results, limit=args.limit)


if __name__ == "__main__":
    main()

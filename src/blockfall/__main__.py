"""Simple ASCII demo for the engine.

Run with: `python -m blockfall`

Starts a session, lets gravity pull the first piece a few rows and prints
the resulting frame, including the ghost of the landing position.
"""

from __future__ import annotations

import argparse
import logging

from . import AsciiRenderer, GameEngine


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None, help="piece sequence seed")
    parser.add_argument("--ticks", type=int, default=3, help="gravity steps before printing")
    parser.add_argument("--verbose", action="store_true", help="log engine transitions")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    engine = GameEngine(seed=args.seed)
    engine.start()
    for _ in range(args.ticks):
        engine.tick(engine.drop_interval_ms)
    AsciiRenderer().draw(engine.snapshot())


if __name__ == "__main__":
    main()

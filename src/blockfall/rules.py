"""Scoring and level progression tables."""

from __future__ import annotations

# Points for clearing 0, 1, 2, 3 or 4 rows with one lock, multiplied by the
# current level.
LINE_CLEAR_POINTS = (0, 40, 100, 300, 1200)

# Flat bonus for every row a hard drop travels.
HARD_DROP_POINTS = 2

LINES_PER_LEVEL = 10

BASE_DROP_INTERVAL_MS = 1000
DROP_INTERVAL_STEP_MS = 50
MIN_DROP_INTERVAL_MS = 50

# Final score above which a game over is worth celebrating.
CELEBRATION_SCORE = 100


def score_for_lines(lines: int, level: int) -> int:
    """Return the points for clearing ``lines`` rows at ``level``.

    Raises:
        ValueError: If ``lines`` is outside ``0..4``.
    """

    if not 0 <= lines < len(LINE_CLEAR_POINTS):
        raise ValueError(f"Cannot clear {lines} rows with a single piece")
    return LINE_CLEAR_POINTS[lines] * level


def level_for_lines(lines: int) -> int:
    """Return the level reached after clearing ``lines`` rows in total."""

    return lines // LINES_PER_LEVEL + 1


def drop_interval_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    Starts at one second on level 1 and shortens by 50 ms per level down to
    a floor of 50 ms.
    """

    return max(MIN_DROP_INTERVAL_MS, BASE_DROP_INTERVAL_MS - (level - 1) * DROP_INTERVAL_STEP_MS)


__all__ = [
    "LINE_CLEAR_POINTS",
    "HARD_DROP_POINTS",
    "LINES_PER_LEVEL",
    "BASE_DROP_INTERVAL_MS",
    "MIN_DROP_INTERVAL_MS",
    "CELEBRATION_SCORE",
    "score_for_lines",
    "level_for_lines",
    "drop_interval_ms",
]

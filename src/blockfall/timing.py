"""Gravity clock converting elapsed time into discrete drop steps."""

from __future__ import annotations

from .rules import BASE_DROP_INTERVAL_MS


class GravityClock:
    """Accumulate elapsed milliseconds and report when a gravity step is due.

    Once the accumulated time reaches ``interval_ms`` the accumulator is reset
    to zero; any remainder is discarded, so a single call never yields more
    than one step.
    """

    def __init__(self, interval_ms: float = BASE_DROP_INTERVAL_MS) -> None:
        self.interval_ms = interval_ms
        self.accumulated_ms = 0.0

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: float) -> None:
        if value <= 0:
            raise ValueError("Gravity interval must be positive")
        self._interval_ms = value

    def advance(self, elapsed_ms: float) -> bool:
        """Add ``elapsed_ms`` and return ``True`` if a step is due."""

        if elapsed_ms > 0:
            self.accumulated_ms += elapsed_ms
        if self.accumulated_ms >= self._interval_ms:
            self.accumulated_ms = 0.0
            return True
        return False

    def reset(self) -> None:
        self.accumulated_ms = 0.0


__all__ = ["GravityClock"]

"""
Gravity timer for Tetrix.
The host loop owns the clock and feeds elapsed milliseconds in; the timer
turns that into gravity ticks. There is no thread, so a stopped timer can
never fire again.
"""

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class GravityTimer:
    """Fires a callback every ``interval_ms`` of elapsed game time while running."""

    def __init__(self, on_tick: Callable[[], None], interval_ms: int = 1000):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.on_tick = on_tick
        self._interval_ms = interval_ms
        self._elapsed_ms = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @interval_ms.setter
    def interval_ms(self, value: int):
        if value <= 0:
            raise ValueError(f"interval_ms must be positive, got {value}")
        self._interval_ms = value

    def start(self, interval_ms: Optional[int] = None):
        """Starts (or restarts) the timer from zero elapsed time."""
        if interval_ms is not None:
            self.interval_ms = interval_ms
        self._elapsed_ms = 0
        self._running = True
        logger.debug("Gravity timer started at %d ms", self._interval_ms)

    def stop(self) -> bool:
        """Stops the timer. Returns False if it was already stopped."""
        if not self._running:
            return False
        self._running = False
        self._elapsed_ms = 0
        logger.debug("Gravity timer stopped")
        return True

    def advance(self, elapsed_ms: int) -> int:
        """
        Adds elapsed time and fires any ticks that became due.
        Returns the number of ticks fired. A tick callback may stop the
        timer, in which case no further ticks fire.
        """
        if elapsed_ms < 0:
            raise ValueError(f"elapsed_ms cannot be negative, got {elapsed_ms}")
        if not self._running:
            return 0

        self._elapsed_ms += elapsed_ms
        ticks = 0
        while self._running and self._elapsed_ms >= self._interval_ms:
            self._elapsed_ms -= self._interval_ms
            ticks += 1
            self.on_tick()
        return ticks

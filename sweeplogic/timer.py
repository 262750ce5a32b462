"""Elapsed-time tracker driven by the board's game state."""

import time
from typing import Callable, Optional


class ElapsedTimer:
    """
    Wall-clock stopwatch started on the first reveal and stopped on game end.

    Nothing in the game logic reads the timer; it only exists so a front end
    can display how long the current game has been running.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    def start(self) -> None:
        """Start counting from zero."""
        self._started_at = self._clock()
        self._stopped_at = None

    def stop(self) -> None:
        """Freeze the elapsed time. No-op if the timer is not running."""
        if self.running:
            self._stopped_at = self._clock()

    def reset(self) -> None:
        """Stop the timer and set the elapsed time back to zero."""
        self._started_at = None
        self._stopped_at = None

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds elapsed, as shown by a game clock."""
        if self._started_at is None:
            return 0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return int(end - self._started_at)

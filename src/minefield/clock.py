"""
Elapsed-time clock for a single game.
"""
import time
from typing import Callable, Optional


class GameClock:
    """
    Stopwatch started by the first player action and stopped when the game
    ends.

    Args:
        time_source: Monotonic clock returning seconds.
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic) -> None:
        self._time_source = time_source
        self._started_at: Optional[float] = None
        self._stopped_at: Optional[float] = None

    def now(self) -> float:
        return self._time_source()

    def start(self) -> None:
        """Start the clock. Calling again while started has no effect."""
        if self._started_at is None:
            self._started_at = self._time_source()

    def stop(self) -> None:
        """Freeze the elapsed time."""
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = self._time_source()

    def reset(self) -> None:
        self._started_at = None
        self._stopped_at = None

    @property
    def started(self) -> bool:
        return self._started_at is not None

    @property
    def running(self) -> bool:
        return self.started and self._stopped_at is None

    @property
    def elapsed(self) -> float:
        """Seconds since start, frozen once stopped, 0.0 before start."""
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self._time_source()
        return end - self._started_at

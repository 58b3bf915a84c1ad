"""Time window that decides whether consecutive kills accrue."""

import threading
import time
from typing import Callable, Optional

from .constants import AirlinerConstants


class KillAccrualTimer:
    """Tracks the instant of the last kill.

    The window is active while less than ``window_ms`` has elapsed since
    the last recorded kill. Each kill re-arms the window from its own
    instant. Times come from ``clock`` (seconds, monotonic).
    """

    def __init__(self, window_ms: int = AirlinerConstants.ACCRUE_WINDOW_MS,
                 clock: Callable[[], float] = time.monotonic):
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        self._window_ms = window_ms
        self._clock = clock
        self._last_kill_instant: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def window_ms(self) -> int:
        return self._window_ms

    @property
    def last_kill_instant(self) -> Optional[float]:
        with self._lock:
            return self._last_kill_instant

    def now(self) -> float:
        return self._clock()

    def is_active(self, now: Optional[float] = None) -> bool:
        """True if a kill was recorded less than the window ago."""
        if now is None:
            now = self._clock()
        with self._lock:
            if self._last_kill_instant is None:
                return False
            if (now - self._last_kill_instant) * 1000 < self._window_ms:
                return True
            # Expired
            self._last_kill_instant = None
            return False

    def record_kill(self, now: Optional[float] = None):
        if now is None:
            now = self._clock()
        with self._lock:
            self._last_kill_instant = now

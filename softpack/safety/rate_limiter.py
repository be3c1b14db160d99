"""Fixed-window attempt limiter for login and registration"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Any

from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float


class RateLimiter:
    """
    Counts attempts per identifier inside fixed windows.

    A window opens on the first attempt for a key and closes window_seconds
    later; the next attempt after that opens a fresh window with count 1.
    Bursts straddling a window boundary can reach twice the nominal rate.

    Entries live only as long as this object and are never pruned; expired
    ones are simply overwritten on their next use.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self.entries: Dict[str, RateLimitEntry] = {}
        self.lock = Lock()

    def check_and_consume(self, key: str, max_requests: int, window_seconds: float) -> bool:
        """
        Record an attempt for key if it is still allowed

        Args:
            key: Identifier such as "login_<email>"
            max_requests: Attempts allowed per window
            window_seconds: Window length

        Returns:
            True if the attempt is allowed, False if the window is exhausted
        """
        with self.lock:
            now = self.clock()
            entry = self.entries.get(key)

            if entry is None or now > entry.reset_at:
                self.entries[key] = RateLimitEntry(count=1, reset_at=now + window_seconds)
                return True

            if entry.count >= max_requests:
                logger.debug("Rate limit hit", key=key, count=entry.count)
                return False

            entry.count += 1
            return True

    def get_statistics(self) -> Dict[str, Any]:
        """Get limiter statistics"""
        with self.lock:
            now = self.clock()
            active = {k: e for k, e in self.entries.items() if now <= e.reset_at}
            return {
                "tracked_keys": len(self.entries),
                "active_windows": len(active),
                "keys": {
                    k: {"count": e.count, "resets_in": round(e.reset_at - now, 3)}
                    for k, e in active.items()
                },
            }

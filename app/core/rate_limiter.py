import threading
import time


class InMemoryRateLimiter:
    """
    Fixed-window rate limiter keyed by client + path.
    State lives in this process only; a multi-instance deployment needs a shared store.
    """

    def __init__(self, clock=time.monotonic) -> None:
        self._lock = threading.Lock()
        self._clock = clock
        self._windows: dict[str, tuple[int, float]] = {}

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """
        Count one hit against ``key``. Returns (allowed, retry_after_seconds).
        """
        now = self._clock()
        with self._lock:
            hits, started = self._windows.get(key, (0, now))
            if now - started >= window_seconds:
                hits, started = 0, now
            if hits >= limit:
                return False, max(1, int(window_seconds - (now - started)))
            self._windows[key] = (hits + 1, started)
            return True, 0

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)


rate_limiter = InMemoryRateLimiter()

import threading
import time


class InMemoryRateLimiter:
    """
    Fixed-window request counter keyed by caller + path.
    State lives in this process only; multi-instance deployments need a shared store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._windows: dict[str, tuple[int, float]] = {}

    def allow(self, key: str, limit: int, window_seconds: int) -> tuple[bool, int]:
        """Count one request for key. Returns (allowed, retry_after_seconds)."""
        now = time.monotonic()
        with self._lock:
            count, started = self._windows.get(key, (0, now))
            elapsed = now - started
            if elapsed >= window_seconds:
                count, started, elapsed = 0, now, 0.0
            if count >= limit:
                return False, max(1, int(window_seconds - elapsed))
            self._windows[key] = (count + 1, started)
            return True, 0

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


rate_limiter = InMemoryRateLimiter()

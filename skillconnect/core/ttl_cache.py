import json
import threading
import time
from typing import Any


def make_key(method: str, params: dict | None = None) -> str:
    """Cache key of a call: method name plus its parameters as stable JSON."""
    return f"{method}:{json.dumps(params or {}, sort_keys=True, default=str)}"


class TTLCache:
    """
    In-process cache where every entry expires a fixed time after it was stored.
    Expired entries are dropped lazily on read.
    """

    def __init__(self, ttl_seconds: float) -> None:
        self.ttl_seconds = ttl_seconds
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[Any, float]] = {}

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if time.monotonic() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = (value, time.monotonic())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

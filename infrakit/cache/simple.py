"""String caches kept in memory or in Redis."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Optional, Union

log = logging.getLogger(__name__)

DEFAULT_GC_INTERVAL = 60.0
_SCAN_COUNT = 10

Expiration = Union[int, float, timedelta, None]


class KeyExpiredError(LookupError):
    """Raised when a cached key exists but has expired."""


class KeyNotExistError(LookupError):
    """Raised when a cached key does not exist."""


def _seconds(expiration: Expiration) -> float:
    if expiration is None:
        return 0.0
    if isinstance(expiration, timedelta):
        return expiration.total_seconds()
    return float(expiration)


@dataclass
class _Item:
    value: str
    created: float
    lifetime: float

    def expired(self, now: float) -> bool:
        if self.lifetime == 0:
            return False
        return now - self.created > self.lifetime


class MemoryCache:
    """In-process cache; an expiration of zero keeps an entry forever.

    A background thread drops expired entries every ``gc_interval`` seconds
    until :meth:`close` is called.
    """

    def __init__(
        self,
        gc_interval: float = DEFAULT_GC_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if gc_interval <= 0:
            raise ValueError("gc_interval must be positive")
        self._items: dict[str, _Item] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._stop = threading.Event()
        self._gc = threading.Thread(
            target=self._gc_loop, args=(gc_interval,), name="memory-cache-gc", daemon=True
        )
        self._gc.start()

    def __enter__(self) -> "MemoryCache":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _gc_loop(self, interval: float) -> None:
        while not self._stop.wait(interval):
            self.clear_expired()

    def is_exist(self, key: str) -> bool:
        with self._lock:
            item = self._items.get(key)
        return item is not None and not item.expired(self._clock())

    def get(self, key: str) -> str:
        """Return the value; raise KeyNotExistError or KeyExpiredError."""
        with self._lock:
            item = self._items.get(key)
        if item is None:
            raise KeyNotExistError(f"key not exist: {key}")
        if item.expired(self._clock()):
            raise KeyExpiredError(f"key expired: {key}")
        return item.value

    def put(self, key: str, value: str, expiration: Expiration = 0) -> None:
        item = _Item(value=value, created=self._clock(), lifetime=_seconds(expiration))
        with self._lock:
            self._items[key] = item

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def batch_delete(self, prefix: str) -> None:
        """Delete every key starting with ``prefix``."""
        with self._lock:
            for key in [key for key in self._items if key.startswith(prefix)]:
                del self._items[key]

    def clear_expired(self) -> None:
        """Drop every expired entry now."""
        now = self._clock()
        with self._lock:
            for key in [key for key, item in self._items.items() if item.expired(now)]:
                del self._items[key]

    def close(self) -> None:
        """Stop the background collector."""
        self._stop.set()
        if self._gc.is_alive() and self._gc is not threading.current_thread():
            self._gc.join()


class RedisCache:
    """Cache backed by a Redis client, with an optional key prefix."""

    def __init__(self, client: Any, key_prefix: str = "") -> None:
        self._client = client
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        if not self._key_prefix:
            return key
        return f"{self._key_prefix}:{key}"

    def is_exist(self, key: str) -> bool:
        """Return True when the key exists; client errors count as absent."""
        try:
            return int(self._client.exists(self._key(key))) > 0
        except Exception:  # the client's own error types are not known here
            return False

    def get(self, key: str) -> str:
        raw = self._client.get(self._key(key))
        if raw is None:
            raise KeyNotExistError(f"key not exist: {key}")
        if isinstance(raw, (bytes, bytearray)):
            return bytes(raw).decode("utf-8")
        return str(raw)

    def put(self, key: str, value: str, expiration: Expiration = 0) -> None:
        seconds = _seconds(expiration)
        if seconds > 0:
            self._client.set(self._key(key), value, px=int(seconds * 1000))
        else:
            self._client.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._client.delete(self._key(key))

    def batch_delete(self, prefix: str) -> None:
        """Delete keys matching ``prefix*`` (the prefix is used as given).

        Failed deletions are logged and skipped; the error of the very last
        deletion attempt, if any, is raised at the end.
        """
        cursor = 0
        last_error: Optional[Exception] = None
        while True:
            cursor, keys = self._client.scan(cursor=cursor, match=prefix + "*", count=_SCAN_COUNT)
            last_error = None
            for key in keys:
                try:
                    self._client.delete(key)
                    last_error = None
                except Exception as exc:
                    log.warning("failed to delete key: %s", key)
                    last_error = exc
            if int(cursor) == 0:
                break
        if last_error is not None:
            raise last_error


def new_cache(driver: str, redis_client: Any = None) -> Union[MemoryCache, RedisCache]:
    """Create a cache for the named driver: "memory" or "redis"."""
    if driver == "memory":
        return MemoryCache()
    if driver == "redis":
        if redis_client is None:
            raise ValueError("the redis cache driver needs a client")
        return RedisCache(redis_client)
    raise ValueError(f"unknown cache driver: {driver!r}")
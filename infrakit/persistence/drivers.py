"""Byte-oriented cache drivers kept in memory or in Redis."""

from __future__ import annotations

import abc
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Optional, Union

DEFAULT_GC_INTERVAL = 60.0
_SCAN_COUNT = 100

TTL = Union[int, float, timedelta, None]


def _ttl_seconds(ttl: TTL) -> float:
    if ttl is None:
        return 0.0
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


class CacheDriver(abc.ABC):
    """Storage for cached bytes; a missing key reads as None."""

    @abc.abstractmethod
    def exists(self, key: str) -> bool:
        """Return True when the key holds a live value."""

    @abc.abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the stored bytes, or None when absent."""

    @abc.abstractmethod
    def set(self, key: str, value: bytes, ttl: TTL = 0) -> None:
        """Store bytes; a ttl of zero or less keeps them forever."""

    @abc.abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key."""

    @abc.abstractmethod
    def scan_delete_by_prefix(self, prefix: str) -> None:
        """Remove every key starting with ``prefix``."""

    @abc.abstractmethod
    def incr(self, key: str) -> int:
        """Atomically add one to an integer value and return it."""


@dataclass
class _Item:
    value: bytes
    expire_at: Optional[float] = None

    def expired(self, now: float) -> bool:
        return self.expire_at is not None and now > self.expire_at


class MemoryDriver(CacheDriver):
    """In-process driver; a background thread drops expired keys until closed."""

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
            target=self._gc_loop, args=(gc_interval,), name="memory-driver-gc", daemon=True
        )
        self._gc.start()

    def __enter__(self) -> "MemoryDriver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _gc_loop(self, interval: float) -> None:
        while not self._stop.wait(interval):
            self.collect_expired()

    def _live(self, key: str) -> Optional[_Item]:
        with self._lock:
            item = self._items.get(key)
        if item is None or item.expired(self._clock()):
            return None
        return item

    def exists(self, key: str) -> bool:
        return self._live(key) is not None

    def get(self, key: str) -> Optional[bytes]:
        item = self._live(key)
        return None if item is None else item.value

    def set(self, key: str, value: bytes, ttl: TTL = 0) -> None:
        seconds = _ttl_seconds(ttl)
        expire_at = self._clock() + seconds if seconds > 0 else None
        with self._lock:
            self._items[key] = _Item(bytes(value), expire_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def scan_delete_by_prefix(self, prefix: str) -> None:
        with self._lock:
            for key in [key for key in self._items if key.startswith(prefix)]:
                del self._items[key]

    def incr(self, key: str) -> int:
        """Increment the stored integer; unparsable values count as zero.

        The new value never expires.
        """
        with self._lock:
            item = self._items.get(key)
            current = 0
            if item is not None and item.value:
                try:
                    current = int(item.value.decode("ascii"))
                except (UnicodeDecodeError, ValueError):
                    current = 0
            current += 1
            self._items[key] = _Item(str(current).encode("ascii"))
        return current

    def collect_expired(self) -> None:
        """Drop every expired key now."""
        now = self._clock()
        with self._lock:
            for key in [key for key, item in self._items.items() if item.expired(now)]:
                del self._items[key]

    def close(self) -> None:
        """Stop the background collector."""
        self._stop.set()
        if self._gc.is_alive() and self._gc is not threading.current_thread():
            self._gc.join()


class RedisDriver(CacheDriver):
    """Driver over a Redis client; every key is stored as ``<prefix>:<key>``."""

    def __init__(self, client: Any, key_prefix: str = "") -> None:
        self._client = client
        self._key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}:{key}"

    def exists(self, key: str) -> bool:
        return int(self._client.exists(self._key(key))) > 0

    def get(self, key: str) -> Optional[bytes]:
        raw = self._client.get(self._key(key))
        if raw is None:
            return None
        if isinstance(raw, (bytes, bytearray)):
            return bytes(raw)
        return str(raw).encode("utf-8")

    def set(self, key: str, value: bytes, ttl: TTL = 0) -> None:
        seconds = _ttl_seconds(ttl)
        if seconds > 0:
            self._client.set(self._key(key), value, px=int(seconds * 1000))
        else:
            self._client.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._client.delete(self._key(key))

    def scan_delete_by_prefix(self, prefix: str) -> None:
        cursor = 0
        pattern = self._key(prefix) + "*"
        while True:
            cursor, keys = self._client.scan(cursor=cursor, match=pattern, count=_SCAN_COUNT)
            if keys:
                self._client.delete(*keys)
            if int(cursor) == 0:
                break

    def incr(self, key: str) -> int:
        return int(self._client.incr(self._key(key)))
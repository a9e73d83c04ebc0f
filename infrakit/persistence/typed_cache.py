"""A value cache with tag-versioned invalidation and single-flight loading."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from infrakit.persistence.drivers import CacheDriver, MemoryDriver, RedisDriver
from infrakit.persistence.serializers import JSONSerializer, MsgpackSerializer, Serializer
from infrakit.persistence.singleflight import SingleFlight

T = TypeVar("T")

TTL = Union[int, float, timedelta, None]


def _seconds(ttl: TTL) -> float:
    if ttl is None:
        return 0.0
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


class TypedCache(Generic[T]):
    """Caches values of one type under a namespace.

    Keys carry the current version of each of their tags, so bumping a tag's
    version makes every entry that was stored with it unreachable.
    """

    def __init__(
        self,
        namespace: str,
        cache: CacheDriver,
        serializer: Optional[Serializer[T]] = None,
    ) -> None:
        self._ns = namespace.strip()
        self._cache = cache
        self._serializer: Serializer[T] = serializer if serializer is not None else JSONSerializer()
        self._flight: SingleFlight[T] = SingleFlight()
        self._default_ttl: TTL = 0

    @property
    def namespace(self) -> str:
        return self._ns

    @property
    def serializer(self) -> Serializer[T]:
        return self._serializer

    def with_serializer(self, serializer: Serializer[T]) -> "TypedCache[T]":
        self._serializer = serializer
        return self

    def with_default_ttl(self, ttl: TTL) -> "TypedCache[T]":
        self._default_ttl = ttl
        return self

    def _version_key(self, tag: str) -> str:
        return f"__cv:{self._ns}:tag:{tag}"

    def _build_key(self, base: str, tags: tuple[str, ...]) -> str:
        parts = [f"ns:{self._ns}", f"k:{base}"]
        for tag in sorted(tags):
            try:
                raw = self._cache.get(self._version_key(tag))
            except Exception:  # an unreadable version counts as version 0
                raw = None
            version = raw.decode("utf-8", errors="replace") if raw else "0"
            parts.append(f"t:{tag}:{version}")
        return "|".join(parts)

    def _ttl(self, ttl: TTL) -> TTL:
        return ttl if _seconds(ttl) > 0 else self._default_ttl

    def get(self, base: str, *args: str) -> tuple[Optional[T], bool]:
        """Return ``(value, True)`` on a hit and ``(None, False)`` on a miss."""
        raw = self._cache.get(self._build_key(base, args))
        if not raw:
            return None, False
        return self._serializer.decode(raw), True

    def set(self, base: str, value: T, ttl: TTL, *args: str) -> None:
        """Store a value; a ttl of zero or less uses the default TTL."""
        key = self._build_key(base, args)
        self._cache.set(key, self._serializer.encode(value), self._ttl(ttl))

    def delete(self, base: str, *args: str) -> None:
        self._cache.delete(self._build_key(base, args))

    def invalidate_tags(self, *args: str) -> None:
        """Bump the version of each tag, orphaning every entry stored with it."""
        for tag in args:
            self._cache.incr(self._version_key(tag))

    def batch_delete_by_prefix(self, prefix: str) -> None:
        """Delete every stored key starting with ``prefix``."""
        self._cache.scan_delete_by_prefix(prefix)

    def _read(self, key: str) -> Optional[bytes]:
        try:
            return self._cache.get(key)
        except Exception:  # read errors fall through to the loader
            return None

    def get_or_load(self, base: str, ttl: TTL, loader: Callable[[], T], *args: str) -> T:
        """Return the cached value, or load it once and store it.

        Concurrent misses for the same key share a single call to ``loader``;
        its exceptions propagate. Failures to store the loaded value are ignored.
        """
        key = self._build_key(base, args)
        raw = self._read(key)
        if raw:
            return self._serializer.decode(raw)

        def load() -> T:
            cached = self._read(key)
            if cached:
                return self._serializer.decode(cached)
            value = loader()
            try:
                self._cache.set(key, self._serializer.encode(value), self._ttl(ttl))
            except Exception:  # write-back is best effort
                pass
            return value

        return self._flight.do(key, load)


def new_cache_driver(
    driver_name: str, redis_client: Any = None, key_prefix: str = ""
) -> CacheDriver:
    """Create a driver: "redis" uses the given client, anything else is in memory."""
    if driver_name == "redis":
        if redis_client is None:
            raise ValueError("the redis cache driver needs a client")
        return RedisDriver(redis_client, key_prefix)
    return MemoryDriver()


def new_typed_cache_with(
    driver_name: str,
    namespace: str,
    ttl: TTL,
    use_msgpack: bool,
    redis_client: Any = None,
    key_prefix: str = "",
) -> TypedCache[Any]:
    """Build a TypedCache with a driver, an optional default TTL and a serializer."""
    cache: TypedCache[Any] = TypedCache(
        namespace, new_cache_driver(driver_name, redis_client, key_prefix)
    )
    if _seconds(ttl) > 0:
        cache.with_default_ttl(ttl)
    if use_msgpack:
        cache.with_serializer(MsgpackSerializer())
    return cache
"""Collapse concurrent calls for the same key into one."""

from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class _Call(Generic[T]):
    def __init__(self) -> None:
        self.done = threading.Event()
        self.result: Optional[T] = None
        self.error: Optional[BaseException] = None


class SingleFlight(Generic[T]):
    """Runs at most one function per key at a time; callers in between share its outcome."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call[T]] = {}

    def do(self, key: str, fn: Callable[[], T]) -> T:
        """Run ``fn`` for ``key``, or wait for the run already in progress.

        Every caller gets the same result, or the same exception is raised.
        """
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if leader:
                call = _Call()
                self._calls[key] = call
        if not leader:
            call.done.wait()
        else:
            try:
                call.result = fn()
            except BaseException as exc:
                call.error = exc
            finally:
                with self._lock:
                    if self._calls.get(key) is call:
                        del self._calls[key]
                call.done.set()
        if call.error is not None:
            raise call.error
        return call.result

    def forget(self, key: str) -> None:
        """Let the next call for ``key`` run anew instead of waiting."""
        with self._lock:
            self._calls.pop(key, None)
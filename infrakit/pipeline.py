"""A chain of steps run in order or concurrently, stopping at the first error."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional

Step = Callable[[], object]


class PipelineCancelled(Exception):
    """Raised when a pipeline is executed after it was cancelled."""


def _run_concurrently(steps: Iterable[Step], max_workers: int) -> None:
    steps = list(steps)
    if not steps:
        return
    errors: list[Exception] = []
    lock = threading.Lock()

    def guarded(step: Step) -> None:
        try:
            step()
        except Exception as exc:
            with lock:
                if not errors:
                    errors.append(exc)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        for step in steps:
            pool.submit(guarded, step)
    if errors:
        raise errors[0]


class Pipeline:
    """Collects steps that signal failure by raising."""

    def __init__(self, cancel_event: Optional[threading.Event] = None) -> None:
        self._cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self._steps: list[Step] = []

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    def then(self, *args: Step) -> "Pipeline":
        """Append steps and return the pipeline for chaining."""
        self._steps.extend(args)
        return self

    def cancel(self) -> None:
        """Mark the pipeline cancelled; later sequential runs stop before any step."""
        self._cancel_event.set()

    def execute(self) -> None:
        """Run the steps one after another, stopping at the first exception."""
        for step in self._steps:
            if self._cancel_event.is_set():
                raise PipelineCancelled("pipeline cancelled")
            step()

    def execute_parallel(self) -> None:
        """Run every step in its own thread and raise the first error.

        The pipeline is cancelled once the run finishes, as with a group
        bound to a context.
        """
        try:
            _run_concurrently(self._steps, max(len(self._steps), 1))
        finally:
            self.cancel()

    def execute_parallel_with_limit(self, limit: int) -> None:
        """Run steps concurrently, at most ``limit`` at a time; negative means no limit."""
        if limit == 0:
            raise ValueError("limit must not be zero")
        workers = limit if limit > 0 else max(len(self._steps), 1)
        _run_concurrently(self._steps, workers)
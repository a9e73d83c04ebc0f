"""Server that registers event handlers and runs the event consumer."""

from __future__ import annotations

from typing import Any, Iterable

from infrakit.event.consumer import ConsumerService


class EventServer:
    """Registers handlers with a consumer service and starts it."""

    def __init__(
        self, consumer_service: ConsumerService, handlers: Iterable[Any], enabled: bool = True
    ) -> None:
        self._consumer_service = consumer_service
        self._handlers = list(handlers)
        self._enabled = enabled

    def is_enabled(self) -> bool:
        return self._enabled

    def name(self) -> str:
        return "Event"

    def addr(self) -> str:
        return ""

    def start(self) -> None:
        """Subscribe every handler, then start consuming."""
        for handler in self._handlers:
            self._consumer_service.subscribe_handler(handler)
        self._consumer_service.start()

    def stop(self) -> None:
        self._consumer_service.stop()
"""Consumer service that dispatches queued events to registered handlers."""

from __future__ import annotations

import abc
import json
import logging
import re
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from infrakit.event.bus import Message
from infrakit.event.events import BaseDomainEvent, BaseEvent, EventError, Handler

_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|z|[+-]\d{2}:\d{2})"
)


class Consumer(abc.ABC):
    """Delivers queued messages to callbacks by topic."""

    @abc.abstractmethod
    def subscribe(self, topic: str, callback: Callable[[Message], None]) -> None:
        """Register a callback for a topic; raise on failure."""

    @abc.abstractmethod
    def close(self) -> None:
        """Stop delivering messages."""


@dataclass(frozen=True)
class _EventData:
    type: str
    timestamp: Optional[datetime]
    data: bytes
    aggregate_id: str
    aggregate_name: str


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError("timestamp must be a string")
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise ValueError(f"invalid timestamp: {value!r}")
    fraction = (match.group(2) or "")[:6].ljust(6, "0")
    zone = "+00:00" if match.group(3) in ("Z", "z") else match.group(3)
    return datetime.fromisoformat(f"{match.group(1)}.{fraction}{zone}")


def _parse_event_data(payload: Any) -> _EventData:
    raw = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
    decoded = json.loads(raw)
    if decoded is None:
        decoded = {}
    if not isinstance(decoded, dict):
        raise ValueError("event payload is not a JSON object")

    def text(name: str) -> str:
        value = decoded.get(name)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError(f"field {name!r} must be a string")
        return value

    stamp = decoded.get("timestamp")
    data = b""
    if "data" in decoded:
        data = json.dumps(decoded["data"], separators=(",", ":"), ensure_ascii=False).encode(
            "utf-8"
        )
    return _EventData(
        type=text("type"),
        timestamp=None if stamp is None else _parse_timestamp(stamp),
        data=data,
        aggregate_id=text("aggregate_id"),
        aggregate_name=text("aggregate_name"),
    )


def _create_event(event_type: str, data: _EventData) -> BaseEvent:
    if data.aggregate_id and data.aggregate_name:
        return BaseDomainEvent(
            type=event_type,
            timestamp=data.timestamp,
            data=data.data,
            agg_id=data.aggregate_id,
            agg_name=data.aggregate_name,
        )
    return BaseEvent(type=event_type, timestamp=data.timestamp, data=data.data)


class ConsumerService:
    """Subscribes handlers to their event types and feeds them decoded events."""

    def __init__(self, consumer: Consumer, logger: Optional[logging.Logger] = None) -> None:
        self._consumer = consumer
        self._handlers: dict[str, list[Handler]] = {}
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._lock = threading.RLock()

    def subscribe_handler(self, handler: Any) -> None:
        """Register a handler for each non-empty event type it declares."""
        if handler is None:
            raise EventError("handler cannot be nil")
        name = type(handler).__name__
        if not isinstance(handler, Handler):
            raise EventError(f"handler {name} does not implement EventHandler interface")
        with self._lock:
            interested = list(handler.interested_event_types() or [])
            if not interested:
                raise EventError(f"handler {name} must be interested in at least one event type")
            registered = 0
            for event_type in interested:
                if not event_type:
                    self._log.warning("Skipping empty event type for handler %s", name)
                    continue
                self._handlers.setdefault(event_type, []).append(handler)
                registered += 1
                self._log.info(
                    "Registered handler %s for event type %s (total %d)",
                    name, event_type, len(self._handlers[event_type]),
                )
            if registered == 0:
                raise EventError(f"no valid event types found for handler {name}")
        self._log.info("Handler %s registered for %d event types", name, registered)

    def start(self) -> None:
        """Subscribe to every event type that has handlers."""
        self._log.info("Starting event consumer service")
        with self._lock:
            event_types = list(self._handlers)
        if not event_types:
            self._log.warning("No event handlers registered, skipping consumer start")
            return
        for event_type in event_types:
            try:
                self._consumer.subscribe(event_type, self.handle_message)
            except Exception as exc:
                self._log.error("Failed to subscribe to event type %s: %s", event_type, exc)
                raise EventError(
                    f"failed to subscribe to event type {event_type}: {exc}"
                ) from exc
            self._log.info("Subscribed to event type %s", event_type)
        self._log.info("Event consumer service started with types %s", event_types)

    def stop(self) -> None:
        """Close the underlying consumer."""
        self._log.info("Stopping event consumer service")
        try:
            self._consumer.close()
        except Exception as exc:
            self._log.error("Failed to stop consumer: %s", exc)
            raise EventError(f"failed to stop consumer: {exc}") from exc
        self._log.info("Event consumer service stopped successfully")

    def handle_message(self, message: Message) -> None:
        """Decode a message and run every handler registered for its topic.

        All handlers run even when some fail; failures are then raised together
        as one EventError.
        """
        event_type = message.topic
        with self._lock:
            handlers = list(self._handlers.get(event_type, ()))
        if not handlers:
            self._log.warning("No handlers registered for event type %s", event_type)
            return
        try:
            data = _parse_event_data(message.payload)
        except (ValueError, TypeError) as exc:
            self._log.error("Failed to parse event data for %s: %s", event_type, exc)
            raise EventError(f"failed to parse event data: {exc}") from exc

        errors: list[Exception] = []
        for position, handler in enumerate(handlers):
            name = type(handler).__name__
            self._log.debug("Processing event %s with handler %d", event_type, position)
            try:
                handler.handle_typed_event(_create_event(event_type, data))
            except Exception as exc:
                self._log.error("Handler %s failed to process event %s: %s", name, event_type, exc)
                errors.append(
                    EventError(f"handler {name} failed to process event {event_type}: {exc}")
                )
        if errors:
            raise EventError(
                f"failed to process event {event_type} with {len(errors)} errors: "
                + "; ".join(str(error) for error in errors)
            ) from errors[0]
        self._log.debug("Event %s processed by %d handlers", event_type, len(handlers))

    def publish_event(self, event: Any) -> None:
        """Always raises: this service only consumes events."""
        raise EventError("ConsumerService does not support publishing events")
"""Event bus that publishes events through a message-queue producer."""

from __future__ import annotations

import abc
import dataclasses
import json
from datetime import date, datetime
from typing import Any

from infrakit.event.events import EventError


@dataclasses.dataclass(frozen=True)
class Message:
    """A message on the queue: a topic and its payload bytes."""

    topic: str
    payload: bytes


class Producer(abc.ABC):
    """Sends messages to the queue."""

    @abc.abstractmethod
    def send(self, message: Message) -> None:
        """Send one message; raise on failure."""


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"object of type {type(value).__name__} is not serializable")


def _encode(event: Any) -> bytes:
    to_dict = getattr(event, "to_dict", None)
    body = to_dict() if callable(to_dict) else event
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False, default=_default).encode(
        "utf-8"
    )


class MQEventBus:
    """Publishes events as JSON messages whose topic is the event type."""

    def __init__(self, producer: Producer) -> None:
        self._producer = producer

    def publish(self, event_type: str, event_data: bytes) -> None:
        """Send raw event bytes under the given event type."""
        self._producer.send(Message(topic=event_type, payload=bytes(event_data)))

    def publish_event(self, event: Any) -> None:
        """Encode an event as JSON and publish it under its event type.

        Raises EventError for objects without ``event_type()`` or that cannot
        be encoded.
        """
        event_type = getattr(event, "event_type", None)
        if not callable(event_type):
            raise EventError(f"unsupported event type: {type(event).__name__}")
        try:
            data = _encode(event)
        except (TypeError, ValueError) as exc:
            raise EventError(f"marshal event failed: {exc}") from exc
        self.publish(event_type(), data)

    def subscribe_handler(self, handler: Any) -> None:
        """Accept handlers that declare their event types; subscription happens in the consumer."""
        if not callable(getattr(handler, "interested_event_types", None)):
            raise EventError(f"unsupported handler type: {type(handler).__name__}")
"""Events, domain events, handler contract and typed payload parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

_ZERO_TIMESTAMP = "0001-01-01T00:00:00Z"


class EventError(Exception):
    """Raised when an event cannot be published, parsed or handled."""


@runtime_checkable
class Handler(Protocol):
    """Handles events of the types it declares interest in."""

    def handle_typed_event(self, event: Any) -> None:
        """Process one event; raise to report failure."""

    def interested_event_types(self) -> list[str]:
        """Return the event types this handler wants."""


def _format_timestamp(moment: Optional[datetime]) -> str:
    if moment is None:
        return _ZERO_TIMESTAMP
    return moment.isoformat()


def _json_value(data: Any) -> Any:
    if isinstance(data, (bytes, bytearray)):
        return json.loads(bytes(data)) if data else None
    return data


@dataclass(frozen=True)
class BaseEvent(Generic[T]):
    """An event with a type, the moment it occurred and a payload."""

    type: str
    timestamp: Optional[datetime]
    data: T

    def event_type(self) -> str:
        return self.type

    def occurred_at(self) -> Optional[datetime]:
        return self.timestamp

    def payload(self) -> T:
        return self.data

    def to_dict(self) -> dict[str, Any]:
        """Return the event as a JSON-ready mapping; raw JSON bytes are embedded."""
        return {
            "type": self.type,
            "timestamp": _format_timestamp(self.timestamp),
            "data": _json_value(self.data),
        }


@dataclass(frozen=True)
class BaseDomainEvent(BaseEvent[T]):
    """An event raised by an aggregate, identified by its id and name."""

    agg_id: str
    agg_name: str

    def aggregate_id(self) -> str:
        return self.agg_id

    def aggregate_name(self) -> str:
        return self.agg_name

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["aggregate_id"] = self.agg_id
        result["aggregate_name"] = self.agg_name
        return result


def new_event(event_type: str, data: T) -> BaseEvent[T]:
    """Create an event stamped with the current local time."""
    return BaseEvent(type=event_type, timestamp=datetime.now().astimezone(), data=data)


def new_domain_event(
    event_type: str, aggregate_id: str, aggregate_name: str, data: T
) -> BaseDomainEvent[T]:
    """Create a domain event stamped with the current local time."""
    return BaseDomainEvent(
        type=event_type,
        timestamp=datetime.now().astimezone(),
        data=data,
        agg_id=aggregate_id,
        agg_name=aggregate_name,
    )


class DomainEventHandler(Generic[T]):
    """Base for handlers that turn raw domain events into typed ones.

    ``factory``, when given, builds the payload from the decoded JSON value.
    """

    def __init__(self, factory: Optional[Callable[[Any], T]] = None) -> None:
        self._factory = factory

    def parse_domain_event(self, event: Any) -> BaseDomainEvent[T]:
        """Decode the raw JSON payload of a domain event.

        Raises EventError when the event is not a domain event with raw JSON
        data, or when the payload cannot be decoded.
        """
        if not isinstance(event, BaseDomainEvent) or not isinstance(
            event.data, (bytes, bytearray, str)
        ):
            raise EventError(
                f"expected BaseDomainEvent with raw JSON data, got {type(event).__name__}"
            )
        try:
            payload = json.loads(event.data)
            if self._factory is not None:
                payload = self._factory(payload)
        except (ValueError, TypeError, KeyError) as exc:
            raise EventError(f"failed to unmarshal event payload: {exc}") from exc
        return BaseDomainEvent(
            type=event.type,
            timestamp=event.timestamp,
            data=payload,
            agg_id=event.agg_id,
            agg_name=event.agg_name,
        )
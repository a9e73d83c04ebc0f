import json
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from infrakit.event.events import (
    BaseDomainEvent,
    BaseEvent,
    DomainEventHandler,
    EventError,
    Handler,
    new_domain_event,
    new_event,
)


def test_new_event_fields_and_timestamp():
    before = datetime.now().astimezone()
    event = new_event("user.created", {"id": 1})
    after = datetime.now().astimezone()
    assert event.event_type() == "user.created"
    assert event.payload() == {"id": 1}
    assert before <= event.occurred_at() <= after


def test_new_domain_event_aggregate():
    event = new_domain_event("user.created", "agg-1", "user", [1, 2])
    assert event.aggregate_id() == "agg-1"
    assert event.aggregate_name() == "user"
    assert event.payload() == [1, 2]
    assert isinstance(event, BaseEvent)


def test_to_dict_keys_and_roundtrip_timestamp():
    event = new_domain_event("t", "a", "n", {"k": "v"})
    data = event.to_dict()
    assert set(data) == {"type", "timestamp", "data", "aggregate_id", "aggregate_name"}
    assert datetime.fromisoformat(data["timestamp"]) == event.timestamp
    assert data["data"] == {"k": "v"}


def test_to_dict_embeds_raw_json_and_zero_time():
    event = BaseEvent(type="t", timestamp=None, data=b'{"a":1}')
    data = event.to_dict()
    assert data["data"] == {"a": 1}
    assert data["timestamp"] == "0001-01-01T00:00:00Z"


def test_parse_domain_event_decodes_payload():
    stamp = datetime(2024, 1, 2, tzinfo=timezone.utc)
    raw = BaseDomainEvent(
        type="order.paid", timestamp=stamp, data=json.dumps({"amount": 5}).encode(),
        agg_id="o1", agg_name="order",
    )
    parsed = DomainEventHandler().parse_domain_event(raw)
    assert parsed.data == {"amount": 5}
    assert (parsed.type, parsed.timestamp, parsed.agg_id, parsed.agg_name) == (
        "order.paid", stamp, "o1", "order",
    )


@dataclass
class Paid:
    amount: int


def test_parse_domain_event_with_factory():
    raw = BaseDomainEvent(type="t", timestamp=None, data=b'{"amount": 7}', agg_id="a", agg_name="n")
    parsed = DomainEventHandler(lambda value: Paid(**value)).parse_domain_event(raw)
    assert parsed.data == Paid(amount=7)


def test_parse_rejects_plain_event():
    with pytest.raises(EventError):
        DomainEventHandler().parse_domain_event(BaseEvent(type="t", timestamp=None, data=b"{}"))


def test_parse_rejects_bad_json():
    raw = BaseDomainEvent(type="t", timestamp=None, data=b"{not json", agg_id="a", agg_name="n")
    with pytest.raises(EventError):
        DomainEventHandler().parse_domain_event(raw)


def test_parse_rejects_empty_payload():
    raw = BaseDomainEvent(type="t", timestamp=None, data=b"", agg_id="a", agg_name="n")
    with pytest.raises(EventError):
        DomainEventHandler().parse_domain_event(raw)


def test_handler_protocol():
    class PaidHandler(DomainEventHandler):
        def handle_typed_event(self, event):
            return self.parse_domain_event(event)

        def interested_event_types(self):
            return ["order.paid"]

    handler = PaidHandler()
    raw = BaseDomainEvent(type="order.paid", timestamp=None, data=b'{"amount": 3}', agg_id="o1", agg_name="order")
    parsed = handler.handle_typed_event(raw)
    assert parsed.data == {"amount": 3}
    assert parsed.aggregate_id() == "o1"
    assert isinstance(handler, Handler)
    assert not isinstance(object(), Handler)
import pytest

from infrakit.event.consumer import Consumer, ConsumerService
from infrakit.event.events import EventError
from infrakit.server.event_server import EventServer
from infrakit.server.health import Server


class FakeConsumer(Consumer):
    def __init__(self):
        self.subscriptions = {}
        self.closed = False

    def subscribe(self, topic, callback):
        self.subscriptions[topic] = callback

    def close(self):
        self.closed = True


class Handler:
    def __init__(self, types):
        self.types = types

    def interested_event_types(self):
        return self.types

    def handle_typed_event(self, event):
        return None


def test_identity():
    server = EventServer(ConsumerService(FakeConsumer()), [], enabled=False)
    assert server.name() == "Event"
    assert server.addr() == ""
    assert server.is_enabled() is False
    assert isinstance(server, Server)


def test_start_registers_and_subscribes():
    consumer = FakeConsumer()
    server = EventServer(ConsumerService(consumer), [Handler(["a"]), Handler(["b", "a"])])
    server.start()
    assert sorted(consumer.subscriptions) == ["a", "b"]


def test_start_invalid_handler_stops_before_consuming():
    consumer = FakeConsumer()
    server = EventServer(ConsumerService(consumer), [Handler(["a"]), object()])
    with pytest.raises(EventError):
        server.start()
    assert consumer.subscriptions == {}


def test_stop_closes_consumer():
    consumer = FakeConsumer()
    EventServer(ConsumerService(consumer), []).stop()
    assert consumer.closed
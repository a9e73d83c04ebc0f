from dataclasses import dataclass

import pytest

from infrakit.persistence.serializers import JSONSerializer, MsgpackSerializer, Serializer


@dataclass
class Dto:
    name: str
    count: int


def test_json_encodes_compactly():
    assert JSONSerializer().encode({"a": 1}) == b'{"a":1}'


def test_json_round_trip_plain_value():
    serializer = JSONSerializer()
    value = {"name": "x", "items": [1, 2, 3], "nested": {"ok": True}}
    assert serializer.decode(serializer.encode(value)) == value


def test_json_round_trip_dataclass_with_factory():
    serializer = JSONSerializer(factory=lambda data: Dto(**data))
    value = Dto(name="alice", count=3)
    assert serializer.decode(serializer.encode(value)) == value


def test_json_decode_invalid_raises():
    with pytest.raises(ValueError):
        JSONSerializer().decode(b"{not json")


def test_json_encode_unsupported_raises():
    with pytest.raises(TypeError):
        JSONSerializer().encode(object())


def test_msgpack_wire_format():
    assert MsgpackSerializer().encode({"a": 1}) == b"\x81\xa1a\x01"


def test_msgpack_round_trip_dataclass_with_factory():
    serializer = MsgpackSerializer(factory=lambda data: Dto(**data))
    value = Dto(name="bob", count=7)
    assert serializer.decode(serializer.encode(value)) == value


def test_msgpack_round_trip_bytes_and_text():
    serializer = MsgpackSerializer()
    value = {"blob": b"\x00\x01", "text": "héllo"}
    assert serializer.decode(serializer.encode(value)) == value


def test_msgpack_decode_invalid_raises():
    with pytest.raises(ValueError):
        MsgpackSerializer().decode(b"\xc1")


def test_serializer_is_abstract():
    with pytest.raises(TypeError):
        Serializer()
"""Serializers that turn cached values into bytes and back."""

from __future__ import annotations

import abc
import dataclasses
import json
from typing import Any, Callable, Generic, Optional, TypeVar

import msgpack

T = TypeVar("T")

Factory = Optional[Callable[[Any], Any]]


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"object of type {type(value).__name__} is not serializable")


class Serializer(abc.ABC, Generic[T]):
    """Encodes values of one type to bytes and decodes them again."""

    @abc.abstractmethod
    def encode(self, value: T) -> bytes:
        """Turn a value into bytes."""

    @abc.abstractmethod
    def decode(self, data: bytes) -> T:
        """Turn bytes back into a value."""


class JSONSerializer(Serializer[T]):
    """Compact JSON; dataclasses are written as objects.

    ``factory``, when given, builds the result from the decoded JSON value.
    """

    def __init__(self, factory: Factory = None) -> None:
        self._factory = factory

    def encode(self, value: T) -> bytes:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_plain)
        return text.encode("utf-8")

    def decode(self, data: bytes) -> T:
        decoded = json.loads(bytes(data))
        return self._factory(decoded) if self._factory is not None else decoded


class MsgpackSerializer(Serializer[T]):
    """MessagePack; dataclasses are written as maps.

    ``factory``, when given, builds the result from the decoded value.
    """

    def __init__(self, factory: Factory = None) -> None:
        self._factory = factory

    def encode(self, value: T) -> bytes:
        return msgpack.packb(value, use_bin_type=True, default=_plain)

    def decode(self, data: bytes) -> T:
        decoded = msgpack.unpackb(bytes(data), raw=False)
        return self._factory(decoded) if self._factory is not None else decoded
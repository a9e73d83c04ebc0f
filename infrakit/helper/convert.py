"""Loose conversion of arbitrary values to strings and 64-bit integers."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1

_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DIGITS = re.compile(r"[0-9]+")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    number = Decimal(repr(value))
    if number == number.to_integral_value():
        return str(int(number))
    return format(number, "f")


def _text_of(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")


def _wrap_int64(number: int) -> int:
    return ((number - _INT64_MIN) % 2**64) + _INT64_MIN


def _truncate(value: float) -> int | None:
    if not math.isfinite(value):
        return None
    return math.trunc(value)


def iface_convert_string(data: Any) -> str:
    """Render a value as a string; unknown types are rendered as compact JSON."""
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    if isinstance(data, (bytes, bytearray)):
        return _text_of(data)
    if isinstance(data, bool):
        return "true" if data else "false"
    if isinstance(data, int):
        return str(data)
    if isinstance(data, float):
        return _format_float(data)
    try:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return ""


def _parse_signed(text: str) -> int:
    if not _SIGNED_DIGITS.fullmatch(text):
        return 0
    return max(_INT64_MIN, min(_INT64_MAX, int(text)))


def _parse_unsigned(text: str) -> int:
    if not _UNSIGNED_DIGITS.fullmatch(text):
        return 0
    return min(_UINT64_MAX, int(text))


def iface_convert_int64(data: Any) -> int:
    """Convert a value to a signed 64-bit integer.

    Strings are parsed in base 10 and clamped to the int64 range; unparsable
    strings and unsupported types give 0. Integers wrap, floats truncate.
    """
    if isinstance(data, str):
        return _parse_signed(data)
    if isinstance(data, (bytes, bytearray)):
        return _parse_signed(_text_of(data))
    if isinstance(data, bool):
        return 0
    if isinstance(data, int):
        return _wrap_int64(data)
    if isinstance(data, float):
        truncated = _truncate(data)
        return 0 if truncated is None else _wrap_int64(truncated)
    return 0


def iface_convert_uint64(data: Any) -> int:
    """Convert a value to an unsigned 64-bit integer.

    Strings must be plain decimal digits and are clamped to the uint64 range;
    anything else gives 0. Integers and truncated floats wrap modulo 2**64.
    """
    if isinstance(data, str):
        return _parse_unsigned(data)
    if isinstance(data, (bytes, bytearray)):
        return _parse_unsigned(_text_of(data))
    if isinstance(data, bool):
        return 0
    if isinstance(data, int):
        return data % 2**64
    if isinstance(data, float):
        truncated = _truncate(data)
        return 0 if truncated is None else truncated % 2**64
    return 0
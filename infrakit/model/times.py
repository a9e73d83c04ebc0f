"""Date and time value types with JSON and database conversions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional, Union

CST_HOUR = 8 * 3600

TIME_COMPACT_LAYOUT = "%Y%m%d%H%M%S"
TIME_DOT_LAYOUT = "%Y.%m.%d %H:%M:%S"
DATE_DOT_LAYOUT = "%Y.%m.%d"
DATE_COMPACT_LAYOUT = "%Y%m%d"
CHINESE_DATE_LAYOUT = "%Y年%m月%d日"
MONTH_LAYOUT = "%Y-%m"

_CLOCK_TEXT = re.compile(r"(\d{1,2}):(\d{2}):(\d{2})(?:[.,](\d+))?")
_DATE_TEXT = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_SECONDS_PER_DAY = 86400

Data = Union[bytes, bytearray, str]


def _raw(data: Data) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _format_date(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _format_clock(value: Union[time, datetime]) -> str:
    return f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"


def _parse_clock(text: str) -> time:
    match = _CLOCK_TEXT.fullmatch(text)
    if match is None:
        raise ValueError(f'cannot parse "{text}" as "15:04:05"')
    hour, minute, second = (int(part) for part in match.group(1, 2, 3))
    if hour > 23:
        raise ValueError(f'hour out of range in "{text}"')
    if minute > 59:
        raise ValueError(f'minute out of range in "{text}"')
    if second > 59:
        raise ValueError(f'second out of range in "{text}"')
    fraction = match.group(4) or ""
    micro = int(fraction[:6].ljust(6, "0")) if fraction else 0
    return time(hour, minute, second, micro)


def _parse_date(text: str) -> date:
    match = _DATE_TEXT.fullmatch(text)
    if match is None:
        raise ValueError(f'cannot parse "{text}" as "2006-01-02"')
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


@dataclass(frozen=True)
class JSONTime:
    """A timestamp rendered in JSON as ``"YYYY-MM-DD HH:MM:SS"``; None is the zero time."""

    value: Optional[datetime] = None

    @property
    def is_zero(self) -> bool:
        return self.value is None or self.value == datetime.min

    def to_json(self) -> bytes:
        """Encode as a JSON string; the zero time becomes an empty string."""
        if self.is_zero:
            return b'""'
        return f'"{_format_date(self.value)} {_format_clock(self.value)}"'.encode("utf-8")

    def to_db(self) -> Optional[datetime]:
        """Value for storage: NULL for the zero time."""
        return None if self.is_zero else self.value


@dataclass(frozen=True)
class JSONDate:
    """A date rendered in JSON as ``"YYYY-MM-DD"``; None is the zero date."""

    value: Optional[date] = None

    @property
    def is_zero(self) -> bool:
        return self.value is None or self.value in (date.min, datetime.min)

    def to_json(self) -> bytes:
        """Encode as a JSON string; the zero date becomes an empty string."""
        if self.is_zero:
            return b'""'
        return f'"{_format_date(self.value)}"'.encode("utf-8")

    def to_db(self) -> Optional[date]:
        """Value for storage: NULL for the zero date."""
        return None if self.is_zero else self.value


@dataclass(frozen=True)
class TimeOnly:
    """A time of day without a date."""

    value: time = time()

    def __str__(self) -> str:
        return _format_clock(self.value)

    def to_json(self) -> bytes:
        return f'"{self}"'.encode("utf-8")

    def to_db(self) -> str:
        return str(self)


def parse_json_time(data: Data) -> JSONTime:
    """Decode a JSON time-of-day string; an empty string gives the zero time.

    The date part of the result is the first day of year 1.
    """
    raw = _raw(data)
    if len(raw) == 2:
        return JSONTime()
    clock = _parse_clock(raw.decode("utf-8").strip('"'))
    return JSONTime(datetime.combine(date.min, clock))


def parse_json_date(data: Data) -> JSONDate:
    """Decode a JSON ``"YYYY-MM-DD"`` string; an empty string gives the zero date."""
    raw = _raw(data)
    if len(raw) == 2:
        return JSONDate()
    return JSONDate(_parse_date(raw.decode("utf-8").strip('"')))


def scan_json_time(value: object) -> JSONTime:
    """Build a JSONTime from a stored datetime."""
    if isinstance(value, datetime):
        return JSONTime(value)
    raise TypeError(f"can not convert {value!r} to timestamp")


def scan_json_date(value: object) -> JSONDate:
    """Build a JSONDate from a stored date or datetime."""
    if isinstance(value, date):
        return JSONDate(value)
    raise TypeError(f"can not convert {value!r} to timestamp")


def new_time_only(hour: int, minute: int, second: int) -> TimeOnly:
    """Build a time of day; values out of range wrap around the day."""
    total = (hour * 3600 + minute * 60 + second) % _SECONDS_PER_DAY
    return TimeOnly(time(total // 3600, total % 3600 // 60, total % 60))


def parse_time_only(text: str) -> TimeOnly:
    """Parse ``HH:MM:SS``; raises ValueError on malformed input."""
    return TimeOnly(_parse_clock(text))


def time_only_from_json(data: Data) -> Optional[TimeOnly]:
    """Decode a quoted JSON time of day; ``null`` gives None."""
    text = _raw(data).decode("utf-8")
    if text == "null":
        return None
    if len(text) < 2:
        raise ValueError(f"invalid JSON time value: {text!r}")
    return parse_time_only(text[1:-1])


def scan_time_only(value: object) -> Optional[TimeOnly]:
    """Build a TimeOnly from a stored string, bytes, datetime or time; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_time_only(value)
    if isinstance(value, (bytes, bytearray)):
        return parse_time_only(bytes(value).decode("utf-8"))
    if isinstance(value, datetime):
        return TimeOnly(value.time())
    if isinstance(value, time):
        return TimeOnly(value)
    raise TypeError(f"cannot scan {type(value).__name__} into TimeOnly")
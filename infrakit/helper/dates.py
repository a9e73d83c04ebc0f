"""Date and time helpers."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}")

_WEEK_SHORT = ("周一", "周二", "周三", "周四", "周五", "周六", "周日")
_WEEK_LONG = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


def is_today(moment: datetime) -> bool:
    """Return True when the moment's calendar day is today's local date."""
    now = datetime.now()
    return (moment.year, moment.month, moment.day) == (now.year, now.month, now.day)


def is_same_year(moment: datetime) -> bool:
    """Return True when the moment falls in the current local year."""
    return moment.year == datetime.now().year


def last_day_of_month(moment: datetime) -> datetime:
    """Return the final instant before 23:59:59 on the last day of the month.

    Aware datetimes are converted to local time first.
    """
    local = moment.astimezone() if moment.tzinfo is not None else moment
    last = calendar.monthrange(local.year, local.month)[1]
    end = datetime(local.year, local.month, last, 23, 59, 59, tzinfo=local.tzinfo)
    return end - timedelta(microseconds=1)


def month_days(moment: date) -> int:
    """Return the number of days in the moment's month."""
    return calendar.monthrange(moment.year, moment.month)[1]


def week_day(moment: date) -> int:
    """Return the weekday number, Monday being 1 and Sunday 7."""
    return moment.isoweekday()


def week_chinese_day(moment: date) -> str:
    """Return the short Chinese weekday name."""
    return _WEEK_SHORT[moment.isoweekday() - 1]


def week_chinese(moment: date) -> str:
    """Return the full Chinese weekday name."""
    return _WEEK_LONG[moment.isoweekday() - 1]


def duration_time(pre: datetime) -> timedelta:
    """Return the time elapsed since ``pre``."""
    return datetime.now(pre.tzinfo) - pre


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def resolve_time(seconds: int) -> tuple[int, int, int]:
    """Split a number of seconds into (hours, minutes, seconds)."""
    hour = _trunc_div(seconds, 3600)
    minute = _trunc_div(seconds - hour * 3600, 60)
    second = seconds - hour * 3600 - minute * 60
    return hour, minute, second


def calculate_age(birthday: str) -> str:
    """Return the age in whole years for a YYYY-MM-DD birthday, or "" if invalid."""
    if not birthday or not _DATE_ONLY.fullmatch(birthday):
        return ""
    try:
        born = date.fromisoformat(birthday)
    except ValueError:
        return ""
    today = date.today()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    if age < 0:
        return ""
    return str(age)
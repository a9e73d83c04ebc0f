"""Number helpers: bounded random integers, formatting and conditional choice."""

from __future__ import annotations

import random
from typing import Callable, TypeVar

T = TypeVar("T")

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def rand_area_num(low: int, high: int) -> int:
    """Return a random integer in the closed interval [low, high]."""
    if high < low:
        raise ValueError("high must not be less than low")
    return random.randint(low, high)


def big_number_thousand_format(num: int) -> str:
    """Format an integer with comma thousands separators."""
    if isinstance(num, bool) or not isinstance(num, int):
        raise TypeError(f"expected an integer, got {type(num).__name__}")
    return f"{num:,}"


def file_size_format(file_size: int) -> str:
    """Format a byte count using B, KB, MB, GB or TB."""
    if file_size == 0:
        return "0B"
    size = float(file_size)
    for position, unit in enumerate(_SIZE_UNITS):
        if size < 1024 or position == len(_SIZE_UNITS) - 1:
            if unit == "B":
                return f"{size:.0f}{unit}"
            return f"{size:.2f}{unit}"
        size /= 1024
    return f"{size:.2f}TB"


def ternary(condition: bool, true_value: T, false_value: T) -> T:
    """Return ``true_value`` if ``condition`` holds, else ``false_value``."""
    return true_value if condition else false_value


def ternary_func(condition: bool, true_func: Callable[[], T], false_func: Callable[[], T]) -> T:
    """Call and return only the branch selected by ``condition``."""
    return true_func() if condition else false_func()
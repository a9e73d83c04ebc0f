"""List helpers: membership, containment, symmetric difference and sampling."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def index_of(items: Sequence[T], item: T) -> int:
    """Return the position of ``item`` in ``items``, or -1 if absent."""
    try:
        return list(items).index(item)
    except ValueError:
        return -1


def contain(items: Sequence[T], item: T) -> bool:
    """Return True when ``item`` is in ``items``."""
    return item in items


def is_contain_slice(max_slice: Sequence[T], min_slice: Sequence[T]) -> bool:
    """Return True when every element of ``min_slice`` is in ``max_slice``."""
    return all(element in max_slice for element in min_slice)


def diff_slice(first: Sequence[T], last: Sequence[T]) -> list[T]:
    """Symmetric difference: items of ``last`` missing from ``first``, then the reverse."""
    return [item for item in last if item not in first] + [
        item for item in first if item not in last
    ]


def random_slice_unique(src: Sequence[T], n: int) -> list[T]:
    """Pick up to ``n`` elements from distinct positions of ``src`` at random."""
    if n <= 0:
        return []
    return random.sample(list(src), min(n, len(src)))
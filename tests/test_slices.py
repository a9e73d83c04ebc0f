from collections import Counter

from infrakit.helper.slices import (
    contain,
    diff_slice,
    index_of,
    is_contain_slice,
    random_slice_unique,
)


def test_index_of():
    items = ["a", "b", "c"]
    assert index_of(items, "c") == len(items) - 1
    assert index_of(items, "a") == 0
    assert index_of(items, "z") == -1


def test_contain():
    assert contain([1, 2, 3], 2) is True
    assert contain([1, 2, 3], 9) is False


def test_is_contain_slice():
    assert is_contain_slice([1, 2, 3, 4], [2, 4]) is True
    assert is_contain_slice([1, 2, 3, 4], [2, 5]) is False
    assert is_contain_slice([1, 2], []) is True


def test_diff_slice_order():
    assert diff_slice([1, 2, 3], [2, 3, 4]) == [4, 1]


def test_diff_slice_equal_sets_is_empty():
    assert diff_slice([1, 2], [2, 1]) == []


def test_random_slice_unique_picks_distinct_positions():
    src = list(range(20))
    picked = random_slice_unique(src, 5)
    assert len(picked) == 5
    assert len(set(picked)) == 5
    assert set(picked) <= set(src)


def test_random_slice_unique_caps_at_length():
    src = ["x", "x", "y"]
    picked = random_slice_unique(src, 10)
    assert Counter(picked) == Counter(src)


def test_random_slice_unique_non_positive():
    assert random_slice_unique([1, 2, 3], 0) == []
    assert random_slice_unique([1, 2, 3], -2) == []
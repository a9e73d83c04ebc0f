import pytest

from infrakit.helper.numbers import (
    big_number_thousand_format,
    file_size_format,
    rand_area_num,
    ternary,
    ternary_func,
)


def test_rand_area_num_within_bounds():
    seen = {rand_area_num(3, 6) for _ in range(500)}
    assert seen <= {3, 4, 5, 6}
    assert 3 in seen and 6 in seen


def test_rand_area_num_equal_bounds():
    assert rand_area_num(7, 7) == 7


def test_rand_area_num_invalid_range():
    with pytest.raises(ValueError):
        rand_area_num(5, 4)


def test_big_number_thousand_format():
    assert big_number_thousand_format(1234567) == "1,234,567"


def test_big_number_thousand_format_invariants():
    for value in (0, 12, 999, -98765432, 10**18):
        formatted = big_number_thousand_format(value)
        assert formatted.replace(",", "") == str(value)
        groups = formatted.lstrip("-").split(",")
        assert all(len(group) == 3 for group in groups[1:])


def test_big_number_thousand_format_rejects_float():
    with pytest.raises(TypeError):
        big_number_thousand_format(1.5)


def test_file_size_format_zero():
    assert file_size_format(0) == "0B"


def test_file_size_format_units():
    assert file_size_format(1024) == "1.00KB"
    assert file_size_format(1023) == "1023B"
    assert file_size_format(5 * 1024**2).endswith("MB")
    assert file_size_format(3 * 1024**3).endswith("GB")
    assert file_size_format(2048 * 1024**4).endswith("TB")
    assert file_size_format(2048 * 1024**4).startswith("2048")


def test_ternary():
    assert ternary(True, "yes", "no") == "yes"
    assert ternary(False, "yes", "no") == "no"


def test_ternary_func_is_lazy():
    def boom():
        raise AssertionError("should not be called")

    assert ternary_func(True, lambda: 10, boom) == 10
    assert ternary_func(False, boom, lambda: 20) == 20
import ipaddress
import math
from unittest import mock

import pytest

from infrakit.helper.misc import cartesian, get_local_ip, remove_markdown_link


class _FakeSocket:
    def __init__(self, *args, **kwargs):
        self.target = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def connect(self, address):
        self.target = address

    def getsockname(self):
        return ("192.0.2.10", 54321)


class _BrokenSocket(_FakeSocket):
    def connect(self, address):
        raise OSError("network unreachable")


def test_get_local_ip_uses_socket_name():
    with mock.patch("socket.socket", _FakeSocket):
        address = get_local_ip()
    assert address == "192.0.2.10"
    assert ipaddress.ip_address(address).version == 4


def test_get_local_ip_raises_on_failure():
    with mock.patch("socket.socket", _BrokenSocket):
        with pytest.raises(OSError):
            get_local_ip()


def test_cartesian_pinned():
    assert cartesian([[1, 2], [3]], "-") == ["1-3", "2-3"]


def test_cartesian_size_and_parts():
    data = [[1, 2, 3], [4, 5], [6, 7]]
    result = cartesian(data, "|")
    assert len(result) == math.prod(len(s) for s in data)
    assert len(set(result)) == len(result)
    for entry in result:
        parts = entry.split("|")
        assert len(parts) == len(data)
        for part, options in zip(parts, data):
            assert int(part) in options


def test_cartesian_default_delimiter():
    result = cartesian([[1], [2]], "")
    assert result == cartesian([[1], [2]], ",")
    assert all("," in entry for entry in result)


def test_cartesian_edge_cases():
    assert cartesian([], ",") == []
    assert cartesian([[]], ",") == []
    assert cartesian([[8, 9]], ",") == ["8", "9"]
    assert cartesian([[1, 2], []], ",") == []


def test_remove_markdown_link():
    assert remove_markdown_link("see [docs](https://example.com) now") == "see  now"
    assert remove_markdown_link("no links here") == "no links here"
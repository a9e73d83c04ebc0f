"""Assorted helpers: local address discovery, cartesian products, markdown cleanup."""

from __future__ import annotations

import itertools
import re
import socket
from typing import Sequence

_MARKDOWN_LINK = re.compile(r"\[.*?\(.*?\)")


def get_local_ip() -> str:
    """Return the local IP address used for outbound traffic.

    A UDP socket is connected (no packets are sent) to learn which interface
    the system would route through. Raises OSError when that fails.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.connect(("8.8.8.8", 80))
        return sock.getsockname()[0]


def cartesian(data: Sequence[Sequence[int]], delimiter: str = ",") -> list[str]:
    """Join every combination of one element from each set with ``delimiter``."""
    if not delimiter:
        delimiter = ","
    if not data:
        return []
    return [delimiter.join(str(part) for part in combo) for combo in itertools.product(*data)]


def remove_markdown_link(markdown: str) -> str:
    """Strip markdown hyperlinks of the form ``[text](target)``."""
    return _MARKDOWN_LINK.sub("", markdown)
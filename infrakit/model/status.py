"""Two-valued status stored as 0 or 1."""

from __future__ import annotations

from enum import IntEnum


class BinaryStatus(IntEnum):
    """A yes/no flag: 0 means no, 1 means yes."""

    FALSE = 0
    TRUE = 1

    def to_bool(self) -> bool:
        """Return True for TRUE."""
        return self > 0


def binary_status_by_bool(status: bool) -> BinaryStatus:
    """Build a status from a boolean."""
    return BinaryStatus.TRUE if status else BinaryStatus.FALSE


def binary_status_by_uint(status: int) -> BinaryStatus:
    """Build a status from an integer: anything above zero is TRUE."""
    return BinaryStatus.TRUE if status > 0 else BinaryStatus.FALSE
"""Message digests of strings, byte strings and files."""

from __future__ import annotations

import hashlib
import os
from typing import Union

_CHUNK_SIZE = 64 * 1024

PathLike = Union[str, "os.PathLike[str]"]


def md5(content: str) -> str:
    """Return the hexadecimal MD5 digest of a UTF-8 string."""
    return hashlib.md5(content.encode("utf-8")).hexdigest()


def sha256(content: bytes) -> bytes:
    """Return the raw 32-byte SHA-256 digest of ``content``."""
    return hashlib.sha256(bytes(content)).digest()


def _file_digest(filename: PathLike, algorithm: str) -> str:
    hasher = hashlib.new(algorithm)
    with open(filename, "rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def file_md5(filename: PathLike) -> str:
    """Return the hexadecimal MD5 digest of a file's contents.

    Raises OSError when the file cannot be opened.
    """
    return _file_digest(filename, "md5")


def file_sha1(filename: PathLike) -> str:
    """Return the hexadecimal SHA-1 digest of a file's contents.

    Raises OSError when the file cannot be opened.
    """
    return _file_digest(filename, "sha1")
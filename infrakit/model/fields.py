"""Database value conversions for JSON arrays, raw JSON and encrypted text."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Iterable, Optional, Union

from infrakit.crypto import aes
from infrakit.helper.strings import RandomStringMode, random_string

_JSON_WHITESPACE = b" \t\r\n"
_SECRET_LENGTH = 16


def array_to_db(items: Optional[Iterable[Any]]) -> bytes:
    """Encode a list as compact JSON; None becomes ``null``."""
    value = None if items is None else list(items)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def array_from_db(value: bytes) -> list:
    """Decode a JSON array stored as bytes; ``null`` gives an empty list."""
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"expected bytes, got {type(value).__name__}")
    decoded = json.loads(bytes(value))
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise ValueError("stored JSON value is not an array")
    return decoded


def json_to_db(raw: Union[bytes, str, None]) -> Optional[bytes]:
    """Return raw JSON unchanged for storage; empty input is stored as NULL."""
    if not raw:
        return None
    return raw.encode("utf-8") if isinstance(raw, str) else bytes(raw)


def json_from_db(value: bytes) -> bytes:
    """Validate stored JSON bytes and return them trimmed of outer whitespace."""
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"Failed to unmarshal JSONB value:{value!r}")
    data = bytes(value)
    json.loads(data)
    return data.strip(_JSON_WHITESPACE)


def crypto_to_db(text: str) -> str:
    """Encrypt text with a fresh random AES key and IV packed into the result."""
    key = random_string(_SECRET_LENGTH, RandomStringMode.ALPHANUMERIC)
    iv = random_string(_SECRET_LENGTH, RandomStringMode.ALPHANUMERIC)
    ciphertext = aes.encrypt(text.encode("utf-8"), key.encode("ascii"), iv.encode("ascii"))
    key_iv = (key + "." + iv).encode("ascii")
    inner = base64.b64encode(ciphertext) + b"." + base64.b64encode(key_iv)
    return base64.b64encode(inner).decode("ascii")


def _b64(data: bytes) -> Optional[bytes]:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return None


def crypto_from_db(value: Union[bytes, str, None]) -> Optional[str]:
    """Decrypt a value written by :func:`crypto_to_db`.

    Returns None when the value is missing, empty or cannot be decoded.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.encode("ascii", errors="replace")
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"expected bytes, got {type(value).__name__}")
    if not value:
        return None
    outer = _b64(bytes(value))
    if outer is None:
        return None
    parts = outer.split(b".")
    if len(parts) != 2:
        return None
    key_iv = _b64(parts[1])
    if key_iv is None:
        return None
    secrets = key_iv.split(b".")
    if len(secrets) != 2:
        return None
    ciphertext = _b64(parts[0])
    if ciphertext is None:
        return None
    try:
        plain = aes.decrypt(ciphertext, secrets[0], secrets[1])
    except ValueError:
        return None
    return plain.decode("utf-8", errors="replace")
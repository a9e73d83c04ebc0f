"""String helpers: password hashing, random strings, masking and encoding."""

from __future__ import annotations

import secrets
import string
import time
from datetime import datetime
from enum import IntEnum

import bcrypt

_NUMBERS = string.digits
_LETTERS = string.ascii_lowercase + string.ascii_uppercase
_ALPHANUMERIC = _LETTERS + _NUMBERS
_COMPLEX = _ALPHANUMERIC + "!@#$%^&*()_+-=[],./;<>?"

_BCRYPT_MIN_COST = 4


class RandomStringMode(IntEnum):
    """Character set used by :func:`random_string`."""

    NUMBER = 0
    LETTER = 1
    ALPHANUMERIC = 2
    COMPLEX = 3


_CHARSETS = {
    RandomStringMode.NUMBER: _NUMBERS,
    RandomStringMode.LETTER: _LETTERS,
    RandomStringMode.ALPHANUMERIC: _ALPHANUMERIC,
    RandomStringMode.COMPLEX: _COMPLEX,
}


def generate_password(password: str) -> str:
    """Hash a plain-text password with bcrypt at minimum cost."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=_BCRYPT_MIN_COST))
    return hashed.decode("ascii")


def verify_password(hashed_password: str, plain_password: str) -> bool:
    """Return True when the plain password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def random_string(length: int, mode: RandomStringMode = RandomStringMode.COMPLEX) -> str:
    """Build a random string of ``length`` characters from the mode's charset."""
    if length <= 0:
        raise ValueError("length must be greater than 0")
    try:
        charset = _CHARSETS[RandomStringMode(mode)]
    except ValueError:
        charset = _COMPLEX
    return "".join(secrets.choice(charset) for _ in range(length))


def random_number_string(length: int) -> str:
    """Build a random string of decimal digits."""
    return random_string(length, RandomStringMode.NUMBER)


def gbk_to_utf8(data: bytes) -> bytes:
    """Convert GBK-encoded bytes to UTF-8; invalid sequences become U+FFFD."""
    return bytes(data).decode("gbk", errors="replace").encode("utf-8")


def utf8_to_gbk(data: bytes) -> bytes:
    """Convert UTF-8 bytes to GBK; raises UnicodeError on unencodable text."""
    return bytes(data).decode("utf-8").encode("gbk")


def create_order_no() -> str:
    """Create an order number: timestamp, 7 nanosecond digits, 6 random digits."""
    stamp = datetime.now().strftime("%Y%m%d%H%M%S")
    nanos = str(time.time_ns())[-9:][:7]
    return stamp + nanos + random_number_string(6)


def replace_string(text: str, find: list[str], replace: list[str]) -> str:
    """Replace each ``find[i]`` with ``replace[i]`` in turn.

    The text is returned unchanged when the two lists differ in length.
    """
    if len(find) != len(replace):
        return text
    for old, new in zip(find, replace):
        text = text.replace(old, new)
    return text


def hide_cellphone(cellphone: str) -> str:
    """Mask the middle four digits of a phone number."""
    if len(cellphone) > 7:
        return cellphone[:3] + "****" + cellphone[7:]
    if len(cellphone) > 3:
        return cellphone[:3] + "****"
    if cellphone:
        return "****"
    return cellphone


def hide_email(email: str) -> str:
    """Mask the local part of an e-mail address, keeping its first character."""
    if not email:
        return ""
    parts = email.split("@")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return email[:1] + "****"
    local, domain = parts
    return local[:1] + "****@" + domain


def mask_cred_no(cred_no: str) -> str:
    """Mask an identity number except its first and last four characters."""
    if len(cred_no) < 8:
        return cred_no
    return cred_no[:4] + "*" * (len(cred_no) - 8) + cred_no[-4:]


def hide_real_name(name: str) -> str:
    """Mask the middle of a personal name."""
    if len(name) < 2:
        return name
    if len(name) > 2:
        return name[0] + "*" + name[-1]
    return name[0] + "*"
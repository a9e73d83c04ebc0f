"""RSA PKCS#1 v1.5 signatures over SHA-256 with PEM-encoded keys."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Union

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, utils
from cryptography.hazmat.primitives.asymmetric import rsa as _rsa

from infrakit.crypto.digest import sha256

_PEM_BLOCK = re.compile(rb"-----BEGIN ([^\r\n-]*)-----\r?\n(.*?)-----END \1-----", re.S)
_PEM_HEADER = re.compile(rb"^[A-Za-z-]+:.*$", re.M)

Text = Union[str, bytes]


class KeyFormatError(ValueError):
    """Raised when a key is not a readable PEM block of the expected kind."""


def _as_bytes(value: Text) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def _pem_body(pem: Text, message: str) -> bytes:
    match = _PEM_BLOCK.search(_as_bytes(pem))
    if match is None:
        raise KeyFormatError(message)
    body = b"".join(_PEM_HEADER.sub(b"", match.group(2)).split())
    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as exc:
        raise KeyFormatError(message) from exc


def sign(content: Text, private_key: Text) -> str:
    """Sign ``content`` with a PKCS#8 PEM RSA private key; return base64 text."""
    der = _pem_body(private_key, "private_key error")
    key = serialization.load_der_private_key(der, password=None)
    if not isinstance(key, _rsa.RSAPrivateKey):
        raise KeyFormatError("private_key is not an RSA key")
    digest = sha256(_as_bytes(content))
    signature = key.sign(digest, padding.PKCS1v15(), utils.Prehashed(hashes.SHA256()))
    return base64.b64encode(signature).decode("ascii")


def check(content: Text, signature: str, public_key: Text) -> bool:
    """Verify a base64 signature against a PKIX PEM RSA public key.

    Returns True on success; raises cryptography's InvalidSignature when the
    signature does not match and ValueError when it is not valid base64.
    """
    der = _pem_body(public_key, "public_key error")
    key = serialization.load_der_public_key(der)
    if not isinstance(key, _rsa.RSAPublicKey):
        raise KeyFormatError("public_key is not an RSA key")
    digest = sha256(_as_bytes(content))
    data = base64.b64decode(_as_bytes(signature), validate=True)
    key.verify(data, digest, padding.PKCS1v15(), utils.Prehashed(hashes.SHA256()))
    return True
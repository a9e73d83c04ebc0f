"""AES in CBC mode with PKCS#7 padding."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

BLOCK_SIZE = 16


def pkcs7_padding(data: bytes, block_size: int) -> bytes:
    """Pad ``data`` to a multiple of ``block_size`` as PKCS#7 prescribes."""
    padding = block_size - len(data) % block_size
    return bytes(data) + bytes([padding]) * padding


def pkcs7_unpadding(data: bytes, block_size: int) -> bytes:
    """Strip the padding length named by the last byte of ``data``.

    Raises ValueError when ``data`` is empty or the padding is longer than it.
    """
    if not data:
        raise ValueError("cannot unpad empty data")
    padding = data[-1]
    if padding > len(data):
        raise ValueError("invalid padding length")
    return bytes(data[: len(data) - padding])


def _cipher(key: bytes, iv: bytes) -> Cipher:
    return Cipher(algorithms.AES(bytes(key)), modes.CBC(bytes(iv)))


def encrypt(plain_text: bytes, key: bytes, iv: bytes) -> bytes:
    """Encrypt with AES-CBC after PKCS#7 padding.

    Raises ValueError for a key that is not 16, 24 or 32 bytes or an IV that
    is not one block long.
    """
    padded = pkcs7_padding(bytes(plain_text), BLOCK_SIZE)
    encryptor = _cipher(key, iv).encryptor()
    return encryptor.update(padded) + encryptor.finalize()


def decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Decrypt AES-CBC data and strip its PKCS#7 padding."""
    if len(ciphertext) % BLOCK_SIZE:
        raise ValueError("ciphertext is not a multiple of the block size")
    decryptor = _cipher(key, iv).decryptor()
    plain = decryptor.update(bytes(ciphertext)) + decryptor.finalize()
    return pkcs7_unpadding(plain, BLOCK_SIZE)
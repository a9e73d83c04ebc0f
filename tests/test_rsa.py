import base64

import pytest
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.hazmat.primitives.asymmetric import rsa as crypto_rsa

from infrakit.crypto.rsa import KeyFormatError, check, sign


@pytest.fixture(scope="module")
def key_pair():
    key = crypto_rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()
    return private_pem, public_pem


def test_sign_and_check_round_trip(key_pair):
    private_pem, public_pem = key_pair
    signature = sign("order=1&amount=100", private_pem)
    assert check("order=1&amount=100", signature, public_pem) is True


def test_signature_is_deterministic_base64(key_pair):
    private_pem, _ = key_pair
    first = sign("content", private_pem)
    second = sign("content", private_pem)
    assert first == second
    assert len(base64.b64decode(first)) == 256


def test_tampered_content_fails(key_pair):
    private_pem, public_pem = key_pair
    signature = sign("content", private_pem)
    with pytest.raises(InvalidSignature):
        check("other content", signature, public_pem)


def test_bad_private_pem_raises():
    with pytest.raises(KeyFormatError):
        sign("content", "not a pem block")


def test_bad_public_pem_raises(key_pair):
    private_pem, _ = key_pair
    signature = sign("content", private_pem)
    with pytest.raises(KeyFormatError):
        check("content", signature, "not a pem block")


def test_invalid_base64_signature_raises(key_pair):
    _, public_pem = key_pair
    with pytest.raises(ValueError):
        check("content", "***", public_pem)


def test_non_rsa_private_key_rejected():
    other = ed25519.Ed25519PrivateKey.generate()
    pem = other.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    with pytest.raises(KeyFormatError):
        sign("content", pem)
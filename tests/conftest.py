"""Shared fixtures."""

import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
)


@pytest.fixture(scope="session")
def rsa_private_key():
    """A 2048-bit RSA key for v1 secret keys."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_der(rsa_private_key):
    """The RSA key as PKCS#8 DER."""
    return rsa_private_key.private_bytes(Encoding.DER, PrivateFormat.PKCS8, NoEncryption())


@pytest.fixture(scope="session")
def rsa_pem(rsa_private_key):
    """The RSA key as PKCS#8 PEM."""
    return rsa_private_key.private_bytes(Encoding.PEM, PrivateFormat.PKCS8, NoEncryption())

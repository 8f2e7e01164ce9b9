"""PASETO key objects that can be wrapped and unwrapped."""

import hmac
from dataclasses import dataclass, field
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    PublicFormat,
    load_der_private_key,
    load_pem_private_key,
)

from .types import (
    ED25519_SECRET_KEY_SIZE,
    ED25519_SEED_SIZE,
    P384_SECRET_KEY_SIZE,
    SYMMETRIC_KEY_SIZE,
    InvalidKeyError,
    WrapPurpose,
)
from .versions import ProtocolVersion


@dataclass(frozen=True)
class SymmetricKey:
    """A symmetric key for local (encrypted) PASETO tokens."""
    raw: bytes = field(repr=False)
    version: ProtocolVersion

    def __post_init__(self) -> None:
        raw = bytes(self.raw)
        if len(raw) != SYMMETRIC_KEY_SIZE:
            raise InvalidKeyError(
                f"Symmetric key must be {SYMMETRIC_KEY_SIZE} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "raw", raw)


@dataclass(frozen=True)
class AsymmetricSecretKey:
    """
    A secret key for public (signed) PASETO tokens.

    Raw material is validated against the key family of the version:
    - v2/v4: Ed25519, stored as seed || public key (64 bytes). A bare
      32-byte seed is expanded on construction.
    - v3: P-384, a 48-byte big-endian scalar.
    - v1: RSA, a DER or PEM encoded private key.
    """
    raw: bytes = field(repr=False)
    version: ProtocolVersion

    def __post_init__(self) -> None:
        family = self.version.secret_key_family
        raw = bytes(self.raw)

        if family == "ed25519":
            raw = _normalize_ed25519(raw)
        elif family == "p384":
            _load_p384(raw)
        elif family == "rsa":
            _load_rsa(raw)
        else:
            raise InvalidKeyError(f"Unsupported secret key family: {family}")

        object.__setattr__(self, "raw", raw)

    def public_key_bytes(self) -> bytes:
        """
        Derive the public key for this secret key.

        Returns:
            Raw Ed25519 public key (v2/v4), compressed P-384 point (v3),
            or DER SubjectPublicKeyInfo (v1)
        """
        family = self.version.secret_key_family
        if family == "ed25519":
            return self.raw[ED25519_SEED_SIZE:]
        if family == "p384":
            return _load_p384(self.raw).public_key().public_bytes(
                Encoding.X962, PublicFormat.CompressedPoint
            )
        return _load_rsa(self.raw).public_key().public_bytes(
            Encoding.DER, PublicFormat.SubjectPublicKeyInfo
        )


Key = Union[SymmetricKey, AsymmetricSecretKey]


def key_purpose(key: Key) -> WrapPurpose:
    """Return the wrap purpose matching a key variant."""
    if isinstance(key, SymmetricKey):
        return WrapPurpose.LOCAL
    if isinstance(key, AsymmetricSecretKey):
        return WrapPurpose.SECRET
    raise TypeError(f"Unsupported key type: {type(key).__name__}")


def _normalize_ed25519(raw: bytes) -> bytes:
    """Expand a seed, or check the public half of a full secret key."""
    if len(raw) not in (ED25519_SEED_SIZE, ED25519_SECRET_KEY_SIZE):
        raise InvalidKeyError(
            f"Ed25519 secret key must be {ED25519_SEED_SIZE} or "
            f"{ED25519_SECRET_KEY_SIZE} bytes, got {len(raw)}"
        )

    seed = raw[:ED25519_SEED_SIZE]
    public = Ed25519PrivateKey.from_private_bytes(seed).public_key().public_bytes_raw()

    if len(raw) == ED25519_SECRET_KEY_SIZE and not hmac.compare_digest(
        raw[ED25519_SEED_SIZE:], public
    ):
        raise InvalidKeyError("Ed25519 public key does not match seed")

    return seed + public


def _load_p384(raw: bytes) -> ec.EllipticCurvePrivateKey:
    if len(raw) != P384_SECRET_KEY_SIZE:
        raise InvalidKeyError(
            f"P-384 secret key must be {P384_SECRET_KEY_SIZE} bytes, got {len(raw)}"
        )
    try:
        return ec.derive_private_key(int.from_bytes(raw, "big"), ec.SECP384R1())
    except ValueError as e:
        raise InvalidKeyError(f"Invalid P-384 secret key: {e}") from e


def _load_rsa(raw: bytes) -> rsa.RSAPrivateKey:
    loader = load_pem_private_key if raw.lstrip().startswith(b"-----") else load_der_private_key
    try:
        private_key = loader(raw, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InvalidKeyError(f"Invalid RSA secret key: {e}") from e

    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise InvalidKeyError("v1 secret keys must be RSA private keys")
    return private_key

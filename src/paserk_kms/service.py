"""
Envelope-encryption services used to wrap key material.

A service encrypts and decrypts raw bytes under a key it holds, binding an
encryption context that must be supplied again, unchanged, to decrypt.
"""

import hashlib
import hmac
import json
import os
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .types import ConfigurationError, ServiceError


class EnvelopeService(ABC):
    """Interface for an envelope-encryption service such as a KMS."""

    @abstractmethod
    def encrypt(self, key_id: str, plaintext: bytes, context: Mapping[str, str]) -> bytes:
        """Encrypt plaintext under key_id, bound to context."""
        ...

    @abstractmethod
    def decrypt(self, key_id: str, ciphertext: bytes, context: Mapping[str, str]) -> bytes:
        """Decrypt ciphertext under key_id; context must match encryption."""
        ...


class AwsKmsService(EnvelopeService):
    """
    AWS KMS backed envelope service.

    Errors raised by the KMS client (access denied, unknown key, context
    mismatch) propagate unchanged.

    Example usage:
        ```python
        service = AwsKmsService.from_region("us-west-2")
        blob = service.encrypt(key_arn, raw, {"PaserkHeader": header})
        ```
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> None:
        """
        Create a KMS service.

        Args:
            client: A boto3 KMS client. Built lazily from region/profile when
                    not given.
            region: AWS region for the lazily built client.
            profile: AWS shared-credentials profile for the lazily built client.
        """
        self._client = client
        self._region = region
        self._profile = profile

    @classmethod
    def from_region(cls, region: Optional[str], profile: Optional[str] = None) -> "AwsKmsService":
        """
        Create a service whose boto3 client is built on first use.

        Args:
            region: AWS region, or None for the boto3 default.
            profile: AWS shared-credentials profile (optional).

        Returns:
            AwsKmsService
        """
        return cls(region=region, profile=profile)

    def _get_client(self) -> Any:
        if self._client is not None:
            return self._client
        try:
            import boto3
        except ImportError as e:  # pragma: no cover - environment-specific import
            raise ConfigurationError("AWS SDK not available. Install boto3.") from e

        session = boto3.session.Session(profile_name=self._profile, region_name=self._region)
        self._client = session.client("kms")
        return self._client

    def encrypt(self, key_id: str, plaintext: bytes, context: Mapping[str, str]) -> bytes:
        response = self._get_client().encrypt(
            KeyId=key_id,
            Plaintext=plaintext,
            EncryptionContext=dict(context),
        )
        return response["CiphertextBlob"]

    def decrypt(self, key_id: str, ciphertext: bytes, context: Mapping[str, str]) -> bytes:
        response = self._get_client().decrypt(
            KeyId=key_id,
            CiphertextBlob=ciphertext,
            EncryptionContext=dict(context),
        )
        return response["Plaintext"]


class LocalEnvelopeService(EnvelopeService):
    """
    In-process envelope service (for development and testing).

    Each key id gets its own key-encryption key, derived from the master key
    with HMAC-SHA256. Plaintext is sealed with AES-256-GCM using the canonical
    JSON of the encryption context as associated data, so decrypting with a
    different context fails just as it does with a real KMS.

    WARNING: The master key lives in process memory. Do not use this in
    place of a managed KMS in production.

    Ciphertext format:
        [0..11]  nonce (12 bytes)
        [12..]   AES-GCM ciphertext + 16-byte tag
    """

    MASTER_KEY_SIZE = 32
    NONCE_SIZE = 12
    TAG_SIZE = 16

    def __init__(self, master_key: Optional[bytes] = None) -> None:
        """
        Create a local service.

        Args:
            master_key: 32-byte master key. A random one is generated if not
                        given, so ciphertexts only decrypt within this instance.
        """
        if master_key is None:
            master_key = os.urandom(self.MASTER_KEY_SIZE)
        if len(master_key) != self.MASTER_KEY_SIZE:
            raise ConfigurationError(
                f"Master key must be {self.MASTER_KEY_SIZE} bytes, got {len(master_key)}"
            )
        self._master_key = bytes(master_key)

    def encrypt(self, key_id: str, plaintext: bytes, context: Mapping[str, str]) -> bytes:
        nonce = os.urandom(self.NONCE_SIZE)
        aesgcm = AESGCM(self._derive_kek(key_id))
        return nonce + aesgcm.encrypt(nonce, plaintext, _canonical_context(context))

    def decrypt(self, key_id: str, ciphertext: bytes, context: Mapping[str, str]) -> bytes:
        if len(ciphertext) < self.NONCE_SIZE + self.TAG_SIZE:
            raise ServiceError(f"Ciphertext too short: {len(ciphertext)} bytes")

        nonce, sealed = ciphertext[: self.NONCE_SIZE], ciphertext[self.NONCE_SIZE :]
        aesgcm = AESGCM(self._derive_kek(key_id))
        try:
            return aesgcm.decrypt(nonce, sealed, _canonical_context(context))
        except InvalidTag as e:
            raise ServiceError(
                "Decryption failed - wrong key id, mismatched context or corrupted data"
            ) from e

    def _derive_kek(self, key_id: str) -> bytes:
        return hmac.new(self._master_key, key_id.encode("utf-8"), hashlib.sha256).digest()


def _canonical_context(context: Mapping[str, str]) -> bytes:
    return json.dumps(dict(context), separators=(",", ":"), sort_keys=True).encode("utf-8")

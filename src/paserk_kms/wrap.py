"""
KMS-backed key wrapping for PASERK.

Wrapped tokens have the form:

    <version>.<purpose>-wrap.<method>.<base64url ciphertext>

The first three fields plus a trailing dot form the header. The header is
bound into the service's encryption context under ``PaserkHeader``, so a
token whose header was altered after wrapping cannot be decrypted.
"""

import logging
from typing import Dict, Mapping, Optional, Tuple

from .encoding import b64url_decode, b64url_encode, constant_time_equals
from .header import TokenFields, header_of, parse_token
from .keys import AsymmetricSecretKey, Key, SymmetricKey
from .service import EnvelopeService
from .types import (
    PASERK_HEADER_CONTEXT_KEY,
    WRAP_METHOD_ID,
    PaserkError,
    UnknownWrapPurposeError,
    VersionMismatchError,
    WrapPurpose,
    WrongWrapMethodError,
)
from .versions import ProtocolVersion, get_version

logger = logging.getLogger(__name__)


class KmsWrap:
    """
    Wraps and unwraps PASETO keys with an envelope-encryption service.

    An instance expects a single protocol version and rejects tokens for any
    other, so a key wrapped for one version is never reinterpreted under
    another.

    Instances are safe to share across threads if the service is.
    set_encryption_context() is the only mutator; do not call it while
    wrap or unwrap calls are in flight.

    Example usage:
        ```python
        engine = KmsWrap(AwsKmsService(region="us-west-2"), V4, key_arn)
        header = build_header(V4, WrapPurpose.LOCAL, KmsWrap.custom_id())
        token = engine.wrap_key(header, key)
        assert engine.unwrap_key(token) == key
        ```
    """

    WRAP_METHOD_ID = WRAP_METHOD_ID

    def __init__(
        self,
        service: EnvelopeService,
        protocol: ProtocolVersion,
        key_id: str,
        encryption_context: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Create a wrapping engine.

        Args:
            service: Envelope-encryption service holding the wrapping key.
            protocol: The protocol version tokens must declare.
            key_id: Service key identifier (e.g. a KMS key ARN).
            encryption_context: Default context entries sent with every call.
        """
        self.service = service
        self.key_id = key_id
        self._protocol = protocol
        self._encryption_context: Dict[str, str] = dict(encryption_context or {})

    @classmethod
    def custom_id(cls) -> str:
        """The wrap method identifier written into every token."""
        return cls.WRAP_METHOD_ID

    @property
    def protocol(self) -> ProtocolVersion:
        """The protocol version this engine accepts."""
        return self._protocol

    @property
    def encryption_context(self) -> Dict[str, str]:
        """A copy of the default encryption context."""
        return dict(self._encryption_context)

    def set_encryption_context(
        self, encryption_context: Optional[Mapping[str, str]] = None
    ) -> "KmsWrap":
        """
        Replace the default encryption context.

        The previous defaults are discarded, not merged. Not safe to call
        concurrently with wrap_key/unwrap_key.

        Args:
            encryption_context: New default context, or None to clear it.

        Returns:
            This engine, for chaining
        """
        self._encryption_context = dict(encryption_context or {})
        return self

    def wrap_key(self, header: str, key: Key) -> str:
        """
        Wrap a key's raw bytes under the service key.

        Args:
            header: Token header built for this key (see build_header)
            key: Key to wrap

        Returns:
            The wrapped token, header included
        """
        logger.debug("Wrapping key with header %s under %s", header, self.key_id)
        ciphertext = self.service.encrypt(self.key_id, key.raw, self._context(header))
        return header + b64url_encode(ciphertext)

    def unwrap_key(self, token: str) -> Key:
        """
        Unwrap a token produced by wrap_key.

        Args:
            token: Wrapped token

        Returns:
            SymmetricKey for local-wrap tokens, AsymmetricSecretKey for
            secret-wrap tokens

        Raises:
            MalformedTokenError: If the token does not have four fields
            UnknownVersionError: If the version header is unknown
            VersionMismatchError: If the token is for another protocol version
            WrongWrapMethodError: If the token was made by another wrap method
            InvalidEncodingError: If the payload is not unpadded base64url
            UnknownWrapPurposeError: If the purpose field is not recognised
        """
        try:
            fields, version, ciphertext = self._validate(token)
        except PaserkError as e:
            logger.debug("Rejected wrapped key: %s", type(e).__name__)
            raise

        header = header_of(fields)
        logger.debug("Unwrapping key with header %s under %s", header, self.key_id)
        plaintext = self.service.decrypt(self.key_id, ciphertext, self._context(header))

        # Once decrypted, build the key for the declared purpose
        if constant_time_equals(fields.purpose, WrapPurpose.LOCAL.tag):
            return SymmetricKey(plaintext, version)
        if constant_time_equals(fields.purpose, WrapPurpose.SECRET.tag):
            return AsymmetricSecretKey(plaintext, version)

        logger.debug("Rejected wrapped key: unknown purpose")
        raise UnknownWrapPurposeError(fields.purpose)

    def _validate(self, token: str) -> Tuple[TokenFields, ProtocolVersion, bytes]:
        fields = parse_token(token)
        version = get_version(fields.version)

        if not constant_time_equals(self._protocol.header, version.header):
            raise VersionMismatchError(self._protocol.header, version.header)

        if not constant_time_equals(fields.method, self.custom_id()):
            raise WrongWrapMethodError(self.custom_id())

        return fields, version, b64url_decode(fields.payload)

    def _context(self, header: str) -> Dict[str, str]:
        # Always set the PaserkHeader key last
        context = dict(self._encryption_context)
        context[PASERK_HEADER_CONTEXT_KEY] = header
        return context

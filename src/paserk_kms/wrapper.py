"""High-level local/secret wrapping on top of a KMS wrap engine."""

from .encoding import constant_time_equals
from .header import build_header, parse_token
from .keys import AsymmetricSecretKey, Key, SymmetricKey, key_purpose
from .types import (
    UnknownWrapPurposeError,
    VersionMismatchError,
    WrapPurpose,
    WrongKeyTypeError,
)
from .wrap import KmsWrap


class Wrapper:
    """
    Wraps PASETO keys by purpose.

    Chooses the header from the key variant, checks the key belongs to the
    engine's protocol version before anything is sent to the service, and
    checks unwrapped keys have the variant the caller asked for.

    Example usage:
        ```python
        wrapper = Wrapper(KmsWrap(service, V4, key_arn))
        token = wrapper.local_wrap(SymmetricKey(raw, V4))
        key = wrapper.local_unwrap(token)
        ```
    """

    def __init__(self, engine: KmsWrap) -> None:
        self.engine = engine

    def local_wrap(self, key: SymmetricKey) -> str:
        """Wrap a symmetric key as a ``local-wrap`` token."""
        if not isinstance(key, SymmetricKey):
            raise WrongKeyTypeError("SymmetricKey", type(key).__name__)
        return self._wrap(WrapPurpose.LOCAL, key)

    def secret_wrap(self, key: AsymmetricSecretKey) -> str:
        """Wrap an asymmetric secret key as a ``secret-wrap`` token."""
        if not isinstance(key, AsymmetricSecretKey):
            raise WrongKeyTypeError("AsymmetricSecretKey", type(key).__name__)
        return self._wrap(WrapPurpose.SECRET, key)

    def local_unwrap(self, token: str) -> SymmetricKey:
        """Unwrap a ``local-wrap`` token into a symmetric key."""
        key = self._unwrap(WrapPurpose.LOCAL, token)
        if not isinstance(key, SymmetricKey):
            raise WrongKeyTypeError("SymmetricKey", type(key).__name__)
        return key

    def secret_unwrap(self, token: str) -> AsymmetricSecretKey:
        """Unwrap a ``secret-wrap`` token into an asymmetric secret key."""
        key = self._unwrap(WrapPurpose.SECRET, token)
        if not isinstance(key, AsymmetricSecretKey):
            raise WrongKeyTypeError("AsymmetricSecretKey", type(key).__name__)
        return key

    def wrap(self, key: Key) -> str:
        """Wrap any supported key, choosing the purpose from its type."""
        if key_purpose(key) is WrapPurpose.LOCAL:
            return self.local_wrap(key)
        return self.secret_wrap(key)

    def unwrap(self, token: str) -> Key:
        """Unwrap a token of either purpose."""
        return self.engine.unwrap_key(token)

    def _wrap(self, purpose: WrapPurpose, key: Key) -> str:
        expected = self.engine.protocol
        if not constant_time_equals(expected.header, key.version.header):
            raise VersionMismatchError(expected.header, key.version.header)

        header = build_header(key.version, purpose, self.engine.custom_id())
        return self.engine.wrap_key(header, key)

    def _unwrap(self, purpose: WrapPurpose, token: str) -> Key:
        fields = parse_token(token)
        if not constant_time_equals(fields.purpose, purpose.tag):
            raise UnknownWrapPurposeError(fields.purpose)
        return self.engine.unwrap_key(token)

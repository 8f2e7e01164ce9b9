"""Type definitions and constants for PASERK KMS key wrapping."""

from enum import Enum


# Protocol constants
WRAP_METHOD_ID = "pie"
PASERK_HEADER_CONTEXT_KEY = "PaserkHeader"
TOKEN_FIELD_COUNT = 4
WRAP_SUFFIX = "-wrap"

# Key sizes
SYMMETRIC_KEY_SIZE = 32
ED25519_SEED_SIZE = 32
ED25519_SECRET_KEY_SIZE = 64
P384_SECRET_KEY_SIZE = 48


class WrapPurpose(Enum):
    """Which key variant a wrapped token carries."""
    LOCAL = "local"
    SECRET = "secret"

    @property
    def tag(self) -> str:
        """The token field for this purpose, e.g. ``local-wrap``."""
        return self.value + WRAP_SUFFIX


# Exception types
class PaserkError(Exception):
    """Base exception for PASERK wrapping errors."""
    pass


class MalformedTokenError(PaserkError):
    """Token does not have the four-field dotted shape."""

    def __init__(self, field_count: int) -> None:
        self.field_count = field_count
        super().__init__(
            f"Wrapped key must have {TOKEN_FIELD_COUNT} fields, got {field_count}"
        )


class InvalidEncodingError(PaserkError):
    """Payload is not valid unpadded base64url."""
    pass


class UnknownVersionError(PaserkError):
    """Version header is not a known protocol version."""

    def __init__(self, header: str) -> None:
        self.header = header
        super().__init__(f"Unknown protocol version: {header!r}")


class VersionMismatchError(PaserkError):
    """Token was wrapped for a different protocol version."""

    def __init__(self, expected: str, given: str) -> None:
        self.expected = expected
        self.given = given
        super().__init__("Invalid key version.")


class WrongWrapMethodError(PaserkError):
    """Token was not produced by this wrapping scheme."""

    def __init__(self, method_id: str) -> None:
        self.method_id = method_id
        super().__init__(
            f"Key is not wrapped with the {method_id!r} key-wrapping protocol"
        )


class UnknownWrapPurposeError(PaserkError):
    """Purpose field is not a known wrap purpose."""

    def __init__(self, purpose: str) -> None:
        self.purpose = purpose
        super().__init__(f"Unknown wrapping type: {purpose}")


class WrongKeyTypeError(PaserkError):
    """Key is not the variant the operation requires."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected}, got {actual}")


class ServiceError(PaserkError):
    """Envelope-encryption service rejected the request."""
    pass


class InvalidKeyError(PaserkError):
    """Raw key material is not valid for its protocol version."""
    pass


class ConfigurationError(PaserkError):
    """Wrapping configuration is missing or invalid."""
    pass

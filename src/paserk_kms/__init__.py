"""
paserk-kms - PASERK key wrapping with an envelope-encryption service

Python implementation of the PASERK KMS wrap operation: PASETO keys are
encrypted by a KMS with the token header bound into the encryption context.
"""

from .types import (
    WRAP_METHOD_ID,
    PASERK_HEADER_CONTEXT_KEY,
    WrapPurpose,
    PaserkError,
    MalformedTokenError,
    InvalidEncodingError,
    UnknownVersionError,
    VersionMismatchError,
    WrongWrapMethodError,
    UnknownWrapPurposeError,
    ServiceError,
    WrongKeyTypeError,
    InvalidKeyError,
    ConfigurationError,
)
from .versions import ProtocolVersion, V1, V2, V3, V4, get_version, all_versions
from .keys import SymmetricKey, AsymmetricSecretKey, Key, key_purpose
from .encoding import b64url_encode, b64url_decode, constant_time_equals
from .header import TokenFields, build_header, parse_token, header_of, is_wrapped_token
from .service import EnvelopeService, AwsKmsService, LocalEnvelopeService
from .wrap import KmsWrap
from .wrapper import Wrapper
from .config import KmsWrapConfig

__version__ = "0.1.0"

__all__ = [
    # Constants
    "WRAP_METHOD_ID",
    "PASERK_HEADER_CONTEXT_KEY",
    "WrapPurpose",
    # Errors
    "PaserkError",
    "MalformedTokenError",
    "InvalidEncodingError",
    "UnknownVersionError",
    "VersionMismatchError",
    "WrongWrapMethodError",
    "UnknownWrapPurposeError",
    "ServiceError",
    "WrongKeyTypeError",
    "InvalidKeyError",
    "ConfigurationError",
    # Versions
    "ProtocolVersion",
    "V1",
    "V2",
    "V3",
    "V4",
    "get_version",
    "all_versions",
    # Keys
    "SymmetricKey",
    "AsymmetricSecretKey",
    "Key",
    "key_purpose",
    # Encoding
    "b64url_encode",
    "b64url_decode",
    "constant_time_equals",
    # Header
    "TokenFields",
    "build_header",
    "parse_token",
    "header_of",
    "is_wrapped_token",
    # Services
    "EnvelopeService",
    "AwsKmsService",
    "LocalEnvelopeService",
    # Wrapping
    "KmsWrap",
    "Wrapper",
    # Config
    "KmsWrapConfig",
]

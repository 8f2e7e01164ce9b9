"""Base64url and comparison helpers for wrapped tokens."""

import base64
import binascii
import hmac
import re
from typing import Union

from .types import InvalidEncodingError


_B64URL_PATTERN = re.compile(r"\A[A-Za-z0-9_-]*\Z")


def b64url_encode(data: bytes) -> str:
    """Encode bytes as base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """
    Decode unpadded base64url, strictly.

    Args:
        text: Unpadded base64url string

    Returns:
        Decoded bytes

    Raises:
        InvalidEncodingError: If the text has padding, characters outside the
            URL-safe alphabet, an impossible length, or non-zero trailing bits
    """
    if not _B64URL_PATTERN.match(text):
        raise InvalidEncodingError("Payload is not unpadded base64url")
    if len(text) % 4 == 1:
        raise InvalidEncodingError(f"Invalid base64url length: {len(text)}")

    padded = text + "=" * (-len(text) % 4)
    try:
        decoded = base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncodingError(f"Invalid base64url payload: {e}") from e

    # Reject encodings whose unused trailing bits are set
    if b64url_encode(decoded) != text:
        raise InvalidEncodingError("Non-canonical base64url payload")

    return decoded


def constant_time_equals(a: Union[str, bytes], b: Union[str, bytes]) -> bool:
    """Compare two strings or byte strings without short-circuiting."""
    if isinstance(a, str):
        a = a.encode("utf-8", "surrogatepass")
    if isinstance(b, str):
        b = b.encode("utf-8", "surrogatepass")
    return hmac.compare_digest(a, b)

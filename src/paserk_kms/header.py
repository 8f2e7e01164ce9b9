"""Header building and token parsing for wrapped PASERK keys."""

from typing import NamedTuple, Union

from .types import TOKEN_FIELD_COUNT, WRAP_SUFFIX, MalformedTokenError, WrapPurpose
from .versions import ProtocolVersion


class TokenFields(NamedTuple):
    """The four dot-separated fields of a wrapped token."""
    version: str  # e.g. "v4"
    purpose: str  # e.g. "local-wrap"
    method: str  # wrap method identifier
    payload: str  # unpadded base64url ciphertext


def build_header(
    version: ProtocolVersion,
    purpose: Union[WrapPurpose, str],
    method_id: str,
) -> str:
    """
    Build the header that prefixes a wrapped token.

    Format:
        <version>.<purpose>-wrap.<method_id>.

    Args:
        version: Protocol version of the key being wrapped
        purpose: Wrap purpose, as an enum member or its plain value
        method_id: Wrap method identifier

    Returns:
        Header string, including the trailing dot
    """
    if isinstance(purpose, WrapPurpose):
        purpose = purpose.value
    return f"{version.header}.{purpose}{WRAP_SUFFIX}.{method_id}."


def parse_token(token: str) -> TokenFields:
    """
    Split a wrapped token into its fields.

    Field contents are not validated here.

    Args:
        token: Wrapped token string

    Returns:
        TokenFields

    Raises:
        MalformedTokenError: If the token does not have exactly four fields
    """
    pieces = token.split(".")
    if len(pieces) != TOKEN_FIELD_COUNT:
        raise MalformedTokenError(len(pieces))
    return TokenFields(*pieces)


def header_of(fields: TokenFields) -> str:
    """Rebuild the header exactly as it was bound at wrap time."""
    return ".".join(fields[:3]) + "."


def is_wrapped_token(token: str) -> bool:
    """
    Check if a string has the shape of a wrapped token.

    Args:
        token: String to check

    Returns:
        True if the string has four fields and a ``-wrap`` purpose
    """
    pieces = token.split(".")
    if len(pieces) != TOKEN_FIELD_COUNT:
        return False
    return pieces[1].endswith(WRAP_SUFFIX)

"""PASETO protocol versions known to the wrapper."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .types import UnknownVersionError


@dataclass(frozen=True)
class ProtocolVersion:
    """A PASETO protocol version, identified by its header string."""
    header: str  # e.g. "v4"
    secret_key_family: str = field(compare=False)  # "rsa", "ed25519" or "p384"

    def __str__(self) -> str:
        return self.header


V1 = ProtocolVersion(header="v1", secret_key_family="rsa")
V2 = ProtocolVersion(header="v2", secret_key_family="ed25519")
V3 = ProtocolVersion(header="v3", secret_key_family="p384")
V4 = ProtocolVersion(header="v4", secret_key_family="ed25519")

_VERSIONS: Dict[str, ProtocolVersion] = {v.header: v for v in (V1, V2, V3, V4)}


def get_version(header: str) -> ProtocolVersion:
    """
    Resolve a version header to its protocol version.

    Args:
        header: Version field of a token, e.g. "v4"

    Returns:
        The matching ProtocolVersion

    Raises:
        UnknownVersionError: If the header names no known version
    """
    version = _VERSIONS.get(header)
    if version is None:
        raise UnknownVersionError(header)
    return version


def all_versions() -> Tuple[ProtocolVersion, ...]:
    """All supported protocol versions, oldest first."""
    return tuple(_VERSIONS.values())

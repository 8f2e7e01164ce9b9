"""Tests for protocol versions."""

import pytest

from paserk_kms.types import UnknownVersionError
from paserk_kms.versions import V1, V2, V3, V4, ProtocolVersion, all_versions, get_version


class TestGetVersion:
    """Resolving version headers."""

    @pytest.mark.parametrize("version", [V1, V2, V3, V4])
    def test_known(self, version) -> None:
        assert get_version(version.header) is version

    @pytest.mark.parametrize("header", ["v5", "V4", "v4 ", "", "k4"])
    def test_unknown(self, header) -> None:
        with pytest.raises(UnknownVersionError) as exc_info:
            get_version(header)

        assert exc_info.value.header == header

    def test_all_versions(self) -> None:
        assert all_versions() == (V1, V2, V3, V4)


class TestEquality:
    """Versions compare by header."""

    def test_equal_headers(self) -> None:
        assert ProtocolVersion("v4", "ed25519") == V4
        assert V4 != V2
        assert str(V3) == "v3"

    def test_only_header_compared(self) -> None:
        """Versions with the same header are equal."""
        assert ProtocolVersion("v4", "p384") == V4
        assert hash(ProtocolVersion("v4", "p384")) == hash(V4)

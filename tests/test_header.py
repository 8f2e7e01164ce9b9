"""Tests for header building and token parsing."""

import pytest

from paserk_kms.header import (
    TokenFields,
    build_header,
    header_of,
    is_wrapped_token,
    parse_token,
)
from paserk_kms.types import MalformedTokenError, WrapPurpose
from paserk_kms.versions import V3, V4


class TestBuildHeader:
    """Header construction."""

    def test_local_header(self) -> None:
        assert build_header(V4, WrapPurpose.LOCAL, "pie") == "v4.local-wrap.pie."

    def test_secret_header(self) -> None:
        assert build_header(V3, WrapPurpose.SECRET, "pie") == "v3.secret-wrap.pie."

    def test_plain_string_purpose(self) -> None:
        assert build_header(V4, "local", "aws-kms") == "v4.local-wrap.aws-kms."


class TestParseToken:
    """Token parsing."""

    def test_four_fields(self) -> None:
        fields = parse_token("v4.local-wrap.pie.AAAA")

        assert fields == TokenFields("v4", "local-wrap", "pie", "AAAA")
        assert fields.version == "v4"
        assert fields.purpose == "local-wrap"
        assert fields.method == "pie"
        assert fields.payload == "AAAA"

    def test_contents_not_validated(self) -> None:
        """Parsing accepts any field contents."""
        assert parse_token("x.y.z.!") == ("x", "y", "z", "!")

    def test_empty_payload(self) -> None:
        assert parse_token("v4.local-wrap.pie.").payload == ""

    @pytest.mark.parametrize("token,count", [("", 1), ("v4.local-wrap.pie", 3), ("a.b.c.d.e", 5)])
    def test_wrong_field_count(self, token, count) -> None:
        with pytest.raises(MalformedTokenError) as exc_info:
            parse_token(token)

        assert exc_info.value.field_count == count

    def test_header_of_inverts_build(self) -> None:
        header = build_header(V4, WrapPurpose.SECRET, "pie")
        assert header_of(parse_token(header + "AAAA")) == header


class TestIsWrappedToken:
    """Shape detection."""

    def test_wrapped(self) -> None:
        assert is_wrapped_token("v4.local-wrap.pie.AAAA") is True
        assert is_wrapped_token("v4.secret-wrap.pie.AAAA") is True

    def test_not_wrapped(self) -> None:
        assert is_wrapped_token("v4.local.AAAA") is False
        assert is_wrapped_token("v4.local.pie.AAAA") is False
        assert is_wrapped_token("v4.local-wrap.pie") is False

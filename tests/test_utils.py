"""
Unit tests for the codec helpers.
"""

import pytest

from otpkit.exceptions import Base32DecodeError, IntegerSyntaxError, UriSyntaxError
from otpkit.utils import b32decode_nopad, b32encode_nopad, build_uri, first_values, parse_int, parse_uint, split_uri, uri_host


class TestBase32:
    """Unpadded base32."""

    def test_encode_strips_padding(self):
        assert b32encode_nopad(b"Hello!\xde\xad\xbe\xef") == "JBSWY3DPEHPK3PXP"
        assert b32encode_nopad(b"a") == "ME"

    @pytest.mark.parametrize("length", range(1, 12))
    def test_decode_every_length(self, length):
        data = bytes(range(length))
        assert b32decode_nopad(b32encode_nopad(data)) == data

    @pytest.mark.parametrize("text", ["A", "ABC", "ABCDEF", "ME==", "me", "M1", "MÉ"])
    def test_decode_rejects(self, text):
        with pytest.raises(Base32DecodeError):
            b32decode_nopad(text)


class TestIntegers:
    """Strict decimal parsing."""

    @pytest.mark.parametrize("value,expected", [("0", 0), ("6", 6), ("08", 8), ("18446744073709551615", 2**64 - 1)])
    def test_uint(self, value, expected):
        assert parse_uint("digits", value) == expected

    @pytest.mark.parametrize("value", ["", "-1", "+1", " 1", "1_0", "1.0", "0x10", "18446744073709551616"])
    def test_uint_rejects(self, value):
        with pytest.raises(IntegerSyntaxError):
            parse_uint("digits", value)

    @pytest.mark.parametrize("value,expected", [("0", 0), ("-5", -5), ("+5", 5), ("-9223372036854775808", -(2**63))])
    def test_int(self, value, expected):
        assert parse_int("counter", value) == expected

    @pytest.mark.parametrize("value", ["", "-", "1e3", "٣", "9223372036854775808"])
    def test_int_rejects(self, value):
        with pytest.raises(IntegerSyntaxError):
            parse_int("counter", value)


class TestSplitURI:
    """URI syntax checks."""

    def test_valid(self):
        parsed = split_uri("otpauth://totp/a%20b?secret=ME")
        assert parsed.scheme == "otpauth"
        assert parsed.netloc == "totp"
        assert parsed.path == "/a%20b"
        assert parsed.query == "secret=ME"

    def test_relative_reference_without_colon(self):
        """Text without a scheme is still a URI; the scheme check rejects it later."""
        assert split_uri("//totp/a?secret=ME").scheme == ""

    @pytest.mark.parametrize(
        "uri",
        [
            "otp%20auth://totp/a?secret=ME",
            "otpauth://totp/a\x00?secret=ME",
            "otpauth://totp/a\x7f?secret=ME",
            "otpauth://totp/%G0?secret=ME",
            "otpauth://totp/a%?secret=ME",
            "otpauth://[totp/a?secret=ME",
            "otpauth://to%zz/a?secret=ME",
            "otpauth://totp:x/a?secret=ME",
        ],
    )
    def test_invalid(self, uri):
        with pytest.raises(UriSyntaxError):
            split_uri(uri)


class TestURIHost:
    """Authority to OTP type."""

    @pytest.mark.parametrize(
        "uri,host",
        [
            ("otpauth://totp/a", "totp"),
            ("otpauth://u@totp/a", "totp"),
            ("otpauth://u:p@hotp/a", "hotp"),
            ("otpauth://TOTP/a", "TOTP"),
            ("otpauth://totp:80/a", "totp:80"),
        ],
    )
    def test_host(self, uri, host):
        assert uri_host(split_uri(uri)) == host


class TestBuildURI:
    """URI rendering."""

    def test_minimal(self):
        assert build_uri("totp", "alice", "ME", "SHA1") == "otpauth://totp/alice?secret=ME&algorithm=SHA1"

    def test_all_parameters(self):
        uri = build_uri("hotp", "Example:alice@google.com", "ME", "SHA256", issuer="Ex ample", digits=8, counter=0)
        assert uri == (
            "otpauth://hotp/Example:alice@google.com?secret=ME&issuer=Ex%20ample&algorithm=SHA256&digits=8&counter=0"
        )

    def test_empty_issuer_omitted(self):
        assert "issuer" not in build_uri("totp", "alice", "ME", "SHA1", issuer="")


class TestFirstValues:
    def test_blank_and_repeated(self):
        assert first_values("secret=&counter=1&counter=2&issuer=A%20B") == {
            "secret": "",
            "counter": "1",
            "issuer": "A B",
        }

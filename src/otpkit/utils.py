import base64
import binascii
import re
from typing import Dict, List, Optional
from urllib.parse import SplitResult, parse_qs, quote, urlencode, urlsplit

from .exceptions import Base32DecodeError, IntegerSyntaxError, UriSyntaxError

_UNSIGNED_RE = re.compile(r"[0-9]+\Z")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+\Z")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1


def b32encode_nopad(data: bytes) -> str:
    """
    RFC 4648 base32 without ``=`` padding, as used by the otpauth format.
    """
    return base64.b32encode(data).decode("ascii").rstrip("=")


def b32decode_nopad(secret: str) -> bytes:
    """
    Decodes unpadded, upper-case base32 text.

    :raises Base32DecodeError: on padding characters, characters outside the
        alphabet, or a length no base32 encoder can produce
    """
    if "=" in secret:
        raise Base32DecodeError("secret must not contain padding characters")
    # b32decode wants a multiple of 8; lengths of 1, 3 or 6 mod 8 still fail
    missing_padding = len(secret) % 8
    if missing_padding != 0:
        secret += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(secret)
    except (binascii.Error, ValueError) as e:
        raise Base32DecodeError("secret is not valid base32: {}".format(e)) from e


def parse_uint(param: str, value: str) -> int:
    """
    Parses an unsigned decimal integer that fits in 64 bits.
    """
    if not _UNSIGNED_RE.match(value):
        raise IntegerSyntaxError(param, value)
    result = int(value)
    if result > UINT64_MAX:
        raise IntegerSyntaxError(param, value, "value out of range")
    return result


def parse_int(param: str, value: str) -> int:
    """
    Parses a signed decimal integer that fits in 64 bits.
    """
    if not _SIGNED_RE.match(value):
        raise IntegerSyntaxError(param, value)
    result = int(value)
    if not INT64_MIN <= result <= INT64_MAX:
        raise IntegerSyntaxError(param, value, "value out of range")
    return result


def split_uri(uri: str) -> SplitResult:
    """
    Splits a URI into its components, rejecting text that is not a URI.

    :raises UriSyntaxError: on ASCII control characters, a relative
        reference whose first segment looks like a scheme, a malformed
        percent escape in the authority or path, or a non-numeric port
    """
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in uri):
        raise UriSyntaxError("URI contains control characters")
    try:
        parsed = urlsplit(uri)
    except ValueError as e:
        raise UriSyntaxError(str(e)) from e

    if not parsed.scheme:
        # "otp%20auth://..." is a path, and a colon in its first segment
        # would be read as a scheme separator
        first_segment = parsed.path.split("/", 1)[0]
        if ":" in first_segment:
            raise UriSyntaxError("missing protocol scheme")
    if _BAD_ESCAPE_RE.search(parsed.netloc):
        raise UriSyntaxError("invalid percent escape in host")
    if _BAD_ESCAPE_RE.search(parsed.path):
        raise UriSyntaxError("invalid percent escape in path")
    try:
        parsed.port
    except ValueError as e:
        raise UriSyntaxError(str(e)) from e
    return parsed


def uri_host(parsed: SplitResult) -> str:
    """
    The authority of ``parsed`` without its userinfo; a port is kept.

    Unlike ``SplitResult.hostname`` the case is left alone.
    """
    return parsed.netloc.rpartition("@")[2]


def build_uri(
    otp_type: str,
    label: str,
    secret: str,
    algorithm: str,
    issuer: Optional[str] = None,
    digits: Optional[int] = None,
    counter: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Returns the provisioning URI for the OTP; works for either TOTP or HOTP.

    Callers decide which optional parameters are meaningful; anything left
    as None is not written.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param otp_type: ``totp`` or ``hotp``
    :param label: account label, percent-encoded here (``:`` and ``@`` kept)
    :param secret: base32 secret, without padding
    :param algorithm: algorithm name
    :param issuer: the name of the OTP issuer
    :param digits: the length of the OTP generated code
    :param counter: HOTP counter
    :param period: TOTP period in seconds
    :returns: provisioning uri
    """
    base_uri = "otpauth://{0}/{1}?{2}"

    url_args: Dict[str, object] = {"secret": secret}
    if issuer:
        url_args["issuer"] = issuer
    url_args["algorithm"] = algorithm
    if digits is not None:
        url_args["digits"] = digits
    if counter is not None:
        url_args["counter"] = counter
    if period is not None:
        url_args["period"] = period

    # urlencode writes spaces as "+"; authenticator apps expect %20.
    # A literal "+" has already been escaped to %2B at this point.
    query = urlencode(url_args).replace("+", "%20")
    return base_uri.format(otp_type, quote(label, safe=":@"), query)


def first_values(query: str) -> Dict[str, str]:
    """
    Query parameters of ``query``, keeping blank values and the first
    occurrence of repeated names.
    """
    params: Dict[str, List[str]] = parse_qs(query, keep_blank_values=True)
    return {k: v[0] for k, v in params.items()}

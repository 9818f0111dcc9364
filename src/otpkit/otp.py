import enum
import hashlib
import hmac
from dataclasses import dataclass
from typing import Any, Optional


DEFAULT_DIGITS = 6
# Digits needed to hold any 31-bit truncated value
MAX_CODE_DIGITS = 10


class Algorithm(enum.Enum):
    """
    Hash functions usable inside the OTP HMAC.

    The member value is the name used in the ``algorithm`` URI parameter.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest(self) -> Any:
        """
        The hashlib constructor backing this algorithm.
        """
        return _DIGESTS[self]


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}

DEFAULT_ALGORITHM = Algorithm.SHA1


@dataclass(frozen=True)
class HOTPOptions:
    """
    Options of the HOTP computation.

    ``None`` (or ``0`` for digits, as in the URI format) means "use the
    default". Both cases are handled the same way on purpose.

    :param digits: number of decimal digits in the code, defaults to 6
    :param algorithm: hash function used in the HMAC, defaults to SHA1
    """

    digits: Optional[int] = None
    algorithm: Optional[Algorithm] = None

    def __post_init__(self) -> None:
        if self.digits is not None and self.digits < 0:
            raise ValueError("digits must not be negative")

    def resolved_digits(self) -> int:
        return self.digits or DEFAULT_DIGITS

    def resolved_algorithm(self) -> Algorithm:
        return self.algorithm or DEFAULT_ALGORITHM


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(self, secret: bytes, options: Optional[HOTPOptions] = None) -> None:
        # Just stores the configuration
        self.secret = bytes(secret)
        self.options = options if options is not None else HOTPOptions()

    @property
    def digits(self) -> int:
        return self.options.resolved_digits()

    @property
    def algorithm(self) -> Algorithm:
        return self.options.resolved_algorithm()

    def generate_otp(self, input: int) -> int:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return generate_otp(self.secret, input, self.options)


def generate_otp(secret: bytes, counter: int, options: Optional[HOTPOptions] = None) -> int:
    """
    Implements RFC 4226 section 5.3.

    :param secret: raw key bytes
    :param counter: moving factor, may be negative
    :param options: digits and algorithm, defaults resolved here
    :returns: the code as an integer (no zero padding)
    """
    if options is None:
        options = HOTPOptions()
    digits = options.resolved_digits()
    algorithm = options.resolved_algorithm()

    hmac_hash = hmac_sha(algorithm, secret, counter)
    code = dynamic_truncation(hmac_hash)
    # code < 2**31 < 10**10, so ten or more digits leave it untouched
    if digits >= MAX_CODE_DIGITS:
        return code
    return code % 10**digits


def hmac_sha(algorithm: Algorithm, secret: bytes, counter: int) -> bytes:
    """
    HMAC-SHA-n of the 8-byte counter: 20, 32 or 64 bytes depending on algorithm.
    """
    return hmac.new(secret, int_to_bytestring(counter), algorithm.digest).digest()


def dynamic_truncation(hmac_hash: bytes) -> int:
    """
    The DT function of RFC 4226 section 5.4.

    The last nibble of the hash picks an offset (0-15), the 4 bytes found
    there are read big-endian and the top bit is dropped, giving a 31-bit
    integer.
    """
    offset = hmac_hash[-1] & 0xF
    code = (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )
    return code


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret.

    Negative values are written as their two's complement pattern, so
    -1 becomes ``b"\\xff" * 8``.
    """
    # Masking first keeps the loop finite for negative numbers
    i &= (1 << (8 * padding)) - 1
    result = bytearray()
    while i != 0:
        result.append(i & 0xFF)
        i >>= 8
    # Bytes come out least significant first
    return bytes(bytearray(reversed(result)).rjust(padding, b"\0"))

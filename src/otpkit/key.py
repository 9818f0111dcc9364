"""
Google Authenticator Key Uri Format.

See also:
    https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import unquote

from . import utils
from .exceptions import InvalidAlgorithm, InvalidScheme, InvalidType, MissingCounter, MissingSecret
from .otp import DEFAULT_ALGORITHM, DEFAULT_DIGITS, Algorithm, HOTPOptions
from .totp import DEFAULT_PERIOD, TOTPOptions

log = logging.getLogger(__name__)

URI_SCHEME = "otpauth"


class KeyType(str, enum.Enum):
    TOTP = "totp"
    HOTP = "hotp"


@dataclass
class Key:
    """
    Decoded form of an ``otpauth://`` URI.

    ``counter`` only means something for HOTP keys and ``period`` only for
    TOTP keys. A parsed HOTP key always has its counter; a parsed TOTP key
    always has a period, 30 when the URI leaves it out.
    """

    type: Union[KeyType, str]
    label: str = ""
    secret: bytes = b""
    issuer: str = ""
    algorithm: Optional[Union[Algorithm, str]] = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    counter: int = 0
    period: int = 0

    def hotp_options(self) -> HOTPOptions:
        return HOTPOptions(digits=self.digits, algorithm=_algorithm_or_default(self.algorithm))

    def totp_options(self) -> TOTPOptions:
        return TOTPOptions(
            digits=self.digits,
            algorithm=_algorithm_or_default(self.algorithm),
            period=self.period,
        )

    def uri(self) -> str:
        """
        Encodes the key as an ``otpauth://`` URI.

        ``digits`` is written only when it differs from the default, ``counter``
        always for HOTP, ``period`` for TOTP when non-zero.

        :raises InvalidType: type is neither totp nor hotp
        :raises MissingSecret: the secret is empty
        :raises InvalidAlgorithm: the algorithm is not SHA1, SHA256 or SHA512
        """
        try:
            otp_type = KeyType(self.type)
        except ValueError:
            raise InvalidType("Not a supported OTP type: {!r}".format(self.type)) from None

        if not self.secret:
            raise MissingSecret("No secret provided")

        # None stands for the default algorithm
        algorithm = _algorithm_or_default(self.algorithm)

        return utils.build_uri(
            otp_type.value,
            self.label,
            utils.b32encode_nopad(self.secret),
            algorithm.value,
            issuer=self.issuer,
            digits=self.digits if self.digits != DEFAULT_DIGITS else None,
            counter=self.counter if otp_type is KeyType.HOTP else None,
            period=self.period if otp_type is KeyType.TOTP and self.period else None,
        )


def _algorithm_or_default(algorithm: Optional[Union[Algorithm, str]]) -> Algorithm:
    if algorithm is None:
        return DEFAULT_ALGORITHM
    return parse_algorithm(algorithm)


def parse_algorithm(name: Union[Algorithm, str]) -> Algorithm:
    """
    Maps ``SHA1``, ``SHA256`` or ``SHA512`` to the matching :class:`Algorithm`.

    :raises InvalidAlgorithm: for any other name
    """
    try:
        return Algorithm(name)
    except ValueError:
        raise InvalidAlgorithm("Invalid value for algorithm, must be SHA1, SHA256 or SHA512") from None


def parse_uri(uri: str) -> Key:
    """
    Parses the provisioning URI for the OTP; works for either TOTP or HOTP.

    Checks run in a fixed order and the first failure is raised, so a URI
    with both a wrong scheme and no secret reports the scheme.

    :param uri: the hotp/totp URI to parse
    :returns: Key
    :raises UriSyntaxError: the text is not a URI
    :raises InvalidScheme: the scheme is not otpauth
    :raises InvalidType: the type is neither totp nor hotp
    :raises MissingSecret: no secret, or an empty one
    :raises Base32DecodeError: the secret is not unpadded base32
    :raises InvalidAlgorithm: unknown algorithm name
    :raises IntegerSyntaxError: digits, counter or period is not an integer
    :raises MissingCounter: an hotp URI without counter
    """
    parsed_uri = utils.split_uri(uri)

    if parsed_uri.scheme != URI_SCHEME:
        raise InvalidScheme("Not an otpauth URI")

    host = utils.uri_host(parsed_uri)
    if host not in (KeyType.TOTP.value, KeyType.HOTP.value):
        raise InvalidType("Not a supported OTP type: {!r}".format(host))
    key = Key(type=KeyType(host))

    # Drop the leading "/" of the path
    path = unquote(parsed_uri.path)
    key.label = path[1:] if path.startswith("/") else path

    params = utils.first_values(parsed_uri.query)

    secret = params.get("secret")
    if not secret:
        raise MissingSecret("No secret found in URI")
    key.secret = utils.b32decode_nopad(secret)

    key.issuer = params.get("issuer", "")

    if "algorithm" in params:
        key.algorithm = parse_algorithm(params["algorithm"])
    else:
        log.debug("no algorithm in URI, using %s", DEFAULT_ALGORITHM.value)
        key.algorithm = DEFAULT_ALGORITHM

    if "digits" in params:
        key.digits = utils.parse_uint("digits", params["digits"])
    else:
        key.digits = DEFAULT_DIGITS

    if key.type is KeyType.HOTP:
        if "counter" not in params:
            raise MissingCounter("No counter found in hotp URI")
        key.counter = utils.parse_int("counter", params["counter"])
    else:
        if "period" in params:
            key.period = utils.parse_int("period", params["period"])
        else:
            log.debug("no period in totp URI, using %d", DEFAULT_PERIOD)
            key.period = DEFAULT_PERIOD

    return key

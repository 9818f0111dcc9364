import logging

from .exceptions import (
    Base32DecodeError as Base32DecodeError,
    IntegerSyntaxError as IntegerSyntaxError,
    InvalidAlgorithm as InvalidAlgorithm,
    InvalidScheme as InvalidScheme,
    InvalidType as InvalidType,
    MissingCounter as MissingCounter,
    MissingSecret as MissingSecret,
    OTPError as OTPError,
    UriSyntaxError as UriSyntaxError,
)
from .hotp import HOTP as HOTP
from .hotp import hotp as hotp
from .key import Key as Key
from .key import KeyType as KeyType
from .key import parse_uri as parse_uri
from .otp import OTP as OTP
from .otp import Algorithm as Algorithm
from .otp import HOTPOptions as HOTPOptions
from .totp import TOTP as TOTP
from .totp import TOTPOptions as TOTPOptions
from .totp import time_period as time_period
from .totp import totp as totp

# Silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

#   hotp(secret, counter, options)   ->  code            (RFC 4226)
#   totp(secret, time, options)      ->  code            (RFC 6238)
#   parse_uri("otpauth://...")       ->  Key
#   Key.uri()                        ->  "otpauth://..."
#   Key.hotp_options() / Key.totp_options() bridge a decoded key to the engines:
#
#   key = parse_uri("otpauth://totp/Example:alice@google.com?secret=JBSWY3DPEHPK3PXP")
#   totp(key.secret, time.time(), key.totp_options())

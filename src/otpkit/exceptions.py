class OTPError(ValueError):
    """
    Base class for errors raised while decoding or encoding OTP keys.
    """


class UriSyntaxError(OTPError):
    """
    The text is not a syntactically valid URI.
    """


class InvalidScheme(OTPError):
    """
    The URI scheme is not ``otpauth``.
    """


class InvalidType(OTPError):
    """
    The OTP type is neither ``totp`` nor ``hotp``.
    """


class MissingSecret(OTPError):
    """
    No secret was provided, or it was empty.
    """


class MissingCounter(OTPError):
    """
    An HOTP key has no ``counter`` parameter.
    """


class Base32DecodeError(OTPError):
    """
    The secret is not valid unpadded base32 text.
    """


class InvalidAlgorithm(OTPError):
    """
    The algorithm is not one of SHA1, SHA256 or SHA512.
    """


class IntegerSyntaxError(OTPError):
    """
    A numeric parameter could not be parsed as an integer of the expected kind.
    """

    def __init__(self, param: str, value: str, reason: str = "invalid syntax") -> None:
        self.param = param
        self.value = value
        super().__init__("Malformed {!r} parameter {!r}: {}".format(param, value, reason))

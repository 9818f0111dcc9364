from typing import Optional

from .otp import OTP, HOTPOptions, generate_otp


def hotp(secret: bytes, counter: int, options: Optional[HOTPOptions] = None) -> int:
    """
    Computes the HOTP code of a given counter.

    :param secret: raw shared secret (not base32)
    :param counter: the moving factor; negative values are allowed
    :param options: digits and algorithm, see :class:`HOTPOptions`
    :returns: the code, strictly less than ``10 ** digits``
    """
    return generate_otp(secret, counter, options)


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        secret: bytes,
        options: Optional[HOTPOptions] = None,
        initial_count: int = 0,
    ) -> None:
        """
        :param secret: raw shared secret
        :param options: digits and algorithm
        :param initial_count: starting HMAC counter value, defaults to 0
        """
        self.initial_count = initial_count
        super().__init__(secret, options)

    def at(self, count: int) -> int:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter, added to ``initial_count``
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    # hotp = HOTP(b"12345678901234567890")
    # hotp.at(0) -> 755224
    # hotp.at(1) -> 287082

    def provisioning_uri(self, label: str = "", issuer: str = "") -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        :param label: account label, conventionally ``Issuer:account``
        :param issuer: the name of the OTP issuer
        :returns: provisioning URI
        """
        from .key import Key, KeyType

        return Key(
            type=KeyType.HOTP,
            label=label,
            secret=self.secret,
            issuer=issuer,
            algorithm=self.algorithm,
            digits=self.digits,
            counter=self.initial_count,
        ).uri()

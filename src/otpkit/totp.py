import calendar
import datetime
import math
import time
from dataclasses import dataclass
from typing import Optional, Union

from .otp import OTP, HOTPOptions, generate_otp

DEFAULT_PERIOD = 30
DEFAULT_TIME_REFERENCE = 0

Timestamp = Union[int, float, datetime.datetime]


@dataclass(frozen=True)
class TOTPOptions(HOTPOptions):
    """
    Options of the TOTP computation, on top of the HOTP ones.

    :param time_reference: T0, the Unix time to start counting steps from
    :param period: seconds per time step; ``None`` or ``0`` mean 30
    :param step: number of periods to shift the computed counter by
    """

    time_reference: int = DEFAULT_TIME_REFERENCE
    period: Optional[int] = None
    step: int = 0

    def resolved_period(self) -> int:
        return self.period or DEFAULT_PERIOD

    def hotp_options(self) -> HOTPOptions:
        return HOTPOptions(digits=self.digits, algorithm=self.algorithm)


def timestamp_seconds(for_time: Timestamp) -> int:
    """
    Whole Unix seconds of ``for_time``, rounded down.

    Aware datetimes are converted through UTC, naive ones are taken as local time.
    """
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo:
            return calendar.timegm(for_time.utctimetuple())
        return int(time.mktime(for_time.timetuple()))
    return math.floor(for_time)


def time_period(current_time: int, time_reference: int = DEFAULT_TIME_REFERENCE, period: int = DEFAULT_PERIOD) -> int:
    """
    Returns T as defined in RFC 6238 section 4.2.

    Before ``time_reference`` the count keeps going down: -1 second with
    T0 = 0 is in period -1, not 0.
    """
    # Python's floor division already rounds towards negative infinity
    return (current_time - time_reference) // period


def totp(secret: bytes, for_time: Timestamp, options: Optional[TOTPOptions] = None) -> int:
    """
    Computes the TOTP code of a given time.

    :param secret: raw shared secret (not base32)
    :param for_time: Unix seconds or a datetime
    :param options: see :class:`TOTPOptions`
    :returns: the code, strictly less than ``10 ** digits``
    """
    if options is None:
        options = TOTPOptions()
    counter = time_period(timestamp_seconds(for_time), options.time_reference, options.resolved_period())
    return generate_otp(secret, counter + options.step, options.hotp_options())


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    options: TOTPOptions

    def __init__(self, secret: bytes, options: Optional[TOTPOptions] = None) -> None:
        """
        :param secret: raw shared secret
        :param options: digits, algorithm, time reference, period and step
        """
        super().__init__(secret, options if options is not None else TOTPOptions())

    @property
    def interval(self) -> int:
        return self.options.resolved_period()

    def timecode(self, for_time: Timestamp) -> int:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :returns: the time period counter, without the step offset
        """
        return time_period(timestamp_seconds(for_time), self.options.time_reference, self.interval)

    def at(self, for_time: Timestamp, step: Optional[int] = None) -> int:
        """
        Generates the OTP for the given time.

        :param for_time: the time to generate an OTP for
        :param step: overrides the step offset of the options
        :returns: OTP value
        """
        if step is None:
            step = self.options.step
        return self.generate_otp(self.timecode(for_time) + step)

    def now(self) -> int:
        """
        Generates the current time OTP.

        :returns: OTP value
        """
        return self.at(time.time())

    # totp = TOTP(b"12345678901234567890", TOTPOptions(digits=8))
    # totp.at(59) -> 94287082

    def provisioning_uri(self, label: str = "", issuer: str = "") -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        The time reference and step are not part of the URI format and
        are left out.

        :param label: account label, conventionally ``Issuer:account``
        :param issuer: the name of the OTP issuer
        :returns: provisioning URI
        """
        from .key import Key, KeyType

        return Key(
            type=KeyType.TOTP,
            label=label,
            secret=self.secret,
            issuer=issuer,
            algorithm=self.algorithm,
            digits=self.digits,
            period=self.interval,
        ).uri()

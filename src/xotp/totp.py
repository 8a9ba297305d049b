import calendar
import datetime
import time
from typing import Optional, Union

from . import utils
from .exceptions import TimeBeforeStartError
from .otp import OTP
from .otp_result import OTPResult
from .utils import MacDigest

TimeLike = Union[int, float, datetime.datetime]


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        secret: bytes,
        digest: Union[MacDigest, str] = MacDigest.SHA1,
        digits: int = utils.DEFAULT_DIGITS,
        period: int = utils.DEFAULT_PERIOD,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param secret: the shared secret as raw bytes
        :param digest: digest function to use in the HMAC; SHA1, SHA256 and SHA512 are allowed
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param period: the time step in seconds. The default is 30 seconds
        :param name: account name
        :param issuer: issuer
        """
        self.period = _check_step(period)
        super().__init__(secret, digest=digest, digits=digits, name=name, issuer=issuer)

    def get_otp(self, unix_seconds: TimeLike, digits: Optional[int] = None) -> OTPResult:
        """
        Generates the OTP for the given time, counting time steps from the
        Unix epoch.

        :param unix_seconds: the time as Unix seconds or a datetime
        :param digits: code length, defaults to the instance's digits
        """
        return self.get_otp_with_custom(unix_seconds, self.period, 0, digits)

    def get_otp_with_custom(
        self,
        unix_seconds: TimeLike,
        step: int,
        start: int,
        digits: Optional[int] = None,
    ) -> OTPResult:
        """
        Generates the OTP for the given time with a custom time step and
        start time.

        :raises TimeBeforeStartError: if ``unix_seconds`` is before ``start``
        """
        return self.generate_otp(self.timecode(unix_seconds, step, start), digits)

    def now(self, digits: Optional[int] = None) -> OTPResult:
        """
        Generates the current time OTP.
        """
        return self.get_otp(time.time(), digits)

    def timecode(self, unix_seconds: TimeLike, step: Optional[int] = None, start: int = 0) -> int:
        """
        Number of whole time steps between ``start`` and ``unix_seconds``.
        """
        step = self.period if step is None else _check_step(step)
        return _elapsed(unix_seconds, start) // step

    def time_until_refresh(self, unix_seconds: TimeLike) -> int:
        """
        Seconds left before the code for ``unix_seconds`` changes, in
        the range (0, period].
        """
        return self.time_until_refresh_with_start(unix_seconds, self.period, 0)

    def time_until_refresh_with_start(self, unix_seconds: TimeLike, step: int, start: int) -> int:
        step = _check_step(step)
        return step - _elapsed(unix_seconds, start) % step

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP. This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        :param name: name of the user account
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        return utils.build_uri(
            self.base32_secret(),
            name=name if name else self.name,
            issuer=issuer_name if issuer_name else self.issuer,
            algorithm=self.digest.value,
            digits=self.digits,
            period=self.period,
        )


def _check_step(step: int) -> int:
    if step <= 0:
        raise ValueError("time step must be a positive number of seconds")
    return step


def _to_unix_seconds(for_time: TimeLike) -> int:
    if isinstance(for_time, datetime.datetime):
        if for_time.tzinfo:
            return calendar.timegm(for_time.utctimetuple())
        return int(time.mktime(for_time.timetuple()))
    return int(for_time // 1)


def _elapsed(unix_seconds: TimeLike, start: int) -> int:
    seconds = _to_unix_seconds(unix_seconds)
    if seconds < start:
        raise TimeBeforeStartError(seconds, start)
    return seconds - start

from typing import Optional, Union

from . import utils
from .otp import OTP
from .otp_result import OTPResult
from .utils import MacDigest


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    def __init__(
        self,
        secret: bytes,
        digest: Union[MacDigest, str] = MacDigest.SHA1,
        digits: int = utils.DEFAULT_DIGITS,
        initial_count: int = utils.DEFAULT_COUNTER,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param secret: the shared secret as raw bytes
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param initial_count: starting HMAC counter value, defaults to 0
        :param name: account name
        :param issuer: issuer
        """
        if initial_count < 0 or initial_count > utils.MAX_COUNTER:
            raise ValueError("initial_count must be an integer between 0 and 2**64 - 1")
        self.initial_count = initial_count
        super().__init__(secret, digest=digest, digits=digits, name=name, issuer=issuer)

    def get_otp(self, counter: int, digits: Optional[int] = None) -> OTPResult:
        """
        Generates the OTP for the given counter.

        :param counter: the OTP HMAC counter, 0 <= counter < 2**64
        :param digits: code length, defaults to the instance's digits
        :returns: OTPResult
        """
        return self.generate_otp(counter, digits)

    def at(self, count: int, digits: Optional[int] = None) -> OTPResult:
        """
        Generates the OTP ``count`` steps past the initial counter.
        """
        return self.generate_otp(self.initial_count + count, digits)

    def provisioning_uri(
        self,
        name: Optional[str] = None,
        initial_count: Optional[int] = None,
        issuer_name: Optional[str] = None,
    ) -> str:
        """
        Returns the provisioning URI for the OTP. This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        :param name: name of the user account
        :param initial_count: starting HMAC counter value, defaults to the instance's
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        return utils.build_uri(
            self.base32_secret(),
            name=name if name else self.name,
            initial_count=initial_count if initial_count is not None else self.initial_count,
            issuer=issuer_name if issuer_name else self.issuer,
            algorithm=self.digest.value,
            digits=self.digits,
        )

from typing import Optional, Type, TypeVar, Union

from . import utils
from .otp_result import OTPResult
from .utils import MacDigest

OTPType = TypeVar("OTPType", bound="OTP")


class OTP(object):
    """
    Base class for OTP handlers.

    Owns the raw secret and the digest; both are fixed for the lifetime
    of the instance, so a single instance can be shared freely.
    """

    def __init__(
        self,
        secret: bytes,
        digest: Union[MacDigest, str] = MacDigest.SHA1,
        digits: int = utils.DEFAULT_DIGITS,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
    ) -> None:
        """
        :param secret: the shared secret as raw bytes
        :param digest: digest used in the HMAC, SHA1 unless stated otherwise
        :param digits: default number of digits in generated codes
        :param name: account name, descriptive only
        :param issuer: issuer, descriptive only
        """
        if not isinstance(secret, (bytes, bytearray, memoryview)):
            raise TypeError("secret must be bytes; use from_utf8() or from_base32() for text secrets")
        self._secret = bytes(secret)
        self._digest = digest if isinstance(digest, MacDigest) else MacDigest.from_name(digest)
        self._digits = utils.check_digits(digits)
        self.name = name or "Secret"
        self.issuer = issuer

    @classmethod
    def from_utf8(cls: Type[OTPType], secret: str, **kwargs) -> OTPType:
        """
        Creates an instance whose secret is the UTF-8 encoding of ``secret``.
        """
        return cls(secret.encode("utf-8"), **kwargs)

    @classmethod
    def from_base32(cls: Type[OTPType], secret: str, **kwargs) -> OTPType:
        """
        Creates an instance from a Base32 secret, as found in otpauth URIs.

        :raises SecretParsingError: if ``secret`` is not valid Base32
        """
        return cls(utils.base32_decode(secret), **kwargs)

    @property
    def secret(self) -> bytes:
        return self._secret

    @property
    def digest(self) -> MacDigest:
        return self._digest

    @property
    def digits(self) -> int:
        return self._digits

    def base32_secret(self) -> str:
        return utils.base32_encode(self._secret)

    def generate_otp(self, counter: int, digits: Optional[int] = None) -> OTPResult:
        """
        Implements RFC 4226: HMAC over the 8-byte counter, dynamic
        truncation, then reduction modulo 10^digits.

        :param counter: the HMAC counter value. Usually either the HOTP
            counter, or the time step computed from a Unix timestamp
        :param digits: number of digits, defaults to the instance's
        """
        if digits is None:
            digits = self._digits
        else:
            utils.check_digits(digits)
        hmac_hash = utils.hash_generic(self._secret, utils.int_to_bytestring(counter), self._digest)
        return OTPResult(utils.get_code(hmac_hash, digits), digits)

    def __repr__(self) -> str:
        return "{}(digest={}, digits={}, name={!r}, issuer={!r})".format(
            type(self).__name__, self._digest.value, self._digits, self.name, self.issuer
        )

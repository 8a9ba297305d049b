import base64
import hashlib
import hmac
import struct
from enum import Enum
from typing import Callable, Dict, Optional, Union
from urllib.parse import quote, urlencode

from .exceptions import SecretParsingError, UnknownAlgorithmError

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_COUNTER = 0
MAX_DIGITS = 10
MAX_COUNTER = 2**64 - 1


class MacDigest(Enum):
    """
    The keyed-hash functions usable for OTP generation.

    SHA1 is what RFC 4226 and RFC 6238 mandate for interoperability;
    SHA256 and SHA512 are the RFC 6238 extensions. Some authenticator
    apps only support SHA1.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def hash_func(self) -> Callable:
        return _HASH_FUNCS[self]

    @property
    def digest_size(self) -> int:
        return self.hash_func().digest_size

    @classmethod
    def from_name(cls, name: str) -> "MacDigest":
        """
        Looks up a digest by its otpauth algorithm name, ignoring case.

        :param name: e.g. "SHA1", "sha256"
        :raises UnknownAlgorithmError: for any other name
        """
        try:
            return cls(name.upper())
        except ValueError:
            raise UnknownAlgorithmError(
                "Invalid value for algorithm, must be SHA1, SHA256 or SHA512", value=name
            ) from None


_HASH_FUNCS: Dict[MacDigest, Callable] = {
    MacDigest.SHA1: hashlib.sha1,
    MacDigest.SHA256: hashlib.sha256,
    MacDigest.SHA512: hashlib.sha512,
}


def hash_generic(secret: bytes, message: bytes, digest: MacDigest = MacDigest.SHA1) -> bytes:
    """
    HMAC of ``message`` keyed with ``secret`` using the given digest.
    Returns 20, 32 or 64 bytes for SHA1, SHA256 and SHA512.
    """
    return hmac.new(secret, message, digest.hash_func).digest()


def int_to_bytestring(i: int) -> bytes:
    """
    Turns a counter into the 8-byte big-endian message that is fed to
    the HMAC along with the secret.
    """
    if i < 0 or i > MAX_COUNTER:
        raise ValueError("counter must be an integer between 0 and 2**64 - 1")
    return struct.pack(">Q", i)


def get_code(hmac_hash: bytes, digits: int) -> int:
    """
    RFC 4226 dynamic truncation followed by the decimal reduction.

    The low nibble of the last byte picks 4 bytes of the hash; the top bit
    of the first one is masked so the result is a non-negative 31-bit value.
    """
    offset = hmac_hash[-1] & 0xF
    code = (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )
    return code % 10**digits


def check_digits(digits: int) -> int:
    if digits < 0 or digits > MAX_DIGITS:
        raise ValueError("digits must be between 0 and {}".format(MAX_DIGITS))
    return digits


def base32_decode(secret: str) -> bytes:
    """
    Decodes an RFC 4648 Base32 string. Case does not matter and the
    trailing ``=`` padding may be left out, as otpauth URIs do.

    :raises SecretParsingError: if the string is not valid Base32
    """
    padded = secret
    missing_padding = len(padded) % 8
    if missing_padding != 0:
        padded += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(padded, casefold=True)
    except ValueError:
        raise SecretParsingError("Secret is not a valid Base32 string", value=secret) from None


def base32_encode(secret: bytes) -> str:
    # otpauth secrets are written without padding
    return base64.b32encode(secret).decode("ascii").rstrip("=")


def build_uri(
    secret: str,
    name: str,
    initial_count: Optional[int] = None,
    issuer: Optional[str] = None,
    algorithm: Optional[str] = None,
    digits: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Returns the provisioning URI for the OTP; works for either TOTP or HOTP.

    Only non-default parameters are written out, keeping the URI short.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param secret: the Base32 secret
    :param name: name of the account
    :param initial_count: starting counter value; if None the OTP type
        is assumed to be TOTP
    :param issuer: the name of the OTP issuer
    :param algorithm: the digest name, e.g. "SHA256"
    :param digits: the length of the OTP generated code
    :param period: the number of seconds each TOTP code is valid for
    :returns: provisioning uri
    """
    # initial_count may be 0 as a valid param
    is_initial_count_present = initial_count is not None

    is_algorithm_set = algorithm is not None and algorithm.upper() != MacDigest.SHA1.value
    is_digits_set = digits is not None and digits != DEFAULT_DIGITS
    is_period_set = period is not None and period != DEFAULT_PERIOD

    otp_type = "hotp" if is_initial_count_present else "totp"
    base_uri = "otpauth://{0}/{1}?{2}"

    url_args: Dict[str, Union[int, str]] = {"secret": secret}

    label = quote(name)
    if issuer is not None:
        label = quote(issuer) + ":" + label
        url_args["issuer"] = issuer

    if is_initial_count_present:
        url_args["counter"] = initial_count  # type: ignore
    if is_algorithm_set:
        url_args["algorithm"] = algorithm.upper()  # type: ignore
    if is_digits_set:
        url_args["digits"] = digits  # type: ignore
    if is_period_set:
        url_args["period"] = period  # type: ignore

    return base_uri.format(otp_type, label, urlencode(url_args).replace("+", "%20"))

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union
from urllib.parse import parse_qsl, unquote, urlparse

from . import utils
from .exceptions import ConfigurationError as ConfigurationError
from .exceptions import InvalidCounterError as InvalidCounterError
from .exceptions import InvalidDigitsError as InvalidDigitsError
from .exceptions import InvalidPeriodError as InvalidPeriodError
from .exceptions import InvalidURIError as InvalidURIError
from .exceptions import IssuerMismatchError as IssuerMismatchError
from .exceptions import MissingOtpTypeError as MissingOtpTypeError
from .exceptions import MissingSecretError as MissingSecretError
from .exceptions import SecretParsingError as SecretParsingError
from .exceptions import TimeBeforeStartError as TimeBeforeStartError
from .exceptions import UnknownAlgorithmError as UnknownAlgorithmError
from .exceptions import UnknownOtpTypeError as UnknownOtpTypeError
from .exceptions import WrongSchemeError as WrongSchemeError
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp_result import OTPResult as OTPResult
from .totp import TOTP as TOTP
from .utils import MacDigest as MacDigest

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

OTP_TYPES = ("hotp", "totp")


@dataclass(frozen=True)
class OTPAuthParams:
    """
    Everything an otpauth URI says about an OTP generator.

    ``counter`` is only meaningful for hotp and ``period`` only for totp;
    ``name`` and ``issuer`` are descriptive and play no part in the codes.
    """

    otp_type: str
    secret: bytes = field(repr=False)
    digest: MacDigest = MacDigest.SHA1
    digits: int = utils.DEFAULT_DIGITS
    counter: int = utils.DEFAULT_COUNTER
    period: int = utils.DEFAULT_PERIOD
    name: Optional[str] = None
    issuer: Optional[str] = None

    def build(self) -> Union[HOTP, TOTP]:
        if self.otp_type == "hotp":
            return HOTP(
                self.secret,
                digest=self.digest,
                digits=self.digits,
                initial_count=self.counter,
                name=self.name,
                issuer=self.issuer,
            )
        if self.otp_type != "totp":
            raise UnknownOtpTypeError("Not a supported OTP type", value=self.otp_type)
        return TOTP(
            self.secret,
            digest=self.digest,
            digits=self.digits,
            period=self.period,
            name=self.name,
            issuer=self.issuer,
        )


def parse_uri(uri: str) -> OTPAuthParams:
    """
    Parses the provisioning URI for the OTP; works for either TOTP or HOTP.

    The URI looks like::

        otpauth://totp/FooCorp:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=FooCorp&period=30

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the hotp/totp URI to parse
    :returns: the parsed parameters
    :raises ConfigurationError: if the URI is malformed; the subclass
        names the problem
    """
    try:
        params = _parse_uri(uri)
    except ConfigurationError as e:
        logger.debug("Rejected otpauth URI: %s", e)
        raise
    logger.debug("Parsed otpauth URI: %r", params)
    return params


def from_uri(uri: str) -> Union[HOTP, TOTP]:
    """
    Builds the HOTP or TOTP generator described by an otpauth URI.
    """
    return parse_uri(uri).build()


def _parse_uri(uri: str) -> OTPAuthParams:
    try:
        parsed_uri = urlparse(uri)
    except ValueError as e:
        raise InvalidURIError("Malformed URI: {}".format(e)) from None

    if parsed_uri.scheme != "otpauth":
        raise WrongSchemeError("Not an otpauth URI", value=parsed_uri.scheme)

    otp_type = parsed_uri.netloc.lower()
    if not otp_type:
        raise MissingOtpTypeError("No OTP type found in URI")
    if otp_type not in OTP_TYPES:
        raise UnknownOtpTypeError("Not a supported OTP type", value=parsed_uri.netloc)

    name, issuer = _parse_label(parsed_uri.path)
    query = _parse_query(parsed_uri.query)

    # a bare "issuer" key carries no issuer
    if query.get("issuer"):
        if issuer is not None and issuer != query["issuer"]:
            raise IssuerMismatchError(
                "If issuer is specified in both label and parameters, it should be equal.",
                value=query["issuer"],
            )
        issuer = query["issuer"]

    secret = query.get("secret")
    if not secret:
        raise MissingSecretError("No secret found in URI")

    digest = MacDigest.SHA1
    if "algorithm" in query:
        digest = MacDigest.from_name(query["algorithm"])

    digits = utils.DEFAULT_DIGITS
    if "digits" in query:
        digits = _parse_unsigned(query["digits"], InvalidDigitsError, "digits")
        if digits < 1 or digits > utils.MAX_DIGITS:
            raise InvalidDigitsError(
                "digits must be between 1 and {}".format(utils.MAX_DIGITS), value=query["digits"]
            )

    counter = utils.DEFAULT_COUNTER
    period = utils.DEFAULT_PERIOD
    if otp_type == "hotp" and "counter" in query:
        counter = _parse_unsigned(query["counter"], InvalidCounterError, "counter")
        if counter > utils.MAX_COUNTER:
            raise InvalidCounterError("counter must fit in 64 bits", value=query["counter"])
    elif otp_type == "totp" and "period" in query:
        period = _parse_unsigned(query["period"], InvalidPeriodError, "period")
        if period == 0:
            raise InvalidPeriodError("period must be a positive number of seconds", value=query["period"])

    return OTPAuthParams(
        otp_type=otp_type,
        secret=utils.base32_decode(secret),
        digest=digest,
        digits=digits,
        counter=counter,
        period=period,
        name=name,
        issuer=issuer,
    )


def _parse_label(path: str) -> Tuple[Optional[str], Optional[str]]:
    label = unquote(path[1:])
    if not label:
        return None, None
    accountinfo_parts = label.split(":", 1)
    if len(accountinfo_parts) == 1:
        return accountinfo_parts[0], None
    return accountinfo_parts[1].strip(), accountinfo_parts[0]


def _parse_query(query: str) -> Dict[str, str]:
    if not query:
        return {}
    return dict(parse_qsl(query, keep_blank_values=True))


def _parse_unsigned(value: str, error: type, key: str) -> int:
    if not value.isdecimal() or not value.isascii():
        raise error("{} must be a non-negative integer".format(key), value=value)
    return int(value)

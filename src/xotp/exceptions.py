from typing import Optional


class ConfigurationError(ValueError):
    """
    Raised when an otpauth URI cannot be turned into a complete set of
    OTP parameters.

    :param message: human readable description
    :param value: the offending value from the URI, if there is one
    """

    def __init__(self, message: str, value: Optional[str] = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidURIError(ConfigurationError):
    pass


class WrongSchemeError(ConfigurationError):
    pass


class MissingOtpTypeError(ConfigurationError):
    pass


class UnknownOtpTypeError(ConfigurationError):
    pass


class MissingSecretError(ConfigurationError):
    pass


class SecretParsingError(ConfigurationError):
    pass


class UnknownAlgorithmError(ConfigurationError):
    pass


class InvalidDigitsError(ConfigurationError):
    pass


class InvalidCounterError(ConfigurationError):
    pass


class InvalidPeriodError(ConfigurationError):
    pass


class IssuerMismatchError(ConfigurationError):
    pass


class TimeBeforeStartError(ArithmeticError):
    """
    Raised when a TOTP time precedes the configured start time, which
    would otherwise yield a negative time-step counter.
    """

    def __init__(self, unix_seconds: int, start: int) -> None:
        super().__init__("time {} is before the start time {}".format(unix_seconds, start))
        self.unix_seconds = unix_seconds
        self.start = start

from dataclasses import dataclass


@dataclass(frozen=True)
class OTPResult:
    """
    A generated one-time password.

    Keeps the digit count next to the numeric value, since the number alone
    loses its leading zeros: 42 with 6 digits is the code "000042".
    """

    value: int
    digits: int

    def as_u32(self) -> int:
        return self.value

    def as_string(self) -> str:
        return str(self.value).zfill(self.digits)

    def __str__(self) -> str:
        return self.as_string()

    def __int__(self) -> int:
        return self.value

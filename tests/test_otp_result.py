"""Tests for OTPResult formatting."""

import dataclasses

import pytest

from xotp import HOTP, OTPResult


def test_padding_needed():
    assert OTPResult(1234, 6).as_string() == "001234"


def test_padding_not_needed():
    assert OTPResult(123456, 6).as_string() == "123456"


def test_str_and_int():
    result = OTPResult(42, 6)
    assert str(result) == "000042"
    assert int(result) == 42
    assert result.as_u32() == 42


@pytest.mark.parametrize("digits", range(1, 11))
@pytest.mark.parametrize("counter", [0, 1, 7, 1000, 2**32])
def test_padding_and_range_laws(counter, digits):
    result = HOTP(b"12345678901234567890").get_otp(counter, digits)
    assert 0 <= result.as_u32() < 10**digits
    assert len(result.as_string()) == digits
    assert int(result.as_string()) == result.as_u32()


def test_results_are_immutable_and_hashable():
    result = OTPResult(1, 6)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.value = 2  # type: ignore
    assert {result, OTPResult(1, 6)} == {result}
    assert OTPResult(1, 6) != OTPResult(1, 8)

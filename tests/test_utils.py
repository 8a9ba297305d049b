"""Tests for xotp.utils helpers."""

import pytest

from xotp import utils
from xotp.exceptions import SecretParsingError, UnknownAlgorithmError
from xotp.utils import MacDigest


@pytest.mark.parametrize(
    "digest,size", [(MacDigest.SHA1, 20), (MacDigest.SHA256, 32), (MacDigest.SHA512, 64)]
)
def test_hash_generic_output_size(digest, size):
    assert digest.digest_size == size
    assert len(utils.hash_generic(b"key", b"message", digest)) == size


def test_hash_generic_known_value():
    mac = utils.hash_generic(b"key", b"The quick brown fox jumps over the lazy dog")
    assert mac.hex() == "de7c9b85b8b78aa6bc8a7a36f70a90701c9db4d9"


def test_hash_generic_accepts_empty_input():
    assert len(utils.hash_generic(b"", b"", MacDigest.SHA256)) == 32


@pytest.mark.parametrize("name", ["SHA1", "sha1", "Sha256", "sha512"])
def test_digest_from_name(name):
    assert MacDigest.from_name(name).value == name.upper()


@pytest.mark.parametrize("name", ["MD5", "SHA1024", "", "SHA-256"])
def test_digest_from_unknown_name(name):
    with pytest.raises(UnknownAlgorithmError) as excinfo:
        MacDigest.from_name(name)
    assert excinfo.value.value == name


def test_get_code_rfc4226_truncation_example():
    # RFC 4226 section 5.4
    hmac_hash = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")
    assert utils.get_code(hmac_hash, 10) == 0x50EF7F19
    assert utils.get_code(hmac_hash, 6) == 872921


def test_get_code_masks_the_sign_bit():
    hmac_hash = bytes([0xFF] * 19 + [0x00])
    assert utils.get_code(hmac_hash, 10) == 0x7FFFFFFF


def test_int_to_bytestring_is_big_endian():
    assert utils.int_to_bytestring(1) == b"\x00\x00\x00\x00\x00\x00\x00\x01"
    assert utils.int_to_bytestring(0x3039) == b"\x00\x00\x00\x00\x00\x00\x30\x39"


@pytest.mark.parametrize(
    "encoded", ["GEZDGNBVGY3TQOJQ", "gezdgnbvgy3tqojq", "GEZDGNBVGY3TQOJQGEZA", "GEZDGNBVGY3TQOJQGEZA===="]
)
def test_base32_decode(encoded):
    assert utils.base32_decode(encoded).startswith(b"1234567890")


@pytest.mark.parametrize("encoded", ["GEZDGNB1", "not base32!", "A"])
def test_base32_decode_rejects_invalid(encoded):
    with pytest.raises(SecretParsingError):
        utils.base32_decode(encoded)


def test_base32_encode_strips_padding():
    assert utils.base32_encode(b"12") == "GEZA"

import hashlib
import string

import pytest

from safeguard import DerivationError, KeyDeriver


def test_derive_matches_pbkdf2_hmac():
    salt = "00ff" * 8
    expected = hashlib.pbkdf2_hmac("sha1", b"secret", salt.encode(), 50, dklen=40)
    assert KeyDeriver.derive("secret", salt, 50, 40) == expected


def test_derive_accepts_bytes_and_other_digests():
    salt = "abcd"
    expected = hashlib.pbkdf2_hmac("sha512", b"\x00\x01\x02", salt.encode(), 10, dklen=16)
    assert KeyDeriver.derive(b"\x00\x01\x02", salt, 10, 16, "sha512") == expected


def test_derive_is_deterministic():
    first = KeyDeriver.derive("text", "1234", 20, 32)
    second = KeyDeriver.derive("text", "1234", 20, 32)
    assert first == second
    assert len(first) == 32
    assert KeyDeriver.derive("text", "4321", 20, 32) != first


@pytest.mark.parametrize("iterations", [-1, 0, None, True, 1.5])
def test_derive_rejects_bad_iterations(iterations):
    with pytest.raises(DerivationError):
        KeyDeriver.derive("text", "1234", iterations, 32)


@pytest.mark.parametrize("key_length", [-1, 0, None, "32"])
def test_derive_rejects_bad_key_length(key_length):
    with pytest.raises(ValueError):
        KeyDeriver.derive("text", "1234", 10, key_length)


def test_derive_rejects_unknown_digest():
    with pytest.raises(DerivationError, match="Unsupported digest"):
        KeyDeriver.derive("text", "1234", 10, 32, "md4")


def test_new_salt_is_hex_of_requested_length():
    salt = KeyDeriver.new_salt(64)
    assert len(salt) == 64
    assert set(salt) <= set(string.hexdigits.lower())
    assert KeyDeriver.new_salt(64) != salt


@pytest.mark.parametrize("salt_length", [-1, 0, 63, None])
def test_new_salt_rejects_bad_length(salt_length):
    with pytest.raises(DerivationError):
        KeyDeriver.new_salt(salt_length)


def test_random_text_length():
    assert len(KeyDeriver.random_text(128)) == 128

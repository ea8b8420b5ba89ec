"""
Key derivation using PBKDF2-HMAC.

The salt is kept as hex text and its encoded bytes are fed to PBKDF2, so packets
written by earlier releases still verify.
"""

import os
from typing import Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .errors import DerivationError


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class KeyDeriver:
    """Derives keys and random material for hash packets."""

    DIGESTS = {
        "sha1": hashes.SHA1,
        "sha224": hashes.SHA224,
        "sha256": hashes.SHA256,
        "sha384": hashes.SHA384,
        "sha512": hashes.SHA512,
    }
    DEFAULT_DIGEST = "sha1"

    @classmethod
    def derive(
        cls,
        text: Union[str, bytes],
        salt: str,
        iterations: Optional[int],
        key_length: Optional[int],
        digest: str = DEFAULT_DIGEST,
    ) -> bytes:
        """
        Derive a key from plain text.

        Args:
            text: The plain text, or random bytes standing in for it
            salt: Hex text of the salt
            iterations: PBKDF2 iteration count
            key_length: Length of the derived key in bytes
            digest: Name of the HMAC hash function

        Returns:
            The derived key

        Raises:
            DerivationError: If a parameter is not usable
        """
        if not _is_positive_int(iterations):
            raise DerivationError(f"Invalid iterations value: {iterations!r}")
        if not _is_positive_int(key_length):
            raise DerivationError(f"Invalid key length value: {key_length!r}")

        algorithm = cls.DIGESTS.get(str(digest).lower())
        if algorithm is None:
            raise DerivationError(f"Unsupported digest: {digest!r}")

        if isinstance(text, str):
            text = text.encode("utf-8")

        kdf = PBKDF2HMAC(
            algorithm=algorithm(),
            length=key_length,
            salt=salt.encode("utf-8"),
            iterations=iterations,
        )
        return kdf.derive(text)

    @classmethod
    def new_salt(cls, salt_length: int) -> str:
        """
        Generate a fresh salt.

        Args:
            salt_length: Salt length in hex characters

        Returns:
            Hex text of salt_length // 2 random bytes
        """
        if not _is_positive_int(salt_length) or salt_length % 2:
            raise DerivationError(f"Invalid salt length value: {salt_length!r}")
        return os.urandom(salt_length // 2).hex()

    @staticmethod
    def random_text(length: int) -> bytes:
        """Random bytes used in place of missing plain text."""
        return os.urandom(length)

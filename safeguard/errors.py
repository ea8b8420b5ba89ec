"""
Error types raised by Safeguard.

Every error carries an HTTP-style status code so that callers embedding the
library in a service can forward it unchanged.
"""

from typing import Any, Optional


class SafeguardError(Exception):
    """Base class for all Safeguard errors."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.message = message
        self.status = status


class InvalidInputError(SafeguardError):
    """Plain text to hash is missing or not a string."""


class InvalidPacketError(SafeguardError):
    """A hash packet string could not be decoded."""

    def __init__(self, message: str, status: int = 500, default_record: Optional[Any] = None):
        super().__init__(message, status)
        # Usable fallback for callers that still want a record
        self.default_record = default_record


class EncodingError(SafeguardError):
    """A hash record could not be encoded into a packet string."""


class DerivationError(SafeguardError, ValueError):
    """Key derivation parameters were rejected."""


class ErrorBuilder:
    """Default error builder used by the hashing service."""

    @staticmethod
    def build(message: str, status: Optional[int] = None, *, kind: type = SafeguardError) -> SafeguardError:
        """
        Build an error value.

        Args:
            message: Human readable description
            status: Status code, 500 when not given
            kind: SafeguardError subclass to instantiate

        Returns:
            The error, ready to be raised
        """
        return kind(message, status or 500)

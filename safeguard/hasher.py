"""
Password hashing service.

Hashes plain text into portable hash packets and verifies plain text against
stored packets. Verification always uses the parameters embedded in the packet,
so packets created under an older configuration stay verifiable.
"""

import asyncio
import hmac
import logging
from typing import Any, Mapping, Optional, Union

from .config import CryptoSettings, config
from .errors import EncodingError, ErrorBuilder, InvalidInputError, InvalidPacketError
from .kdf import KeyDeriver
from .packet import HashRecord, PacketCodec

logger = logging.getLogger(__name__)


class Safeguard:
    """Hashes and verifies passwords using hash packets."""

    def __init__(
        self,
        settings: Optional[Union[CryptoSettings, Mapping[str, Any]]] = None,
        log: Optional[logging.Logger] = None,
        error: Optional[Any] = None,
    ):
        """
        Initialize the service.

        Args:
            settings: CryptoSettings, or overrides merged onto the global
                configuration
            log: Logger for warnings, the module logger when not given
            error: Error builder exposing build(message, status)
        """
        self._settings = config.crypto
        if isinstance(settings, CryptoSettings):
            self._settings = settings
        elif settings:
            self.set_config(settings)
        self.set_log(log)
        self.set_error(error)

    @property
    def settings(self) -> CryptoSettings:
        """The current settings snapshot."""
        return self._settings

    def set_config(self, overrides: Optional[Mapping[str, Any]] = None) -> CryptoSettings:
        """
        Apply new settings. Calling without overrides resets to the defaults.

        Overrides may be flat or nested under a "crypto" key. The current
        snapshot is replaced, never modified, so in-flight calls keep the
        values they started with.

        Args:
            overrides: Setting names mapped to new values

        Returns:
            The new settings snapshot
        """
        if not overrides:
            self._settings = config.crypto
        else:
            if "crypto" in overrides:
                overrides = overrides["crypto"]
            self._settings = self._settings.merged(overrides)
        return self._settings

    def set_log(self, log: Optional[logging.Logger] = None, level: Optional[Union[int, str]] = None):
        """
        Install a logger, or restore the module logger.

        The level is applied only to a logger passed in here. The module
        logger is shared by every instance and keeps its own level.
        """
        self.log = log or logger
        if log is not None and level is not None:
            log.setLevel(level)

    def set_error(self, error: Optional[Any] = None):
        """Install an error builder, or restore the default one."""
        self.error = error or ErrorBuilder()

    def _build_error(self, message: str, status: int, kind: type):
        # Custom builders take (message, status) only
        if isinstance(self.error, ErrorBuilder):
            return self.error.build(message, status, kind=kind)
        return self.error.build(message, status)

    def create_default_record(self, settings: Optional[CryptoSettings] = None) -> HashRecord:
        """Create an empty record from the given or current settings."""
        return HashRecord.from_settings(settings or self._settings)

    def hash(self, text: Optional[str], **overrides: Any) -> str:
        """
        Hash plain text into a hash packet string.

        When text is missing and default_plain_text_length is configured, a
        random placeholder of that many bytes is hashed instead.

        Args:
            text: The plain text to hash
            **overrides: Per-call settings (iterations, key_length, ...)

        Returns:
            The hash packet string

        Raises:
            InvalidInputError: If text is missing and no placeholder length is set
            DerivationError: If a derivation parameter is invalid
        """
        settings = self._settings.merged(overrides)
        record = self.create_default_record(settings)

        if not text or not isinstance(text, str):
            length = settings.default_plain_text_length
            if not isinstance(length, int) or length <= 0:
                message = f'The text value of "{text}" (quotes exclusive) is invalid and cannot be hashed.'
                self.log.error("safeguard.hash(): %s", message)
                raise self._build_error(message, 500, InvalidInputError)
            self.log.warning(
                'safeguard.hash():  The text value of "%s" (quotes exclusive) is invalid, '
                "defaulting to a random string.",
                text,
            )
            text = KeyDeriver.random_text(length)

        record.salt = KeyDeriver.new_salt(record.salt_length)
        derived = KeyDeriver.derive(text, record.salt, record.iterations, record.key_length, settings.digest)
        record.hash = derived.hex()

        return self.encode(record)

    def encode(self, record: HashRecord) -> str:
        """
        Encode a record using this service's error builder.

        Raises:
            EncodingError: If record is not a HashRecord
        """
        try:
            return PacketCodec.encode(record)
        except EncodingError as e:
            raise self._build_error(e.message, e.status, EncodingError) from e

    def decode(self, packet: str) -> HashRecord:
        """
        Decode a hash packet using this service's defaults.

        Raises:
            InvalidPacketError: If the packet is malformed
        """
        try:
            return PacketCodec.decode(packet, self.create_default_record())
        except InvalidPacketError as e:
            err = self._build_error(e.message, e.status, InvalidPacketError)
            if isinstance(err, InvalidPacketError):
                err.default_record = e.default_record
            raise err from e

    def verify(self, text: Optional[str], packet: str) -> bool:
        """
        Check plain text against a stored hash packet.

        Missing or non-string text never matches and is not an error.

        Args:
            text: The plain text to check
            packet: The stored hash packet string

        Returns:
            True if the text produces the stored hash

        Raises:
            InvalidPacketError: If the packet is malformed
            DerivationError: If the packet carries invalid parameters
        """
        if not text or not isinstance(text, str):
            return False

        record = self.decode(packet)
        derived = KeyDeriver.derive(text, record.salt, record.iterations, record.key_length, self._settings.digest)

        return hmac.compare_digest(derived.hex().encode("utf-8"), record.hash.encode("utf-8"))

    async def hash_async(self, text: Optional[str], **overrides: Any) -> str:
        """Run hash() in a worker thread."""
        return await asyncio.to_thread(self.hash, text, **overrides)

    async def verify_async(self, text: Optional[str], packet: str) -> bool:
        """Run verify() in a worker thread."""
        return await asyncio.to_thread(self.verify, text, packet)

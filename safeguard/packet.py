"""
Hash packet encoding.

A hash packet stores everything needed to verify a password later in a single
text field of unknown length:

    <key_length>,<iterations>,<salt_length>,<salt_hex><hash_hex>

key_length counts raw bytes of the derived key, salt_length counts hex
characters of the salt. Salt and hash are concatenated without a separator,
so the decoder relies on salt_length to split them.
"""

from typing import Optional
from dataclasses import dataclass

from .config import CryptoSettings, config
from .errors import EncodingError, InvalidPacketError

HEADER_FIELDS = 3
MIN_ITEMS = HEADER_FIELDS + 1


@dataclass
class HashRecord:
    """Parameters and output of a single key derivation."""
    key_length: Optional[int]
    iterations: Optional[int]
    salt_length: Optional[int]
    salt: str = ""
    hash: str = ""

    @classmethod
    def from_settings(cls, settings: CryptoSettings) -> "HashRecord":
        """Create an empty record carrying the configured parameters."""
        return cls(
            key_length=settings.key_length,
            iterations=settings.iterations,
            salt_length=settings.salt_length,
        )

    def to_string(self) -> str:
        """Encode as a hash packet string."""
        return PacketCodec.encode(self)

    @classmethod
    def from_string(cls, packet: str, default: Optional["HashRecord"] = None) -> "HashRecord":
        """Decode a hash packet string."""
        return PacketCodec.decode(packet, default)


def _parse_header_field(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


class PacketCodec:
    """Converts between HashRecord objects and hash packet strings."""

    @classmethod
    def encode(cls, record: HashRecord) -> str:
        """
        Encode a record as a comma separated hash packet.

        Args:
            record: The record to encode

        Returns:
            The hash packet string

        Raises:
            EncodingError: If record is not a HashRecord
        """
        if record is None or not isinstance(record, HashRecord):
            raise EncodingError("Invalid Hash Packet:  Cannot encode a value that is not a hash record.")

        return (
            f"{record.key_length},"
            f"{record.iterations},"
            f"{record.salt_length},"
            f"{record.salt}{record.hash}"
        )

    @classmethod
    def decode(cls, packet: str, default: Optional[HashRecord] = None) -> HashRecord:
        """
        Decode a hash packet string into a record.

        More than four comma separated items are accepted, only fewer is an
        error. Header values that are not integers decode to None and are
        rejected later by the key deriver.

        Args:
            packet: The hash packet string
            default: Record attached to the error on failure. Built from the
                global configuration when not given.

        Returns:
            The decoded record

        Raises:
            InvalidPacketError: If packet is not a non-empty string or has
                fewer than four items. The error's default_record holds the
                fallback record.
        """
        if not packet or not isinstance(packet, str):
            raise InvalidPacketError(
                "Invalid Hash Packet:  Must be a defined string.  Returning default hash packet.",
                default_record=cls._default(default),
            )

        items = packet.split(",")
        if len(items) < MIN_ITEMS:
            raise InvalidPacketError(
                f"Invalid Hash Packet:  Expected {MIN_ITEMS} items, but {len(items)} were found.  "
                "Returning default hash packet.",
                default_record=cls._default(default),
            )

        # Count the separators and the printed width of each header value
        offset = HEADER_FIELDS
        header = []
        for item in items[:HEADER_FIELDS]:
            header.append(_parse_header_field(item))
            offset += len(item)

        key_length, iterations, salt_length = header
        split = offset + max(salt_length or 0, 0)

        return HashRecord(
            key_length=key_length,
            iterations=iterations,
            salt_length=salt_length,
            salt=packet[offset:split],
            hash=packet[split:],
        )

    @staticmethod
    def _default(default: Optional[HashRecord]) -> HashRecord:
        if default is not None:
            return default
        return HashRecord.from_settings(config.crypto)

"""
Safeguard password hashing.

Handles:
- Key derivation (PBKDF2-HMAC)
- Hash packet encoding and decoding
- Password verification against stored packets
"""

import logging

from .config import VERSION, Config, CryptoSettings, config
from .errors import (
    DerivationError,
    EncodingError,
    ErrorBuilder,
    InvalidInputError,
    InvalidPacketError,
    SafeguardError,
)
from .hasher import Safeguard
from .kdf import KeyDeriver
from .packet import HashRecord, PacketCodec

_log = logging.getLogger(config.LOG_NAME)
_log.addHandler(logging.NullHandler())
_log.setLevel(config.LOG_LEVEL)

__version__ = VERSION

__all__ = [
    "Config",
    "CryptoSettings",
    "DerivationError",
    "EncodingError",
    "ErrorBuilder",
    "HashRecord",
    "InvalidInputError",
    "InvalidPacketError",
    "KeyDeriver",
    "PacketCodec",
    "Safeguard",
    "SafeguardError",
    "config",
]

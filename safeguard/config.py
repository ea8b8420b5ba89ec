"""
Configuration for Safeguard.
"""

import os
import logging
from typing import Any, Mapping, Optional
from dataclasses import dataclass, field, fields, replace

# Library version - update this for each release
VERSION = "1.0.0"

# camelCase setting names accepted by merged()
_ALIASES = {
    "keyLength": "key_length",
    "saltLength": "salt_length",
    "defaultPlainTextLength": "default_plain_text_length",
}


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    """Read an integer environment variable, falling back to the default."""
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _env_log_level(name: str, default: str) -> str:
    """Read a logging level name from the environment."""
    value = os.getenv(name) or default
    level = value.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {value!r}")
    return level


@dataclass(frozen=True)
class CryptoSettings:
    """Hashing parameters snapshotted at the start of every hash call."""

    iterations: int = 10000
    key_length: int = 128  # raw bytes of derived key
    salt_length: int = 64  # hex characters of salt
    default_plain_text_length: Optional[int] = None
    digest: str = "sha1"

    @classmethod
    def from_env(cls) -> "CryptoSettings":
        """Build settings from SAFEGUARD_* environment variables."""
        defaults = cls()
        return cls(
            iterations=_env_int("SAFEGUARD_ITERATIONS", defaults.iterations),
            key_length=_env_int("SAFEGUARD_KEY_LENGTH", defaults.key_length),
            salt_length=_env_int("SAFEGUARD_SALT_LENGTH", defaults.salt_length),
            default_plain_text_length=_env_int(
                "SAFEGUARD_DEFAULT_PLAIN_TEXT_LENGTH",
                defaults.default_plain_text_length,
            ),
            digest=os.getenv("SAFEGUARD_DIGEST", defaults.digest),
        )

    def merged(self, overrides: Optional[Mapping[str, Any]] = None) -> "CryptoSettings":
        """
        Return a copy with the given values applied.

        Args:
            overrides: Setting names (snake_case or camelCase)
                mapped to their new values

        Returns:
            A new CryptoSettings; this instance is left untouched

        Raises:
            KeyError: If an override names an unknown setting
        """
        if not overrides:
            return self

        known = {f.name for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise KeyError(f"Unknown crypto setting: {key}")
            changes[name] = value
        return replace(self, **changes)


@dataclass
class Config:
    """Library configuration."""

    # Logging settings
    LOG_NAME: str = "safeguard"
    LOG_LEVEL: str = _env_log_level("SAFEGUARD_LOG_LEVEL", "WARNING")

    # Hashing defaults
    crypto: CryptoSettings = field(default_factory=CryptoSettings.from_env)


# Global config instance
config = Config()

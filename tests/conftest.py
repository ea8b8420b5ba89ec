import pytest

from safeguard import CryptoSettings, Safeguard

PASSWORD = "my password string"


@pytest.fixture
def fast_settings():
    """Settings with a low work factor so the suite stays quick."""
    return CryptoSettings(iterations=1000)


@pytest.fixture
def safeguard(fast_settings):
    return Safeguard(fast_settings)


@pytest.fixture
def password():
    return PASSWORD

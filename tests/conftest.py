"""Shared fixtures."""

import pytest

from streetwise.config import FetchConfig
from streetwise.errors import TransientFetchError


@pytest.fixture
def fast_fetch_config():
    """Retry policy without delays."""
    return FetchConfig(low_quality_delay=0, network_error_delay=0)


@pytest.fixture
def transient_error():
    return TransientFetchError("https://example.com/", "net::ERR_CONNECTION_RESET")

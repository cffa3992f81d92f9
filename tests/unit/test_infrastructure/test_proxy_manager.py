"""Unit tests for the ProxyManager facade."""

import random
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

pytest_plugins = ('pytest_asyncio',)

from streetwise.infrastructure.fingerprint import FingerprintProvider
from streetwise.infrastructure.proxy_manager import ProxyManager
from streetwise.infrastructure.proxy_rotation import ProxyConfig, ProxyProtocol, RotationStrategy
from streetwise.schemas import ProxyRequest


@pytest.fixture
def manager():
    manager = ProxyManager(fingerprints=FingerprintProvider(rng=random.Random(5)))
    manager.throttler.throttle = AsyncMock(return_value=0)
    return manager


class TestProxyManager:
    """Tests for ProxyManager."""

    def test_add_proxy_from_request(self, manager):
        proxy = manager.add_proxy(ProxyRequest(server=" 10.0.0.1:8080 ", protocol="socks5", username="u", password="p"))

        assert proxy.server == "10.0.0.1:8080"
        assert proxy.protocol == ProxyProtocol.SOCKS5
        assert manager.get_proxy_pool_stats()["total_proxies"] == 1

    def test_add_proxy_from_dict(self, manager):
        proxy = manager.add_proxy({"server": "10.0.0.2:3128", "country": "DE"})

        assert proxy.country == "DE"

    def test_add_invalid_proxy(self, manager):
        with pytest.raises(ValidationError):
            manager.add_proxy({"server": ""})

    def test_add_proxy_config(self, manager):
        proxy = manager.add_proxy(ProxyConfig(server="10.0.0.3:80"))

        assert manager.get_next_proxy() is proxy

    def test_remove_and_reset(self, manager):
        manager.add_proxy({"server": "a:1"})
        for _ in range(3):
            manager.mark_proxy_failed("a:1")

        assert manager.get_next_proxy() is None
        assert manager.reset_failed_proxies() == 1
        assert manager.remove_proxy("a:1") is True

    def test_set_rotation_strategy(self, manager):
        manager.set_rotation_strategy("round_robin")

        assert manager.pool.config.rotation_strategy == RotationStrategy.ROUND_ROBIN

    def test_configure_throttling(self, manager):
        manager.configure_throttling(min_delay=1000, requests_per_minute=10)

        assert manager.throttler.config.min_delay == 1000
        assert manager.throttler.config.requests_per_minute == 10
        assert manager.throttler.config.max_delay == 8000

    def test_configure_throttling_validates(self, manager):
        with pytest.raises(ValidationError):
            manager.configure_throttling({"min_delay": 10})
        with pytest.raises(ValidationError):
            manager.configure_throttling(min_delay=9000, max_delay=2000)

    @pytest.mark.asyncio
    async def test_get_proxy_with_rotation_throttles(self, manager):
        manager.add_proxy({"server": "a:1"})

        proxy = await manager.get_proxy_with_rotation()

        assert proxy.server == "a:1"
        manager.throttler.throttle.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_proxy_with_rotation_empty_pool(self, manager):
        assert await manager.get_proxy_with_rotation() is None

    def test_fingerprints(self, manager):
        fingerprint = manager.generate_browser_fingerprint()

        assert fingerprint.user_agent
        assert "Mobile" in manager.get_random_user_agent("mobile")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PROXY_URLS", "http://a.example.com:1")
        monkeypatch.delenv("PROXY_FILE", raising=False)
        monkeypatch.delenv("PROXY_ROTATION", raising=False)

        manager = ProxyManager.from_env()

        assert manager.pool.pool_size == 1

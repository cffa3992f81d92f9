"""
Proxy manager.

Single entry point for the anti-detection layer: a proxy pool, a request
throttler and a fingerprint provider. Instances are created by the caller
and passed to the renderers that need them.
"""

import logging
from typing import Any, Dict, Optional, Union

from streetwise.infrastructure.fingerprint import BrowserFingerprint, FingerprintProvider
from streetwise.infrastructure.proxy_rotation import (
    ProxyConfig,
    ProxyPool,
    ProxyPoolConfig,
    ProxyProtocol,
    RotationStrategy,
    create_proxy_pool_from_env,
)
from streetwise.infrastructure.rate_limiter import RequestThrottler, ThrottleConfig
from streetwise.schemas import ProxyRequest, ThrottlingRequest

logger = logging.getLogger(__name__)


class ProxyManager:
    """
    Facade over proxy rotation, throttling and fingerprinting.

        manager = ProxyManager()
        manager.add_proxy(ProxyRequest(server="10.0.0.1:8080"))
        proxy = await manager.get_proxy_with_rotation()
    """

    def __init__(
        self,
        pool: Optional[ProxyPool] = None,
        throttler: Optional[RequestThrottler] = None,
        fingerprints: Optional[FingerprintProvider] = None,
    ):
        self.pool = pool or ProxyPool(ProxyPoolConfig())
        self.throttler = throttler or RequestThrottler(ThrottleConfig())
        self.fingerprints = fingerprints or FingerprintProvider()

    @classmethod
    def from_env(cls) -> "ProxyManager":
        """Build a manager whose pool is loaded from PROXY_URLS / PROXY_FILE."""
        return cls(pool=create_proxy_pool_from_env())

    # --- Pool ---

    def add_proxy(self, proxy: Union[ProxyConfig, ProxyRequest, dict]) -> ProxyConfig:
        """Add a proxy given as a ProxyConfig, a ProxyRequest or a plain dict."""
        if isinstance(proxy, dict):
            proxy = ProxyRequest(**proxy)
        if isinstance(proxy, ProxyRequest):
            proxy = ProxyConfig(
                server=proxy.server,
                username=proxy.username,
                password=proxy.password,
                protocol=ProxyProtocol(proxy.protocol),
                country=proxy.country,
            )
        self.pool.add_proxy(proxy)
        return proxy

    def remove_proxy(self, server: str) -> bool:
        return self.pool.remove_proxy(server)

    def get_next_proxy(self) -> Optional[ProxyConfig]:
        return self.pool.get_next_proxy()

    def mark_proxy_failed(self, server: str) -> None:
        self.pool.mark_proxy_failed(server)

    def mark_proxy_success(self, server: str) -> None:
        self.pool.mark_proxy_success(server)

    def reset_failed_proxies(self) -> int:
        return self.pool.reset_failed_proxies()

    def set_rotation_strategy(self, strategy: Union[RotationStrategy, str]) -> None:
        self.pool.set_rotation_strategy(RotationStrategy(strategy))

    async def check_proxy_health(self, proxy: ProxyConfig) -> bool:
        return await self.pool.check_proxy_health(proxy)

    async def check_all_proxies(self) -> Dict[str, bool]:
        return await self.pool.check_all_proxies()

    def get_proxy_pool_stats(self) -> Dict[str, Any]:
        return self.pool.get_stats()

    # --- Throttling ---

    def configure_throttling(
        self,
        settings: Optional[Union[ThrottlingRequest, dict]] = None,
        **kwargs,
    ) -> None:
        """
        Update throttle settings.

        Accepts a ThrottlingRequest, a dict, or keyword arguments; values are
        validated against the ThrottlingRequest bounds first.
        """
        if settings is None:
            settings = ThrottlingRequest(**kwargs)
        elif isinstance(settings, dict):
            settings = ThrottlingRequest(**settings)

        self.throttler.configure(
            min_delay=settings.min_delay,
            max_delay=settings.max_delay,
            requests_per_minute=settings.requests_per_minute,
            requests_per_hour=settings.requests_per_hour,
        )

    async def throttle(self) -> int:
        return await self.throttler.throttle()

    async def get_proxy_with_rotation(self) -> Optional[ProxyConfig]:
        """Throttle, then select the next proxy."""
        await self.throttle()
        return self.get_next_proxy()

    # --- Fingerprints ---

    def generate_browser_fingerprint(self) -> BrowserFingerprint:
        return self.fingerprints.generate_browser_fingerprint()

    def get_random_user_agent(self, device: str = "desktop") -> str:
        return self.fingerprints.get_random_user_agent(device)

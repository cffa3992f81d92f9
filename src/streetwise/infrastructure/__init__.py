"""
Infrastructure Package.

Provides proxy rotation, request throttling and browser fingerprinting for
crawls that need to spread load and vary their client identity.
"""

from .fingerprint import (
    BrowserFingerprint,
    FingerprintProvider,
    is_mobile_user_agent,
)
from .proxy_rotation import (
    ProxyPool,
    ProxyPoolConfig,
    ProxyConfig,
    ProxyProtocol,
    RotationStrategy,
    load_proxies_from_file,
    create_proxy_pool_from_env,
)
from .rate_limiter import (
    RequestThrottler,
    ThrottleConfig,
)
from .proxy_manager import ProxyManager

__all__ = [
    # Fingerprints
    "BrowserFingerprint",
    "FingerprintProvider",
    "is_mobile_user_agent",
    # Proxy Rotation
    "ProxyPool",
    "ProxyPoolConfig",
    "ProxyConfig",
    "ProxyProtocol",
    "RotationStrategy",
    "load_proxies_from_file",
    "create_proxy_pool_from_env",
    # Throttling
    "RequestThrottler",
    "ThrottleConfig",
    # Facade
    "ProxyManager",
]

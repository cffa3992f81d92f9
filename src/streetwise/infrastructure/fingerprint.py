"""
Browser fingerprint generation.

Produces plausible, internally consistent combinations of user agent,
viewport, language, platform and timezone for browser contexts, so that
consecutive page loads do not all present the same client.
"""

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional

logger = logging.getLogger(__name__)

DeviceType = Literal["desktop", "mobile"]


USER_AGENTS: Dict[str, Dict[str, List[str]]] = {
    "desktop": {
        "chrome": [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        ],
        "firefox": [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:121.0) Gecko/20100101 Firefox/121.0",
            "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
        ],
        "safari": [
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15",
            "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1",
        ],
        "edge": [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36 Edg/120.0.0.0",
        ],
    },
    "mobile": {
        "chrome": [
            "Mozilla/5.0 (Linux; Android 10; SM-G998B) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36",
            "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) CriOS/120.0.6099.119 Mobile/15E148 Safari/604.1",
        ],
        "safari": [
            "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1",
        ],
    },
}

MOBILE_VIEWPORTS = [
    {"width": 375, "height": 667},  # iPhone SE
    {"width": 375, "height": 812},  # iPhone X
    {"width": 414, "height": 896},  # iPhone 11
    {"width": 360, "height": 640},  # Galaxy S5
    {"width": 412, "height": 915},  # Pixel
]

DESKTOP_VIEWPORTS = [
    {"width": 1920, "height": 1080},
    {"width": 1366, "height": 768},
    {"width": 1440, "height": 900},
    {"width": 1536, "height": 864},
    {"width": 1280, "height": 720},
]

LANGUAGES = ["en-US", "en-GB", "en-CA", "en-AU", "fr-FR", "de-DE", "es-ES"]
PLATFORMS = ["Win32", "MacIntel", "Linux x86_64", "iPhone", "Android"]
TIMEZONES = [
    "America/New_York",
    "America/Los_Angeles",
    "Europe/London",
    "Europe/Paris",
    "Asia/Tokyo",
]

# Share of generated fingerprints that present as desktop browsers
DESKTOP_PROBABILITY = 0.7

MOBILE_MARKERS = ("Mobile", "Android", "iPhone")


@dataclass(frozen=True)
class BrowserFingerprint:
    """One generated client identity."""
    user_agent: str
    viewport: Dict[str, int]
    accept_language: str
    platform: str
    timezone: str

    @property
    def locale(self) -> str:
        return self.accept_language.split(",")[0]


def is_mobile_user_agent(user_agent: str) -> bool:
    """Whether a user agent string belongs to a phone or tablet browser."""
    return any(marker in user_agent for marker in MOBILE_MARKERS)


class FingerprintProvider:
    """
    Random fingerprint generator.

    Accepts an optional ``random.Random`` so callers (and tests) can make
    the sequence reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def get_random_user_agent(self, device: DeviceType = "desktop") -> str:
        """Pick a random browser family for the device, then a random agent."""
        families = USER_AGENTS[device]
        family = self._rng.choice(list(families))
        return self._rng.choice(families[family])

    def get_viewport_for_user_agent(self, user_agent: str) -> Dict[str, int]:
        """Random viewport matching the device class of the user agent."""
        viewports = MOBILE_VIEWPORTS if is_mobile_user_agent(user_agent) else DESKTOP_VIEWPORTS
        return dict(self._rng.choice(viewports))

    def generate_browser_fingerprint(self) -> BrowserFingerprint:
        """Generate a complete fingerprint for a new browser context."""
        device: DeviceType = "desktop" if self._rng.random() < DESKTOP_PROBABILITY else "mobile"
        user_agent = self.get_random_user_agent(device)

        fingerprint = BrowserFingerprint(
            user_agent=user_agent,
            viewport=self.get_viewport_for_user_agent(user_agent),
            accept_language=self._rng.choice(LANGUAGES),
            platform=self._rng.choice(PLATFORMS),
            timezone=self._rng.choice(TIMEZONES),
        )
        logger.debug(f"Generated {device} fingerprint: {fingerprint.viewport} {fingerprint.timezone}")
        return fingerprint

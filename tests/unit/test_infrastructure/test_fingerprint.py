"""Unit tests for browser fingerprint generation."""

import random

import pytest

from streetwise.infrastructure.fingerprint import (
    DESKTOP_VIEWPORTS,
    LANGUAGES,
    MOBILE_VIEWPORTS,
    PLATFORMS,
    TIMEZONES,
    USER_AGENTS,
    BrowserFingerprint,
    FingerprintProvider,
    is_mobile_user_agent,
)


@pytest.fixture
def provider():
    return FingerprintProvider(rng=random.Random(1234))


class TestUserAgents:
    """Tests for user agent selection."""

    def test_desktop_agent_from_desktop_pool(self, provider):
        desktop = {ua for agents in USER_AGENTS["desktop"].values() for ua in agents}

        for _ in range(10):
            assert provider.get_random_user_agent("desktop") in desktop

    def test_mobile_agent_is_mobile(self, provider):
        for _ in range(10):
            assert is_mobile_user_agent(provider.get_random_user_agent("mobile"))

    def test_is_mobile_user_agent(self):
        assert is_mobile_user_agent(USER_AGENTS["mobile"]["chrome"][0])
        assert not is_mobile_user_agent(USER_AGENTS["desktop"]["firefox"][0])


class TestViewports:
    """Tests for viewport selection."""

    def test_viewport_matches_device(self, provider):
        mobile_ua = USER_AGENTS["mobile"]["safari"][0]
        desktop_ua = USER_AGENTS["desktop"]["chrome"][0]

        assert provider.get_viewport_for_user_agent(mobile_ua) in MOBILE_VIEWPORTS
        assert provider.get_viewport_for_user_agent(desktop_ua) in DESKTOP_VIEWPORTS

    def test_viewport_is_a_copy(self, provider):
        viewport = provider.get_viewport_for_user_agent(USER_AGENTS["desktop"]["chrome"][0])
        viewport["width"] = 1

        assert all(v["width"] != 1 for v in DESKTOP_VIEWPORTS)


class TestFingerprint:
    """Tests for complete fingerprints."""

    def test_fields_from_known_pools(self, provider):
        for _ in range(20):
            fingerprint = provider.generate_browser_fingerprint()

            assert fingerprint.accept_language in LANGUAGES
            assert fingerprint.platform in PLATFORMS
            assert fingerprint.timezone in TIMEZONES
            expected = MOBILE_VIEWPORTS if is_mobile_user_agent(fingerprint.user_agent) else DESKTOP_VIEWPORTS
            assert fingerprint.viewport in expected

    def test_seeded_provider_is_reproducible(self):
        first = FingerprintProvider(rng=random.Random(99)).generate_browser_fingerprint()
        second = FingerprintProvider(rng=random.Random(99)).generate_browser_fingerprint()

        assert first == second

    def test_locale(self):
        fingerprint = BrowserFingerprint(
            user_agent="ua",
            viewport={"width": 1, "height": 1},
            accept_language="en-GB",
            platform="Win32",
            timezone="Europe/London",
        )

        assert fingerprint.locale == "en-GB"

"""Tests for the page renderers."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from streetwise.browser_config import BrowserConfig
from streetwise.errors import (
    BrowserLaunchError,
    CrawlerError,
    RendererNotStartedError,
    TransientFetchError,
)
from streetwise.infrastructure.proxy_manager import ProxyManager
from streetwise.renderers import HttpRenderer, PlaywrightRenderer, is_transient_error

pytest_plugins = ('pytest_asyncio',)


def mock_transport(handler):
    return httpx.MockTransport(handler)


class TestIsTransientError:
    """Tests for transient error classification."""

    def test_transient_fetch_error(self):
        assert is_transient_error(TransientFetchError("https://example.com/", "reset"))

    @pytest.mark.parametrize("message", [
        "net::ERR_CONNECTION_REFUSED at https://example.com/",
        "Timeout 30000ms exceeded.",
        "Navigation timeout of 30000 ms exceeded",
    ])
    def test_marker_messages(self, message):
        assert is_transient_error(Exception(message))

    def test_other_errors(self):
        assert not is_transient_error(ValueError("bad html"))


class TestHttpRenderer:
    """Tests for HttpRenderer."""

    @pytest.mark.asyncio
    async def test_render_returns_body(self):
        def handler(request):
            assert request.headers["User-Agent"] == BrowserConfig().user_agent
            return httpx.Response(200, text="<html><title>Hi</title></html>")

        async with HttpRenderer(transport=mock_transport(handler)) as renderer:
            html = await renderer.render("https://example.com/")

        assert "<title>Hi</title>" in html
        assert not renderer.is_running

    @pytest.mark.asyncio
    async def test_error_status_still_returns_body(self):
        transport = mock_transport(lambda request: httpx.Response(404, text="<h1>Not found</h1>"))

        async with HttpRenderer(transport=transport) as renderer:
            assert await renderer.render("https://example.com/missing") == "<h1>Not found</h1>"

    @pytest.mark.asyncio
    async def test_connection_error_is_transient(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with HttpRenderer(transport=mock_transport(handler)) as renderer:
            with pytest.raises(TransientFetchError) as exc_info:
                await renderer.render("https://example.com/")

        assert is_transient_error(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_is_transient(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with HttpRenderer(transport=mock_transport(handler)) as renderer:
            with pytest.raises(TransientFetchError):
                await renderer.render("https://example.com/")

    @pytest.mark.asyncio
    async def test_render_requires_start(self):
        with pytest.raises(RendererNotStartedError):
            await HttpRenderer().render("https://example.com/")


class TestPlaywrightRenderer:
    """Tests for PlaywrightRenderer without a real browser."""

    @pytest.fixture
    def page(self):
        page = MagicMock()
        page.goto = AsyncMock()
        page.wait_for_timeout = AsyncMock()
        page.content = AsyncMock(return_value="<html><title>Rendered</title></html>")
        return page

    @pytest.fixture
    def context(self, page):
        context = MagicMock()
        context.new_page = AsyncMock(return_value=page)
        context.close = AsyncMock()
        return context

    @pytest.fixture
    def browser(self, context):
        browser = MagicMock()
        browser.new_context = AsyncMock(return_value=context)
        browser.close = AsyncMock()
        return browser

    @pytest.fixture
    def proxy_manager(self):
        manager = ProxyManager()
        manager.throttler.throttle = AsyncMock(return_value=0)
        manager.add_proxy({"server": "10.0.0.1:8080"})
        return manager

    @pytest.mark.asyncio
    async def test_render_requires_start(self):
        with pytest.raises(RendererNotStartedError):
            await PlaywrightRenderer().render("https://example.com/")

    @pytest.mark.asyncio
    async def test_launch_failure(self):
        playwright = MagicMock()
        playwright.start = AsyncMock(side_effect=PlaywrightError("Executable doesn't exist"))

        with patch("streetwise.renderers.async_playwright", return_value=playwright):
            with pytest.raises(BrowserLaunchError):
                await PlaywrightRenderer().start()

    @pytest.mark.asyncio
    async def test_render(self, browser, context, page):
        config = BrowserConfig(settle_time=500)
        renderer = PlaywrightRenderer(config)
        renderer._browser = browser

        html = await renderer.render("https://example.com/")

        assert html == "<html><title>Rendered</title></html>"
        page.goto.assert_awaited_once_with(
            "https://example.com/", wait_until="networkidle", timeout=30000
        )
        page.wait_for_timeout.assert_awaited_once_with(500)
        assert browser.new_context.await_args.kwargs["user_agent"] == config.user_agent
        context.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_render_with_proxy(self, browser, proxy_manager):
        renderer = PlaywrightRenderer(proxy_manager=proxy_manager)
        renderer._browser = browser

        await renderer.render("https://example.com/")

        options = browser.new_context.await_args.kwargs
        assert options["proxy"] == {"server": "http://10.0.0.1:8080"}
        assert "Accept-Language" in options["extra_http_headers"]
        proxy_manager.throttler.throttle.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_timeout_marks_proxy_failed(self, browser, context, page, proxy_manager):
        page.goto.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded.")
        renderer = PlaywrightRenderer(proxy_manager=proxy_manager)
        renderer._browser = browser

        with pytest.raises(TransientFetchError):
            await renderer.render("https://example.com/")

        assert proxy_manager.pool.get_proxy("10.0.0.1:8080").failure_count == 1
        context.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_transient_error(self, browser, page):
        page.goto.side_effect = PlaywrightError("Protocol error: Target closed")
        renderer = PlaywrightRenderer()
        renderer._browser = browser

        with pytest.raises(CrawlerError) as exc_info:
            await renderer.render("https://example.com/")

        assert not isinstance(exc_info.value, TransientFetchError)

    @pytest.mark.asyncio
    async def test_success_clears_proxy_failures(self, browser, proxy_manager):
        proxy_manager.mark_proxy_failed("10.0.0.1:8080")
        renderer = PlaywrightRenderer(proxy_manager=proxy_manager)
        renderer._browser = browser

        await renderer.render("https://example.com/")

        assert proxy_manager.pool.get_proxy("10.0.0.1:8080").failure_count == 0

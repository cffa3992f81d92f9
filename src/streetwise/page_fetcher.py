"""Single-page fetching with a quality-gated retry policy."""

import asyncio
import logging
from typing import Optional

from streetwise.config import FetchConfig, default_fetch_config
from streetwise.errors import BrowserLaunchError, RendererNotStartedError
from streetwise.models import CrawledPage
from streetwise.page_extractor import PageExtractor
from streetwise.renderers import PageRenderer, is_transient_error

logger = logging.getLogger(__name__)


class PageFetcher:
    """Renders, extracts and scores one page, retrying when it looks unfinished.

    A page scoring below ``min_quality_score`` is rendered again after
    ``low_quality_delay`` seconds, since a low score usually means client-side
    content had not loaded yet. Transient navigation errors are retried after
    ``network_error_delay`` seconds. At most ``max_retries`` retries are made;
    the last low-quality attempt is still returned.
    """

    def __init__(
        self,
        renderer: PageRenderer,
        extractor: Optional[PageExtractor] = None,
        config: Optional[FetchConfig] = None,
    ):
        """Initialize the fetcher.

        Args:
            renderer: Started page renderer
            extractor: Page extractor and quality scorer
            config: Retry policy
        """
        self.renderer = renderer
        self.extractor = extractor or PageExtractor()
        self.config = config or default_fetch_config

    async def fetch_page(self, url: str, base_host: Optional[str] = None) -> Optional[CrawledPage]:
        """Fetch one page.

        Args:
            url: Page URL
            base_host: Hostname whose links count as internal

        Returns:
            CrawledPage, or None if the page could not be fetched

        Raises:
            BrowserLaunchError: If the renderer cannot be used at all
        """
        attempts = self.config.max_retries + 1

        for attempt in range(attempts):
            retries_left = attempt < self.config.max_retries
            logger.info(f"Fetching {url} (attempt {attempt + 1}/{attempts})")

            try:
                html = await self.renderer.render(url)
            except (BrowserLaunchError, RendererNotStartedError):
                raise
            except Exception as e:
                if retries_left and is_transient_error(e):
                    logger.warning(f"Network error for {url}, retrying: {e}")
                    await asyncio.sleep(self.config.network_error_delay)
                    continue
                logger.error(f"Error fetching page {url}: {e}")
                return None

            page = self.extractor.extract(html, url, base_host)
            score = self.extractor.score_quality(page)
            logger.debug(f"Quality score for {url}: {score}/100")

            if score < self.config.min_quality_score and retries_left:
                logger.warning(f"Low quality content ({score}/100) for {url}, retrying...")
                await asyncio.sleep(self.config.low_quality_delay)
                continue

            return page

        return None

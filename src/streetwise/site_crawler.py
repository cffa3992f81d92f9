"""Site crawler with breadth-first search for multi-page analysis."""

import asyncio
import logging
from collections import deque
from datetime import datetime
from typing import Optional, Union
from urllib.parse import urlparse

from streetwise.config import FetchConfig
from streetwise.constants import MAX_COMPETITOR_PAGES
from streetwise.errors import BrowserLaunchError, RendererNotStartedError
from streetwise.models import CrawledPage, WebsiteAnalysisResult
from streetwise.page_extractor import PageExtractor
from streetwise.page_fetcher import PageFetcher
from streetwise.renderers import PageRenderer
from streetwise.schemas import CrawlRequest
from streetwise.technical import TechnicalAnalyzer
from streetwise.topic_analyzer import TopicAnalyzer

logger = logging.getLogger(__name__)


def _url_key(url: str) -> str:
    """Identity of a URL for de-duplication: an empty path equals "/"."""
    parsed = urlparse(url)
    if not parsed.path:
        parsed = parsed._replace(path="/")
    return parsed.geturl()


class WebsiteCrawler:
    """Crawls a site breadth-first and analyzes what it finds.

    Pages are fetched one at a time in discovery order: the start page,
    then the pages it links to, then theirs. Each URL is fetched at most
    once per crawl. The renderer is started for the duration of each crawl
    and closed afterwards, even on failure.

        crawler = WebsiteCrawler(PlaywrightRenderer())
        result = await crawler.crawl_website({"url": "https://example.com"})
    """

    def __init__(
        self,
        renderer: PageRenderer,
        extractor: Optional[PageExtractor] = None,
        fetch_config: Optional[FetchConfig] = None,
        topic_analyzer: Optional[TopicAnalyzer] = None,
        technical_analyzer: Optional[TechnicalAnalyzer] = None,
    ):
        """Initialize the crawler.

        Args:
            renderer: Page renderer (browser or HTTP)
            extractor: Page extractor and quality scorer
            fetch_config: Retry policy for individual pages
            topic_analyzer: Topic and keyword extraction
            technical_analyzer: Technical issue detection and link scoring
        """
        self.renderer = renderer
        self.fetcher = PageFetcher(renderer, extractor or PageExtractor(), fetch_config)
        self.topic_analyzer = topic_analyzer or TopicAnalyzer()
        self.technical_analyzer = technical_analyzer or TechnicalAnalyzer()

    async def crawl_website(self, request: Union[CrawlRequest, dict]) -> WebsiteAnalysisResult:
        """Crawl a site and return its analysis.

        Args:
            request: CrawlRequest, or a dict of its fields

        Returns:
            WebsiteAnalysisResult for the crawled pages

        Raises:
            pydantic.ValidationError: If the request is invalid
            BrowserLaunchError: If the renderer cannot be started
        """
        if not isinstance(request, CrawlRequest):
            request = CrawlRequest(**request)

        domain = request.hostname
        logger.info(
            f"Starting crawl from {request.url} (max_pages={request.max_pages}, "
            f"delay={request.crawl_delay}ms, external_links={request.include_external_links})"
        )

        async with self.renderer:
            pages = await self._crawl(request)

        logger.info(f"Crawl complete: {len(pages)} pages from {domain}")
        return self.analyze_pages(request.url, domain, pages)

    async def _crawl(self, request: CrawlRequest) -> list[CrawledPage]:
        domain = request.hostname
        pages: list[CrawledPage] = []
        visited: set[str] = set()
        queue: deque[str] = deque([request.url])
        queued: set[str] = {_url_key(request.url)}

        while queue and len(pages) < request.max_pages:
            url = queue.popleft()
            key = _url_key(url)
            queued.discard(key)

            if key in visited:
                continue
            visited.add(key)

            logger.info(f"Crawling ({len(pages) + 1}/{request.max_pages}): {url}")
            try:
                page = await self.fetcher.fetch_page(url, domain)
            except (BrowserLaunchError, RendererNotStartedError):
                raise
            except Exception as e:
                logger.error(f"Error crawling {url}: {e}")
                page = None

            if page is None:
                logger.warning(f"No data returned for: {url}")
            else:
                pages.append(page)
                logger.info(
                    f"Successfully crawled: {url} "
                    f"(words: {page.word_count}, internal links: {len(page.internal_links)})"
                )

                links = list(page.internal_links)
                if request.include_external_links:
                    links.extend(page.external_links)

                for link in links:
                    if len(queue) >= request.max_pages:
                        break
                    link_key = _url_key(link)
                    if link_key not in visited and link_key not in queued:
                        queue.append(link)
                        queued.add(link_key)

            if queue and len(pages) < request.max_pages:
                logger.debug(f"Waiting {request.crawl_delay}ms before next page")
                await asyncio.sleep(request.crawl_delay / 1000)

        return pages

    def analyze_pages(self, url: str, domain: str, pages: list[CrawledPage]) -> WebsiteAnalysisResult:
        """Aggregate crawled pages into a site analysis."""
        headings = [heading for page in pages for heading in page.headings.all()]

        return WebsiteAnalysisResult(
            url=url,
            domain=domain,
            crawled_pages=pages,
            topics=self.topic_analyzer.extract_topics(headings, pages),
            keywords=self.topic_analyzer.extract_keywords(pages),
            internal_linking_score=self.technical_analyzer.internal_linking_score(pages),
            technical_issues=self.technical_analyzer.identify_issues(pages),
            crawled_at=datetime.now(),
        )

    async def crawl_competitor(self, url: str, max_pages: int = MAX_COMPETITOR_PAGES) -> WebsiteAnalysisResult:
        """Crawl a competitor site with a small page cap.

        Args:
            url: Competitor start URL
            max_pages: Requested page cap, limited to MAX_COMPETITOR_PAGES
        """
        return await self.crawl_website(
            CrawlRequest(url=url, max_pages=min(max_pages, MAX_COMPETITOR_PAGES))
        )

    def crawl_website_sync(self, request: Union[CrawlRequest, dict]) -> WebsiteAnalysisResult:
        """Synchronous wrapper for crawl_website.

        Args:
            request: CrawlRequest, or a dict of its fields

        Returns:
            WebsiteAnalysisResult for the crawled pages
        """
        return asyncio.run(self.crawl_website(request))

"""StreetWise SEO crawler: breadth-first site crawling and content analysis."""

__version__ = "0.1.0"

from streetwise.site_crawler import WebsiteCrawler
from streetwise.page_fetcher import PageFetcher
from streetwise.page_extractor import PageExtractor
from streetwise.renderers import PageRenderer, PlaywrightRenderer, HttpRenderer
from streetwise.topic_analyzer import TopicAnalyzer
from streetwise.technical import TechnicalAnalyzer
from streetwise.content_analyzer import ContentAnalyzer
from streetwise.output_manager import OutputManager
from streetwise.browser_config import BrowserConfig
from streetwise.models import (
    ImageRef,
    Headings,
    CrawledPage,
    KeywordStat,
    TechnicalIssue,
    WebsiteAnalysisResult,
    ContentAnalysisResult,
)
from streetwise.schemas import CrawlRequest, ProxyRequest, ThrottlingRequest
from streetwise.errors import (
    StreetwiseError,
    CrawlerError,
    BrowserLaunchError,
    RendererNotStartedError,
    TransientFetchError,
    ProxyError,
)
from streetwise.config import settings

# Infrastructure
from streetwise.infrastructure import (
    ProxyManager,
    ProxyPool,
    ProxyConfig,
    RotationStrategy,
    RequestThrottler,
    ThrottleConfig,
    FingerprintProvider,
)

__all__ = [
    # Core
    "WebsiteCrawler",
    "PageFetcher",
    "PageExtractor",
    "PageRenderer",
    "PlaywrightRenderer",
    "HttpRenderer",
    "TopicAnalyzer",
    "TechnicalAnalyzer",
    "ContentAnalyzer",
    "OutputManager",
    "BrowserConfig",
    # Models
    "ImageRef",
    "Headings",
    "CrawledPage",
    "KeywordStat",
    "TechnicalIssue",
    "WebsiteAnalysisResult",
    "ContentAnalysisResult",
    # Requests
    "CrawlRequest",
    "ProxyRequest",
    "ThrottlingRequest",
    # Errors
    "StreetwiseError",
    "CrawlerError",
    "BrowserLaunchError",
    "RendererNotStartedError",
    "TransientFetchError",
    "ProxyError",
    "settings",
    # Infrastructure
    "ProxyManager",
    "ProxyPool",
    "ProxyConfig",
    "RotationStrategy",
    "RequestThrottler",
    "ThrottleConfig",
    "FingerprintProvider",
]

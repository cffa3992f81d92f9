"""Data models for site crawling and analysis."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Literal, Optional

Severity = Literal["low", "medium", "high"]


@dataclass(frozen=True)
class ImageRef:
    """An <img> element found on a page."""

    src: str
    alt: str = ""

    def to_dict(self) -> dict:
        return {"src": self.src, "alt": self.alt}


@dataclass(frozen=True)
class Headings:
    """Heading texts of a page, in document order. Duplicates are kept."""

    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()

    def all(self) -> list[str]:
        """All headings, h1 first, then h2, then h3."""
        return [*self.h1, *self.h2, *self.h3]

    def to_dict(self) -> dict:
        return {"h1": list(self.h1), "h2": list(self.h2), "h3": list(self.h3)}


@dataclass(frozen=True)
class CrawledPage:
    """Content extracted from one rendered page."""

    url: str
    title: str
    meta_description: str = ""
    headings: Headings = field(default_factory=Headings)
    content: str = ""
    internal_links: tuple[str, ...] = ()
    external_links: tuple[str, ...] = ()
    images: tuple[ImageRef, ...] = ()
    last_modified: datetime = field(default_factory=datetime.now)

    @property
    def word_count(self) -> int:
        """Whitespace-separated tokens in the page content."""
        return len(self.content.split())

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "title": self.title,
            "meta_description": self.meta_description,
            "headings": self.headings.to_dict(),
            "content": self.content,
            "word_count": self.word_count,
            "internal_links": list(self.internal_links),
            "external_links": list(self.external_links),
            "images": [image.to_dict() for image in self.images],
            "last_modified": self.last_modified.isoformat(),
        }


@dataclass(frozen=True)
class KeywordStat:
    """Frequency of a keyword across all crawled content."""

    keyword: str
    frequency: int
    density: float  # percent of all words

    def to_dict(self) -> dict:
        return {
            "keyword": self.keyword,
            "frequency": self.frequency,
            "density": self.density,
        }


@dataclass(frozen=True)
class TechnicalIssue:
    """A per-page SEO defect."""

    type: str
    url: str
    severity: Severity
    description: str

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "url": self.url,
            "severity": self.severity,
            "description": self.description,
        }


@dataclass
class WebsiteAnalysisResult:
    """Aggregate result of crawling one site."""

    url: str
    domain: str
    crawled_pages: list[CrawledPage] = field(default_factory=list)
    topics: list[str] = field(default_factory=list)
    keywords: list[KeywordStat] = field(default_factory=list)
    internal_linking_score: float = 0.0
    technical_issues: list[TechnicalIssue] = field(default_factory=list)
    crawled_at: datetime = field(default_factory=datetime.now)

    @property
    def total_word_count(self) -> int:
        return sum(page.word_count for page in self.crawled_pages)

    @property
    def total_images(self) -> int:
        return sum(len(page.images) for page in self.crawled_pages)

    def to_dict(self, include_content: bool = True) -> dict:
        """Convert to a JSON-friendly dictionary.

        Args:
            include_content: Keep each page's full body text
        """
        pages = []
        for page in self.crawled_pages:
            page_dict = page.to_dict()
            if not include_content:
                page_dict.pop("content")
            pages.append(page_dict)

        return {
            "url": self.url,
            "domain": self.domain,
            "crawled_pages": pages,
            "total_word_count": self.total_word_count,
            "total_images": self.total_images,
            "topics": list(self.topics),
            "keywords": [keyword.to_dict() for keyword in self.keywords],
            "internal_linking_score": self.internal_linking_score,
            "technical_issues": [issue.to_dict() for issue in self.technical_issues],
            "crawled_at": self.crawled_at.isoformat(),
        }


# --- Content analysis ---

Difficulty = Literal["easy", "medium", "hard"]


@dataclass
class ContentGap:
    """A topic the site should cover but does not."""

    topic: str
    reason: str
    priority: Severity
    estimated_difficulty: Difficulty = "medium"
    competitor_advantage: Optional[str] = None


@dataclass
class LinkOpportunity:
    """A missing internal link between two related pages."""

    source: str
    target: str
    anchor_text: str


@dataclass
class ContentCluster:
    """A group of related topics and the pages that cover them."""

    main_topic: str
    pages: list[str] = field(default_factory=list)
    suggested_pages: list[str] = field(default_factory=list)
    internal_linking_opportunities: list[LinkOpportunity] = field(default_factory=list)


@dataclass
class SEOInsight:
    """An actionable finding derived from a site analysis."""

    type: Literal["content_gap", "keyword_opportunity", "technical_issue", "content_cluster"]
    title: str
    description: str
    impact: Severity
    effort: Severity
    recommendations: list[str] = field(default_factory=list)


@dataclass
class KeywordOpportunity:
    """A keyword whose usage on the site could be expanded."""

    keyword: str
    current_usage: int
    potential_usage: int
    difficulty: Difficulty
    search_volume: Literal["low", "medium", "high"]


@dataclass
class CompetitorComparison:
    """Topic overlap between the site and a competitor."""

    missing_topics: list[str] = field(default_factory=list)
    weaker_content: list[str] = field(default_factory=list)
    opportunities: list[str] = field(default_factory=list)


@dataclass
class ContentSummary:
    total_topics: int = 0
    content_quality_score: float = 0
    topical_authority_score: float = 0
    technical_seo_score: float = 0


@dataclass
class ContentAnalysisResult:
    """Content analysis of one site, optionally compared with a competitor."""

    summary: ContentSummary
    content_gaps: list[ContentGap] = field(default_factory=list)
    content_clusters: list[ContentCluster] = field(default_factory=list)
    seo_insights: list[SEOInsight] = field(default_factory=list)
    keyword_opportunities: list[KeywordOpportunity] = field(default_factory=list)
    competitor_analysis: Optional[CompetitorComparison] = None

    def to_dict(self) -> dict:
        return asdict(self)

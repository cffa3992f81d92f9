"""Output manager for organizing crawl results with timestamps."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from streetwise.models import ContentAnalysisResult, WebsiteAnalysisResult

logger = logging.getLogger(__name__)


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that handles datetime objects."""

    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class OutputManager:
    """Manages organized output of crawl results with timestamps and directories."""

    def __init__(self, base_output_dir: str = "crawls"):
        """Initialize output manager.

        Args:
            base_output_dir: Base directory for all crawl outputs
        """
        self.base_output_dir = Path(base_output_dir)
        self.base_output_dir.mkdir(parents=True, exist_ok=True)

    def create_crawl_directory(self, start_url: str, timestamp: Optional[datetime] = None) -> Path:
        """Create a timestamped directory for this crawl.

        Args:
            start_url: The starting URL that was crawled
            timestamp: Optional timestamp (defaults to now)

        Returns:
            Path to the created directory

        Example structure:
            crawls/
            └── example.com/
                └── 2025-11-23_143022/
                    ├── analysis.json
                    ├── content_analysis.json
                    ├── technical_issues.json
                    ├── summary.txt
                    └── pages/
                        ├── example.com_index.json
                        └── example.com_about.json
        """
        if timestamp is None:
            timestamp = datetime.now()

        domain = urlparse(start_url).netloc.replace(":", "_").replace("/", "_")
        timestamp_str = timestamp.strftime("%Y-%m-%d_%H%M%S")

        crawl_dir = self.base_output_dir / domain / timestamp_str
        crawl_dir.mkdir(parents=True, exist_ok=True)
        (crawl_dir / "pages").mkdir(exist_ok=True)

        return crawl_dir

    def save_analysis(
        self,
        analysis: WebsiteAnalysisResult,
        content_analysis: Optional[ContentAnalysisResult] = None,
        timestamp: Optional[datetime] = None,
    ) -> Path:
        """Save a site analysis to a new timestamped directory.

        Args:
            analysis: Site analysis to save
            content_analysis: Optional content analysis of the same site
            timestamp: Optional timestamp for the directory name

        Returns:
            Path to the crawl directory
        """
        crawl_dir = self.create_crawl_directory(analysis.url, timestamp or analysis.crawled_at)

        self._save_json(crawl_dir / "analysis.json", analysis.to_dict(include_content=False))
        self._save_json(
            crawl_dir / "technical_issues.json",
            [issue.to_dict() for issue in analysis.technical_issues],
        )

        if content_analysis is not None:
            self._save_json(crawl_dir / "content_analysis.json", content_analysis.to_dict())

        pages_dir = crawl_dir / "pages"
        for page in analysis.crawled_pages:
            self._save_json(pages_dir / f"{self._url_to_filename(page.url)}.json", page.to_dict())

        self._save_summary(crawl_dir / "summary.txt", analysis, content_analysis)

        logger.info(f"Saved crawl results to {crawl_dir}")
        return crawl_dir

    def get_previous_crawls(self, domain: str) -> list[Path]:
        """Get list of previous crawl directories for a domain, newest first."""
        domain_dir = self.base_output_dir / domain
        if not domain_dir.exists():
            return []

        return sorted((d for d in domain_dir.iterdir() if d.is_dir()), reverse=True)

    def load_analysis(self, crawl_dir: Path) -> dict:
        """Load the saved analysis.json of a crawl directory."""
        return self._load_json(Path(crawl_dir) / "analysis.json")

    def _url_to_filename(self, url: str) -> str:
        """Convert URL to safe filename.

        Examples:
            https://example.com -> example.com_index
            https://example.com/about -> example.com_about
            https://example.com/blog/post-1 -> example.com_blog_post-1
        """
        parsed = urlparse(url)
        domain = parsed.netloc.replace(":", "_")
        path = parsed.path.strip("/").replace("/", "_").replace(".", "_")

        if not path:
            path = "index"

        filename = f"{domain}_{path}"[:200]
        return "".join(c if c.isalnum() or c in "_-." else "_" for c in filename)

    def _save_json(self, filepath: Path, data) -> None:
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, cls=DateTimeEncoder)

    def _load_json(self, filepath: Path) -> dict:
        with open(filepath, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save_summary(
        self,
        filepath: Path,
        analysis: WebsiteAnalysisResult,
        content_analysis: Optional[ContentAnalysisResult],
    ) -> None:
        """Save human-readable summary."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(format_summary(analysis, content_analysis))


def format_summary(
    analysis: WebsiteAnalysisResult,
    content_analysis: Optional[ContentAnalysisResult] = None,
) -> str:
    """Render a plain-text report of a site analysis."""
    lines = [
        "=" * 60,
        "SEO CRAWL SUMMARY",
        "=" * 60,
        "",
        f"Start URL: {analysis.url}",
        f"Domain: {analysis.domain}",
        f"Crawled at: {analysis.crawled_at.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Total pages: {len(analysis.crawled_pages)}",
        f"Total words: {analysis.total_word_count}",
        f"Total images: {analysis.total_images}",
        f"Internal linking score: {analysis.internal_linking_score:.1f}/100",
        "",
        "TOP TOPICS",
        "-" * 60,
    ]
    lines.extend(f"{i:3d}. {topic}" for i, topic in enumerate(analysis.topics[:10], 1))

    lines += ["", "TOP KEYWORDS", "-" * 60]
    lines.extend(
        f"{kw.keyword}: {kw.frequency} ({kw.density:.2f}%)" for kw in analysis.keywords
    )

    lines += ["", f"TECHNICAL ISSUES ({len(analysis.technical_issues)})", "-" * 60]
    lines.extend(
        f"[{issue.severity.upper()}] {issue.description} - {issue.url}"
        for issue in analysis.technical_issues
    )

    if content_analysis is not None:
        summary = content_analysis.summary
        lines += [
            "",
            "CONTENT ANALYSIS",
            "-" * 60,
            f"Content quality score: {summary.content_quality_score:.0f}/100",
            f"Topical authority score: {summary.topical_authority_score:.0f}/100",
            f"Technical SEO score: {summary.technical_seo_score:.0f}/100",
            "",
            "Content gaps:",
        ]
        lines.extend(
            f"  - [{gap.priority}] {gap.topic}: {gap.reason}" for gap in content_analysis.content_gaps
        )
        lines += ["", "Insights:"]
        for insight in content_analysis.seo_insights:
            lines.append(f"  * {insight.title} (impact: {insight.impact}, effort: {insight.effort})")
            lines.extend(f"      - {rec}" for rec in insight.recommendations)

    lines += ["", "PAGES CRAWLED", "-" * 60]
    lines.extend(f"{i:3d}. {page.url}" for i, page in enumerate(analysis.crawled_pages, 1))

    return "\n".join(lines) + "\n"

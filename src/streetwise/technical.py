"""Technical SEO analyzer for identifying per-page issues."""

import logging

from streetwise.constants import (
    IDEAL_INTERNAL_LINKS_PER_PAGE,
    PLACEHOLDER_TITLE,
    THIN_CONTENT_CRITICAL_WORDS,
    THIN_CONTENT_WORDS,
)
from streetwise.models import CrawledPage, TechnicalIssue

logger = logging.getLogger(__name__)


class TechnicalAnalyzer:
    """Analyzes technical SEO issues across crawled pages."""

    # Thresholds used for issue detection
    THRESHOLDS = {
        'thin_content': {'operator': '<', 'value': THIN_CONTENT_WORDS, 'unit': 'words'},
        'thin_content_critical': {'operator': '<', 'value': THIN_CONTENT_CRITICAL_WORDS, 'unit': 'words'},
        'ideal_internal_links': {'operator': '>=', 'value': IDEAL_INTERNAL_LINKS_PER_PAGE, 'unit': 'links/page'},
    }

    def identify_issues(self, pages: list[CrawledPage]) -> list[TechnicalIssue]:
        """Check every page for missing title, description, H1 and thin content.

        Args:
            pages: Crawled pages

        Returns:
            Issues in page order; a page can contribute several issues
        """
        issues: list[TechnicalIssue] = []

        for page in pages:
            if not page.title or page.title == PLACEHOLDER_TITLE:
                issues.append(TechnicalIssue(
                    type="missing_title",
                    url=page.url,
                    severity="high",
                    description="Page is missing a title tag",
                ))

            if not page.meta_description:
                issues.append(TechnicalIssue(
                    type="missing_meta_description",
                    url=page.url,
                    severity="medium",
                    description="Page is missing a meta description",
                ))

            if not page.headings.h1:
                issues.append(TechnicalIssue(
                    type="missing_h1",
                    url=page.url,
                    severity="high",
                    description="Page is missing an H1 heading",
                ))

            word_count = page.word_count
            if word_count < THIN_CONTENT_WORDS:
                issues.append(TechnicalIssue(
                    type="thin_content",
                    url=page.url,
                    severity="high" if word_count < THIN_CONTENT_CRITICAL_WORDS else "medium",
                    description=f"Page has thin content ({word_count} words)",
                ))

        logger.info(f"Identified {len(issues)} technical issues across {len(pages)} pages")
        return issues

    def internal_linking_score(self, pages: list[CrawledPage]) -> float:
        """Score internal linking from 0 to 100.

        An average of ``IDEAL_INTERNAL_LINKS_PER_PAGE`` internal links per page
        or more scores 100; no pages score 0.
        """
        if not pages:
            return 0.0

        total_links = sum(len(page.internal_links) for page in pages)
        average = total_links / len(pages)
        return min(100.0, average / IDEAL_INTERNAL_LINKS_PER_PAGE * 100)

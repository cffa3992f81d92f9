"""Content gap, topic cluster and keyword opportunity analysis.

Works purely on a WebsiteAnalysisResult (and optionally a competitor's),
so it can be re-run on saved crawls without touching the network.
"""

import logging
import re
from typing import Optional

from streetwise.constants import PRIORITY_ORDER, THIN_AVERAGE_WORDS, WEAK_LINKING_SCORE
from streetwise.models import (
    CompetitorComparison,
    ContentAnalysisResult,
    ContentCluster,
    ContentGap,
    ContentSummary,
    CrawledPage,
    KeywordOpportunity,
    LinkOpportunity,
    SEOInsight,
    WebsiteAnalysisResult,
)

logger = logging.getLogger(__name__)

# (topic, reason, priority)
BUSINESS_ESSENTIAL_TOPICS = [
    ("About Us", "Builds trust and credibility", "high"),
    ("Services/Products", "Core business offerings", "high"),
    ("Contact Information", "Essential for lead generation", "high"),
    ("Pricing", "Qualifies leads and sets expectations", "medium"),
    ("FAQ", "Reduces support burden and addresses objections", "medium"),
    ("Testimonials/Reviews", "Social proof and trust building", "medium"),
    ("Case Studies/Portfolio", "Demonstrates expertise and results", "medium"),
    ("Blog/Resources", "SEO value and thought leadership", "low"),
]

# Domain keywords -> gaps typical for that kind of business
INDUSTRY_GAPS = [
    (("restaurant", "cafe", "food"), [
        ContentGap("Menu with Prices", "Essential for restaurant customers", "high", "easy"),
        ContentGap("Location and Hours", "Critical information for visitors", "high", "easy"),
        ContentGap("Online Ordering/Reservation", "Modern customer expectation", "medium", "hard"),
    ]),
    (("shop", "store"), [
        ContentGap("Product Categories", "Helps users navigate products", "high", "medium"),
        ContentGap("Shipping Information", "Reduces cart abandonment", "medium", "easy"),
        ContentGap("Return Policy", "Builds purchase confidence", "medium", "easy"),
    ]),
]

SERVICE_GAPS = [
    ContentGap("Service Areas", "Defines geographic coverage", "medium", "easy"),
    ContentGap("Process Overview", "Sets customer expectations", "medium", "medium"),
]

CLUSTER_PAGE_TEMPLATES = [
    "{topic} overview",
    "{topic} guide",
    "{topic} best practices",
    "{topic} examples",
    "{topic} comparison",
    "how to {topic}",
    "{topic} tutorial",
    "{topic} tips",
    "{topic} mistakes to avoid",
    "{topic} tools and resources",
]

HARD_TOPIC_WORDS = ("best", "top", "vs", "review", "comparison", "guide")
EASY_TOPIC_WORDS = ("how to", "what is", "tutorial", "basics")

MAX_SUGGESTED_PAGES = 5
MAX_LINK_OPPORTUNITIES = 10
MAX_KEYWORD_CANDIDATES = 10
MAX_KEYWORD_TARGET = 10
MAX_COMPETITOR_TOPICS = 10
MAX_COMPETITOR_OPPORTUNITIES = 5


def capitalize_topic(topic: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in re.split(r"\s+", topic))


def estimate_difficulty(topic: str) -> str:
    topic_lower = topic.lower()
    if any(word in topic_lower for word in HARD_TOPIC_WORDS):
        return "hard"
    if any(word in topic_lower for word in EASY_TOPIC_WORDS):
        return "easy"
    return "medium"


def _average_words(website: WebsiteAnalysisResult) -> float:
    if not website.crawled_pages:
        return 0.0
    return website.total_word_count / len(website.crawled_pages)


class ContentAnalyzer:
    """Turns a site analysis into content gaps, clusters and insights."""

    def analyze(
        self,
        website: WebsiteAnalysisResult,
        competitor: Optional[WebsiteAnalysisResult] = None,
    ) -> ContentAnalysisResult:
        """Run the full content analysis.

        Args:
            website: Analysis of the site being audited
            competitor: Optional analysis of a competitor site

        Returns:
            ContentAnalysisResult with summary scores
        """
        gaps = self.identify_content_gaps(website, competitor)
        clusters = self.identify_content_clusters(website)

        result = ContentAnalysisResult(
            summary=ContentSummary(
                total_topics=len(website.topics),
                content_quality_score=self.content_quality_score(website),
                topical_authority_score=self.topical_authority_score(website, clusters),
                technical_seo_score=self.technical_seo_score(website),
            ),
            content_gaps=gaps,
            content_clusters=clusters,
            seo_insights=self.generate_insights(website, gaps),
            keyword_opportunities=self.identify_keyword_opportunities(website),
            competitor_analysis=self.compare_with_competitor(website, competitor) if competitor else None,
        )

        logger.info(
            f"Content analysis for {website.domain}: {len(result.content_gaps)} gaps, "
            f"{len(result.content_clusters)} clusters, {len(result.seo_insights)} insights"
        )
        return result

    # --- Gaps ---

    def identify_content_gaps(
        self,
        website: WebsiteAnalysisResult,
        competitor: Optional[WebsiteAnalysisResult] = None,
    ) -> list[ContentGap]:
        """Missing essential, industry and competitor topics, highest priority first."""
        gaps: list[ContentGap] = []
        existing_topics = {topic.lower() for topic in website.topics}

        for topic, reason, priority in BUSINESS_ESSENTIAL_TOPICS:
            if not self._topic_covered(topic, existing_topics, website.crawled_pages):
                gaps.append(ContentGap(topic, reason, priority, estimate_difficulty(topic)))

        gaps.extend(self._industry_gaps(website))

        if competitor:
            for topic in dict.fromkeys(t.lower() for t in competitor.topics):
                if topic not in existing_topics:
                    gaps.append(ContentGap(
                        topic=capitalize_topic(topic),
                        reason="Competitor ranks for this topic",
                        priority="medium",
                        estimated_difficulty="medium",
                        competitor_advantage="Currently missing this topic in your content",
                    ))

        return sorted(gaps, key=lambda gap: PRIORITY_ORDER[gap.priority], reverse=True)

    def _topic_covered(self, topic: str, existing_topics: set[str], pages: list[CrawledPage]) -> bool:
        needle = topic.lower()
        if needle in existing_topics:
            return True
        return any(
            needle in page.title.lower() or any(needle in h1.lower() for h1 in page.headings.h1)
            for page in pages
        )

    def _industry_gaps(self, website: WebsiteAnalysisResult) -> list[ContentGap]:
        domain = website.domain.lower()
        gaps: list[ContentGap] = []

        for keywords, industry_gaps in INDUSTRY_GAPS:
            if any(keyword in domain for keyword in keywords):
                gaps.extend(ContentGap(**vars(gap)) for gap in industry_gaps)

        if "service" in domain or any("service" in topic for topic in website.topics):
            gaps.extend(ContentGap(**vars(gap)) for gap in SERVICE_GAPS)

        return gaps

    # --- Clusters ---

    def identify_content_clusters(self, website: WebsiteAnalysisResult) -> list[ContentCluster]:
        """Clusters of related topics that at least one page covers."""
        clusters = []

        for group in self._group_related_topics(website.topics):
            lowered = [topic.lower() for topic in group]
            related_pages = [
                page for page in website.crawled_pages
                if any(
                    topic in page.title.lower()
                    or any(topic in h.lower() for h in page.headings.h1)
                    or any(topic in h.lower() for h in page.headings.h2)
                    for topic in lowered
                )
            ]
            if not related_pages:
                continue

            clusters.append(ContentCluster(
                main_topic=capitalize_topic(group[0]),
                pages=[page.url for page in related_pages],
                suggested_pages=self._suggest_cluster_pages(group, related_pages),
                internal_linking_opportunities=self._linking_opportunities(related_pages, group),
            ))

        return clusters

    def _group_related_topics(self, topics: list[str]) -> list[list[str]]:
        groups = []
        used: set[str] = set()

        for topic in topics:
            if topic.lower() in used:
                continue
            related = [t for t in topics if t.lower() not in used and self._topics_related(topic, t)]
            if len(related) > 1:
                groups.append(related)
                used.update(t.lower() for t in related)

        return groups

    @staticmethod
    def _topics_related(topic1: str, topic2: str) -> bool:
        """Related topics share at least one word but not all of them."""
        words1 = topic1.lower().split()
        words2 = topic2.lower().split()
        common = [word for word in words1 if word in words2]
        return 0 < len(common) < max(len(words1), len(words2))

    def _suggest_cluster_pages(self, group: list[str], pages: list[CrawledPage]) -> list[str]:
        base_topic = group[0].lower()
        suggestions = []
        for template in CLUSTER_PAGE_TEMPLATES:
            suggestion = template.format(topic=base_topic)
            exists = any(
                suggestion in page.title.lower() or suggestion in page.content.lower()
                for page in pages
            )
            if not exists:
                suggestions.append(suggestion)
        return suggestions[:MAX_SUGGESTED_PAGES]

    def _linking_opportunities(self, pages: list[CrawledPage], group: list[str]) -> list[LinkOpportunity]:
        """Pairs of cluster pages where the source mentions a topic but does not link the target."""
        opportunities = []
        for source in pages:
            source_content = source.content.lower()
            for target in pages:
                if source is target or target.url in source.internal_links:
                    continue
                for topic in group:
                    if topic.lower() in source_content:
                        opportunities.append(LinkOpportunity(
                            source=source.url,
                            target=target.url,
                            anchor_text=capitalize_topic(topic),
                        ))
        return opportunities[:MAX_LINK_OPPORTUNITIES]

    # --- Insights ---

    def generate_insights(self, website: WebsiteAnalysisResult, gaps: list[ContentGap]) -> list[SEOInsight]:
        insights = []

        high_priority_gaps = [gap for gap in gaps if gap.priority == "high"]
        if high_priority_gaps:
            insights.append(SEOInsight(
                type="content_gap",
                title="Missing Essential Content",
                description=(
                    f"Your website is missing {len(high_priority_gaps)} critical content "
                    f"sections that customers expect."
                ),
                impact="high",
                effort="medium",
                recommendations=[f"Add a {gap.topic} page: {gap.reason}" for gap in high_priority_gaps],
            ))

        high_severity = [issue for issue in website.technical_issues if issue.severity == "high"]
        if high_severity:
            insights.append(SEOInsight(
                type="technical_issue",
                title="Critical Technical SEO Issues",
                description=(
                    f"Found {len(high_severity)} high-priority technical issues that may "
                    f"impact search rankings."
                ),
                impact="high",
                effort="low",
                recommendations=[issue.description for issue in high_severity],
            ))

        average_words = _average_words(website)
        if website.crawled_pages and average_words < THIN_AVERAGE_WORDS:
            insights.append(SEOInsight(
                type="content_cluster",
                title="Content Could Be More Comprehensive",
                description=(
                    f"Average page has {round(average_words)} words. Consider expanding "
                    f"content to improve SEO value."
                ),
                impact="medium",
                effort="high",
                recommendations=[
                    "Expand existing pages with more detailed information",
                    "Add examples and case studies",
                    "Include FAQ sections on relevant pages",
                ],
            ))

        if website.internal_linking_score < WEAK_LINKING_SCORE:
            insights.append(SEOInsight(
                type="content_cluster",
                title="Improve Internal Linking",
                description=(
                    "Your internal linking structure could be improved to help users "
                    "and search engines navigate your content."
                ),
                impact="medium",
                effort="low",
                recommendations=[
                    "Add links between related pages",
                    "Create topic clusters with pillar pages",
                    "Use descriptive anchor text for internal links",
                ],
            ))

        return insights

    # --- Keywords ---

    def identify_keyword_opportunities(self, website: WebsiteAnalysisResult) -> list[KeywordOpportunity]:
        """Top keywords whose usage could reasonably be doubled (up to 10 uses)."""
        page_count = len(website.crawled_pages) or 1
        opportunities = []

        for stat in website.keywords[:MAX_KEYWORD_CANDIDATES]:
            potential = min(stat.frequency * 2, MAX_KEYWORD_TARGET)
            if potential <= stat.frequency:
                continue
            opportunities.append(KeywordOpportunity(
                keyword=stat.keyword,
                current_usage=stat.frequency,
                potential_usage=potential,
                difficulty=self._keyword_difficulty(stat.density),
                search_volume=self._search_volume(stat.frequency / page_count),
            ))

        return opportunities

    @staticmethod
    def _keyword_difficulty(density: float) -> str:
        if density > 2:
            return "easy"
        if density < 0.5:
            return "hard"
        return "medium"

    @staticmethod
    def _search_volume(average_frequency: float) -> str:
        if average_frequency > 5:
            return "high"
        if average_frequency > 2:
            return "medium"
        return "low"

    # --- Competitor ---

    def compare_with_competitor(
        self, website: WebsiteAnalysisResult, competitor: WebsiteAnalysisResult
    ) -> CompetitorComparison:
        my_topics = list(dict.fromkeys(t.lower() for t in website.topics))
        their_topics = list(dict.fromkeys(t.lower() for t in competitor.topics))

        missing = [topic for topic in their_topics if topic not in my_topics]
        unique_to_us = [topic for topic in my_topics if topic not in their_topics]

        return CompetitorComparison(
            missing_topics=missing[:MAX_COMPETITOR_TOPICS],
            weaker_content=unique_to_us[:MAX_COMPETITOR_TOPICS],
            opportunities=[
                f"Create content about {capitalize_topic(topic)} that competitors rank for"
                for topic in missing[:MAX_COMPETITOR_OPPORTUNITIES]
            ],
        )

    # --- Scores ---

    def content_quality_score(self, website: WebsiteAnalysisResult) -> float:
        score = 100 - sum(
            {"high": 20, "medium": 10, "low": 5}[issue.severity]
            for issue in website.technical_issues
        )

        average_words = _average_words(website)
        if average_words < 300:
            score -= 15
        elif average_words < 500:
            score -= 5

        return max(0, min(100, score))

    def topical_authority_score(self, website: WebsiteAnalysisResult, clusters: list[ContentCluster]) -> float:
        score = min(len(website.topics) * 2, 40)
        score += len(clusters) * 10
        score += website.internal_linking_score * 0.3
        return max(0, min(100, score))

    def technical_seo_score(self, website: WebsiteAnalysisResult) -> float:
        score = 100 - sum(
            {"high": 25, "medium": 15, "low": 5}[issue.severity]
            for issue in website.technical_issues
        )
        return max(0, min(100, score))

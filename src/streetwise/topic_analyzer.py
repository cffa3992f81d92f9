"""Site topic and keyword extraction.

Topics are weighted phrases drawn from headings, titles, meta descriptions
and the opening of each page's body text. Related heading terms are grouped
so a recurring theme gets boosted as a whole, and the final ranking favours
multi-word topics that actually appear on the crawled pages.
"""

import logging
import re
from collections import Counter
from typing import Iterable, Optional

from streetwise.config import TopicWeights, default_topic_weights
from streetwise.constants import (
    BUSINESS_TERMS,
    CONTENT_WORDS_FOR_TOPICS,
    MAX_KEYWORDS,
    MAX_TOPICS,
    MIN_TOPIC_TEXT_LENGTH,
    STOP_WORDS,
)
from streetwise.models import CrawledPage, KeywordStat

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace."""
    text = _NON_WORD.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def is_stop_word(word: str) -> bool:
    return word.lower() in STOP_WORDS


def is_business_relevant(term: str) -> bool:
    """A term is relevant if it contains, or is contained in, a business term."""
    return any(business in term or term in business for business in BUSINESS_TERMS)


def extract_key_terms(text: str) -> list[str]:
    """Candidate terms of a normalized text.

    2-word phrases whose words are longer than 2 characters, 3-word phrases
    whose words are longer than 2 characters and whose middle word is not a
    stop word, and every single word longer than 3 characters.
    """
    words = text.split(" ")
    terms = []

    for i in range(len(words) - 1):
        first, second = words[i], words[i + 1]
        if len(first) > 2 and len(second) > 2:
            terms.append(f"{first} {second}")

        if i < len(words) - 2:
            third = words[i + 2]
            if len(first) > 2 and len(second) > 2 and len(third) > 2 and not is_stop_word(second):
                terms.append(f"{first} {second} {third}")

    terms.extend(word for word in words if len(word) > 3)
    return terms


def terms_related(term1: str, term2: str) -> bool:
    """Terms are related when they share a word longer than 3 characters."""
    words2 = term2.split(" ")
    return any(word in words2 and len(word) > 3 for word in term1.split(" "))


class TopicAnalyzer:
    """Extracts ranked topics and keyword statistics from crawled pages."""

    def __init__(
        self,
        weights: Optional[TopicWeights] = None,
        max_topics: int = MAX_TOPICS,
        max_keywords: int = MAX_KEYWORDS,
    ):
        self.weights = weights or default_topic_weights
        self.max_topics = max_topics
        self.max_keywords = max_keywords

    def extract_topics(self, headings: Iterable[str], pages: list[CrawledPage]) -> list[str]:
        """Extract up to ``max_topics`` topics, most relevant first.

        Args:
            headings: All h1, h2 and h3 texts of the crawled pages
            pages: Crawled pages

        Returns:
            Ranked topic strings (lowercase, normalized)
        """
        w = self.weights
        frequency: dict[str, float] = {}
        groups: dict[str, set[str]] = {}

        def add(term: str, weight: float) -> None:
            frequency[term] = frequency.get(term, 0) + weight

        # Headings: the whole heading plus its grouped key terms
        for heading in headings:
            clean_heading = normalize_text(heading)
            if len(clean_heading) < MIN_TOPIC_TEXT_LENGTH:
                continue

            add(clean_heading, w.heading)

            for term in extract_key_terms(clean_heading):
                if len(term) > w.heading_term_min_length:
                    add(term, w.heading_term)
                    base = self._find_base_term(term, groups)
                    groups.setdefault(base, set()).add(term)

        # Titles and meta descriptions; a page with a too-short title adds nothing
        for page in pages:
            clean_title = normalize_text(page.title)
            if len(clean_title) < MIN_TOPIC_TEXT_LENGTH:
                continue

            add(clean_title, w.title)
            for term in extract_key_terms(clean_title):
                if len(term) > w.title_term_min_length and not is_stop_word(term):
                    add(term, w.title_term)

            if page.meta_description:
                for term in extract_key_terms(normalize_text(page.meta_description)):
                    if len(term) > w.meta_term_min_length and not is_stop_word(term):
                        add(term, w.meta_term)

        # Opening body text, business-relevant terms only
        for page in pages:
            sample = " ".join(page.content.split()[:CONTENT_WORDS_FOR_TOPICS])
            for term in extract_key_terms(normalize_text(sample)):
                if (
                    len(term) > w.content_term_min_length
                    and not is_stop_word(term)
                    and is_business_relevant(term)
                ):
                    add(term, w.content_term)

        consolidated = self._consolidate(frequency, groups)
        topics = self._rank(consolidated, pages)

        logger.info(f"Extracted {len(topics)} topics from {len(pages)} pages ({len(groups)} topic groups)")
        return topics

    def _find_base_term(self, term: str, groups: dict[str, set[str]]) -> str:
        """Base of the first group containing or related to the term, else the term."""
        for base, members in groups.items():
            if term in members or terms_related(base, term):
                return base
        return term

    def _consolidate(self, frequency: dict[str, float], groups: dict[str, set[str]]) -> dict[str, float]:
        """Boost each multi-member group's base by a share of the group's weight."""
        consolidated = dict(frequency)
        for base, members in groups.items():
            if len(members) > 1:
                total = sum(consolidated.get(term, 0) for term in members)
                consolidated[base] = consolidated.get(base, 0) + total * self.weights.cluster_bonus
        return consolidated

    def _rank(self, frequency: dict[str, float], pages: list[CrawledPage]) -> list[str]:
        w = self.weights
        lowered = [(page.title.lower(), page.content.lower()) for page in pages]

        scored = []
        for topic, weight in frequency.items():
            contexts = sum(1 for title, content in lowered if topic in title or topic in content)
            score = weight + contexts * w.context_bonus
            if " " in topic:
                score *= w.phrase_multiplier
            scored.append((topic, score))

        # sorted() is stable, so equal scores keep first-seen order
        scored = sorted(scored, key=lambda item: item[1], reverse=True)
        return [topic for topic, _ in scored[:self.max_topics]]

    def extract_keywords(self, pages: list[CrawledPage]) -> list[KeywordStat]:
        """Most frequent content words across all pages.

        Words longer than 3 characters that are not stop words are counted;
        density is the share of all words, as a percentage.
        """
        words = " ".join(page.content for page in pages).lower().split()
        total_words = len(words)
        counts = Counter(word for word in words if len(word) > 3 and not is_stop_word(word))

        # Counter preserves first-seen order, sorted() keeps it for ties
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [
            KeywordStat(keyword=word, frequency=count, density=count / total_words * 100)
            for word, count in ranked[:self.max_keywords]
        ]

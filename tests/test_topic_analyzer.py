"""Tests for topic and keyword extraction."""

import pytest

from streetwise.models import CrawledPage
from streetwise.topic_analyzer import (
    TopicAnalyzer,
    extract_key_terms,
    is_business_relevant,
    is_stop_word,
    normalize_text,
    terms_related,
)


@pytest.fixture
def analyzer():
    return TopicAnalyzer()


def make_page(**overrides):
    fields = {"url": "https://example.com/", "title": "No Title"}
    fields.update(overrides)
    return CrawledPage(**fields)


class TestTextHelpers:
    """Tests for the text helpers."""

    def test_normalize_text(self):
        assert normalize_text("  Drain-Cleaning & Repairs! ") == "drain-cleaning repairs"

    def test_stop_words_case_insensitive(self):
        assert is_stop_word("The")
        assert not is_stop_word("plumbing")

    def test_business_relevance(self):
        assert is_business_relevant("plumbing services")
        assert not is_business_relevant("pipe repair")

    def test_extract_key_terms(self):
        assert extract_key_terms("drain cleaning services") == [
            "drain cleaning",
            "drain cleaning services",
            "cleaning services",
            "drain",
            "cleaning",
            "services",
        ]

    def test_key_terms_skip_short_words(self):
        terms = extract_key_terms("seo in law firms")
        assert "seo in" not in terms
        assert "law firms" in terms
        assert "firms" in terms
        assert "law" not in terms

    def test_three_word_phrase_needs_content_middle_word(self):
        assert "repairs and installs" not in extract_key_terms("repairs and installs")

    def test_terms_related(self):
        assert terms_related("drain cleaning", "cleaning services")
        assert not terms_related("web app", "web design")


class TestExtractTopics:
    """Tests for TopicAnalyzer.extract_topics."""

    def test_heading_group_ranked_first(self, analyzer):
        topics = analyzer.extract_topics(["Plumbing Services"], [])

        assert topics == ["plumbing services", "plumbing", "services"]

    def test_short_headings_ignored(self, analyzer):
        assert analyzer.extract_topics(["FAQ", "Hi"], []) == []

    def test_placeholder_title_is_a_topic(self, analyzer):
        page = make_page(meta_description="Emergency plumbing repairs available")

        topics = analyzer.extract_topics([], [page])

        assert "no title" in topics
        assert "emergency plumbing" in topics

    def test_short_title_skips_whole_page(self, analyzer):
        page = make_page(title="Hi", meta_description="Emergency plumbing repairs available")

        assert analyzer.extract_topics([], [page]) == []

    def test_title_weighted(self, analyzer):
        page = make_page(title="Emergency Plumbing Repairs")

        topics = analyzer.extract_topics([], [page])

        assert topics[0] == "emergency plumbing repairs"

    def test_content_terms_must_be_business_relevant(self, analyzer):
        page = make_page(content="Professional plumbing crew handles pipe repair")

        topics = analyzer.extract_topics([], [page])

        assert "professional plumbing" in topics
        assert "pipe repair" not in topics

    def test_context_bonus_favours_terms_on_pages(self, analyzer):
        page = make_page(content="Licensed electrical contractors")

        topics = analyzer.extract_topics(["Roof Repair", "Electrical Contractors"], [page])

        assert topics.index("electrical contractors") < topics.index("roof repair")

    def test_topic_limit(self, analyzer):
        headings = [f"Service Number {word}" for word in (
            "alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf",
            "hotel", "india", "juliet", "kilo", "lima", "mike",
        )]

        topics = analyzer.extract_topics(headings, [])

        assert len(topics) == 25
        assert len(set(topics)) == 25

    def test_deterministic(self, analyzer):
        page = make_page(title="Drain Cleaning Experts", content="Our drain cleaning team is local")
        headings = ["Drain Cleaning", "Water Heater Repair"]

        assert analyzer.extract_topics(headings, [page]) == analyzer.extract_topics(headings, [page])


class TestExtractKeywords:
    """Tests for TopicAnalyzer.extract_keywords."""

    def test_counts_and_density(self, analyzer):
        page = make_page(content="plumbing plumbing plumbing drain drain the and repair")

        keywords = analyzer.extract_keywords([page])

        assert [(kw.keyword, kw.frequency) for kw in keywords] == [
            ("plumbing", 3),
            ("drain", 2),
            ("repair", 1),
        ]
        assert keywords[0].density == pytest.approx(37.5)

    def test_case_insensitive_across_pages(self, analyzer):
        pages = [make_page(content="Plumbing"), make_page(content="plumbing PLUMBING")]

        keywords = analyzer.extract_keywords(pages)

        assert keywords[0].keyword == "plumbing"
        assert keywords[0].frequency == 3

    def test_ties_keep_first_seen_order(self, analyzer):
        page = make_page(content="zebra apple zebra apple")

        assert [kw.keyword for kw in analyzer.extract_keywords([page])] == ["zebra", "apple"]

    def test_keyword_limit(self, analyzer):
        words = [f"keyword{i}" for i in range(30)]
        page = make_page(content=" ".join(words))

        assert len(analyzer.extract_keywords([page])) == 15

    def test_no_content(self, analyzer):
        assert analyzer.extract_keywords([make_page()]) == []
        assert analyzer.extract_keywords([]) == []

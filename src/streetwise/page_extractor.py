"""HTML content extraction and content quality scoring."""

import logging
import re
from typing import Optional
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup

from streetwise.config import QualityScoreWeights, default_quality_weights
from streetwise.constants import NON_CONTENT_TAGS, PLACEHOLDER_TITLE
from streetwise.models import CrawledPage, Headings, ImageRef

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Collapse all whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def resolve_link(href: str, page_url: str) -> Optional[str]:
    """Resolve an href against the page URL.

    Returns:
        Absolute http(s) URL without fragment, or None if the href does not
        resolve to a crawlable URL
    """
    try:
        absolute, _ = urldefrag(urljoin(page_url, href.strip()))
        parsed = urlparse(absolute)
        # Accessing .port validates it
        parsed.port
    except ValueError:
        return None

    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        return None
    return absolute


class PageExtractor:
    """Extracts structured page content from rendered HTML and scores it.

    Extraction and scoring are pure: the same HTML and URL always yield the
    same page fields and the same score.
    """

    def __init__(self, weights: Optional[QualityScoreWeights] = None):
        """Initialize the extractor.

        Args:
            weights: Points and thresholds of the quality score
        """
        self.weights = weights or default_quality_weights

    def extract(self, html: str, url: str, base_host: Optional[str] = None) -> CrawledPage:
        """Extract page content from HTML.

        Args:
            html: Rendered HTML
            url: The page URL, used to resolve relative links
            base_host: Hostname that counts as internal (defaults to the
                page's own hostname)

        Returns:
            CrawledPage with extracted information
        """
        soup = BeautifulSoup(html, "html.parser")
        if base_host is None:
            base_host = urlparse(url).hostname or ""

        # Title
        title_tag = soup.find("title")
        title = title_tag.get_text().strip() if title_tag else ""
        title = title or PLACEHOLDER_TITLE

        # Meta description
        description_tag = soup.find("meta", attrs={"name": "description"})
        meta_description = (description_tag.get("content") or "").strip() if description_tag else ""

        headings = Headings(
            h1=self._extract_headings(soup, "h1"),
            h2=self._extract_headings(soup, "h2"),
            h3=self._extract_headings(soup, "h3"),
        )

        internal_links, external_links = self._extract_links(soup, url, base_host)
        images = self._extract_images(soup)

        # Body text, with non-visible elements removed
        for tag in soup.find_all(list(NON_CONTENT_TAGS)):
            tag.decompose()
        body = soup.body or soup
        content = clean_text(body.get_text(separator=" "))

        page = CrawledPage(
            url=url,
            title=title,
            meta_description=meta_description,
            headings=headings,
            content=content,
            internal_links=internal_links,
            external_links=external_links,
            images=images,
        )

        logger.debug(
            f"Extracted {url}: title={title[:50]!r} h1={len(headings.h1)} h2={len(headings.h2)} "
            f"h3={len(headings.h3)} words={page.word_count} internal={len(internal_links)} "
            f"external={len(external_links)} images={len(images)}"
        )
        return page

    def _extract_headings(self, soup: BeautifulSoup, tag: str) -> tuple[str, ...]:
        texts = (element.get_text().strip() for element in soup.find_all(tag))
        return tuple(text for text in texts if text)

    def _extract_links(
        self, soup: BeautifulSoup, url: str, base_host: str
    ) -> tuple[tuple[str, ...], tuple[str, ...]]:
        """Partition the page's links into internal and external by hostname."""
        internal: dict[str, None] = {}
        external: dict[str, None] = {}

        for anchor in soup.find_all("a", href=True):
            absolute_url = resolve_link(anchor["href"], url)
            if absolute_url is None:
                continue

            if urlparse(absolute_url).hostname == base_host:
                internal.setdefault(absolute_url, None)
            else:
                external.setdefault(absolute_url, None)

        return tuple(internal), tuple(external)

    def _extract_images(self, soup: BeautifulSoup) -> tuple[ImageRef, ...]:
        return tuple(
            ImageRef(src=img["src"], alt=img.get("alt") or "")
            for img in soup.find_all("img")
            if img.get("src")
        )

    def score_quality(self, page: CrawledPage) -> int:
        """Score how complete a page's content is, from 0 to 100.

        Low scores usually mean the page had not finished rendering (empty
        shell, loading spinner) rather than that the page is bad.
        """
        w = self.weights
        score = 0

        # Title
        if page.title and page.title != PLACEHOLDER_TITLE:
            score += w.title_present
            if w.title_length_min < len(page.title) < w.title_length_max:
                score += w.title_good_length
            if len(page.title.split(" ")) > w.title_min_words:
                score += w.title_descriptive

        # Meta description
        if len(page.meta_description) > w.meta_length_min:
            score += w.meta_present
            if len(page.meta_description) < w.meta_length_max:
                score += w.meta_good_length

        # Headings
        if page.headings.h1:
            score += w.has_h1
        if page.headings.h2:
            score += w.has_h2
        if page.headings.h3:
            score += w.has_h3

        # Word count
        word_count = page.word_count
        if word_count > w.words_tier1:
            score += w.words_tier1_points
        if word_count > w.words_tier2:
            score += w.words_tier2_points
        if word_count > w.words_tier3:
            score += w.words_tier3_points

        # Content body
        if len(page.content) > w.content_length_min:
            score += w.content_length_points
            sentences = [s for s in page.content.split(".") if len(s.strip()) > w.min_sentence_length]
            if len(sentences) > w.min_sentences:
                score += w.sentences_points

        return min(score, w.max_score)

# src/streetwise/constants.py
"""Centralized constants for the StreetWise crawler.

This module contains fixed word lists and limits that are shared across
modules. For tunable scoring weights and retry timings, see config.py.
"""

# =============================================================================
# Crawl Limits
# =============================================================================

# Bounds accepted for a crawl request
MIN_PAGES = 1
MAX_PAGES = 50
DEFAULT_MAX_PAGES = 10

# Delay between page fetches (milliseconds)
MIN_CRAWL_DELAY_MS = 100
MAX_CRAWL_DELAY_MS = 5000
DEFAULT_CRAWL_DELAY_MS = 1000

# Title recorded for pages without a <title> element
PLACEHOLDER_TITLE = "No Title"

# Tags whose text never counts as visible body content
NON_CONTENT_TAGS = ("script", "style", "noscript", "template")

# Substrings of renderer error messages that indicate a retryable failure
TRANSIENT_ERROR_MARKERS = ("net::ERR_", "Timeout", "Navigation timeout")


# =============================================================================
# Topic & Keyword Constants
# =============================================================================

# Maximum topics returned for a site
MAX_TOPICS = 25

# Maximum keywords returned for a site
MAX_KEYWORDS = 15

# Only the first N words of a page body feed topic extraction
CONTENT_WORDS_FOR_TOPICS = 500

# Normalized headings/titles shorter than this are ignored
MIN_TOPIC_TEXT_LENGTH = 5

# Words too common to carry topical meaning
STOP_WORDS = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "can", "had",
    "her", "was", "one", "our", "out", "day", "get", "has", "him", "his",
    "how", "man", "new", "now", "old", "see", "two", "way", "who", "boy",
    "did", "its", "let", "put", "say", "she", "too", "use", "will", "with",
    "have", "this", "that", "from", "they", "know", "want", "been", "good",
    "much", "some", "time", "very", "when", "come", "here", "just", "like",
    "long", "make", "many", "over", "such", "take", "than", "them", "well",
    "only", "most", "even", "find", "also", "after", "back", "call", "could",
    "does", "dont", "first", "into", "more", "other", "said", "same",
    "should", "their", "there", "these", "things", "think", "those",
    "under", "were", "what", "where", "which", "while", "would", "your",
    "about", "before", "being", "between", "both", "came", "each", "every",
    "found", "give", "going", "great", "home", "house", "large", "look",
    "made", "must", "name", "need", "never", "next", "night", "part",
    "people", "show", "small", "so", "still", "tell", "then", "thing",
    "thought", "three", "through", "together", "told", "took", "turn",
    "until", "upon", "used", "water", "went", "whole", "whose", "within",
    "without", "work", "write", "year", "yes", "yet", "yours",
})

# Terms that mark body-text phrases as commercially relevant
BUSINESS_TERMS = (
    "service", "product", "solution", "business", "company", "client",
    "customer", "expert", "professional", "team", "about", "contact",
    "support", "help", "price", "cost", "pricing", "quote", "estimate",
    "free", "best", "top", "local", "near", "area", "location", "online",
    "website", "digital", "marketing", "seo", "design", "development",
    "consulting", "management", "quality", "experience", "years",
    "established", "trusted", "reliable",
)


# =============================================================================
# Technical SEO Constants
# =============================================================================

# Word counts below these flag thin content
THIN_CONTENT_WORDS = 300
THIN_CONTENT_CRITICAL_WORDS = 100

# Average internal links per page that earns a full linking score
IDEAL_INTERNAL_LINKS_PER_PAGE = 10


# =============================================================================
# Content Analysis Constants
# =============================================================================

# Pages averaging fewer words than this are reported as thin
THIN_AVERAGE_WORDS = 500

# Internal linking score below this is reported as weak
WEAK_LINKING_SCORE = 50

# Competitor crawls are capped at this many pages
MAX_COMPETITOR_PAGES = 5

PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}

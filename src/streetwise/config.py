from dotenv import load_dotenv
from dataclasses import dataclass
from pathlib import Path
import json
import os

load_dotenv()  # Loads variables from .env file


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")

    # Crawl defaults
    CRAWL_MAX_PAGES = int(os.getenv("CRAWL_MAX_PAGES", "10"))
    CRAWL_DELAY_MS = int(os.getenv("CRAWL_DELAY_MS", "1000"))
    BROWSER_HEADLESS = os.getenv("BROWSER_HEADLESS", "true").lower() != "false"
    USER_AGENT = os.getenv("USER_AGENT")

    # Proxy pool
    PROXY_URLS = os.getenv("PROXY_URLS", "")
    PROXY_FILE = os.getenv("PROXY_FILE", "")
    PROXY_ROTATION = os.getenv("PROXY_ROTATION", "health_based")

    OUTPUT_DIR = os.getenv("OUTPUT_DIR", "crawls")


settings = Settings()


class _EnvFileMixin:
    """Shared loaders for the tunable dataclasses below."""

    ENV_PREFIX = ""

    @classmethod
    def from_env(cls):
        """Load values from environment variables.

        Each field may be overridden with ``<ENV_PREFIX><FIELD_NAME>``,
        e.g. ``STREETWISE_FETCH_MAX_RETRIES=3``. Values that fail to convert
        keep their default.
        """
        instance = cls()

        for field_name, field_def in instance.__dataclass_fields__.items():
            env_value = os.getenv(f"{cls.ENV_PREFIX}{field_name.upper()}")
            if env_value is None:
                continue
            try:
                if field_def.type in (int, "int"):
                    setattr(instance, field_name, int(env_value))
                elif field_def.type in (float, "float"):
                    setattr(instance, field_name, float(env_value))
            except ValueError:
                pass  # Keep default if conversion fails

        return instance

    @classmethod
    def from_file(cls, path: str):
        """Load values from a JSON configuration file.

        The file may hold the values at top level or under a ``thresholds``
        key. A missing file yields the defaults.

        Args:
            path: Path to JSON configuration file
        """
        instance = cls()
        file_path = Path(path)

        if not file_path.exists():
            return instance

        with open(file_path, 'r') as f:
            config = json.load(f)

        values = config.get('thresholds', config)

        for field_name in instance.__dataclass_fields__:
            if field_name in values:
                setattr(instance, field_name, values[field_name])

        return instance

    def to_dict(self) -> dict:
        """Convert to a plain dictionary of field values."""
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }

    def save_to_file(self, path: str) -> None:
        """Save current values to a JSON file.

        Args:
            path: Path to save configuration
        """
        with open(path, 'w') as f:
            json.dump({'thresholds': self.to_dict()}, f, indent=2)


@dataclass
class QualityScoreWeights(_EnvFileMixin):
    """Points and thresholds of the page content quality score."""

    ENV_PREFIX = "STREETWISE_QUALITY_"

    # Title
    title_present: int = 10
    title_length_min: int = 10  # exclusive
    title_length_max: int = 70  # exclusive
    title_good_length: int = 10
    title_min_words: int = 3  # exclusive
    title_descriptive: int = 5

    # Meta description
    meta_length_min: int = 50  # exclusive
    meta_present: int = 10
    meta_length_max: int = 160  # exclusive
    meta_good_length: int = 5

    # Headings
    has_h1: int = 8
    has_h2: int = 7
    has_h3: int = 5

    # Word count tiers (exclusive lower bounds)
    words_tier1: int = 100
    words_tier1_points: int = 10
    words_tier2: int = 300
    words_tier2_points: int = 10
    words_tier3: int = 1000
    words_tier3_points: int = 5

    # Content body
    content_length_min: int = 500  # exclusive, in characters
    content_length_points: int = 8
    min_sentences: int = 5  # exclusive
    min_sentence_length: int = 20  # exclusive, in characters
    sentences_points: int = 7

    max_score: int = 100


@dataclass
class TopicWeights(_EnvFileMixin):
    """Weights applied while extracting site topics."""

    ENV_PREFIX = "STREETWISE_TOPIC_"

    heading: float = 5
    heading_term: float = 2
    title: float = 6
    title_term: float = 3
    meta_term: float = 1
    content_term: float = 1

    # Minimum term lengths (exclusive) per source
    heading_term_min_length: int = 3
    title_term_min_length: int = 3
    meta_term_min_length: int = 4
    content_term_min_length: int = 4

    cluster_bonus: float = 0.5
    context_bonus: float = 2
    phrase_multiplier: float = 1.2


@dataclass
class FetchConfig(_EnvFileMixin):
    """Retry policy of the page fetcher."""

    ENV_PREFIX = "STREETWISE_FETCH_"

    max_retries: int = 2
    min_quality_score: int = 30
    low_quality_delay: float = 2.0  # seconds
    network_error_delay: float = 3.0  # seconds


# Global default instances
default_quality_weights = QualityScoreWeights()
default_topic_weights = TopicWeights()
default_fetch_config = FetchConfig()

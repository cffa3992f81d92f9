"""Logging configuration for the StreetWise crawler.

Crawl progress goes to stdout and, when a log file is given, to that file
as well. Browser and HTTP client libraries are held at WARNING so a DEBUG
crawl log shows our own decisions rather than every socket event.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Libraries that log per request or per connection
QUIET_LOGGERS = ('playwright', 'aiohttp', 'httpx', 'httpcore', 'asyncio')


def _build_handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    quiet_loggers: Iterable[str] = QUIET_LOGGERS,
) -> None:
    """Configure root logging for a crawl run.

    Replaces any handlers configured earlier, so calling it twice (for
    example from tests) does not duplicate output.

    Args:
        level: Log level name; unknown names fall back to INFO
        log_file: Optional log file path, parent directories are created
        format_string: Optional custom format string
        quiet_loggers: Logger names held at WARNING
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format=format_string or DEFAULT_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=_build_handlers(log_file),
        force=True,
    )

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a crawler module, usually called with ``__name__``."""
    return logging.getLogger(name)

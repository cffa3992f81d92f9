"""Exception hierarchy for the StreetWise crawler."""


class StreetwiseError(Exception):
    """Base class for all crawler errors."""


class CrawlerError(StreetwiseError):
    """Raised when a crawl or a page render fails."""


class BrowserLaunchError(CrawlerError):
    """The page renderer could not be started. Aborts the whole crawl."""


class RendererNotStartedError(CrawlerError):
    """A render was requested before the renderer was started."""


class TransientFetchError(CrawlerError):
    """A navigation or network failure that is worth retrying."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


class ProxyError(StreetwiseError):
    """Raised for invalid proxy definitions."""

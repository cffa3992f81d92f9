"""Command-line interface for the StreetWise crawler."""

import asyncio
import json
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from streetwise.browser_config import BrowserConfig
from streetwise.config import settings
from streetwise.content_analyzer import ContentAnalyzer
from streetwise.errors import StreetwiseError
from streetwise.infrastructure.proxy_manager import ProxyManager
from streetwise.logging_config import setup_logging
from streetwise.models import ContentAnalysisResult, WebsiteAnalysisResult
from streetwise.output_manager import OutputManager, format_summary
from streetwise.renderers import HttpRenderer, PageRenderer, PlaywrightRenderer
from streetwise.schemas import CrawlRequest
from streetwise.site_crawler import WebsiteCrawler

logger = logging.getLogger(__name__)


def build_renderer(kind: str, proxy_manager: Optional[ProxyManager] = None) -> PageRenderer:
    """Create the renderer selected on the command line."""
    options = {"headless": settings.BROWSER_HEADLESS}
    if settings.USER_AGENT:
        options["user_agent"] = settings.USER_AGENT
    config = BrowserConfig(**options)

    if kind == "http":
        return HttpRenderer(config)
    return PlaywrightRenderer(config, proxy_manager=proxy_manager)


def _proxies_configured() -> bool:
    return bool(settings.PROXY_URLS or settings.PROXY_FILE)


async def _run_crawl(
    crawler: WebsiteCrawler,
    request: CrawlRequest,
    competitor_url: Optional[str] = None,
) -> tuple[WebsiteAnalysisResult, ContentAnalysisResult]:
    analysis = await crawler.crawl_website(request)

    competitor = None
    if competitor_url:
        print(f"Crawling competitor {competitor_url}...")
        competitor = await crawler.crawl_competitor(competitor_url)

    return analysis, ContentAnalyzer().analyze(analysis, competitor)


def crawl_command(args):
    """Crawl a website and print its SEO analysis."""
    try:
        request = CrawlRequest(
            url=args.url,
            max_pages=args.max_pages,
            include_external_links=args.include_external_links,
            crawl_delay=args.crawl_delay,
        )
        if args.competitor:
            CrawlRequest(url=args.competitor)
    except ValidationError as e:
        print(f"Error: invalid crawl request\n{e}")
        sys.exit(2)

    proxy_manager = ProxyManager.from_env() if _proxies_configured() else None
    if proxy_manager:
        print(f"Using {proxy_manager.pool.pool_size} proxies")

    crawler = WebsiteCrawler(build_renderer(args.renderer, proxy_manager))

    print(f"Crawling {request.url} (up to {request.max_pages} pages)...")
    try:
        analysis, content_analysis = asyncio.run(_run_crawl(crawler, request, args.competitor))
    except StreetwiseError as e:
        logger.error(f"Crawl failed: {e}")
        print(f"\n❌ Crawl failed: {e}")
        sys.exit(1)

    if args.save:
        crawl_dir = OutputManager(settings.OUTPUT_DIR).save_analysis(analysis, content_analysis)
        print(f"\nResults saved to {crawl_dir}")

    if args.output == "json":
        output = json.dumps(
            {
                "analysis": analysis.to_dict(include_content=False),
                "content_analysis": content_analysis.to_dict(),
            },
            indent=2,
            default=str,
        )
        if args.output_file:
            with open(args.output_file, "w") as f:
                f.write(output)
            print(f"\nResults written to {args.output_file}")
        else:
            print(output)
    else:
        print()
        print(format_summary(analysis, content_analysis))


def proxies_command(args):
    """Show the configured proxy pool and optionally health-check it."""
    manager = ProxyManager.from_env()

    if args.strategy:
        manager.set_rotation_strategy(args.strategy)

    if manager.pool.pool_size == 0:
        print("No proxies configured. Set PROXY_URLS or PROXY_FILE.")
        return

    if args.check:
        print(f"Checking {manager.pool.pool_size} proxies...")
        results = asyncio.run(manager.check_all_proxies())
        for server, healthy in results.items():
            print(f"  {'✅' if healthy else '❌'} {server}")

    stats = manager.get_proxy_pool_stats()
    print(f"\n{'=' * 60}")
    print("Proxy Pool")
    print(f"{'=' * 60}")
    for key, value in stats.items():
        print(f"  {key}: {value}")


def main():
    """Main CLI entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="StreetWise - Crawl websites and analyze their SEO content"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL,
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        default=settings.LOG_FILE,
        help="Write logs to file in addition to console",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Crawl command parser
    crawl_parser = subparsers.add_parser(
        "crawl", help="Crawl a website breadth-first and analyze it."
    )
    crawl_parser.add_argument("url", help="Start URL (http or https)")
    crawl_parser.add_argument(
        "--max-pages",
        type=int,
        default=settings.CRAWL_MAX_PAGES,
        help="Maximum pages to crawl, 1-50 (default: %(default)s)",
    )
    crawl_parser.add_argument(
        "--include-external-links",
        action="store_true",
        help="Also follow links to other hosts",
    )
    crawl_parser.add_argument(
        "--crawl-delay",
        type=int,
        default=settings.CRAWL_DELAY_MS,
        help="Milliseconds to wait between pages, 100-5000 (default: %(default)s)",
    )
    crawl_parser.add_argument(
        "--renderer",
        choices=["browser", "http"],
        default="browser",
        help="Render pages in a headless browser or fetch raw HTML (default: browser)",
    )
    crawl_parser.add_argument(
        "--competitor",
        help="Competitor URL to crawl (up to 5 pages) and compare against",
    )
    crawl_parser.add_argument(
        "--output",
        "-o",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    crawl_parser.add_argument(
        "--output-file",
        "-f",
        help="Write output to file (only for json format)",
    )
    crawl_parser.add_argument(
        "--save",
        action="store_true",
        help=f"Save results under the output directory ({settings.OUTPUT_DIR})",
    )
    crawl_parser.set_defaults(func=crawl_command)

    # Proxies command parser
    proxies_parser = subparsers.add_parser(
        "proxies", help="Show the proxy pool loaded from PROXY_URLS / PROXY_FILE."
    )
    proxies_parser.add_argument(
        "--check",
        action="store_true",
        help="Health-check every proxy",
    )
    proxies_parser.add_argument(
        "--strategy",
        choices=["round_robin", "random", "health_based"],
        help="Override the rotation strategy",
    )
    proxies_parser.set_defaults(func=proxies_command)

    args = parser.parse_args()

    # Configure logging based on flags
    setup_logging(
        level=args.log_level,
        log_file=getattr(args, 'log_file', None),
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

"""Command line entry point: extract readable content from a URL or file.

Usage:
    # Cleaned HTML of the main content
    pagereader https://example.com/articles/123

    # Plain text from a saved page
    pagereader --format text page.html

    # Title, byline, node count and page type as JSON
    pagereader --metadata page.html
"""

import argparse
import json
import sys
from pathlib import Path

import httpx
import structlog

from pagereader import __version__
from pagereader.config import get_settings
from pagereader.exceptions import FetchError, PagereaderError, SourceReadError
from pagereader.extraction.classify import PageType
from pagereader.extraction.extractor import ExtractionOptions, ExtractionResult, extract
from pagereader.extraction.render import to_html, to_text
from pagereader.logging import setup_logging

logger = structlog.get_logger(__name__)


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_url(url: str, client: httpx.Client | None = None) -> bytes:
    """
    Fetch a page body.

    Args:
        url: http(s) URL
        client: Optional client to reuse; one is created (and closed) otherwise

    Returns:
        Raw response body

    Raises:
        FetchError: on network failure or a non-200 response
    """
    settings = get_settings()
    owns_client = client is None
    if client is None:
        client = httpx.Client(
            timeout=settings.fetch_timeout,
            follow_redirects=True,
            max_redirects=5,
        )

    try:
        response = client.get(
            url,
            headers={
                "User-Agent": settings.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            },
        )
    except httpx.TimeoutException as e:
        raise FetchError(url, "Request timed out") from e
    except httpx.HTTPError as e:
        raise FetchError(url, str(e)) from e
    finally:
        if owns_client:
            client.close()

    if response.status_code != 200:
        raise FetchError(
            url, f"HTTP error: {response.status_code}", status_code=response.status_code
        )

    logger.debug("page_fetched", url=url, size=len(response.content))
    return response.content


def read_file(path: str) -> str:
    """Read a local HTML file as UTF-8."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(path, str(e)) from e


def load_source(source: str, client: httpx.Client | None = None) -> str | bytes:
    if is_remote(source):
        return fetch_url(source, client)
    return read_file(source)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagereader",
        description="Extract the readable content of an HTML page",
    )
    parser.add_argument("source", help="URL (http/https) or path to an HTML file")
    parser.add_argument(
        "--format",
        choices=["html", "text"],
        default="html",
        help="Output format for the extracted content (default: html)",
    )
    parser.add_argument(
        "--metadata",
        action="store_true",
        help="Print title, byline, node count and page type as JSON",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Minimum content length in characters",
    )
    parser.add_argument(
        "--top-candidates",
        type=int,
        default=None,
        help="Number of top candidates to consider",
    )
    parser.add_argument(
        "--page-type",
        choices=[page_type.value for page_type in PageType],
        default=None,
        help="Force the page type instead of classifying it",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: from settings)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def options_from_args(args: argparse.Namespace) -> ExtractionOptions:
    overrides: dict[str, object] = {}
    if args.threshold is not None:
        overrides["char_threshold"] = args.threshold
    if args.top_candidates is not None:
        overrides["nb_top_candidates"] = args.top_candidates
    if args.page_type is not None:
        overrides["forced_page_type"] = PageType(args.page_type)
    if is_remote(args.source):
        overrides["url"] = args.source
    return ExtractionOptions.from_settings(**overrides)


def render_result(result: ExtractionResult, output_format: str) -> str:
    if output_format == "text":
        return to_text(result.root)
    return to_html(result.root)


def main(argv: list[str] | None = None, client: httpx.Client | None = None) -> int:
    """Run the CLI. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        html = load_source(args.source, client)
        result = extract(html, options_from_args(args))
    except PagereaderError as e:
        logger.error("extraction_failed", source=args.source, code=e.code, error=e.message)
        print(f"error: {e.message}", file=sys.stderr)
        return 1

    if args.metadata:
        metadata = {
            "title": result.title,
            "byline": result.byline,
            "node_count": result.node_count,
            "page_type": result.page_type.value,
        }
        print(json.dumps(metadata, indent=2, ensure_ascii=False))
        return 0

    if not result.has_content:
        print("error: no readable content found", file=sys.stderr)
        return 1

    print(render_result(result, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())

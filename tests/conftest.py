"""Pytest configuration and fixtures."""

import logging
import os
from collections.abc import Callable, Generator

import pytest
import structlog
import structlog.testing

# Set test environment before any app code runs
os.environ["PAGEREADER_ENV"] = "test"

SENTENCE = "The quick brown fox jumps over the lazy dog, again and again. "


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings from the current environment."""
    from pagereader.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[None, None, None]:
    """Silence structlog unless a test configures it itself."""
    structlog.reset_defaults()
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def captured_logs() -> Generator[list[dict], None, None]:
    """Record structlog events at every level for the duration of a test."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG))
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def paragraphs() -> Callable[[int, int], str]:
    """Build ``count`` <p> elements of ``sentences`` sentences each."""

    def build(count: int, sentences: int = 4) -> str:
        return "".join(f"<p>{SENTENCE * sentences}</p>" for _ in range(count))

    return build


@pytest.fixture
def article_html(paragraphs: Callable[[int, int], str]) -> str:
    """A news article: one <article> with ~750 characters plus page chrome."""
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>Foxes Jumping Over Dogs Explained | Example News</title>
    <script type="application/ld+json">
    {{"@context": "https://schema.org", "@type": "NewsArticle",
      "headline": "Foxes Jumping Over Dogs Explained",
      "author": {{"name": "Jane Doe"}}}}
    </script>
</head>
<body>
    <header><a href="/">Example News</a></header>
    <nav><a href="/world">World</a> <a href="/tech">Tech</a></nav>
    <article>{paragraphs(3, 4)}</article>
    <footer>Copyright Example News</footer>
</body>
</html>"""


@pytest.fixture
def listing_html() -> str:
    """A section front: twelve teaser cards and a long category list."""
    cards = "".join(
        f'<div class="card"><h2><a href="/post/{i}">Post title number {i}</a></h2>'
        f"<p>A short teaser line for post {i} here.</p></div>"
        for i in range(12)
    )
    categories = "".join(
        f'<li><a href="/category/{i}">Browse category number {i}</a></li>' for i in range(15)
    )
    return f"<html><head><title>Latest</title></head><body>{cards}<ul>{categories}</ul></body></html>"


@pytest.fixture
def sparse_html() -> str:
    """A page with nothing long enough to score."""
    return "<html><body><div><span>Hi there</span><p>Tiny.</p></div></body></html>"

"""Main content extraction: preprocessing, scoring, classification, assembly."""

from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from pagereader.config import get_settings
from pagereader.extraction.classify import PageType, classify_page_type
from pagereader.extraction.dom import Document, Element, count_nodes
from pagereader.extraction.metadata import get_article_byline, get_article_title
from pagereader.extraction.metrics import get_inner_text, get_link_density
from pagereader.extraction.parser import parse_html
from pagereader.extraction.patterns import DEFAULT_CHAR_THRESHOLD, DEFAULT_N_TOP_CANDIDATES
from pagereader.extraction.preprocess import preprocess_document
from pagereader.extraction.render import to_text
from pagereader.extraction.scoring import find_main_candidates
from pagereader.extraction.structure import find_structural_elements

logger = structlog.get_logger(__name__)

# Highest link density a top candidate may have and still be the content
MAX_CONTENT_LINK_DENSITY = 0.5


@dataclass
class ExtractionOptions:
    """Configuration for content extraction."""

    char_threshold: int = DEFAULT_CHAR_THRESHOLD
    nb_top_candidates: int = DEFAULT_N_TOP_CANDIDATES
    forced_page_type: PageType | None = None
    url: str = ""  # Page URL for classification; defaults to the document base URI

    @classmethod
    def from_settings(cls, **overrides: object) -> "ExtractionOptions":
        """Build options from environment settings, with explicit overrides."""
        settings = get_settings()
        options = cls(
            char_threshold=settings.char_threshold,
            nb_top_candidates=settings.nb_top_candidates,
        )
        for name, value in overrides.items():
            setattr(options, name, value)
        return options


@dataclass
class ArticleContent:
    """Content view of an article page."""

    title: str
    byline: str
    root: Element | None


@dataclass
class OtherContent:
    """Content view of a non-article page."""

    title: str
    header: Element | None
    footer: Element | None
    other_significant_nodes: list[Element]


@dataclass
class ExtractionResult:
    """Result of extracting content from a document."""

    title: str
    byline: str
    root: Element | None  # None when no candidate met the threshold
    node_count: int
    page_type: PageType

    # Only set for articles whose content could not be isolated
    header: Element | None = None
    footer: Element | None = None
    other_significant_nodes: list[Element] = field(default_factory=list)

    @property
    def has_content(self) -> bool:
        return self.root is not None

    @property
    def text(self) -> str:
        """Plain-text rendering of the content root."""
        return to_text(self.root)

    def content_by_page_type(self) -> ArticleContent | OtherContent:
        """Return the view that fits the page type."""
        if self.page_type == PageType.ARTICLE:
            return ArticleContent(title=self.title, byline=self.byline, root=self.root)
        return OtherContent(
            title=self.title,
            header=self.header,
            footer=self.footer,
            other_significant_nodes=self.other_significant_nodes,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "title": self.title,
            "byline": self.byline,
            "node_count": self.node_count,
            "page_type": self.page_type.value,
            "has_content": self.has_content,
            "has_header": self.header is not None,
            "has_footer": self.footer is not None,
            "other_significant_nodes": len(self.other_significant_nodes),
        }


def _normalized(options: ExtractionOptions | None) -> ExtractionOptions:
    options = options or ExtractionOptions()
    return ExtractionOptions(
        char_threshold=(
            options.char_threshold if options.char_threshold > 0 else DEFAULT_CHAR_THRESHOLD
        ),
        nb_top_candidates=(
            options.nb_top_candidates
            if options.nb_top_candidates > 0
            else DEFAULT_N_TOP_CANDIDATES
        ),
        forced_page_type=options.forced_page_type,
        url=options.url,
    )


def select_content(candidate: Element | None, char_threshold: int) -> Element | None:
    """Return ``candidate`` when it is long enough and not link-heavy."""
    if candidate is None:
        return None
    text_length = len(get_inner_text(candidate))
    if text_length >= char_threshold and get_link_density(candidate) <= MAX_CONTENT_LINK_DENSITY:
        return candidate
    return None


def extract_content(
    doc: Document,
    options: ExtractionOptions | None = None,
    *,
    title: str | None = None,
    byline: str | None = None,
) -> ExtractionResult:
    """
    Extract the main content of an already preprocessed document.

    Args:
        doc: Parsed and preprocessed document
        options: Extraction options (defaults when omitted)
        title: Precomputed title, read from ``doc`` when omitted
        byline: Precomputed byline, read from ``doc`` when omitted

    Returns:
        ExtractionResult; ``root`` is None when nothing met the threshold
    """
    options = _normalized(options)

    candidates = find_main_candidates(doc, options.nb_top_candidates)
    content = select_content(candidates[0] if candidates else None, options.char_threshold)

    if options.forced_page_type is not None:
        page_type = options.forced_page_type
    elif content is not None:
        page_type = PageType.ARTICLE
    else:
        page_type = classify_page_type(
            doc, candidates, options.char_threshold, options.url or doc.base_uri
        )

    result = ExtractionResult(
        title=get_article_title(doc) if title is None else title,
        byline=get_article_byline(doc) if byline is None else byline,
        root=content,
        node_count=count_nodes(content),
        page_type=page_type,
    )

    if page_type == PageType.ARTICLE and content is None:
        structural = find_structural_elements(doc)
        result.header = structural.header
        result.footer = structural.footer
        result.other_significant_nodes = structural.other_significant_nodes

    logger.info(
        "content_extraction_complete",
        page_type=page_type.value,
        has_content=content is not None,
        node_count=result.node_count,
        candidates=len(candidates),
    )

    return result


def extract(html: str | bytes, options: ExtractionOptions | None = None) -> ExtractionResult:
    """
    Parse HTML and extract its main content.

    Title and byline are read before preprocessing so JSON-LD blocks
    (which live in <script> tags) are still available.

    Raises:
        ParseError: if the markup cannot be parsed
    """
    options = _normalized(options)
    doc = parse_html(html, options.url)
    title = get_article_title(doc)
    byline = get_article_byline(doc)

    preprocess_document(doc)

    return extract_content(doc, options, title=title, byline=byline)


class ContentExtractor:
    """Extracts readable content with a fixed set of options."""

    def __init__(self, options: ExtractionOptions | None = None):
        self.options = options or ExtractionOptions()

    def extract(self, html: str | bytes) -> ExtractionResult:
        return extract(html, self.options)

    def extract_document(self, doc: Document) -> ExtractionResult:
        """Preprocess ``doc`` in place and extract its content."""
        title = get_article_title(doc)
        byline = get_article_byline(doc)
        preprocess_document(doc)
        return extract_content(doc, self.options, title=title, byline=byline)


def create_extractor(
    options: ExtractionOptions | None = None,
) -> Callable[[str | bytes], ExtractionResult]:
    """Return a function extracting HTML with ``options``."""
    return ContentExtractor(options).extract

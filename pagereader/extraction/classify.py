"""Page type classification: article or something else.

The decision is an ordered cascade of heuristics over the page URL, the
page structure (headings, links, images, list-like blocks) and the
ranked content candidates. The first rule that matches decides.
"""

from dataclasses import dataclass
from enum import StrEnum

import structlog

from pagereader.extraction.dom import Document, Element, get_elements_by_tag_name
from pagereader.extraction.metrics import get_inner_text, get_link_density
from pagereader.extraction.patterns import (
    ALPHA_ONLY,
    ALPHANUMERIC,
    CARD_CLASS_MARKERS,
    DEFAULT_CHAR_THRESHOLD,
    DIGITS_ONLY,
    HAS_DIGIT,
    SINGLE_SEGMENT_URL,
    THREE_LEVEL_URL,
    TOP_LEVEL_URL,
)

logger = structlog.get_logger(__name__)

MAX_LINK_DENSITY = 0.5
MAX_LIST_ELEMENTS = 10
MAX_HEADINGS = 10
SCORE_PARITY_RATIO = 0.8
MIN_FALLBACK_TEXT_LENGTH = 140
MIN_SEMANTIC_TEXT_LENGTH = 100


class PageType(StrEnum):
    """Classification of a page."""

    ARTICLE = "article"
    OTHER = "other"  # Index, list, landing, error pages...


class UrlPattern(StrEnum):
    """Shape of the last path segment of a URL."""

    NONE = "none"
    NUMERIC = "numeric"
    ALPHANUMERIC = "alphanumeric"  # letters and at least one digit
    ALPHA = "alpha"
    OTHER = "other"


@dataclass
class PageStructure:
    """Element counts used to spot index and list pages."""

    heading_count: int = 0  # h1 + h2 + h3
    image_count: int = 0
    link_count: int = 0
    list_element_count: int = 0  # article + li + card-like body children

    @property
    def looks_like_index(self) -> bool:
        return (
            self.list_element_count > MAX_LIST_ELEMENTS
            or (self.link_count > 50 and self.image_count > 20)
            or self.heading_count > MAX_HEADINGS
            or self.heading_count == 0
        )

    def to_dict(self) -> dict:
        return {
            "heading_count": self.heading_count,
            "image_count": self.image_count,
            "link_count": self.link_count,
            "list_element_count": self.list_element_count,
            "looks_like_index": self.looks_like_index,
        }


def analyze_page_structure(doc: Document) -> PageStructure:
    """Count headings, images, links and list-like elements under the body."""
    body = doc.body
    if body is None:
        return PageStructure()

    heading_count = sum(len(get_elements_by_tag_name(body, tag)) for tag in ("h1", "h2", "h3"))

    card_count = 0
    for child in body.element_children():
        class_name = child.class_name.lower()
        if any(marker in class_name for marker in CARD_CLASS_MARKERS):
            card_count += 1

    return PageStructure(
        heading_count=heading_count,
        image_count=len(get_elements_by_tag_name(body, "img")),
        link_count=len(get_elements_by_tag_name(body, "a")),
        list_element_count=(
            len(get_elements_by_tag_name(body, "article"))
            + len(get_elements_by_tag_name(body, "li"))
            + card_count
        ),
    )


def is_semantic_tag(element: Element) -> bool:
    """Check if the element is (or directly wraps) main/article, or is named content."""
    if element.tag_name in ("main", "article"):
        return True

    if "content" in element.class_name.lower() or "content" in element.id.lower():
        return True

    return any(child.tag_name in ("main", "article") for child in element.element_children())


def _last_segment(url: str) -> str:
    # Last path segment with any extension cut off
    return url.split("/")[-1].split(".")[0]


def is_article_id_segment(segment: str) -> bool:
    """Numeric, or 5+ alphanumeric characters containing a digit."""
    if DIGITS_ONLY.match(segment):
        return True
    return bool(ALPHANUMERIC.match(segment) and HAS_DIGIT.search(segment) and len(segment) >= 5)


def analyze_url_pattern(url: str) -> UrlPattern:
    """Describe the shape of the URL's last segment."""
    segment = _last_segment(url)
    if not segment:
        return UrlPattern.NONE
    if DIGITS_ONLY.match(segment):
        return UrlPattern.NUMERIC
    if ALPHANUMERIC.match(segment) and HAS_DIGIT.search(segment):
        return UrlPattern.ALPHANUMERIC
    if ALPHA_ONLY.match(segment):
        return UrlPattern.ALPHA
    return UrlPattern.OTHER


def get_expected_page_type_by_url(url: str) -> PageType:
    """Prior page type from the URL alone, before looking at content."""
    if "/articles/" in url:
        return PageType.ARTICLE
    if THREE_LEVEL_URL.match(url):
        return PageType.ARTICLE
    if is_article_id_segment(_last_segment(url)):
        return PageType.ARTICLE
    return PageType.OTHER


def _classify_by_url(
    url: str, candidates: list[Element], char_threshold: int
) -> PageType | None:
    if "/articles/" in url or is_article_id_segment(_last_segment(url)):
        return PageType.ARTICLE if candidates else PageType.OTHER

    if TOP_LEVEL_URL.match(url) or SINGLE_SEGMENT_URL.match(url):
        # Very long, link-poor content overrides a shallow URL
        if candidates:
            top = candidates[0]
            if (
                len(get_inner_text(top)) > char_threshold * 2
                and get_link_density(top) < 0.3
            ):
                return PageType.ARTICLE
        return PageType.OTHER

    return None


def _classify_by_content(
    doc: Document, candidates: list[Element], char_threshold: int
) -> tuple[PageType, str]:
    if not candidates:
        return PageType.OTHER, "no_candidates"

    top = candidates[0]
    structure = analyze_page_structure(doc)

    if structure.looks_like_index:
        return PageType.OTHER, "index_structure"

    # Past this point the page has at most MAX_LIST_ELEMENTS list-like blocks
    text_length = len(get_inner_text(top))
    link_density = get_link_density(top)

    if is_semantic_tag(top):
        if text_length >= char_threshold // 2 and link_density <= MAX_LINK_DENSITY:
            return PageType.ARTICLE, "semantic_content"
        if text_length < MIN_SEMANTIC_TEXT_LENGTH:
            return PageType.OTHER, "semantic_too_short"

    if (
        text_length >= char_threshold
        and link_density <= MAX_LINK_DENSITY
        and 1 <= structure.heading_count <= MAX_HEADINGS
    ):
        return PageType.ARTICLE, "content_length"

    body_text_length = len(get_inner_text(doc.body)) if doc.body is not None else 0

    # Only the two best candidates are compared; see DESIGN.md
    if len(candidates) >= 2:
        top_score = doc.scores.score(top)
        second_score = doc.scores.score(candidates[1])
        score_ratio = second_score / top_score if top_score > 0 else 1.0

        if score_ratio > SCORE_PARITY_RATIO:
            body_link_density = (
                structure.link_count / body_text_length if body_text_length > 0 else 0.0
            )
            if body_link_density > 0.25 or link_density > 0.3:
                return PageType.OTHER, "score_parity"

    if structure.link_count > 30 and body_text_length < int(char_threshold * 1.5):
        return PageType.OTHER, "link_heavy"

    if text_length >= MIN_FALLBACK_TEXT_LENGTH and link_density <= MAX_LINK_DENSITY:
        return PageType.ARTICLE, "fallback_content"

    return PageType.OTHER, "fallback"


def classify_page_type(
    doc: Document,
    candidates: list[Element],
    char_threshold: int = DEFAULT_CHAR_THRESHOLD,
    url: str = "",
) -> PageType:
    """
    Classify a document as an article or another kind of page.

    Args:
        doc: Preprocessed, scored document
        candidates: Ranked candidates from ``find_main_candidates``
        char_threshold: Minimum article length in characters
        url: Optional page URL for URL-shape heuristics

    Returns:
        PageType.ARTICLE or PageType.OTHER
    """
    if char_threshold <= 0:
        char_threshold = DEFAULT_CHAR_THRESHOLD

    if url:
        by_url = _classify_by_url(url, candidates, char_threshold)
        if by_url is not None:
            logger.debug("page_type_classified", page_type=by_url.value, rule="url", url=url)
            return by_url

    page_type, rule = _classify_by_content(doc, candidates, char_threshold)
    logger.debug("page_type_classified", page_type=page_type.value, rule=rule)
    return page_type

"""Pagereader - readable content extraction from HTML pages."""

__version__ = "0.1.0"

from pagereader.exceptions import FetchError, PagereaderError, ParseError, SourceReadError
from pagereader.extraction import (
    ExtractionOptions,
    ExtractionResult,
    PageType,
    classify_page_type,
    extract,
    extract_content,
    find_candidates,
    find_main_candidates,
    get_article_byline,
    get_article_title,
    get_json_ld,
    parse_html,
    preprocess,
    preprocess_document,
    serialize_document,
    serialize_to_html,
    to_html,
    to_text,
)

__all__ = [
    "__version__",
    "ExtractionOptions",
    "ExtractionResult",
    "FetchError",
    "PageType",
    "PagereaderError",
    "ParseError",
    "SourceReadError",
    "classify_page_type",
    "extract",
    "extract_content",
    "find_candidates",
    "find_main_candidates",
    "get_article_byline",
    "get_article_title",
    "get_json_ld",
    "parse_html",
    "preprocess",
    "preprocess_document",
    "serialize_document",
    "serialize_to_html",
    "to_html",
    "to_text",
]

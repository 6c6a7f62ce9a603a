"""Content extraction package.

Pipeline: parse -> preprocess -> score candidates -> classify -> assemble.
"""

from pagereader.extraction.classify import PageType, classify_page_type
from pagereader.extraction.extractor import (
    ContentExtractor,
    ExtractionOptions,
    ExtractionResult,
    create_extractor,
    extract,
    extract_content,
)
from pagereader.extraction.metadata import get_article_byline, get_article_title, get_json_ld
from pagereader.extraction.parser import parse_html, serialize_document, serialize_to_html
from pagereader.extraction.preprocess import preprocess, preprocess_document
from pagereader.extraction.render import to_html, to_text
from pagereader.extraction.scoring import find_candidates, find_main_candidates

__all__ = [
    "ContentExtractor",
    "ExtractionOptions",
    "ExtractionResult",
    "PageType",
    "classify_page_type",
    "create_extractor",
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

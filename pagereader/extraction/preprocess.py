"""Noise removal before scoring.

Navigation, scripts, embeds and similar tags go first, then anything
under the body that looks like an advertisement. Both passes cut the
whole subtree out of the tree.
"""

import structlog

from pagereader.extraction.dom import Document, Element, get_elements_by_tag_name, is_attached
from pagereader.extraction.patterns import AD_ATTRIBUTES, AD_PATTERNS, NOISE_TAGS

logger = structlog.get_logger(__name__)


def _remove(element: Element, root: Element) -> bool:
    # Elements inside an already removed subtree are gone with it
    parent = element.parent
    if parent is None or not is_attached(parent, root):
        return False
    return parent.remove_child(element)


def remove_unwanted_tags(doc: Document) -> int:
    """Remove every noise-tag element. Returns the number removed."""
    removed = 0
    for tag_name in NOISE_TAGS:
        for element in get_elements_by_tag_name(doc.document_element, tag_name):
            if _remove(element, doc.document_element):
                removed += 1
    return removed


def is_likely_ad(element: Element) -> bool:
    """Check class/id patterns and ad-specific attributes."""
    # Anchored patterns (^ad$) only match a bare class or id
    values = (f"{element.class_name} {element.id}", element.class_name, element.id)
    if any(pattern.search(value) for pattern in AD_PATTERNS for value in values if value):
        return True

    if element.get_attribute("role") == "advertisement":
        return True

    return any(element.has_attribute(name) for name in AD_ATTRIBUTES)


def remove_ads(doc: Document) -> int:
    """Remove ad-looking elements under the body. Returns the number removed."""
    if doc.body is None:
        return 0

    removed = 0
    for element in get_elements_by_tag_name(doc.body, "*"):
        # The body itself is never removed
        if element is doc.body:
            continue
        if is_likely_ad(element) and _remove(element, doc.body):
            removed += 1
    return removed


def preprocess_document(doc: Document) -> Document:
    """
    Strip noise elements from the document in place.

    Args:
        doc: Parsed document

    Returns:
        The same document, for chaining
    """
    tags_removed = remove_unwanted_tags(doc)
    ads_removed = remove_ads(doc)

    logger.debug(
        "preprocess_complete",
        tags_removed=tags_removed,
        ads_removed=ads_removed,
    )

    return doc


preprocess = preprocess_document

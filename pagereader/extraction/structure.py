"""Structural landmarks for pages whose content could not be isolated.

When a page is classified as an article but no candidate cleared the
extraction threshold, callers still get the page header, the footer and
the other significant sections so they can fall back to them.
"""

from dataclasses import dataclass, field

import structlog

from pagereader.extraction.classify import is_semantic_tag
from pagereader.extraction.dom import (
    Document,
    Element,
    get_elements_by_tag_name,
    is_inside,
    is_probably_visible,
)
from pagereader.extraction.patterns import (
    FOOTER_CLASS_MARKERS,
    FOOTER_IDS,
    HEADER_CLASS_MARKERS,
    HEADER_IDS,
    SIGNIFICANT_CONTAINER_MARKERS,
    SIGNIFICANT_MARKERS,
    SIGNIFICANT_ROLES,
    SIGNIFICANT_SECTION_TAGS,
    SIGNIFICANT_TAGS,
)

logger = structlog.get_logger(__name__)


@dataclass
class StructuralElements:
    """Header, footer and other significant sections of a page."""

    header: Element | None = None
    footer: Element | None = None
    other_significant_nodes: list[Element] = field(default_factory=list)


def is_significant_node(element: Element) -> bool:
    """Check tag, ARIA role and class/id names for a page landmark."""
    if element.tag_name in SIGNIFICANT_TAGS:
        return True

    if element.get_attribute("role").lower() in SIGNIFICANT_ROLES:
        return True

    class_name = element.class_name.lower()
    element_id = element.id.lower()
    return any(
        marker in class_name or marker in element_id for marker in SIGNIFICANT_MARKERS
    )


def _looks_like_header(element: Element) -> bool:
    class_name = element.class_name.lower()
    return (
        element.get_attribute("role").lower() == "banner"
        or element.id.lower() in HEADER_IDS
        or any(marker in class_name for marker in HEADER_CLASS_MARKERS)
    )


def _looks_like_footer(element: Element) -> bool:
    class_name = element.class_name.lower()
    return (
        element.get_attribute("role").lower() == "contentinfo"
        or element.id.lower() in FOOTER_IDS
        or any(marker in class_name for marker in FOOTER_CLASS_MARKERS)
    )


def find_header(doc: Document) -> Element | None:
    """The only <header>, else the best banner-like element under the body."""
    header_tags = get_elements_by_tag_name(doc.document_element, "header")
    if len(header_tags) == 1:
        return header_tags[0]

    body = doc.body
    header: Element | None = None
    for element in get_elements_by_tag_name(body, "*"):
        if not _looks_like_header(element):
            continue
        # Prefer elements sitting directly under the body
        if header is None or (element.parent is body and header.parent is not body):
            header = element
    return header


def find_footer(doc: Document, header: Element | None = None) -> Element | None:
    """The only <footer>, else the last footer-like element outside the header."""
    footer_tags = get_elements_by_tag_name(doc.document_element, "footer")
    if len(footer_tags) == 1:
        return footer_tags[0]

    body = doc.body
    # Footers sit at the bottom, so search from the end
    for element in reversed(get_elements_by_tag_name(body, "*")):
        if _looks_like_footer(element) and not is_inside(element, [header], stop=body):
            return element
    return None


def find_significant_containers(body: Element | None) -> list[Element]:
    """Elements whose class or id names a content container."""
    containers = []
    for element in get_elements_by_tag_name(body, "*"):
        combined = f"{element.class_name} {element.id}".lower()
        if any(marker in combined for marker in SIGNIFICANT_CONTAINER_MARKERS):
            containers.append(element)
    return containers


def find_structural_elements(doc: Document) -> StructuralElements:
    """
    Detect header, footer and other significant sections.

    Args:
        doc: Parsed document (usually preprocessed)

    Returns:
        StructuralElements; any part may be missing
    """
    body = doc.body
    header = find_header(doc)
    footer = find_footer(doc, header)

    potential: list[Element] = []
    for tag_name in SIGNIFICANT_SECTION_TAGS:
        potential.extend(get_elements_by_tag_name(body, tag_name))
    potential.extend(find_significant_containers(body))

    others: list[Element] = []
    seen: set[Element] = set()
    for node in potential:
        if node in seen:
            continue
        seen.add(node)
        if is_inside(node, [header, footer], stop=body):
            continue
        if is_probably_visible(node) and (is_significant_node(node) or is_semantic_tag(node)):
            others.append(node)

    logger.debug(
        "structural_elements_found",
        has_header=header is not None,
        has_footer=footer is not None,
        other_count=len(others),
    )

    return StructuralElements(header=header, footer=footer, other_significant_nodes=others)

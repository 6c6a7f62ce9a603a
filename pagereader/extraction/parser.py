"""HTML parsing into the extraction tree, and serialization back to markup.

BeautifulSoup does the tokenizing with the stdlib ``html.parser`` backend;
this module converts its tree into ``Element``/``Text`` nodes and makes
sure every document ends up with an ``<html>`` root and a ``<body>``.
"""

from html import escape

import structlog
from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)
from bs4.builder import ParserRejectedMarkup

from pagereader.exceptions import ParseError
from pagereader.extraction.dom import Document, Element, Node, Text, get_elements_by_tag_name

logger = structlog.get_logger(__name__)

# String subclasses that carry no page text
SKIPPED_STRINGS = (Comment, Doctype, Declaration, CData, ProcessingInstruction)

VOID_TAGS = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    ]
)


def _attribute_value(value: str | list[str]) -> str:
    # Multi-valued attributes (class, rel, ...) come back as lists
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _convert_children(source: Tag, parent: Element) -> None:
    # Explicit stack so deeply nested markup cannot hit the recursion limit
    stack: list[tuple[Tag, Element]] = [(source, parent)]
    while stack:
        tag, element = stack.pop()
        for child in tag.children:
            if isinstance(child, Tag):
                converted = Element(
                    child.name,
                    {name: _attribute_value(value) for name, value in child.attrs.items()},
                )
                element.append_child(converted)
                stack.append((child, converted))
            elif isinstance(child, NavigableString) and not isinstance(child, SKIPPED_STRINGS):
                element.append_child(Text(str(child)))


def parse_html(html: str | bytes, base_uri: str = "") -> Document:
    """
    Parse HTML markup into a ``Document``.

    Args:
        html: HTML markup (bytes are decoded by BeautifulSoup)
        base_uri: Opaque page URI kept on the document for classification

    Returns:
        Document whose body always exists

    Raises:
        ParseError: if the markup cannot be parsed
    """
    if not isinstance(html, str | bytes):
        raise ParseError(f"Expected str or bytes, got {type(html).__name__}", base_uri)

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as e:
        raise ParseError(f"Markup rejected by parser: {e}", base_uri) from e

    root = Element("html")
    html_tag = soup.find("html")
    if isinstance(html_tag, Tag):
        root.attributes = {k: _attribute_value(v) for k, v in html_tag.attrs.items()}
        _convert_children(html_tag, root)
    else:
        _convert_children(soup, root)

    bodies = get_elements_by_tag_name(root, "body")
    if bodies:
        body = bodies[0]
    else:
        # Fragment or body-less markup: everything but <head> goes into a new body
        body = Element("body")
        for child in list(root.children):
            if isinstance(child, Element) and child.tag_name == "head":
                continue
            body.append_child(child)
        root.append_child(body)

    logger.debug("html_parsed", base_uri=base_uri, body_children=len(body.children))

    return Document(document_element=root, body=body, base_uri=base_uri)


def _opening_tag(element: Element) -> str:
    attrs = "".join(f' {name}="{escape(value)}"' for name, value in element.attributes.items())
    if element.tag_name in VOID_TAGS and not element.children:
        return f"<{element.tag_name}{attrs}/>"
    return f"<{element.tag_name}{attrs}>"


def serialize_to_html(node: Node | None) -> str:
    """Serialize a node and its subtree to HTML."""
    if node is None:
        return ""

    parts: list[str] = []
    # Items are nodes still to open, or closing tags already due
    stack: list[Node | str] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Text):
            parts.append(escape(item.content))
        else:
            parts.append(_opening_tag(item))
            if item.tag_name in VOID_TAGS and not item.children:
                continue
            stack.append(f"</{item.tag_name}>")
            stack.extend(reversed(item.children))
    return "".join(parts)


def serialize_document(doc: Document | None) -> str:
    """Serialize a whole document, doctype included."""
    if doc is None:
        return ""
    return "<!DOCTYPE html>\n" + serialize_to_html(doc.document_element)

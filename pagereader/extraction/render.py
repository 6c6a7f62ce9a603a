"""Readable renderings of extracted content: cleaned HTML and plain text."""

import re
from html import escape

from pagereader.extraction.dom import Element, Node, Text
from pagereader.extraction.parser import VOID_TAGS

BLOCK_TAGS = frozenset(
    [
        "address",
        "article",
        "aside",
        "blockquote",
        "details",
        "dialog",
        "dd",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "ul",
    ]
)

MULTIPLE_NEWLINES = re.compile(r"\n{2,}")

# Elements rendered as fixed text whatever their children
LINE_BREAKS = {"br": "\n", "hr": "\n----------\n"}


def escape_html(text: str) -> str:
    """Escape markup characters, keeping non-breaking spaces visible."""
    return escape(text).replace("\u00a0", "&nbsp;")


def _opening_tag(element: Element) -> str:
    attrs = " ".join(
        f'{name}="{escape_html(value)}"'
        for name, value in element.attributes.items()
        if name != "class"
    )
    return f"<{element.tag_name} {attrs}" if attrs else f"<{element.tag_name}"


def to_html(element: Element | None) -> str:
    """
    Render content as cleaned HTML.

    ``<span>`` wrappers are dropped (their children are kept) and ``class``
    attributes are omitted.
    """
    if element is None:
        return ""

    parts: list[str] = []
    stack: list[Node | str] = [element]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Text):
            parts.append(escape_html(item.content))
        elif item.tag_name == "span":
            stack.extend(reversed(item.children))
        elif item.tag_name in VOID_TAGS and not item.children:
            parts.append(_opening_tag(item) + "/>")
        else:
            parts.append(_opening_tag(item) + ">")
            stack.append(f"</{item.tag_name}>")
            stack.extend(reversed(item.children))
    return "".join(parts)


def _close_block(tag: str, text: str) -> str:
    if text.endswith(" "):
        text = text[:-1]
    if tag in BLOCK_TAGS:
        text += "\n"
    return MULTIPLE_NEWLINES.sub("\n", text)


def _append_child_text(frame: list, text: str) -> None:
    frame[2] += text
    if text and not text.endswith((" ", "\n")):
        frame[2] += " "


def _stringify(element: Element) -> str:
    if element.tag_name in LINE_BREAKS:
        return LINE_BREAKS[element.tag_name]

    # Frames are [element, next child index, text so far]; blocks open on a new line
    frames: list[list] = [[element, 0, "\n" if element.tag_name in BLOCK_TAGS else ""]]
    while True:
        frame = frames[-1]
        current, index = frame[0], frame[1]
        if index == len(current.children):
            frames.pop()
            text = _close_block(current.tag_name, frame[2])
            if not frames:
                return text
            _append_child_text(frames[-1], text)
            continue

        frame[1] = index + 1
        child = current.children[index]
        if isinstance(child, Text):
            trimmed = child.content.strip()
            if trimmed:
                frame[2] += trimmed + " "
        elif child.tag_name in LINE_BREAKS:
            _append_child_text(frame, LINE_BREAKS[child.tag_name])
        else:
            frames.append([child, 0, "\n" if child.tag_name in BLOCK_TAGS else ""])


def to_text(element: Element | None) -> str:
    """Render content as plain text with one line per block element."""
    if element is None:
        return ""
    text = MULTIPLE_NEWLINES.sub("\n", _stringify(element))
    return text.strip()


def text_content(element: Element | None) -> str:
    """Concatenated raw text of every descendant text node."""
    if element is None:
        return ""
    parts = []
    stack: list[Node] = list(reversed(element.children))
    while stack:
        node = stack.pop()
        if isinstance(node, Text):
            parts.append(node.content)
        else:
            stack.extend(reversed(node.children))
    return "".join(parts)

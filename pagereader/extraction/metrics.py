"""Text and density metrics over a subtree."""

from pagereader.extraction.dom import Element, Node, Text, get_elements_by_tag_name
from pagereader.extraction.patterns import COMMAS, NORMALIZE_WHITESPACE

# Same-page anchors count for less link text than real links
ANCHOR_LINK_COEFFICIENT = 0.3


def _element_text(element: Element) -> str:
    # Frames are [element, next child index, text so far]
    frames: list[list] = [[element, 0, ""]]
    while True:
        frame = frames[-1]
        current, index = frame[0], frame[1]
        if index == len(current.children):
            frames.pop()
            text = frame[2].strip()
            if not frames:
                return text
            frames[-1][2] += text
            continue

        frame[1] = index + 1
        if index > 0 and frame[2]:
            frame[2] += " "
        child = current.children[index]
        if isinstance(child, Text):
            frame[2] += child.content
        else:
            frames.append([child, 0, ""])


def get_inner_text(node: Node, normalize_spaces: bool = False) -> str:
    """
    Get the text of a node and its descendants.

    A single space is inserted before every child after the first one
    once some text has been collected, so words from adjacent elements
    are not glued together.

    Args:
        node: Element or text node
        normalize_spaces: Collapse runs of 2+ whitespace characters

    Returns:
        Stripped text content
    """
    text = node.content.strip() if isinstance(node, Text) else _element_text(node)
    if normalize_spaces:
        text = NORMALIZE_WHITESPACE.sub(" ", text)
    return text


def get_link_density(element: Element) -> float:
    """Share of the element's text that sits inside links (0 for no text)."""
    text_length = len(get_inner_text(element, normalize_spaces=True))
    if text_length == 0:
        return 0.0

    link_length = 0
    for link in get_elements_by_tag_name(element, "a"):
        coefficient = ANCHOR_LINK_COEFFICIENT if link.get_attribute("href").startswith("#") else 1.0
        link_length += int(len(get_inner_text(link, normalize_spaces=True)) * coefficient)

    return link_length / text_length


def get_text_density(element: Element) -> float:
    """Text length per direct child element (at least one)."""
    text_length = len(get_inner_text(element, normalize_spaces=True))
    if text_length == 0:
        return 0.0

    child_count = len(element.element_children()) or 1
    return text_length / child_count


def count_commas(text: str) -> int:
    return len(COMMAS.findall(text))

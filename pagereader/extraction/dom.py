"""Minimal document tree used by the extraction pipeline.

A node is either an ``Element`` or a ``Text``. Children lists own their
nodes; the parent link is a weak reference used only for lookups, so
detaching a subtree is just removing it from the parent's list.

Content scores are not stored on elements. They live in a ``ScoreMap``
attached to the ``Document`` so a scoring pass can be inspected and
reset without touching the tree.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(eq=False)
class Text:
    """A text node."""

    content: str
    _parent: weakref.ReferenceType[Element] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def parent(self) -> Element | None:
        return self._parent() if self._parent is not None else None

    def detach(self) -> None:
        """Remove this node from its parent, if any."""
        parent = self.parent
        if parent is not None:
            parent.remove_child(self)


@dataclass(eq=False)
class Element:
    """An element node with a lowercase tag name and string attributes."""

    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list, repr=False)
    _parent: weakref.ReferenceType[Element] | None = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self) -> None:
        self.tag_name = self.tag_name.lower()
        initial = self.children
        self.children = []
        for child in initial:
            self.append_child(child)

    @property
    def parent(self) -> Element | None:
        return self._parent() if self._parent is not None else None

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    @property
    def class_name(self) -> str:
        return self.attributes.get("class", "")

    def get_attribute(self, name: str) -> str:
        """Return the attribute value, or an empty string when absent."""
        return self.attributes.get(name, "")

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def append_child(self, child: Node) -> Node:
        """Append ``child``, moving it out of any previous parent."""
        previous = child.parent
        if previous is not None:
            previous.remove_child(child)
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def remove_child(self, child: Node) -> bool:
        """Excise ``child`` (and its subtree) by identity.

        Returns False when ``child`` is not one of this element's children.
        """
        for index, candidate in enumerate(self.children):
            if candidate is child:
                del self.children[index]
                child._parent = None
                return True
        return False

    def detach(self) -> None:
        """Remove this element from its parent, if any."""
        parent = self.parent
        if parent is not None:
            parent.remove_child(self)

    def element_children(self) -> list[Element]:
        """Direct children that are elements."""
        return [child for child in self.children if isinstance(child, Element)]

    def iter_elements(self) -> Iterator[Element]:
        """Yield this element and every descendant element in document order."""
        stack: list[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.element_children()))


Node = Element | Text


@dataclass
class ScoreAnnotation:
    """Mutable content score of an element that entered scoring."""

    content_score: float = 0.0


class ScoreMap:
    """Side map from element identity to its ``ScoreAnnotation``.

    An element missing from the map has not been scored yet, which is
    different from an element scored at zero.
    """

    def __init__(self) -> None:
        self._annotations: dict[Element, ScoreAnnotation] = {}

    def __contains__(self, element: object) -> bool:
        return element in self._annotations

    def __len__(self) -> int:
        return len(self._annotations)

    def get(self, element: Element) -> ScoreAnnotation | None:
        return self._annotations.get(element)

    def has(self, element: Element) -> bool:
        return element in self._annotations

    def initialize(self, element: Element, score: float = 0.0) -> ScoreAnnotation:
        annotation = ScoreAnnotation(content_score=score)
        self._annotations[element] = annotation
        return annotation

    def score(self, element: Element) -> float:
        """Current score of ``element``; 0.0 when it was never scored."""
        annotation = self._annotations.get(element)
        return annotation.content_score if annotation is not None else 0.0

    def add(self, element: Element, delta: float) -> None:
        annotation = self._annotations.get(element)
        if annotation is not None:
            annotation.content_score += delta

    def multiply(self, element: Element, factor: float) -> None:
        annotation = self._annotations.get(element)
        if annotation is not None:
            annotation.content_score *= factor

    def elements(self) -> list[Element]:
        return list(self._annotations)

    def clear(self) -> None:
        self._annotations.clear()


@dataclass(eq=False)
class Document:
    """A parsed page: the root element, its body and the score side map."""

    document_element: Element
    body: Element | None
    base_uri: str = ""
    scores: ScoreMap = field(default_factory=ScoreMap, repr=False)

    def reset_scores(self) -> None:
        self.scores.clear()


def create_element(tag_name: str, attributes: dict[str, str] | None = None) -> Element:
    return Element(tag_name, dict(attributes or {}))


def create_text_node(content: str) -> Text:
    return Text(content)


def get_elements_by_tag_names(
    root: Element | None, tag_names: Iterable[str]
) -> list[Element]:
    """All elements under ``root`` (inclusive) whose tag is in ``tag_names``.

    ``"*"`` matches every element. Results are in document order.
    """
    if root is None:
        return []
    wanted = {tag.lower() for tag in tag_names}
    match_all = "*" in wanted
    return [el for el in root.iter_elements() if match_all or el.tag_name in wanted]


def get_elements_by_tag_name(root: Element | None, tag_name: str) -> list[Element]:
    return get_elements_by_tag_names(root, [tag_name])


def get_node_ancestors(node: Node, max_depth: int = 0) -> list[Element]:
    """Ancestors of ``node``, closest first. ``max_depth <= 0`` returns all."""
    ancestors: list[Element] = []
    current = node.parent
    while current is not None and (max_depth <= 0 or len(ancestors) < max_depth):
        ancestors.append(current)
        current = current.parent
    return ancestors


def has_ancestor_tag(node: Node, tag_name: str, max_depth: int = 0) -> bool:
    """Check whether an ancestor within ``max_depth`` levels has ``tag_name``."""
    tag_name = tag_name.lower()
    depth = 0
    current = node.parent
    while current is not None:
        if max_depth > 0 and depth >= max_depth:
            return False
        if current.tag_name == tag_name:
            return True
        current = current.parent
        depth += 1
    return False


def is_inside(node: Node, containers: Iterable[Element | None], stop: Element | None) -> bool:
    """Check whether ``node`` is one of ``containers`` or nested in one.

    The upward walk stops at ``stop`` (exclusive).
    """
    targets = [c for c in containers if c is not None]
    if not targets:
        return False
    current: Node | None = node
    while current is not None and current is not stop:
        if any(current is target for target in targets):
            return True
        current = current.parent
    return False


def is_probably_visible(element: Element) -> bool:
    """Attribute-based visibility check (inline style, hidden, aria-hidden)."""
    style = element.get_attribute("style")
    if "display: none" in style or "visibility: hidden" in style:
        return False
    if element.has_attribute("hidden"):
        return False
    return element.get_attribute("aria-hidden") != "true"


def count_nodes(element: Element | None) -> int:
    """Number of nodes (elements and text) in the subtree rooted at ``element``."""
    if element is None:
        return 0
    count = 0
    stack = [element]
    while stack:
        current = stack.pop()
        count += 1
        for child in current.children:
            if isinstance(child, Element):
                stack.append(child)
            else:
                count += 1
    return count


def is_attached(node: Node, root: Element) -> bool:
    """Check whether ``node`` is ``root`` or still hangs below it."""
    current: Node | None = node
    while current is not None:
        if current is root:
            return True
        current = current.parent
    return False

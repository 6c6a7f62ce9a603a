"""Content scoring and candidate selection.

Scoring walks every scorable element (paragraphs, headings, cells, ...)
with enough text and pushes a share of its score to up to three
ancestors. Ancestors are initialized the first time they are reached,
from their tag and their class/id names. After the walk each candidate
is damped by its link density, nudged by its text density, and may
yield to a better-scored ancestor before ranking.
"""

from dataclasses import dataclass

import structlog

from pagereader.extraction.dom import (
    Document,
    Element,
    get_elements_by_tag_name,
    get_node_ancestors,
    is_probably_visible,
)
from pagereader.extraction.metrics import (
    count_commas,
    get_inner_text,
    get_link_density,
    get_text_density,
)
from pagereader.extraction.patterns import (
    CLASS_WEIGHT,
    DEFAULT_N_TOP_CANDIDATES,
    MIN_SCORABLE_TEXT_LENGTH,
    NEGATIVE,
    OK_MAYBE_ITS_A_CANDIDATE,
    POSITIVE,
    SCORE_ANCESTOR_DEPTH,
    SEMANTIC_CONTENT_TAGS,
    TAG_BASE_SCORES,
    TAGS_TO_SCORE,
    UNLIKELY_CANDIDATES,
)

logger = structlog.get_logger(__name__)


@dataclass
class Candidate:
    """An element considered as the content root, with its final score."""

    element: Element
    score: float


def get_class_weight(element: Element) -> float:
    """
    Score adjustment from the element's class and id.

    Class and id are checked independently; each can lose 25 for a
    negative match and gain 25 for a positive match.
    """
    weight = 0.0
    for value in (element.class_name, element.id):
        if not value:
            continue
        if NEGATIVE.search(value):
            weight -= CLASS_WEIGHT
        if POSITIVE.search(value):
            weight += CLASS_WEIGHT
    return weight


def initialize_node(doc: Document, element: Element) -> float:
    """Attach a score annotation to ``element`` and return its initial score."""
    score = TAG_BASE_SCORES.get(element.tag_name, 0) + get_class_weight(element)
    doc.scores.initialize(element, score)
    return score


def score_divider(level: int) -> int:
    """Divisor applied to a contribution pushed ``level`` ancestors up."""
    if level == 0:
        return 1
    if level == 1:
        return 2
    return level * 3


def content_contribution(text: str) -> float:
    """Base score an element with ``text`` contributes to its ancestors."""
    # Flat point, one per comma, one per 100 characters up to 3
    return 1.0 + count_commas(text) + min(len(text) // 100, 3)


def find_single_semantic_element(doc: Document) -> Element | None:
    """Return the document's only <article> (or else only <main>), if any."""
    for tag_name in SEMANTIC_CONTENT_TAGS:
        elements = get_elements_by_tag_name(doc.document_element, tag_name)
        if len(elements) == 1:
            return elements[0]
    return None


def score_elements(doc: Document) -> list[Element]:
    """
    Propagate scores from scorable elements to their ancestors.

    Returns:
        Newly scored ancestors in discovery order
    """
    candidates: list[Element] = []
    elements_to_score: list[Element] = []
    for tag_name in TAGS_TO_SCORE:
        elements_to_score.extend(get_elements_by_tag_name(doc.body, tag_name))

    for element in elements_to_score:
        inner_text = get_inner_text(element)
        if len(inner_text) < MIN_SCORABLE_TEXT_LENGTH:
            continue

        ancestors = get_node_ancestors(element, SCORE_ANCESTOR_DEPTH)
        if not ancestors:
            continue

        contribution = content_contribution(inner_text)

        for level, ancestor in enumerate(ancestors):
            if not doc.scores.has(ancestor):
                initialize_node(doc, ancestor)
                candidates.append(ancestor)
            doc.scores.add(ancestor, contribution / score_divider(level))

    return candidates


def adjust_candidate(doc: Document, element: Element) -> None:
    """Damp by link density and boost (up to 10%) by text density."""
    doc.scores.multiply(element, 1.0 - get_link_density(element))

    text_density = get_text_density(element)
    if text_density > 0:
        doc.scores.multiply(element, 1.0 + min(text_density / 10.0, 0.1))


def promote_to_ancestor(doc: Document, element: Element) -> Element:
    """
    Walk up to (not including) <body>, switching to any scored ancestor
    that beats the element currently tracked.
    """
    current = element
    parent = element.parent
    while parent is not None and parent.tag_name != "body":
        if doc.scores.has(parent) and doc.scores.score(parent) > doc.scores.score(current):
            current = parent
        parent = parent.parent
    return current


def rank_candidates(doc: Document, elements: list[Element]) -> list[Candidate]:
    """Adjust, promote and de-duplicate candidates, best first.

    Ties keep discovery order.
    """
    ranked: list[Candidate] = []
    seen: set[Element] = set()

    for element in elements:
        if not doc.scores.has(element):
            continue
        adjust_candidate(doc, element)

        promoted = promote_to_ancestor(doc, element)
        if promoted in seen:
            continue
        seen.add(promoted)
        ranked.append(Candidate(element=promoted, score=doc.scores.score(promoted)))

    # sorted() is stable, so equal scores stay in discovery order
    return sorted(ranked, key=lambda candidate: candidate.score, reverse=True)


def find_main_candidates(
    doc: Document, nb_top_candidates: int = DEFAULT_N_TOP_CANDIDATES
) -> list[Element]:
    """
    Find the elements most likely to hold the main content.

    Args:
        doc: Preprocessed document; its score map is filled in place
        nb_top_candidates: Maximum number of candidates to return

    Returns:
        Up to ``nb_top_candidates`` elements, best first. Falls back to
        ``[body]`` when nothing scores.
    """
    if nb_top_candidates <= 0:
        nb_top_candidates = DEFAULT_N_TOP_CANDIDATES

    # Each run starts from a clean score map
    doc.reset_scores()

    semantic = find_single_semantic_element(doc)
    if semantic is not None:
        logger.debug("semantic_candidate_found", tag=semantic.tag_name)
        return [semantic]

    scored = score_elements(doc)
    ranked = rank_candidates(doc, scored)
    top = [candidate.element for candidate in ranked[:nb_top_candidates]]

    logger.debug(
        "candidates_found",
        scored=len(scored),
        distinct=len(ranked),
        returned=len(top),
        top_score=ranked[0].score if ranked else None,
    )

    if not top and doc.body is not None:
        return [doc.body]
    return top


find_candidates = find_main_candidates


def is_probably_content(element: Element) -> bool:
    """
    Quick check that an element reads like main content.

    Visible, not named like page furniture, at least 140 characters,
    link density at most 0.5 and text density at least 0.1.
    """
    if not is_probably_visible(element):
        return False

    match_string = f"{element.class_name} {element.id}"
    if UNLIKELY_CANDIDATES.search(match_string) and not OK_MAYBE_ITS_A_CANDIDATE.search(
        match_string
    ):
        return False

    if len(get_inner_text(element)) < 140:
        return False

    if get_link_density(element) > 0.5:
        return False

    return get_text_density(element) >= 0.1

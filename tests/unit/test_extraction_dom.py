"""Tests for the extraction tree model."""

from pagereader.extraction.dom import (
    Element,
    ScoreMap,
    Text,
    count_nodes,
    create_element,
    create_text_node,
    get_elements_by_tag_name,
    get_elements_by_tag_names,
    get_node_ancestors,
    has_ancestor_tag,
    is_attached,
    is_inside,
    is_probably_visible,
)


def build_tree() -> tuple[Element, Element, Element, Element]:
    """div > (p > b), span"""
    bold = Element("b", {}, [Text("bold")])
    paragraph = Element("p", {}, [Text("Hello "), bold])
    span = Element("span", {"class": "note"}, [Text("aside")])
    div = Element("DIV", {"id": "root"}, [paragraph, span])
    return div, paragraph, bold, span


class TestElement:
    """Tests for Element and Text nodes."""

    def test_tag_name_lowercased(self) -> None:
        """Test tag names are normalized to lowercase."""
        assert Element("ARTICLE").tag_name == "article"

    def test_children_get_parent(self) -> None:
        """Test children passed at construction point back to their parent."""
        div, paragraph, bold, _ = build_tree()

        assert paragraph.parent is div
        assert bold.parent is paragraph
        assert div.parent is None

    def test_attribute_helpers(self) -> None:
        """Test missing attributes read as empty strings."""
        element = create_element("div", {"id": "main", "class": "content body"})

        assert element.id == "main"
        assert element.class_name == "content body"
        assert element.get_attribute("role") == ""
        assert element.has_attribute("id")
        assert not element.has_attribute("role")

        element.set_attribute("role", "main")
        assert element.get_attribute("role") == "main"

    def test_append_child_moves_node(self) -> None:
        """Test appending a node detaches it from its previous parent."""
        first = Element("div")
        second = Element("div")
        text = create_text_node("moving")
        first.append_child(text)

        second.append_child(text)

        assert first.children == []
        assert second.children[0] is text
        assert text.parent is second

    def test_remove_child_by_identity(self) -> None:
        """Test removal matches by identity, not by value."""
        div, paragraph, _, _ = build_tree()
        lookalike = Element("p", {}, [Text("Hello ")])

        assert div.remove_child(lookalike) is False
        assert div.remove_child(paragraph) is True
        assert paragraph.parent is None
        assert paragraph not in div.children

    def test_detach(self) -> None:
        """Test detach removes the node and its subtree."""
        div, paragraph, bold, _ = build_tree()

        paragraph.detach()

        assert get_elements_by_tag_name(div, "b") == []
        assert bold.parent is paragraph

    def test_iter_elements_document_order(self) -> None:
        """Test preorder traversal."""
        div, paragraph, bold, span = build_tree()

        assert list(div.iter_elements()) == [div, paragraph, bold, span]

    def test_identity_equality(self) -> None:
        """Test equal-looking elements stay distinct."""
        assert Element("p") != Element("p")
        assert len({Element("p"), Element("p")}) == 2


class TestQueries:
    """Tests for tree query helpers."""

    def test_get_elements_by_tag_names_includes_root(self) -> None:
        """Test the root itself is matched."""
        div, paragraph, _, span = build_tree()

        assert get_elements_by_tag_names(div, ["div", "span"]) == [div, span]
        assert get_elements_by_tag_name(div, "P") == [paragraph]

    def test_wildcard_matches_everything(self) -> None:
        """Test "*" returns every element."""
        div, _, _, _ = build_tree()

        assert len(get_elements_by_tag_name(div, "*")) == 4

    def test_none_root(self) -> None:
        """Test a missing root yields no elements."""
        assert get_elements_by_tag_name(None, "p") == []

    def test_get_node_ancestors(self) -> None:
        """Test ancestors come closest first and respect max_depth."""
        div, paragraph, bold, _ = build_tree()
        text = bold.children[0]

        assert get_node_ancestors(text) == [bold, paragraph, div]
        assert get_node_ancestors(text, max_depth=2) == [bold, paragraph]
        assert get_node_ancestors(div) == []

    def test_has_ancestor_tag(self) -> None:
        """Test ancestor tag lookup with a depth limit."""
        _, _, bold, _ = build_tree()

        assert has_ancestor_tag(bold, "div")
        assert not has_ancestor_tag(bold, "div", max_depth=1)
        assert not has_ancestor_tag(bold, "table")

    def test_is_inside(self) -> None:
        """Test containment stops at the given element."""
        div, paragraph, bold, span = build_tree()

        assert is_inside(bold, [paragraph], stop=div)
        assert is_inside(paragraph, [paragraph], stop=div)
        assert not is_inside(span, [paragraph], stop=div)
        assert not is_inside(bold, [None], stop=div)
        assert not is_inside(bold, [div], stop=div)


class TestVisibility:
    """Tests for is_probably_visible."""

    def test_visible_by_default(self) -> None:
        """Test plain elements are visible."""
        assert is_probably_visible(Element("div"))

    def test_hidden_markers(self) -> None:
        """Test inline style, hidden and aria-hidden."""
        assert not is_probably_visible(Element("div", {"style": "display: none"}))
        assert not is_probably_visible(Element("div", {"style": "visibility: hidden"}))
        assert not is_probably_visible(Element("div", {"hidden": ""}))
        assert not is_probably_visible(Element("div", {"aria-hidden": "true"}))
        assert is_probably_visible(Element("div", {"aria-hidden": "false"}))


class TestCountNodes:
    """Tests for count_nodes."""

    def test_counts_elements_and_text(self) -> None:
        """Test every element and text node is counted once."""
        div, _, _, _ = build_tree()

        # div, p, "Hello ", b, "bold", span, "aside"
        assert count_nodes(div) == 7

    def test_none(self) -> None:
        """Test a missing root counts as zero."""
        assert count_nodes(None) == 0

    def test_deep_nesting(self) -> None:
        """Test trees nested deeper than the interpreter recursion limit."""
        root = Element("div")
        current = root
        for _ in range(1199):
            current = current.append_child(Element("div"))
        current.append_child(Text("leaf"))

        assert count_nodes(root) == 1201


class TestIsAttached:
    """Tests for is_attached."""

    def test_attached_and_detached(self) -> None:
        """Test nodes under a removed subtree are no longer attached."""
        div, paragraph, bold, span = build_tree()

        assert is_attached(bold, div)
        assert is_attached(div, div)

        paragraph.detach()

        assert not is_attached(bold, div)
        assert is_attached(bold, paragraph)
        assert is_attached(span, div)


class TestScoreMap:
    """Tests for the score side map."""

    def test_unscored_element(self) -> None:
        """Test an element never initialized has no annotation."""
        scores = ScoreMap()
        element = Element("div")

        assert not scores.has(element)
        assert element not in scores
        assert scores.get(element) is None
        assert scores.score(element) == 0.0

    def test_initialize_add_multiply(self) -> None:
        """Test score arithmetic on an initialized element."""
        scores = ScoreMap()
        element = Element("div")

        scores.initialize(element, 5.0)
        scores.add(element, 3.0)
        scores.multiply(element, 0.5)

        assert scores.has(element)
        assert scores.score(element) == 4.0
        assert len(scores) == 1

    def test_updates_ignore_unscored(self) -> None:
        """Test add/multiply do not create annotations."""
        scores = ScoreMap()
        element = Element("div")

        scores.add(element, 1.0)
        scores.multiply(element, 2.0)

        assert not scores.has(element)

    def test_clear(self) -> None:
        """Test clearing forgets every element."""
        scores = ScoreMap()
        element = Element("div")
        scores.initialize(element)

        scores.clear()

        assert len(scores) == 0
        assert scores.elements() == []

"""Tests for article/other page classification."""

import pytest

from pagereader.extraction.classify import (
    PageStructure,
    PageType,
    UrlPattern,
    analyze_page_structure,
    analyze_url_pattern,
    classify_page_type,
    get_expected_page_type_by_url,
    is_article_id_segment,
    is_semantic_tag,
)
from pagereader.extraction.dom import Element
from pagereader.extraction.parser import parse_html
from pagereader.extraction.preprocess import preprocess_document
from pagereader.extraction.scoring import find_main_candidates

LONG_TEXT = "word " * 120


def by_id(doc, element_id: str) -> Element:
    return next(el for el in doc.document_element.iter_elements() if el.id == element_id)


class TestUrlHeuristics:
    """Tests for URL shape helpers."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/news/12345", UrlPattern.NUMERIC),
            ("https://example.com/news/abc123", UrlPattern.ALPHANUMERIC),
            ("https://example.com/about-us", UrlPattern.ALPHA),
            ("https://example.com/news/", UrlPattern.NONE),
            ("https://example.com/caf%C3%A9", UrlPattern.OTHER),
            ("https://example.com/story.html", UrlPattern.ALPHA),
        ],
    )
    def test_analyze_url_pattern(self, url: str, expected: UrlPattern) -> None:
        """Test the last path segment is described."""
        assert analyze_url_pattern(url) == expected

    def test_article_id_segment(self) -> None:
        """Test numeric ids and long alphanumeric ids."""
        assert is_article_id_segment("123")
        assert is_article_id_segment("ab123")
        assert not is_article_id_segment("ab12")
        assert not is_article_id_segment("about")

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/articles/why-foxes-jump", PageType.ARTICLE),
            ("https://example.com/news/2024/foxes", PageType.ARTICLE),
            ("https://example.com/p/839201", PageType.ARTICLE),
            ("https://example.com/about", PageType.OTHER),
            ("https://example.com/", PageType.OTHER),
        ],
    )
    def test_expected_page_type_by_url(self, url: str, expected: PageType) -> None:
        """Test the URL-only prior."""
        assert get_expected_page_type_by_url(url) == expected


class TestPageStructure:
    """Tests for analyze_page_structure."""

    def test_counts(self, listing_html: str) -> None:
        """Test headings, links and list-like elements are counted."""
        structure = analyze_page_structure(parse_html(listing_html))

        assert structure.heading_count == 12
        assert structure.link_count == 27
        assert structure.image_count == 0
        # 15 <li> plus 12 card-classed body children
        assert structure.list_element_count == 27
        assert structure.looks_like_index

    def test_no_headings_looks_like_index(self) -> None:
        """Test a page without headings is index-like."""
        assert PageStructure(heading_count=0).looks_like_index
        assert not PageStructure(heading_count=3).looks_like_index

    def test_to_dict(self) -> None:
        """Test serialization."""
        data = PageStructure(heading_count=2, link_count=5).to_dict()

        assert data["heading_count"] == 2
        assert data["link_count"] == 5
        assert data["looks_like_index"] is False


class TestIsSemanticTag:
    """Tests for is_semantic_tag function."""

    def test_semantic_elements(self) -> None:
        """Test main/article, content names and direct wrappers."""
        assert is_semantic_tag(Element("main"))
        assert is_semantic_tag(Element("div", {"class": "page-content"}))
        assert is_semantic_tag(Element("div", {}, [Element("article")]))
        assert not is_semantic_tag(Element("div", {}, [Element("div", {}, [Element("article")])]))


class TestClassifyPageType:
    """Tests for classify_page_type function."""

    def test_no_candidates(self) -> None:
        """Test an empty candidate list is never an article."""
        doc = parse_html("<h1>Title</h1><p>Text</p>")

        assert classify_page_type(doc, []) == PageType.OTHER

    def test_listing_page(self, listing_html: str) -> None:
        """Test many cards and headings classify as other."""
        doc = preprocess_document(parse_html(listing_html))
        candidates = find_main_candidates(doc)

        assert classify_page_type(doc, candidates) == PageType.OTHER

    def test_long_content_with_headings(self) -> None:
        """Test long, link-poor content under a heading is an article."""
        doc = parse_html(f'<div id="story"><h1>Foxes</h1><p>{LONG_TEXT}</p></div>')

        assert classify_page_type(doc, [by_id(doc, "story")]) == PageType.ARTICLE

    def test_short_semantic_element(self) -> None:
        """Test a near-empty <main> is not an article."""
        doc = parse_html("<main id='m'><h1>Title</h1><p>Short body.</p></main>")

        assert classify_page_type(doc, [by_id(doc, "m")]) == PageType.OTHER

    def test_score_parity_with_links(self) -> None:
        """Test two near-equal candidates with a linky leader."""
        doc = parse_html(
            '<div id="a"><h1>Heading for the page</h1>'
            f'<p>{"word " * 30}<a href="/x">{"link " * 20}</a></p></div>'
            '<div id="b"><p>Another block.</p></div>'
        )
        top, second = by_id(doc, "a"), by_id(doc, "b")
        doc.scores.initialize(top, 10.0)
        doc.scores.initialize(second, 9.0)

        assert classify_page_type(doc, [top, second]) == PageType.OTHER
        # Alone, the same candidate reads as a short article
        assert classify_page_type(doc, [top]) == PageType.ARTICLE

    def test_article_url(self) -> None:
        """Test an article-looking URL wins when there is a candidate."""
        doc = parse_html("<p>Short</p>")

        page_type = classify_page_type(doc, [doc.body], url="https://example.com/articles/x")
        assert page_type == PageType.ARTICLE
        assert classify_page_type(doc, [], url="https://example.com/articles/x") == PageType.OTHER

    def test_top_level_url(self) -> None:
        """Test home pages are other unless the content is very long."""
        doc = parse_html(f'<div id="story"><h1>Foxes</h1><p>{LONG_TEXT}</p></div>')
        story = by_id(doc, "story")

        assert classify_page_type(doc, [story], url="https://example.com/") == PageType.OTHER
        assert (
            classify_page_type(doc, [story], char_threshold=200, url="https://example.com/")
            == PageType.ARTICLE
        )

    def test_deterministic(self, listing_html: str) -> None:
        """Test repeated classification gives the same answer."""
        doc = preprocess_document(parse_html(listing_html))
        candidates = find_main_candidates(doc)

        results = {classify_page_type(doc, candidates) for _ in range(3)}
        assert len(results) == 1


def classification_rule(logs: list[dict]) -> str:
    events = [entry for entry in logs if entry["event"] == "page_type_classified"]
    return events[-1]["rule"]


class TestClassificationRules:
    """Tests pinning which rule of the cascade decides."""

    def test_semantic_content(self, captured_logs: list[dict]) -> None:
        """Test a <main> with half the threshold of text is an article."""
        doc = parse_html(f"<main id='m'><h1>Title</h1><p>{'word ' * 60}</p></main>")

        assert classify_page_type(doc, [by_id(doc, "m")]) == PageType.ARTICLE
        assert classification_rule(captured_logs) == "semantic_content"

    def test_content_length(self, captured_logs: list[dict]) -> None:
        """Test long content under a heading."""
        doc = parse_html(f'<div id="story"><h1>Foxes</h1><p>{LONG_TEXT}</p></div>')

        assert classify_page_type(doc, [by_id(doc, "story")]) == PageType.ARTICLE
        assert classification_rule(captured_logs) == "content_length"

    @pytest.mark.parametrize("container", ["main", "div"])
    def test_list_heavy_page_is_index(self, container: str, captured_logs: list[dict]) -> None:
        """Test article-quality text next to more than ten list items is other."""
        items = "".join(f"<li>Item {i}</li>" for i in range(11))
        doc = parse_html(
            f"<{container} id='c'><h1>Title</h1><p>{LONG_TEXT}</p><ul>{items}</ul></{container}>"
        )

        assert analyze_page_structure(doc).list_element_count == 11
        assert classify_page_type(doc, [by_id(doc, "c")]) == PageType.OTHER
        assert classification_rule(captured_logs) == "index_structure"

    def test_link_heavy(self, captured_logs: list[dict]) -> None:
        """Test many links around little body text."""
        links = "".join(f'<a href="/{i}">x</a>' for i in range(31))
        doc = parse_html(f'<h1>Title</h1><div id="top"><p>{"word " * 40}</p></div>{links}')

        assert classify_page_type(doc, [by_id(doc, "top")]) == PageType.OTHER
        assert classification_rule(captured_logs) == "link_heavy"

    def test_fallback_content(self, captured_logs: list[dict]) -> None:
        """Test the same page with few links falls through to an article."""
        links = "".join(f'<a href="/{i}">x</a>' for i in range(10))
        doc = parse_html(f'<h1>Title</h1><div id="top"><p>{"word " * 40}</p></div>{links}')

        assert classify_page_type(doc, [by_id(doc, "top")]) == PageType.ARTICLE
        assert classification_rule(captured_logs) == "fallback_content"

    def test_fallback(self, captured_logs: list[dict]) -> None:
        """Test short, plain content ends the cascade as other."""
        doc = parse_html('<h1>Title</h1><div id="top"><p>Only a short paragraph.</p></div>')

        assert classify_page_type(doc, [by_id(doc, "top")]) == PageType.OTHER
        assert classification_rule(captured_logs) == "fallback"

    def test_single_segment_url_long_content(self, captured_logs: list[dict]) -> None:
        """Test very long content overrides a one-segment URL."""
        doc = parse_html(f'<div id="story"><h1>Foxes</h1><p>{"word " * 250}</p></div>')

        page_type = classify_page_type(
            doc, [by_id(doc, "story")], url="https://example.com/foxes"
        )

        assert page_type == PageType.ARTICLE
        assert classification_rule(captured_logs) == "url"

    def test_single_segment_url_short_content(self, captured_logs: list[dict]) -> None:
        """Test a one-segment URL is other when content is under twice the threshold."""
        doc = parse_html(f'<div id="story"><h1>Foxes</h1><p>{LONG_TEXT}</p></div>')

        page_type = classify_page_type(
            doc, [by_id(doc, "story")], url="https://example.com/foxes"
        )

        # Without the URL this page is an article by length
        assert page_type == PageType.OTHER
        assert classification_rule(captured_logs) == "url"

"""Article metadata: title, byline and JSON-LD article fields."""

import json
import re
from dataclasses import dataclass
from html import unescape
from typing import Any

import structlog

from pagereader.extraction.dom import Document, get_elements_by_tag_name, get_elements_by_tag_names
from pagereader.extraction.metrics import get_inner_text
from pagereader.extraction.patterns import NORMALIZE_WHITESPACE

logger = structlog.get_logger(__name__)

TITLE_SEPARATOR = re.compile(r" [\|\-\\\/>»] ")
TITLE_HIERARCHICAL_SEPARATOR = re.compile(r" [\\\/>»] ")
TITLE_SEPARATOR_CHARS = re.compile(r"[\|\-\\\/>»]+")

META_PROPERTY = re.compile(
    r"\s*(article|dc|dcterm|og|twitter)\s*:\s*"
    r"(author|creator|description|published_time|title|site_name)\s*",
    re.I,
)
META_NAME = re.compile(
    r"^\s*(?:(dc|dcterm|og|twitter|parsely|weibo:(article|webpage))\s*[-\.:]\s*)?"
    r"(author|creator|pub-date|description|title|site_name)\s*$",
    re.I,
)

JSON_LD_ARTICLE_TYPES = re.compile(
    r"Article|AdvertiserContentArticle|NewsArticle|AnalysisNewsArticle|"
    r"AskPublicNewsArticle|BackgroundNewsArticle|OpinionNewsArticle|ReportageNewsArticle|"
    r"ReviewNewsArticle|Report|SatiricalArticle|ScholarlyArticle|MedicalScholarlyArticle|"
    r"SocialMediaPosting|BlogPosting|LiveBlogPosting|DiscussionForumPosting|TechArticle|"
    r"APIReference"
)
SCHEMA_ORG_CONTEXT = re.compile(r"^https?://schema\.org/?$")
CDATA_MARKERS = re.compile(r"^\s*<!\[CDATA\[|\]\]>\s*$")

# Meta keys checked for a byline, in priority order
BYLINE_META_KEYS = ("dc:creator", "dcterm:creator", "author", "parsely-author")


@dataclass
class ArticleMetadata:
    """Metadata found in JSON-LD or meta tags."""

    title: str = ""
    byline: str = ""
    excerpt: str = ""
    site_name: str = ""
    published_time: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "byline": self.byline,
            "excerpt": self.excerpt,
            "site_name": self.site_name,
            "published_time": self.published_time,
        }


def _word_count(text: str) -> int:
    return len(text.split())


def is_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def get_article_title(doc: Document) -> str:
    """
    Work out the article title from <title>, trimming site names.

    Site names joined with separators ("Title | Site") or colons are cut
    off when what remains still looks like a title; very short or very
    long titles fall back to a single <h1>.
    """
    root = doc.document_element
    titles = get_elements_by_tag_name(root, "title")
    orig_title = get_inner_text(titles[0]) if titles else ""
    cur_title = orig_title
    had_hierarchical_separators = False

    if TITLE_SEPARATOR.search(cur_title):
        had_hierarchical_separators = bool(TITLE_HIERARCHICAL_SEPARATOR.search(cur_title))

        # Drop the last part ("... | Site Name")
        separators = list(TITLE_SEPARATOR.finditer(orig_title))
        cur_title = orig_title[: separators[-1].start()]

        # Too short: drop the first part instead
        if _word_count(cur_title) < 3:
            parts = TITLE_SEPARATOR.split(orig_title)
            if len(parts) > 1:
                cur_title = " ".join(parts[1:])
    elif ": " in cur_title:
        trimmed = cur_title.strip()
        headings = get_elements_by_tag_names(root, ["h1", "h2"])
        if not any(get_inner_text(h).strip() == trimmed for h in headings):
            cur_title = orig_title[orig_title.rfind(":") + 1 :]

            if _word_count(cur_title) < 3:
                first_colon = orig_title.find(":")
                cur_title = orig_title[first_colon + 1 :]
                # Many words before the colon: the heading markup is odd
                if _word_count(orig_title[:first_colon]) > 5:
                    cur_title = orig_title
    elif len(cur_title) > 150 or len(cur_title) < 15:
        h1s = get_elements_by_tag_name(root, "h1")
        if len(h1s) == 1:
            cur_title = get_inner_text(h1s[0])

    cur_title = NORMALIZE_WHITESPACE.sub(" ", cur_title.strip())

    # Four words or fewer: keep the original unless the cut was a clean
    # hierarchical one that removed exactly one word
    word_count = _word_count(cur_title)
    if word_count <= 4 and (
        not had_hierarchical_separators
        or word_count != _word_count(TITLE_SEPARATOR_CHARS.sub("", orig_title)) - 1
    ):
        cur_title = orig_title

    return cur_title


def _find_article_object(data: Any) -> dict | None:
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and _is_article_type(item.get("@type")):
                return item
        return None
    return data if isinstance(data, dict) else None


def _is_article_type(value: Any) -> bool:
    return isinstance(value, str) and bool(JSON_LD_ARTICLE_TYPES.fullmatch(value))


def _has_schema_org_context(data: dict) -> bool:
    context = data.get("@context")
    if isinstance(context, str):
        return bool(SCHEMA_ORG_CONTEXT.match(context))
    if isinstance(context, dict):
        vocab = context.get("@vocab")
        return isinstance(vocab, str) and bool(SCHEMA_ORG_CONTEXT.match(vocab))
    return False


def _author_names(author: Any) -> str:
    if isinstance(author, dict):
        name = author.get("name")
        return name.strip() if isinstance(name, str) else ""
    if isinstance(author, list):
        names = [
            a["name"].strip()
            for a in author
            if isinstance(a, dict) and isinstance(a.get("name"), str)
        ]
        return ", ".join(names)
    return ""


def get_json_ld(doc: Document) -> ArticleMetadata:
    """
    Read article metadata from the first schema.org JSON-LD article.

    Unparseable or non-article blocks are skipped.
    """
    metadata = ArticleMetadata()

    for script in get_elements_by_tag_name(doc.document_element, "script"):
        if script.get_attribute("type") != "application/ld+json":
            continue

        content = CDATA_MARKERS.sub("", get_inner_text(script))
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.debug("json_ld_parse_error", error=str(e))
            continue

        parsed = _find_article_object(data)
        if parsed is None or not _has_schema_org_context(parsed):
            continue

        if "@type" not in parsed and isinstance(parsed.get("@graph"), list):
            graph_item = next(
                (
                    item
                    for item in parsed["@graph"]
                    if isinstance(item, dict) and _is_article_type(item.get("@type"))
                ),
                None,
            )
            if graph_item is None:
                continue
            parsed = graph_item

        if not _is_article_type(parsed.get("@type")):
            continue

        name = parsed.get("name")
        headline = parsed.get("headline")
        if isinstance(name, str) and name:
            metadata.title = name.strip()
        elif isinstance(headline, str) and headline:
            metadata.title = headline.strip()

        metadata.byline = _author_names(parsed.get("author"))

        description = parsed.get("description")
        if isinstance(description, str):
            metadata.excerpt = description.strip()

        publisher = parsed.get("publisher")
        if isinstance(publisher, dict) and isinstance(publisher.get("name"), str):
            metadata.site_name = publisher["name"].strip()

        published = parsed.get("datePublished")
        if isinstance(published, str):
            metadata.published_time = published.strip()

        return metadata

    return metadata


def get_meta_values(doc: Document) -> dict[str, str]:
    """Collect author/title/description-like <meta> values by normalized key."""
    values: dict[str, str] = {}

    for meta in get_elements_by_tag_name(doc.document_element, "meta"):
        content = meta.get_attribute("content")
        if not content:
            continue

        meta_property = meta.get_attribute("property")
        if meta_property:
            match = META_PROPERTY.search(meta_property)
            if match:
                key = match.group(0).lower().replace(" ", "")
                values[key] = content

        meta_name = meta.get_attribute("name")
        if meta_name and META_NAME.match(meta_name):
            key = meta_name.lower().replace(" ", "").replace(".", ":")
            values[key] = content

    return values


def get_article_byline(doc: Document) -> str:
    """Author from JSON-LD, else from meta tags; empty when unknown."""
    json_ld = get_json_ld(doc)
    if json_ld.byline:
        return json_ld.byline

    values = get_meta_values(doc)
    byline = next((values[key] for key in BYLINE_META_KEYS if values.get(key)), "")

    # article:author is often a profile URL rather than a name
    article_author = values.get("article:author", "")
    if article_author and not is_url(article_author):
        byline = article_author

    return unescape(byline) if byline else ""


def get_article_metadata(doc: Document) -> ArticleMetadata:
    """Title, byline and JSON-LD extras in one record."""
    json_ld = get_json_ld(doc)
    return ArticleMetadata(
        title=get_article_title(doc),
        byline=get_article_byline(doc),
        excerpt=json_ld.excerpt,
        site_name=json_ld.site_name,
        published_time=json_ld.published_time,
    )


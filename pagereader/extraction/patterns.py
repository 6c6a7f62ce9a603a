"""Tag sets, regular expressions and defaults shared by the extraction modules.

The word lists are empirically tuned; scoring and classification are
sensitive to them, so change them only together with the tests.
"""

import re

DEFAULT_CHAR_THRESHOLD = 500
DEFAULT_N_TOP_CANDIDATES = 5

# Minimum inner-text length for an element to contribute to scoring
MIN_SCORABLE_TEXT_LENGTH = 25

# Number of ancestor levels that receive a share of an element's score
SCORE_ANCESTOR_DEPTH = 3

# Tags whose text feeds the score of their ancestors, in collection order
TAGS_TO_SCORE = ("section", "h2", "h3", "h4", "h5", "h6", "p", "td", "pre")

# A single one of these in the document is taken as the content root
SEMANTIC_CONTENT_TAGS = ("article", "main")

# Removed (with their subtree) before scoring
NOISE_TAGS = (
    "aside",
    "nav",
    "header",
    "footer",
    "script",
    "style",
    "noscript",
    "iframe",
    "form",
    "button",
    "object",
    "embed",
    "applet",
    "map",
    "dialog",
)

# Matched case-insensitively against the class, the id and "class id"
AD_PATTERNS = [
    re.compile(pattern, re.I)
    for pattern in (
        r"ad-",
        r"^ad$",
        r"^ads$",
        r"advert",
        r"banner",
        r"sponsor",
        r"promo",
        r"google-ad",
        r"adsense",
        r"doubleclick",
        r"amazon",
        r"affiliate",
        r"commercial",
        r"paid",
        r"shopping",
        r"recommendation",
    )
]

AD_ATTRIBUTES = ("data-ad", "data-ad-client", "data-ad-slot")

# Initial score by tag name for a newly scored element
TAG_BASE_SCORES: dict[str, float] = {
    "div": 5,
    "pre": 3,
    "td": 3,
    "blockquote": 3,
    "address": -3,
    "ol": -3,
    "ul": -3,
    "dl": -3,
    "dd": -3,
    "dt": -3,
    "li": -3,
    "form": -3,
    "h1": -5,
    "h2": -5,
    "h3": -5,
    "h4": -5,
    "h5": -5,
    "h6": -5,
    "th": -5,
}

CLASS_WEIGHT = 25

UNLIKELY_CANDIDATES = re.compile(
    r"-ad-|ai2html|banner|breadcrumbs|combx|comment|community|cover-wrap|disqus|extra|"
    r"footer|gdpr|header|legends|menu|related|remark|replies|rss|shoutbox|sidebar|"
    r"skyscraper|social|sponsor|supplemental|ad-break|agegate|pagination|pager|popup|"
    r"yom-remote"
)
OK_MAYBE_ITS_A_CANDIDATE = re.compile(r"and|article|body|column|content|main|shadow")
POSITIVE = re.compile(
    r"article|body|content|entry|hentry|h-entry|main|page|pagination|post|text|blog|story"
)
NEGATIVE = re.compile(
    r"-ad-|hidden|^hid$| hid$| hid |^hid |banner|combx|comment|com-|contact|footer|gdpr|"
    r"masthead|media|meta|outbrain|promo|related|scroll|share|shoutbox|sidebar|"
    r"skyscraper|sponsor|shopping|tags|widget"
)

# Latin, Arabic, CJK and other comma glyphs
COMMAS = re.compile(r",|،|﹐|︐|︑|⹁|⹔|⹒|，|、")

NORMALIZE_WHITESPACE = re.compile(r"\s{2,}")

# Classifier URL shapes
DIGITS_ONLY = re.compile(r"^\d+$")
ALPHANUMERIC = re.compile(r"^[a-zA-Z0-9\-_]+$")
ALPHA_ONLY = re.compile(r"^[a-zA-Z\-_]+$")
HAS_DIGIT = re.compile(r"\d")
TOP_LEVEL_URL = re.compile(r"^https?://[^/]+/?$")
SINGLE_SEGMENT_URL = re.compile(r"^https?://[^/]+/[^/]+/?$")
THREE_LEVEL_URL = re.compile(r"^https?://[^/]+/[^/]+/[^/]+/[^/]*$")

# Direct body children with these in their class look like list cards
CARD_CLASS_MARKERS = ("card", "item", "entry")

# Structural fallback detection
HEADER_IDS = ("header", "masthead")
HEADER_CLASS_MARKERS = ("header", "masthead")
FOOTER_IDS = ("footer", "colophon")
FOOTER_CLASS_MARKERS = ("footer", "site-info")
SIGNIFICANT_SECTION_TAGS = ("main", "article", "section", "aside", "nav")
SIGNIFICANT_CONTAINER_MARKERS = (
    "content",
    "main",
    "article",
    "post",
    "entry",
    "body",
    "text",
    "story",
    "container",
    "wrapper",
    "page",
    "blog",
    "section",
)
SIGNIFICANT_TAGS = ("header", "footer", "main", "article", "aside", "nav")
SIGNIFICANT_ROLES = ("banner", "contentinfo", "main", "navigation", "complementary")
SIGNIFICANT_MARKERS = (
    "header",
    "footer",
    "main",
    "content",
    "article",
    "navigation",
    "nav",
    "sidebar",
    "menu",
    "banner",
)

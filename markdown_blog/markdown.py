"""
Markdown processing for django-markdown-blog.

A small set of regular-expression transformations, not a full markdown
parser. Every function here is a pure function of its input text:

    from markdown_blog.markdown import render_to_html, generate_slug

    result = render_to_html("# Hello\n\nThis is **bold** text.")
    result.html          # '<h1>Hello</h1></p><p>This is <strong>bold</strong> text.'
    result.reading_time  # 1
"""
import logging
import math
import re
from dataclasses import dataclass

from django.utils.html import escape

from .exceptions import MarkdownProcessingError

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200

# Validation issue messages
MISSING_HEADING = "Content should start with a main heading (# Title)"
CONTENT_TOO_SHORT = "Content appears to be very short (less than 100 characters)"
UNMATCHED_CODE_FENCE = "Unmatched code block delimiters (```)"
UNMATCHED_INLINE_CODE = "Unmatched inline code delimiters (`)"
EMPTY_LINK_URL = "Empty link URL found"

MIN_CONTENT_LENGTH = 100

# Rendering rules, applied in order
_HTML_RULES = [
    # Headings, longest marker first
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.MULTILINE), r"<h1>\1</h1>"),
    # Emphasis, triple before double before single
    (re.compile(r"\*\*\*(.*?)\*\*\*"), r"<strong><em>\1</em></strong>"),
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    # Fenced code blocks, before inline code consumes their backticks
    (re.compile(r"```([\s\S]*?)```"), r"<pre><code>\1</code></pre>"),
    # Inline code
    (re.compile(r"`(.*?)`"), r"<code>\1</code>"),
    # Links
    (re.compile(r"\[([^\]]+)\]\(([^)]+)\)"), r'<a href="\2">\1</a>'),
    # Paragraphs, then line breaks
    (re.compile(r"\n\n"), "</p><p>"),
    (re.compile(r"\n"), "<br>"),
]

_BLOCK_PREFIXES = ("<h", "<p", "<pre")

_PLAIN_TEXT_RULES = [
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"\*{1,3}(.*?)\*{1,3}"), r"\1"),
    # Fenced blocks are dropped whole
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"`(.*?)`"), r"\1"),
]

# Images before links, so the link rule does not leave a stray "!"
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_TEXT_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_STRIP_RE = re.compile(r"[^A-Za-z0-9_\s-]")
_SLUG_SEPARATOR_RE = re.compile(r"[\s_-]+")
_SLUG_EDGE_RE = re.compile(r"^-+|-+$")

_MAIN_HEADING_RE = re.compile(r"^#\s+", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]*)\)")


@dataclass
class MarkdownOptions:
    """Options accepted by render_to_html."""

    sanitize: bool = False
    highlight_code: bool = False
    generate_toc: bool = False


@dataclass(frozen=True)
class ProcessingResult:
    """HTML and metadata derived from a document."""

    html: str
    reading_time: int
    toc: list | None = None


def render_to_html(document, options=None):
    """
    Convert markdown text to HTML.

    Never fails for text input, including the empty string. Any internal
    fault is logged and raised as MarkdownProcessingError, which carries no
    detail meant for end users.

    Args:
        document: Raw markdown text. None is treated as empty.
        options: Optional MarkdownOptions.

    Returns:
        ProcessingResult with html and reading_time. The reading time counts
        words of the raw text and has no lower bound, so an empty document
        reads in 0 minutes (unlike estimate_reading_time).
    """
    options = options or MarkdownOptions()
    if document is None:
        document = ""

    try:
        html = str(escape(document)) if options.sanitize else document
        for pattern, replacement in _HTML_RULES:
            html = pattern.sub(replacement, html)

        if not html.startswith(_BLOCK_PREFIXES):
            html = f"<p>{html}</p>"

        word_count = len(document.split())
        reading_time = math.ceil(word_count / WORDS_PER_MINUTE)
    except Exception as exc:
        logger.exception("Error processing markdown")
        raise MarkdownProcessingError() from exc

    return ProcessingResult(html=html, reading_time=reading_time, toc=None)


def extract_plain_text(document):
    """
    Strip markdown syntax, keeping readable text.

    Used for excerpts, feed descriptions and search.
    """
    text = document or ""
    for pattern, replacement in _PLAIN_TEXT_RULES:
        text = pattern.sub(replacement, text)

    # Nested links unwrap one level per pass
    previous = None
    while text != previous:
        previous = text
        text = _IMAGE_RE.sub(r"\1", text)
        text = _LINK_TEXT_RE.sub(r"\1", text)

    return _WHITESPACE_RE.sub(" ", text).strip()


def estimate_reading_time(document):
    """Return reading time in minutes at 200 words per minute, at least 1."""
    word_count = len(extract_plain_text(document).split())
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def make_excerpt(document, length=200):
    """Return the first `length` characters of the document's plain text."""
    text = extract_plain_text(document)
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


def generate_slug(title):
    """
    Generate a URL-friendly slug from a title.

    Duplicate titles give identical slugs; making them unique is up to the
    caller (see Post.save).
    """
    slug = (title or "").lower().strip()
    slug = _SLUG_STRIP_RE.sub("", slug)
    slug = _SLUG_SEPARATOR_RE.sub("-", slug)
    return _SLUG_EDGE_RE.sub("", slug)


def validate_markdown(document):
    """
    Check a document for common structural problems.

    Returns a list of human-readable issues, empty when none are found.
    The backtick count includes backticks inside fenced blocks, so a fence
    containing inline code can be reported as unmatched.
    """
    document = document or ""
    issues = []

    if not _MAIN_HEADING_RE.search(document):
        issues.append(MISSING_HEADING)

    if len(document) < MIN_CONTENT_LENGTH:
        issues.append(CONTENT_TOO_SHORT)

    if document.count("```") % 2 != 0:
        issues.append(UNMATCHED_CODE_FENCE)

    if document.count("`") % 2 != 0:
        issues.append(UNMATCHED_INLINE_CODE)

    for match in _LINK_RE.finditer(document):
        if not match.group(2).strip():
            issues.append(EMPTY_LINK_URL)

    return issues

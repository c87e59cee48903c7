"""
Tests for markdown processing.
"""
import itertools
import logging
import re

import pytest

from markdown_blog.exceptions import MarkdownProcessingError
from markdown_blog.markdown import (
    CONTENT_TOO_SHORT,
    EMPTY_LINK_URL,
    MISSING_HEADING,
    UNMATCHED_CODE_FENCE,
    UNMATCHED_INLINE_CODE,
    MarkdownOptions,
    ProcessingResult,
    estimate_reading_time,
    extract_plain_text,
    generate_slug,
    make_excerpt,
    render_to_html,
    validate_markdown,
)

FILLER = "word " * 30


class TestRenderToHtml:
    """Tests for render_to_html."""

    def test_heading_bold_and_link(self):
        """Test the heading, paragraph, bold and link rules together."""
        result = render_to_html(
            "# Hello\n\nThis is **bold** text with a [link](https://example.com)."
        )
        assert result.html == (
            "<h1>Hello</h1></p><p>This is <strong>bold</strong> text with a "
            '<a href="https://example.com">link</a>.'
        )
        assert result.reading_time == 1
        assert result.toc is None

    def test_heading_levels(self):
        result = render_to_html("### Three\n## Two\n# One")
        assert result.html == "<h3>Three</h3><br><h2>Two</h2><br><h1>One</h1>"

    def test_heading_needs_marker_at_line_start(self):
        result = render_to_html("text # not a heading")
        assert result.html == "<p>text # not a heading</p>"

    def test_emphasis_order(self):
        """Test triple asterisks are consumed before double and single."""
        result = render_to_html("***both*** **bold** *italic*")
        assert result.html == (
            "<p><strong><em>both</em></strong> <strong>bold</strong> <em>italic</em></p>"
        )

    def test_inline_code(self):
        result = render_to_html("Use `pip install` now")
        assert result.html == "<p>Use <code>pip install</code> now</p>"

    def test_fenced_code_block(self):
        result = render_to_html("```\ncode\n```")
        assert result.html == "<pre><code><br>code<br></code></pre>"

    def test_paragraphs_and_line_breaks(self):
        result = render_to_html("first\n\nsecond\nline")
        assert result.html == "<p>first</p><p>second<br>line</p>"

    def test_empty_document(self):
        result = render_to_html("")
        assert isinstance(result, ProcessingResult)
        assert result.html == "<p></p>"
        assert result.reading_time == 0

    def test_none_is_treated_as_empty(self):
        assert render_to_html(None) == render_to_html("")

    def test_reading_time_counts_raw_words(self):
        assert render_to_html("word " * 200).reading_time == 1
        assert render_to_html("word " * 201).reading_time == 2

    def test_reading_time_includes_markdown_syntax(self):
        """Test raw words are counted, including code that plain text drops."""
        document = "```\n" + "code " * 400 + "\n```"
        assert render_to_html(document).reading_time == 3
        assert estimate_reading_time(document) == 1

    def test_sanitize_escapes_raw_html(self):
        result = render_to_html(
            "# A & B\n\n<script>alert(1)</script>",
            MarkdownOptions(sanitize=True),
        )
        assert "<script>" not in result.html
        assert "&lt;script&gt;" in result.html
        assert result.html.startswith("<h1>A &amp; B</h1>")

    def test_raw_html_passes_through_without_sanitize(self):
        result = render_to_html("<b>hi</b>")
        assert result.html == "<p><b>hi</b></p>"

    def test_other_options_do_not_change_output(self):
        document = "# Title\n\nSome *text*."
        plain = render_to_html(document)
        flagged = render_to_html(
            document, MarkdownOptions(highlight_code=True, generate_toc=True)
        )
        assert plain == flagged

    def test_internal_fault_is_opaque(self, caplog):
        """Test a non-text document raises the single processing error."""
        with caplog.at_level(logging.ERROR, logger="markdown_blog"):
            with pytest.raises(MarkdownProcessingError) as excinfo:
                render_to_html(42)

        assert str(excinfo.value) == "Failed to process markdown content"
        assert "Error processing markdown" in caplog.text

    @pytest.mark.parametrize(
        "document",
        [
            "",
            " ",
            "\n\n\n",
            "\t \r\n",
            "*",
            "**",
            "***",
            "****",
            "`",
            "``",
            "```",
            "````",
            "[",
            "](",
            "[a](",
            "[](",
            "![x](",
            "# ",
            "#",
            "*a**b***c",
            "```unterminated\ncode",
            "[[a](b)](c)",
            "\x00\x01",
        ],
    )
    def test_pathological_inputs(self, document):
        result = render_to_html(document)
        assert isinstance(result.html, str)
        assert result.reading_time >= 0

    def test_never_raises_for_delimiter_combinations(self):
        tokens = ["*", "`", "#", "[", "]", "(", ")", "!", "\n", " ", "a"]
        for combo in itertools.product(tokens, repeat=3):
            document = "".join(combo)
            result = render_to_html(document, MarkdownOptions(sanitize=True))
            assert isinstance(result, ProcessingResult)


class TestExtractPlainText:
    """Tests for extract_plain_text."""

    def test_basic_document(self):
        assert extract_plain_text("# Hello\n\nThis is **bold** text.") == (
            "Hello This is bold text."
        )

    def test_emphasis_markers(self):
        assert extract_plain_text("## Title\n***both*** and *it*") == "Title both and it"

    def test_code(self):
        document = "Run `make` then\n```\nrm -rf /tmp/build\n```\ndone"
        assert extract_plain_text(document) == "Run make then done"

    def test_links_keep_text(self):
        text = extract_plain_text("See [the docs](https://example.com/docs) now")
        assert text == "See the docs now"

    def test_images_keep_alt_text(self):
        text = extract_plain_text("Look: ![a diagram](diagram.png) and ![](x.png)")
        assert text == "Look: a diagram and"

    @pytest.mark.parametrize(
        "document",
        [
            "# Title\n\n## Sub\n\n***x*** **y** *z* `code`\n\n"
            "```\nblock\n```\n\n[link](https://a.b) ![img](c.png)",
            "[a]()",
            "![x]()",
            "[](http://x)",
            "[[a](b)](c)",
        ],
    )
    def test_no_formatting_delimiters_remain(self, document):
        text = extract_plain_text(document)
        assert "#" not in text
        assert "`" not in text
        assert "*" not in text
        assert not re.search(r"!?\[[^\]]*\]\([^)]*\)", text)

    @pytest.mark.parametrize(
        "document, expected",
        [
            ("[a]()", "a"),
            ("![x]()", "x"),
            ("see [](http://x) here", "see here"),
            ("[[a](b)](c)", "a"),
            ("![[alt](x)](y)", "alt"),
        ],
    )
    def test_degenerate_links(self, document, expected):
        assert extract_plain_text(document) == expected

    def test_whitespace_collapsed(self):
        assert extract_plain_text("  a \n\n\t b  ") == "a b"

    def test_empty(self):
        assert extract_plain_text("") == ""


class TestEstimateReadingTime:
    """Tests for estimate_reading_time."""

    def test_empty_document_floors_at_one(self):
        """Test the floor of 1, which render_to_html does not apply."""
        assert estimate_reading_time("") == 1
        assert render_to_html("").reading_time == 0

    def test_whitespace_only(self):
        assert estimate_reading_time("   \n\n  ") == 1

    def test_rounds_up(self):
        assert estimate_reading_time("word " * 200) == 1
        assert estimate_reading_time("word " * 201) == 2
        assert estimate_reading_time("word " * 450) == 3

    def test_markdown_syntax_not_counted(self):
        document = "# " + "**word** " * 200
        assert estimate_reading_time(document) == 1


class TestMakeExcerpt:
    def test_short_document_is_plain_text(self):
        assert make_excerpt("# Hi\n\nThere") == "Hi There"

    def test_long_document_is_truncated(self):
        excerpt = make_excerpt("word " * 100, length=200)
        assert excerpt.endswith("...")
        assert len(excerpt) <= 203
        assert not excerpt[:-3].endswith(" ")


class TestGenerateSlug:
    """Tests for generate_slug."""

    def test_title(self):
        assert generate_slug("Building Modern Web Apps") == "building-modern-web-apps"

    def test_slug_is_stable(self):
        slug = generate_slug("Building Modern Web Apps")
        assert generate_slug(slug) == slug

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("  Hello, World!  ", "hello-world"),
            ("snake_case and--dashes", "snake-case-and-dashes"),
            ("Next.js 14 & React", "nextjs-14-react"),
            ("Café au lait", "caf-au-lait"),
            ("-leading and trailing-", "leading-and-trailing"),
            ("---", ""),
            ("", ""),
        ],
    )
    def test_characters(self, title, expected):
        assert generate_slug(title) == expected

    def test_duplicate_titles_share_a_slug(self):
        assert generate_slug("Same Title") == generate_slug("Same  Title")


class TestValidateMarkdown:
    """Tests for validate_markdown."""

    def test_short_document(self):
        issues = validate_markdown("short")
        assert MISSING_HEADING in issues
        assert CONTENT_TOO_SHORT in issues
        assert len(issues) == 2

    def test_valid_document(self):
        assert validate_markdown("# Title\n\n" + FILLER) == []

    def test_empty_document(self):
        assert validate_markdown("") == [MISSING_HEADING, CONTENT_TOO_SHORT]

    def test_heading_on_later_line(self):
        assert validate_markdown("Intro\n# Title\n\n" + FILLER) == []

    def test_subheading_is_not_main_heading(self):
        assert MISSING_HEADING in validate_markdown("## Sub\n\n" + FILLER)

    def test_heading_needs_space(self):
        assert MISSING_HEADING in validate_markdown("#Title\n\n" + FILLER)

    def test_unmatched_code_fence(self):
        issues = validate_markdown("# Title\n\n```\ncode\n" + FILLER)
        assert UNMATCHED_CODE_FENCE in issues

    def test_unmatched_inline_code(self):
        issues = validate_markdown("# Title\n\nuse `code here\n" + FILLER)
        assert issues == [UNMATCHED_INLINE_CODE]

    def test_backtick_inside_fence_is_counted(self):
        """Test the known false positive for backticks inside a fenced block."""
        document = "# Title\n\n```\nx = `a\n```\n" + FILLER
        assert validate_markdown(document) == [UNMATCHED_INLINE_CODE]

    @pytest.mark.parametrize("link", ["[click]( )", "[click]()", "[click](\t)"])
    def test_empty_link_url(self, link):
        issues = validate_markdown(f"# Title\n\n{link}\n" + FILLER)
        assert issues == [EMPTY_LINK_URL]

    def test_each_empty_link_reported(self):
        document = "# Title\n\n[a]( ) and [b]() and [c](https://ok)\n" + FILLER
        assert validate_markdown(document) == [EMPTY_LINK_URL, EMPTY_LINK_URL]

    def test_all_issues_reported(self):
        issues = validate_markdown("``` [x]( )")
        assert issues == [
            MISSING_HEADING,
            CONTENT_TOO_SHORT,
            UNMATCHED_CODE_FENCE,
            UNMATCHED_INLINE_CODE,
            EMPTY_LINK_URL,
        ]

"""Tests for markdown/inline.py."""

from __future__ import annotations

import pytest

from vexdocs.markdown.inline import render_inline


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("**bold**", "<strong>bold</strong>"),
        ("__bold__", "<strong>bold</strong>"),
        ("*italic*", "<em>italic</em>"),
        ("_italic_", "<em>italic</em>"),
        ("~~gone~~", "<del>gone</del>"),
        ("[docs](https://example.com)", '<a href="https://example.com">docs</a>'),
        ("![logo](img/logo.png)", '<img src="img/logo.png" alt="logo" />'),
        ("![](x.png)", '<img src="x.png" alt="" />'),
    ],
)
def test_single_elements(text: str, expected: str) -> None:
    assert render_inline(text) == expected


def test_bold_before_italic() -> None:
    """A ** pair is never split into two italics."""
    assert render_inline("**bold** and *italic*") == (
        "<strong>bold</strong> and <em>italic</em>"
    )


def test_image_is_not_parsed_as_link() -> None:
    result = render_inline("see ![alt](a.png) and [b](b.html)")
    assert result == 'see <img src="a.png" alt="alt" /> and <a href="b.html">b</a>'


def test_link_label_keeps_emphasis() -> None:
    assert render_inline("[**API**](/api)") == '<a href="/api"><strong>API</strong></a>'


def test_code_span_is_escaped_and_not_interpreted() -> None:
    """Markup inside backticks stays literal."""
    assert render_inline("use `<b>**x**</b>` here") == (
        "use <code>&lt;b&gt;**x**&lt;/b&gt;</code> here"
    )


def test_snake_case_is_not_italic() -> None:
    assert render_inline("call snake_case_name now") == "call snake_case_name now"


def test_attribute_quotes_are_escaped() -> None:
    result = render_inline('[x](a"b)')
    assert result == '<a href="a&quot;b">x</a>'


def test_empty_input() -> None:
    assert render_inline("") == ""


def test_stray_marker_is_left_visible() -> None:
    """A marker with no stashed span is not swallowed."""
    assert render_inline("<!--INLINECODE3--> `a`") == "<!--INLINECODE3--> <code>a</code>"

"""Markdown-to-HTML rendering pipeline.

Handles: frontmatter, fenced code blocks (highlighted), tables, headings,
blockquotes, horizontal rules, flat lists, paragraphs and inline elements.
Does NOT handle: nested lists, reference links, HTML sanitization.

Pass order matters. Code blocks and tables are parked behind placeholders
before any line-based pass runs, and paragraphs are wrapped last, before the
placeholders are restored.
"""

from __future__ import annotations

from vexdocs.markdown.blocks import (
    PlaceholderTable,
    extract_code_blocks,
    extract_tables,
    render_blockquotes,
    render_headings,
    render_horizontal_rules,
    render_inline_lines,
    render_lists,
    render_paragraphs,
)
from vexdocs.markdown.frontmatter import strip_frontmatter


def render(markdown: str) -> str:
    """Convert a Markdown document to an HTML fragment."""
    if not markdown:
        return ""

    code_blocks = PlaceholderTable("CODEBLOCK")
    tables = PlaceholderTable("TABLE")
    quotes = PlaceholderTable("BLOCKQUOTE")

    text = markdown.replace("\r\n", "\n").replace("\r", "\n")
    text = strip_frontmatter(text)
    text = extract_code_blocks(text, code_blocks)
    text = extract_tables(text, tables)
    text = render_headings(text)
    text = render_blockquotes(text, quotes)
    text = render_horizontal_rules(text)
    text = render_lists(text)
    text = render_inline_lines(text)
    text = render_paragraphs(text)

    # Quotes may hold code markers, so they come back first.
    text = quotes.restore(text)
    text = tables.restore(text)
    text = code_blocks.restore(text)
    return text.strip()

"""Block-level Markdown passes.

Each pass is a pure function over the working text of one render call. Passes
that produce multi-line HTML (code blocks, tables, blockquotes) park the
fragment in a PlaceholderTable and leave an HTML-comment marker behind, so
later passes never see their contents.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from vexdocs.markdown.escape import escape_html
from vexdocs.markdown.highlight import highlight
from vexdocs.markdown.inline import render_inline
from vexdocs.markdown.languages import is_known_language

logger = logging.getLogger(__name__)

CODE_BLOCK_RE = re.compile(r"```([\w+#-]*)[ \t]*\n?(.*?)```", re.DOTALL)
HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+)$")
BLOCKQUOTE_RE = re.compile(r"^>\s*")
HR_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})[ \t]*$")
LIST_RE = re.compile(r"^(\s*)([*+-]|\d+\.)\s+(.+)$")
TABLE_ROW_RE = re.compile(r"^\|.*\|$")
PLACEHOLDER_RE = re.compile(r"^<!--[A-Z]+\d+-->$")

_LEADING_BLANK_LINES_RE = re.compile(r"\A(?:[ \t]*\n)+")
_TRAILING_BLANK_LINES_RE = re.compile(r"(?:\n[ \t]*)+\Z")
_NON_SLUG_RE = re.compile(r"[^\w\s-]")
_WHITESPACE_RE = re.compile(r"\s+")

# Lines opening with one of these are block HTML and never paragraph text.
_BLOCK_TAG_RE = re.compile(
    r"^<(?:/|!|(?:address|article|aside|blockquote|canvas|dd|details|div|dl|dt|"
    r"fieldset|figcaption|figure|footer|form|h[1-6]|header|hr|iframe|li|main|nav|"
    r"noscript|ol|p|pre|script|section|style|summary|table|tbody|td|tfoot|th|"
    r"thead|tr|ul|video)\b)",
    re.IGNORECASE,
)

_PARAGRAPH_EXCLUDED = (
    re.compile(r"^#{1,6}\s"),
    re.compile(r"^>"),
    re.compile(r"^([*+-]|\d+\.)\s"),
    re.compile(r"^\|"),
    HR_RE,
    PLACEHOLDER_RE,
)

COPY_ICON = (
    '<svg width="16" height="16" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
    'stroke-width="2"><rect x="9" y="9" width="13" height="13" rx="2" ry="2"></rect>'
    '<path d="M5 15H4a2 2 0 0 1-2-2V4a2 2 0 0 1 2-2h9a2 2 0 0 1 2 2v1"></path></svg>'
)

CODE_BLOCK_TEMPLATE = (
    '<div class="code-wrapper">\n'
    '<button class="copy-button" onclick="copyToClipboard(this)" aria-label="Copy code">'
    f"{COPY_ICON}"
    '<span class="copy-text">Copy</span>'
    '<span class="copy-success" style="display: none;">Copied!</span>'
    "</button>\n"
    '<pre><code class="language-{language}">{code}</code></pre>\n'
    "</div>"
)


@dataclass
class PlaceholderTable:
    """Rendered fragments parked as ``<!--KIND{index}-->`` markers."""

    kind: str
    fragments: list[str] = field(default_factory=list)

    def marker(self, index: int) -> str:
        return f"<!--{self.kind}{index}-->"

    def add(self, html: str) -> str:
        """Store a fragment and return the marker that stands in for it."""
        self.fragments.append(html)
        return self.marker(len(self.fragments) - 1)

    def restore(self, text: str) -> str:
        """Replace every marker with its fragment, in index order."""
        for index, html in enumerate(self.fragments):
            text = text.replace(self.marker(index), html)
        return text


def heading_id(text: str) -> str:
    """Anchor id for a heading: lower-cased, punctuation dropped, hyphenated."""
    slug = _NON_SLUG_RE.sub("", text.lower()).strip()
    return _WHITESPACE_RE.sub("-", slug)


# --- Fenced code blocks ---


def trim_code_body(code: str) -> str:
    """Drop blank lines at the start and end of a fence body."""
    code = _LEADING_BLANK_LINES_RE.sub("", code)
    return _TRAILING_BLANK_LINES_RE.sub("", code)


def render_code_block(code: str, language: str) -> str:
    """Wrap a fence body in the copy-button shell, highlighted if tagged."""
    if language and not is_known_language(language):
        logger.debug("Unknown code language %r, highlighting as JavaScript", language)
    body = highlight(code, language) if language else escape_html(code)
    return CODE_BLOCK_TEMPLATE.format(language=escape_html(language), code=body)


def extract_code_blocks(text: str, blocks: PlaceholderTable) -> str:
    """Replace every fenced code block with a placeholder."""

    def _replace(m: re.Match[str]) -> str:
        language = m.group(1)
        return blocks.add(render_code_block(trim_code_body(m.group(2)), language))

    return CODE_BLOCK_RE.sub(_replace, text)


# --- Tables ---


def _split_cells(row: str) -> list[str]:
    return [escape_html(cell.strip()) for cell in row.strip().split("|")[1:-1]]


def build_table(rows: list[str]) -> str | None:
    """Render a group of piped rows, or None for fewer than two rows.

    Row 0 is the header and row 1 is dropped as the separator without being
    checked.
    """
    if len(rows) < 2:
        return None
    lines = ["<table>", "<thead>", "<tr>"]
    lines.extend(f"<th>{cell}</th>" for cell in _split_cells(rows[0]))
    lines.extend(["</tr>", "</thead>"])
    # rows[1] is the |---|---| separator.
    if len(rows) > 2:
        lines.append("<tbody>")
        for row in rows[2:]:
            lines.append("<tr>")
            lines.extend(f"<td>{cell}</td>" for cell in _split_cells(row))
            lines.append("</tr>")
        lines.append("</tbody>")
    lines.append("</table>")
    return "\n".join(lines)


def extract_tables(text: str, tables: PlaceholderTable) -> str:
    """Replace runs of piped rows with table placeholders.

    A run of a single row is not a table. It is parked as escaped literal text
    so later passes leave it alone.
    """
    result: list[str] = []
    rows: list[str] = []

    def _flush() -> None:
        if not rows:
            return
        html = build_table(rows)
        if html is None:
            result.extend(tables.add(escape_html(row)) for row in rows)
        else:
            result.append(tables.add(html))
        rows.clear()

    for line in text.split("\n"):
        if TABLE_ROW_RE.match(line.strip()):
            rows.append(line)
            continue
        _flush()
        result.append(line)
    _flush()
    return "\n".join(result)


# --- Headings, blockquotes, rules ---


def render_headings(text: str) -> str:
    result: list[str] = []
    for line in text.split("\n"):
        m = HEADING_RE.match(line)
        if m is None:
            result.append(line)
            continue
        level = len(m.group(1))
        content = m.group(2).strip()
        result.append(f'<h{level} id="{heading_id(content)}">{render_inline(content)}</h{level}>')
    return "\n".join(result)


def render_blockquotes(text: str, quotes: PlaceholderTable) -> str:
    """Group consecutive ``>`` lines into one blockquote placeholder."""
    result: list[str] = []
    quoted: list[str] = []

    def _flush() -> None:
        if quoted:
            body = "\n".join(quoted)
            result.append(quotes.add(f"<blockquote>{body}</blockquote>"))
            quoted.clear()

    for line in text.split("\n"):
        if line.startswith(">"):
            quoted.append(render_inline(BLOCKQUOTE_RE.sub("", line, count=1)))
            continue
        _flush()
        result.append(line)
    _flush()
    return "\n".join(result)


def render_horizontal_rules(text: str) -> str:
    return "\n".join("<hr>" if HR_RE.match(line) else line for line in text.split("\n"))


# --- Lists ---


def render_lists(text: str) -> str:
    """Turn runs of list items into flat ``<ul>``/``<ol>`` blocks.

    A new list opens whenever the marker type or the indentation changes;
    there is no nested list tree.
    """
    result: list[str] = []
    list_tag: str | None = None
    indent = 0

    for line in text.split("\n"):
        m = LIST_RE.match(line)
        if m is None:
            if list_tag is not None:
                result.append(f"</{list_tag}>")
                list_tag = None
            result.append(line)
            continue

        item_indent = len(m.group(1))
        item_tag = "ol" if m.group(2)[0].isdigit() else "ul"
        if list_tag != item_tag or item_indent != indent:
            if list_tag is not None:
                result.append(f"</{list_tag}>")
            list_tag = item_tag
            indent = item_indent
            result.append(f"<{list_tag}>")
        result.append(f"<li>{render_inline(m.group(3))}</li>")

    if list_tag is not None:
        result.append(f"</{list_tag}>")
    return "\n".join(result)


# --- Inline text and paragraphs ---


def render_inline_lines(text: str) -> str:
    """Inline-render every remaining line that is not block HTML or a placeholder."""
    result: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or _is_block_html(stripped):
            result.append(line)
        else:
            result.append(render_inline(line))
    return "\n".join(result)


def _is_block_html(line: str) -> bool:
    return bool(_BLOCK_TAG_RE.match(line) or PLACEHOLDER_RE.match(line))


def _is_paragraph_text(line: str) -> bool:
    if not line or _is_block_html(line):
        return False
    return not any(pattern.match(line) for pattern in _PARAGRAPH_EXCLUDED)


def render_paragraphs(text: str) -> str:
    """Wrap runs of free-form lines in ``<p>``, joined with single spaces."""
    result: list[str] = []
    paragraph: list[str] = []

    def _flush() -> None:
        if paragraph:
            result.append(f"<p>{' '.join(paragraph)}</p>")
            paragraph.clear()

    for line in text.split("\n"):
        stripped = line.strip()
        if _is_paragraph_text(stripped):
            paragraph.append(stripped)
            continue
        _flush()
        result.append(line)
    _flush()
    return "\n".join(result)

"""Inline Markdown: images, links, emphasis, strikethrough, code spans.

Transforms run in a fixed order over one buffer. Code spans are lifted out
before the first transform and substituted back as the last one, so their
payload is escaped and never interpreted as markup.
"""

from __future__ import annotations

import re

from vexdocs.markdown.escape import escape_attribute, escape_html

_CODE_SPAN_RE = re.compile(r"`([^`]+)`")
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BOLD_RE = re.compile(r"\*\*(.+?)\*\*|__(.+?)__")
# Single delimiters must not be half of a double one. Underscores
# additionally need a non-word neighbour so snake_case stays literal.
_ITALIC_RE = re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)|(?<![\w_])_(?!_)(.+?)(?<!_)_(?![\w_])")
_STRIKE_RE = re.compile(r"~~(.+?)~~")
_CODE_MARKER_RE = re.compile(r"<!--INLINECODE(\d+)-->")


def _image(m: re.Match[str]) -> str:
    alt, src = m.group(1), m.group(2).strip()
    return f'<img src="{escape_attribute(src)}" alt="{escape_attribute(alt)}" />'


def _link(m: re.Match[str]) -> str:
    label, url = m.group(1), m.group(2).strip()
    return f'<a href="{escape_attribute(url)}">{label}</a>'


def _either(m: re.Match[str]) -> str:
    return m.group(1) if m.group(1) is not None else m.group(2)


def render_inline(text: str) -> str:
    """Render the inline Markdown elements of a line or paragraph fragment."""
    if not text:
        return ""

    spans: list[str] = []

    def _stash(m: re.Match[str]) -> str:
        spans.append(m.group(1))
        return f"<!--INLINECODE{len(spans) - 1}-->"

    text = _CODE_SPAN_RE.sub(_stash, text)
    text = _IMAGE_RE.sub(_image, text)
    text = _LINK_RE.sub(_link, text)
    text = _BOLD_RE.sub(lambda m: f"<strong>{_either(m)}</strong>", text)
    text = _ITALIC_RE.sub(lambda m: f"<em>{_either(m)}</em>", text)
    text = _STRIKE_RE.sub(lambda m: f"<del>{m.group(1)}</del>", text)
    if not spans:
        return text

    def _restore(m: re.Match[str]) -> str:
        index = int(m.group(1))
        if index >= len(spans):
            return m.group(0)
        return f"<code>{escape_html(spans[index])}</code>"

    return _CODE_MARKER_RE.sub(_restore, text)

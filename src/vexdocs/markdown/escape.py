"""HTML entity escaping for rendered text and highlighted code."""

from __future__ import annotations

import re

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}

_CODE_ESCAPES = {**_HTML_ESCAPES, "`": "&#96;"}

_HTML_RE = re.compile(r"[&<>\"']")
_CODE_RE = re.compile(r"[&<>\"'`]")


def escape_html(text: str) -> str:
    """Replace ``& < > " '`` with their HTML entities."""
    return _HTML_RE.sub(lambda m: _HTML_ESCAPES[m.group(0)], text)


def escape_code(text: str) -> str:
    """Escape like escape_html(), plus backticks (highlighter output)."""
    return _CODE_RE.sub(lambda m: _CODE_ESCAPES[m.group(0)], text)


def escape_attribute(value: str) -> str:
    """Escape only double quotes, for values already inside Markdown text."""
    return value.replace('"', "&quot;")

"""Leading ``---`` metadata block: detection, stripping, parsing."""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Opening fence, optional body, closing fence, optional newline.
_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(?:(?P<body>.*?)\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)


def strip_frontmatter(text: str) -> str:
    """Remove a leading frontmatter block, or return text unchanged."""
    m = _FRONTMATTER_RE.match(text)
    if m is None:
        return text
    return text[m.end() :]


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (metadata, body).

    The metadata is the YAML mapping of the leading block; it is empty when
    there is no block or when the block is not a valid YAML mapping.
    """
    m = _FRONTMATTER_RE.match(text)
    if m is None:
        return {}, text
    body = text[m.end() :]
    raw = m.group("body") or ""
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid frontmatter: %s", e)
        return {}, body
    if not isinstance(data, dict):
        return {}, body
    return {str(k): v for k, v in data.items()}, body

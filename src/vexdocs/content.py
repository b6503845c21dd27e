"""Read Markdown pages out of the versioned docs tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from vexdocs.markdown.renderer import render
from vexdocs.navigation import build_navigation, extract_pages
from vexdocs.seo import extract_seo, not_found_seo

if TYPE_CHECKING:
    from pathlib import Path

    from vexdocs.config import SiteConfig
    from vexdocs.navigation import NavNode
    from vexdocs.seo import SeoData

logger = logging.getLogger(__name__)

NOT_FOUND_MARKDOWN = "# Page Not Found\n\nThe requested page could not be found."
WELCOME_MARKDOWN = "# Documentation\n\nWelcome to the documentation."


@dataclass
class Page:
    """A resolved page: its Markdown, rendered HTML and SEO data."""

    version: str
    path: str
    markdown: str
    seo: SeoData
    found: bool = True

    @property
    def html(self) -> str:
        return render(self.markdown)


class DocsSource:
    """Access to ``<docs_dir>/<version>/<path>`` Markdown files."""

    def __init__(self, docs_dir: Path, config: SiteConfig) -> None:
        self.docs_dir = docs_dir
        self.config = config

    def locate(self, version: str, path: str) -> Path | None:
        """Return the file backing a page path, trying ``path`` then ``path.md``.

        Paths that resolve outside the version directory are refused.
        """
        if version not in self.config.versions:
            return None
        root = (self.docs_dir / version).resolve()
        candidates = [path] if path.endswith(".md") else [path, f"{path}.md"]
        for candidate in candidates:
            full = (root / candidate.lstrip("/")).resolve()
            if not full.is_relative_to(root):
                logger.warning("Refusing path outside %s: %r", root, path)
                return None
            if full.is_file():
                return full
        return None

    def read(self, version: str, path: str) -> str | None:
        full = self.locate(version, path)
        if full is None:
            return None
        try:
            return full.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.exception("Error reading markdown file %s", full)
            return None

    def markdown(self, version: str, path: str) -> str:
        """Page Markdown, or the not-found stub."""
        text = self.read(version, path)
        return NOT_FOUND_MARKDOWN if text is None else text

    def seo(self, version: str, path: str, title: str | None = None) -> SeoData:
        """SEO data for a page with fallbacks applied."""
        text = self.read(version, path)
        if text is None:
            return not_found_seo()
        return extract_seo(text).with_fallbacks(self.config, title)

    def page(self, version: str, paths: list[str]) -> Page:
        """Load the first existing page among candidate paths."""
        for path in paths:
            text = self.read(version, path)
            if text is not None:
                return Page(version, path, text, extract_seo(text).with_fallbacks(self.config))
        return Page(
            version,
            paths[0] if paths else "README.md",
            NOT_FOUND_MARKDOWN,
            not_found_seo(),
            found=False,
        )

    def navigation(self, version: str) -> list[NavNode]:
        if version not in self.config.versions:
            return []
        return build_navigation(self.docs_dir, version, self.config)

    def pages(self, version: str) -> list[NavNode]:
        return extract_pages(self.navigation(version))

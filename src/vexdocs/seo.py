"""SEO metadata extracted from page frontmatter, with site-wide fallbacks."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from vexdocs.markdown.frontmatter import split_frontmatter
from vexdocs.navigation import page_url_path

if TYPE_CHECKING:
    from vexdocs.config import SiteConfig

DESCRIPTION_LIMIT = 160
DEFAULT_TWITTER_CARD = "summary"
LOGO_PATH = "/assets/images/logo.svg"

_H1_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
# Lines that start a block other than a plain paragraph.
_NON_PARAGRAPH_RE = re.compile(r"^(?:#|```|\||>|<|!\[|[*+-]\s|\d+\.\s|-{3,}|\*{3,}|_{3,})")

# Frontmatter keys per field, first match wins.
_FIELDS: dict[str, tuple[str, ...]] = {
    "title": ("title", "seo_title"),
    "description": ("description", "seo_description"),
    "keywords": ("keywords", "seo_keywords"),
    "author": ("author",),
    "canonical": ("canonical",),
    "og_title": ("og_title",),
    "og_description": ("og_description",),
    "og_image": ("og_image",),
    "twitter_card": ("twitter_card",),
    "twitter_title": ("twitter_title",),
    "twitter_description": ("twitter_description",),
    "twitter_image": ("twitter_image",),
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass
class SeoData:
    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    author: str | None = None
    canonical: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    twitter_card: str | None = None
    twitter_title: str | None = None
    twitter_description: str | None = None
    twitter_image: str | None = None

    def with_fallbacks(self, config: SiteConfig, title: str | None = None) -> SeoData:
        """Return a copy with site, OpenGraph and Twitter fallbacks filled in.

        ``title`` is tried before the site title, e.g. the navigation title.
        """
        page_title = self.title or title or config.title
        description = self.description or config.description
        return dataclasses.replace(
            self,
            title=page_title,
            description=description,
            og_title=self.og_title or page_title,
            og_description=self.og_description or description,
            twitter_card=self.twitter_card or DEFAULT_TWITTER_CARD,
            twitter_title=self.twitter_title or page_title,
            twitter_description=self.twitter_description or description,
        )

    def to_dict(self) -> dict[str, str | None]:
        """Return the camelCase JSON shape served at /api/seo."""
        return {_camel(f.name): getattr(self, f.name) for f in dataclasses.fields(self)}


def not_found_seo() -> SeoData:
    return SeoData(title="Page Not Found", description="The requested page could not be found.")


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    text = str(value).strip()
    return text or None


def first_paragraph(body: str) -> str | None:
    """Return the first line of plain paragraph text, if any."""
    in_fence = False
    for line in body.split("\n"):
        stripped = line.strip()
        if stripped.startswith("```"):
            in_fence = not in_fence
            continue
        if in_fence or not stripped or _NON_PARAGRAPH_RE.match(stripped):
            continue
        return stripped
    return None


def extract_seo(markdown: str) -> SeoData:
    """Extract SEO fields from a page's frontmatter and body.

    The title falls back to the first level-1 heading and the description to
    the first paragraph, cut to 160 characters.
    """
    meta, body = split_frontmatter(markdown.replace("\r\n", "\n"))
    values: dict[str, str | None] = {}
    for name, keys in _FIELDS.items():
        values[name] = next((v for k in keys if (v := _text(meta.get(k)))), None)

    seo = SeoData(**values)
    if not seo.title:
        m = _H1_RE.search(body)
        if m:
            seo.title = m.group(1).strip()
    if not seo.description:
        paragraph = first_paragraph(body)
        if paragraph:
            seo.description = paragraph[:DESCRIPTION_LIMIT]
    return seo


def canonical_url(config: SiteConfig, path: str, version: str, *, homepage: bool = False) -> str:
    """Absolute URL of a page; the homepage is the bare base URL."""
    if homepage:
        return config.base_url
    return f"{config.base_url}/{page_url_path(path, version)}"


def structured_data(
    seo: SeoData,
    config: SiteConfig,
    url: str,
    modified: datetime | None = None,
) -> dict[str, Any]:
    """Build the schema.org WebPage JSON-LD object for a page."""
    title = seo.title or config.title
    description = seo.description or config.description
    data: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "WebPage",
        "name": title,
        "description": description,
        "url": url,
        "inLanguage": "en",
        "isPartOf": {"@type": "WebSite", "name": config.title, "url": config.base_url},
        "publisher": {
            "@type": "Organization",
            "name": config.title,
            "logo": {"@type": "ImageObject", "url": config.base_url + LOGO_PATH},
        },
        "dateModified": (modified or datetime.now(UTC)).isoformat(),
        "mainEntity": {
            "@type": "TechArticle",
            "headline": title,
            "description": description,
            "url": url,
        },
    }
    if seo.author:
        data["author"] = {"@type": "Person", "name": seo.author}
    return data

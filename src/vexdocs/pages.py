"""Full HTML pages, sitemap and robots.txt rendered through Jinja2 templates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, select_autoescape

from vexdocs.navigation import page_href, page_url_path
from vexdocs.seo import LOGO_PATH, canonical_url, structured_data

if TYPE_CHECKING:
    from vexdocs.config import SiteConfig
    from vexdocs.content import DocsSource, Page
    from vexdocs.navigation import NavNode

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class SitemapUrl:
    loc: str
    changefreq: str
    priority: str


def sitemap_urls(source: DocsSource) -> list[SitemapUrl]:
    """Homepage, then each version root and its pages.

    READMEs map to their directory URL; the top-level README is the version
    root itself and is not listed twice.
    """
    config = source.config
    urls = [SitemapUrl(config.base_url, "daily", "1.0")]
    for version in config.versions:
        urls.append(SitemapUrl(f"{config.base_url}/{version}", "weekly", "0.8"))
        for page in source.pages(version):
            url_path = page_url_path(page.path, version)
            if url_path == version:
                continue
            urls.append(SitemapUrl(f"{config.base_url}/{url_path}", "weekly", "0.7"))
    return urls


def make_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.globals["page_href"] = page_href
    return env


class PageRenderer:
    """Render documentation pages for one site config."""

    def __init__(self, config: SiteConfig) -> None:
        self.config = config
        self.env = make_environment()

    def render_page(
        self,
        page: Page,
        navigation: list[NavNode],
        *,
        homepage: bool = False,
        modified: datetime | None = None,
    ) -> str:
        """Render a complete HTML document for a page.

        The Markdown is rendered here and embedded as-is; every other value
        goes through the template's autoescaping.
        """
        seo = page.seo
        canonical = seo.canonical or canonical_url(
            self.config, page.path, page.version, homepage=homepage
        )
        template = self.env.get_template("page.html")
        return template.render(
            config=self.config,
            seo=seo,
            version=page.version,
            path=page.path,
            navigation=navigation,
            content=page.html,
            canonical=canonical,
            logo_url=self.config.base_url + LOGO_PATH,
            structured_data=structured_data(seo, self.config, canonical, modified),
            prerendered={
                "version": page.version,
                "path": page.path,
                "config": self.config.to_dict(),
                "navigation": [node.to_dict() for node in navigation],
                "seo": seo.to_dict(),
            },
        )

    def render_sitemap(self, urls: list[SitemapUrl], lastmod: str | None = None) -> str:
        lastmod = lastmod or datetime.now(UTC).date().isoformat()
        return self.env.get_template("sitemap.xml").render(urls=urls, lastmod=lastmod)

    def render_robots(self) -> str:
        return self.env.get_template("robots.txt").render(base_url=self.config.base_url) + "\n"

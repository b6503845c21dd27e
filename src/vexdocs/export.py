"""Static export: prerendered HTML pages, sitemap, robots.txt and a JSON API mirror."""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from vexdocs.config import load_config
from vexdocs.content import WELCOME_MARKDOWN, DocsSource, Page
from vexdocs.markdown.renderer import render
from vexdocs.navigation import README, extract_pages, page_url_path
from vexdocs.pages import PageRenderer, sitemap_urls
from vexdocs.seo import SeoData

if TYPE_CHECKING:
    from pathlib import Path

    from vexdocs.config import SiteConfig
    from vexdocs.navigation import NavNode

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Raised when the output directory cannot be used."""


@dataclass
class BuildResult:
    output_dir: Path
    pages: list[str] = field(default_factory=list)
    api_files: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


class SiteExporter:
    """Write a static copy of the site into output_dir."""

    def __init__(
        self,
        docs_dir: Path,
        output_dir: Path,
        assets_dir: Path | None = None,
        config: SiteConfig | None = None,
    ) -> None:
        self.docs_dir = docs_dir
        self.output_dir = output_dir
        self.assets_dir = assets_dir
        self.config = config or load_config(docs_dir)
        self.source = DocsSource(docs_dir, self.config)
        self.renderer = PageRenderer(self.config)

    def build(self, *, api: bool = False) -> BuildResult:
        """Clean the output directory and write the whole site."""
        result = BuildResult(self.output_dir)
        self._clean()
        self._copy_assets()

        self._write_homepage(result)
        for version in self.config.versions:
            navigation = self.source.navigation(version)
            self._write_version_index(version, navigation, result)
            for node in extract_pages(navigation):
                self._write_page(version, node, navigation, result)

        self._write(
            "sitemap.xml", self.renderer.render_sitemap(sitemap_urls(self.source))
        )
        self._write("robots.txt", self.renderer.render_robots())

        if api:
            self._write_api(result)

        logger.info(
            "Built %d pages (%d skipped) into %s",
            len(result.pages),
            len(result.skipped),
            self.output_dir,
        )
        return result

    def _clean(self) -> None:
        out = self.output_dir.resolve()
        docs = self.docs_dir.resolve()
        if out == docs or out in docs.parents:
            msg = f"Refusing to clean {out}: it contains the docs directory"
            raise ExportError(msg)
        if out.exists():
            logger.debug("Removing %s", out)
            shutil.rmtree(out)
        out.mkdir(parents=True)

    def _copy_assets(self) -> None:
        if self.assets_dir is None:
            return
        if not self.assets_dir.is_dir():
            logger.warning("Assets directory %s not found, skipping", self.assets_dir)
            return
        shutil.copytree(self.assets_dir, self.output_dir / "assets")

    def _write(self, relative: str, text: str) -> None:
        path = self.output_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")

    def _write_json(self, relative: str, data: Any, result: BuildResult) -> None:
        self._write(relative, json.dumps(data, indent=2, ensure_ascii=False))
        result.api_files.append(relative)

    def _index_page(self, version: str, title: str) -> Page:
        """The version README, or a welcome stub when it is missing."""
        text = self.source.read(version, README)
        if text is None:
            seo = SeoData(title=title, description=self.config.description)
            return Page(version, README, WELCOME_MARKDOWN, seo, found=False)
        return self.source.page(version, [README])

    def _write_homepage(self, result: BuildResult) -> None:
        version = self.config.default_version
        page = self._index_page(version, self.config.title)
        html = self.renderer.render_page(page, self.source.navigation(version), homepage=True)
        self._write("index.html", html)
        result.pages.append("index.html")

    def _write_version_index(
        self, version: str, navigation: list[NavNode], result: BuildResult
    ) -> None:
        page = self._index_page(version, f"{self.config.title} - {version}")
        relative = f"{version}/index.html"
        self._write(relative, self.renderer.render_page(page, navigation))
        result.pages.append(relative)

    def _write_page(
        self, version: str, node: NavNode, navigation: list[NavNode], result: BuildResult
    ) -> None:
        url_path = page_url_path(node.path, version)
        if url_path == version:
            # Top-level README is the version index.
            return
        text = self.source.read(version, node.path)
        if text is None:
            logger.warning("Markdown file not found: %s/%s", version, node.path)
            result.skipped.append(f"{version}/{node.path}")
            return
        page = Page(version, node.path, text, self.source.seo(version, node.path, node.label))
        relative = f"{url_path}/index.html"
        self._write(relative, self.renderer.render_page(page, navigation))
        result.pages.append(relative)

    def _write_api(self, result: BuildResult) -> None:
        self._write_json("api/config.json", self.config.to_dict(), result)
        self._write_json("api/versions.json", list(self.config.versions), result)
        for version in self.config.versions:
            navigation = self.source.navigation(version)
            self._write_json(
                f"api/navigation-{version}.json",
                [node.to_dict() for node in navigation],
                result,
            )
            for node in extract_pages(navigation):
                text = self.source.read(version, node.path)
                if text is None:
                    continue
                self._write_json(
                    f"api/content/{version}/{node.path}.json",
                    {"content": text, "path": node.path, "html": render(text)},
                    result,
                )
                self._write_json(
                    f"api/seo/{version}/{node.path}.json",
                    self.source.seo(version, node.path).to_dict(),
                    result,
                )

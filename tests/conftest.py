"""Shared fixtures: a sample versioned docs tree, its config and an assets dir."""

from __future__ import annotations

import json
import textwrap
from typing import TYPE_CHECKING

import pytest

from vexdocs.config import load_config

if TYPE_CHECKING:
    from pathlib import Path

    from vexdocs.config import SiteConfig


SAMPLE_CONFIG = {
    "title": "Vex Docs",
    "description": "Test documentation",
    "baseUrl": "https://docs.example.com/",
    "versions": {"v1.0": "Latest", "v0.9": "Legacy"},
    "defaultVersion": "v1.0",
    "theme": {"primaryColor": "#ff6600", "sidebarWidth": "280px"},
    "sidebarOrder": {
        "v1.0": [
            "getting-started",
            {"folder": "guide", "items": ["advanced", "basics"]},
        ]
    },
}

SAMPLE_PAGES = {
    "v1.0/README.md": """\
        ---
        title: Welcome
        description: Start here
        ---
        # Home

        Intro paragraph.
        """,
    "v1.0/getting-started.md": """\
        # Getting Started

        Install the tool.

        ```bash
        pip install vexdocs
        ```
        """,
    "v1.0/api.md": "# API Reference\n\nEndpoints.\n",
    "v1.0/guide/README.md": "# Guide\n\nGuide overview.\n",
    "v1.0/guide/basics.md": "# Basics\n\nBasic usage.\n",
    "v1.0/guide/advanced.md": """\
        ---
        seo_title: Advanced Topics
        keywords: [python, docs]
        author: Ada
        ---
        # Advanced

        Deep dive.
        """,
    "v1.0/.hidden.md": "# Hidden\n",
    "v1.0/notes.txt": "not markdown\n",
    "v0.9/README.md": "# Old Home\n\nLegacy docs.\n",
}


def write_pages(docs_dir: Path, pages: dict[str, str]) -> None:
    for relative, text in pages.items():
        path = docs_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """A two-version docs tree with a config.json and a sidebar order."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "config.json").write_text(json.dumps(SAMPLE_CONFIG), encoding="utf-8")
    write_pages(docs, SAMPLE_PAGES)
    return docs


@pytest.fixture
def site_config(docs_dir: Path) -> SiteConfig:
    return load_config(docs_dir)


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    """Static assets with one stylesheet."""
    assets = tmp_path / "assets"
    (assets / "css").mkdir(parents=True)
    (assets / "css" / "main.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    return assets

"""Tests for navigation.py: directory scanning, sidebar order and URL mapping."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from vexdocs.navigation import (
    NavNode,
    apply_sidebar_order,
    build_directory_tree,
    build_navigation,
    extract_pages,
    extract_title,
    page_url_path,
    resolve_request_path,
)

if TYPE_CHECKING:
    from pathlib import Path

    from vexdocs.config import SiteConfig


def _names(nodes: list[NavNode]) -> list[str]:
    return [node.name for node in nodes]


def _file(name: str, path: str | None = None) -> NavNode:
    return NavNode(type="file", name=name, path=path or f"{name}.md")


def _folder(name: str, children: list[NavNode]) -> NavNode:
    return NavNode(type="folder", name=name, path=name, children=children)


# === extract_title() ===


def test_extract_title_prefers_frontmatter() -> None:
    assert extract_title("---\ntitle: Front\n---\n# Heading") == "Front"


def test_extract_title_first_h1() -> None:
    assert extract_title("intro\n## Sub\n# Main\n# Second") == "Main"


def test_extract_title_none() -> None:
    assert extract_title("no heading") is None


# === build_directory_tree() ===


def test_tree_is_sorted_and_skips_hidden_and_non_markdown(docs_dir: Path) -> None:
    nodes = build_directory_tree(docs_dir / "v1.0")
    assert _names(nodes) == ["README", "api", "getting-started", "guide"]
    guide = nodes[3]
    assert guide.type == "folder"
    assert [c.path for c in guide.children] == [
        "guide/README.md",
        "guide/advanced.md",
        "guide/basics.md",
    ]


def test_tree_titles(docs_dir: Path) -> None:
    nodes = build_directory_tree(docs_dir / "v1.0")
    titles = {node.path: node.title for node in extract_pages(nodes)}
    assert titles["README.md"] == "Welcome"
    assert titles["api.md"] == "API Reference"
    assert titles["guide/advanced.md"] == "Advanced"


def test_tree_of_missing_directory_is_empty(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.ERROR):
        assert build_directory_tree(tmp_path / "nope") == []
    assert "Cannot read docs directory" in caplog.text


# === apply_sidebar_order() ===


def test_readme_first_then_listed_then_rest() -> None:
    nodes = [_file("README"), _file("a"), _file("b"), _file("c")]
    ordered = apply_sidebar_order(nodes, ["c", "a"])
    assert _names(ordered) == ["README", "c", "a", "b"]


def test_order_matches_path_and_name_with_extension() -> None:
    nodes = [_file("a"), _file("b")]
    assert _names(apply_sidebar_order(nodes, ["b.md", "a"])) == ["b", "a"]


def test_folder_items_are_ordered_without_mutating_input() -> None:
    children = [_file("README", "g/README.md"), _file("x", "g/x.md"), _file("y", "g/y.md")]
    nodes = [_file("a"), _folder("g", children)]
    ordered = apply_sidebar_order(nodes, [{"folder": "g", "items": ["y", "x"]}])
    assert _names(ordered) == ["g", "a"]
    # Nested READMEs are not pulled to the front.
    assert _names(ordered[0].children) == ["y", "x", "README"]
    assert _names(nodes[1].children) == ["README", "x", "y"]


def test_unknown_and_malformed_entries_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    nodes = [_file("a"), _file("b")]
    with caplog.at_level(logging.WARNING):
        ordered = apply_sidebar_order(nodes, ["missing", {"items": []}, "b"])
    assert _names(ordered) == ["b", "a"]
    assert "malformed sidebar entry" in caplog.text


def test_folder_name_string_entry() -> None:
    nodes = [_file("a"), _folder("guide", [])]
    assert _names(apply_sidebar_order(nodes, ["guide"])) == ["guide", "a"]


def test_build_navigation_applies_configured_order(
    docs_dir: Path, site_config: SiteConfig
) -> None:
    nodes = build_navigation(docs_dir, "v1.0", site_config)
    assert _names(nodes) == ["README", "getting-started", "guide", "api"]
    assert _names(nodes[2].children) == ["advanced", "basics", "README"]


def test_build_navigation_without_order(docs_dir: Path, site_config: SiteConfig) -> None:
    assert _names(build_navigation(docs_dir, "v0.9", site_config)) == ["README"]


def test_build_navigation_missing_version_dir(docs_dir: Path, site_config: SiteConfig) -> None:
    assert build_navigation(docs_dir, "v7", site_config) == []


def test_extract_pages_is_depth_first(docs_dir: Path, site_config: SiteConfig) -> None:
    pages = extract_pages(build_navigation(docs_dir, "v1.0", site_config))
    assert [p.path for p in pages] == [
        "README.md",
        "getting-started.md",
        "guide/advanced.md",
        "guide/basics.md",
        "guide/README.md",
        "api.md",
    ]


# === NavNode ===


def test_labels() -> None:
    assert _folder("getting-started", []).label == "Getting Started"
    assert NavNode(type="file", name="intro", path="intro.md", title="Intro!").label == "Intro!"
    assert _file("intro").label == "intro"


def test_to_dict_shapes() -> None:
    node = _folder("g", [_file("x", "g/x.md")])
    assert node.to_dict() == {
        "type": "folder",
        "name": "g",
        "path": "g",
        "children": [{"type": "file", "name": "x", "title": None, "path": "g/x.md"}],
    }


# === URL mapping ===


@pytest.mark.parametrize(
    ("path", "url"),
    [
        ("README.md", "v1.0"),
        ("guide/README.md", "v1.0/guide"),
        ("guide/intro.md", "v1.0/guide/intro"),
        ("api.md", "v1.0/api"),
    ],
)
def test_page_url_path(path: str, url: str) -> None:
    assert page_url_path(path, "v1.0") == url


@pytest.mark.parametrize(
    ("url_path", "version", "candidates"),
    [
        ("", "v1.0", ["README.md"]),
        ("/v0.9", "v0.9", ["README.md"]),
        ("/v1.0/guide/", "v1.0", ["guide.md", "guide/README.md"]),
        ("/v1.0/api.md", "v1.0", ["api.md"]),
        ("/getting-started", "v1.0", ["getting-started.md", "getting-started/README.md"]),
        ("/v1.0/api.html", "v1.0", ["api.md", "api/README.md"]),
    ],
)
def test_resolve_request_path(
    site_config: SiteConfig, url_path: str, version: str, candidates: list[str]
) -> None:
    assert resolve_request_path(url_path, site_config) == (version, candidates)

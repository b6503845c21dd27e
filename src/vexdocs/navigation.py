"""Navigation tree built from a version's docs directory."""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from vexdocs.markdown.frontmatter import split_frontmatter

if TYPE_CHECKING:
    from pathlib import Path

    from vexdocs.config import SidebarEntry, SiteConfig

logger = logging.getLogger(__name__)

README = "README.md"
_H1_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)


@dataclass
class NavNode:
    """A file or folder entry in the sidebar."""

    type: str  # "file" | "folder"
    name: str
    path: str  # POSIX path relative to the version directory
    title: str | None = None
    children: list[NavNode] = field(default_factory=list)

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def label(self) -> str:
        """Text shown in the sidebar."""
        if self.is_file:
            return self.title or self.name
        return " ".join(word[:1].upper() + word[1:] for word in self.name.split("-"))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape served at /api/navigation."""
        if self.is_file:
            return {"type": "file", "name": self.name, "title": self.title, "path": self.path}
        return {
            "type": "folder",
            "name": self.name,
            "path": self.path,
            "children": [child.to_dict() for child in self.children],
        }


def extract_title(markdown: str) -> str | None:
    """Return the frontmatter title, else the first level-1 heading."""
    meta, body = split_frontmatter(markdown)
    title = meta.get("title")
    if title:
        return str(title).strip()
    m = _H1_RE.search(body)
    return m.group(1).strip() if m else None


def build_directory_tree(directory: Path, relative: str = "") -> list[NavNode]:
    """Scan a directory for Markdown files and sub-folders, sorted by name."""
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError:
        logger.exception("Cannot read docs directory %s", directory)
        return []

    nodes: list[NavNode] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        path = posixpath.join(relative, entry.name) if relative else entry.name
        if entry.is_dir():
            nodes.append(
                NavNode(
                    type="folder",
                    name=entry.name,
                    path=path,
                    children=build_directory_tree(entry, path),
                )
            )
        elif entry.suffix == ".md":
            try:
                title = extract_title(entry.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError):
                logger.warning("Cannot read title from %s", entry, exc_info=True)
                title = None
            nodes.append(NavNode(type="file", name=entry.stem, path=path, title=title))
    return nodes


def _matches(node: NavNode, entry: str) -> bool:
    if node.is_file:
        return node.path == entry or node.name == entry.removesuffix(".md")
    return node.name == entry


def apply_sidebar_order(
    nodes: list[NavNode],
    order: list[SidebarEntry],
    *,
    top_level: bool = True,
) -> list[NavNode]:
    """Reorder nodes following a sidebar order list.

    The top-level README always comes first. Entries named in ``order`` follow
    in that order; ``{"folder": name, "items": [...]}`` also orders the
    folder's children. Unlisted nodes keep their relative order at the end.
    """
    remaining = list(nodes)
    ordered: list[NavNode] = []

    if top_level:
        for i, node in enumerate(remaining):
            if node.is_file and (node.path == README or node.name == "README"):
                ordered.append(remaining.pop(i))
                break

    for entry in order:
        if isinstance(entry, str):
            index = next((i for i, n in enumerate(remaining) if _matches(n, entry)), None)
            if index is not None:
                ordered.append(remaining.pop(index))
        elif isinstance(entry, dict) and "folder" in entry and "items" in entry:
            index = next(
                (
                    i
                    for i, n in enumerate(remaining)
                    if not n.is_file and n.name == entry["folder"]
                ),
                None,
            )
            if index is not None:
                folder = remaining.pop(index)
                children = apply_sidebar_order(folder.children, entry["items"], top_level=False)
                ordered.append(replace(folder, children=children))
        else:
            logger.warning("Ignoring malformed sidebar entry: %r", entry)

    ordered.extend(remaining)
    return ordered


def build_navigation(docs_dir: Path, version: str, config: SiteConfig) -> list[NavNode]:
    """Build the ordered navigation tree for one version."""
    version_dir = docs_dir / version
    if not version_dir.is_dir():
        return []
    nodes = build_directory_tree(version_dir)
    order = config.sidebar_order.get(version)
    if not order:
        return nodes
    return apply_sidebar_order(nodes, order)


def extract_pages(nodes: list[NavNode]) -> list[NavNode]:
    """Flatten the tree into its file nodes, depth first."""
    pages: list[NavNode] = []
    for node in nodes:
        if node.is_file:
            pages.append(node)
        else:
            pages.extend(extract_pages(node.children))
    return pages


def page_url_path(path: str, version: str) -> str:
    """Site-relative URL path of a page (README maps to its directory)."""
    stem = path.removesuffix(".md")
    if posixpath.basename(stem) == "README":
        parent = posixpath.dirname(stem)
        return f"{version}/{parent}" if parent else version
    return f"{version}/{stem}"


def page_href(path: str, version: str) -> str:
    return "/" + page_url_path(path, version)


def resolve_request_path(url_path: str, config: SiteConfig) -> tuple[str, list[str]]:
    """Map a site URL path to a version and the Markdown paths that may back it.

    The first segment selects the version when it names one; otherwise the
    default version is used and the whole path is looked up below it.
    """
    segments = [s for s in url_path.strip("/").split("/") if s]
    if segments and segments[0] in config.versions:
        version, segments = segments[0], segments[1:]
    else:
        version = config.default_version
    page = "/".join(segments).removesuffix(".html")
    if not page:
        return version, [README]
    if page.endswith(".md"):
        return version, [page]
    return version, [f"{page}.md", f"{page}/{README}"]

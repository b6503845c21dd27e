"""CLI entry point and subcommand definitions."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from vexdocs.config import ConfigError, get_docs_dir, load_config
from vexdocs.content import DocsSource
from vexdocs.export import ExportError, SiteExporter
from vexdocs.markdown.highlight import highlight
from vexdocs.markdown.renderer import render

if TYPE_CHECKING:
    from vexdocs.navigation import NavNode

DEFAULT_PORT = 3000
DEFAULT_OUT = "dist"

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> None:
    err_console.print(f"Error: {message}", style="red", markup=False, highlight=False)
    sys.exit(1)


def _cmd_serve(args: argparse.Namespace) -> None:
    """Run the live documentation server."""
    from vexdocs.server import create_app  # noqa: PLC0415

    app = create_app(args.docs, args.assets)
    console.print(f"Serving [bold]{args.docs}[/] at http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.dev)


def _cmd_build(args: argparse.Namespace) -> None:
    """Export the static site."""
    exporter = SiteExporter(args.docs, args.out, args.assets)
    try:
        result = exporter.build(api=args.api)
    except ExportError as e:
        _fail(str(e))
        return

    table = Table(title=f"Built {exporter.config.title}")
    table.add_column("Output")
    table.add_column("Count", justify="right")
    table.add_row("HTML pages", str(len(result.pages)))
    table.add_row("API files", str(len(result.api_files)))
    table.add_row("Skipped", str(len(result.skipped)))
    console.print(table)
    console.print(f"Output directory: {result.output_dir}")


def _cmd_render(args: argparse.Namespace) -> None:
    """Render one Markdown file (or highlight one source file) to stdout."""
    path: Path = args.file
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"cannot read {path}: {e}")
        return
    print(highlight(text, args.highlight) if args.highlight else render(text))


def _add_nodes(tree: Tree, nodes: list[NavNode]) -> None:
    for node in nodes:
        if node.is_file:
            tree.add(f"{escape(node.label)} [dim]{escape(node.path)}[/]")
        else:
            _add_nodes(tree.add(f"[bold]{escape(node.label)}/[/]"), node.children)


def _cmd_nav(args: argparse.Namespace) -> None:
    """Print the navigation tree of one version."""
    config = load_config(args.docs)
    version = args.version or config.default_version
    if version not in config.versions:
        _fail(f"unknown version {version!r}, expected one of {list(config.versions)}")
        return
    nodes = DocsSource(args.docs, config).navigation(version)
    if args.json:
        print(json.dumps([node.to_dict() for node in nodes], indent=2))
        return
    tree = Tree(f"[bold]{escape(config.title)}[/] {escape(version)}")
    _add_nodes(tree, nodes)
    console.print(tree)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the appropriate subcommand."""
    parser = argparse.ArgumentParser(
        prog="vexdocs",
        description="Versioned Markdown documentation server and static site builder",
    )
    parser.add_argument(
        "--docs",
        type=Path,
        default=None,
        help="Docs directory (default: $VEXDOCS_DOCS_DIR or ./docs)",
    )
    parser.add_argument("--assets", type=Path, default=None, help="Static assets directory")
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the live documentation server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})"
    )
    serve_parser.add_argument("--dev", action="store_true", help="Enable Flask debug mode")

    # build
    build_parser = subparsers.add_parser("build", help="Export a static site")
    build_parser.add_argument(
        "--out", type=Path, default=Path(DEFAULT_OUT), help=f"Output dir (default: {DEFAULT_OUT})"
    )
    build_parser.add_argument("--api", action="store_true", help="Also write the JSON API mirror")

    # render
    render_parser = subparsers.add_parser("render", help="Render a Markdown file to HTML")
    render_parser.add_argument("file", type=Path)
    render_parser.add_argument(
        "--highlight", metavar="LANG", help="Highlight the file as LANG source instead"
    )

    # nav
    nav_parser = subparsers.add_parser("nav", help="Show the navigation tree")
    nav_parser.add_argument("--version", help="Docs version (default: the configured default)")
    nav_parser.add_argument("--json", action="store_true", help="Output as JSON")

    args = parser.parse_args(argv)
    if args.docs is None:
        args.docs = get_docs_dir()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatch = {
        "serve": _cmd_serve,
        "build": _cmd_build,
        "render": _cmd_render,
        "nav": _cmd_nav,
    }
    try:
        dispatch[args.command](args)
    except ConfigError as e:
        _fail(str(e))

"""Live documentation server: JSON API, static assets and rendered pages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException
from werkzeug.security import safe_join

from vexdocs.config import load_config
from vexdocs.content import DocsSource
from vexdocs.markdown.renderer import render
from vexdocs.navigation import README, resolve_request_path
from vexdocs.pages import PageRenderer, sitemap_urls

if TYPE_CHECKING:
    from pathlib import Path

    from vexdocs.config import SiteConfig

logger = logging.getLogger(__name__)


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def create_app(
    docs_dir: Path,
    assets_dir: Path | None = None,
    config: SiteConfig | None = None,
) -> Flask:
    """Build the Flask app serving one docs tree.

    Raises ConfigError if the docs config cannot be loaded.
    """
    config = config or load_config(docs_dir)
    source = DocsSource(docs_dir, config)
    renderer = PageRenderer(config)

    app = Flask(__name__)

    # --- API ---

    @app.get("/api/config")
    def api_config() -> Response:
        return jsonify(config.to_dict())

    @app.get("/api/versions")
    def api_versions() -> Response:
        return jsonify(list(config.versions))

    @app.get("/api/navigation")
    def api_navigation() -> Response:
        version = request.args.get("version") or config.default_version
        return jsonify([node.to_dict() for node in source.navigation(version)])

    @app.get("/api/content")
    def api_content() -> Response:
        version = request.args.get("version") or config.default_version
        path = request.args.get("path") or README
        content = source.markdown(version, path)
        return jsonify({"content": content, "path": path, "html": render(content)})

    @app.get("/api/seo")
    def api_seo() -> Response:
        version = request.args.get("version") or config.default_version
        path = request.args.get("path") or README
        return jsonify(source.seo(version, path).to_dict())

    @app.route("/api/", defaults={"endpoint": ""})
    @app.route("/api/<path:endpoint>")
    def api_unknown(endpoint: str) -> Response:
        return _text("API endpoint not found", 404)

    # --- Static files ---

    @app.get("/assets/<path:filename>")
    def assets(filename: str) -> Response:
        if assets_dir is None:
            return _text("File not found", 404)
        full = safe_join(str(assets_dir), filename)
        if full is None or not (assets_dir / filename).is_file():
            return _text("File not found", 404)
        return send_from_directory(assets_dir, filename)

    @app.get("/sitemap.xml")
    def sitemap() -> Response:
        body = renderer.render_sitemap(sitemap_urls(source))
        return Response(body, mimetype="application/xml")

    @app.get("/robots.txt")
    def robots() -> Response:
        return _text(renderer.render_robots(), 200)

    # --- Pages ---

    @app.get("/", defaults={"url_path": ""})
    @app.get("/<path:url_path>")
    def page(url_path: str) -> Response:
        version, candidates = resolve_request_path(url_path, config)
        doc = source.page(version, candidates)
        html = renderer.render_page(
            doc,
            source.navigation(version),
            homepage=not url_path.strip("/"),
        )
        return Response(html, status=200 if doc.found else 404, mimetype="text/html")

    @app.errorhandler(Exception)
    def internal_error(e: Exception) -> Response | HTTPException:
        if isinstance(e, HTTPException):
            return e
        logger.exception("Request error on %s", request.path)
        return _text("Internal Server Error", 500)

    return app

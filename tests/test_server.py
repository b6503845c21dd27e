"""Tests for the Flask server in server.py."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from vexdocs import server
from vexdocs.config import ConfigError
from vexdocs.content import NOT_FOUND_MARKDOWN

if TYPE_CHECKING:
    from pathlib import Path

    from flask.testing import FlaskClient


@pytest.fixture
def client(docs_dir: Path, assets_dir: Path) -> FlaskClient:
    return server.create_app(docs_dir, assets_dir).test_client()


# === API ===


def test_api_config(client: FlaskClient) -> None:
    resp = client.get("/api/config")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["title"] == "Vex Docs"
    assert data["baseUrl"] == "https://docs.example.com"
    assert data["defaultVersion"] == "v1.0"


def test_api_versions(client: FlaskClient) -> None:
    assert client.get("/api/versions").get_json() == ["v1.0", "v0.9"]


def test_api_navigation_defaults_to_default_version(client: FlaskClient) -> None:
    data = client.get("/api/navigation").get_json()
    assert [node["name"] for node in data] == ["README", "getting-started", "guide", "api"]
    assert data[2]["type"] == "folder"
    assert data[0] == {"type": "file", "name": "README", "title": "Welcome", "path": "README.md"}


def test_api_navigation_other_and_unknown_versions(client: FlaskClient) -> None:
    assert [n["path"] for n in client.get("/api/navigation?version=v0.9").get_json()] == [
        "README.md"
    ]
    assert client.get("/api/navigation?version=v7").get_json() == []


def test_api_content(client: FlaskClient) -> None:
    data = client.get("/api/content?version=v1.0&path=getting-started").get_json()
    assert data["path"] == "getting-started"
    assert data["content"].startswith("# Getting Started")
    assert '<h1 id="getting-started">Getting Started</h1>' in data["html"]


def test_api_content_defaults_to_readme(client: FlaskClient) -> None:
    data = client.get("/api/content").get_json()
    assert data["path"] == "README.md"
    assert "title: Welcome" in data["content"]
    assert "title: Welcome" not in data["html"]


@pytest.mark.parametrize("path", ["missing.md", "../../outside.md"])
def test_api_content_not_found(client: FlaskClient, path: str) -> None:
    resp = client.get("/api/content", query_string={"path": path})
    assert resp.status_code == 200
    assert resp.get_json()["content"] == NOT_FOUND_MARKDOWN


def test_api_seo(client: FlaskClient) -> None:
    data = client.get("/api/seo?path=guide/advanced.md").get_json()
    assert data["title"] == "Advanced Topics"
    assert data["keywords"] == "python, docs"
    assert data["author"] == "Ada"
    assert data["ogTitle"] == "Advanced Topics"
    assert data["twitterCard"] == "summary"


def test_api_seo_not_found(client: FlaskClient) -> None:
    data = client.get("/api/seo?path=missing").get_json()
    assert data["title"] == "Page Not Found"
    assert data["ogTitle"] is None


@pytest.mark.parametrize("url", ["/api/unknown", "/api/", "/api/content/extra"])
def test_unknown_api_endpoint(client: FlaskClient, url: str) -> None:
    resp = client.get(url)
    assert resp.status_code == 404
    assert resp.get_data(as_text=True) == "API endpoint not found"


def test_wrong_method_is_not_an_internal_error(client: FlaskClient) -> None:
    assert client.post("/api/config").status_code == 405


# === static files ===


def test_assets(client: FlaskClient) -> None:
    resp = client.get("/assets/css/main.css")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "body { margin: 0; }\n"
    assert resp.mimetype == "text/css"


def test_missing_asset(client: FlaskClient) -> None:
    resp = client.get("/assets/css/nope.css")
    assert resp.status_code == 404
    assert resp.get_data(as_text=True) == "File not found"


def test_assets_without_directory(docs_dir: Path) -> None:
    client = server.create_app(docs_dir).test_client()
    assert client.get("/assets/css/main.css").status_code == 404


def test_sitemap_and_robots(client: FlaskClient) -> None:
    sitemap = client.get("/sitemap.xml")
    assert sitemap.mimetype == "application/xml"
    assert "<loc>https://docs.example.com/v1.0/guide</loc>" in sitemap.get_data(as_text=True)
    robots = client.get("/robots.txt")
    assert "Disallow: /api/" in robots.get_data(as_text=True)


# === pages ===


def test_homepage(client: FlaskClient) -> None:
    resp = client.get("/")
    html = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert resp.mimetype == "text/html"
    assert "<title>Welcome</title>" in html
    assert '<link rel="canonical" href="https://docs.example.com">' in html
    assert "Intro paragraph." in html


def test_page_in_folder(client: FlaskClient) -> None:
    html = client.get("/v1.0/guide/advanced").get_data(as_text=True)
    assert "<p>Deep dive.</p>" in html
    assert 'class="nav-link active"' in html


def test_folder_readme_page(client: FlaskClient) -> None:
    html = client.get("/v1.0/guide").get_data(as_text=True)
    assert "Guide overview." in html


def test_other_version_page(client: FlaskClient) -> None:
    html = client.get("/v0.9").get_data(as_text=True)
    assert "Old Home" in html
    assert '<option value="v0.9" selected>Legacy</option>' in html


def test_path_without_version_uses_default(client: FlaskClient) -> None:
    assert "Basic usage." in client.get("/guide/basics").get_data(as_text=True)


def test_missing_page_is_404(client: FlaskClient) -> None:
    resp = client.get("/v1.0/does-not-exist")
    assert resp.status_code == 404
    assert "Page Not Found" in resp.get_data(as_text=True)


def test_unexpected_error_is_500(
    client: FlaskClient, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def boom(*_args: object) -> None:
        msg = "boom"
        raise RuntimeError(msg)

    monkeypatch.setattr(server, "resolve_request_path", boom)
    with caplog.at_level(logging.ERROR):
        resp = client.get("/v1.0/api")
    assert resp.status_code == 500
    assert resp.get_data(as_text=True) == "Internal Server Error"
    assert "Request error on /v1.0/api" in caplog.text


def test_create_app_with_bad_config(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text("{broken")
    with pytest.raises(ConfigError):
        server.create_app(tmp_path)

"""Site configuration: locate the docs tree, load and validate its config file."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("config.toml", "config.json")

SidebarEntry = str | dict[str, Any]
"""A file/folder name, or ``{"folder": name, "items": [...]}``."""


class ConfigError(Exception):
    """Raised when the site config is malformed or has invalid fields."""


@dataclass
class ThemeConfig:
    """Colours and sizes handed to the page shell."""

    primary_color: str = "#007acc"
    sidebar_width: str = "300px"


@dataclass
class SiteConfig:
    """Site-wide settings from config.toml / config.json."""

    title: str = "Documentation"
    description: str = "Project Documentation"
    base_url: str = "http://localhost:3000"
    versions: dict[str, str] = field(default_factory=lambda: {"v1.0": "Latest"})
    default_version: str = ""
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    sidebar_order: dict[str, list[SidebarEntry]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.versions:
            msg = "Config must declare at least one version"
            raise ConfigError(msg)
        if not self.default_version:
            self.default_version = next(iter(self.versions))
        elif self.default_version not in self.versions:
            msg = f"default version {self.default_version!r} is not one of {list(self.versions)}"
            raise ConfigError(msg)
        self.base_url = self.base_url.rstrip("/")

    def resolve_version(self, version: str | None) -> str:
        """Return version if it is configured, else the default version."""
        if version and version in self.versions:
            return version
        return self.default_version

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape served at /api/config."""
        return {
            "title": self.title,
            "description": self.description,
            "baseUrl": self.base_url,
            "versions": dict(self.versions),
            "defaultVersion": self.default_version,
            "theme": {
                "primaryColor": self.theme.primary_color,
                "sidebarWidth": self.theme.sidebar_width,
            },
            "sidebarOrder": self.sidebar_order,
        }


def get_docs_dir() -> Path:
    """Return the docs directory, respecting VEXDOCS_DOCS_DIR."""
    env = os.environ.get("VEXDOCS_DOCS_DIR")
    return Path(env) if env else Path.cwd() / "docs"


def _get(data: dict[str, Any], key: str, camel: str, expected: type, path: Path) -> Any:
    """Look up a snake_case or camelCase key and check its type."""
    value = data.get(key, data.get(camel))
    if value is not None and not isinstance(value, expected):
        msg = f"Field '{key}' in {path} must be a {expected.__name__}"
        raise ConfigError(msg)
    return value


def _parse(data: dict[str, Any], path: Path) -> SiteConfig:
    defaults = SiteConfig()
    theme_data = _get(data, "theme", "theme", dict, path) or {}
    theme = ThemeConfig(
        primary_color=_get(theme_data, "primary_color", "primaryColor", str, path)
        or defaults.theme.primary_color,
        sidebar_width=_get(theme_data, "sidebar_width", "sidebarWidth", str, path)
        or defaults.theme.sidebar_width,
    )

    versions = _get(data, "versions", "versions", dict, path)
    if versions is not None:
        versions = {str(k): str(v) for k, v in versions.items()}

    sidebar_order = _get(data, "sidebar_order", "sidebarOrder", dict, path) or {}
    for version, entries in sidebar_order.items():
        if not isinstance(entries, list):
            msg = f"sidebar order for {version!r} in {path} must be a list"
            raise ConfigError(msg)

    return SiteConfig(
        title=_get(data, "title", "title", str, path) or defaults.title,
        description=_get(data, "description", "description", str, path) or defaults.description,
        base_url=_get(data, "base_url", "baseUrl", str, path) or defaults.base_url,
        versions=versions if versions is not None else defaults.versions,
        default_version=_get(data, "default_version", "defaultVersion", str, path) or "",
        theme=theme,
        sidebar_order=sidebar_order,
    )


def load_config(docs_dir: Path) -> SiteConfig:
    """Load the site config from docs_dir.

    config.toml wins over config.json. Returns defaults if neither exists.
    Raises ConfigError on parse errors or invalid fields.
    """
    for name in CONFIG_FILENAMES:
        path = docs_dir / name
        if not path.exists():
            continue
        try:
            if path.suffix == ".toml":
                data = tomllib.loads(path.read_text(encoding="utf-8"))
            else:
                data = json.loads(path.read_text(encoding="utf-8"))
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            msg = f"Invalid config in {path}: {e}"
            raise ConfigError(msg) from e
        if not isinstance(data, dict):
            msg = f"Config in {path} must be a table/object"
            raise ConfigError(msg)
        logger.debug("Loaded config from %s", path)
        return _parse(data, path)

    logger.warning("No config file in %s, using defaults", docs_dir)
    return SiteConfig()

"""Config loading, defaults, validation, and deep merge."""

from __future__ import annotations

import copy
import logging
from pathlib import Path

from readme_icons.utils import deep_merge, load_json, save_json

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".readme-icons"

DEFAULT_CONFIG: dict = {
    "version": 1,
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
        "cache_control": "public, max-age=86400, must-revalidate",
        "log_level": "info",
    },
    "catalog": {
        # None -> bundled sample catalog
        "path": None,
    },
    "badge": {
        "base_url": "https://img.shields.io",
        "default_style": "for-the-badge",
        "logo_color": "white",
    },
    "grid": {
        "base_url": "http://127.0.0.1:8000",
    },
}

_VALID_STYLES = {"flat", "flat-square", "for-the-badge", "plastic", "social"}
_VALID_LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def get_config_path(start_dir: Path | None = None) -> Path:
    """Find .readme-icons/config.json by walking up from start_dir."""
    search = start_dir or Path.cwd()
    for d in [search, *search.parents]:
        candidate = d / CONFIG_DIR_NAME / "config.json"
        if candidate.exists():
            return candidate
    return search / CONFIG_DIR_NAME / "config.json"


def load_config(start_dir: Path | None = None) -> dict:
    """Load config from .readme-icons/config.json, merged with defaults."""
    config_path = get_config_path(start_dir)
    if config_path.exists():
        user_config = load_json(config_path)
        if not user_config:
            logger.warning(
                "Config file exists but could not be loaded (corrupt?): %s "
                "Using defaults.", config_path
            )
        return deep_merge(DEFAULT_CONFIG, user_config)
    return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config: dict, target_dir: Path | None = None) -> Path:
    """Save config to .readme-icons/config.json."""
    target = target_dir or Path.cwd()
    config_path = target / CONFIG_DIR_NAME / "config.json"
    save_json(config_path, config)
    return config_path


def validate_config(config: dict) -> list[str]:
    """Validate config, returning list of error messages (empty if valid)."""
    errors: list[str] = []
    for section in ("server", "catalog", "badge", "grid"):
        if not isinstance(config.get(section), dict):
            errors.append(f"Missing or invalid '{section}' section")
    if errors:
        return errors

    server = config["server"]
    port = server.get("port")
    if not isinstance(port, int) or isinstance(port, bool) or not 0 < port < 65536:
        errors.append(f"server.port: invalid port '{port}'")
    if not isinstance(server.get("cache_control"), str) or not server["cache_control"]:
        errors.append("server.cache_control must be a non-empty string")
    if str(server.get("log_level", "")).lower() not in _VALID_LOG_LEVELS:
        errors.append(f"server.log_level: invalid level '{server.get('log_level')}'")

    catalog_path = config["catalog"].get("path")
    if catalog_path is not None and not isinstance(catalog_path, str):
        errors.append("catalog.path must be a string or null")

    badge = config["badge"]
    if badge.get("default_style") not in _VALID_STYLES:
        errors.append(f"badge.default_style: invalid style '{badge.get('default_style')}'")
    if not str(badge.get("base_url", "")).startswith(("http://", "https://")):
        errors.append("badge.base_url must be an http(s) URL")
    if not str(config["grid"].get("base_url", "")).startswith(("http://", "https://")):
        errors.append("grid.base_url must be an http(s) URL")
    return errors


def resolve_catalog_path(config: dict, project_dir: Path) -> Path | None:
    """Configured catalog file, relative paths taken from project_dir.

    None means the bundled catalog.
    """
    raw = config.get("catalog", {}).get("path")
    if not raw:
        return None
    return project_dir / raw

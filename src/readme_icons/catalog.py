"""Icon catalog: slug -> Icon lookup loaded from a YAML or JSON data file."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

import yaml

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).parent / "assets" / "icons.yaml"
_HEX_COLOR = re.compile(r"^[0-9A-F]{6}\Z")

# Mirrors the editor's search dropdown cap
DEFAULT_SEARCH_LIMIT = 50


class CatalogError(Exception):
    """Raised when a catalog file cannot be read or parsed."""


@dataclass(frozen=True)
class Icon:
    slug: str   # unique lowercase identifier
    title: str  # display name
    hex: str    # brand color, 6 hex digits, no leading '#'
    path: str   # SVG path data on a 24x24 viewbox


class IconCatalog(Mapping):
    """Read-only slug -> Icon mapping.

    Lookups through ``get`` are forgiving about case and surrounding
    whitespace; the mapping itself is never mutated after construction.
    """

    def __init__(self, icons: dict[str, Icon], name: str = "catalog") -> None:
        self._icons = MappingProxyType(dict(icons))
        self.name = name

    def __getitem__(self, slug: str) -> Icon:
        return self._icons[slug]

    def __iter__(self) -> Iterator[str]:
        return iter(self._icons)

    def __len__(self) -> int:
        return len(self._icons)

    def get(self, identifier: str, default: Icon | None = None) -> Icon | None:
        return self._icons.get(identifier.strip().lower(), default)

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[Icon]:
        """Icons whose title or slug contains the query, in catalog order."""
        if not query:
            return []
        needle = query.lower()
        hits: list[Icon] = []
        for icon in self._icons.values():
            if needle in icon.title.lower() or needle in icon.slug:
                hits.append(icon)
                if len(hits) >= limit:
                    break
        return hits


def _normalize_hex(raw: object) -> str | None:
    """Bare uppercase hex, or None when the value is not a 6-digit color.

    Non-strings are rejected: YAML reads an unquoted 000000 as the integer 0
    and 012345 as octal, so the digits can no longer be trusted.
    """
    if not isinstance(raw, str):
        return None
    value = raw.strip().lstrip("#").upper()
    return value if _HEX_COLOR.match(value) else None


def _read_records(path: Path) -> tuple[str, list]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot parse catalog {path}: {e}") from e

    if isinstance(data, list):
        return path.stem, data
    if isinstance(data, dict) and isinstance(data.get("icons"), list):
        return str(data.get("name", path.stem)), data["icons"]
    raise CatalogError(f"Catalog {path} must be a list of icons or contain an 'icons' list")


def load_catalog(path: Path) -> IconCatalog:
    """Build an IconCatalog from a data file.

    Records without a slug or path, or with a hex that is not a 6-digit
    color, are skipped. Later records with the same slug replace earlier ones.
    """
    name, records = _read_records(path)
    icons: dict[str, Icon] = {}
    for index, record in enumerate(records):
        if not isinstance(record, dict) or not record.get("slug") or not record.get("path"):
            logger.warning("Skipping catalog record %d in %s: missing slug or path", index, path)
            continue
        slug = str(record["slug"]).strip().lower()
        hex_color = _normalize_hex(record.get("hex", "000000"))
        if hex_color is None:
            logger.warning(
                "Skipping catalog record %d (%s) in %s: hex %r is not a 6-digit color; quote it in YAML",
                index, slug, path, record.get("hex"),
            )
            continue
        icons[slug] = Icon(
            slug=slug,
            title=str(record.get("title") or slug),
            hex=hex_color,
            path=str(record["path"]),
        )
    logger.debug("Loaded %d icons from %s", len(icons), path)
    return IconCatalog(icons, name=name)


_catalogs: dict[str, IconCatalog] = {}


def get_catalog(path: Path | str | None = None) -> IconCatalog:
    """Return the catalog for ``path``, loading it on first use only."""
    resolved = Path(path) if path else BUNDLED_CATALOG
    key = str(resolved.resolve())
    if key not in _catalogs:
        _catalogs[key] = load_catalog(resolved)
    return _catalogs[key]


def clear_catalog_cache() -> None:
    """Forget every loaded catalog."""
    _catalogs.clear()

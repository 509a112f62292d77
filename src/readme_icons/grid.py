"""Grid compositor - pure function from icon slugs + layout to one SVG document."""

from __future__ import annotations

import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Enum

from readme_icons.catalog import Icon, IconCatalog
from readme_icons.utils import clamp, parse_int

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
GLYPH_VIEWBOX = 24

DEFAULT_PER_LINE = 15
MIN_PER_LINE = 1
MAX_PER_LINE = 50

DEFAULT_SIZE = 48
MIN_SIZE = 16
MAX_SIZE = 128

# Spacing scales with the cell so proportions hold at every size
PADDING_RATIO = 0.25
GAP_RATIO = 0.2
CORNER_RATIO = 0.2


class Theme(str, Enum):
    DARK = "dark"    # brand-colored cell, white glyph
    LIGHT = "light"  # white cell, brand-colored glyph

    @classmethod
    def parse(cls, value: str | None) -> "Theme":
        """Only the exact string "light" selects the light theme."""
        return cls.LIGHT if value == "light" else cls.DARK


class GridError(str, Enum):
    MISSING_INPUT = "missing_input"
    NO_VALID_ICONS = "no_valid_icons"

    @property
    def status_code(self) -> int:
        return _ERROR_STATUS[self]

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_STATUS: dict[GridError, int] = {
    GridError.MISSING_INPUT: 400,
    GridError.NO_VALID_ICONS: 404,
}

_ERROR_MESSAGES: dict[GridError, str] = {
    GridError.MISSING_INPUT: 'Missing "i" parameter',
    GridError.NO_VALID_ICONS: "No valid icons found",
}


@dataclass(frozen=True)
class LayoutRequest:
    identifiers: tuple[str, ...]
    theme: Theme = Theme.DARK
    per_line: int = DEFAULT_PER_LINE
    size: int = DEFAULT_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))
        if not isinstance(self.theme, Theme):
            object.__setattr__(self, "theme", Theme.parse(self.theme))
        object.__setattr__(self, "per_line", clamp(self.per_line, MIN_PER_LINE, MAX_PER_LINE))
        object.__setattr__(self, "size", clamp(self.size, MIN_SIZE, MAX_SIZE))

    @classmethod
    def from_query(
        cls,
        i: str | None,
        t: str | None = None,
        perline: str | int | None = None,
        size: str | int | None = None,
    ) -> "LayoutRequest":
        """Build a request from raw query-string values.

        ``i`` is a comma-separated slug list; unparseable numbers fall back
        to the defaults before clamping.
        """
        identifiers = tuple(i.split(",")) if i else ()
        return cls(
            identifiers=identifiers,
            theme=Theme.parse(t),
            per_line=parse_int(perline, DEFAULT_PER_LINE),
            size=parse_int(size, DEFAULT_SIZE),
        )


@dataclass
class GridResult:
    svg: str | None = None
    error: GridError | None = None
    icons: list[Icon] = field(default_factory=list)
    width: float = 0
    height: float = 0

    @property
    def ok(self) -> bool:
        return self.error is None


def _num(value: float) -> str:
    """Format a coordinate: integral values without a fraction, others shortest repr.

    Rounded to 4 places: 48 * 0.2 prints as 9.6, not 9.600000000000001.
    """
    value = round(float(value), 4)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def resolve_icons(identifiers: tuple[str, ...] | list[str], catalog: IconCatalog) -> list[Icon]:
    """Look up identifiers in order, silently dropping unknown ones.

    Duplicates are kept: asking for the same icon twice draws it twice.
    """
    icons: list[Icon] = []
    for identifier in identifiers:
        icon = catalog.get(identifier)
        if icon is None:
            logger.debug("Dropping unknown icon identifier %r", identifier)
            continue
        icons.append(icon)
    return icons


def canvas_size(count: int, per_line: int, size: int) -> tuple[float, float]:
    """Width and height of a grid holding ``count`` icons."""
    gap = size * GAP_RATIO
    columns = min(count, per_line)
    rows = math.ceil(count / per_line)
    width = columns * size + (columns - 1) * gap
    height = rows * size + (rows - 1) * gap
    return width, height


def cell_origin(index: int, per_line: int, size: int) -> tuple[float, float]:
    """Top-left corner of the cell at row-major position ``index``."""
    step = size + size * GAP_RATIO
    col = index % per_line
    row = index // per_line
    return col * step, row * step


def _icon_group(icon: Icon, index: int, request: LayoutRequest) -> ET.Element:
    size = request.size
    padding = size * PADDING_RATIO
    scale = (size - padding * 2) / GLYPH_VIEWBOX
    x, y = cell_origin(index, request.per_line, size)

    brand = f"#{icon.hex}"
    if request.theme is Theme.LIGHT:
        cell_fill, glyph_fill = "white", brand
    else:
        cell_fill, glyph_fill = brand, "white"

    group = ET.Element("g", {"transform": f"translate({_num(x)}, {_num(y)})"})
    title = ET.SubElement(group, "title")
    title.text = icon.title
    ET.SubElement(group, "rect", {
        "width": _num(size),
        "height": _num(size),
        "rx": _num(size * CORNER_RATIO),
        "fill": cell_fill,
    })
    ET.SubElement(group, "path", {
        "d": icon.path,
        "fill": glyph_fill,
        "transform": f"translate({_num(padding)}, {_num(padding)}) scale({_num(scale)})",
    })
    return group


def render_grid(icons: list[Icon], request: LayoutRequest) -> tuple[str, float, float]:
    """Render resolved icons into an SVG document.

    Returns (svg_text, width, height). ``icons`` must be non-empty.
    """
    width, height = canvas_size(len(icons), request.per_line, request.size)
    root = ET.Element("svg", {
        "xmlns": SVG_NS,
        "width": _num(width),
        "height": _num(height),
        "viewBox": f"0 0 {_num(width)} {_num(height)}",
    })
    for index, icon in enumerate(icons):
        root.append(_icon_group(icon, index, request))

    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode") + "\n", width, height


def composite(request: LayoutRequest, catalog: IconCatalog) -> GridResult:
    """Resolve and render a layout request.

    The two expected failures come back as ``GridResult.error`` rather than
    exceptions; the caller picks the transport representation.
    """
    if not request.identifiers:
        return GridResult(error=GridError.MISSING_INPUT)

    icons = resolve_icons(request.identifiers, catalog)
    if not icons:
        logger.info("No requested icon resolved: %s", ",".join(request.identifiers))
        return GridResult(error=GridError.NO_VALID_ICONS)

    svg, width, height = render_grid(icons, request)
    return GridResult(svg=svg, icons=icons, width=width, height=height)

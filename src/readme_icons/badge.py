"""Badge URL encoder - turns a BadgeSpec into a shields.io request URL.

No network call is made; building the URL is the whole job. Text destined
for a path segment follows the service's dash/underscore syntax before
percent-encoding:

    "-" -> "--", "_" -> "__", " " -> "_"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union
from urllib.parse import quote, urlencode

from readme_icons.catalog import Icon

DEFAULT_BASE_URL = "https://img.shields.io"
DEFAULT_LOGO_COLOR = "white"

CUSTOM_ROUTE = "badge"
REPOSITORY_ROUTE = "github"

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_PATH_SAFE = "!*'()"


class BadgeStyle(str, Enum):
    FLAT = "flat"
    FLAT_SQUARE = "flat-square"
    FOR_THE_BADGE = "for-the-badge"
    PLASTIC = "plastic"
    SOCIAL = "social"


class BadgeMode(str, Enum):
    CUSTOM = "custom"
    REPOSITORY_METRIC = "repository_metric"


# Color the service paints each repository metric with when none is given.
# None: the service picks a color from the value, so any override applies.
METRIC_DEFAULT_COLORS: dict[str, str | None] = {
    "stars": "blue",
    "forks": "blue",
    "watchers": "blue",
    "license": "blue",
    "v/release": "blue",
    "v/tag": "blue",
    "languages/top": "blue",
    "repo-size": "blue",
    "contributors": "blue",
    "issues": None,
    "issues-pr": None,
    "last-commit": None,
    "commit-activity/m": None,
}


@dataclass(frozen=True)
class CustomBadge:
    """Two-part label/message badge."""

    label: str = ""
    message: str = ""
    color: str = ""
    style: BadgeStyle = BadgeStyle.FOR_THE_BADGE
    logo: str | None = None
    logo_color: str | None = DEFAULT_LOGO_COLOR
    mode: BadgeMode = field(default=BadgeMode.CUSTOM, init=False)


@dataclass(frozen=True)
class RepositoryMetricBadge:
    """Repository statistic badge rendered from live data by the service."""

    owner: str
    repository: str
    metric: str = "stars"
    color: str = ""
    style: BadgeStyle = BadgeStyle.FOR_THE_BADGE
    logo: str | None = None
    logo_color: str | None = DEFAULT_LOGO_COLOR
    mode: BadgeMode = field(default=BadgeMode.REPOSITORY_METRIC, init=False)


BadgeSpec = Union[CustomBadge, RepositoryMetricBadge]


def escape_badge_text(text: str) -> str:
    """Apply the service's literal syntax, then percent-encode for a path segment."""
    escaped = text.replace("-", "--").replace("_", "__").replace(" ", "_")
    return quote(escaped, safe=_PATH_SAFE)


def clean_color(value: str | None) -> str:
    """Strip whitespace and a leading '#'; the service takes bare hex or names."""
    if not value:
        return ""
    value = value.strip()
    return value[1:] if value.startswith("#") else value


def _style_value(style: BadgeStyle | str) -> str:
    """Unknown styles fall back to the default instead of failing."""
    try:
        return BadgeStyle(style).value
    except ValueError:
        return BadgeStyle.FOR_THE_BADGE.value


def _segment(value: str) -> str:
    return quote(value, safe=_PATH_SAFE)


def _custom_path(spec: CustomBadge) -> tuple[str, dict[str, str]]:
    label = escape_badge_text(spec.label or "")
    message = escape_badge_text(spec.message or "")
    path = f"{label}-{message}" if label else message
    color = clean_color(spec.color)
    if color:
        path = f"{path}-{color}"
    return f"{CUSTOM_ROUTE}/{path}", {}


def _repository_path(spec: RepositoryMetricBadge) -> tuple[str, dict[str, str]]:
    # metric may contain a sub-route such as "v/release"; keep its slash
    metric = "/".join(_segment(part) for part in spec.metric.split("/"))
    path = f"{REPOSITORY_ROUTE}/{metric}/{_segment(spec.owner)}/{_segment(spec.repository)}"

    extra: dict[str, str] = {}
    color = clean_color(spec.color)
    default = METRIC_DEFAULT_COLORS.get(spec.metric)
    if color and (default is None or color.lower() != default.lower()):
        extra["color"] = color
    return path, extra


_PATH_BUILDERS = {
    BadgeMode.CUSTOM: _custom_path,
    BadgeMode.REPOSITORY_METRIC: _repository_path,
}


def build_badge_url(spec: BadgeSpec, base_url: str = DEFAULT_BASE_URL) -> str:
    """Build the absolute badge URL for ``spec``.

    Total over its input: odd text yields a valid but meaningless URL, and
    the service decides what it renders.
    """
    path, extra = _PATH_BUILDERS[spec.mode](spec)

    params: dict[str, str] = {"style": _style_value(spec.style)}
    if spec.logo:
        params["logo"] = spec.logo
    logo_color = clean_color(spec.logo_color)
    if logo_color:
        params["logoColor"] = logo_color
    params.update(extra)

    return f"{base_url.rstrip('/')}/{path}?{urlencode(params)}"


def badge_from_icon(icon: Icon, message: str = "Message", **kwargs) -> CustomBadge:
    """Pre-fill a custom badge from a catalog icon: title, brand color, logo."""
    return CustomBadge(
        label=icon.title,
        message=message,
        color=icon.hex,
        logo=icon.slug,
        **kwargs,
    )

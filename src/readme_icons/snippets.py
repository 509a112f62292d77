"""Markdown / HTML snippets that embed generated images in a README."""

from __future__ import annotations

from html import escape
from urllib.parse import urlencode

from readme_icons.grid import DEFAULT_PER_LINE, DEFAULT_SIZE, Theme

GRID_ROUTE = "/api/icons"
ALIGNMENTS = ("left", "center", "right")


def badge_markdown(url: str, alt: str, link: str | None = None) -> str:
    image = f"![{alt}]({url})"
    if link:
        return f"[{image}]({link})"
    return image


def grid_url(
    base_url: str,
    slugs: list[str],
    theme: Theme | str = Theme.DARK,
    size: int = DEFAULT_SIZE,
    per_line: int = DEFAULT_PER_LINE,
) -> str:
    """Absolute grid URL; parameters equal to the server defaults are left out."""
    params: dict[str, str] = {"i": ",".join(slugs)}
    if not isinstance(theme, Theme):
        theme = Theme.parse(theme)
    if theme is not Theme.DARK:
        params["t"] = theme.value
    if size != DEFAULT_SIZE:
        params["size"] = str(size)
    if per_line != DEFAULT_PER_LINE:
        params["perline"] = str(per_line)
    # keep the commas readable in the copied snippet
    return f"{base_url.rstrip('/')}{GRID_ROUTE}?{urlencode(params, safe=',')}"


def grid_markdown(url: str, link: str) -> str:
    return f"[![Icons]({url})]({link})"


def grid_html(url: str, link: str, align: str = "center") -> str:
    """HTML block for READMEs that need alignment, which markdown can't express."""
    if align not in ALIGNMENTS:
        raise ValueError(f"align must be one of {', '.join(ALIGNMENTS)}, got {align!r}")
    return (
        f'<p align="{align}">\n'
        f'  <a href="{escape(link)}">\n'
        f'    <img src="{escape(url)}" alt="Icons" />\n'
        f"  </a>\n"
        f"</p>"
    )

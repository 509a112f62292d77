"""Typer CLI: grid, badge, snippet, icons, serve commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from readme_icons import __version__

if TYPE_CHECKING:
    from readme_icons.catalog import IconCatalog

app = typer.Typer(
    name="readme-icons",
    help="Skill-icon grids and badges for your README.",
    no_args_is_help=True,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"readme-icons v{__version__}")
        raise typer.Exit()


def _load_catalog(project_dir: Path) -> IconCatalog:
    from readme_icons.catalog import CatalogError, get_catalog
    from readme_icons.config import load_config, resolve_catalog_path

    config = load_config(project_dir)
    try:
        return get_catalog(resolve_catalog_path(config, project_dir))
    except CatalogError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


def _split_slugs(slugs: str) -> list[str]:
    return [s.strip() for s in slugs.split(",") if s.strip()]


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version.", callback=_version_callback, is_eager=True
    ),
) -> None:
    """readme-icons - icon grids and badges for README files."""


@app.command()
def grid(
    slugs: str = typer.Argument(..., help="Comma-separated icon slugs, e.g. python,react"),
    theme: str = typer.Option("dark", "--theme", "-t", help="dark or light"),
    perline: int = typer.Option(15, "--perline", help="Icons per row (1-50)"),
    size: int = typer.Option(48, "--size", help="Icon edge in px (16-128)"),
    output: Path = typer.Option(None, "--output", "-o", help="Write SVG to this file"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Render icons into a single SVG grid."""
    from readme_icons.grid import LayoutRequest, composite

    if not _split_slugs(slugs):
        console.print("[red]No icon slugs given[/red]")
        raise typer.Exit(1)
    catalog = _load_catalog(project_dir)
    layout = LayoutRequest.from_query(slugs, theme, perline, size)
    result = composite(layout, catalog)
    if not result.ok:
        console.print(f"[red]{result.error.message}[/red]")
        raise typer.Exit(1)

    dropped = len(layout.identifiers) - len(result.icons)
    if output is None:
        typer.echo(result.svg, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.svg, encoding="utf-8")
    console.print(
        f"[green]Wrote {len(result.icons)} icons[/green] "
        f"({result.width:g}x{result.height:g}) to [cyan]{output}[/cyan]"
    )
    if dropped:
        console.print(f"  [yellow]{dropped} unknown slug(s) skipped[/yellow]")


@app.command()
def badge(
    label: str = typer.Option("", "--label", "-l", help="Left-hand text"),
    message: str = typer.Option("", "--message", "-m", help="Right-hand text"),
    color: str = typer.Option("", "--color", "-c", help="Badge color (hex or name)"),
    logo: str = typer.Option(None, "--logo", help="Icon slug to show as logo"),
    logo_color: str = typer.Option(None, "--logo-color", help="Logo color (default from config)"),
    style: str = typer.Option(None, "--style", "-s", help="flat, flat-square, for-the-badge, plastic, social"),
    repo: str = typer.Option(None, "--repo", help="owner/name: switch to a repository metric badge"),
    metric: str = typer.Option("stars", "--metric", help="Repository metric, e.g. stars, forks, license"),
    link: str = typer.Option(None, "--link", help="Make the badge a link to this URL"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Build a shields.io badge URL and its markdown snippet."""
    from readme_icons.badge import BadgeStyle, CustomBadge, RepositoryMetricBadge, build_badge_url
    from readme_icons.config import load_config
    from readme_icons.snippets import badge_markdown

    config = load_config(project_dir)
    badge_cfg = config["badge"]
    style = style or badge_cfg["default_style"]
    try:
        badge_style = BadgeStyle(style)
    except ValueError:
        console.print(f"[red]Unknown style '{escape(str(style))}'[/red]")
        raise typer.Exit(1)
    shared = {
        "style": badge_style,
        "logo": logo,
        "logo_color": logo_color if logo_color is not None else badge_cfg["logo_color"],
    }

    if repo:
        owner, _, name = repo.partition("/")
        if not owner or not name:
            console.print(f"[red]--repo must look like owner/name, got '{repo}'[/red]")
            raise typer.Exit(1)
        spec = RepositoryMetricBadge(owner=owner, repository=name, metric=metric, color=color, **shared)
        alt = f"{name} {metric}"
    else:
        spec = CustomBadge(label=label, message=message, color=color, **shared)
        alt = f"{label} {message}".strip()

    url = build_badge_url(spec, base_url=badge_cfg["base_url"])
    # raw echo: wrapped URLs can't be copied
    console.print("[bold blue]URL[/bold blue]")
    typer.echo(url)
    console.print("[bold green]Markdown[/bold green]")
    typer.echo(badge_markdown(url, alt, link))


@app.command()
def snippet(
    slugs: str = typer.Argument(..., help="Comma-separated icon slugs"),
    theme: str = typer.Option("dark", "--theme", "-t", help="dark or light"),
    perline: int = typer.Option(15, "--perline", help="Icons per row"),
    size: int = typer.Option(48, "--size", help="Icon edge in px"),
    base_url: str = typer.Option(None, "--base-url", help="Public URL of the grid server"),
    link: str = typer.Option(None, "--link", help="Where the icons link to (default: base URL)"),
    html: bool = typer.Option(False, "--html", help="Emit an HTML block instead of markdown"),
    align: str = typer.Option("center", "--align", help="left, center or right (HTML only)"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Print the README markup embedding an icon grid."""
    from readme_icons.config import load_config
    from readme_icons.grid import LayoutRequest
    from readme_icons.snippets import ALIGNMENTS, grid_html, grid_markdown, grid_url

    config = load_config(project_dir)
    names = _split_slugs(slugs)
    if not names:
        console.print('[red]No icon slugs given[/red]')
        raise typer.Exit(1)
    if html and align not in ALIGNMENTS:
        console.print(f"[red]--align must be one of {', '.join(ALIGNMENTS)}[/red]")
        raise typer.Exit(1)

    layout = LayoutRequest(identifiers=tuple(names), theme=theme, per_line=perline, size=size)
    base = base_url or config["grid"]["base_url"]
    url = grid_url(base, names, layout.theme, layout.size, layout.per_line)
    target = link or base
    text = grid_html(url, target, align) if html else grid_markdown(url, target)
    typer.echo(text)


@app.command()
def icons(
    query: str = typer.Argument("", help="Filter by title or slug"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum rows"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """List catalog icons, optionally filtered."""
    catalog = _load_catalog(project_dir)
    if query:
        matches = catalog.search(query, limit=limit)
    else:
        matches = [catalog[slug] for slug in list(catalog)[:limit]]

    if not matches:
        console.print(f"[yellow]No icons match '{escape(query)}'[/yellow]")
        return

    table = Table(title=f"Icons ({catalog.name})")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Color")
    for icon in matches:
        table.add_row(escape(icon.slug), escape(icon.title), f"[#{icon.hex}]#{icon.hex}[/#{icon.hex}]")
    console.print(table)
    console.print(f"[dim]{len(matches)} of {len(catalog)} icons[/dim]")


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    project_dir: Path = typer.Option(Path.cwd(), "--dir", help="Project directory"),
) -> None:
    """Run the HTTP grid server."""
    from readme_icons.config import load_config, resolve_catalog_path, validate_config
    from readme_icons.server import run_server

    config = load_config(project_dir)
    catalog_path = resolve_catalog_path(config, project_dir)
    if catalog_path is not None:
        config["catalog"]["path"] = str(catalog_path)
    errors = validate_config(config)
    if errors:
        for e in errors:
            console.print(f"  [red]Config error: {e}[/red]")
        raise typer.Exit(1)

    server = config["server"]
    console.print(
        Panel(
            f"Listening on [cyan]http://{host or server['host']}:{port or server['port']}[/cyan]",
            title="readme-icons",
            style="blue",
        )
    )
    run_server(config, host=host, port=port)

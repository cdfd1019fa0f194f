"""CLI principal (Typer).

Comandos:
- `build`: genera el sitio estático completo desde el CMS.
- `article`, `slugs`, `authors`, `search`: consultas puntuales al CMS.
- `doctor`: diagnóstico de entorno y configuración.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from adapters.content_processor import process_content
from adapters.site_renderer import SiteRenderer
from adapters.wordpress.api import WordPressClient
from adapters.wordpress.transforms import transform_to_article
from cli import doctor
from cli.ui_components import (
    build_article_panel,
    build_articles_table,
    build_authors_table,
    build_paths_table,
    build_summary_panel,
    print_banner,
)
from core.config import AppSettings
from core.logging import configure_logging
from core.services.site_builder import BuildHooks, BuildRequest, build_site

app = typer.Typer(no_args_is_help=True, help="CHARTSPOINT static site generator (WordPress GraphQL).")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _content_client(settings: AppSettings) -> WordPressClient:
    return WordPressClient(settings)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="Override CHARTSPOINT_LOG_LEVEL."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)


@app.command()
def build(
    output: Path = typer.Option(None, "--output", "-o", help="Output directory (default: CHARTSPOINT_OUTPUT_DIR)."),
    no_hubs: bool = typer.Option(False, "--no-hubs", help="Skip pillar and cluster hub pages."),
    no_authors: bool = typer.Option(False, "--no-authors", help="Skip author pages."),
    no_search_index: bool = typer.Option(False, "--no-search-index", help="Skip search-index.json."),
    no_patterns: bool = typer.Option(False, "--no-patterns", help="Do not inject inline candlestick SVGs."),
) -> None:
    """Build the whole static site from the CMS."""

    settings = AppSettings()
    print_banner(_console)

    request = BuildRequest(
        output_dir=output or settings.output_dir,
        per_page=settings.posts_page_size,
        include_hubs=not no_hubs,
        include_authors=not no_authors,
        include_search_index=not no_search_index,
        inject_patterns=not no_patterns,
    )
    renderer = SiteRenderer(site_url=settings.site_url)

    progress = Progress(
        TextColumn("[bold cyan]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=_console,
        transient=True,
    )
    tasks: dict[str, int] = {}

    def on_progress(stage: str, done: int, total: int) -> None:
        if stage not in tasks:
            tasks[stage] = progress.add_task(stage, total=total)
        progress.update(tasks[stage], completed=done, total=total)

    hooks = BuildHooks(
        warning=lambda message: _console.print(f"[yellow]Warning:[/yellow] {message}"),
        progress=on_progress,
    )

    async def _run():
        async with _content_client(settings) as client:
            return await build_site(source=client, request=request, renderer=renderer, hooks=hooks)

    with progress:
        result = asyncio.run(_run())

    _console.print(build_summary_panel(result))
    _console.print(f"[green]Site written to:[/green] {request.output_dir}")


@app.command()
def article(
    slug: str = typer.Argument(..., help="Post slug."),
    as_json: bool = typer.Option(False, "--json", help="Print the transformed article as JSON."),
) -> None:
    """Fetch one post and show it as the site would see it."""

    settings = AppSettings()

    async def _run():
        async with _content_client(settings) as client:
            return await client.get_post_by_slug(slug)

    post = asyncio.run(_run())
    if post is None:
        _console.print(f"[red]Post not found:[/red] {slug}")
        raise typer.Exit(code=1)

    item = transform_to_article(post)
    item.content = process_content(item.content).html

    if as_json:
        typer.echo(json.dumps(item.model_dump(mode="json"), ensure_ascii=False, indent=2))
        return
    _console.print(build_article_panel(item))


@app.command()
def slugs() -> None:
    """List every article path (/{pillar}/{cluster}/{slug}/)."""

    settings = AppSettings()

    async def _run():
        async with _content_client(settings) as client:
            return await client.get_all_post_slugs()

    paths = asyncio.run(_run())
    _console.print(build_paths_table(paths))
    _console.print(f"[dim]{len(paths)} paths[/dim]")


@app.command()
def authors() -> None:
    """List CMS authors."""

    settings = AppSettings()

    async def _run():
        async with _content_client(settings) as client:
            return await client.get_all_authors()

    _console.print(build_authors_table(asyncio.run(_run())))


@app.command()
def search(
    query: str = typer.Argument(..., help="Search terms."),
    limit: int = typer.Option(10, "--limit", min=1, max=100, help="Max results."),
) -> None:
    """Full-text search over published posts."""

    settings = AppSettings()

    async def _run():
        async with _content_client(settings) as client:
            return await client.search_posts(query, per_page=limit)

    response = asyncio.run(_run())
    articles = [transform_to_article(post) for post in response.data]
    if not articles:
        _console.print(f"[yellow]No results for:[/yellow] {query}")
        return
    _console.print(build_articles_table(articles, title=f"Search: {query}"))


def run() -> None:
    app()


if __name__ == "__main__":
    run()

"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Article, ArticlePath, AuthorSummary
from core.services.site_builder import BuildResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("CHARTSPOINT", style="bold cyan")
    subtitle = Text("WordPress (GraphQL) → sitio estático", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_articles_table(articles: Iterable[Article], *, title: str = "Articles") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Pillar", style="cyan", no_wrap=True)
    table.add_column("Cluster", style="cyan", no_wrap=True)
    table.add_column("URL", style="magenta")
    for article in articles:
        table.add_row(str(article.id), article.title, article.pillar, article.cluster, article.url)
    return table


def build_paths_table(paths: Iterable[ArticlePath]) -> Table:
    table = Table(title="Article paths")
    table.add_column("Pillar", style="cyan", no_wrap=True)
    table.add_column("Cluster", style="cyan", no_wrap=True)
    table.add_column("Slug", style="white")
    table.add_column("URL", style="magenta")
    for path in paths:
        table.add_row(path.pillar, path.cluster, path.slug, path.url)
    return table


def build_authors_table(authors: Iterable[AuthorSummary]) -> Table:
    table = Table(title="Authors")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Slug", style="cyan")
    table.add_column("Name", style="white")
    for author in authors:
        table.add_row(str(author.database_id), author.slug, author.name)
    return table


def build_article_panel(article: Article) -> Panel:
    """Resumen de un artículo ya transformado."""

    body = Text()
    body.append(f"{article.url}\n", style="magenta")
    body.append(f"Author: {article.author.name}\n")
    body.append(f"Words: {article.word_count} · Reading time: {article.reading_time} min\n")
    body.append(f"Expertise: {article.expertise_level}\n")
    if article.seo.title:
        body.append(f"SEO title: {article.seo.title}\n", style="dim")
    if article.seo.no_index or article.seo.no_follow:
        body.append(f"Robots: {', '.join(article.seo.robots)}\n", style="yellow")
    if article.faqs:
        body.append(f"FAQs: {len(article.faqs)}\n")
    if article.excerpt:
        body.append(f"\n{article.excerpt}")
    return Panel(body, title=Text(article.title, style="bold"), border_style="cyan")


def build_summary_panel(result: BuildResult) -> Panel:
    body = Text()
    body.append(f"Articles: {len(result.articles)}\n")
    body.append(f"Files written: {len(result.pages_written)}\n")
    style = "yellow" if result.warnings else "green"
    body.append(f"Warnings: {len(result.warnings)}", style=style)
    for warning in result.warnings[:10]:
        body.append(f"\n- {warning}", style="dim")
    if len(result.warnings) > 10:
        body.append(f"\n… {len(result.warnings) - 10} more", style="dim")
    return Panel(body, title=Text("Build", style="bold green"), border_style=style)

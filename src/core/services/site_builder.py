"""Orquestación del build del sitio estático.

Este módulo concentra el flujo completo (CMS → artículos → HTML/JSON) para
que la CLI solo se ocupe de la presentación. El build es reutilizable desde
otros entry-points (tests, jobs) y deja los efectos de UI (progreso, avisos)
en callbacks opcionales.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from adapters.content_processor import process_content
from adapters.json_exporter import export_search_index
from adapters.site_renderer import SiteRenderer, write_page
from adapters.wordpress.transforms import transform_author_post_to_article, transform_to_article
from core.domain.models import Article, RelatedArticle, WPPost
from core.domain.taxonomy import CLUSTERS, PILLARS, validate_internal_links
from core.interfaces.content_source import ContentSource
from core.logging import get_logger

logger = get_logger(__name__)

SEARCH_INDEX_FILENAME = "search-index.json"
HOME_LATEST_LIMIT = 12


@dataclass
class BuildRequest:
    """Parámetros que controlan el build."""

    output_dir: Path
    per_page: int = 100
    include_hubs: bool = True
    include_authors: bool = True
    include_search_index: bool = True
    validate_links: bool = True
    inject_patterns: bool = True
    related_limit: int = 4


@dataclass
class BuildHooks:
    """Callbacks opcionales para la capa de UI (avisos, progreso)."""

    warning: Callable[[str], None] | None = None
    progress: Callable[[str, int, int], None] | None = None


@dataclass
class BuildResult:
    articles: list[Article] = field(default_factory=list)
    pages_written: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def page_path(output_dir: Path, url_path: str) -> Path:
    """`/basics/intro/x/` → `<output_dir>/basics/intro/x/index.html`."""

    parts = [p for p in url_path.strip("/").split("/") if p]
    return output_dir.joinpath(*parts, "index.html")


def related_articles_for(article: Article, articles: list[Article], limit: int) -> list[RelatedArticle]:
    """Artículos del mismo cluster (sin el propio), como máximo `limit`."""

    related: list[RelatedArticle] = []
    for other in articles:
        if len(related) >= limit:
            break
        if other.id == article.id or other.cluster != article.cluster:
            continue
        related.append(
            RelatedArticle(
                title=other.title,
                slug=other.slug,
                pillar=other.pillar,
                cluster=other.cluster,
                excerpt=other.excerpt,
                image=other.featured_image.url if other.featured_image else None,
            )
        )
    return related


async def fetch_all_posts(source: ContentSource, *, per_page: int = 100) -> list[WPPost]:
    """Recorre la conexión de posts siguiendo el `endCursor` que devuelve el CMS.

    Los posts repetidos entre páginas (mismo id) se descartan.
    """

    posts: list[WPPost] = []
    seen_ids: set[int] = set()
    seen_cursors: set[str] = set()
    cursor: str | None = None
    while True:
        page = await source.get_posts_after(cursor, per_page=per_page)
        for post in page.data:
            if post.id in seen_ids:
                continue
            seen_ids.add(post.id)
            posts.append(post)
        if not page.data or not page.has_next_page or not page.end_cursor:
            break
        if page.end_cursor in seen_cursors:
            logger.warning("CMS repeated a page cursor, stopping", extra={"cursor": page.end_cursor})
            break
        seen_cursors.add(page.end_cursor)
        cursor = page.end_cursor
    return posts


async def build_site(
    *,
    source: ContentSource,
    request: BuildRequest,
    renderer: SiteRenderer,
    hooks: BuildHooks | None = None,
) -> BuildResult:
    hooks = hooks or BuildHooks()
    result = BuildResult()
    output_dir = request.output_dir

    def warn(message: str) -> None:
        result.warnings.append(message)
        logger.warning(message)
        if hooks.warning:
            hooks.warning(message)

    def emit(path: Path, html: str) -> None:
        result.pages_written.append(write_page(path, html))

    posts = await fetch_all_posts(source, per_page=request.per_page)
    if not posts:
        warn("No posts returned by the CMS.")

    articles: list[Article] = []
    for post in posts:
        try:
            articles.append(transform_to_article(post))
        except ValidationError as exc:
            warn(f"Skipping post {post.slug}: invalid data ({exc.error_count()} errors)")
    result.articles = articles

    total = len(articles)
    for index, article in enumerate(articles, start=1):
        processed = process_content(article.content, inject_patterns=request.inject_patterns)
        article.content = processed.html
        article.related_articles = related_articles_for(article, articles, request.related_limit)

        if request.validate_links and article.internal_links:
            valid, missing = validate_internal_links(
                article.path,
                [(link.url, link.type) for link in article.internal_links],
            )
            if not valid:
                warn(f"{article.url}: missing internal links ({', '.join(missing)})")

        emit(page_path(output_dir, article.url), renderer.render_article(article, toc=processed.toc))
        if hooks.progress:
            hooks.progress("articles", index, total)

    if request.include_hubs:
        by_pillar: dict[str, list[Article]] = defaultdict(list)
        by_cluster: dict[tuple[str, str], list[Article]] = defaultdict(list)
        for article in articles:
            by_pillar[article.pillar].append(article)
            by_cluster[(article.pillar, article.cluster)].append(article)

        for pillar in PILLARS:
            emit(page_path(output_dir, f"/{pillar}/"), renderer.render_pillar(pillar, by_pillar[pillar]))
        for cluster in CLUSTERS:
            emit(
                page_path(output_dir, f"/{cluster.pillar}/{cluster.slug}/"),
                renderer.render_cluster(cluster.pillar, cluster.slug, by_cluster[(cluster.pillar, cluster.slug)]),
            )

    if request.include_authors:
        summaries = await source.get_all_authors()
        for index, summary in enumerate(summaries, start=1):
            author = await source.get_author_by_slug(summary.slug)
            if author is None:
                warn(f"Author not found: {summary.slug}")
                continue
            cards = [transform_author_post_to_article(post, author) for post in author.posts]
            emit(page_path(output_dir, f"/author/{author.slug}/"), renderer.render_author(author, cards))
            if hooks.progress:
                hooks.progress("authors", index, len(summaries))

    latest = sorted(articles, key=lambda a: a.publish_date, reverse=True)[:HOME_LATEST_LIMIT]
    emit(output_dir / "index.html", renderer.render_index(latest))

    if request.include_search_index:
        result.pages_written.append(
            export_search_index(articles=articles, output_path=output_dir / SEARCH_INDEX_FILENAME)
        )

    logger.info(
        "Site build finished",
        extra={"articles": len(articles), "files": len(result.pages_written), "warnings": len(result.warnings)},
    )
    return result

"""Render HTML del sitio estático (Jinja2).

Por qué está en adapters:
- Las plantillas y el sistema de ficheros son detalles de infraestructura.
- El Core solo entrega `Article`, migas de pan e índice de contenidos.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from jinja2 import Environment

from adapters.templating import get_env
from core.domain.models import Article, BreadcrumbItem, TocItem, WPAuthor
from core.domain.taxonomy import (
    CLUSTER_NAMES_AR,
    PILLAR_DESCRIPTIONS_AR,
    PILLAR_NAMES_AR,
    build_navigation,
    get_breadcrumb_path,
    get_clusters_by_pillar,
)

SITE_NAME = "تشارتس بوينت"
SITE_DESCRIPTION = "منصة عربية لتعلم التحليل الفني"


class SiteRenderer:
    """Convierte view models en páginas HTML completas (RTL, árabe)."""

    def __init__(self, *, site_url: str, env: Environment | None = None) -> None:
        self._site_url = site_url.rstrip("/")
        self._env = env or get_env()
        self._navigation = build_navigation()

    def absolute_url(self, path: str) -> str:
        return f"{self._site_url}{path}"

    def _render(self, template_name: str, **context: Any) -> str:
        template = self._env.get_template(template_name)
        return template.render(
            site_name=SITE_NAME,
            site_url=self._site_url,
            navigation=self._navigation,
            generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
            **context,
        )

    def render_article(
        self,
        article: Article,
        *,
        toc: Sequence[TocItem] = (),
        breadcrumbs: Sequence[BreadcrumbItem] | None = None,
    ) -> str:
        if breadcrumbs is None:
            breadcrumbs = get_breadcrumb_path(article.pillar, article.cluster, article.title)
        return self._render(
            "article.html",
            article=article,
            toc=list(toc),
            breadcrumbs=list(breadcrumbs),
            page_title=article.seo.title or article.title,
            description=article.seo.description or article.excerpt,
            canonical=article.seo.canonical or self.absolute_url(article.url),
        )

    def render_listing(
        self,
        *,
        title: str,
        description: str,
        path: str,
        articles: Sequence[Article],
        breadcrumbs: Sequence[BreadcrumbItem],
        sections: Sequence[tuple[str, str]] = (),
    ) -> str:
        """Página hub genérica; `sections` son pares `(label, href)` de sub-hubs."""

        return self._render(
            "listing.html",
            page_title=title,
            description=description,
            canonical=self.absolute_url(path),
            articles=list(articles),
            breadcrumbs=list(breadcrumbs),
            sections=list(sections),
        )

    def render_pillar(self, pillar: str, articles: Sequence[Article]) -> str:
        sections = [
            (CLUSTER_NAMES_AR.get(cluster, cluster), f"/{pillar}/{cluster}/")
            for cluster in get_clusters_by_pillar(pillar)
        ]
        return self.render_listing(
            title=PILLAR_NAMES_AR.get(pillar, pillar),
            description=PILLAR_DESCRIPTIONS_AR.get(pillar, ""),
            path=f"/{pillar}/",
            articles=articles,
            breadcrumbs=get_breadcrumb_path(pillar),
            sections=sections,
        )

    def render_cluster(self, pillar: str, cluster: str, articles: Sequence[Article]) -> str:
        return self.render_listing(
            title=CLUSTER_NAMES_AR.get(cluster, cluster),
            description=PILLAR_NAMES_AR.get(pillar, pillar),
            path=f"/{pillar}/{cluster}/",
            articles=articles,
            breadcrumbs=get_breadcrumb_path(pillar, cluster),
        )

    def render_author(self, author: WPAuthor, articles: Sequence[Article]) -> str:
        return self._render(
            "author.html",
            author=author,
            articles=list(articles),
            page_title=author.name or author.slug,
            description=author.description,
            canonical=self.absolute_url(f"/author/{author.slug}/"),
        )

    def render_index(self, articles: Sequence[Article]) -> str:
        return self._render(
            "index.html",
            articles=list(articles),
            page_title=SITE_NAME,
            description=SITE_DESCRIPTION,
            canonical=self.absolute_url("/"),
        )


def write_page(path: Path, html: str) -> Path:
    """Escribe una página UTF-8 creando los directorios necesarios."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path

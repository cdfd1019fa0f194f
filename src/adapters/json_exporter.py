"""Exportación JSON de artículos.

Por qué JSON:
- El buscador del sitio estático carga `search-index.json` en el cliente.
- Permite inspeccionar un artículo ya transformado sin pasar por el render.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from core.domain.models import Article


def _write_json(payload: Any, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path


def search_index_entry(article: Article) -> dict[str, Any]:
    return {
        "id": article.id,
        "title": article.title,
        "slug": article.slug,
        "url": article.url,
        "pillar": article.pillar,
        "cluster": article.cluster,
        "excerpt": article.excerpt,
        "image": article.featured_image.url if article.featured_image else None,
        "author": article.author.name,
        "reading_time": article.reading_time,
        "publish_date": article.publish_date,
    }


def export_search_index(*, articles: Iterable[Article], output_path: Path) -> Path:
    """Escribe las tarjetas de artículos ordenadas por URL (salida estable)."""

    entries = sorted((search_index_entry(a) for a in articles), key=lambda e: e["url"])
    return _write_json(entries, output_path)


def export_article_json(*, article: Article, output_path: Path) -> Path:
    """Exporta un `Article` a JSON UTF-8 con formato estable."""

    return _write_json(article.model_dump(mode="json"), output_path)

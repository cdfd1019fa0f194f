"""Contrato de la fuente de contenido.

Por qué Protocol:
- El build del sitio solo necesita "dame posts/autores"; el cliente WordPress
  real y los stubs de tests son intercambiables sin herencia.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import AuthorSummary, CursorPage, Paginated, WPAuthor, WPPost


@runtime_checkable
class ContentSource(Protocol):
    """Contrato mínimo que consume `core.services.site_builder`.

    Reglas de diseño:
    - Métodos asíncronos: típicamente harán I/O (HTTP).
    - Nunca lanzan por fallos del CMS; devuelven resultados vacíos.
    """

    async def get_all_posts(self, per_page: int = 100, page: int = 1) -> Paginated[WPPost]:
        ...

    async def get_posts_after(self, after: str | None = None, per_page: int = 100) -> CursorPage[WPPost]:
        """Página de posts tras el cursor `after` (el `endCursor` de la anterior)."""
        ...

    async def get_all_authors(self) -> list[AuthorSummary]:
        ...

    async def get_author_by_slug(self, slug: str) -> WPAuthor | None:
        ...

"""API de contenido del sitio sobre WPGraphQL.

Cada operación pública:
- ejecuta su query a través de `GraphQLClient` (caché + JWT),
- transforma el payload a modelos del dominio,
- ante cualquier fallo del CMS registra el error y devuelve un resultado
  vacío (`Paginated.empty()`, `None`, `[]`, `{}`): una página sin datos es
  preferible a romper el build completo.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.wordpress import queries
from adapters.wordpress.errors import WordPressError
from adapters.wordpress.graphql_client import GraphQLClient
from adapters.wordpress.transforms import (
    transform_gql_author,
    transform_gql_category,
    transform_gql_comment,
    transform_gql_page,
    transform_gql_post,
)
from core.config import AppSettings
from core.domain.models import (
    ArticlePath,
    AuthorSummary,
    CursorPage,
    Paginated,
    Pagination,
    WPAuthor,
    WPCategory,
    WPComment,
    WPPage,
    WPPost,
)
from core.domain.taxonomy import (
    CLUSTER_CATEGORY_IDS,
    PILLAR_CATEGORY_IDS,
    get_cluster_ids_for_pillar,
    resolve_pillar_cluster,
)
from core.logging import get_logger

logger = get_logger(__name__)

_CMS_ERRORS = (WordPressError, httpx.HTTPError)


class WordPressClient:
    """Fuente de contenido WordPress (implementa `ContentSource`)."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        graphql: GraphQLClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._graphql = graphql or GraphQLClient(self._settings)
        self._post_fields = queries.post_fields(
            acf=self._settings.acf_enabled,
            seo=self._settings.seo_enabled,
        )

    async def __aenter__(self) -> "WordPressClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._graphql.aclose()

    def clear_cache(self, key: str | None = None) -> None:
        self._graphql.clear_cache(key)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _to_post(self, node: dict[str, Any]) -> WPPost:
        return transform_gql_post(node, cms_base_url=self._settings.cms_base_url)

    def _paginate_posts(self, data: dict[str, Any], page: int) -> Paginated[WPPost]:
        connection = data.get("posts") or {}
        posts = [self._to_post(n) for n in connection.get("nodes") or [] if isinstance(n, dict)]
        has_next = bool((connection.get("pageInfo") or {}).get("hasNextPage"))
        return Paginated[WPPost](
            data=posts,
            pagination=Pagination(total_items=len(posts), total_pages=page + 1 if has_next else page),
        )

    async def _fetch_posts(
        self,
        query: str,
        variables: dict[str, Any],
        *,
        per_page: int,
        page: int,
        context: dict[str, Any],
    ) -> Paginated[WPPost]:
        variables = {
            **variables,
            "first": per_page,
            "after": queries.offset_cursor(page, per_page),
        }
        try:
            data = await self._graphql.execute(query, variables)
        except _CMS_ERRORS:
            logger.exception("Error fetching posts", extra=context)
            return Paginated[WPPost].empty()
        return self._paginate_posts(data, page)

    # ------------------------------------------------------------------
    # posts
    # ------------------------------------------------------------------

    async def get_all_posts(self, per_page: int = 100, page: int = 1) -> Paginated[WPPost]:
        """Posts publicados, con autor, imagen y términos embebidos."""

        return await self._fetch_posts(
            queries.posts_query(self._post_fields),
            {},
            per_page=per_page,
            page=page,
            context={"page": page},
        )

    async def get_posts_by_pillar(self, pillar: str, per_page: int = 50, page: int = 1) -> Paginated[WPPost]:
        # Los posts se asignan a clusters, no al pilar padre.
        cluster_ids = get_cluster_ids_for_pillar(pillar)
        if not cluster_ids:
            logger.error("No clusters found for pillar", extra={"pillar": pillar})
            return Paginated[WPPost].empty()

        return await self._fetch_posts(
            queries.posts_by_categories_query(self._post_fields),
            {"categoryIn": [str(cid) for cid in cluster_ids]},
            per_page=per_page,
            page=page,
            context={"pillar": pillar},
        )

    async def get_posts_by_cluster(self, cluster: str, per_page: int = 20, page: int = 1) -> Paginated[WPPost]:
        category_id = CLUSTER_CATEGORY_IDS.get(cluster)
        if not category_id:
            logger.error("Unknown cluster", extra={"cluster": cluster})
            return Paginated[WPPost].empty()

        return await self._fetch_posts(
            queries.posts_by_category_query(self._post_fields),
            {"categoryId": category_id},
            per_page=per_page,
            page=page,
            context={"cluster": cluster},
        )

    async def get_post_by_slug(self, slug: str) -> WPPost | None:
        try:
            data = await self._graphql.execute(queries.post_by_slug_query(self._post_fields), {"slug": slug})
        except _CMS_ERRORS:
            logger.exception("Error fetching post", extra={"slug": slug})
            return None

        node = data.get("post")
        if not isinstance(node, dict):
            return None
        return self._to_post(node)

    async def get_posts_after(self, after: str | None = None, per_page: int = 100) -> CursorPage[WPPost]:
        """Una página de posts tras el cursor `after`, con el `endCursor` del servidor."""

        try:
            data = await self._graphql.execute(
                queries.posts_query(self._post_fields),
                {"first": per_page, "after": after},
            )
        except _CMS_ERRORS:
            logger.exception("Error fetching posts", extra={"after": after})
            return CursorPage[WPPost]()

        connection = data.get("posts") or {}
        page_info = connection.get("pageInfo") or {}
        end_cursor = page_info.get("endCursor")
        return CursorPage[WPPost](
            data=[self._to_post(n) for n in connection.get("nodes") or [] if isinstance(n, dict)],
            has_next_page=bool(page_info.get("hasNextPage")),
            end_cursor=end_cursor if isinstance(end_cursor, str) else None,
        )

    async def get_all_post_slugs(self) -> list[ArticlePath]:
        """Recorre todas las páginas por cursor y devuelve las rutas de artículo."""

        paths: list[ArticlePath] = []
        cursor: str | None = None
        while True:
            page = await self.get_posts_after(cursor, per_page=self._settings.posts_page_size)
            for post in page.data:
                pillar, cluster = resolve_pillar_cluster((c.id, c.slug) for c in post.embedded.categories)
                paths.append(ArticlePath(pillar=pillar, cluster=cluster, slug=post.slug))
            if not page.has_next_page or not page.end_cursor:
                break
            cursor = page.end_cursor
        return paths

    async def get_related_posts(self, post_id: int, cluster: str, limit: int = 4) -> list[WPPost]:
        response = await self.get_posts_by_cluster(cluster, per_page=limit + 1)
        return [p for p in response.data if p.id != post_id][:limit]

    async def search_posts(self, query: str, per_page: int = 10, page: int = 1) -> Paginated[WPPost]:
        return await self._fetch_posts(
            queries.search_posts_query(self._post_fields),
            {"search": query},
            per_page=per_page,
            page=page,
            context={"search": query},
        )

    # ------------------------------------------------------------------
    # categories
    # ------------------------------------------------------------------

    async def get_all_categories(self) -> list[WPCategory]:
        try:
            data = await self._graphql.execute(queries.CATEGORIES_QUERY)
        except _CMS_ERRORS:
            logger.exception("Error fetching categories")
            return []

        nodes = (data.get("categories") or {}).get("nodes") or []
        return [
            transform_gql_category(n, cms_base_url=self._settings.cms_base_url)
            for n in nodes
            if isinstance(n, dict)
        ]

    async def get_category_by_slug(self, slug: str) -> WPCategory | None:
        try:
            data = await self._graphql.execute(queries.CATEGORY_BY_SLUG_QUERY, {"slug": slug})
        except _CMS_ERRORS:
            logger.exception("Error fetching category", extra={"slug": slug})
            return None

        node = data.get("category")
        if not isinstance(node, dict):
            return None
        return transform_gql_category(node, cms_base_url=self._settings.cms_base_url)

    async def get_child_categories(self, parent_id: int) -> list[WPCategory]:
        return [c for c in await self.get_all_categories() if c.parent == parent_id]

    async def get_categories_hierarchy(self) -> dict[str, tuple[WPCategory, list[WPCategory]]]:
        """`{pillar_slug: (categoría pilar, [categorías cluster])}` para los pilares presentes."""

        categories = await self.get_all_categories()
        by_id = {c.id: c for c in categories}
        hierarchy: dict[str, tuple[WPCategory, list[WPCategory]]] = {}
        for pillar_slug, pillar_id in PILLAR_CATEGORY_IDS.items():
            pillar_category = by_id.get(pillar_id)
            if pillar_category is None:
                continue
            hierarchy[pillar_slug] = (pillar_category, [c for c in categories if c.parent == pillar_id])
        return hierarchy

    # ------------------------------------------------------------------
    # pages / comments
    # ------------------------------------------------------------------

    async def get_page_by_slug(self, slug: str) -> WPPage | None:
        try:
            data = await self._graphql.execute(
                queries.page_by_uri_query(seo=self._settings.seo_enabled),
                {"slug": slug},
            )
        except _CMS_ERRORS:
            logger.exception("Error fetching page", extra={"slug": slug})
            return None

        node = data.get("page")
        if not isinstance(node, dict):
            return None
        return transform_gql_page(node, cms_base_url=self._settings.cms_base_url)

    async def get_comments_by_post(self, post_id: int, per_page: int = 50, page: int = 1) -> Paginated[WPComment]:
        variables = {
            "postId": str(post_id),
            "first": per_page,
            "after": queries.offset_cursor(page, per_page),
        }
        try:
            data = await self._graphql.execute(queries.COMMENTS_BY_POST_QUERY, variables)
        except _CMS_ERRORS:
            logger.exception("Error fetching comments", extra={"post_id": post_id})
            return Paginated[WPComment].empty()

        connection = data.get("comments") or {}
        comments = [
            transform_gql_comment(n, post_id=post_id)
            for n in connection.get("nodes") or []
            if isinstance(n, dict)
        ]
        has_next = bool((connection.get("pageInfo") or {}).get("hasNextPage"))
        return Paginated[WPComment](
            data=comments,
            pagination=Pagination(total_items=len(comments), total_pages=page + 1 if has_next else page),
        )

    # ------------------------------------------------------------------
    # authors
    # ------------------------------------------------------------------

    async def get_author_by_slug(self, slug: str) -> WPAuthor | None:
        try:
            data = await self._graphql.execute(queries.AUTHOR_BY_SLUG_QUERY, {"slug": slug})
        except _CMS_ERRORS:
            logger.exception("Error fetching author", extra={"slug": slug})
            return None

        node = data.get("user")
        if not isinstance(node, dict):
            return None
        return transform_gql_author(node)

    async def get_all_authors(self) -> list[AuthorSummary]:
        try:
            data = await self._graphql.execute(queries.ALL_AUTHORS_QUERY)
        except _CMS_ERRORS:
            logger.exception("Error fetching all authors")
            return []

        nodes = (data.get("users") or {}).get("nodes") or []
        return [
            AuthorSummary(
                slug=str(n.get("slug") or ""),
                name=str(n.get("name") or ""),
                database_id=int(n.get("databaseId") or 0),
            )
            for n in nodes
            if isinstance(n, dict) and n.get("slug")
        ]

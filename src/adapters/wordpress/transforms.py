"""Transformaciones payload GraphQL -> modelos del dominio.

Dos etapas:
1. Nodo WPGraphQL (dict crudo) -> forma REST (`WPPost`, `WPPage`, ...). Se
   mantiene la forma REST porque es la que conocen plantillas y exportadores.
2. `WPPost` / `WPAuthorPost` -> `Article`, el view model del sitio.

Los campos ausentes o `null` se sustituyen por defaults; aquí no se lanza
por payloads incompletos.
"""

from __future__ import annotations

import json
from typing import Any

from core.domain.models import (
    DEFAULT_AUTHOR_NAME,
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    AcfEeat,
    AcfFaqItem,
    AcfInternalLink,
    Article,
    ArticleAuthor,
    ArticleMeta,
    ArticleSeo,
    AuthorPostCategory,
    AuthorPostImage,
    AvatarUrls,
    Eeat,
    Embedded,
    EmbeddedAuthor,
    EmbeddedMedia,
    Faq,
    FeaturedImage,
    InternalLink,
    MediaDetails,
    OgImage,
    RenderedContent,
    SeoHead,
    WPAuthor,
    WPAuthorPost,
    WPCategory,
    WPComment,
    WPPage,
    WPPost,
    WPTag,
)
from core.domain.taxonomy import resolve_pillar_cluster
from core.logging import get_logger
from core.text import (
    decode_html_entities,
    downgrade_h1,
    estimate_reading_time,
    estimate_word_count,
    strip_html_tags,
)

logger = get_logger(__name__)

_EXPERTISE_LEVELS = ("beginner", "intermediate", "advanced")
_LINK_TYPES = ("pillar", "cluster", "sibling", "child")
AUTHOR_POST_READING_TIME = 5


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _nodes(connection: Any) -> list[dict[str, Any]]:
    nodes = _dict(connection).get("nodes")
    if not isinstance(nodes, list):
        return []
    return [n for n in nodes if isinstance(n, dict)]


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return default


def _positive_int(value: Any) -> int | None:
    number = _int(value)
    return number if number > 0 else None


def _image_node(node: dict[str, Any]) -> dict[str, Any] | None:
    image = _dict(_dict(node.get("featuredImage")).get("node"))
    if not image.get("sourceUrl"):
        return None
    return image


def _image_size(image: dict[str, Any]) -> tuple[int, int]:
    details = _dict(image.get("mediaDetails"))
    return (
        _int(details.get("width")) or DEFAULT_IMAGE_WIDTH,
        _int(details.get("height")) or DEFAULT_IMAGE_HEIGHT,
    )


def _featured_media(image: dict[str, Any], *, title: str, date: str) -> EmbeddedMedia:
    width, height = _image_size(image)
    source_url = _str(image.get("sourceUrl"))
    return EmbeddedMedia(
        id=1,
        date=date,
        link=source_url,
        title=RenderedContent(rendered=title),
        alt_text=_str(image.get("altText")) or title,
        media_details=MediaDetails(width=width, height=height),
        source_url=source_url,
    )


def _first_choice(value: Any, allowed: tuple[str, ...]) -> str | None:
    # ACF devuelve los "select" como string o como lista de un elemento.
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, str) and value in allowed:
        return value
    return None


def transform_acf(node: dict[str, Any]) -> ArticleMeta | None:
    """Mapea los grupos ACF de WPGraphQL (`acfArticleMeta`, `acfFaq`, ...)."""

    keys = ("acfArticleMeta", "acfFaq", "acfInternalLinks", "acfEeat")
    if not any(isinstance(node.get(k), dict) for k in keys):
        return None

    meta = _dict(node.get("acfArticleMeta"))
    faq_items = [
        AcfFaqItem(question=_str(item.get("question")), answer=_str(item.get("answer")))
        for item in _dict(node.get("acfFaq")).get("faqItems") or []
        if isinstance(item, dict)
    ]
    links = [
        AcfInternalLink(
            url=_str(link.get("url")),
            anchor_text=_str(link.get("anchorText")),
            link_type=_first_choice(link.get("linkType"), _LINK_TYPES) or "sibling",
        )
        for link in _dict(node.get("acfInternalLinks")).get("links") or []
        if isinstance(link, dict) and link.get("url")
    ]
    eeat_node = node.get("acfEeat")
    eeat = None
    if isinstance(eeat_node, dict):
        eeat = AcfEeat(
            author_expertise=_str(eeat_node.get("authorExpertise")),
            credentials=_str(eeat_node.get("credentials")),
            review_process=_str(eeat_node.get("reviewProcess")),
            sources_methodology=_str(eeat_node.get("sourceMethodology")),
        )

    return ArticleMeta(
        word_count=_positive_int(meta.get("wordCount")),
        reading_time=_positive_int(meta.get("readingTime")),
        primary_keyword=_str(meta.get("primaryKeyword")) or None,
        expertise_level=_first_choice(meta.get("expertiseLevel"), _EXPERTISE_LEVELS),
        internal_links=links or None,
        faq_items=faq_items or None,
        eeat=eeat,
    )


def transform_seo(node: dict[str, Any], *, fallback_title: str = "") -> SeoHead | None:
    """Mapea el bloque `seo` (Rank Math) a la forma `yoast_head_json`."""

    seo = node.get("seo")
    if not isinstance(seo, dict):
        return None

    title = _str(seo.get("title")) or fallback_title
    description = _str(seo.get("metaDesc"))
    og_url = _str(_dict(seo.get("opengraphImage")).get("sourceUrl"))

    robots_raw = seo.get("robots")
    if isinstance(robots_raw, str):
        robots = [r.strip() for r in robots_raw.split(",") if r.strip()]
    elif isinstance(robots_raw, list):
        robots = [r for r in robots_raw if isinstance(r, str)]
    else:
        robots = None

    schema = None
    raw_schema = _dict(seo.get("schema")).get("raw")
    if isinstance(raw_schema, str) and raw_schema.strip():
        try:
            parsed = json.loads(raw_schema)
        except ValueError:
            logger.warning("Invalid JSON-LD schema in SEO payload", extra={"slug": node.get("slug")})
        else:
            if isinstance(parsed, dict):
                schema = parsed

    return SeoHead(
        title=title,
        description=description,
        canonical=_str(seo.get("canonical")),
        og_title=title,
        og_description=description,
        og_image=[OgImage(url=og_url)] if og_url else None,
        schema_=schema,
        robots=robots,
    )


def transform_gql_category(node: dict[str, Any], *, cms_base_url: str) -> WPCategory:
    slug = _str(node.get("slug"))
    return WPCategory(
        id=_int(node.get("databaseId")),
        count=_int(node.get("count")),
        description=_str(node.get("description")),
        link=f"{cms_base_url.rstrip('/')}/category/{slug}",
        name=_str(node.get("name")),
        slug=slug,
        parent=_int(node.get("parentDatabaseId")),
    )


def transform_gql_post(node: dict[str, Any], *, cms_base_url: str) -> WPPost:
    """Nodo `Post` de WPGraphQL -> `WPPost` (forma REST con `_embedded`)."""

    slug = _str(node.get("slug"))
    title = _str(node.get("title"))
    date = _str(node.get("date"))
    modified = _str(node.get("modified"))
    categories = _nodes(node.get("categories"))
    tags = _nodes(node.get("tags"))

    author_node = _dict(_dict(node.get("author")).get("node"))
    author_id = _int(author_node.get("databaseId")) or 1
    avatar = _str(_dict(author_node.get("avatar")).get("url"))

    image = _image_node(node)

    embedded = Embedded(
        author=[
            EmbeddedAuthor(
                id=author_id,
                name=_str(author_node.get("name")) or DEFAULT_AUTHOR_NAME,
                description=_str(author_node.get("description")),
                slug=_str(author_node.get("slug")),
                avatar_urls=AvatarUrls.uniform(avatar),
            )
        ],
        featured_media=[_featured_media(image, title=title, date=date)] if image else None,
        categories=[
            WPCategory(
                id=_int(c.get("databaseId")),
                name=_str(c.get("name")),
                slug=_str(c.get("slug")),
                parent=_int(c.get("parentDatabaseId")),
            )
            for c in categories
        ],
        tags=[
            WPTag(id=_int(t.get("databaseId")), name=_str(t.get("name")), slug=_str(t.get("slug")))
            for t in tags
        ],
    )

    return WPPost(
        id=_int(node.get("databaseId")),
        date=date,
        date_gmt=date,
        modified=modified,
        modified_gmt=modified,
        slug=slug,
        status="publish",
        link=f"{cms_base_url.rstrip('/')}/{slug}",
        title=RenderedContent(rendered=title),
        content=RenderedContent(rendered=_str(node.get("content"))),
        excerpt=RenderedContent(rendered=_str(node.get("excerpt"))),
        author=author_id,
        featured_media=1 if image else 0,
        categories=[c.id for c in embedded.categories],
        tags=[t.id for t in embedded.tags],
        embedded=embedded,
        acf=transform_acf(node),
        seo_head=transform_seo(node, fallback_title=title),
    )


def transform_gql_page(node: dict[str, Any], *, cms_base_url: str) -> WPPage:
    slug = _str(node.get("slug"))
    title = _str(node.get("title"))
    date = _str(node.get("date"))
    modified = _str(node.get("modified"))
    image = _image_node(node)

    return WPPage(
        id=_int(node.get("databaseId")),
        date=date,
        date_gmt=date,
        modified=modified,
        modified_gmt=modified,
        slug=slug,
        link=f"{cms_base_url.rstrip('/')}/{slug}",
        title=RenderedContent(rendered=title),
        content=RenderedContent(rendered=_str(node.get("content"))),
        featured_media=1 if image else 0,
        embedded=Embedded(featured_media=[_featured_media(image, title=title, date=date)]) if image else None,
        seo_head=transform_seo(node, fallback_title=title),
    )


def transform_gql_comment(node: dict[str, Any], *, post_id: int) -> WPComment:
    author = _dict(_dict(node.get("author")).get("node"))
    avatar = _str(_dict(author.get("avatar")).get("url"))
    date = _str(node.get("date"))
    return WPComment(
        id=_int(node.get("databaseId")),
        post=post_id,
        parent=_int(node.get("parentDatabaseId")),
        author_name=_str(author.get("name")) or "مجهول",
        date=date,
        date_gmt=date,
        content=RenderedContent(rendered=_str(node.get("content"))),
        author_avatar_urls=AvatarUrls.uniform(avatar),
    )


def transform_gql_author_post(node: dict[str, Any]) -> WPAuthorPost:
    image = _image_node(node)
    featured = None
    if image:
        width, height = _image_size(image)
        featured = AuthorPostImage(
            source_url=_str(image.get("sourceUrl")),
            alt_text=_str(image.get("altText")),
            width=width,
            height=height,
        )
    return WPAuthorPost(
        id=_str(node.get("id")),
        database_id=_int(node.get("databaseId")),
        title=_str(node.get("title")),
        slug=_str(node.get("slug")),
        excerpt=_str(node.get("excerpt")),
        date=_str(node.get("date")),
        categories=[
            AuthorPostCategory(
                database_id=_int(c.get("databaseId")),
                slug=_str(c.get("slug")),
                name=_str(c.get("name")),
                parent_database_id=_int(c.get("parentDatabaseId")) or None,
            )
            for c in _nodes(node.get("categories"))
        ],
        featured_image=featured,
    )


def transform_gql_author(node: dict[str, Any]) -> WPAuthor:
    url = node.get("url")
    return WPAuthor(
        id=_str(node.get("id")),
        database_id=_int(node.get("databaseId")),
        name=_str(node.get("name")),
        slug=_str(node.get("slug")),
        description=_str(node.get("description")),
        avatar_url=_str(_dict(node.get("avatar")).get("url")),
        url=url if isinstance(url, str) else None,
        posts=[transform_gql_author_post(p) for p in _nodes(node.get("posts"))],
    )


def _article_seo(post: WPPost) -> ArticleSeo:
    # Rank Math es la única fuente: sin fallback a título/extracto/imagen.
    head = post.seo_head
    if head is None:
        return ArticleSeo()

    robots = list(head.robots or [])
    return ArticleSeo(
        title=head.title,
        description=head.description,
        canonical=head.canonical,
        og_image=head.og_image[0].url if head.og_image else "",
        schema_ld=json.dumps(head.schema_, ensure_ascii=False) if head.schema_ else None,
        robots=robots,
        no_index="noindex" in robots,
        no_follow="nofollow" in robots,
    )


def transform_to_article(post: WPPost) -> Article:
    """`WPPost` -> `Article` (view model completo de la página de artículo)."""

    pillar, cluster = resolve_pillar_cluster((c.id, c.slug) for c in post.embedded.categories)

    author = post.embedded.author[0] if post.embedded.author else None
    media = post.embedded.featured_media[0] if post.embedded.featured_media else None
    featured_image = None
    if media is not None:
        featured_image = FeaturedImage(
            url=media.source_url,
            alt=media.alt_text or post.title.rendered,
            width=media.media_details.width or DEFAULT_IMAGE_WIDTH,
            height=media.media_details.height or DEFAULT_IMAGE_HEIGHT,
        )

    acf = post.acf or ArticleMeta()
    word_count = acf.word_count or estimate_word_count(strip_html_tags(post.content.rendered))
    reading_time = acf.reading_time or estimate_reading_time(word_count)

    eeat = None
    if acf.eeat is not None:
        eeat = Eeat(
            author_expertise=acf.eeat.author_expertise,
            credentials=acf.eeat.credentials,
            review_process=acf.eeat.review_process,
            sources=acf.eeat.sources_methodology,
        )

    return Article(
        id=post.id,
        title=decode_html_entities(post.title.rendered),
        slug=post.slug,
        pillar=pillar,
        cluster=cluster,
        excerpt=strip_html_tags(post.excerpt.rendered),
        content=downgrade_h1(post.content.rendered),
        featured_image=featured_image,
        author=ArticleAuthor(
            name=(author.name if author else "") or DEFAULT_AUTHOR_NAME,
            bio=author.description if author else "",
            avatar=author.avatar_urls.large if author else "",
            slug=author.slug if author else "",
        ),
        publish_date=post.date,
        modified_date=post.modified,
        word_count=word_count,
        reading_time=reading_time,
        expertise_level=acf.expertise_level or "beginner",
        seo=_article_seo(post),
        faqs=[Faq(question=f.question, answer=f.answer) for f in acf.faq_items or []],
        related_articles=[],
        internal_links=[
            InternalLink(url=link.url, anchor_text=link.anchor_text, type=link.link_type)
            for link in acf.internal_links or []
        ],
        eeat=eeat,
    )


def transform_author_post_to_article(post: WPAuthorPost, author: WPAuthor) -> Article:
    """Versión "tarjeta" de un post del autor: sin contenido ni SEO."""

    pillar, cluster = resolve_pillar_cluster((c.database_id, c.slug) for c in post.categories)

    featured_image = None
    if post.featured_image is not None:
        featured_image = FeaturedImage(
            url=post.featured_image.source_url,
            alt=post.featured_image.alt_text or post.title,
            width=post.featured_image.width,
            height=post.featured_image.height,
        )

    return Article(
        id=post.database_id,
        title=decode_html_entities(post.title),
        slug=post.slug,
        pillar=pillar,
        cluster=cluster,
        excerpt=strip_html_tags(post.excerpt),
        content="",
        featured_image=featured_image,
        author=ArticleAuthor(
            name=author.name,
            bio=author.description,
            avatar=author.avatar_url,
            slug=author.slug,
        ),
        publish_date=post.date,
        modified_date=post.date,
        word_count=0,
        reading_time=AUTHOR_POST_READING_TIME,
        expertise_level="beginner",
    )

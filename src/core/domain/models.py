"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los payloads del CMS son heterogéneos (posts, páginas, autores,
  comentarios); aquí se fija una única forma con defaults explícitos.
- Facilita la serialización estable para el render y el índice de búsqueda.

Nota:
- Los modelos `WP*` reflejan la forma REST de WordPress que consume el sitio;
  `Article` es el view model que reciben las plantillas.
"""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

PillarSlug = Literal["basics", "indicators", "tools", "tactics"]
ExpertiseLevel = Literal["beginner", "intermediate", "advanced"]
LinkType = Literal["pillar", "cluster", "sibling", "child"]

DEFAULT_AUTHOR_NAME = "فريق تشارتس بوينت"
DEFAULT_IMAGE_WIDTH = 1200
DEFAULT_IMAGE_HEIGHT = 630

T = TypeVar("T")


class _WPModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# ---------------------------------------------------------------------------
# Estructura de contenido
# ---------------------------------------------------------------------------


class Pillar(BaseModel):
    """Categoría de primer nivel del sitio."""

    model_config = ConfigDict(frozen=True)

    slug: str
    name_ar: str
    name_en: str
    description: str
    color: str
    icon: str


class Cluster(BaseModel):
    """Subcategoría dentro de un pilar."""

    model_config = ConfigDict(frozen=True)

    slug: str
    name_ar: str
    pillar: str


class ArticlePath(BaseModel):
    """Ruta canónica `/{pillar}/{cluster}/{slug}`."""

    pillar: str
    cluster: str
    slug: str

    @property
    def url(self) -> str:
        return f"/{self.pillar}/{self.cluster}/{self.slug}/"


# ---------------------------------------------------------------------------
# Forma REST de WordPress
# ---------------------------------------------------------------------------


class RenderedContent(_WPModel):
    rendered: str = ""
    protected: bool | None = None


class MediaSize(_WPModel):
    file: str = ""
    width: int = 0
    height: int = 0
    mime_type: str = ""
    source_url: str = ""


class MediaDetails(_WPModel):
    width: int = DEFAULT_IMAGE_WIDTH
    height: int = DEFAULT_IMAGE_HEIGHT
    file: str = ""
    sizes: dict[str, MediaSize] = Field(default_factory=dict)


class EmbeddedMedia(_WPModel):
    id: int = 0
    date: str = ""
    slug: str = ""
    type: str = "attachment"
    link: str = ""
    title: RenderedContent = Field(default_factory=RenderedContent)
    author: int = 1
    caption: RenderedContent = Field(default_factory=RenderedContent)
    alt_text: str = ""
    media_type: str = "image"
    mime_type: str = "image/jpeg"
    media_details: MediaDetails = Field(default_factory=MediaDetails)
    source_url: str = ""


class AvatarUrls(_WPModel):
    """Avatares por tamaño; WordPress usa las claves '24', '48' y '96'."""

    small: str = Field(default="", alias="24")
    medium: str = Field(default="", alias="48")
    large: str = Field(default="", alias="96")

    @classmethod
    def uniform(cls, url: str) -> "AvatarUrls":
        return cls(small=url, medium=url, large=url)


class EmbeddedAuthor(_WPModel):
    id: int = 1
    name: str = DEFAULT_AUTHOR_NAME
    url: str = ""
    description: str = ""
    link: str = ""
    slug: str = ""
    avatar_urls: AvatarUrls = Field(default_factory=AvatarUrls)


class WPCategory(_WPModel):
    id: int
    count: int = 0
    description: str = ""
    link: str = ""
    name: str = ""
    slug: str = ""
    taxonomy: str = "category"
    parent: int = 0
    meta: dict[str, Any] = Field(default_factory=dict)


class WPTag(_WPModel):
    id: int
    count: int = 0
    description: str = ""
    link: str = ""
    name: str = ""
    slug: str = ""
    taxonomy: str = "post_tag"
    meta: dict[str, Any] = Field(default_factory=dict)


class Embedded(_WPModel):
    author: list[EmbeddedAuthor] = Field(default_factory=list)
    featured_media: list[EmbeddedMedia] | None = Field(default=None, alias="wp:featuredmedia")
    categories: list[WPCategory] = Field(default_factory=list)
    tags: list[WPTag] = Field(default_factory=list)

    @property
    def terms(self) -> list[list[WPCategory] | list[WPTag]]:
        """Equivalente a `wp:term` de la API REST: [categorías, etiquetas]."""

        return [self.categories, self.tags]


class AcfInternalLink(_WPModel):
    url: str = ""
    anchor_text: str = ""
    placement: str = ""
    link_type: LinkType = "sibling"


class AcfFaqItem(_WPModel):
    question: str = ""
    answer: str = ""


class AcfEeat(_WPModel):
    author_expertise: str = ""
    credentials: str = ""
    review_process: str = ""
    sources_methodology: str = ""


class ArticleMeta(_WPModel):
    """Campos ACF del artículo (si WPGraphQL for ACF está instalado)."""

    word_count: int | None = None
    reading_time: int | None = None
    primary_keyword: str | None = None
    expertise_level: ExpertiseLevel | None = None
    internal_links: list[AcfInternalLink] | None = None
    faq_items: list[AcfFaqItem] | None = None
    eeat: AcfEeat | None = None


class OgImage(_WPModel):
    url: str = ""
    width: int = DEFAULT_IMAGE_WIDTH
    height: int = DEFAULT_IMAGE_HEIGHT


class SeoHead(_WPModel):
    """Campos SEO de Rank Math (única fuente de verdad para SEO)."""

    title: str = ""
    description: str = ""
    canonical: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: list[OgImage] | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")
    robots: list[str] | None = None


class WPPost(_WPModel):
    id: int
    date: str = ""
    date_gmt: str = ""
    guid: RenderedContent = Field(default_factory=RenderedContent)
    modified: str = ""
    modified_gmt: str = ""
    slug: str
    status: str = "publish"
    type: str = "post"
    link: str = ""
    title: RenderedContent = Field(default_factory=RenderedContent)
    content: RenderedContent = Field(default_factory=RenderedContent)
    excerpt: RenderedContent = Field(default_factory=RenderedContent)
    author: int = 1
    featured_media: int = 0
    comment_status: str = "open"
    ping_status: str = "open"
    sticky: bool = False
    template: str = ""
    format: str = "standard"
    meta: dict[str, Any] = Field(default_factory=dict)
    categories: list[int] = Field(default_factory=list)
    tags: list[int] = Field(default_factory=list)
    embedded: Embedded = Field(default_factory=Embedded, alias="_embedded")
    acf: ArticleMeta | None = None
    seo_head: SeoHead | None = Field(default=None, alias="yoast_head_json")


class WPPage(_WPModel):
    id: int
    date: str = ""
    date_gmt: str = ""
    guid: RenderedContent = Field(default_factory=RenderedContent)
    modified: str = ""
    modified_gmt: str = ""
    slug: str
    status: str = "publish"
    type: str = "page"
    link: str = ""
    title: RenderedContent = Field(default_factory=RenderedContent)
    content: RenderedContent = Field(default_factory=RenderedContent)
    excerpt: RenderedContent = Field(default_factory=RenderedContent)
    author: int = 1
    featured_media: int = 0
    parent: int = 0
    menu_order: int = 0
    comment_status: str = "closed"
    ping_status: str = "closed"
    template: str = ""
    meta: dict[str, Any] = Field(default_factory=dict)
    embedded: Embedded | None = Field(default=None, alias="_embedded")
    seo_head: SeoHead | None = Field(default=None, alias="yoast_head_json")


class WPComment(_WPModel):
    id: int
    post: int
    parent: int = 0
    author: int = 0
    author_name: str = "مجهول"
    author_url: str = ""
    date: str = ""
    date_gmt: str = ""
    content: RenderedContent = Field(default_factory=RenderedContent)
    link: str = ""
    status: str = "approved"
    type: str = "comment"
    author_avatar_urls: AvatarUrls = Field(default_factory=AvatarUrls)
    meta: dict[str, Any] = Field(default_factory=dict)


class Pagination(BaseModel):
    total_items: int = 0
    total_pages: int = 0


class Paginated(BaseModel, Generic[T]):
    """Respuesta paginada; vacía cuando el CMS falla."""

    data: list[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @classmethod
    def empty(cls) -> "Paginated[T]":
        return cls(data=[], pagination=Pagination(total_items=0, total_pages=0))


class CursorPage(BaseModel, Generic[T]):
    """Página de una conexión WPGraphQL con su `pageInfo`."""

    data: list[T] = Field(default_factory=list)
    has_next_page: bool = False
    end_cursor: str | None = None


class AuthorPostCategory(_WPModel):
    database_id: int = Field(..., alias="databaseId")
    slug: str = ""
    name: str = ""
    parent_database_id: int | None = Field(default=None, alias="parentDatabaseId")


class AuthorPostImage(_WPModel):
    source_url: str = ""
    alt_text: str = ""
    width: int = DEFAULT_IMAGE_WIDTH
    height: int = DEFAULT_IMAGE_HEIGHT


class WPAuthorPost(_WPModel):
    """Post simplificado para los listados de la página de autor."""

    id: str = ""
    database_id: int
    title: str = ""
    slug: str
    excerpt: str = ""
    date: str = ""
    categories: list[AuthorPostCategory] = Field(default_factory=list)
    featured_image: AuthorPostImage | None = None


class WPAuthor(_WPModel):
    id: str = ""
    database_id: int
    name: str = ""
    slug: str
    description: str = ""
    avatar_url: str = ""
    url: str | None = None
    posts: list[WPAuthorPost] = Field(default_factory=list)


class AuthorSummary(BaseModel):
    slug: str
    name: str
    database_id: int


# ---------------------------------------------------------------------------
# View models
# ---------------------------------------------------------------------------


class FeaturedImage(BaseModel):
    url: str
    alt: str = ""
    width: int = DEFAULT_IMAGE_WIDTH
    height: int = DEFAULT_IMAGE_HEIGHT


class ArticleAuthor(BaseModel):
    name: str = DEFAULT_AUTHOR_NAME
    bio: str = ""
    avatar: str = ""
    slug: str = ""


class ArticleSeo(BaseModel):
    title: str = ""
    description: str = ""
    canonical: str = ""
    og_image: str = ""
    schema_ld: str | None = None
    robots: list[str] = Field(default_factory=list)
    no_index: bool = False
    no_follow: bool = False


class Faq(BaseModel):
    question: str
    answer: str


class RelatedArticle(BaseModel):
    title: str
    slug: str
    pillar: str
    cluster: str = ""
    excerpt: str = ""
    image: str | None = None


class InternalLink(BaseModel):
    url: str
    anchor_text: str = ""
    type: LinkType = "sibling"


class Eeat(BaseModel):
    author_expertise: str = ""
    credentials: str = ""
    review_process: str = ""
    sources: str = ""


class Article(BaseModel):
    """View model único para plantillas y exportación."""

    id: int
    title: str
    slug: str
    pillar: str = Field(..., description="Slug del pilar (o 'learn' si no se pudo resolver).")
    cluster: str = Field(..., description="Slug del cluster (o 'general').")
    excerpt: str = ""
    content: str = ""
    featured_image: FeaturedImage | None = None
    author: ArticleAuthor = Field(default_factory=ArticleAuthor)
    publish_date: str = ""
    modified_date: str = ""
    word_count: int = Field(default=0, ge=0)
    reading_time: int = Field(default=0, ge=0)
    expertise_level: ExpertiseLevel = "beginner"
    seo: ArticleSeo = Field(default_factory=ArticleSeo)
    faqs: list[Faq] = Field(default_factory=list)
    related_articles: list[RelatedArticle] = Field(default_factory=list)
    internal_links: list[InternalLink] = Field(default_factory=list)
    eeat: Eeat | None = None

    @property
    def path(self) -> ArticlePath:
        return ArticlePath(pillar=self.pillar, cluster=self.cluster, slug=self.slug)

    @property
    def url(self) -> str:
        return self.path.url


class NavItem(BaseModel):
    label: str
    href: str
    children: list[NavItem] | None = None
    pillar: str | None = None


class BreadcrumbItem(BaseModel):
    label: str
    href: str
    current: bool = False


class TocItem(BaseModel):
    id: str
    text: str
    level: Literal[2, 3]
    children: list[TocItem] | None = None

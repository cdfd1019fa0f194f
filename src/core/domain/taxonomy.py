"""Estructura de contenido del sitio: 4 pilares y sus clusters.

URL canónica: `/{pillar}/{cluster}/{slug}`
Ejemplo: `/basics/intro/what-is-technical-analysis`

Los IDs de categoría corresponden a las categorías de WordPress (pilares como
categorías padre, clusters como hijas).
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.domain.models import ArticlePath, BreadcrumbItem, Cluster, NavItem, Pillar

HOME_LABEL = "الرئيسية"
DEFAULT_PILLAR = "learn"
DEFAULT_CLUSTER = "general"
RISK_CLUSTER = "risk"

PILLARS: dict[str, Pillar] = {
    "basics": Pillar(
        slug="basics",
        name_ar="أساسيات التحليل الفني",
        name_en="Basics",
        description="المعرفة الأساسية والمفاهيم التأسيسية للتحليل الفني",
        color="#3B82F6",
        icon="academic-cap",
    ),
    "indicators": Pillar(
        slug="indicators",
        name_ar="المؤشرات الفنية",
        name_en="Indicators",
        description="الأدوات الفنية والمؤشرات المستخدمة في التحليل",
        color="#F97316",
        icon="chart-bar",
    ),
    "tools": Pillar(
        slug="tools",
        name_ar="الأدوات والحاسبات",
        name_en="Tools",
        description="الحاسبات والأدوات العملية للمتداولين",
        color="#10B981",
        icon="calculator",
    ),
    "tactics": Pillar(
        slug="tactics",
        name_ar="الاستراتيجيات وإدارة المخاطر",
        name_en="Tactics",
        description="استراتيجيات التداول وإدارة المخاطر",
        color="#8B5CF6",
        icon="light-bulb",
    ),
}

CLUSTERS: tuple[Cluster, ...] = (
    # basics
    Cluster(slug="intro", name_ar="مقدمة في التحليل الفني", pillar="basics"),
    Cluster(slug="patterns", name_ar="أنماط الشموع والرسوم", pillar="basics"),
    Cluster(slug="action", name_ar="حركة السعر", pillar="basics"),
    Cluster(slug="methods", name_ar="طرق التحليل", pillar="basics"),
    # indicators
    Cluster(slug="momentum", name_ar="مؤشرات الزخم", pillar="indicators"),
    Cluster(slug="trend", name_ar="مؤشرات الاتجاه", pillar="indicators"),
    Cluster(slug="volatility", name_ar="مؤشرات التذبذب", pillar="indicators"),
    Cluster(slug="volume", name_ar="مؤشرات الحجم", pillar="indicators"),
    # tools
    Cluster(slug="calc", name_ar="الحاسبات", pillar="tools"),
    Cluster(slug="charts", name_ar="الرسوم البيانية", pillar="tools"),
    Cluster(slug="data", name_ar="البيانات والمصادر", pillar="tools"),
    # tactics
    Cluster(slug="trend-tactics", name_ar="استراتيجيات الاتجاه", pillar="tactics"),
    Cluster(slug="reversion", name_ar="استراتيجيات الارتداد", pillar="tactics"),
    Cluster(slug="intraday", name_ar="التداول اليومي", pillar="tactics"),
    Cluster(slug="risk", name_ar="إدارة المخاطر", pillar="tactics"),
)

PILLAR_CATEGORY_IDS: dict[str, int] = {
    "basics": 2,
    "indicators": 3,
    "tools": 4,
    "tactics": 5,
}

CLUSTER_CATEGORY_IDS: dict[str, int] = {
    "intro": 6,
    "patterns": 7,
    "action": 8,
    "methods": 9,
    "momentum": 10,
    "trend": 11,
    "volatility": 12,
    "volume": 13,
    "calc": 14,
    "charts": 15,
    "data": 16,
    "trend-tactics": 17,
    "reversion": 18,
    "intraday": 19,
    "risk": 20,
}

CATEGORY_ID_TO_SLUG: dict[int, str] = {
    **{cid: slug for slug, cid in CLUSTER_CATEGORY_IDS.items()},
    **{cid: slug for slug, cid in PILLAR_CATEGORY_IDS.items()},
}

PILLAR_NAMES_AR: dict[str, str] = {
    **{slug: p.name_ar for slug, p in PILLARS.items()},
    # Legacy
    "learn": "تعلم",
    "accounts": "حسابات",
    "trust": "ثقة",
}

CLUSTER_NAMES_AR: dict[str, str] = {c.slug: c.name_ar for c in CLUSTERS}

PILLAR_DESCRIPTIONS_AR: dict[str, str] = {slug: p.description for slug, p in PILLARS.items()}

_CLUSTERS_BY_SLUG: dict[str, Cluster] = {c.slug: c for c in CLUSTERS}
_PILLAR_IDS: frozenset[int] = frozenset(PILLAR_CATEGORY_IDS.values())


def get_clusters_by_pillar(pillar: str) -> list[str]:
    return [c.slug for c in CLUSTERS if c.pillar == pillar]


def get_cluster_info(cluster_slug: str) -> Cluster | None:
    return _CLUSTERS_BY_SLUG.get(cluster_slug)


def get_pillar_for_cluster(cluster_slug: str) -> str | None:
    cluster = _CLUSTERS_BY_SLUG.get(cluster_slug)
    return cluster.pillar if cluster else None


def get_cluster_ids_for_pillar(pillar: str) -> list[int]:
    return [CLUSTER_CATEGORY_IDS[slug] for slug in get_clusters_by_pillar(pillar) if slug in CLUSTER_CATEGORY_IDS]


def is_valid_pillar(pillar: str) -> bool:
    return pillar in PILLARS


def is_valid_cluster(pillar: str, cluster: str) -> bool:
    return any(c.pillar == pillar and c.slug == cluster for c in CLUSTERS)


def get_category_ids(pillar: str, cluster: str) -> list[int]:
    """IDs de categoría WordPress para un par pilar/cluster (los desconocidos se omiten)."""

    ids: list[int] = []
    if pillar in PILLAR_CATEGORY_IDS:
        ids.append(PILLAR_CATEGORY_IDS[pillar])
    if cluster in CLUSTER_CATEGORY_IDS:
        ids.append(CLUSTER_CATEGORY_IDS[cluster])
    return ids


def resolve_pillar_cluster(categories: Iterable[tuple[int, str]]) -> tuple[str, str]:
    """Deduce (pilar, cluster) a partir de las categorías `(id, slug)` de un post.

    Reglas:
    - La primera categoría cuyo slug es un cluster conocido decide ambos valores.
    - Una categoría con ID de pilar fija el pilar (pero se sigue buscando cluster).
    - Sin coincidencias: ('learn', 'general').
    """

    pillar = DEFAULT_PILLAR
    cluster = DEFAULT_CLUSTER
    for category_id, slug in categories:
        info = _CLUSTERS_BY_SLUG.get(slug)
        if info is not None:
            return info.pillar, info.slug
        if category_id in _PILLAR_IDS:
            pillar = slug
    return pillar, cluster


def get_breadcrumb_path(
    pillar: str,
    cluster: str | None = None,
    article_title: str | None = None,
) -> list[BreadcrumbItem]:
    """Migas de pan con URLs terminadas en `/` (páginas del sitio estático)."""

    crumbs = [
        BreadcrumbItem(label=HOME_LABEL, href="/"),
        BreadcrumbItem(
            label=PILLAR_NAMES_AR.get(pillar, pillar),
            href=f"/{pillar}/",
            current=not cluster and not article_title,
        ),
    ]
    if cluster:
        crumbs.append(
            BreadcrumbItem(
                label=CLUSTER_NAMES_AR.get(cluster, cluster),
                href=f"/{pillar}/{cluster}/",
                current=not article_title,
            )
        )
    if article_title:
        crumbs.append(BreadcrumbItem(label=article_title, href="#", current=True))
    return crumbs


def generate_breadcrumbs(
    pillar: str,
    cluster: str | None = None,
    article_title: str | None = None,
) -> list[BreadcrumbItem]:
    """Variante estricta: omite pilares/clusters desconocidos y no añade `/` final."""

    crumbs = [BreadcrumbItem(label=HOME_LABEL, href="/")]

    pillar_data = PILLARS.get(pillar)
    if pillar_data is not None:
        crumbs.append(
            BreadcrumbItem(
                label=pillar_data.name_ar,
                href=f"/{pillar}",
                current=not cluster and not article_title,
            )
        )

    if cluster:
        info = _CLUSTERS_BY_SLUG.get(cluster)
        if info is not None and info.pillar == pillar:
            crumbs.append(
                BreadcrumbItem(
                    label=info.name_ar,
                    href=f"/{pillar}/{cluster}",
                    current=not article_title,
                )
            )

    if article_title:
        crumbs.append(BreadcrumbItem(label=article_title, href="#", current=True))
    return crumbs


def validate_internal_links(
    article_path: ArticlePath,
    links: Sequence[tuple[str, str]],
) -> tuple[bool, list[str]]:
    """Valida el enlazado interno mínimo de un artículo.

    `links` son pares `(url, type)`. Devuelve `(valid, missing)` con los
    mensajes de lo que falta en árabe.
    """

    missing: list[str] = []
    pillar_url = f"/{article_path.pillar}/"
    cluster_url = f"/{article_path.pillar}/{article_path.cluster}/"

    if not any(url == pillar_url or kind == "pillar" for url, kind in links):
        missing.append("رابط صفحة الركيزة")

    if not any(url == cluster_url or kind == "cluster" for url, kind in links):
        missing.append("رابط صفحة المجموعة")

    # YMYL: todo artículo fuera de riesgo enlaza a gestión de riesgo.
    if article_path.cluster != RISK_CLUSTER:
        if not any("/tactics/risk/" in url for url, _ in links):
            missing.append("رابط إلى قسم إدارة المخاطر")

    return not missing, missing


def build_navigation() -> list[NavItem]:
    """Menú principal: un item por pilar con sus clusters como hijos."""

    items: list[NavItem] = []
    for slug, pillar in PILLARS.items():
        children = [
            NavItem(label=c.name_ar, href=f"/{slug}/{c.slug}/", pillar=slug)
            for c in CLUSTERS
            if c.pillar == slug
        ]
        items.append(NavItem(label=pillar.name_ar, href=f"/{slug}/", children=children, pillar=slug))
    return items

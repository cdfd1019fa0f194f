from __future__ import annotations

from core.domain.models import ArticlePath
from core.domain.taxonomy import (
    CLUSTERS,
    build_navigation,
    generate_breadcrumbs,
    get_breadcrumb_path,
    get_category_ids,
    get_cluster_ids_for_pillar,
    get_pillar_for_cluster,
    is_valid_cluster,
    resolve_pillar_cluster,
    validate_internal_links,
)


def test_every_cluster_belongs_to_a_known_pillar() -> None:
    assert len(CLUSTERS) == 15
    assert {c.pillar for c in CLUSTERS} == {"basics", "indicators", "tools", "tactics"}


def test_cluster_lookups() -> None:
    assert get_pillar_for_cluster("risk") == "tactics"
    assert get_pillar_for_cluster("nope") is None
    assert get_cluster_ids_for_pillar("tools") == [14, 15, 16]
    assert is_valid_cluster("basics", "patterns")
    assert not is_valid_cluster("tools", "patterns")
    assert get_category_ids("basics", "unknown") == [2]


def test_resolve_pillar_cluster_prefers_first_known_cluster() -> None:
    categories = [(2, "basics"), (11, "trend"), (7, "patterns")]
    assert resolve_pillar_cluster(categories) == ("indicators", "trend")


def test_resolve_pillar_cluster_pillar_only_and_defaults() -> None:
    assert resolve_pillar_cluster([(4, "tools"), (99, "misc")]) == ("tools", "general")
    assert resolve_pillar_cluster([]) == ("learn", "general")


def test_breadcrumb_path_uses_trailing_slashes() -> None:
    crumbs = get_breadcrumb_path("basics", "patterns", "المطرقة")

    assert [c.href for c in crumbs] == ["/", "/basics/", "/basics/patterns/", "#"]
    assert [c.current for c in crumbs] == [False, False, False, True]


def test_breadcrumb_path_falls_back_to_slug_for_unknown_names() -> None:
    crumbs = get_breadcrumb_path("mystery")
    assert crumbs[-1].label == "mystery"
    assert crumbs[-1].current is True


def test_generate_breadcrumbs_skips_unknown_and_mismatched() -> None:
    crumbs = generate_breadcrumbs("basics", "risk")
    assert [c.href for c in crumbs] == ["/", "/basics"]

    crumbs = generate_breadcrumbs("tactics", "risk")
    assert [c.href for c in crumbs] == ["/", "/tactics", "/tactics/risk"]
    assert crumbs[-1].current is True


def test_validate_internal_links_reports_missing_in_arabic() -> None:
    path = ArticlePath(pillar="basics", cluster="patterns", slug="hammer")

    valid, missing = validate_internal_links(path, [("/basics/", "pillar")])

    assert valid is False
    assert missing == ["رابط صفحة المجموعة", "رابط إلى قسم إدارة المخاطر"]


def test_validate_internal_links_risk_cluster_needs_no_risk_link() -> None:
    path = ArticlePath(pillar="tactics", cluster="risk", slug="stop-loss")
    links = [("/tactics/", "sibling"), ("/tactics/risk/", "sibling")]

    assert validate_internal_links(path, links) == (True, [])


def test_navigation_has_one_item_per_pillar() -> None:
    nav = build_navigation()

    assert [item.href for item in nav] == ["/basics/", "/indicators/", "/tools/", "/tactics/"]
    assert nav[0].children is not None
    assert nav[0].children[0].href == "/basics/intro/"

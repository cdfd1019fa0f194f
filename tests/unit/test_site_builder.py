from __future__ import annotations

import asyncio
import json

import httpx

from adapters.site_renderer import SiteRenderer
from adapters.wordpress.api import WordPressClient
from adapters.wordpress.graphql_client import GraphQLClient
from adapters.wordpress.transforms import transform_gql_author, transform_gql_post
from conftest import make_post_node, make_settings
from core.domain.models import AuthorSummary, CursorPage, Paginated, Pagination, WPAuthor, WPPost
from core.services.site_builder import BuildHooks, BuildRequest, build_site, fetch_all_posts, page_path


class StubSource:
    """In-memory content source: pages chained by cursor and one author."""

    def __init__(self, pages: list[list[WPPost]], authors: dict[str, WPAuthor] | None = None) -> None:
        self.pages = pages
        self.authors = authors or {}
        self.requested_cursors: list[str | None] = []

    async def get_all_posts(self, per_page: int = 100, page: int = 1) -> Paginated[WPPost]:
        data = self.pages[page - 1] if page <= len(self.pages) else []
        return Paginated[WPPost](data=data, pagination=Pagination(total_items=len(data), total_pages=len(self.pages)))

    async def get_posts_after(self, after: str | None = None, per_page: int = 100) -> CursorPage[WPPost]:
        self.requested_cursors.append(after)
        index = int(after.removeprefix("cursor-")) if after else 0
        data = self.pages[index] if index < len(self.pages) else []
        has_next = index + 1 < len(self.pages)
        return CursorPage[WPPost](data=data, has_next_page=has_next, end_cursor=f"cursor-{index + 1}")

    async def get_all_authors(self) -> list[AuthorSummary]:
        summaries = [AuthorSummary(slug=a.slug, name=a.name, database_id=a.database_id) for a in self.authors.values()]
        return summaries + [AuthorSummary(slug="ghost", name="", database_id=0)]

    async def get_author_by_slug(self, slug: str) -> WPAuthor | None:
        return self.authors.get(slug)


def _post(database_id: int, slug: str, **overrides) -> WPPost:
    node = make_post_node(databaseId=database_id, slug=slug, **overrides)
    return transform_gql_post(node, cms_base_url="https://cms.test")


def _source() -> StubSource:
    pages = [
        [
            _post(1, "hammer", content="<h2>نموذج المطرقة</h2><p>نص</p>", date="2024-01-01T00:00:00"),
            _post(2, "doji", content="<h2>شمعة دوجي</h2>", date="2024-03-01T00:00:00"),
        ],
        [
            _post(
                3,
                "rsi",
                date="2024-02-01T00:00:00",
                categories={"nodes": [{"databaseId": 10, "slug": "momentum", "name": "زخم"}]},
                acfInternalLinks={"links": [{"url": "/indicators/", "linkType": "pillar"}]},
            )
        ],
    ]
    author = transform_gql_author(
        {
            "databaseId": 3,
            "slug": "sara",
            "name": "سارة",
            "posts": {"nodes": [{"databaseId": 1, "slug": "hammer", "title": "المطرقة"}]},
        }
    )
    return StubSource(pages, {"sara": author})


def test_page_path_maps_urls_to_index_files(tmp_path) -> None:
    assert page_path(tmp_path, "/basics/intro/x/") == tmp_path / "basics" / "intro" / "x" / "index.html"
    assert page_path(tmp_path, "/") == tmp_path / "index.html"


def test_build_writes_articles_hubs_authors_and_index(tmp_path) -> None:
    source = _source()
    warnings: list[str] = []
    progress: list[tuple[str, int, int]] = []
    hooks = BuildHooks(warning=warnings.append, progress=lambda *args: progress.append(args))

    result = asyncio.run(
        build_site(
            source=source,
            request=BuildRequest(output_dir=tmp_path, per_page=2),
            renderer=SiteRenderer(site_url="https://site.test"),
            hooks=hooks,
        )
    )

    assert source.requested_cursors == [None, "cursor-1"]
    assert [a.slug for a in result.articles] == ["hammer", "doji", "rsi"]

    hammer = (tmp_path / "basics" / "patterns" / "hammer" / "index.html").read_text(encoding="utf-8")
    assert 'data-pattern="hammer"' in hammer
    assert (tmp_path / "indicators" / "momentum" / "rsi" / "index.html").exists()
    assert (tmp_path / "basics" / "index.html").exists()
    assert (tmp_path / "tactics" / "risk" / "index.html").exists()
    assert (tmp_path / "author" / "sara" / "index.html").exists()
    assert (tmp_path / "index.html").exists()

    index = json.loads((tmp_path / "search-index.json").read_text(encoding="utf-8"))
    assert len(index) == 3

    assert ("articles", 3, 3) in progress
    assert "Author not found: ghost" in warnings
    assert any(w.startswith("/indicators/momentum/rsi/") for w in warnings)
    assert result.warnings == warnings


def test_related_articles_stay_within_cluster(tmp_path) -> None:
    result = asyncio.run(
        build_site(
            source=_source(),
            request=BuildRequest(output_dir=tmp_path, include_hubs=False, include_authors=False),
            renderer=SiteRenderer(site_url="https://site.test"),
        )
    )

    by_slug = {a.slug: a for a in result.articles}
    assert [r.slug for r in by_slug["hammer"].related_articles] == ["doji"]
    assert by_slug["rsi"].related_articles == []
    assert not (tmp_path / "basics" / "index.html").exists()


def test_empty_cms_still_writes_home_page(tmp_path) -> None:
    warnings: list[str] = []
    result = asyncio.run(
        build_site(
            source=StubSource([]),
            request=BuildRequest(output_dir=tmp_path, include_hubs=False, include_authors=False),
            renderer=SiteRenderer(site_url="https://site.test"),
            hooks=BuildHooks(warning=warnings.append),
        )
    )

    assert result.articles == []
    assert warnings == ["No posts returned by the CMS."]
    assert (tmp_path / "index.html").exists()
    assert json.loads((tmp_path / "search-index.json").read_text(encoding="utf-8")) == []


def test_fetch_all_posts_sends_the_server_end_cursor() -> None:
    bodies: list[dict] = []
    pages = [
        {"nodes": [make_post_node(databaseId=1, slug="a")], "pageInfo": {"hasNextPage": True, "endCursor": "REAL_END_CURSOR"}},
        {"nodes": [make_post_node(databaseId=2, slug="b")], "pageInfo": {"hasNextPage": False, "endCursor": "LAST"}},
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"data": {"posts": pages[len(bodies) - 1]}})

    settings = make_settings()
    graphql = GraphQLClient(settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    source = WordPressClient(settings, graphql=graphql)

    posts = asyncio.run(fetch_all_posts(source, per_page=1))

    assert [p.slug for p in posts] == ["a", "b"]
    assert [b["variables"]["after"] for b in bodies] == [None, "REAL_END_CURSOR"]
    assert all(b["variables"]["first"] == 1 for b in bodies)


def test_fetch_all_posts_drops_posts_repeated_across_pages() -> None:
    source = StubSource([[_post(1, "a"), _post(2, "b")], [_post(2, "b"), _post(3, "c")]])

    posts = asyncio.run(fetch_all_posts(source))

    assert [p.id for p in posts] == [1, 2, 3]


def test_fetch_all_posts_stops_when_cursor_repeats() -> None:
    class LoopingSource(StubSource):
        async def get_posts_after(self, after: str | None = None, per_page: int = 100) -> CursorPage[WPPost]:
            self.requested_cursors.append(after)
            return CursorPage[WPPost](data=[_post(1, "a")], has_next_page=True, end_cursor="same")

    source = LoopingSource([])

    posts = asyncio.run(fetch_all_posts(source))

    assert [p.slug for p in posts] == ["a"]
    assert source.requested_cursors == [None, "same"]


def test_bad_acf_values_do_not_abort_the_build(tmp_path) -> None:
    source = StubSource([[_post(1, "hammer", acfArticleMeta={"wordCount": -3, "readingTime": -1}), _post(2, "doji")]])

    result = asyncio.run(
        build_site(
            source=source,
            request=BuildRequest(output_dir=tmp_path, include_hubs=False, include_authors=False),
            renderer=SiteRenderer(site_url="https://site.test"),
        )
    )

    assert [a.slug for a in result.articles] == ["hammer", "doji"]
    assert (tmp_path / "basics" / "patterns" / "hammer" / "index.html").exists()

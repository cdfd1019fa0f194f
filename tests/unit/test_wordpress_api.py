from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx

from adapters.wordpress import queries
from adapters.wordpress.api import WordPressClient
from adapters.wordpress.errors import GraphQLResponseError
from conftest import make_post_node, make_settings

Handler = Callable[[str, dict[str, Any]], dict[str, Any]]


class StubGraphQL:
    """Replaces `GraphQLClient`: answers with `handler` and records each call."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False
        self.cleared: list[str | None] = []

    async def execute(self, query: str, variables: dict[str, Any] | None = None, **_: Any) -> dict[str, Any]:
        variables = variables or {}
        self.calls.append((query, variables))
        return self.handler(query, variables)

    async def aclose(self) -> None:
        self.closed = True

    def clear_cache(self, key: str | None = None) -> None:
        self.cleared.append(key)


def _raise(exc: Exception) -> Handler:
    def handler(query: str, variables: dict[str, Any]) -> dict[str, Any]:
        raise exc

    return handler


def _posts(nodes: list[dict[str, Any]], *, has_next: bool = False, end_cursor: str | None = None) -> dict[str, Any]:
    return {"posts": {"nodes": nodes, "pageInfo": {"hasNextPage": has_next, "endCursor": end_cursor}}}


def _client(handler: Handler, **settings: Any) -> tuple[WordPressClient, StubGraphQL]:
    stub = StubGraphQL(handler)
    return WordPressClient(make_settings(**settings), graphql=stub), stub  # type: ignore[arg-type]


def test_get_all_posts_maps_nodes_and_pagination() -> None:
    client, stub = _client(lambda q, v: _posts([make_post_node()], has_next=True))

    result = asyncio.run(client.get_all_posts(per_page=5, page=2))

    assert [p.slug for p in result.data] == ["what-is-a-hammer"]
    assert result.pagination.total_items == 1
    assert result.pagination.total_pages == 3
    _, variables = stub.calls[0]
    assert variables["first"] == 5
    assert variables["after"] == queries.offset_cursor(2, 5)


def test_first_page_has_no_cursor_and_last_page_stops() -> None:
    client, stub = _client(lambda q, v: _posts([make_post_node()]))

    result = asyncio.run(client.get_all_posts(per_page=10))

    assert stub.calls[0][1]["after"] is None
    assert result.pagination.total_pages == 1


def test_get_all_posts_returns_empty_on_cms_error() -> None:
    client, _ = _client(_raise(GraphQLResponseError([{"message": "boom"}])))

    result = asyncio.run(client.get_all_posts())

    assert result.data == []
    assert result.pagination.total_pages == 0


def test_transport_errors_degrade_to_empty() -> None:
    client, _ = _client(_raise(httpx.ConnectError("offline")))

    assert asyncio.run(client.get_post_by_slug("x")) is None
    assert asyncio.run(client.get_all_categories()) == []


def test_posts_by_pillar_queries_cluster_ids() -> None:
    client, stub = _client(lambda q, v: _posts([]))

    asyncio.run(client.get_posts_by_pillar("basics"))

    _, variables = stub.calls[0]
    assert variables["categoryIn"] == ["6", "7", "8", "9"]


def test_unknown_pillar_or_cluster_skips_the_cms() -> None:
    client, stub = _client(lambda q, v: _posts([make_post_node()]))

    assert asyncio.run(client.get_posts_by_pillar("nope")).data == []
    assert asyncio.run(client.get_posts_by_cluster("nope")).data == []
    assert stub.calls == []


def test_posts_by_cluster_uses_category_id() -> None:
    client, stub = _client(lambda q, v: _posts([make_post_node()]))

    result = asyncio.run(client.get_posts_by_cluster("patterns", per_page=3))

    assert len(result.data) == 1
    assert stub.calls[0][1]["categoryId"] == 7


def test_get_post_by_slug_missing_returns_none() -> None:
    client, _ = _client(lambda q, v: {"post": None})

    assert asyncio.run(client.get_post_by_slug("missing")) is None


def test_get_post_by_slug_found() -> None:
    client, stub = _client(lambda q, v: {"post": make_post_node()})

    post = asyncio.run(client.get_post_by_slug("what-is-a-hammer"))

    assert post is not None
    assert post.id == 11
    assert stub.calls[0][1] == {"slug": "what-is-a-hammer"}


def test_get_all_post_slugs_follows_end_cursor() -> None:
    pages = {
        None: _posts([make_post_node(slug="a")], has_next=True, end_cursor="c1"),
        "c1": _posts([make_post_node(slug="b")], has_next=False, end_cursor="c2"),
    }
    client, stub = _client(lambda q, v: pages[v["after"]], posts_page_size=1)

    paths = asyncio.run(client.get_all_post_slugs())

    assert [p.slug for p in paths] == ["a", "b"]
    assert {(p.pillar, p.cluster) for p in paths} == {("basics", "patterns")}
    assert [v["first"] for _, v in stub.calls] == [1, 1]


def test_get_posts_after_returns_server_page_info() -> None:
    client, stub = _client(lambda q, v: _posts([make_post_node()], has_next=True, end_cursor="YXJyYXk6MTE="))

    page = asyncio.run(client.get_posts_after("prev", per_page=7))

    assert [p.slug for p in page.data] == ["what-is-a-hammer"]
    assert page.has_next_page is True
    assert page.end_cursor == "YXJyYXk6MTE="
    assert stub.calls[0][1] == {"first": 7, "after": "prev"}


def test_get_posts_after_is_empty_on_cms_error() -> None:
    client, _ = _client(_raise(GraphQLResponseError([{"message": "boom"}])))

    page = asyncio.run(client.get_posts_after(None))

    assert page.data == []
    assert page.has_next_page is False
    assert page.end_cursor is None


def test_get_all_post_slugs_returns_empty_list_on_error() -> None:
    client, _ = _client(_raise(GraphQLResponseError([{"message": "boom"}])))

    assert asyncio.run(client.get_all_post_slugs()) == []


def test_related_posts_exclude_current_post() -> None:
    nodes = [make_post_node(databaseId=11, slug="a"), make_post_node(databaseId=12, slug="b")]
    client, stub = _client(lambda q, v: _posts(nodes))

    related = asyncio.run(client.get_related_posts(11, "patterns", limit=1))

    assert [p.slug for p in related] == ["b"]
    assert stub.calls[0][1]["first"] == 2


def test_search_posts_passes_query() -> None:
    client, stub = _client(lambda q, v: _posts([]))

    asyncio.run(client.search_posts("مطرقة"))

    assert stub.calls[0][1]["search"] == "مطرقة"


def _categories(q: str, v: dict[str, Any]) -> dict[str, Any]:
    return {
        "categories": {
            "nodes": [
                {"databaseId": 2, "slug": "basics", "name": "أساسيات", "parentDatabaseId": None},
                {"databaseId": 7, "slug": "patterns", "name": "أنماط", "parentDatabaseId": 2},
                {"databaseId": 99, "slug": "misc", "name": "متفرقات", "parentDatabaseId": None},
            ]
        }
    }


def test_categories_hierarchy_groups_children_under_pillars() -> None:
    client, _ = _client(_categories)

    hierarchy = asyncio.run(client.get_categories_hierarchy())

    assert list(hierarchy) == ["basics"]
    pillar, children = hierarchy["basics"]
    assert pillar.id == 2
    assert [c.slug for c in children] == ["patterns"]


def test_child_categories_filter_by_parent() -> None:
    client, _ = _client(_categories)

    children = asyncio.run(client.get_child_categories(2))

    assert [c.id for c in children] == [7]


def test_comments_by_post_sets_post_id() -> None:
    data = {
        "comments": {
            "nodes": [
                {
                    "databaseId": 5,
                    "content": "<p>شكرا</p>",
                    "date": "2024-05-03T09:00:00",
                    "author": {"node": {"name": "علي"}},
                }
            ],
            "pageInfo": {"hasNextPage": False},
        }
    }
    client, stub = _client(lambda q, v: data)

    result = asyncio.run(client.get_comments_by_post(11))

    assert [c.post for c in result.data] == [11]
    assert stub.calls[0][1]["postId"] == "11"


def test_get_all_authors_skips_nodes_without_slug() -> None:
    data = {"users": {"nodes": [{"slug": "sara", "name": "سارة", "databaseId": 3}, {"name": "?"}]}}
    client, _ = _client(lambda q, v: data)

    authors = asyncio.run(client.get_all_authors())

    assert [(a.slug, a.database_id) for a in authors] == [("sara", 3)]


def test_get_author_by_slug_maps_posts() -> None:
    data = {
        "user": {
            "id": "dXNlcjoz",
            "databaseId": 3,
            "name": "سارة",
            "slug": "sara",
            "posts": {"nodes": [{"databaseId": 11, "slug": "what-is-a-hammer", "title": "المطرقة"}]},
        }
    }
    client, _ = _client(lambda q, v: data)

    author = asyncio.run(client.get_author_by_slug("sara"))

    assert author is not None
    assert [p.slug for p in author.posts] == ["what-is-a-hammer"]


def test_close_and_clear_cache_delegate() -> None:
    client, stub = _client(lambda q, v: {})

    client.clear_cache("k")
    asyncio.run(client.aclose())

    assert stub.cleared == ["k"]
    assert stub.closed is True

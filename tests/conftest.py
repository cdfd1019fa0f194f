from __future__ import annotations

from typing import Any

import pytest

from core.config import AppSettings


def make_settings(**overrides: Any) -> AppSettings:
    values: dict[str, Any] = {
        "graphql_url": "https://cms.test/graphql",
        "cms_base_url": "https://cms.test",
        "site_url": "https://site.test",
    }
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


def make_post_node(**overrides: Any) -> dict[str, Any]:
    """WPGraphQL `Post` node with the fields the transforms read."""

    node: dict[str, Any] = {
        "id": "cG9zdDox",
        "databaseId": 11,
        "slug": "what-is-a-hammer",
        "title": "ما هي شمعة المطرقة &#8211; دليل",
        "date": "2024-05-01T10:00:00",
        "modified": "2024-05-02T10:00:00",
        "excerpt": "<p>مقدمة   قصيرة</p>",
        "content": "<h1>المطرقة</h1><p>نص المقال هنا</p>",
        "author": {
            "node": {
                "databaseId": 3,
                "name": "سارة",
                "slug": "sara",
                "description": "محللة فنية",
                "avatar": {"url": "https://cms.test/avatar.png"},
            }
        },
        "featuredImage": {
            "node": {
                "sourceUrl": "https://cms.test/hammer.png",
                "altText": "",
                "mediaDetails": {"width": 800, "height": None},
            }
        },
        "categories": {
            "nodes": [
                {"databaseId": 2, "name": "أساسيات", "slug": "basics", "parentDatabaseId": None},
                {"databaseId": 7, "name": "أنماط", "slug": "patterns", "parentDatabaseId": 2},
            ]
        },
        "tags": {"nodes": [{"databaseId": 40, "name": "شموع", "slug": "candles"}]},
    }
    node.update(overrides)
    return node


@pytest.fixture
def settings() -> AppSettings:
    return make_settings()

from __future__ import annotations

import pytest

from core.config import AppSettings, write_user_env_vars


def test_defaults_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CHARTSPOINT_GRAPHQL_URL", "WORDPRESS_GRAPHQL_URL", "WORDPRESS_API_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = AppSettings(_env_file=None)

    assert settings.graphql_url == "https://cms.chartspoint.com/graphql"
    assert settings.cache_ttl_seconds == 300
    assert settings.acf_enabled is False
    assert settings.has_jwt_credentials() is False


def test_legacy_wordpress_variables_are_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHARTSPOINT_GRAPHQL_URL", raising=False)
    monkeypatch.setenv("WORDPRESS_API_URL", "https://legacy.test/graphql")
    monkeypatch.setenv("WORDPRESS_JWT_USERNAME", "editor")
    monkeypatch.setenv("WORDPRESS_JWT_PASSWORD", "secret")

    settings = AppSettings(_env_file=None)

    assert settings.graphql_url == "https://legacy.test/graphql"
    assert settings.has_jwt_credentials() is True


def test_env_file_is_read(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CHARTSPOINT_GRAPHQL_URL", raising=False)
    monkeypatch.delenv("WORDPRESS_GRAPHQL_URL", raising=False)
    monkeypatch.delenv("WORDPRESS_API_URL", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "CHARTSPOINT_GRAPHQL_URL=https://env-file.test/graphql\nCHARTSPOINT_SEO_ENABLED=true\n",
        encoding="utf-8",
    )

    settings = AppSettings(_env_file=env_file)

    assert settings.graphql_url == "https://env-file.test/graphql"
    assert settings.seo_enabled is True


def test_write_user_env_vars_merges_and_skips_none(tmp_path) -> None:
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nCHARTSPOINT_SITE_URL='https://old.test'\nOTHER=1\n", encoding="utf-8")

    write_user_env_vars(
        {"CHARTSPOINT_SITE_URL": "https://new.test", "CHARTSPOINT_JWT_USERNAME": None},
        env_path=env_path,
    )

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert "CHARTSPOINT_SITE_URL=https://new.test" in lines
    assert "OTHER=1" in lines
    assert not any(line.startswith("CHARTSPOINT_JWT_USERNAME") for line in lines)

"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (GraphQL/render) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "chartspoint"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "chartspoint"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "chartspoint"
    return Path.home() / ".config" / "chartspoint"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# CHARTSPOINT user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Las variables históricas del front-end (`WORDPRESS_GRAPHQL_URL`,
    `WORDPRESS_API_URL`, `WORDPRESS_JWT_*`) siguen siendo válidas además del
    prefijo `CHARTSPOINT_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHARTSPOINT_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    graphql_url: str = Field(
        default="https://cms.chartspoint.com/graphql",
        min_length=8,
        validation_alias=AliasChoices(
            "CHARTSPOINT_GRAPHQL_URL",
            "WORDPRESS_GRAPHQL_URL",
            "WORDPRESS_API_URL",
            "graphql_url",
        ),
        description="Endpoint WPGraphQL del CMS.",
    )
    jwt_username: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "CHARTSPOINT_JWT_USERNAME",
            "WORDPRESS_JWT_USERNAME",
            "jwt_username",
        ),
        description="Usuario para la mutación `login` (WPGraphQL JWT Authentication).",
    )
    jwt_password: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "CHARTSPOINT_JWT_PASSWORD",
            "WORDPRESS_JWT_PASSWORD",
            "jwt_password",
        ),
        description="Contraseña para la mutación `login`.",
    )
    jwt_lifetime_seconds: float = Field(
        default=55 * 60,
        gt=0,
        description="Vida útil asumida del token JWT (5 minutos antes de la hora real).",
    )

    acf_enabled: bool = Field(
        default=False,
        description="Pedir los grupos ACF (WPGraphQL for ACF instalado en el CMS).",
    )
    seo_enabled: bool = Field(
        default=False,
        description="Pedir campos SEO de Rank Math (WPGraphQL for Rank Math instalado).",
    )

    cache_ttl_seconds: float = Field(
        default=5 * 60,
        ge=0,
        description="TTL del caché en memoria de respuestas GraphQL (segundos).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="chartspoint-site/0.1 (+https://chartspoint.com)",
        min_length=1,
        description="User-Agent para peticiones al CMS.",
    )

    cms_base_url: str = Field(
        default="https://cms.chartspoint.com",
        min_length=8,
        description="Base pública del CMS, usada para sintetizar enlaces `link`.",
    )
    site_url: str = Field(
        default="https://chartspoint.com",
        min_length=8,
        description="URL pública del sitio estático.",
    )
    output_dir: Path = Field(
        default=Path("dist"),
        description="Directorio de salida del build estático.",
    )
    posts_page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Tamaño de página al recorrer todos los posts (WPGraphQL limita a 100).",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    def has_jwt_credentials(self) -> bool:
        return bool(self.jwt_username) and bool(self.jwt_password)

"""Cliente WPGraphQL con caché TTL y autenticación JWT.

Responsabilidad:
- Ejecutar queries POST contra el endpoint GraphQL del CMS.
- Cachear respuestas exitosas por (query, variables) durante `cache_ttl_seconds`.
- Obtener y renovar un token JWT (plugin WPGraphQL JWT Authentication) solo
  para las queries que lo requieren.

Los errores se registran y se propagan; la capa `api` decide degradar a vacío.
"""

from __future__ import annotations

import json
import time
from typing import Any, Callable

import httpx

from adapters.cache import TTLCache
from adapters.http_client import build_async_client
from adapters.wordpress.errors import GraphQLHTTPError, GraphQLResponseError, WordPressError
from adapters.wordpress.queries import LOGIN_MUTATION
from core.config import AppSettings
from core.logging import get_logger

logger = get_logger(__name__)


def cache_key(query: str, variables: dict[str, Any] | None) -> str:
    return json.dumps({"query": query, "variables": variables or {}}, ensure_ascii=False)


class GraphQLClient:
    """Cliente async; usar como `async with GraphQLClient(settings) as client`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        cache: TTLCache | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._clock = clock or time.monotonic
        self._http = http_client or build_async_client(self._settings)
        self._owns_http = http_client is None
        self._cache = cache if cache is not None else TTLCache(self._settings.cache_ttl_seconds, clock=self._clock)
        self._jwt_token: str | None = None
        self._jwt_expiry: float = 0.0

    @property
    def endpoint(self) -> str:
        return self._settings.graphql_url

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def clear_cache(self, key: str | None = None) -> None:
        self._cache.clear(key)

    async def get_jwt_token(self) -> str | None:
        """Token JWT vigente, o `None` si no hay credenciales o el login falla."""

        if self._jwt_token and self._clock() < self._jwt_expiry:
            return self._jwt_token

        if not self._settings.has_jwt_credentials():
            return None

        try:
            response = await self._http.post(
                self.endpoint,
                json={
                    "query": LOGIN_MUTATION,
                    "variables": {
                        "username": self._settings.jwt_username,
                        "password": self._settings.jwt_password,
                    },
                },
                headers={"Content-Type": "application/json"},
            )
            payload = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("JWT authentication error", extra={"endpoint": self.endpoint})
            return None

        if not isinstance(payload, dict):
            logger.error("JWT authentication returned a non-object payload", extra={"endpoint": self.endpoint})
            return None

        if payload.get("errors"):
            logger.error("JWT authentication failed", extra={"errors": payload["errors"]})
            return None

        login = (payload.get("data") or {}).get("login") or {}
        token = login.get("authToken") or None
        self._jwt_token = token
        self._jwt_expiry = self._clock() + self._settings.jwt_lifetime_seconds
        return token

    async def execute(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        require_auth: bool = False,
    ) -> dict[str, Any]:
        """Ejecuta `query` y devuelve el objeto `data`.

        Raises:
            GraphQLHTTPError: status no 2xx.
            GraphQLResponseError: la respuesta trae `errors`.
            WordPressError: cuerpo que no es un objeto JSON.
            httpx.HTTPError: fallos de transporte.
        """

        variables = variables or {}
        key = cache_key(query, variables)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        headers = {
            "Content-Type": "application/json",
            "Accept-Charset": "utf-8",
        }
        if require_auth:
            token = await self.get_jwt_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._http.post(
                self.endpoint,
                json={"query": query, "variables": variables},
                headers=headers,
            )
            if not response.is_success:
                raise GraphQLHTTPError(response.status_code, response.reason_phrase)

            try:
                payload = response.json()
            except ValueError as exc:
                raise WordPressError("Invalid JSON in GraphQL response") from exc
            if not isinstance(payload, dict):
                raise WordPressError("Unexpected GraphQL payload")
            if payload.get("errors"):
                logger.error("GraphQL errors", extra={"errors": payload["errors"]})
                raise GraphQLResponseError(payload["errors"])
        except (WordPressError, httpx.HTTPError) as exc:
            logger.error("GraphQL query failed", extra={"endpoint": self.endpoint, "error": str(exc)})
            raise

        data = payload.get("data") or {}
        self._cache.set(key, data)
        return data

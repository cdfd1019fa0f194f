"""Errores del adaptador WordPress/WPGraphQL."""

from __future__ import annotations

from typing import Any


class WordPressError(Exception):
    """Base para fallos al hablar con el CMS."""


class GraphQLHTTPError(WordPressError):
    """El endpoint respondió con un status no exitoso."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"HTTP Error: {status_code} {reason}".strip())


class GraphQLResponseError(WordPressError):
    """La respuesta trae un array `errors` de GraphQL."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        message = None
        if errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
        super().__init__(message or "GraphQL query failed")

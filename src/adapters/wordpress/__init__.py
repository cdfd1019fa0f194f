"""Integración con WordPress (WPGraphQL).

Por qué un paquete:
- Separa transporte (`graphql_client`), catálogo de queries, transformaciones
  y la API de contenido que consume el build.
"""

from adapters.wordpress.api import WordPressClient
from adapters.wordpress.errors import GraphQLHTTPError, GraphQLResponseError, WordPressError
from adapters.wordpress.graphql_client import GraphQLClient
from adapters.wordpress.transforms import transform_author_post_to_article, transform_to_article

__all__ = [
	"GraphQLClient",
	"GraphQLHTTPError",
	"GraphQLResponseError",
	"WordPressClient",
	"WordPressError",
	"transform_author_post_to_article",
	"transform_to_article",
]

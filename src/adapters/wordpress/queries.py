"""Catálogo de queries WPGraphQL.

Los fragmentos ACF y SEO solo se incluyen si el CMS tiene instalados los
plugins correspondientes (WPGraphQL for ACF / for Rank Math); pedir campos
inexistentes hace fallar la query completa.
"""

from __future__ import annotations

import base64

IMAGE_FIELDS = """
      sourceUrl
      altText
      mediaDetails {
        width
        height
      }
"""

POST_FIELDS = f"""
  id
  databaseId
  slug
  title
  date
  modified
  content
  excerpt
  status
  author {{
    node {{
      databaseId
      name
      slug
      description
      avatar {{
        url
      }}
    }}
  }}
  featuredImage {{
    node {{{IMAGE_FIELDS}    }}
  }}
  categories {{
    nodes {{
      databaseId
      slug
      name
      parentDatabaseId
    }}
  }}
  tags {{
    nodes {{
      databaseId
      slug
      name
    }}
  }}
"""

ACF_FIELDS = """
  acfArticleMeta {
    wordCount
    readingTime
    primaryKeyword
    expertiseLevel
  }
  acfFaq {
    faqItems {
      question
      answer
    }
  }
  acfInternalLinks {
    links {
      url
      anchorText
      linkType
    }
  }
  acfEeat {
    authorExpertise
    credentials
    reviewProcess
    sourceMethodology
  }
"""

SEO_FIELDS = """
  seo {
    title
    metaDesc
    canonical
    robots
    opengraphImage {
      sourceUrl
    }
    schema {
      raw
    }
  }
"""

PAGE_INFO = """
    pageInfo {
      hasNextPage
      endCursor
    }
"""

CATEGORY_FIELDS = """
  databaseId
  slug
  name
  description
  count
  parentDatabaseId
"""

LOGIN_MUTATION = """
  mutation LoginUser($username: String!, $password: String!) {
    login(input: { username: $username, password: $password }) {
      authToken
      refreshToken
      user {
        id
        name
      }
    }
  }
"""

CATEGORIES_QUERY = f"""
  query GetCategories {{
    categories(first: 100) {{
      nodes {{{CATEGORY_FIELDS}      }}
    }}
  }}
"""

CATEGORY_BY_SLUG_QUERY = f"""
  query GetCategoryBySlug($slug: ID!) {{
    category(id: $slug, idType: SLUG) {{{CATEGORY_FIELDS}    }}
  }}
"""

COMMENTS_BY_POST_QUERY = f"""
  query GetCommentsByPost($postId: ID!, $first: Int, $after: String) {{
    comments(
      first: $first
      after: $after
      where: {{ contentId: $postId, status: "approve" }}
    ) {{{PAGE_INFO}      nodes {{
        databaseId
        content
        date
        author {{
          node {{
            name
            avatar {{
              url
            }}
          }}
        }}
        parentDatabaseId
      }}
    }}
  }}
"""

AUTHOR_BY_SLUG_QUERY = f"""
  query GetAuthorBySlug($slug: ID!) {{
    user(id: $slug, idType: SLUG) {{
      id
      databaseId
      name
      slug
      description
      url
      avatar {{
        url
      }}
      posts(first: 50, where: {{ status: PUBLISH }}) {{
        nodes {{
          id
          databaseId
          title
          slug
          excerpt
          date
          categories {{
            nodes {{
              databaseId
              slug
              name
              parentDatabaseId
            }}
          }}
          featuredImage {{
            node {{{IMAGE_FIELDS}            }}
          }}
        }}
      }}
    }}
  }}
"""

ALL_AUTHORS_QUERY = """
  query GetAllAuthors {
    users(first: 100) {
      nodes {
        id
        databaseId
        name
        slug
        description
        url
        avatar {
          url
        }
      }
    }
  }
"""


def post_fields(*, acf: bool = False, seo: bool = False) -> str:
    fields = POST_FIELDS
    if acf:
        fields += ACF_FIELDS
    if seo:
        fields += SEO_FIELDS
    return fields


def posts_query(fields: str) -> str:
    return f"""
  query GetPosts($first: Int, $after: String) {{
    posts(first: $first, after: $after, where: {{ status: PUBLISH }}) {{{PAGE_INFO}      nodes {{{fields}      }}
    }}
  }}
"""


def post_by_slug_query(fields: str) -> str:
    return f"""
  query GetPostBySlug($slug: ID!) {{
    post(id: $slug, idType: SLUG) {{{fields}    }}
  }}
"""


def posts_by_category_query(fields: str) -> str:
    return f"""
  query GetPostsByCategory($categoryId: Int!, $first: Int, $after: String) {{
    posts(
      first: $first
      after: $after
      where: {{ status: PUBLISH, categoryId: $categoryId }}
    ) {{{PAGE_INFO}      nodes {{{fields}      }}
    }}
  }}
"""


def posts_by_categories_query(fields: str) -> str:
    return f"""
  query GetPostsByCategories($categoryIn: [ID]!, $first: Int, $after: String) {{
    posts(
      first: $first
      after: $after
      where: {{ status: PUBLISH, categoryIn: $categoryIn }}
    ) {{{PAGE_INFO}      nodes {{{fields}      }}
    }}
  }}
"""


def search_posts_query(fields: str) -> str:
    return f"""
  query SearchPosts($search: String!, $first: Int, $after: String) {{
    posts(
      first: $first
      after: $after
      where: {{ status: PUBLISH, search: $search }}
    ) {{{PAGE_INFO}      nodes {{{fields}      }}
    }}
  }}
"""


def page_by_uri_query(*, seo: bool = False) -> str:
    seo_block = SEO_FIELDS if seo else ""
    return f"""
  query GetPageBySlug($slug: ID!) {{
    page(id: $slug, idType: URI) {{
      id
      databaseId
      slug
      title
      content
      date
      modified
      featuredImage {{
        node {{{IMAGE_FIELDS}        }}
      }}{seo_block}
    }}
  }}
"""


def offset_cursor(page: int, per_page: int) -> str | None:
    """Cursor WPGraphQL equivalente a saltar `(page - 1) * per_page` items.

    WPGraphQL codifica los cursores como `base64("arrayconnection:<offset>")`
    y `after` es exclusivo, por eso se apunta al último item de la página previa.
    """

    if page <= 1:
        return None
    offset = (page - 1) * per_page - 1
    return base64.b64encode(f"arrayconnection:{offset}".encode("ascii")).decode("ascii")

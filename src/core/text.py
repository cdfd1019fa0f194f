"""Utilidades de texto para contenido árabe proveniente del CMS."""

from __future__ import annotations

import re

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_WORD_SPLIT_RE = re.compile(r"[\s،.؟!,;:]+")
_SLUG_STRIP_RE = re.compile(r"[^A-Za-z0-9_\u0600-\u06FF-]")
_DASHES_RE = re.compile(r"-+")
_H1_OPEN_RE = re.compile(r"<h1", re.IGNORECASE)
_H1_CLOSE_RE = re.compile(r"</h1>", re.IGNORECASE)

# Tabla cerrada: WordPress solo emite estas entidades en títulos.
HTML_ENTITIES: dict[str, str] = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&nbsp;": " ",
    "&#8211;": "-",
    "&#8212;": "--",
    "&#8216;": "'",
    "&#8217;": "'",
    "&#8220;": '"',
    "&#8221;": '"',
}

WORDS_PER_MINUTE = 200


def strip_html_tags(html: str | None) -> str:
    if not html:
        return ""
    return _WS_RE.sub(" ", _TAG_RE.sub("", html)).strip()


def decode_html_entities(text: str | None) -> str:
    decoded = text or ""
    for entity, char in HTML_ENTITIES.items():
        decoded = decoded.replace(entity, char)
    return decoded


def estimate_word_count(text: str | None) -> int:
    """Cuenta palabras separando por espacios y puntuación árabe/latina."""

    if not text:
        return 0
    return len([w for w in _WORD_SPLIT_RE.split(text) if w])


def estimate_reading_time(word_count: int) -> int:
    """Minutos de lectura redondeados hacia arriba."""

    return -(-word_count // WORDS_PER_MINUTE)


def generate_slug(text: str) -> str:
    """Slug URL-safe que conserva letras árabes."""

    slug = _WS_RE.sub("-", text.lower().strip())
    slug = _SLUG_STRIP_RE.sub("", slug)
    slug = _DASHES_RE.sub("-", slug)
    return slug.strip("-")


def downgrade_h1(html: str) -> str:
    """Solo el título del hero es H1: el contenido usa H2 como nivel máximo."""

    return _H1_CLOSE_RE.sub("</h2>", _H1_OPEN_RE.sub("<h2", html))

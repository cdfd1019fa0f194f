"""Post-procesado del HTML de artículos (BeautifulSoup).

Sobre el contenido que entrega el CMS:
- baja los H1 a H2 (el único H1 de la página es el del hero),
- asigna un `id` estable a cada H2/H3 para el índice y los anclajes,
- tras cada título que nombra un patrón de velas inserta su visualización
  inline, una sola vez por patrón y documento.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from adapters.candlestick_inline import detect_pattern_in_heading, generate_inline_candlestick_html
from core.domain.models import TocItem
from core.domain.patterns import PatternType
from core.logging import get_logger
from core.text import generate_slug

logger = get_logger(__name__)

_HEADINGS = ("h2", "h3")
_FALLBACK_ID = "section"


@dataclass
class ProcessedContent:
    html: str
    toc: list[TocItem] = field(default_factory=list)
    patterns: list[PatternType] = field(default_factory=list)


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _heading_text(tag: Tag) -> str:
    return tag.get_text(" ", strip=True)


def _assign_heading_ids(soup: BeautifulSoup) -> list[tuple[Tag, str]]:
    """Asegura un id único en cada H2/H3; devuelve `(tag, id)` en orden."""

    headings = soup.find_all(_HEADINGS)
    # Los ids explícitos se reservan antes de generar slugs.
    seen: set[str] = {
        h["id"].strip() for h in headings if isinstance(h.get("id"), str) and h["id"].strip()
    }
    out: list[tuple[Tag, str]] = []
    for heading in headings:
        existing = heading.get("id")
        if isinstance(existing, str) and existing.strip():
            anchor = existing.strip()
        else:
            base = generate_slug(_heading_text(heading)) or _FALLBACK_ID
            anchor = base
            suffix = 2
            while anchor in seen:
                anchor = f"{base}-{suffix}"
                suffix += 1
            heading["id"] = anchor
        seen.add(anchor)
        out.append((heading, anchor))
    return out


def _build_toc(headings: list[tuple[Tag, str]]) -> list[TocItem]:
    toc: list[TocItem] = []
    for heading, anchor in headings:
        text = _heading_text(heading)
        if not text:
            continue
        if heading.name == "h2":
            toc.append(TocItem(id=anchor, text=text, level=2))
            continue
        item = TocItem(id=anchor, text=text, level=3)
        parent = toc[-1] if toc and toc[-1].level == 2 else None
        if parent is None:
            # H3 antes de cualquier H2: queda en el nivel superior.
            toc.append(item)
        else:
            if parent.children is None:
                parent.children = []
            parent.children.append(item)
    return toc


def _downgrade_h1(soup: BeautifulSoup) -> None:
    for h1 in soup.find_all("h1"):
        h1.name = "h2"


def extract_toc(html: str) -> list[TocItem]:
    """Índice de contenidos (H2 con sus H3) sin modificar el HTML de entrada."""

    soup = _parse(html)
    _downgrade_h1(soup)
    return _build_toc(_assign_heading_ids(soup))


def process_content(html: str, *, inject_patterns: bool = True, show_labels: bool = False) -> ProcessedContent:
    soup = _parse(html)
    _downgrade_h1(soup)
    headings = _assign_heading_ids(soup)

    injected: list[PatternType] = []
    if inject_patterns:
        for heading, _anchor in headings:
            pattern = detect_pattern_in_heading(_heading_text(heading))
            if pattern is None or pattern in injected:
                continue
            block_html = generate_inline_candlestick_html(pattern, show_label=show_labels)
            block = _parse(block_html).find("div")
            if block is None:
                continue
            heading.insert_after(block)
            injected.append(pattern)

    if injected:
        logger.debug("Injected inline candlesticks", extra={"patterns": [p.value for p in injected]})

    return ProcessedContent(html=str(soup), toc=_build_toc(headings), patterns=injected)

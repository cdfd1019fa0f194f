from __future__ import annotations

from bs4 import BeautifulSoup

from adapters.content_processor import extract_toc, process_content
from core.domain.patterns import PatternType

HTML = """
<h1>مقدمة</h1>
<p>نص</p>
<h2>نموذج المطرقة</h2>
<p>شرح</p>
<h3 id="custom">متى تظهر المطرقة</h3>
<h2>مقدمة</h2>
<h2>الابتلاع الصعودي</h2>
"""


def test_headings_get_unique_ids_and_h1_is_downgraded() -> None:
    result = process_content(HTML, inject_patterns=False)
    soup = BeautifulSoup(result.html, "html.parser")

    assert soup.find("h1") is None
    assert [h["id"] for h in soup.find_all(["h2", "h3"])] == [
        "مقدمة",
        "نموذج-المطرقة",
        "custom",
        "مقدمة-2",
        "الابتلاع-الصعودي",
    ]
    assert result.patterns == []


def test_generated_ids_avoid_explicit_ids_on_later_headings() -> None:
    result = process_content('<h2>intro</h2><h2 id="intro">x</h2><h3>x</h3>', inject_patterns=False)

    assert [item.id for item in result.toc] == ["intro-2", "intro"]
    assert [child.id for child in result.toc[1].children or []] == ["x"]
    assert extract_toc('<h2>intro</h2><h2 id="intro">x</h2>')[0].id == "intro-2"


def test_toc_nests_h3_under_previous_h2() -> None:
    toc = process_content(HTML, inject_patterns=False).toc

    assert [item.id for item in toc] == ["مقدمة", "نموذج-المطرقة", "مقدمة-2", "الابتلاع-الصعودي"]
    assert toc[1].children is not None
    assert [(child.id, child.level) for child in toc[1].children] == [("custom", 3)]


def test_patterns_are_injected_once_after_their_heading() -> None:
    result = process_content(HTML)
    soup = BeautifulSoup(result.html, "html.parser")

    blocks = soup.find_all("div", class_="candlestick-inline")
    assert [b["data-pattern"] for b in blocks] == ["hammer", "engulfing-bullish"]
    assert result.patterns == [PatternType.HAMMER, PatternType.ENGULFING_BULLISH]

    hammer_heading = soup.find("h2", id="نموذج-المطرقة")
    assert hammer_heading.find_next_sibling() is blocks[0]


def test_labels_are_optional() -> None:
    html = process_content("<h2>دوجي</h2>", show_labels=True).html
    assert "candlestick-inline__label" in html


def test_extract_toc_handles_leading_h3_and_empty_input() -> None:
    toc = extract_toc("<h3>تمهيد</h3><h2>الفصل</h2>")

    assert [(item.text, item.level) for item in toc] == [("تمهيد", 3), ("الفصل", 2)]
    assert extract_toc("") == []

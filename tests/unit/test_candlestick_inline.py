from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from adapters.candlestick_inline import (
    PATTERN_SHAPES,
    detect_pattern_in_heading,
    generate_inline_candlestick_html,
)
from core.domain.patterns import PatternType


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_every_pattern_has_a_shape() -> None:
    assert set(PATTERN_SHAPES) == set(PatternType)


def test_doji_wrapper_attributes() -> None:
    wrapper = _soup(generate_inline_candlestick_html(PatternType.DOJI)).div

    assert wrapper["class"] == ["candlestick-inline", "candlestick-inline--single"]
    assert wrapper["style"] == "--inline-border-color: rgba(148, 163, 184, 0.4)"
    assert wrapper["data-pattern"] == "doji"
    assert wrapper["role"] == "img"
    assert wrapper["aria-label"] == "دوجي - Doji"
    assert wrapper.find("span") is None


def test_hammer_geometry() -> None:
    svg = _soup(generate_inline_candlestick_html("hammer")).find("svg")

    assert (svg["viewbox"], svg["width"], svg["height"]) == ("0 0 60 60", "60", "60")
    wick = svg.find("g", class_="inline-candles").find("line")
    assert (wick["x1"], wick["y1"], wick["y2"], wick["stroke"]) == ("30", "12", "52", "#10B981")
    body = svg.find("rect")
    assert (body["x"], body["y"], body["width"], body["height"], body["rx"]) == ("24", "12", "12", "14", "1")
    assert body["fill"] == "url(#inline-bull-hammer)"
    assert svg.find("lineargradient", id="inline-bull-hammer") is not None


@pytest.mark.parametrize(
    ("pattern", "width", "candles"),
    [
        (PatternType.ENGULFING_BEARISH, "100", 2),
        (PatternType.THREE_WHITE_SOLDIERS, "140", 3),
    ],
)
def test_multi_candle_dimensions(pattern: PatternType, width: str, candles: int) -> None:
    svg = _soup(generate_inline_candlestick_html(pattern)).find("svg")

    assert svg["width"] == width
    assert len(svg.find("g", class_="inline-candles").find_all("rect")) == candles


def test_marubozu_has_no_wick() -> None:
    group = _soup(generate_inline_candlestick_html(PatternType.MARUBOZU_BEARISH)).find("g", class_="inline-candles")

    assert group.find("line") is None
    assert group.find("rect")["fill"] == "url(#inline-bear-marubozu-bearish)"


def test_tweezer_level_line_and_label() -> None:
    soup = _soup(generate_inline_candlestick_html(PatternType.TWEEZER_TOP, show_label=True))

    level = soup.find("line", attrs={"stroke-dasharray": "3,2"})
    assert (level["y1"], level["y2"], level["stroke"]) == ("12", "12", "#d5a035")
    assert soup.find("span", class_="candlestick-inline__label").get_text() == "قمة الملقط"


def test_unknown_pattern_renders_nothing() -> None:
    assert generate_inline_candlestick_html("triangle") == ""


@pytest.mark.parametrize(
    ("heading", "expected"),
    [
        ("كيف تتداول نموذج المطرقة بنجاح", PatternType.HAMMER),
        ("ماروبوزو هابط: إشارة بيع قوية", PatternType.MARUBOZU_BEARISH),
        ("شمعة ماروبوزو", PatternType.MARUBOZU_BULLISH),
        ("What is a bullish engulfing?", PatternType.ENGULFING_BULLISH),
        ("نموذج نجمة المساء", PatternType.EVENING_STAR),
        ("مؤشر القوة النسبية", None),
    ],
)
def test_detect_pattern_in_heading(heading: str, expected: PatternType | None) -> None:
    assert detect_pattern_in_heading(heading) is expected

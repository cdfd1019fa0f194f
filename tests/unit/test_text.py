from __future__ import annotations

from core.text import (
    decode_html_entities,
    downgrade_h1,
    estimate_reading_time,
    estimate_word_count,
    generate_slug,
    strip_html_tags,
)


def test_strip_html_tags_collapses_whitespace() -> None:
    assert strip_html_tags("<p>مرحبا   <b>بكم</b></p>\n<p>هنا</p>") == "مرحبا بكم هنا"
    assert strip_html_tags(None) == ""


def test_decode_html_entities_uses_fixed_table() -> None:
    assert decode_html_entities("A &amp; B &#8211; C") == "A & B - C"
    assert decode_html_entities("&hellip;") == "&hellip;"


def test_word_count_splits_on_arabic_punctuation() -> None:
    assert estimate_word_count("الشموع، المؤشرات.الاتجاه؟ نعم!") == 4
    assert estimate_word_count("") == 0


def test_reading_time_rounds_up() -> None:
    assert estimate_reading_time(0) == 0
    assert estimate_reading_time(1) == 1
    assert estimate_reading_time(200) == 1
    assert estimate_reading_time(201) == 2


def test_generate_slug_keeps_arabic_letters() -> None:
    assert generate_slug("  What is RSI?  ") == "what-is-rsi"
    assert generate_slug("نموذج المطرقة!") == "نموذج-المطرقة"
    assert generate_slug("a -- b") == "a-b"


def test_downgrade_h1() -> None:
    assert downgrade_h1('<H1 class="x">T</H1><h2>S</h2>') == '<h2 class="x">T</h2><h2>S</h2>'

"""Catálogo de patrones de velas japonesas.

16 patrones: 6 de una vela, 6 de dos y 4 de tres. Cada patrón tiene nombre
árabe/inglés, señal (alcista/bajista/neutral) y fiabilidad 1..5.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class PatternType(str, Enum):
    DOJI = "doji"
    HAMMER = "hammer"
    HANGING_MAN = "hanging-man"
    SHOOTING_STAR = "shooting-star"
    MARUBOZU_BULLISH = "marubozu-bullish"
    MARUBOZU_BEARISH = "marubozu-bearish"
    ENGULFING_BULLISH = "engulfing-bullish"
    ENGULFING_BEARISH = "engulfing-bearish"
    HARAMI_BULLISH = "harami-bullish"
    HARAMI_BEARISH = "harami-bearish"
    TWEEZER_TOP = "tweezer-top"
    TWEEZER_BOTTOM = "tweezer-bottom"
    MORNING_STAR = "morning-star"
    EVENING_STAR = "evening-star"
    THREE_WHITE_SOLDIERS = "three-white-soldiers"
    THREE_BLACK_CROWS = "three-black-crows"


PatternCategory = Literal["single", "double", "triple"]
SignalType = Literal["bullish", "bearish", "neutral"]


class PatternConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name_ar: str
    name_en: str
    signal: SignalType
    signal_ar: str
    category: PatternCategory
    category_ar: str
    reliability: int = Field(..., ge=1, le=5)
    description: str


_SINGLE_AR = "شمعة واحدة"
_DOUBLE_AR = "شمعتان"
_TRIPLE_AR = "ثلاث شمعات"

PATTERN_CONFIGS: dict[PatternType, PatternConfig] = {
    PatternType.DOJI: PatternConfig(
        name_ar="دوجي",
        name_en="Doji",
        signal="neutral",
        signal_ar="محايد",
        category="single",
        category_ar=_SINGLE_AR,
        reliability=3,
        description="يشير إلى تردد السوق وتوازن قوى العرض والطلب",
    ),
    PatternType.HAMMER: PatternConfig(
        name_ar="المطرقة",
        name_en="Hammer",
        signal="bullish",
        signal_ar="صعودي",
        category="single",
        category_ar=_SINGLE_AR,
        reliability=4,
        description="نموذج انعكاسي صعودي يظهر في نهاية الاتجاه الهابط",
    ),
    PatternType.HANGING_MAN: PatternConfig(
        name_ar="الرجل المشنوق",
        name_en="Hanging Man",
        signal="bearish",
        signal_ar="هبوطي",
        category="single",
        category_ar=_SINGLE_AR,
        reliability=3,
        description="نموذج انعكاسي هبوطي يظهر في نهاية الاتجاه الصاعد",
    ),
    PatternType.SHOOTING_STAR: PatternConfig(
        name_ar="الشهاب",
        name_en="Shooting Star",
        signal="bearish",
        signal_ar="هبوطي",
        category="single",
        category_ar=_SINGLE_AR,
        reliability=4,
        description="نموذج انعكاسي هبوطي يدل على ضعف المشترين",
    ),
    PatternType.MARUBOZU_BULLISH: PatternConfig(
        name_ar="ماروبوزو صاعد",
        name_en="Bullish Marubozu",
        signal="bullish",
        signal_ar="صعودي قوي",
        category="single",
        category_ar=_SINGLE_AR,
        reliability=5,
        description="شمعة قوية بدون ظلال تدل على سيطرة المشترين",
    ),
    PatternType.MARUBOZU_BEARISH: PatternConfig(
        name_ar="ماروبوزو هابط",
        name_en="Bearish Marubozu",
        signal="bearish",
        signal_ar="هبوطي قوي",
        category="single",
        category_ar=_SINGLE_AR,
        reliability=5,
        description="شمعة قوية بدون ظلال تدل على سيطرة البائعين",
    ),
    PatternType.ENGULFING_BULLISH: PatternConfig(
        name_ar="الابتلاع الصعودي",
        name_en="Bullish Engulfing",
        signal="bullish",
        signal_ar="صعودي قوي",
        category="double",
        category_ar=_DOUBLE_AR,
        reliability=5,
        description="نموذج انعكاسي قوي حيث تبتلع الشمعة الصاعدة السابقة",
    ),
    PatternType.ENGULFING_BEARISH: PatternConfig(
        name_ar="الابتلاع الهبوطي",
        name_en="Bearish Engulfing",
        signal="bearish",
        signal_ar="هبوطي قوي",
        category="double",
        category_ar=_DOUBLE_AR,
        reliability=5,
        description="نموذج انعكاسي قوي حيث تبتلع الشمعة الهابطة السابقة",
    ),
    PatternType.HARAMI_BULLISH: PatternConfig(
        name_ar="هارامي صعودي",
        name_en="Bullish Harami",
        signal="bullish",
        signal_ar="صعودي",
        category="double",
        category_ar=_DOUBLE_AR,
        reliability=3,
        description="شمعة صغيرة داخل جسم الشمعة السابقة تشير لانعكاس محتمل",
    ),
    PatternType.HARAMI_BEARISH: PatternConfig(
        name_ar="هارامي هبوطي",
        name_en="Bearish Harami",
        signal="bearish",
        signal_ar="هبوطي",
        category="double",
        category_ar=_DOUBLE_AR,
        reliability=3,
        description="شمعة صغيرة داخل جسم الشمعة السابقة تشير لانعكاس محتمل",
    ),
    PatternType.TWEEZER_TOP: PatternConfig(
        name_ar="قمة الملقط",
        name_en="Tweezer Top",
        signal="bearish",
        signal_ar="هبوطي",
        category="double",
        category_ar=_DOUBLE_AR,
        reliability=4,
        description="شمعتان بقمم متساوية تشيران لمقاومة قوية",
    ),
    PatternType.TWEEZER_BOTTOM: PatternConfig(
        name_ar="قاع الملقط",
        name_en="Tweezer Bottom",
        signal="bullish",
        signal_ar="صعودي",
        category="double",
        category_ar=_DOUBLE_AR,
        reliability=4,
        description="شمعتان بقيعان متساوية تشيران لدعم قوي",
    ),
    PatternType.MORNING_STAR: PatternConfig(
        name_ar="نجمة الصباح",
        name_en="Morning Star",
        signal="bullish",
        signal_ar="صعودي قوي",
        category="triple",
        category_ar=_TRIPLE_AR,
        reliability=5,
        description="نموذج انعكاسي قوي يتكون من ثلاث شمعات يشير لبداية صعود",
    ),
    PatternType.EVENING_STAR: PatternConfig(
        name_ar="نجمة المساء",
        name_en="Evening Star",
        signal="bearish",
        signal_ar="هبوطي قوي",
        category="triple",
        category_ar=_TRIPLE_AR,
        reliability=5,
        description="نموذج انعكاسي قوي يتكون من ثلاث شمعات يشير لبداية هبوط",
    ),
    PatternType.THREE_WHITE_SOLDIERS: PatternConfig(
        name_ar="ثلاثة جنود بيض",
        name_en="Three White Soldiers",
        signal="bullish",
        signal_ar="صعودي قوي جدا",
        category="triple",
        category_ar=_TRIPLE_AR,
        reliability=5,
        description="ثلاث شمعات صاعدة متتالية تؤكد قوة الاتجاه الصعودي",
    ),
    PatternType.THREE_BLACK_CROWS: PatternConfig(
        name_ar="ثلاثة غربان سود",
        name_en="Three Black Crows",
        signal="bearish",
        signal_ar="هبوطي قوي جدا",
        category="triple",
        category_ar=_TRIPLE_AR,
        reliability=5,
        description="ثلاث شمعات هابطة متتالية تؤكد قوة الاتجاه الهبوطي",
    ),
}

PATTERNS_BY_CATEGORY: dict[str, list[PatternType]] = {
    "single": [p for p, c in PATTERN_CONFIGS.items() if c.category == "single"],
    "double": [p for p, c in PATTERN_CONFIGS.items() if c.category == "double"],
    "triple": [p for p, c in PATTERN_CONFIGS.items() if c.category == "triple"],
}

# Nombres (árabe, alias y nombre inglés) -> patrón, para detectar menciones en
# el contenido e insertar la visualización inline.
ARABIC_PATTERN_NAMES: dict[str, PatternType] = {
    # Una vela
    "المطرقة": PatternType.HAMMER,
    "نموذج المطرقة": PatternType.HAMMER,
    "Hammer": PatternType.HAMMER,
    "الرجل المعلق": PatternType.HANGING_MAN,
    "الرجل المشنوق": PatternType.HANGING_MAN,
    "نموذج الرجل المعلق": PatternType.HANGING_MAN,
    "Hanging Man": PatternType.HANGING_MAN,
    "النجم الساقط": PatternType.SHOOTING_STAR,
    "الشهاب": PatternType.SHOOTING_STAR,
    "نموذج الشهاب": PatternType.SHOOTING_STAR,
    "Shooting Star": PatternType.SHOOTING_STAR,
    "دوجي": PatternType.DOJI,
    "شمعة دوجي": PatternType.DOJI,
    "نموذج دوجي": PatternType.DOJI,
    "Doji": PatternType.DOJI,
    "ماروبوزو": PatternType.MARUBOZU_BULLISH,
    "ماروبوزو صاعد": PatternType.MARUBOZU_BULLISH,
    "ماروبوزو هابط": PatternType.MARUBOZU_BEARISH,
    "Marubozu": PatternType.MARUBOZU_BULLISH,
    # Dos velas
    "الابتلاع الصعودي": PatternType.ENGULFING_BULLISH,
    "نموذج الابتلاع الصعودي": PatternType.ENGULFING_BULLISH,
    "Bullish Engulfing": PatternType.ENGULFING_BULLISH,
    "الابتلاع الهبوطي": PatternType.ENGULFING_BEARISH,
    "نموذج الابتلاع الهبوطي": PatternType.ENGULFING_BEARISH,
    "Bearish Engulfing": PatternType.ENGULFING_BEARISH,
    "هارامي صعودي": PatternType.HARAMI_BULLISH,
    "نموذج هارامي الصعودي": PatternType.HARAMI_BULLISH,
    "Bullish Harami": PatternType.HARAMI_BULLISH,
    "هارامي هبوطي": PatternType.HARAMI_BEARISH,
    "نموذج هارامي الهبوطي": PatternType.HARAMI_BEARISH,
    "Bearish Harami": PatternType.HARAMI_BEARISH,
    "القمم المتساوية": PatternType.TWEEZER_TOP,
    "قمة الملقط": PatternType.TWEEZER_TOP,
    "Tweezer Top": PatternType.TWEEZER_TOP,
    "القيعان المتساوية": PatternType.TWEEZER_BOTTOM,
    "قاع الملقط": PatternType.TWEEZER_BOTTOM,
    "Tweezer Bottom": PatternType.TWEEZER_BOTTOM,
    # Tres velas
    "نجمة الصباح": PatternType.MORNING_STAR,
    "نموذج نجمة الصباح": PatternType.MORNING_STAR,
    "Morning Star": PatternType.MORNING_STAR,
    "نجمة المساء": PatternType.EVENING_STAR,
    "نموذج نجمة المساء": PatternType.EVENING_STAR,
    "Evening Star": PatternType.EVENING_STAR,
    "ثلاثة جنود بيض": PatternType.THREE_WHITE_SOLDIERS,
    "الجنود الثلاثة البيض": PatternType.THREE_WHITE_SOLDIERS,
    "Three White Soldiers": PatternType.THREE_WHITE_SOLDIERS,
    "ثلاثة غربان سود": PatternType.THREE_BLACK_CROWS,
    "الغربان الثلاثة السود": PatternType.THREE_BLACK_CROWS,
    "Three Black Crows": PatternType.THREE_BLACK_CROWS,
}


def get_patterns_by_signal(signal: SignalType) -> list[PatternType]:
    return [p for p, c in PATTERN_CONFIGS.items() if c.signal == signal]


def get_pattern_config(pattern: PatternType | str) -> PatternConfig | None:
    try:
        return PATTERN_CONFIGS[PatternType(pattern)]
    except ValueError:
        return None


def get_pattern_from_arabic_name(name: str) -> PatternType | None:
    """Coincidencia exacta primero; después sin distinguir mayúsculas (nombres ingleses)."""

    exact = ARABIC_PATTERN_NAMES.get(name)
    if exact is not None:
        return exact

    lowered = name.lower()
    for key, value in ARABIC_PATTERN_NAMES.items():
        if key.lower() == lowered:
            return value
    return None

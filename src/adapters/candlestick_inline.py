"""Visualizaciones inline de patrones de velas (HTML + SVG).

Genera el bloque que el procesador de contenido inserta bajo los títulos que
mencionan un patrón. La geometría vive aquí como datos; el marcado, en la
plantilla `candlestick_inline.html`.
"""

from __future__ import annotations

from dataclasses import dataclass

from adapters.templating import get_env
from core.domain.patterns import ARABIC_PATTERN_NAMES, PATTERN_CONFIGS, PatternType

BULL = "bull"
BEAR = "bear"
NEUTRAL = "neutral"

WICK_COLORS: dict[str, str] = {
    BULL: "#10B981",
    BEAR: "#EF4444",
    NEUTRAL: "#94A3B8",
}

# (color superior, color inferior) de cada gradiente.
GRADIENTS: dict[str, tuple[str, str]] = {
    BULL: ("#10B981", "#059669"),
    BEAR: ("#EF4444", "#DC2626"),
    NEUTRAL: ("#94A3B8", "#64748B"),
}

SIGNAL_BORDER_COLORS: dict[str, str] = {
    "bullish": "rgba(16, 185, 129, 0.4)",
    "bearish": "rgba(239, 68, 68, 0.4)",
    "neutral": "rgba(148, 163, 184, 0.4)",
}

BODY_WIDTH = 12


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    @property
    def view_box(self) -> str:
        return f"0 0 {self.width} {self.height}"


DIMENSIONS: dict[str, Dimensions] = {
    "single": Dimensions(60, 60),
    "double": Dimensions(100, 60),
    "triple": Dimensions(140, 60),
}


@dataclass(frozen=True)
class Candle:
    """Una vela: mecha opcional centrada en `x` y cuerpo de ancho fijo."""

    x: int
    kind: str
    body_y: int
    body_height: int
    wick: tuple[int, int] | None = None

    @property
    def body_x(self) -> int:
        return self.x - BODY_WIDTH // 2

    @property
    def wick_color(self) -> str:
        return WICK_COLORS[self.kind]


@dataclass(frozen=True)
class PatternShape:
    candles: tuple[Candle, ...]
    # Línea de nivel punteada (y) para los patrones "tweezer".
    level_y: int | None = None


PATTERN_SHAPES: dict[PatternType, PatternShape] = {
    PatternType.DOJI: PatternShape((Candle(30, NEUTRAL, 28, 4, (8, 52)),)),
    PatternType.HAMMER: PatternShape((Candle(30, BULL, 12, 14, (12, 52)),)),
    PatternType.HANGING_MAN: PatternShape((Candle(30, BEAR, 12, 14, (12, 52)),)),
    PatternType.SHOOTING_STAR: PatternShape((Candle(30, BEAR, 34, 14, (8, 48)),)),
    PatternType.MARUBOZU_BULLISH: PatternShape((Candle(30, BULL, 10, 40),)),
    PatternType.MARUBOZU_BEARISH: PatternShape((Candle(30, BEAR, 10, 40),)),
    PatternType.ENGULFING_BULLISH: PatternShape(
        (Candle(30, BEAR, 22, 12, (18, 38)), Candle(70, BULL, 14, 32, (10, 50)))
    ),
    PatternType.ENGULFING_BEARISH: PatternShape(
        (Candle(30, BULL, 26, 12, (22, 42)), Candle(70, BEAR, 14, 32, (10, 50)))
    ),
    PatternType.HARAMI_BULLISH: PatternShape(
        (Candle(30, BEAR, 12, 36, (8, 52)), Candle(70, BULL, 24, 12, (22, 38)))
    ),
    PatternType.HARAMI_BEARISH: PatternShape(
        (Candle(30, BULL, 12, 36, (8, 52)), Candle(70, BEAR, 24, 12, (22, 38)))
    ),
    PatternType.TWEEZER_TOP: PatternShape(
        (Candle(30, BULL, 18, 18, (12, 40)), Candle(70, BEAR, 16, 22, (12, 44))),
        level_y=12,
    ),
    PatternType.TWEEZER_BOTTOM: PatternShape(
        (Candle(30, BEAR, 24, 18, (20, 48)), Candle(70, BULL, 22, 22, (16, 48))),
        level_y=48,
    ),
    PatternType.MORNING_STAR: PatternShape(
        (
            Candle(28, BEAR, 10, 18, (8, 32)),
            Candle(70, NEUTRAL, 38, 4, (34, 48)),
            Candle(112, BULL, 16, 18, (14, 38)),
        )
    ),
    PatternType.EVENING_STAR: PatternShape(
        (
            Candle(28, BULL, 32, 18, (28, 52)),
            Candle(70, NEUTRAL, 18, 4, (12, 26)),
            Candle(112, BEAR, 24, 18, (22, 46)),
        )
    ),
    PatternType.THREE_WHITE_SOLDIERS: PatternShape(
        (
            Candle(28, BULL, 38, 12, (36, 52)),
            Candle(70, BULL, 26, 12, (24, 40)),
            Candle(112, BULL, 14, 12, (12, 28)),
        )
    ),
    PatternType.THREE_BLACK_CROWS: PatternShape(
        (
            Candle(28, BEAR, 10, 12, (8, 24)),
            Candle(70, BEAR, 22, 12, (20, 36)),
            Candle(112, BEAR, 34, 12, (32, 48)),
        )
    ),
}

# Alias más largos primero: "ماروبوزو هابط" debe ganar a "ماروبوزو".
_DETECTION_ORDER: tuple[tuple[str, PatternType], ...] = tuple(
    sorted(
        ((name.casefold(), pattern) for name, pattern in ARABIC_PATTERN_NAMES.items()),
        key=lambda item: len(item[0]),
        reverse=True,
    )
)


def generate_inline_candlestick_html(pattern: PatternType | str, show_label: bool = False) -> str:
    """Bloque HTML autocontenido para `pattern`; `""` si el patrón no existe."""

    try:
        pattern = PatternType(pattern)
    except ValueError:
        return ""

    config = PATTERN_CONFIGS.get(pattern)
    shape = PATTERN_SHAPES.get(pattern)
    if config is None or shape is None:
        return ""

    template = get_env().get_template("candlestick_inline.html")
    return template.render(
        pattern=pattern.value,
        config=config,
        dimensions=DIMENSIONS[config.category],
        border_color=SIGNAL_BORDER_COLORS.get(config.signal, SIGNAL_BORDER_COLORS["neutral"]),
        gradients=GRADIENTS,
        shape=shape,
        body_width=BODY_WIDTH,
        show_label=show_label,
    ).strip()


def detect_pattern_in_heading(heading_text: str) -> PatternType | None:
    """Primer patrón cuyo nombre aparece en el texto del título."""

    text = heading_text.casefold()
    for name, pattern in _DETECTION_ORDER:
        if name in text:
            return pattern
    return None

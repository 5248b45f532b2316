from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from linechart.raster.draw_text import DEFAULT_FONT_FAMILY, text_size


@dataclass(frozen=True)
class TextMetrics:
    width: float
    height: float
    line_count: int = 1


class TextMeasurer(Protocol):
    """Host-supplied capability that reports the rendered extent of a string."""

    def measure(self, text: str, font_size_px: float) -> TextMetrics:
        ...


def line_count(text: str) -> int:
    return text.count("\n") + 1


@dataclass(frozen=True)
class PillowTextMeasurer:
    """Measures text with the same Pillow fonts the raster backend draws with."""

    font_family: str = DEFAULT_FONT_FAMILY

    def measure(self, text: str, font_size_px: float) -> TextMetrics:
        w, h = text_size(text, font_family=self.font_family, font_size_px=font_size_px)
        return TextMetrics(width=float(w), height=float(h), line_count=line_count(text))


@dataclass(frozen=True)
class MonospaceTextMeasurer:
    """Font-free measurer: every glyph is `char_width_ratio * size` wide.

    Each line is `line_height_ratio * size` tall. Results are exact and
    platform-independent, which keeps headless layouts reproducible.
    """

    char_width_ratio: float = 0.6
    line_height_ratio: float = 1.2

    def measure(self, text: str, font_size_px: float) -> TextMetrics:
        lines = text.split("\n")
        widest = max(len(line) for line in lines)
        width = widest * font_size_px * self.char_width_ratio
        height = len(lines) * font_size_px * self.line_height_ratio
        return TextMetrics(width=width, height=height, line_count=len(lines))

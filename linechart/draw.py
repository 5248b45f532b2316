from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from linechart.curve import PathCommands
from linechart.style import RGBA


StrokeCap = Literal["butt", "round"]


@dataclass(frozen=True)
class LineCommand:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGBA
    stroke_width: float


@dataclass(frozen=True)
class PathCommand:
    path: PathCommands
    color: RGBA
    stroke_width: float
    cap: StrokeCap = "round"


@dataclass(frozen=True)
class CircleCommand:
    cx: float
    cy: float
    radius: float
    color: RGBA
    stroke_width: float | None = None
    """`None` fills the circle; a width strokes its outline."""


@dataclass(frozen=True)
class TextCommand:
    """Text anchored at its top-left corner."""

    text: str
    x: float
    y: float
    color: RGBA
    font_size_px: float
    width: float = 0.0
    height: float = 0.0


DrawCommand = Union[LineCommand, PathCommand, CircleCommand, TextCommand]


@dataclass(frozen=True)
class DrawBatch:
    """Draw list for one frame; backends execute commands in order."""

    width: float
    height: float
    commands: tuple[DrawCommand, ...] = field(default_factory=tuple)

    def of_type(self, kind: type) -> tuple[DrawCommand, ...]:
        return tuple(cmd for cmd in self.commands if isinstance(cmd, kind))

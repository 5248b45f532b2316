from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

import numpy as np

from linechart.series import DataPoint, ProjectedPoint


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True)
class CubicTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float


PathSegment = Union[MoveTo, CubicTo]
PointLike = Union[DataPoint, ProjectedPoint]


@dataclass(frozen=True)
class PathCommands:
    segments: tuple[PathSegment, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.segments

    def cubic_count(self) -> int:
        return sum(1 for seg in self.segments if isinstance(seg, CubicTo))


def control_points(points: Sequence[PointLike]) -> tuple[list[DataPoint], list[DataPoint]]:
    """Bezier controls per segment: horizontal midpoint, y matched to each endpoint."""
    first: list[DataPoint] = []
    second: list[DataPoint] = []
    for p0, p1 in zip(points, points[1:]):
        mid_x = (p0.x + p1.x) / 2.0
        first.append(DataPoint(mid_x, p0.y, ""))
        second.append(DataPoint(mid_x, p1.y, ""))
    return first, second


def build_path(points: Sequence[PointLike]) -> PathCommands:
    if len(points) < 2:
        return PathCommands()
    first, second = control_points(points)
    segments: list[PathSegment] = [MoveTo(points[0].x, points[0].y)]
    for c1, c2, end in zip(first, second, points[1:]):
        segments.append(CubicTo(c1.x, c1.y, c2.x, c2.y, end.x, end.y))
    return PathCommands(segments=tuple(segments))


def flatten_path(path: PathCommands, steps: int = 24) -> list[np.ndarray]:
    """Sample each subpath into an (N, 2) polyline for raster backends."""
    if steps < 1:
        raise ValueError("steps must be >= 1")
    t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)[1:, None]
    # Bernstein basis for cubic segments, shape (steps, 4)
    basis = np.hstack(((1 - t) ** 3, 3 * (1 - t) ** 2 * t, 3 * (1 - t) * t**2, t**3))

    polylines: list[np.ndarray] = []
    current: list[np.ndarray] = []
    cursor: tuple[float, float] | None = None
    for seg in path.segments:
        if isinstance(seg, MoveTo):
            if len(current) > 1:
                polylines.append(np.vstack(current))
            cursor = (seg.x, seg.y)
            current = [np.asarray([cursor], dtype=np.float64)]
            continue
        if cursor is None:
            continue
        ctrl = np.asarray([cursor, (seg.x1, seg.y1), (seg.x2, seg.y2), (seg.x3, seg.y3)], dtype=np.float64)
        current.append(basis @ ctrl)
        cursor = (seg.x3, seg.y3)
    if len(current) > 1:
        polylines.append(np.vstack(current))
    return polylines

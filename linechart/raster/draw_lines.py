from __future__ import annotations

import math

import numpy as np

from linechart.raster.canvas import RGBA, blend_coverage, pixel_grid


def draw_line(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: RGBA,
    width: float = 1.0,
    *,
    round_cap: bool = False,
) -> None:
    draw_polyline(dst, np.asarray([[x0, y0], [x1, y1]], dtype=np.float64), color, width, round_cap=round_cap)


def draw_polyline(
    dst: np.ndarray,
    points: np.ndarray,
    color: RGBA,
    width: float = 1.0,
    *,
    round_cap: bool = False,
) -> None:
    """Stroke an (N, 2) polyline.

    Coverage is the union over segments, so joints never double-blend.
    """
    if points.shape[0] < 2 or width <= 0:
        return
    half = max(0.5, width / 2.0)
    x0 = max(0, int(math.floor(float(np.min(points[:, 0])) - half - 1)))
    y0 = max(0, int(math.floor(float(np.min(points[:, 1])) - half - 1)))
    x1 = min(dst.shape[1], int(math.ceil(float(np.max(points[:, 0])) + half + 1)))
    y1 = min(dst.shape[0], int(math.ceil(float(np.max(points[:, 1])) + half + 1)))
    if x1 <= x0 or y1 <= y0:
        return

    px, py = pixel_grid(x0, y0, x1, y1)
    coverage = np.zeros(px.shape, dtype=np.float32)
    for i in range(points.shape[0] - 1):
        seg = _segment_coverage(px, py, points[i], points[i + 1], half, round_cap=round_cap)
        np.maximum(coverage, seg, out=coverage)
    blend_coverage(dst, x0, y0, coverage, color)


def _segment_coverage(
    px: np.ndarray,
    py: np.ndarray,
    a: np.ndarray,
    b: np.ndarray,
    half: float,
    *,
    round_cap: bool,
) -> np.ndarray:
    ax, ay = float(a[0]), float(a[1])
    dx, dy = float(b[0]) - ax, float(b[1]) - ay
    length_sq = dx * dx + dy * dy
    if length_sq <= 1e-12:
        dist = np.hypot(px - ax, py - ay)
        return np.clip(half + 0.5 - dist, 0.0, 1.0) if round_cap else np.zeros_like(px)
    t = ((px - ax) * dx + (py - ay) * dy) / length_sq
    if round_cap:
        t = np.clip(t, 0.0, 1.0)
        inside = np.ones_like(px, dtype=bool)
    else:
        inside = (t >= 0.0) & (t <= 1.0)
        t = np.clip(t, 0.0, 1.0)
    dist = np.hypot(px - (ax + t * dx), py - (ay + t * dy))
    cov = np.clip(half + 0.5 - dist, 0.0, 1.0)
    return np.where(inside, cov, 0.0).astype(np.float32)

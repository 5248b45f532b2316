from __future__ import annotations

import math

import numpy as np

from linechart.raster.canvas import RGBA, blend_coverage, pixel_grid


def draw_circle(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    color: RGBA,
    *,
    stroke_width: float | None = None,
) -> None:
    """Filled disc, or an outline ring centred on `radius` when `stroke_width` is set."""
    if radius <= 0:
        return
    outer = radius + (stroke_width / 2.0 if stroke_width else 0.0)
    x0 = max(0, int(math.floor(cx - outer - 1)))
    y0 = max(0, int(math.floor(cy - outer - 1)))
    x1 = min(dst.shape[1], int(math.ceil(cx + outer + 1)))
    y1 = min(dst.shape[0], int(math.ceil(cy + outer + 1)))
    if x1 <= x0 or y1 <= y0:
        return

    px, py = pixel_grid(x0, y0, x1, y1)
    dist = np.hypot(px - cx, py - cy)
    if stroke_width is None:
        coverage = np.clip(radius + 0.5 - dist, 0.0, 1.0)
    else:
        coverage = np.clip(stroke_width / 2.0 + 0.5 - np.abs(dist - radius), 0.0, 1.0)
    blend_coverage(dst, x0, y0, coverage.astype(np.float32), color)

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
from PIL import Image

from linechart.curve import flatten_path
from linechart.draw import CircleCommand, DrawBatch, LineCommand, PathCommand, TextCommand
from linechart.raster.canvas import RGBA, new_canvas
from linechart.raster.draw_lines import draw_line, draw_polyline
from linechart.raster.draw_markers import draw_circle
from linechart.raster.draw_text import DEFAULT_FONT_FAMILY, draw_text


DEFAULT_BACKGROUND: RGBA = (255, 255, 255, 255)
CURVE_STEPS = 24


def rasterize(
    batch: DrawBatch,
    *,
    background: RGBA = DEFAULT_BACKGROUND,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> np.ndarray:
    """Execute a draw batch onto a fresh (H, W, 4) uint8 canvas."""
    width = max(0, int(math.ceil(batch.width)))
    height = max(0, int(math.ceil(batch.height)))
    canvas = new_canvas(width, height, color=background)
    if width == 0 or height == 0:
        return canvas
    for cmd in batch.commands:
        if isinstance(cmd, LineCommand):
            draw_line(canvas, cmd.x1, cmd.y1, cmd.x2, cmd.y2, cmd.color, cmd.stroke_width)
        elif isinstance(cmd, PathCommand):
            for polyline in flatten_path(cmd.path, steps=CURVE_STEPS):
                draw_polyline(canvas, polyline, cmd.color, cmd.stroke_width, round_cap=cmd.cap == "round")
        elif isinstance(cmd, CircleCommand):
            draw_circle(canvas, cmd.cx, cmd.cy, cmd.radius, cmd.color, stroke_width=cmd.stroke_width)
        elif isinstance(cmd, TextCommand):
            draw_text(
                canvas,
                int(round(cmd.x)),
                int(round(cmd.y)),
                cmd.text,
                cmd.color,
                font_family=font_family,
                font_size_px=cmd.font_size_px,
            )
    return canvas


def save_png(batch: DrawBatch, path: Path, *, background: RGBA = DEFAULT_BACKGROUND) -> Path:
    rgba = rasterize(batch, background=background)
    Image.fromarray(rgba).save(path, format="PNG")
    return path

from .backend import rasterize, save_png
from .canvas import blend_coverage, new_canvas
from .draw_lines import draw_line, draw_polyline
from .draw_markers import draw_circle
from .draw_text import draw_text, text_size

__all__ = [
    "blend_coverage",
    "draw_circle",
    "draw_line",
    "draw_polyline",
    "draw_text",
    "new_canvas",
    "rasterize",
    "save_png",
    "text_size",
]

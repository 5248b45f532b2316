from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import json
from pathlib import Path
import re
from typing import Any, Mapping, Sequence


RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

_COLOR_FIELDS = (
    "chart_line_color",
    "unselected_color",
    "selected_color",
    "selected_fill_color",
)


@dataclass(frozen=True)
class ChartStyle:
    """Visual configuration for a line chart. All lengths are device pixels."""

    chart_line_color: RGBA = (0, 0, 0, 255)
    unselected_color: RGBA = (124, 124, 124, 255)
    selected_color: RGBA = (0, 0, 0, 255)
    helper_lines_thickness_px: float = 1.0
    axis_lines_thickness_px: float = 5.0
    label_font_size_px: float = 14.0
    min_y_label_spacing_px: float = 25.0
    vertical_padding_px: float = 8.0
    horizontal_padding_px: float = 8.0
    x_axis_label_spacing_px: float = 8.0
    chart_line_width_px: float = 5.0
    point_radius_px: float = 10.0
    selected_point_radius_px: float = 15.0
    selected_ring_width_px: float = 3.0
    selected_fill_color: RGBA = (255, 255, 255, 255)
    value_label_gap_px: float = 10.0


DEFAULT_STYLE = ChartStyle()


def parse_color(value: Any) -> RGBA:
    """Accept `#RRGGBB`, `#RRGGBBAA`, or an RGB/RGBA sequence of 0-255 ints."""
    if isinstance(value, str):
        if not _HEX_COLOR.match(value):
            raise ValueError(f"color `{value}` must be a hex color (#RRGGBB or #RRGGBBAA)")
        hex_value = value[1:]
        r = int(hex_value[0:2], 16)
        g = int(hex_value[2:4], 16)
        b = int(hex_value[4:6], 16)
        a = int(hex_value[6:8], 16) if len(hex_value) == 8 else 255
        return (r, g, b, a)
    if isinstance(value, Sequence) and len(value) in (3, 4):
        channels = [int(c) for c in value]
        if any(c < 0 or c > 255 for c in channels):
            raise ValueError("color channels must be in [0, 255]")
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise ValueError(f"unsupported color value: {value!r}")


def validate_chart_style(overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Merge user overrides over the default chart style and validate the result."""

    raw: dict[str, Any] = asdict(DEFAULT_STYLE)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown chart style key: {key}")
            raw[key] = value

    resolved: dict[str, Any] = {}
    for f in fields(ChartStyle):
        value = raw[f.name]
        if f.name in _COLOR_FIELDS:
            resolved[f.name] = parse_color(value)
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Style `{f.name}` must be a number")
        if float(value) < 0:
            raise ValueError(f"Style `{f.name}` must be >= 0")
        resolved[f.name] = float(value)

    if float(resolved["label_font_size_px"]) <= 0:
        raise ValueError("Style `label_font_size_px` must be a positive number")
    return ChartStyle(**resolved)


def load_chart_style(path: Path) -> ChartStyle:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("chart style file must contain a JSON object")
    return validate_chart_style(payload)

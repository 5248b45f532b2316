from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from linechart.draw import LineCommand, TextCommand
from linechart.series import DataPoint, ProjectedPoint
from linechart.style import ChartStyle
from linechart.text import TextMeasurer, TextMetrics
from linechart.value_label import ValueLabel


VIEWPORT_TOP_GAP_PX = 10.0
SELECTED_HELPER_LINE_SCALE = 1.8


@dataclass(frozen=True)
class Viewport:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class AxisLabel:
    text: TextCommand
    helper_line: LineCommand | None = None


@dataclass(frozen=True)
class LayoutResult:
    """Geometry for one frame of the chart.

    `feasible` is False when the canvas is too short to hold the x labels and
    paddings; everything is still computed so callers can draw a degraded frame.
    """

    viewport: Viewport
    visible_range: tuple[int, int]
    points: tuple[ProjectedPoint, ...]
    x_labels: tuple[AxisLabel, ...]
    y_labels: tuple[AxisLabel, ...]
    value_label: TextCommand | None
    x_label_slot_width: float
    line_height: float
    label_count: int
    feasible: bool = True

    @classmethod
    def empty(cls, visible_range: tuple[int, int] = (0, 0)) -> "LayoutResult":
        return cls(
            viewport=Viewport(0.0, 0.0, 0.0, 0.0),
            visible_range=visible_range,
            points=(),
            x_labels=(),
            y_labels=(),
            value_label=None,
            x_label_slot_width=0.0,
            line_height=0.0,
            label_count=0,
        )

    @property
    def is_empty(self) -> bool:
        return not self.points


def clamp_visible_range(visible_range: tuple[int, int], size: int) -> tuple[int, int] | None:
    """Clip an inclusive index window to a series of `size`; None when nothing remains."""
    if size <= 0:
        return None
    start = max(0, int(visible_range[0]))
    end = min(size - 1, int(visible_range[1]))
    if start > end:
        return None
    return (start, end)


def y_label_count(label_viewport_height: float, line_height: float, min_spacing: float) -> int:
    """Gaps between y labels that fit; 0 means a lone label showing the max value."""
    step = line_height + min_spacing
    if step <= 0 or label_viewport_height <= 0:
        return 0
    return int(math.floor(label_viewport_height / step))


def y_label_values(max_y: float, min_y: float, label_count: int) -> list[float]:
    if label_count <= 0:
        return [max_y]
    increment = (max_y - min_y) / label_count
    return [max_y - increment * i for i in range(label_count + 1)]


def compute_layout(
    points: Sequence[DataPoint],
    visible_range: tuple[int, int],
    style: ChartStyle,
    canvas_size: tuple[float, float],
    *,
    measurer: TextMeasurer,
    unit: str = "",
    selected_index: int | None = None,
    show_helper_lines: bool = True,
) -> LayoutResult:
    """Lay out axes, labels and projected points for the visible slice of `points`.

    `selected_index` is absolute within `points`. Never raises for degenerate
    input: empty series, inverted ranges, tiny canvases and flat series all
    produce a well-defined result.
    """
    window = clamp_visible_range(visible_range, len(points))
    if window is None:
        return LayoutResult.empty(visible_range=(int(visible_range[0]), int(visible_range[1])))
    start, end = window
    visible = list(points[start : end + 1])
    canvas_w, canvas_h = float(canvas_size[0]), float(canvas_size[1])
    font_px = style.label_font_size_px
    x_spacing = style.x_axis_label_spacing_px

    ys = np.asarray([p.y for p in visible], dtype=np.float64)
    max_y = float(np.max(ys))
    min_y = float(np.min(ys))

    x_metrics = [measurer.measure(p.label, font_px) for p in visible]
    max_label_w = max(m.width for m in x_metrics)
    max_label_h = max(m.height for m in x_metrics)
    max_line_count = max(m.line_count for m in x_metrics)
    line_height = max_label_h / max_line_count if max_line_count > 0 else 0.0

    viewport_height = canvas_h - (max_label_h + 2 * style.vertical_padding_px + line_height + x_spacing)
    label_viewport_height = viewport_height + line_height
    label_count = y_label_count(label_viewport_height, line_height, style.min_y_label_spacing_px)

    y_texts = [ValueLabel(value, unit).formatted() for value in y_label_values(max_y, min_y, label_count)]
    y_metrics = [measurer.measure(text, font_px) for text in y_texts]
    max_y_label_w = max(m.width for m in y_metrics)

    top = style.vertical_padding_px + line_height + VIEWPORT_TOP_GAP_PX
    viewport = Viewport(
        left=2 * style.horizontal_padding_px + max_y_label_w,
        top=top,
        right=canvas_w,
        bottom=top + viewport_height,
    )
    slot_width = max_label_w + x_spacing

    local = np.arange(len(visible), dtype=np.float64)
    px = viewport.left + local * slot_width + slot_width / 2.0
    span = max_y - min_y
    # Flat series: every point sits on the viewport bottom.
    ratio = np.zeros_like(ys) if span == 0 else (ys - min_y) / span
    py = viewport.bottom - ratio * viewport_height
    projected = tuple(
        ProjectedPoint(x=float(x), y=float(y), label=p.label) for x, y, p in zip(px.tolist(), py.tolist(), visible)
    )

    selected_local: int | None = None
    if selected_index is not None and start <= selected_index <= end:
        selected_local = selected_index - start

    x_labels: list[AxisLabel] = []
    value_label: TextCommand | None = None
    for i, (point, metrics) in enumerate(zip(visible, x_metrics)):
        is_selected = i == selected_local
        color = style.selected_color if is_selected else style.unselected_color
        label_x = viewport.left + x_spacing / 2.0 + slot_width * i
        text = TextCommand(
            text=point.label,
            x=label_x,
            y=viewport.bottom + x_spacing,
            color=color,
            font_size_px=font_px,
            width=metrics.width,
            height=metrics.height,
        )
        helper: LineCommand | None = None
        if show_helper_lines:
            line_x = label_x + metrics.width / 2.0
            thickness = style.helper_lines_thickness_px
            if is_selected:
                thickness *= SELECTED_HELPER_LINE_SCALE
            helper = LineCommand(line_x, viewport.bottom, line_x, viewport.top, color, thickness)
        x_labels.append(AxisLabel(text=text, helper_line=helper))
        if is_selected:
            value_label = _selected_value_label(
                point,
                label_x=label_x,
                label_metrics=metrics,
                is_last=start + i == end,
                viewport=viewport,
                canvas_w=canvas_w,
                style=style,
                measurer=measurer,
                unit=unit,
            )

    if label_count > 0:
        space = (label_viewport_height - line_height * (label_count + 1)) / label_count
        label_tops = [viewport.top + i * (line_height + space) - line_height / 2.0 for i in range(label_count + 1)]
    else:
        label_tops = [viewport.top + viewport_height / 2.0 - line_height / 2.0]

    y_labels: list[AxisLabel] = []
    for text_value, metrics, label_y in zip(y_texts, y_metrics, label_tops):
        text = TextCommand(
            text=text_value,
            x=style.horizontal_padding_px + max_y_label_w - metrics.width,
            y=label_y,
            color=style.unselected_color,
            font_size_px=font_px,
            width=metrics.width,
            height=metrics.height,
        )
        helper = None
        if show_helper_lines:
            line_y = label_y + metrics.height / 2.0
            helper = LineCommand(
                viewport.left,
                line_y,
                viewport.right,
                line_y,
                style.unselected_color,
                style.helper_lines_thickness_px,
            )
        y_labels.append(AxisLabel(text=text, helper_line=helper))

    return LayoutResult(
        viewport=viewport,
        visible_range=(start, end),
        points=projected,
        x_labels=tuple(x_labels),
        y_labels=tuple(y_labels),
        value_label=value_label,
        x_label_slot_width=slot_width,
        line_height=line_height,
        label_count=label_count,
        feasible=viewport_height >= 0,
    )


def _selected_value_label(
    point: DataPoint,
    *,
    label_x: float,
    label_metrics: TextMetrics,
    is_last: bool,
    viewport: Viewport,
    canvas_w: float,
    style: ChartStyle,
    measurer: TextMeasurer,
    unit: str,
) -> TextCommand | None:
    text = ValueLabel(point.y, unit).formatted()
    metrics = measurer.measure(text, style.label_font_size_px)
    # The last visible point right-aligns its value so it stays on canvas.
    if is_last:
        text_x = label_x - metrics.width
    else:
        text_x = label_x - metrics.width / 2.0
    text_x += label_metrics.width / 2.0
    if not 0 <= round(canvas_w - text_x) <= round(canvas_w):
        return None
    return TextCommand(
        text=text,
        x=text_x,
        y=viewport.top - metrics.height - style.value_label_gap_px,
        color=style.selected_color,
        font_size_px=style.label_font_size_px,
        width=metrics.width,
        height=metrics.height,
    )

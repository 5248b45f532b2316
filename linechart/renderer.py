from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Literal, Sequence

from linechart.curve import build_path
from linechart.draw import CircleCommand, DrawBatch, DrawCommand, LineCommand, PathCommand
from linechart.layout import LayoutResult, compute_layout
from linechart.selection import NO_SELECTION, selected_index
from linechart.series import DataPoint
from linechart.style import DEFAULT_STYLE, ChartStyle
from linechart.text import PillowTextMeasurer, TextMeasurer
from linechart.viewport import visible_range_for


LOGGER = logging.getLogger(__name__)

ChartState = Literal["idle", "dragging"]

MAX_FIT_PASSES = 4


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of one drag update.

    `local_index` is relative to the visible slice (-1 on a miss);
    `absolute_index` and `data_point` refer to the full series.
    """

    local_index: int
    absolute_index: int | None
    data_point: DataPoint | None
    is_showing_markers: bool


class LineChart:
    """Composition root: lays out a series, emits draw batches and tracks drag selection.

    Every call is synchronous. The projected points from the latest layout
    are kept only so drag updates can be hit-tested against what was drawn.
    """

    def __init__(
        self,
        style: ChartStyle = DEFAULT_STYLE,
        *,
        unit: str = "",
        measurer: TextMeasurer | None = None,
        show_helper_lines: bool = True,
        on_selected_data_point: Callable[[DataPoint], None] | None = None,
        on_x_label_slot_width_change: Callable[[float], None] | None = None,
        selected_index: int | None = None,
    ) -> None:
        self.style = style
        self.unit = unit
        self.measurer: TextMeasurer = measurer if measurer is not None else PillowTextMeasurer()
        self.show_helper_lines = show_helper_lines
        self._on_selected_data_point = on_selected_data_point
        self._on_x_label_slot_width_change = on_x_label_slot_width_change
        self._selected_index = selected_index
        self._is_showing_markers = selected_index is not None
        self._state: ChartState = "idle"
        self._points: tuple[DataPoint, ...] = ()
        self._visible_range: tuple[int, int] = (0, 0)
        self._canvas_size: tuple[float, float] = (0.0, 0.0)
        self._layout = LayoutResult.empty()
        self._reported_slot_width: float | None = None
        self._was_feasible = True

    @property
    def state(self) -> ChartState:
        return self._state

    @property
    def layout(self) -> LayoutResult:
        return self._layout

    @property
    def selected_index(self) -> int | None:
        return self._selected_index

    @property
    def selected_data_point(self) -> DataPoint | None:
        if self._selected_index is None or not 0 <= self._selected_index < len(self._points):
            return None
        return self._points[self._selected_index]

    @property
    def is_showing_markers(self) -> bool:
        return self._is_showing_markers

    def select(self, index: int | None) -> None:
        self._selected_index = index
        self._is_showing_markers = index is not None
        if self._points:
            self._relayout()

    def render(
        self,
        points: Sequence[DataPoint],
        visible_range: tuple[int, int],
        canvas_size: tuple[float, float],
    ) -> DrawBatch:
        self._points = tuple(points)
        self._visible_range = (int(visible_range[0]), int(visible_range[1]))
        self._canvas_size = (float(canvas_size[0]), float(canvas_size[1]))
        self._relayout()
        self._report_slot_width(self._layout.x_label_slot_width)
        return self.draw_batch()

    def render_latest(self, points: Sequence[DataPoint], canvas_size: tuple[float, float]) -> DrawBatch:
        """Render the newest points that fit the canvas width.

        Repeats the slot-width feedback loop until the visible range settles,
        since the slot width depends on which labels are visible.
        """
        visible = (0, max(0, len(points) - 1))
        batch = self.render(points, visible, canvas_size)
        for _ in range(MAX_FIT_PASSES):
            next_visible = visible_range_for(len(points), float(canvas_size[0]), self._layout.x_label_slot_width)
            if next_visible == visible:
                break
            visible = next_visible
            batch = self.render(points, visible, canvas_size)
        return batch

    def redraw(self) -> DrawBatch:
        return self.draw_batch()

    def on_drag_start(self) -> None:
        self._state = "dragging"

    def on_drag_update(self, pointer_x: float) -> SelectionResult:
        if self._state == "idle":
            self._state = "dragging"
        layout = self._layout
        local = selected_index(pointer_x, layout.x_label_slot_width, layout.points)
        start, end = layout.visible_range
        absolute = start + local
        self._is_showing_markers = local != NO_SELECTION and start <= absolute <= end
        if not self._is_showing_markers:
            # Markers hide but the previous selection stays highlighted.
            return SelectionResult(local_index=local, absolute_index=None, data_point=None, is_showing_markers=False)

        point = self._points[absolute]
        if absolute != self._selected_index:
            self._selected_index = absolute
            self._relayout()
        if self._on_selected_data_point is not None:
            self._on_selected_data_point(point)
        return SelectionResult(local_index=local, absolute_index=absolute, data_point=point, is_showing_markers=True)

    def on_drag_end(self) -> None:
        self._state = "idle"

    def draw_batch(self) -> DrawBatch:
        layout = self._layout
        commands: list[DrawCommand] = []
        for label in layout.x_labels:
            commands.append(label.text)
            if label.helper_line is not None:
                commands.append(label.helper_line)
        if layout.value_label is not None:
            commands.append(layout.value_label)
        for label in layout.y_labels:
            commands.append(label.text)
            if label.helper_line is not None:
                commands.append(label.helper_line)
        if layout.is_empty:
            return DrawBatch(width=self._canvas_size[0], height=self._canvas_size[1], commands=tuple(commands))

        commands.extend(self._axis_lines(layout))
        path = build_path(layout.points)
        if not path.is_empty:
            commands.append(
                PathCommand(
                    path=path,
                    color=self.style.chart_line_color,
                    stroke_width=self.style.chart_line_width_px,
                    cap="round",
                )
            )
        if self._is_showing_markers:
            commands.extend(self._markers(layout))
        return DrawBatch(width=self._canvas_size[0], height=self._canvas_size[1], commands=tuple(commands))

    def _relayout(self) -> None:
        layout = compute_layout(
            self._points,
            self._visible_range,
            self.style,
            self._canvas_size,
            measurer=self.measurer,
            unit=self.unit,
            selected_index=self._selected_index,
            show_helper_lines=self.show_helper_lines,
        )
        LOGGER.debug(
            "chart layout: range=%s slot_width=%.2f y_labels=%d viewport=%s",
            layout.visible_range,
            layout.x_label_slot_width,
            layout.label_count,
            layout.viewport,
        )
        if not layout.feasible and self._was_feasible:
            LOGGER.warning(
                "canvas %sx%s is too short for chart labels; enlarge it or reduce label size",
                self._canvas_size[0],
                self._canvas_size[1],
            )
        self._was_feasible = layout.feasible
        self._layout = layout

    def _report_slot_width(self, width: float) -> None:
        if self._reported_slot_width == width:
            return
        self._reported_slot_width = width
        if self._on_x_label_slot_width_change is not None:
            self._on_x_label_slot_width_change(width)

    def _axis_lines(self, layout: LayoutResult) -> list[LineCommand]:
        thickness = self.style.axis_lines_thickness_px
        if thickness <= 0:
            return []
        vp = layout.viewport
        color = self.style.unselected_color
        return [
            LineCommand(vp.left, vp.top, vp.left, vp.bottom, color, thickness),
            LineCommand(vp.left, vp.bottom, vp.right, vp.bottom, color, thickness),
        ]

    def _markers(self, layout: LayoutResult) -> list[CircleCommand]:
        style = self.style
        start, _ = layout.visible_range
        selected_local = None if self._selected_index is None else self._selected_index - start
        out: list[CircleCommand] = []
        for i, point in enumerate(layout.points):
            out.append(CircleCommand(point.x, point.y, style.point_radius_px, style.selected_color))
            if i == selected_local:
                out.append(CircleCommand(point.x, point.y, style.selected_point_radius_px, style.selected_fill_color))
                out.append(
                    CircleCommand(
                        point.x,
                        point.y,
                        style.selected_point_radius_px,
                        style.selected_color,
                        stroke_width=style.selected_ring_width_px,
                    )
                )
        return out

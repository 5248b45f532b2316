from linechart.curve import CubicTo, MoveTo, PathCommands, build_path, control_points, flatten_path
from linechart.draw import CircleCommand, DrawBatch, LineCommand, PathCommand, TextCommand
from linechart.errors import ChartDataError
from linechart.layout import LayoutResult, Viewport, compute_layout
from linechart.renderer import LineChart, SelectionResult
from linechart.selection import NO_SELECTION, selected_index
from linechart.series import DataPoint, ProjectedPoint
from linechart.style import DEFAULT_STYLE, ChartStyle, load_chart_style, validate_chart_style
from linechart.text import MonospaceTextMeasurer, PillowTextMeasurer, TextMeasurer, TextMetrics
from linechart.value_label import ValueLabel
from linechart.viewport import trailing_visible_range, visible_point_count, visible_range_for

__all__ = [
    "ChartDataError",
    "ChartStyle",
    "CircleCommand",
    "CubicTo",
    "DEFAULT_STYLE",
    "DataPoint",
    "DrawBatch",
    "LayoutResult",
    "LineChart",
    "LineCommand",
    "MonospaceTextMeasurer",
    "MoveTo",
    "NO_SELECTION",
    "PathCommand",
    "PathCommands",
    "PillowTextMeasurer",
    "ProjectedPoint",
    "SelectionResult",
    "TextCommand",
    "TextMeasurer",
    "TextMetrics",
    "ValueLabel",
    "Viewport",
    "build_path",
    "compute_layout",
    "control_points",
    "flatten_path",
    "load_chart_style",
    "selected_index",
    "trailing_visible_range",
    "validate_chart_style",
    "visible_point_count",
    "visible_range_for",
]

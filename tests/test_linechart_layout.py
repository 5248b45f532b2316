from __future__ import annotations

import unittest

from linechart.layout import (
    LayoutResult,
    Viewport,
    clamp_visible_range,
    compute_layout,
    y_label_count,
    y_label_values,
)
from linechart.series import DataPoint
from linechart.style import DEFAULT_STYLE
from linechart.text import MonospaceTextMeasurer


MEASURER = MonospaceTextMeasurer()


def _scenario_points() -> list[DataPoint]:
    return [DataPoint(float(i), y, label) for i, (y, label) in enumerate(zip([1, 2, 3, 2, 1], "abcde"))]


def _layout(points, visible_range=None, canvas=(500.0, 300.0), **kwargs) -> LayoutResult:
    if visible_range is None:
        visible_range = (0, len(points) - 1)
    return compute_layout(points, visible_range, DEFAULT_STYLE, canvas, measurer=MEASURER, **kwargs)


class LayoutEngineTests(unittest.TestCase):
    def test_empty_series_returns_empty_layout(self) -> None:
        layout = compute_layout([], (0, 0), DEFAULT_STYLE, (800.0, 400.0), measurer=MEASURER)
        self.assertTrue(layout.is_empty)
        self.assertEqual(layout.viewport, Viewport(0.0, 0.0, 0.0, 0.0))
        self.assertEqual(layout.x_label_slot_width, 0.0)
        self.assertEqual(layout.x_labels, ())
        self.assertEqual(layout.y_labels, ())
        self.assertIsNone(layout.value_label)

    def test_range_outside_series_returns_empty_layout(self) -> None:
        self.assertTrue(_layout(_scenario_points(), visible_range=(7, 9)).is_empty)
        self.assertTrue(_layout(_scenario_points(), visible_range=(3, 1)).is_empty)

    def test_end_to_end_geometry(self) -> None:
        layout = _layout(_scenario_points())
        vp = layout.viewport
        self.assertTrue(layout.feasible)
        self.assertGreater(vp.height, 0)
        self.assertAlmostEqual(layout.line_height, 16.8)
        self.assertAlmostEqual(vp.height, 242.4)
        self.assertAlmostEqual(vp.left, 58.0)
        self.assertAlmostEqual(vp.top, 34.8)
        self.assertAlmostEqual(vp.bottom, 277.2)
        self.assertEqual(vp.right, 500.0)
        self.assertAlmostEqual(layout.x_label_slot_width, 16.4)
        self.assertEqual(layout.label_count, 6)

        self.assertEqual(len(layout.points), 5)
        xs = [p.x for p in layout.points]
        for actual, expected in zip(xs, [66.2, 82.6, 99.0, 115.4, 131.8]):
            self.assertAlmostEqual(actual, expected)
        ys = [p.y for p in layout.points]
        self.assertEqual(ys.index(min(ys)), 2)
        self.assertAlmostEqual(min(ys), vp.top)
        self.assertAlmostEqual(ys[0], vp.bottom)
        self.assertAlmostEqual(ys[4], vp.bottom)

    def test_y_labels_descend_and_right_align(self) -> None:
        layout = _layout(_scenario_points())
        texts = [label.text.text for label in layout.y_labels]
        self.assertEqual(texts, ["3", "2.67", "2.33", "2", "1.667", "1.333", "1"])
        right_edge = DEFAULT_STYLE.horizontal_padding_px + 42.0
        for label in layout.y_labels:
            self.assertAlmostEqual(label.text.x + label.text.width, right_edge)
            self.assertEqual(label.text.color, DEFAULT_STYLE.unselected_color)
        tops = [label.text.y for label in layout.y_labels]
        self.assertAlmostEqual(tops[0], layout.viewport.top - layout.line_height / 2.0)
        self.assertEqual(tops, sorted(tops))

    def test_y_helper_lines_span_viewport(self) -> None:
        layout = _layout(_scenario_points())
        for label in layout.y_labels:
            line = label.helper_line
            self.assertIsNotNone(line)
            self.assertEqual(line.x1, layout.viewport.left)
            self.assertEqual(line.x2, layout.viewport.right)
            self.assertAlmostEqual(line.y1, label.text.y + label.text.height / 2.0)

    def test_x_helper_lines_pass_through_points(self) -> None:
        layout = _layout(_scenario_points())
        for label, point in zip(layout.x_labels, layout.points):
            self.assertAlmostEqual(label.helper_line.x1, point.x)
            self.assertAlmostEqual(label.text.y, layout.viewport.bottom + DEFAULT_STYLE.x_axis_label_spacing_px)
            self.assertEqual(label.helper_line.stroke_width, DEFAULT_STYLE.helper_lines_thickness_px)

    def test_helper_lines_can_be_disabled(self) -> None:
        layout = _layout(_scenario_points(), show_helper_lines=False)
        self.assertTrue(all(label.helper_line is None for label in layout.x_labels))
        self.assertTrue(all(label.helper_line is None for label in layout.y_labels))

    def test_flat_series_sits_on_viewport_bottom(self) -> None:
        points = [DataPoint(float(i), 5.0, label) for i, label in enumerate("abc")]
        layout = _layout(points)
        for point in layout.points:
            self.assertEqual(point.y, layout.viewport.bottom)
        self.assertTrue(all(label.text.text == "5" for label in layout.y_labels))

    def test_layout_is_idempotent(self) -> None:
        points = _scenario_points()
        self.assertEqual(_layout(points, selected_index=2), _layout(points, selected_index=2))

    def test_selected_label_is_highlighted(self) -> None:
        layout = _layout(_scenario_points(), selected_index=2)
        selected = layout.x_labels[2]
        self.assertEqual(selected.text.color, DEFAULT_STYLE.selected_color)
        self.assertAlmostEqual(selected.helper_line.stroke_width, DEFAULT_STYLE.helper_lines_thickness_px * 1.8)
        self.assertEqual(layout.x_labels[0].text.color, DEFAULT_STYLE.unselected_color)

    def test_value_label_is_centered_over_selected_label(self) -> None:
        layout = _layout(_scenario_points(), selected_index=2)
        value = layout.value_label
        self.assertIsNotNone(value)
        self.assertEqual(value.text, "3")
        self.assertAlmostEqual(value.x, 94.8)
        self.assertAlmostEqual(value.y, 8.0)
        self.assertEqual(value.color, DEFAULT_STYLE.selected_color)

    def test_value_label_right_aligns_on_last_visible_point(self) -> None:
        layout = _layout(_scenario_points(), selected_index=4)
        self.assertAlmostEqual(layout.value_label.x, 123.4)

    def test_selected_index_is_absolute(self) -> None:
        points = _scenario_points()
        layout = _layout(points, visible_range=(2, 4), selected_index=3)
        self.assertEqual(layout.x_labels[1].text.color, DEFAULT_STYLE.selected_color)
        self.assertEqual(layout.value_label.text, "2")
        hidden = _layout(points, visible_range=(2, 4), selected_index=0)
        self.assertIsNone(hidden.value_label)

    def test_short_canvas_is_infeasible_but_well_defined(self) -> None:
        layout = _layout(_scenario_points(), canvas=(500.0, 40.0))
        self.assertFalse(layout.feasible)
        self.assertEqual(layout.label_count, 0)
        self.assertEqual(len(layout.y_labels), 1)
        self.assertEqual(layout.y_labels[0].text.text, "3")
        self.assertEqual(len(layout.points), 5)

    def test_zero_canvas_does_not_raise(self) -> None:
        layout = _layout(_scenario_points(), canvas=(0.0, 0.0))
        self.assertFalse(layout.feasible)
        self.assertEqual(len(layout.points), 5)


class LayoutHelperTests(unittest.TestCase):
    def test_clamp_visible_range(self) -> None:
        self.assertEqual(clamp_visible_range((-3, 20), 5), (0, 4))
        self.assertIsNone(clamp_visible_range((0, 0), 0))
        self.assertIsNone(clamp_visible_range((4, 2), 5))

    def test_y_label_count_guards_degenerate_input(self) -> None:
        self.assertEqual(y_label_count(259.2, 16.8, 25.0), 6)
        self.assertEqual(y_label_count(-1.0, 16.8, 25.0), 0)
        self.assertEqual(y_label_count(100.0, 0.0, 0.0), 0)

    def test_y_label_values_include_both_ends(self) -> None:
        self.assertEqual(y_label_values(10.0, 0.0, 2), [10.0, 5.0, 0.0])
        self.assertEqual(y_label_values(10.0, 0.0, 0), [10.0])


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import unittest

from linechart.viewport import trailing_visible_range, visible_point_count, visible_range_for


class VisibleWindowTests(unittest.TestCase):
    def test_no_points_fit_before_slot_width_is_known(self) -> None:
        self.assertEqual(visible_point_count(500.0, 0.0), 0)
        self.assertEqual(visible_point_count(500.0, -3.0), 0)

    def test_point_count_reserves_two_and_a_half_slots(self) -> None:
        self.assertEqual(visible_point_count(500.0, 16.4), 27)
        self.assertEqual(visible_point_count(100.0, 10.0), 7)

    def test_narrow_chart_clamps_to_zero(self) -> None:
        self.assertEqual(visible_point_count(10.0, 8.0), 0)

    def test_trailing_range_ends_at_newest_point(self) -> None:
        self.assertEqual(trailing_visible_range(10, 3), (6, 9))
        self.assertEqual(trailing_visible_range(10, 100), (0, 9))
        self.assertEqual(trailing_visible_range(0, 5), (0, 0))

    def test_visible_range_for_unknown_slot_width_shows_last_point(self) -> None:
        self.assertEqual(visible_range_for(10, 500.0, 0.0), (9, 9))
        self.assertEqual(visible_range_for(10, 100.0, 10.0), (2, 9))


if __name__ == "__main__":
    unittest.main()

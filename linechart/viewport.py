from __future__ import annotations


# Horizontal room kept free of data slots, measured in slot widths.
RESERVED_SLOTS = 2.5


def visible_point_count(chart_width: float, slot_width: float) -> int:
    """How many points fit beyond the first one for a reported x-label slot width.

    Returns 0 until the chart has reported a positive slot width.
    """
    if slot_width <= 0:
        return 0
    return max(0, int((chart_width - RESERVED_SLOTS * slot_width) / slot_width))


def trailing_visible_range(series_length: int, count: int) -> tuple[int, int]:
    """Inclusive window ending at the newest point and reaching back `count` points."""
    last_index = max(0, series_length - 1)
    start = max(0, last_index - count)
    return (start, last_index)


def visible_range_for(series_length: int, chart_width: float, slot_width: float) -> tuple[int, int]:
    return trailing_visible_range(series_length, visible_point_count(chart_width, slot_width))

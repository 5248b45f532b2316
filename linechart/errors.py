from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when input handed to the chart from outside cannot be turned into data points."""

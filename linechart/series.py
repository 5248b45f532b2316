from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DataPoint:
    """Single chart point in plot space.

    `label` is the pre-formatted x-axis caption and may span several lines.
    Control points synthesized for curves carry an empty label.
    """

    x: float
    y: float
    label: str = ""


@dataclass(frozen=True)
class ProjectedPoint:
    """A data point after projection into canvas pixels."""

    x: float
    y: float
    label: str = ""

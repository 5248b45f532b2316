from __future__ import annotations

from typing import Sequence

import numpy as np

from linechart.series import ProjectedPoint


NO_SELECTION = -1


def selected_index(pointer_x: float, trigger_width: float, points: Sequence[ProjectedPoint]) -> int:
    """Index of the first point whose x lies within `trigger_width / 2` of the pointer.

    Overlapping trigger windows resolve to the leftmost (lowest) index.
    Returns `NO_SELECTION` when nothing is in range.
    """
    if not points:
        return NO_SELECTION
    left = pointer_x - trigger_width / 2.0
    right = pointer_x + trigger_width / 2.0
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    hits = np.flatnonzero((xs >= left) & (xs <= right))
    if hits.size == 0:
        return NO_SELECTION
    return int(hits[0])

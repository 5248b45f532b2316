from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
import json
import math
from pathlib import Path
from typing import Any

import numpy as np

from linechart.errors import ChartDataError
from linechart.series import DataPoint


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def x_axis_label(ts: datetime) -> str:
    """Two-line caption such as ``"3PM\\n7/14"``: 12-hour clock, then month/day."""
    hour = ts.hour % 12 or 12
    meridiem = "AM" if ts.hour < 12 else "PM"
    return f"{hour}{meridiem}\n{ts.month}/{ts.day}"


def prices_to_data_points(values: Sequence[Any], timestamps: Sequence[Any]) -> list[DataPoint]:
    """Turn parallel value/timestamp sequences into chart points.

    `x` is the hour of day and the label follows :func:`x_axis_label`.
    Timestamps may be datetimes, ISO-8601 strings or epoch seconds (UTC).
    """
    value_arr = _coerce_values(values)
    if len(timestamps) != value_arr.size:
        raise ChartDataError(f"values and timestamps length mismatch: {value_arr.size} != {len(timestamps)}")
    out: list[DataPoint] = []
    for value, raw_ts in zip(value_arr.tolist(), timestamps):
        ts = parse_timestamp(raw_ts)
        out.append(DataPoint(x=float(ts.hour), y=float(value), label=x_axis_label(ts)))
    return out


def prices_from_frame(data: Any, *, value: str = "value", timestamp: str = "timestamp") -> list[DataPoint]:
    if pd is None:
        raise ChartDataError("pandas is required for DataFrame input")
    if not isinstance(data, pd.DataFrame):
        raise ChartDataError("`data` must be a pandas DataFrame")
    for column in (value, timestamp):
        if column not in data.columns:
            raise ChartDataError(f"column '{column}' not found in DataFrame")
    return prices_to_data_points(data[value].to_numpy(), list(data[timestamp]))


def load_price_history(path: str | Path) -> list[DataPoint]:
    """Read a JSON list of ``{"value", "timestamp"}`` objects."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ChartDataError(f"price history is not valid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise ChartDataError("price history must be a JSON list")
    values: list[Any] = []
    timestamps: list[Any] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict) or "value" not in item or "timestamp" not in item:
            raise ChartDataError(f"entry {i} must be an object with 'value' and 'timestamp'")
        values.append(item["value"])
        timestamps.append(item["timestamp"])
    return prices_to_data_points(values, timestamps)


def parse_timestamp(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, bool):
        raise ChartDataError(f"invalid timestamp: {raw!r}")
    if isinstance(raw, (int, float, np.integer, np.floating)):
        seconds = float(raw)
        if not math.isfinite(seconds):
            raise ChartDataError(f"invalid timestamp: {raw!r}")
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ChartDataError(f"timestamp out of range: {raw!r}") from exc
    if isinstance(raw, str):
        text = raw.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError as exc:
            raise ChartDataError(f"invalid timestamp: {raw!r}") from exc
    raise ChartDataError(f"unsupported timestamp type: {type(raw).__name__}")


def _coerce_values(values: Any) -> np.ndarray:
    if isinstance(values, (str, bytes)):
        raise ChartDataError("values must be a numeric sequence")
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise ChartDataError("values must be numeric") from exc
    if arr.ndim != 1:
        raise ChartDataError(f"values must be 1D, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ChartDataError("values must be finite")
    return arr

"""Bubble radius normalization for scatter series.

Raw size-metric values are rescaled linearly from the observed size extent onto
`[MINIMUM_BUBBLE_SIZE, MINIMUM_BUBBLE_SIZE + 2 * max_bubble_size]` so bubbles
stay legible regardless of the metric's magnitude.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any, Final

from .dto import PointTuple, ScatterSeries, SizeBounds

MINIMUM_BUBBLE_SIZE: Final[int] = 5


def coerce_size(value: Any) -> float | None:
    """Return a finite float for numeric size values, otherwise None.

    Args:
        value: Raw size component of a point tuple.

    Returns:
        The value as a float, or None for missing, non-numeric, boolean, NaN or
        infinite values. Never returns NaN.
    """

    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    try:
        size = float(value)
    except (OverflowError, ValueError):
        return None
    return size if math.isfinite(size) else None


def _first_point(series: ScatterSeries) -> PointTuple | None:
    data = series.get("data") or ()
    return data[0] if data else None


def _series_size(series: ScatterSeries) -> float | None:
    point = _first_point(series)
    return coerce_size(point.size) if point is not None else None


def size_bounds(series: Iterable[ScatterSeries]) -> SizeBounds | None:
    """Compute the (min, max) raw size extent across series.

    Args:
        series: Scatter series whose first point carries the size component.

    Returns:
        `(min, max)` over all numeric sizes, or None when no series has one.
    """

    lower: float | None = None
    upper: float | None = None
    for item in series:
        size = _series_size(item)
        if size is None:
            continue
        if lower is None or size < lower:
            lower = size
        if upper is None or size > upper:
            upper = size
    if lower is None or upper is None:
        return None
    return lower, upper


def _scaled_offset(size: float, *, bounds: SizeBounds, max_bubble_size: float) -> float:
    """Return the radius offset above the minimum for one size value.

    A zero-width extent (every size equal) has no meaningful position inside the
    domain, so every bubble gets a zero offset and renders at the minimum.
    """

    lower, upper = bounds
    spread = upper - lower
    if spread == 0:
        return 0.0
    offset = (size - lower) / spread * (max_bubble_size * 2)
    return offset if math.isfinite(offset) else 0.0


def normalize_symbol_size(series: Sequence[ScatterSeries], max_bubble_size: float) -> None:
    """Assign `symbolSize` in place for every series with a numeric size.

    Args:
        series: Scatter series to update.
        max_bubble_size: Maximum bubble radius control value; the largest size
            maps to `MINIMUM_BUBBLE_SIZE + 2 * max_bubble_size`.

    Series without a numeric size are left untouched, as is every series when no
    numeric size exists at all (the renderer then applies its own default).
    """

    bounds = size_bounds(series)
    if bounds is None:
        return

    for item in series:
        size = _series_size(item)
        if size is None:
            continue
        item["symbolSize"] = (
            _scaled_offset(size, bounds=bounds, max_bubble_size=max_bubble_size) + MINIMUM_BUBBLE_SIZE
        )

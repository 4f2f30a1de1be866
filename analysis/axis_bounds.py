"""Axis bound and margin parsing helpers.

Axis controls arrive as loosely typed form values (strings, numbers, or
nothing). These helpers never raise: an unusable value means "unset" and the
renderer auto-scales that side of the axis.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Final, Literal, TypedDict

AxisType = Literal["value", "log"]

_LEADING_INT_RE: Final[re.Pattern[str]] = re.compile(r"^\s*([+-]?\d+)")


class AxisBounds(TypedDict, total=False):
    """Explicit min/max keys merged into an axis option."""

    min: float
    max: float


def parse_axis_bound(bound: Any) -> float | None:
    """Parse a single user-supplied axis bound.

    Args:
        bound: Raw bound from form data (string, number, or None).

    Returns:
        The bound as a finite float, or None when it is missing, blank, or does
        not parse to a number.
    """

    if bound is None or isinstance(bound, bool):
        return None
    if isinstance(bound, str):
        bound = bound.strip()
        if not bound:
            return None
    if not isinstance(bound, (str, int, float, Decimal)):
        return None
    try:
        parsed = float(bound)
    except (OverflowError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def parse_axis_bounds(bounds: Any) -> tuple[float | None, float | None]:
    """Parse a `(min, max)` pair; each side is parsed independently."""

    if not isinstance(bounds, (list, tuple)):
        return None, None
    lower = parse_axis_bound(bounds[0]) if len(bounds) > 0 else None
    upper = parse_axis_bound(bounds[1]) if len(bounds) > 1 else None
    return lower, upper


def convert_integer(value: Any) -> int:
    """Convert a margin-like control value into an int.

    Strings use their leading integer part (`"12.5"` → 12); empty or invalid
    strings, and anything non-numeric, become 0.
    """

    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT_RE.match(value)
        return int(match.group(1)) if match else 0
    return 0


def min_and_max_from_bounds(
    axis_type: AxisType,
    truncate_axis: bool,
    min_value: float | None,
    max_value: float | None,
) -> AxisBounds:
    """Return explicit axis bounds for truncated linear axes.

    Args:
        axis_type: Renderer axis type.
        truncate_axis: Whether the user asked to truncate the axis.
        min_value: Parsed lower bound, or None.
        max_value: Parsed upper bound, or None.

    Returns:
        A dict with the defined bounds, or an empty dict for log axes and
        untruncated axes.
    """

    bounds: AxisBounds = {}
    if axis_type != "value" or not truncate_axis:
        return bounds
    if min_value is not None:
        bounds["min"] = min_value
    if max_value is not None:
        bounds["max"] = max_value
    return bounds

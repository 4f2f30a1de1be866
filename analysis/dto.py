"""DTO types shared by the bubble chart pipeline.

DTOs are plain data containers used to transport chart inputs and outputs
between the pure analysis helpers and the charting layer. They intentionally
avoid any Django dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, NamedTuple, TypedDict

Row = Mapping[str, Any]


class PointTuple(NamedTuple):
    """One plotted observation.

    The renderer consumes the tuple positionally as `[x, y, size, entity,
    group]`; Python callers use the named accessors instead of indexing.

    Attributes:
        x: Raw x-axis metric value.
        y: Raw y-axis metric value.
        size: Raw size metric value (may be missing or non-numeric).
        entity: Entity column value identifying the observation.
        group: Group-by column value, or None when no grouping is configured.
    """

    x: Any
    y: Any
    size: Any
    entity: Any
    group: Any = None


class ItemStyle(TypedDict):
    """Flat per-series style payload."""

    color: str
    opacity: float


class ScatterSeries(TypedDict, total=False):
    """A single scatter series payload for the renderer."""

    name: str
    data: list[PointTuple]
    type: Literal["scatter"]
    itemStyle: ItemStyle
    symbolSize: float


SizeBounds = tuple[float, float]

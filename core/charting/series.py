"""Build one scatter series per query row.

Every row becomes a single-point series so each bubble can carry its own name,
color and radius. Series are named by the group-by column when one is
configured, otherwise by the entity column.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Final

from analysis.dto import PointTuple, Row, ScatterSeries

NULL_STRING: Final[str] = "<NULL>"

ColorFn = Callable[[str, int | None], str]


def series_name(value: Any) -> str:
    """Return a renderable series name; missing values map to `NULL_STRING`.

    Whole-number floats drop their fractional part, so `1.0` is named `"1"`.
    """

    if value is None or value == "":
        return NULL_STRING
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def build_point(
    row: Row,
    *,
    x_label: str,
    y_label: str,
    size_label: str,
    entity: str,
    group_by: str | None,
) -> PointTuple:
    """Build the point tuple for one row; missing values become None."""

    return PointTuple(
        x=row.get(x_label),
        y=row.get(y_label),
        size=row.get(size_label),
        entity=row.get(entity),
        group=row.get(group_by) if group_by else None,
    )


def build_bubble_series(
    rows: Iterable[Row],
    *,
    x_label: str,
    y_label: str,
    size_label: str,
    entity: str,
    group_by: str | None,
    color_fn: ColorFn,
    slice_id: int | None,
    opacity: float,
) -> tuple[list[ScatterSeries], list[str]]:
    """Build scatter series and legend names from query rows.

    Args:
        rows: Query result rows keyed by column/metric label.
        x_label: Metric label for x values.
        y_label: Metric label for y values.
        size_label: Metric label for bubble sizes.
        entity: Entity column name.
        group_by: Optional group-by column name.
        color_fn: Maps `(series name, chart instance id)` to a color.
        slice_id: Chart instance id forwarded to `color_fn`.
        opacity: Fill opacity applied to every series.

    Returns:
        `(series, legend_names)`: one series per row in row order, and the
        distinct series names in discovery order.
    """

    series: list[ScatterSeries] = []
    legend_names: dict[str, None] = {}
    for row in rows:
        point = build_point(
            row,
            x_label=x_label,
            y_label=y_label,
            size_label=size_label,
            entity=entity,
            group_by=group_by,
        )
        name = series_name(point.group if group_by else point.entity)
        series.append(
            {
                "name": name,
                "data": [point],
                "type": "scatter",
                "itemStyle": {"color": color_fn(name, slice_id), "opacity": opacity},
            }
        )
        legend_names.setdefault(name, None)
    return series, list(legend_names)

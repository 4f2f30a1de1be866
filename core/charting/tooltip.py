"""Tooltip markup for hovered bubbles.

Formatting runs on every hover event, so it only reads the hovered point and
the pre-built formatters; it never touches chart state.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString

from analysis.dto import PointTuple

from .series import series_name

TRUNCATION_STYLE: Final[str] = (
    "max-width: 300px; overflow: hidden; text-overflow: ellipsis; white-space: nowrap;"
)
LABEL_CELL_STYLE: Final[str] = "text-align: left; padding-left: 0px; padding-right: 16px;"
VALUE_CELL_STYLE: Final[str] = "text-align: right; font-weight: 700;"

ValueFormatter = Callable[[Any], str]


def tooltip_title(point: PointTuple) -> str:
    """Return `"<group> (<entity>)"` when the point is grouped, else the entity."""

    if point.group is not None and point.group != "":
        return f"{series_name(point.group)} ({series_name(point.entity)})"
    return series_name(point.entity)


def tooltip_html(rows: Sequence[tuple[str, str]], title: str | None = None) -> SafeString:
    """Render a title and `(label, value)` rows as an HTML table.

    Args:
        rows: Label/value pairs, rendered in order.
        title: Optional bold heading above the table.

    Returns:
        Escaped, safe HTML markup.
    """

    title_row = format_html('<span style="font-weight: 700; {}">{}</span>', TRUNCATION_STYLE, title) if title else ""
    if rows:
        body = format_html_join(
            "",
            '<tr><td style="{}">{}</td><td style="{}">{}</td></tr>',
            ((LABEL_CELL_STYLE, label, VALUE_CELL_STYLE, value) for label, value in rows),
        )
    else:
        body = format_html("<tr><td>{}</td></tr>", "No data")
    return format_html("<div>{}<table>{}</table></div>", title_row, body)


def format_tooltip(
    point: Sequence[Any],
    *,
    x_axis_label: str,
    y_axis_label: str,
    size_label: str,
    x_axis_formatter: ValueFormatter,
    y_axis_formatter: ValueFormatter,
    tooltip_size_formatter: ValueFormatter,
) -> SafeString:
    """Render the tooltip for one hovered point.

    Args:
        point: The hovered `(x, y, size, entity, group)` tuple.
        x_axis_label: Label for the x value row.
        y_axis_label: Label for the y value row.
        size_label: Label for the size value row.
        x_axis_formatter: Formats the x value.
        y_axis_formatter: Formats the y value.
        tooltip_size_formatter: Formats the size value.

    Returns:
        Tooltip markup with x, y and size rows, in that order.
    """

    if not isinstance(point, PointTuple):
        point = PointTuple(*point)
    return tooltip_html(
        [
            (x_axis_label, x_axis_formatter(point.x)),
            (y_axis_label, y_axis_formatter(point.y)),
            (size_label, tooltip_size_formatter(point.size)),
        ],
        tooltip_title(point),
    )


@dataclass(frozen=True, slots=True)
class BubbleTooltipFormatter:
    """Tooltip callback bound into a chart option.

    Accepts the renderer's hover params (a mapping with a `data` point) or a
    bare point tuple.
    """

    x_axis_label: str
    y_axis_label: str
    size_label: str
    x_axis_formatter: ValueFormatter
    y_axis_formatter: ValueFormatter
    tooltip_size_formatter: ValueFormatter

    def __call__(self, params: Mapping[str, Any] | Sequence[Any]) -> SafeString:
        point = params["data"] if isinstance(params, Mapping) else params
        return format_tooltip(
            point,
            x_axis_label=self.x_axis_label,
            y_axis_label=self.y_axis_label,
            size_label=self.size_label,
            x_axis_formatter=self.x_axis_formatter,
            y_axis_formatter=self.y_axis_formatter,
            tooltip_size_formatter=self.tooltip_size_formatter,
        )

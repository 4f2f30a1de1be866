"""Legend, padding and tooltip layout fragments for chart options."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import partial
from typing import Any, Final, TypedDict

from analysis.axis_bounds import convert_integer

from .schema import ChartTheme, LegendOrientation, LegendType, Refs

TIMESERIES_CONSTANTS: Final[dict[str, int]] = {
    "gridOffsetRight": 20,
    "gridOffsetLeft": 20,
    "gridOffsetTop": 20,
    "gridOffsetBottom": 20,
    "gridOffsetBottomZoomable": 80,
    "legendRightTopOffset": 30,
    "legendTopRightOffset": 55,
    "yAxisLabelTopOffset": 20,
}

DEFAULT_LEGEND_PADDING: Final[dict[str, int]] = {
    "top": 20,
    "right": 30,
    "bottom": 30,
    "left": 20,
}

DEFAULT_GRID: Final[dict[str, Any]] = {"containLabel": True}

TOOLTIP_OFFSET: Final[int] = 12


class Padding(TypedDict):
    """Grid padding in pixels."""

    top: int
    bottom: int
    left: int
    right: int


def get_legend_props(
    legend_type: LegendType,
    orientation: LegendOrientation,
    show: bool,
    theme: ChartTheme,
    *,
    zoomable: bool = False,
) -> dict[str, Any]:
    """Return legend option fields for a type/orientation combination.

    Args:
        legend_type: `scroll` or `plain`.
        orientation: Edge of the chart the legend is anchored to.
        show: Whether the legend is displayed.
        theme: Theme tokens for legend text.
        zoomable: Whether the chart reserves space for zoom controls.

    Returns:
        Legend option fields (without `data`).
    """

    legend: dict[str, Any] = {
        "orient": "horizontal" if orientation in ("top", "bottom") else "vertical",
        "show": show,
        "type": legend_type,
        "selector": ["all", "inverse"],
        "selectorLabel": {
            "fontFamily": theme.font_family,
            "fontSize": theme.font_size_small,
            "color": theme.text_color,
            "borderColor": theme.border_color,
        },
        "textStyle": {"color": theme.text_color},
        "pageIconColor": theme.page_icon_color,
        "pageIconInactiveColor": theme.page_icon_inactive_color,
    }
    if orientation == "left":
        legend["left"] = 0
    elif orientation == "right":
        legend["right"] = 0
        legend["top"] = TIMESERIES_CONSTANTS["legendTopRightOffset"] if zoomable else 0
    elif orientation == "bottom":
        legend["bottom"] = 0
    else:
        legend["top"] = 0
        legend["right"] = TIMESERIES_CONSTANTS["legendRightTopOffset"] if zoomable else 0
    return legend


def get_chart_padding(
    show: bool,
    orientation: LegendOrientation,
    margin: int | str | None = None,
    padding: Mapping[str, int] | None = None,
) -> Padding:
    """Add legend space to a base padding on the legend's edge.

    A missing or non-numeric margin uses the orientation's default legend
    padding; a hidden legend adds nothing.
    """

    if not show:
        legend_margin = 0
    elif margin is None or isinstance(margin, str):
        legend_margin = DEFAULT_LEGEND_PADDING[orientation]
    else:
        legend_margin = margin

    base = padding or {}
    return {
        "left": base.get("left", 0) + (legend_margin if orientation == "left" else 0),
        "right": base.get("right", 0) + (legend_margin if orientation == "right" else 0),
        "top": base.get("top", 0) + (legend_margin if orientation == "top" else 0),
        "bottom": base.get("bottom", 0) + (legend_margin if orientation == "bottom" else 0),
    }


def get_padding(
    show_legend: bool,
    legend_orientation: LegendOrientation,
    add_y_axis_title_offset: bool,
    zoomable: bool,
    margin: int | str | None = None,
    add_x_axis_title_offset: bool = False,
    y_axis_title_position: str | None = None,
    y_axis_title_margin: int | str | None = None,
    x_axis_title_margin: int | str | None = None,
) -> Padding:
    """Return grid padding accounting for legend placement and axis titles.

    Args:
        show_legend: Whether the legend is displayed.
        legend_orientation: Edge the legend is anchored to.
        add_y_axis_title_offset: Reserve room above the plot for a y-axis title.
        zoomable: Whether zoom controls sit below the plot.
        margin: Legend margin control value.
        add_x_axis_title_offset: Reserve `x_axis_title_margin` below the plot.
        y_axis_title_position: `Left` or `Top` placement of the y-axis title.
        y_axis_title_margin: Margin control value for the y-axis title.
        x_axis_title_margin: Margin control value for the x-axis title.

    Returns:
        Padding for the chart grid.
    """

    y_axis_offset = TIMESERIES_CONSTANTS["yAxisLabelTopOffset"] if add_y_axis_title_offset else 0
    x_axis_offset = convert_integer(x_axis_title_margin) if add_x_axis_title_offset else 0
    y_title_margin = convert_integer(y_axis_title_margin)

    if y_axis_title_position == "Top":
        top = TIMESERIES_CONSTANTS["gridOffsetTop"] + y_title_margin
    else:
        top = TIMESERIES_CONSTANTS["gridOffsetTop"] + y_axis_offset
    bottom_key = "gridOffsetBottomZoomable" if zoomable else "gridOffsetBottom"
    if y_axis_title_position == "Left":
        left = TIMESERIES_CONSTANTS["gridOffsetLeft"] + y_title_margin
    else:
        left = TIMESERIES_CONSTANTS["gridOffsetLeft"]
    right = 0 if show_legend and legend_orientation == "right" else TIMESERIES_CONSTANTS["gridOffsetRight"]

    return get_chart_padding(
        show_legend,
        legend_orientation,
        margin,
        {
            "top": top,
            "bottom": TIMESERIES_CONSTANTS[bottom_key] + x_axis_offset,
            "left": left,
            "right": right,
        },
    )


def tooltip_position(
    refs: Refs,
    mouse_position: Sequence[float],
    params: Any = None,
    dom: Any = None,
    rect: Any = None,
    sizes: Mapping[str, Sequence[float]] | None = None,
) -> list[float]:
    """Place the tooltip next to the cursor, flipping it to stay in view.

    The chosen position is stored in `refs["tooltipPosition"]`.
    """

    x, y = float(mouse_position[0]), float(mouse_position[1])
    content_width, content_height = (sizes or {}).get("contentSize", (0, 0))
    view_width, view_height = (sizes or {}).get("viewSize", (float("inf"), float("inf")))

    left = x + TOOLTIP_OFFSET
    if left + content_width > view_width:
        left = max(0.0, x - TOOLTIP_OFFSET - content_width)
    top = y + TOOLTIP_OFFSET
    if top + content_height > view_height:
        top = max(0.0, y - TOOLTIP_OFFSET - content_height)

    position = [left, top]
    refs["tooltipPosition"] = position
    return position


def default_tooltip(refs: Refs) -> dict[str, Any]:
    """Return the shared tooltip option fields bound to a ref bag."""

    return {
        "appendToBody": True,
        "borderColor": "transparent",
        "position": partial(tooltip_position, refs),
    }

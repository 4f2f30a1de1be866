"""Schema types for declarative bubble chart configuration.

Bubble charts are driven by `BubbleFormData` (the user's control selections)
and the rows of a query result. `transform_props` turns both into a renderer
option; these types describe its inputs and outputs.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal, TypedDict

from analysis.dto import Row

LegendOrientation = Literal["top", "bottom", "left", "right"]

LegendType = Literal["scroll", "plain"]

Metric = str | Mapping[str, Any]

AxisBoundInput = str | int | float | None


@dataclass(frozen=True, slots=True)
class BubbleFormData:
    """User-selected bubble chart options.

    Args:
        x: Metric plotted on the x axis.
        y: Metric plotted on the y axis.
        size: Metric driving the bubble radius.
        entity: Column identifying each observation.
        series: Optional group-by column; names and colors series when set.
        max_bubble_size: Largest bubble radius control value.
        color_scheme: Categorical color scheme id.
        slice_id: Stable chart instance id used for color assignment.
        x_axis_bounds: Raw `(min, max)` x-axis bounds; unparseable sides are unset.
        y_axis_bounds: Raw `(min, max)` y-axis bounds; unparseable sides are unset.
        opacity: Bubble fill opacity.
    """

    x: Metric
    y: Metric
    size: Metric
    entity: str
    series: str | None = None
    max_bubble_size: float = 25
    color_scheme: str = "supersetColors"
    slice_id: int | None = None
    x_axis_label: str = ""
    y_axis_label: str = ""
    x_axis_bounds: tuple[AxisBoundInput, AxisBoundInput] = (None, None)
    y_axis_bounds: tuple[AxisBoundInput, AxisBoundInput] = (None, None)
    x_axis_format: str = "SMART_NUMBER"
    y_axis_format: str = "SMART_NUMBER"
    tooltip_size_format: str = "SMART_NUMBER"
    log_x_axis: bool = False
    log_y_axis: bool = False
    x_axis_title_margin: str | int = 30
    y_axis_title_margin: str | int = 30
    truncate_x_axis: bool = False
    truncate_y_axis: bool = False
    x_axis_label_rotation: int = 0
    x_axis_label_interval: str | int = "auto"
    y_axis_label_rotation: int = 0
    opacity: float = 0.6
    show_legend: bool = True
    legend_orientation: LegendOrientation = "top"
    legend_type: LegendType = "scroll"
    legend_margin: int | None = None


def noop_set_data_mask(data_mask: Mapping[str, Any]) -> None:
    return None


@dataclass(frozen=True, slots=True)
class ChartHooks:
    """Callbacks supplied by the hosting component.

    Args:
        on_context_menu: Invoked when the user opens a context menu on a point.
        set_data_mask: Invoked to publish a cross-filter selection; no-op when unset.
    """

    on_context_menu: Callable[..., Any] | None = None
    set_data_mask: Callable[[Mapping[str, Any]], Any] | None = None


@dataclass(frozen=True, slots=True)
class ChartTheme:
    """Theme tokens used for legend text and selectors."""

    font_family: str = "Inter, Helvetica, Arial"
    font_size_small: int = 12
    text_color: str = "#666666"
    border_color: str = "#E0E0E0"
    page_icon_color: str = "#666666"
    page_icon_inactive_color: str = "#B2B2B2"


class QueryData(TypedDict, total=False):
    """One query result as delivered to the chart."""

    data: Sequence[Row]
    colnames: list[str]
    rowcount: int


class Refs(TypedDict, total=False):
    """Mutable handles shared between the chart host and the tooltip."""

    echartRef: Any
    divRef: Any
    tooltipPosition: list[float]


@dataclass(frozen=True, slots=True)
class BubbleChartProps:
    """Everything `transform_props` needs to build one bubble chart."""

    width: int
    height: int
    form_data: BubbleFormData
    queries_data: Sequence[QueryData] = ()
    hooks: ChartHooks = ChartHooks()
    in_context_menu: bool = False
    theme: ChartTheme = ChartTheme()


@dataclass(frozen=True, slots=True)
class BubbleTransformedProps:
    """Renderer-ready output of `transform_props`.

    Args:
        refs: Mutable ref bag used by the tooltip for position tracking.
        width: Pass-through render width.
        height: Pass-through render height.
        echart_options: The assembled chart option.
        on_context_menu: Pass-through context menu callback.
        set_data_mask: Selection callback (no-op when the host supplies none).
        form_data: Pass-through form data.
    """

    refs: Refs
    width: int
    height: int
    echart_options: dict[str, Any]
    on_context_menu: Callable[..., Any] | None
    set_data_mask: Callable[[Mapping[str, Any]], Any] = field(default=noop_set_data_mask)
    form_data: BubbleFormData | None = None

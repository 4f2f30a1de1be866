"""Assemble renderer options for bubble charts.

`transform_props` runs the whole pipeline for one render: build series from
query rows, normalize bubble radii, parse axis bounds, and combine axes,
legend, tooltip and grid padding into a single option mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from analysis.axis_bounds import (
    AxisType,
    convert_integer,
    min_and_max_from_bounds,
    parse_axis_bounds,
)
from analysis.bubble_sizes import normalize_symbol_size, size_bounds
from analysis.metric_labels import get_metric_label
from analysis.number_format import NumberFormatter, get_number_formatter

from .colors import CategoricalColorNamespace, default_color_namespace
from .layout import DEFAULT_GRID, default_tooltip, get_legend_props, get_padding
from .schema import BubbleChartProps, BubbleTransformedProps, Refs, noop_set_data_mask
from .series import build_bubble_series
from .tooltip import BubbleTooltipFormatter

logger = logging.getLogger(__name__)


def transform_props(
    chart_props: BubbleChartProps,
    *,
    color_namespace: CategoricalColorNamespace | None = None,
) -> BubbleTransformedProps:
    """Build the renderer option for a bubble chart.

    Args:
        chart_props: Form data, query results, dimensions, hooks and theme.
        color_namespace: Name-to-color assignment store; defaults to the
            process-wide namespace.

    Returns:
        BubbleTransformedProps with the option plus pass-through fields.
    """

    form_data = chart_props.form_data
    query_data = chart_props.queries_data[0] if chart_props.queries_data else {}
    rows = query_data.get("data") or []
    namespace = color_namespace or default_color_namespace()
    color_fn = namespace.get_scale(form_data.color_scheme)

    x_axis_label = get_metric_label(form_data.x)
    y_axis_label = get_metric_label(form_data.y)
    size_label = get_metric_label(form_data.size)

    refs: Refs = {}

    series, legend_names = build_bubble_series(
        rows,
        x_label=x_axis_label,
        y_label=y_axis_label,
        size_label=size_label,
        entity=form_data.entity,
        group_by=form_data.series or None,
        color_fn=color_fn,
        slice_id=form_data.slice_id,
        opacity=form_data.opacity,
    )
    normalize_symbol_size(series, form_data.max_bubble_size)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Built %d bubble series (%d legend entries, size bounds %s).",
            len(series),
            len(legend_names),
            size_bounds(series),
        )

    x_axis_formatter = get_number_formatter(form_data.x_axis_format)
    y_axis_formatter = get_number_formatter(form_data.y_axis_format)
    tooltip_size_formatter = get_number_formatter(form_data.tooltip_size_format)

    x_axis_min, x_axis_max = parse_axis_bounds(form_data.x_axis_bounds)
    y_axis_min, y_axis_max = parse_axis_bounds(form_data.y_axis_bounds)

    padding = get_padding(
        form_data.show_legend,
        form_data.legend_orientation,
        True,
        False,
        form_data.legend_margin,
        True,
        "Left",
        convert_integer(form_data.y_axis_title_margin),
        convert_integer(form_data.x_axis_title_margin),
    )

    x_axis_type: AxisType = "log" if form_data.log_x_axis else "value"
    y_axis_type: AxisType = "log" if form_data.log_y_axis else "value"
    echart_options: dict[str, Any] = {
        "series": series,
        "xAxis": {
            "axisLabel": {"formatter": x_axis_formatter},
            "splitLine": {"lineStyle": {"type": "dashed"}},
            "nameRotate": form_data.x_axis_label_rotation,
            "interval": form_data.x_axis_label_interval,
            "scale": True,
            "name": form_data.x_axis_label,
            "nameLocation": "middle",
            "nameTextStyle": {"fontWeight": "bolder"},
            "nameGap": convert_integer(form_data.x_axis_title_margin),
            "type": x_axis_type,
            **min_and_max_from_bounds(x_axis_type, form_data.truncate_x_axis, x_axis_min, x_axis_max),
        },
        "yAxis": {
            "axisLabel": {"formatter": y_axis_formatter},
            "splitLine": {"lineStyle": {"type": "dashed"}},
            "nameRotate": form_data.y_axis_label_rotation,
            "scale": form_data.truncate_y_axis,
            "name": form_data.y_axis_label,
            "nameLocation": "middle",
            "nameTextStyle": {"fontWeight": "bolder"},
            "nameGap": convert_integer(form_data.y_axis_title_margin),
            "min": y_axis_min,
            "max": y_axis_max,
            "type": y_axis_type,
        },
        "legend": {
            **get_legend_props(
                form_data.legend_type,
                form_data.legend_orientation,
                form_data.show_legend,
                chart_props.theme,
            ),
            "data": legend_names,
        },
        "tooltip": {
            "show": not chart_props.in_context_menu,
            **default_tooltip(refs),
            "formatter": BubbleTooltipFormatter(
                x_axis_label=x_axis_label,
                y_axis_label=y_axis_label,
                size_label=size_label,
                x_axis_formatter=x_axis_formatter,
                y_axis_formatter=y_axis_formatter,
                tooltip_size_formatter=tooltip_size_formatter,
            ),
        },
        "grid": {**DEFAULT_GRID, **padding},
    }

    hooks = chart_props.hooks
    return BubbleTransformedProps(
        refs=refs,
        width=chart_props.width,
        height=chart_props.height,
        echart_options=echart_options,
        on_context_menu=hooks.on_context_menu,
        set_data_mask=hooks.set_data_mask or noop_set_data_mask,
        form_data=form_data,
    )


def to_json_safe(value: Any) -> Any:
    """Convert a built option into JSON-serializable data.

    Number formatters become their format ids; other callables are dropped.
    """

    if isinstance(value, NumberFormatter):
        return value.id
    if isinstance(value, Mapping):
        return {
            key: to_json_safe(item)
            for key, item in value.items()
            if isinstance(item, NumberFormatter) or not callable(item)
        }
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    return value

"""Tests for assembling bubble chart renderer options."""

from __future__ import annotations

import json
from dataclasses import replace

import pytest

from analysis.bubble_sizes import MINIMUM_BUBBLE_SIZE
from analysis.number_format import NumberFormatter
from core.charting.render import to_json_safe, transform_props
from core.charting.schema import BubbleChartProps, BubbleFormData, ChartHooks
from core.charting.tooltip import BubbleTooltipFormatter

pytestmark = pytest.mark.unit


def _props(form_data: BubbleFormData, rows, **kwargs) -> BubbleChartProps:
    return BubbleChartProps(width=800, height=600, form_data=form_data, queries_data=[{"data": rows}], **kwargs)


def test_transform_props_builds_series_legend_and_radii(form_data, rows, color_namespace) -> None:
    """Series carry normalized radii and the legend lists each group once."""

    options = transform_props(_props(form_data, rows), color_namespace=color_namespace).echart_options

    assert len(options["series"]) == 5
    assert options["legend"]["data"] == ["East Asia", "South Asia"]
    radii = [item["symbolSize"] for item in options["series"]]
    assert max(radii) == MINIMUM_BUBBLE_SIZE + 2 * 25
    assert min(radii) == MINIMUM_BUBBLE_SIZE
    assert options["series"][0]["itemStyle"]["color"] == options["series"][1]["itemStyle"]["color"]
    assert options["series"][0]["itemStyle"]["color"] != options["series"][3]["itemStyle"]["color"]


def test_transform_props_configures_axes(form_data, rows, color_namespace) -> None:
    """Axis types, bounds, titles and formatters follow the form data."""

    form_data = replace(
        form_data,
        x_axis_label="Rural population",
        y_axis_label="Life expectancy",
        x_axis_bounds=("0", "100"),
        y_axis_bounds=("not-a-number", "90"),
        truncate_x_axis=True,
        log_y_axis=True,
        x_axis_title_margin="15",
        x_axis_format=",.1f",
    )

    options = transform_props(_props(form_data, rows), color_namespace=color_namespace).echart_options

    x_axis = options["xAxis"]
    assert x_axis["type"] == "value"
    assert x_axis["scale"] is True
    assert (x_axis["min"], x_axis["max"]) == (0.0, 100.0)
    assert x_axis["name"] == "Rural population"
    assert x_axis["nameGap"] == 15
    assert x_axis["axisLabel"]["formatter"].id == ",.1f"

    y_axis = options["yAxis"]
    assert y_axis["type"] == "log"
    assert y_axis["scale"] is False
    assert y_axis["min"] is None
    assert y_axis["max"] == 90.0
    assert y_axis["nameGap"] == 30


def test_transform_props_ignores_x_bounds_unless_truncated(form_data, rows, color_namespace) -> None:
    """Untruncated or logarithmic x axes auto-scale."""

    untruncated = replace(form_data, x_axis_bounds=("0", "100"))
    log_axis = replace(form_data, x_axis_bounds=("1", "100"), truncate_x_axis=True, log_x_axis=True)

    for data in (untruncated, log_axis):
        x_axis = transform_props(_props(data, rows), color_namespace=color_namespace).echart_options["xAxis"]
        assert "min" not in x_axis
        assert "max" not in x_axis


def test_transform_props_hides_tooltip_in_context_menu(form_data, rows, color_namespace) -> None:
    """Context-menu renders never show the tooltip."""

    shown = transform_props(_props(form_data, rows), color_namespace=color_namespace)
    hidden = transform_props(_props(form_data, rows, in_context_menu=True), color_namespace=color_namespace)

    assert shown.echart_options["tooltip"]["show"] is True
    assert hidden.echart_options["tooltip"]["show"] is False
    assert isinstance(hidden.echart_options["tooltip"]["formatter"], BubbleTooltipFormatter)


def test_transform_props_tooltip_formatter_renders_hovered_point(form_data, rows, color_namespace) -> None:
    """The bound tooltip formatter renders the hovered series point."""

    options = transform_props(_props(form_data, rows), color_namespace=color_namespace).echart_options
    hovered = options["series"][3]["data"][0]

    html = options["tooltip"]["formatter"]({"data": hovered})

    assert "South Asia (India)" in html
    assert "sum__SP_POP_TOTL" in html


def test_transform_props_tooltip_position_tracks_refs(form_data, rows, color_namespace) -> None:
    """The tooltip position callback stays in view and records itself in refs."""

    transformed = transform_props(_props(form_data, rows), color_namespace=color_namespace)
    position = transformed.echart_options["tooltip"]["position"]

    assert position([100, 50], None, None, None, {"contentSize": [80, 40], "viewSize": [800, 600]}) == [112.0, 62.0]
    assert position([780, 590], None, None, None, {"contentSize": [80, 40], "viewSize": [800, 600]}) == [688.0, 538.0]
    assert transformed.refs["tooltipPosition"] == [688.0, 538.0]


def test_transform_props_legend_and_padding(form_data, rows, color_namespace) -> None:
    """Legend placement feeds the grid padding."""

    top = transform_props(_props(form_data, rows), color_namespace=color_namespace).echart_options
    assert top["legend"]["orient"] == "horizontal"
    assert top["legend"]["type"] == "scroll"
    assert top["grid"] == {"containLabel": True, "top": 60, "bottom": 50, "left": 50, "right": 20}

    right = replace(form_data, legend_orientation="right", legend_type="plain", legend_margin=100)
    options = transform_props(_props(right, rows), color_namespace=color_namespace).echart_options
    assert options["legend"]["orient"] == "vertical"
    assert options["legend"]["right"] == 0
    assert options["grid"]["right"] == 100

    hidden = replace(form_data, show_legend=False)
    options = transform_props(_props(hidden, rows), color_namespace=color_namespace).echart_options
    assert options["legend"]["show"] is False
    assert options["grid"]["top"] == 40


def test_transform_props_passes_through_hooks_and_dimensions(form_data, rows, color_namespace) -> None:
    """Dimensions, form data and hooks pass through; set_data_mask defaults to a no-op."""

    calls: list[object] = []
    transformed = transform_props(
        _props(form_data, rows, hooks=ChartHooks(on_context_menu=calls.append)),
        color_namespace=color_namespace,
    )

    assert (transformed.width, transformed.height) == (800, 600)
    assert transformed.form_data is form_data
    assert transformed.on_context_menu is not None
    transformed.on_context_menu("clicked")
    assert calls == ["clicked"]
    assert transformed.set_data_mask({"filters": []}) is None


def test_transform_props_handles_missing_query_data(form_data, color_namespace) -> None:
    """No query results still produce a complete option."""

    options = transform_props(
        BubbleChartProps(width=1, height=1, form_data=form_data),
        color_namespace=color_namespace,
    ).echart_options

    assert options["series"] == []
    assert options["legend"]["data"] == []
    assert set(options) == {"series", "xAxis", "yAxis", "legend", "tooltip", "grid"}


def test_to_json_safe_serializes_options(form_data, rows, color_namespace) -> None:
    """Formatters become their ids, callbacks are dropped and points become lists."""

    options = transform_props(_props(form_data, rows), color_namespace=color_namespace).echart_options

    safe = to_json_safe(options)

    assert safe["xAxis"]["axisLabel"]["formatter"] == "SMART_NUMBER"
    assert "formatter" not in safe["tooltip"]
    assert "position" not in safe["tooltip"]
    assert safe["series"][0]["data"] == [[49.2, 75.2, 1_344_130_000, "China", "East Asia"]]
    assert isinstance(options["xAxis"]["axisLabel"]["formatter"], NumberFormatter)
    json.dumps(safe)

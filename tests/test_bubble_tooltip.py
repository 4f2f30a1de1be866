"""Tests for bubble tooltip formatting."""

from __future__ import annotations

import pytest

from analysis.dto import PointTuple
from analysis.number_format import get_number_formatter
from core.charting.tooltip import BubbleTooltipFormatter, format_tooltip, tooltip_html, tooltip_title

pytestmark = pytest.mark.unit


def _formatter() -> BubbleTooltipFormatter:
    return BubbleTooltipFormatter(
        x_axis_label="Rural",
        y_axis_label="Life expectancy",
        size_label="Population",
        x_axis_formatter=get_number_formatter(",.1f"),
        y_axis_formatter=get_number_formatter(",.1f"),
        tooltip_size_formatter=get_number_formatter(",d"),
    )


def test_tooltip_title_includes_group_when_present() -> None:
    """Grouped points show `group (entity)`; ungrouped points show the entity."""

    assert tooltip_title(PointTuple(1, 2, 3, "EntityA", "GroupX")) == "GroupX (EntityA)"
    assert tooltip_title(PointTuple(1, 2, 3, "EntityA", None)) == "EntityA"
    assert tooltip_title(PointTuple(1, 2, 3, 7.0, 2024.0)) == "2024 (7)"


def test_format_tooltip_renders_rows_in_fixed_order() -> None:
    """Render x, y, then size rows, each through its own formatter."""

    html = _formatter()({"data": PointTuple(49.2, 75.25, 1344130000, "China", "East Asia")})

    assert "East Asia (China)" in html
    assert html.index("Rural") < html.index("Life expectancy") < html.index("Population")
    assert ">49.2<" in html
    assert ">75.2<" in html or ">75.3<" in html
    assert ">1,344,130,000<" in html


def test_format_tooltip_accepts_bare_sequences() -> None:
    """Accept a plain list as delivered by JSON hover payloads."""

    html = format_tooltip(
        [1, 2, 3, "EntityA"],
        x_axis_label="x",
        y_axis_label="y",
        size_label="size",
        x_axis_formatter=str,
        y_axis_formatter=str,
        tooltip_size_formatter=str,
    )

    assert ">EntityA</span>" in html


def test_tooltip_html_escapes_values() -> None:
    """Labels, values and titles are HTML-escaped."""

    html = tooltip_html([("<b>x</b>", "1 & 2")], "<script>")

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "&lt;b&gt;x&lt;/b&gt;" in html
    assert "1 &amp; 2" in html


def test_tooltip_html_without_rows_shows_placeholder() -> None:
    """An empty table renders a "No data" row and no title span."""

    html = tooltip_html([])

    assert "No data" in html
    assert "<span" not in html

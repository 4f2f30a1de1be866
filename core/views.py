"""JSON endpoints serving bubble chart options and tooltips."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict
from typing import Any, Final

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from analysis.axis_bounds import convert_integer
from analysis.number_format import get_number_formatter
from core.charting.render import to_json_safe, transform_props
from core.charting.schema import BubbleChartProps, QueryData
from core.charting.tooltip import format_tooltip, tooltip_title
from core.forms import BubbleChartForm, TooltipRequestForm

logger = logging.getLogger(__name__)

DEFAULT_WIDTH: Final[int] = 800
DEFAULT_HEIGHT: Final[int] = 600


def _json_body(request: HttpRequest) -> dict[str, Any] | None:
    """Return the decoded JSON object body, or None when it is not an object."""

    try:
        payload = json.loads(request.body or b"{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def _bad_request(errors: Any) -> JsonResponse:
    logger.warning("Rejected bubble chart request: %s", errors)
    return JsonResponse({"ok": False, "errors": errors}, status=400)


def _parse_queries_data(raw: Any) -> tuple[list[QueryData], str | None]:
    """Validate the query result envelope.

    Returns:
        `(queries_data, error)`; `error` is None when the envelope is usable.
    """

    if raw is None:
        return [], None
    if not isinstance(raw, Sequence) or isinstance(raw, str):
        return [], "queries_data must be a list."

    queries: list[QueryData] = []
    for query in raw:
        if not isinstance(query, Mapping):
            return [], "Each queries_data entry must be an object."
        rows = query.get("data") or []
        if not isinstance(rows, list) or not all(isinstance(row, Mapping) for row in rows):
            return [], "queries_data[].data must be a list of objects."
        queries.append({"data": rows})

    total_rows = sum(len(query["data"]) for query in queries)
    if total_rows > settings.BUBBLE_CHART_MAX_ROWS:
        return [], f"Too many rows to render safely (>{settings.BUBBLE_CHART_MAX_ROWS})."
    return queries, None


@require_POST
def bubble_chart_options(request: HttpRequest) -> JsonResponse:
    """Return renderer options for a bubble chart.

    The body is a JSON object with `form_data`, `queries_data`, and optional
    `width`, `height` and `in_context_menu` fields.
    """

    payload = _json_body(request)
    if payload is None:
        return _bad_request({"__all__": ["Request body must be a JSON object."]})

    raw_form_data = payload.get("form_data")
    if not isinstance(raw_form_data, Mapping):
        return _bad_request({"form_data": ["This field is required."]})
    raw_form_data = {"color_scheme": settings.BUBBLE_CHART_DEFAULT_COLOR_SCHEME, **raw_form_data}

    form = BubbleChartForm(data=raw_form_data)
    if not form.is_valid():
        return _bad_request(form.errors.get_json_data())

    queries_data, error = _parse_queries_data(payload.get("queries_data"))
    if error is not None:
        return _bad_request({"queries_data": [error]})

    form_data = form.to_form_data()
    transformed = transform_props(
        BubbleChartProps(
            width=convert_integer(payload.get("width") or DEFAULT_WIDTH),
            height=convert_integer(payload.get("height") or DEFAULT_HEIGHT),
            form_data=form_data,
            queries_data=queries_data,
            in_context_menu=bool(payload.get("in_context_menu")),
        )
    )
    return JsonResponse(
        {
            "ok": True,
            "width": transformed.width,
            "height": transformed.height,
            "echart_options": to_json_safe(transformed.echart_options),
            "form_data": asdict(form_data),
        }
    )


@require_POST
def bubble_tooltip(request: HttpRequest) -> JsonResponse:
    """Return tooltip markup for one hovered bubble."""

    payload = _json_body(request)
    if payload is None:
        return _bad_request({"__all__": ["Request body must be a JSON object."]})

    form = TooltipRequestForm(data=payload)
    if not form.is_valid():
        return _bad_request(form.errors.get_json_data())

    point = form.cleaned_data["point"]
    html = format_tooltip(
        point,
        x_axis_label=form.cleaned_data["x_axis_label"],
        y_axis_label=form.cleaned_data["y_axis_label"],
        size_label=form.cleaned_data["size_label"],
        x_axis_formatter=get_number_formatter(form.format_spec("x_axis_format")),
        y_axis_formatter=get_number_formatter(form.format_spec("y_axis_format")),
        tooltip_size_formatter=get_number_formatter(form.format_spec("tooltip_size_format")),
    )
    return JsonResponse({"ok": True, "title": tooltip_title(point), "html": str(html)})

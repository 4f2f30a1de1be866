"""Forms validating bubble chart requests.

Raw form data arrives as snake_case JSON. Missing keys take the
`BubbleFormData` defaults before validation, so a request only has to name the
metrics and the entity column.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, fields
from typing import Any

from django import forms

from analysis.dto import PointTuple
from analysis.number_format import SMART_NUMBER, get_number_formatter
from core.charting.schema import BubbleFormData

FORM_DATA_DEFAULTS: dict[str, Any] = {
    field.name: field.default for field in fields(BubbleFormData) if field.default is not MISSING
}


def validate_number_format(value: str) -> None:
    """Reject number format specifiers the formatter factory cannot build."""

    try:
        get_number_formatter(value or None)
    except ValueError as exc:
        raise forms.ValidationError("Unsupported number format: %(value)s", params={"value": value}) from exc


class MetricField(forms.Field):
    """A saved metric name or an adhoc metric definition."""

    default_error_messages = {"invalid": "Enter a metric name or an adhoc metric definition."}

    def to_python(self, value: Any) -> str | dict[str, Any] | None:
        if value in self.empty_values:
            return None
        if isinstance(value, str):
            return value.strip() or None
        if isinstance(value, Mapping):
            return dict(value)
        raise forms.ValidationError(self.error_messages["invalid"], code="invalid")


class AxisBoundsField(forms.Field):
    """A raw `(min, max)` pair; each side is parsed later and may be unset."""

    def to_python(self, value: Any) -> tuple[Any, Any]:
        if not isinstance(value, (list, tuple)):
            return (None, None)
        padded = list(value[:2]) + [None] * (2 - len(value[:2]))
        return (padded[0], padded[1])


class BubbleChartForm(forms.Form):
    """Validate bubble chart form data."""

    x = MetricField(label="X axis metric")
    y = MetricField(label="Y axis metric")
    size = MetricField(label="Bubble size metric")
    entity = forms.CharField(label="Entity column")
    series = forms.CharField(required=False, label="Group-by column")
    max_bubble_size = forms.FloatField(required=False, min_value=0)
    color_scheme = forms.CharField(required=False)
    slice_id = forms.IntegerField(required=False)
    x_axis_label = forms.CharField(required=False, strip=False)
    y_axis_label = forms.CharField(required=False, strip=False)
    x_axis_bounds = AxisBoundsField(required=False)
    y_axis_bounds = AxisBoundsField(required=False)
    x_axis_format = forms.CharField(required=False, validators=[validate_number_format])
    y_axis_format = forms.CharField(required=False, validators=[validate_number_format])
    tooltip_size_format = forms.CharField(required=False, validators=[validate_number_format])
    log_x_axis = forms.BooleanField(required=False)
    log_y_axis = forms.BooleanField(required=False)
    x_axis_title_margin = forms.Field(required=False)
    y_axis_title_margin = forms.Field(required=False)
    truncate_x_axis = forms.BooleanField(required=False)
    truncate_y_axis = forms.BooleanField(required=False)
    x_axis_label_rotation = forms.IntegerField(required=False)
    x_axis_label_interval = forms.Field(required=False)
    y_axis_label_rotation = forms.IntegerField(required=False)
    opacity = forms.FloatField(required=False, min_value=0, max_value=1)
    show_legend = forms.BooleanField(required=False)
    legend_orientation = forms.ChoiceField(
        required=False,
        choices=[("top", "Top"), ("bottom", "Bottom"), ("left", "Left"), ("right", "Right")],
    )
    legend_type = forms.ChoiceField(required=False, choices=[("scroll", "Scroll"), ("plain", "Plain")])
    legend_margin = forms.IntegerField(required=False)

    def __init__(self, data: Mapping[str, Any] | None = None, *args: Any, **kwargs: Any) -> None:
        """Bind form data merged over the bubble chart defaults.

        Args:
            data: Raw form data; keys not named here are ignored.
        """

        if data is not None:
            data = {**FORM_DATA_DEFAULTS, **data}
        super().__init__(data, *args, **kwargs)

    def to_form_data(self) -> BubbleFormData:
        """Return the validated options as a `BubbleFormData`.

        Blank optional values fall back to their defaults.
        """

        values: dict[str, Any] = {}
        for field in fields(BubbleFormData):
            value = self.cleaned_data.get(field.name)
            if value is None or value == "":
                if field.default is MISSING:
                    continue
                value = field.default
            values[field.name] = value
        return BubbleFormData(**values)


class TooltipRequestForm(forms.Form):
    """Validate a tooltip request for one hovered point."""

    point = forms.JSONField()
    x_axis_label = forms.CharField(required=False, strip=False)
    y_axis_label = forms.CharField(required=False, strip=False)
    size_label = forms.CharField(required=False, strip=False)
    x_axis_format = forms.CharField(required=False, validators=[validate_number_format])
    y_axis_format = forms.CharField(required=False, validators=[validate_number_format])
    tooltip_size_format = forms.CharField(required=False, validators=[validate_number_format])

    def clean_point(self) -> PointTuple:
        """Require a `[x, y, size, entity]` or `[x, y, size, entity, group]` list."""

        point = self.cleaned_data.get("point")
        if not isinstance(point, list) or len(point) not in (4, 5):
            raise forms.ValidationError("Point must be a list of 4 or 5 values.")
        return PointTuple(*point)

    def format_spec(self, name: str) -> str:
        """Return a cleaned format specifier, defaulting to smart numbers."""

        return self.cleaned_data.get(name) or SMART_NUMBER

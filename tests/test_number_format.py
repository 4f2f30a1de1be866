"""Tests for the number formatter factory."""

from __future__ import annotations

import pytest

from analysis.number_format import NULL_VALUE_STRING, SMART_NUMBER, get_number_formatter

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0"),
        (1234, "1.23k"),
        (-2500, "-2.5k"),
        (1_500_000_000, "1.5B"),
        (12.5, "12.5"),
        (0.5, "0.5"),
        (0.0123, "0.0123"),
        (0.0000123, "12.3µ"),
    ],
)
def test_smart_number_formats_by_magnitude(value: float, expected: str) -> None:
    """Pick SI, fixed, or micro notation based on magnitude."""

    assert get_number_formatter(SMART_NUMBER)(value) == expected


@pytest.mark.parametrize(
    ("spec", "value", "expected"),
    [
        (",.2f", 1234.5, "1,234.50"),
        (",d", 1234.6, "1,235"),
        (",d", 2.5, "3"),
        ("d", -2.5, "-2"),
        (".1%", 0.256, "25.6%"),
        (".3s", 1_234_567, "1.23M"),
        ("$,.2f", -5, "-$5.00"),
        (".2~f", 3.1, "3.1"),
        (".2e", 12345, "1.23e+4"),
        (".3r", 0.0012345, "0.00123"),
    ],
)
def test_d3_style_specifiers(spec: str, value: float, expected: str) -> None:
    """Translate d3-style specifiers into equivalent output."""

    assert get_number_formatter(spec)(value) == expected


def test_formatters_never_raise_on_values() -> None:
    """Missing and non-numeric values are rendered, not rejected."""

    formatter = get_number_formatter(",.2f")
    assert formatter(None) == NULL_VALUE_STRING
    assert formatter("n/a") == "n/a"
    assert formatter(float("nan")) == "NaN"


def test_empty_spec_defaults_to_smart_number() -> None:
    """None and empty specs use the smart-number preset."""

    assert get_number_formatter(None).id == SMART_NUMBER
    assert get_number_formatter("").id == SMART_NUMBER


def test_factory_memoizes_and_rejects_unknown_specs() -> None:
    """Return the same formatter per spec and fail fast on unknown specs."""

    assert get_number_formatter(",.2f") is get_number_formatter(",.2f")
    with pytest.raises(ValueError):
        get_number_formatter("abc")
    with pytest.raises(ValueError):
        get_number_formatter("(,.2f")

"""Pytest fixtures shared across bubble chart tests."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from core.charting.colors import CategoricalColorNamespace, load_color_schemes
from core.charting.schema import BubbleFormData


@pytest.fixture
def color_namespace() -> CategoricalColorNamespace:
    """Return a fresh namespace so color assignments do not leak between tests."""

    return CategoricalColorNamespace(registry=load_color_schemes())


@pytest.fixture
def form_data() -> BubbleFormData:
    """Return form data for a country bubble chart grouped by region."""

    return BubbleFormData(
        x="sum__SP_RUR_TOTL_ZS",
        y="sum__SP_DYN_LE00_IN",
        size="sum__SP_POP_TOTL",
        entity="country_name",
        series="region",
        max_bubble_size=25,
        slice_id=7,
    )


@pytest.fixture
def rows() -> list[dict[str, object]]:
    """Return five query rows across two regions."""

    return [
        {"country_name": "China", "region": "East Asia", "sum__SP_RUR_TOTL_ZS": 49.2, "sum__SP_DYN_LE00_IN": 75.2, "sum__SP_POP_TOTL": 1_344_130_000},
        {"country_name": "Japan", "region": "East Asia", "sum__SP_RUR_TOTL_ZS": 8.9, "sum__SP_DYN_LE00_IN": 82.6, "sum__SP_POP_TOTL": 127_833_000},
        {"country_name": "Korea", "region": "East Asia", "sum__SP_RUR_TOTL_ZS": 16.8, "sum__SP_DYN_LE00_IN": 80.9, "sum__SP_POP_TOTL": 49_779_000},
        {"country_name": "India", "region": "South Asia", "sum__SP_RUR_TOTL_ZS": 68.7, "sum__SP_DYN_LE00_IN": 65.5, "sum__SP_POP_TOTL": 1_221_156_319},
        {"country_name": "Nepal", "region": "South Asia", "sum__SP_RUR_TOTL_ZS": 82.6, "sum__SP_DYN_LE00_IN": 68.4, "sum__SP_POP_TOTL": 27_156_367},
    ]


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database or HTTP access.
    - `integration`: tests driving views through the Django test client.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )

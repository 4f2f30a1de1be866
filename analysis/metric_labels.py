"""Metric label resolution.

Query results key their columns by metric label, so the same label has to be
derived from a metric definition before values can be looked up in a row.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def get_metric_label(metric: str | Mapping[str, Any] | None) -> str:
    """Return the column label a metric produces in query results.

    Args:
        metric: A saved metric name, an adhoc metric mapping, or None.

    Returns:
        The saved metric name itself; for adhoc metrics the explicit `label`,
        else `AGG(column)` for simple metrics, else the SQL expression.
    """

    if metric is None:
        return ""
    if isinstance(metric, str):
        return metric

    label = metric.get("label")
    if label:
        return str(label)

    if metric.get("expressionType") == "SIMPLE" or (
        metric.get("aggregate") and metric.get("column") is not None
    ):
        column = metric.get("column") or {}
        if isinstance(column, Mapping):
            column_name = column.get("columnName") or column.get("column_name")
        else:
            column_name = column
        return f"{metric.get('aggregate')}({column_name})"

    return str(metric.get("sqlExpression") or "")

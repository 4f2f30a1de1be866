"""Number formatter factory for axis labels and tooltips.

Format specifiers follow the d3-format conventions used by chart form data
(e.g. `,.2f`, `.1%`, `.3s`, `$,d`) plus the `SMART_NUMBER` preset. Specifiers
are translated once into Python's format mini-language; the resulting
formatters never raise on values.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any, Final

SMART_NUMBER: Final[str] = "SMART_NUMBER"
NULL_VALUE_STRING: Final[str] = "<NULL>"

_SPEC_RE: Final[re.Pattern[str]] = re.compile(
    r"^(?:(?P<fill>.)?(?P<align>[<>=^]))?(?P<sign>[+\- ])?(?P<symbol>[$#])?(?P<zero>0)?"
    r"(?P<width>\d+)?(?P<comma>,)?(?:\.(?P<precision>\d+))?(?P<trim>~)?(?P<type>[defgrs%])?$"
)
_TRIM_RE: Final[re.Pattern[str]] = re.compile(r"(\.\d*?)0+(?!\d)")
_EXPONENT_RE: Final[re.Pattern[str]] = re.compile(r"e([+-])0*(\d)")
_SI_PREFIXES: Final[tuple[str, ...]] = ("y", "z", "a", "f", "p", "n", "µ", "m", "", "k", "M", "G", "T", "P", "E", "Z", "Y")


@dataclass(frozen=True, slots=True)
class NumberFormatter:
    """A callable number formatter.

    Args:
        id: The format specifier this formatter was built from.
        format_value: Formats a finite float.
    """

    id: str
    format_value: Callable[[float], str]

    def __call__(self, value: Any) -> str:
        if value is None:
            return NULL_VALUE_STRING
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return str(value)
        number = float(value)
        if math.isnan(number):
            return "NaN"
        if math.isinf(number):
            return "Infinity" if number > 0 else "-Infinity"
        return self.format_value(number)


def _trim_insignificant(text: str) -> str:
    return _TRIM_RE.sub(lambda match: "" if match.group(1) == "." else match.group(1), text, count=1)


def _round_significant(value: float, digits: int) -> float:
    return float(f"{value:.{max(digits, 1) - 1}e}")


def _format_si(value: float, precision: int, *, trim: bool) -> str:
    """Format with an SI prefix and `precision` significant digits."""

    if value == 0:
        body = f"{0:.{max(precision - 1, 0)}f}"
        return _trim_insignificant(body) if trim else body
    rounded = _round_significant(value, precision)
    exponent = math.floor(math.log10(abs(rounded)))
    prefix_index = max(-8, min(8, math.floor(exponent / 3)))
    scaled = rounded / 10 ** (3 * prefix_index)
    decimals = max(0, precision - 1 - (exponent - 3 * prefix_index))
    body = f"{scaled:.{decimals}f}"
    if trim:
        body = _trim_insignificant(body)
    return body + _SI_PREFIXES[prefix_index + 8]


def _format_rounded(value: float, precision: int, *, comma: str) -> str:
    """Round to significant digits, then render in fixed notation."""

    if value == 0:
        return f"{0:{comma}.{max(precision - 1, 0)}f}"
    rounded = _round_significant(value, precision)
    exponent = math.floor(math.log10(abs(rounded)))
    decimals = max(0, precision - 1 - exponent)
    return f"{rounded:{comma}.{decimals}f}"


def smart_number(value: float) -> str:
    """Format a number compactly based on its magnitude."""

    if value == 0:
        return "0"
    magnitude = abs(value)
    if magnitude >= 1000:
        return _format_si(value, 3, trim=True).replace("G", "B")
    if magnitude >= 1:
        return _trim_insignificant(f"{value:.2f}")
    if magnitude >= 0.001:
        return _trim_insignificant(f"{value:.4f}")
    if magnitude > 0.000001:
        return f"{_format_si(value * 1_000_000, 3, trim=True)}µ"
    return _format_si(value, 3, trim=True)


def _compile_spec(spec: str) -> Callable[[float], str]:
    """Translate a d3-style specifier into a value formatting function.

    Raises:
        ValueError: When the specifier is not recognized.
    """

    match = _SPEC_RE.match(spec)
    if match is None:
        raise ValueError(f"Invalid number format: {spec!r}")

    parts = match.groupdict()
    kind = parts["type"] or ""
    trim = parts["trim"] is not None
    currency = parts["symbol"] == "$"
    comma = "," if parts["comma"] else ""
    precision = int(parts["precision"]) if parts["precision"] is not None else None
    align = f"{parts['fill'] or ''}{parts['align'] or ''}"
    sign = parts["sign"] or ""
    python_spec = "".join(
        (
            align,
            "" if currency else sign,
            "#" if parts["symbol"] == "#" else "",
            parts["zero"] or "",
            parts["width"] or "",
            comma,
        )
    )

    def render(value: float) -> str:
        if kind == "s":
            text = _format_si(value, precision if precision is not None else 6, trim=trim)
        elif kind == "r":
            text = _format_rounded(value, precision if precision is not None else 6, comma=comma)
        elif kind == "d":
            text = format(math.floor(value + 0.5), python_spec + "d")
        elif kind == "":
            text = format(value, f"{python_spec}.{precision if precision is not None else 12}g")
        else:
            python_type = {"e": "e", "f": "f", "g": "#g", "%": "%"}[kind]
            digits = f".{precision}" if precision is not None else ".6"
            text = format(value, f"{python_spec}{digits}{python_type}")
            if kind in ("e", "g"):
                text = _EXPONENT_RE.sub(r"e\1\2", text)
        if trim and kind not in ("s", "d"):
            text = _trim_insignificant(text)
        return text

    if not currency:
        return render

    def render_currency(value: float) -> str:
        if value < 0:
            prefix = "-"
        elif sign == "+":
            prefix = "+"
        else:
            prefix = ""
        return f"{prefix}${render(abs(value))}"

    return render_currency


@lru_cache(maxsize=128)
def get_number_formatter(spec: str | None = None) -> NumberFormatter:
    """Return a (memoized) formatter for a number format specifier.

    Args:
        spec: A d3-style specifier, `SMART_NUMBER`, or None/empty for the
            smart-number default.

    Returns:
        A NumberFormatter whose `id` is the effective specifier.

    Raises:
        ValueError: When the specifier is not recognized.
    """

    if not spec or spec == SMART_NUMBER:
        return NumberFormatter(id=SMART_NUMBER, format_value=smart_number)
    return NumberFormatter(id=spec, format_value=_compile_spec(spec))

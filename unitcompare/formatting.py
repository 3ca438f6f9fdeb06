"""Display helpers turning calculation results into user facing text."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional

import numpy as np

from .config import DisplayConfig
from .pricing import ComputedRow

EMPTY_RESULT = "-"
INFINITY = "\u221e"

_DECIMAL_CONTEXT = Context(prec=400)


def format_unit_price(value: Optional[float], display: Optional[DisplayConfig] = None) -> str:
    """Format ``value`` using the configured separators and fraction digits.

    Ties round half away from zero, so ``0.03125`` becomes ``0,0313``.
    Infinite values render as ``"\u221e"``.
    """

    display = display or DisplayConfig()
    if value is None or np.isnan(value):
        return EMPTY_RESULT
    if np.isinf(value):
        return f"-{INFINITY}" if value < 0 else INFINITY

    step = Decimal(1).scaleb(-display.max_fraction_digits)
    rounded = Decimal(repr(abs(float(value)))).quantize(
        step, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT
    )
    text = f"{rounded:f}"
    integer_part, _, fraction_part = text.partition(".")
    fraction_part = fraction_part.rstrip("0")
    if len(fraction_part) < display.min_fraction_digits:
        fraction_part = fraction_part.ljust(display.min_fraction_digits, "0")

    integer_part = _group_digits(integer_part, display)
    sign = "-" if value < 0 and float(text) != 0 else ""
    if fraction_part:
        return f"{sign}{integer_part}{display.decimal_separator}{fraction_part}"
    return f"{sign}{integer_part}"


def describe_result(computed: Optional[ComputedRow], display: Optional[DisplayConfig] = None) -> str:
    """Return the result cell text for a row, ``"-"`` when there is nothing to show.

    A valid row whose unit price overflows shows ``"\u221e"`` with the suffix.
    """

    display = display or DisplayConfig()
    if computed is None or not computed.is_valid or computed.unit_price is None:
        return EMPTY_RESULT
    return f"{format_unit_price(computed.unit_price, display)} {display.unit_suffix}".rstrip()


def _group_digits(digits: str, display: DisplayConfig) -> str:
    if len(digits) < 3 + display.min_grouping_digits:
        return digits
    groups = []
    while len(digits) > 3:
        groups.append(digits[-3:])
        digits = digits[:-3]
    groups.append(digits)
    return display.group_separator.join(reversed(groups))


__all__ = ["EMPTY_RESULT", "describe_result", "format_unit_price"]

"""Parsing helpers for user typed decimal values."""

from __future__ import annotations

import re
from typing import Any

import numpy as np

NUMERIC_INPUT_PATTERN = re.compile(r"[0-9]*([.,][0-9]*)?")

_LEADING_FLOAT = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def to_number(raw: Any) -> float:
    """Convert ``raw`` into a float, returning NaN when nothing can be parsed.

    The first comma is treated as the decimal separator and only the leading
    numeric prefix is read, so ``"2,5 kg"`` parses as ``2.5``.
    """

    if not isinstance(raw, str) or not raw.strip():
        return np.nan

    normalised = raw.replace(",", ".", 1).lstrip()
    match = _LEADING_FLOAT.match(normalised)
    if match is None:
        return np.nan
    return float(match.group(0))


def is_numeric_input(value: Any) -> bool:
    """Return ``True`` when ``value`` is acceptable while typing a number."""

    if not isinstance(value, str):
        return False
    return NUMERIC_INPUT_PATTERN.fullmatch(value) is not None


__all__ = ["NUMERIC_INPUT_PATTERN", "is_numeric_input", "to_number"]

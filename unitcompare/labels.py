"""Spreadsheet style labels for product rows."""

from __future__ import annotations

from string import ascii_uppercase

ALPHABET = ascii_uppercase


def generate_label(index: int) -> str:
    """Return the alphabetic label for a zero-based ``index``.

    Labels follow spreadsheet column naming: ``0 -> "A"``, ``25 -> "Z"``,
    ``26 -> "AA"`` and ``702 -> "AAA"``.
    """

    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Label index must be an integer, got {type(index).__name__}")
    if index < 0:
        raise ValueError(f"Label index must be non-negative, got {index}")

    letters = []
    current = index
    while current >= 0:
        letters.append(ALPHABET[current % 26])
        current = current // 26 - 1
    return "".join(reversed(letters))


__all__ = ["generate_label"]

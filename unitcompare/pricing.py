"""Unit price comparison engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import MessagesConfig
from .labels import generate_label
from .parsing import to_number

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS: Sequence[str] = (
    "id",
    "label",
    "quantity_value",
    "price_value",
    "is_valid",
    "unit_price",
    "is_winner",
)


class SummaryStatus(str, Enum):
    """Outcome of the latest calculation."""

    ABSENT = "absent"
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class ComputedRow:
    """Derived values for a single row at calculation time."""

    id: int
    label: str
    quantity_value: float
    price_value: float
    is_valid: bool
    unit_price: Optional[float]


@dataclass(frozen=True)
class Summary:
    """Structured output from :func:`compute`."""

    status: SummaryStatus
    rows: Tuple[ComputedRow, ...]
    winner_id: Optional[int]
    message: str

    @property
    def winner(self) -> Optional[ComputedRow]:
        if self.winner_id is None:
            return None
        for row in self.rows:
            if row.id == self.winner_id:
                return row
        return None

    def result_for(self, row_id: int) -> Optional[ComputedRow]:
        for row in self.rows:
            if row.id == row_id:
                return row
        return None

    def to_frame(self) -> pd.DataFrame:
        records: List[Dict[str, Any]] = [
            {
                "id": row.id,
                "label": row.label,
                "quantity_value": row.quantity_value,
                "price_value": row.price_value,
                "is_valid": row.is_valid,
                "unit_price": np.nan if row.unit_price is None else row.unit_price,
                "is_winner": row.id == self.winner_id,
            }
            for row in self.rows
        ]
        return pd.DataFrame(records, columns=list(SUMMARY_COLUMNS))


def compute(rows: Sequence[Any], messages: Optional[MessagesConfig] = None) -> Summary:
    """Validate ``rows`` and select the one with the lowest price per unit.

    ``rows`` holds objects exposing ``id``, ``name``, ``quantity`` and
    ``price``. Invalid rows are reported rather than raised, and when several
    rows share the lowest unit price the earliest one wins.
    """

    messages = messages or MessagesConfig()
    computed = tuple(_compute_row(row, position) for position, row in enumerate(rows))

    winner: Optional[ComputedRow] = None
    for row in computed:
        if not row.is_valid:
            continue
        if winner is None or row.unit_price < winner.unit_price:
            winner = row

    if winner is None:
        logger.info("No valid rows among %d candidates", len(computed))
        return Summary(
            status=SummaryStatus.ERROR,
            rows=computed,
            winner_id=None,
            message=messages.no_valid_rows,
        )

    logger.info("Row '%s' has the lowest unit price %.6g", winner.label, winner.unit_price)
    return Summary(
        status=SummaryStatus.SUCCESS,
        rows=computed,
        winner_id=winner.id,
        message=messages.winner.format(label=winner.label),
    )


def _compute_row(row: Any, position: int) -> ComputedRow:
    name = row.name.strip() if isinstance(row.name, str) else ""
    label = name or generate_label(position)
    quantity_value = to_number(row.quantity)
    price_value = to_number(row.price)

    is_quantity_valid = bool(np.isfinite(quantity_value)) and quantity_value > 0
    is_price_valid = bool(np.isfinite(price_value)) and price_value >= 0
    is_valid = is_quantity_valid and is_price_valid

    return ComputedRow(
        id=row.id,
        label=label,
        quantity_value=quantity_value,
        price_value=price_value,
        is_valid=is_valid,
        unit_price=price_value / quantity_value if is_valid else None,
    )


def _row_key(rows: Sequence[Any]) -> Tuple[Tuple[Any, ...], ...]:
    return tuple((row.id, row.name, row.quantity, row.price) for row in rows)


class SummaryCache:
    """Keep the latest :class:`Summary` together with the rows it describes."""

    def __init__(self) -> None:
        self._key: Optional[Tuple[Tuple[Any, ...], ...]] = None
        self._summary: Optional[Summary] = None

    @property
    def is_empty(self) -> bool:
        return self._summary is None

    def store(self, rows: Sequence[Any], summary: Summary) -> None:
        self._key = _row_key(rows)
        self._summary = summary

    def lookup(self, rows: Sequence[Any]) -> Optional[Summary]:
        """Return the cached summary, or ``None`` when it is stale."""

        if self._summary is None or self._key != _row_key(rows):
            return None
        return self._summary

    def clear(self) -> None:
        self._key = None
        self._summary = None


__all__ = [
    "ComputedRow",
    "Summary",
    "SummaryCache",
    "SummaryStatus",
    "compute",
]

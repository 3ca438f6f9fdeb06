"""Row state for the unit price calculator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple

from .config import MessagesConfig
from .labels import generate_label
from .parsing import is_numeric_input
from .pricing import ComputedRow, Summary, SummaryCache, SummaryStatus, compute

logger = logging.getLogger(__name__)

MIN_ROWS = 2
EDITABLE_FIELDS = ("name", "quantity", "price")
NUMERIC_FIELDS = {"quantity", "price"}


@dataclass(frozen=True)
class Row:
    """A product entry exactly as typed by the user."""

    id: int
    name: str = ""
    quantity: str = ""
    price: str = ""
    placeholder: str = ""


@dataclass
class RowSequence:
    """Issues row ids and label indices; neither counter ever goes back."""

    next_id: int = 1
    next_label_index: int = 0

    def issue(self) -> Tuple[int, int]:
        row_id, label_index = self.next_id, self.next_label_index
        self.next_id += 1
        self.next_label_index += 1
        return row_id, label_index


class RowStore:
    """Ordered collection of rows that keeps at least :data:`MIN_ROWS` entries.

    Every accepted mutation discards the cached :class:`Summary`; rejected
    edits and blocked removals leave the store untouched.
    """

    def __init__(
        self,
        sequence: Optional[RowSequence] = None,
        initial_rows: int = MIN_ROWS,
        messages: Optional[MessagesConfig] = None,
    ) -> None:
        self._sequence = sequence or RowSequence()
        self._messages = messages or MessagesConfig()
        self._rows: List[Row] = []
        self._cache = SummaryCache()
        for _ in range(max(initial_rows, MIN_ROWS)):
            self._rows.append(self._new_row())

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(tuple(self._rows))

    @property
    def rows(self) -> Tuple[Row, ...]:
        return tuple(self._rows)

    @property
    def sequence(self) -> RowSequence:
        return self._sequence

    @property
    def can_remove(self) -> bool:
        return len(self._rows) > MIN_ROWS

    @property
    def summary(self) -> Optional[Summary]:
        return self._cache.lookup(self._rows)

    @property
    def status(self) -> SummaryStatus:
        summary = self.summary
        return SummaryStatus.ABSENT if summary is None else summary.status

    def get(self, row_id: int) -> Optional[Row]:
        for row in self._rows:
            if row.id == row_id:
                return row
        return None

    def add_row(self) -> Row:
        row = self._new_row()
        self._rows.append(row)
        self._invalidate()
        logger.debug("Added row %s with placeholder '%s'", row.id, row.placeholder)
        return row

    def remove_row(self, row_id: int) -> bool:
        if not self.can_remove:
            logger.debug("Ignoring removal of row %s: at least %d rows required", row_id, MIN_ROWS)
            return False

        remaining = [row for row in self._rows if row.id != row_id]
        if len(remaining) == len(self._rows):
            logger.debug("Ignoring removal of unknown row %s", row_id)
            return False

        self._rows = remaining
        self._invalidate()
        logger.debug("Removed row %s", row_id)
        return True

    def update_field(self, row_id: int, field: str, value: str) -> bool:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown row field '{field}'")

        if not isinstance(value, str):
            logger.debug("Rejected non-text %s input %r for row %s", field, value, row_id)
            return False

        if field in NUMERIC_FIELDS and not is_numeric_input(value):
            logger.debug("Rejected %s input %r for row %s", field, value, row_id)
            return False

        for position, row in enumerate(self._rows):
            if row.id != row_id:
                continue
            if getattr(row, field) == value:
                return False
            self._rows[position] = replace(row, **{field: value})
            self._invalidate()
            return True

        logger.debug("Ignoring edit of unknown row %s", row_id)
        return False

    def load(self, entries: Iterable[Mapping[str, Any]]) -> List[Row]:
        """Fill rows from ``entries``, reusing untouched rows before adding new ones.

        Values go through :meth:`update_field`, so rejected numeric inputs
        leave the corresponding field empty.
        """

        touched: List[Row] = []
        blank = [row.id for row in self._rows if _is_blank(row)]
        for entry in entries:
            row_id = blank.pop(0) if blank else self.add_row().id
            for field in EDITABLE_FIELDS:
                value = entry.get(field)
                if value is None or value == "":
                    continue
                if not self.update_field(row_id, field, str(value)):
                    logger.warning("Discarded %s value %r for row %s", field, value, row_id)
            touched.append(self.get(row_id))
        return touched

    def calculate(self) -> Summary:
        summary = compute(self._rows, self._messages)
        self._cache.store(self._rows, summary)
        return summary

    def result_for(self, row_id: int) -> Optional[ComputedRow]:
        summary = self.summary
        if summary is None:
            return None
        return summary.result_for(row_id)

    def is_winner(self, row_id: int) -> bool:
        summary = self.summary
        return summary is not None and summary.winner_id == row_id

    def _new_row(self) -> Row:
        row_id, label_index = self._sequence.issue()
        return Row(id=row_id, placeholder=generate_label(label_index))

    def _invalidate(self) -> None:
        self._cache.clear()


def _is_blank(row: Row) -> bool:
    return not (row.name or row.quantity or row.price)


__all__ = ["MIN_ROWS", "Row", "RowSequence", "RowStore"]

import math

import pandas as pd
import pytest

from unitcompare.config import MessagesConfig
from unitcompare.pricing import SummaryCache, SummaryStatus, compute
from unitcompare.rows import Row


def _rows(*entries):
    return [
        Row(id=position + 1, name=name, quantity=quantity, price=price)
        for position, (name, quantity, price) in enumerate(entries)
    ]


def test_compute_selects_lowest_unit_price():
    rows = _rows(("", "2", "10"), ("", "5", "20"))

    summary = compute(rows)

    assert summary.status is SummaryStatus.SUCCESS
    assert [row.unit_price for row in summary.rows] == pytest.approx([5.0, 4.0])
    assert summary.winner_id == 2
    assert summary.message == "B has the best price per unit."


def test_compute_keeps_earliest_row_on_ties():
    rows = _rows(("First", "2", "4"), ("Second", "1", "2"), ("Third", "4", "8"))

    summary = compute(rows)

    assert summary.winner_id == 1
    assert summary.winner.label == "First"


def test_compute_preserves_row_order_and_length():
    rows = _rows(("C", "1", "3"), ("", "", ""), ("A", "1", "1"))

    summary = compute(rows)

    assert len(summary.rows) == len(rows)
    assert [row.id for row in summary.rows] == [1, 2, 3]
    assert [row.label for row in summary.rows] == ["C", "B", "A"]


def test_compute_uses_trimmed_name_or_positional_label():
    rows = _rows(("  Milk  ", "1", "1"), ("   ", "1", "2"))

    summary = compute(rows)

    assert [row.label for row in summary.rows] == ["Milk", "B"]


def test_compute_reports_error_when_no_row_is_valid():
    rows = _rows(("", "0", "10"), ("", "0", "5"))

    summary = compute(rows)

    assert summary.status is SummaryStatus.ERROR
    assert summary.winner_id is None
    assert summary.winner is None
    assert summary.message == MessagesConfig().no_valid_rows
    assert not any(row.is_valid for row in summary.rows)


def test_compute_marks_invalid_rows_without_aborting():
    rows = _rows(("", "", "5"), ("", "3", ""), ("", "4", "2"))

    summary = compute(rows)

    first, second, third = summary.rows
    assert not first.is_valid and first.unit_price is None
    assert math.isnan(first.quantity_value)
    assert not second.is_valid and math.isnan(second.price_value)
    assert third.is_valid
    assert summary.winner_id == 3


def test_compute_accepts_zero_price():
    rows = _rows(("Free", "3", "0"), ("Paid", "1", "1"))

    summary = compute(rows)

    assert summary.rows[0].unit_price == 0
    assert summary.winner_id == 1


def test_compute_uses_configured_messages():
    messages = MessagesConfig(no_valid_rows="Nope", winner="Winner: {label}")

    assert compute(_rows(("X", "1", "1"), ("", "", "")), messages).message == "Winner: X"
    assert compute(_rows(("", "", ""), ("", "", "")), messages).message == "Nope"


def test_compute_is_repeatable():
    rows = _rows(("", "2", "3"), ("", "", "1"))

    first = compute(rows)
    second = compute(rows)

    assert first.status is second.status
    assert first.winner_id == second.winner_id
    assert first.message == second.message
    pd.testing.assert_frame_equal(first.to_frame(), second.to_frame())


def test_summary_to_frame_flags_winner():
    summary = compute(_rows(("", "2", "10"), ("", "5", "20")))

    frame = summary.to_frame()

    assert list(frame["is_winner"]) == [False, True]
    assert frame.loc[1, "unit_price"] == pytest.approx(4.0)


def test_summary_cache_detects_stale_rows():
    rows = _rows(("", "1", "2"), ("", "2", "2"))
    cache = SummaryCache()
    summary = compute(rows)
    cache.store(rows, summary)

    assert cache.lookup(rows) is summary
    changed = [rows[0], Row(id=2, quantity="2", price="3")]
    assert cache.lookup(changed) is None

    cache.clear()
    assert cache.is_empty
    assert cache.lookup(rows) is None


def test_compute_falls_back_to_positional_label_for_non_text_name():
    rows = [Row(id=1, name=None, quantity="1", price="2"), Row(id=2, name=7, quantity="1", price="3")]

    summary = compute(rows)

    assert [row.label for row in summary.rows] == ["A", "B"]
    assert summary.winner_id == 1

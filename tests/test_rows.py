import pytest

from unitcompare.pricing import SummaryStatus
from unitcompare.rows import MIN_ROWS, RowSequence, RowStore


def test_store_starts_with_two_empty_rows(store):
    assert len(store) == MIN_ROWS
    assert [row.id for row in store.rows] == [1, 2]
    assert [row.placeholder for row in store.rows] == ["A", "B"]
    assert all(row.name == "" and row.quantity == "" and row.price == "" for row in store.rows)
    assert store.sequence.next_id == 3
    assert store.sequence.next_label_index == 2
    assert store.status is SummaryStatus.ABSENT


def test_add_row_issues_new_id_and_placeholder(store):
    row = store.add_row()

    assert row.id == 3
    assert row.placeholder == "C"
    assert store.rows[-1] == row


def test_remove_row_is_blocked_at_minimum(store):
    before = store.rows

    assert store.remove_row(1) is False
    assert store.rows == before
    assert not store.can_remove


def test_remove_row_ignores_unknown_id(store):
    store.add_row()
    before = store.rows

    assert store.remove_row(99) is False
    assert store.rows == before


def test_remove_row_preserves_relative_order(store):
    store.add_row()
    store.add_row()

    assert store.remove_row(2) is True
    assert [row.id for row in store.rows] == [1, 3, 4]


def test_removed_labels_are_not_reissued(store):
    third = store.add_row()
    store.remove_row(third.id)

    fourth = store.add_row()

    assert fourth.id == 4
    assert fourth.placeholder == "D"


def test_store_uses_injected_sequence():
    store = RowStore(sequence=RowSequence(next_id=10, next_label_index=26))

    assert [row.id for row in store.rows] == [10, 11]
    assert [row.placeholder for row in store.rows] == ["AA", "AB"]


def test_update_field_rejects_invalid_numeric_input(store):
    assert store.update_field(1, "quantity", "12.3") is True

    assert store.update_field(1, "quantity", "12.3.4") is False
    assert store.update_field(1, "price", "abc") is False
    assert store.get(1).quantity == "12.3"
    assert store.get(1).price == ""


def test_update_field_accepts_any_name(store):
    assert store.update_field(2, "name", "Café 1kg, 3.5€") is True
    assert store.get(2).name == "Café 1kg, 3.5€"


def test_update_field_rejects_unknown_field(store):
    with pytest.raises(ValueError):
        store.update_field(1, "id", "5")


def test_update_field_ignores_unknown_row(store):
    before = store.rows

    assert store.update_field(42, "price", "1") is False
    assert store.rows == before


def test_accepted_edit_invalidates_summary(filled_store):
    filled_store.calculate()
    assert filled_store.status is SummaryStatus.SUCCESS

    filled_store.update_field(1, "price", "1")

    assert filled_store.summary is None
    assert filled_store.status is SummaryStatus.ABSENT


def test_unchanged_or_rejected_edit_keeps_summary(filled_store):
    summary = filled_store.calculate()

    assert filled_store.update_field(1, "price", "10") is False
    assert filled_store.update_field(1, "price", "1..0") is False
    assert filled_store.summary is summary


def test_edit_reverted_to_same_value_still_needs_recalculation(filled_store):
    filled_store.calculate()

    filled_store.update_field(1, "price", "11")
    filled_store.update_field(1, "price", "10")

    assert filled_store.summary is None


def test_add_and_remove_invalidate_summary(filled_store):
    filled_store.calculate()
    row = filled_store.add_row()
    assert filled_store.summary is None

    filled_store.calculate()
    filled_store.remove_row(row.id)
    assert filled_store.summary is None


def test_blocked_removal_keeps_summary(filled_store):
    summary = filled_store.calculate()

    filled_store.remove_row(1)

    assert filled_store.summary is summary


def test_calculate_exposes_per_row_results(filled_store):
    filled_store.calculate()

    assert filled_store.is_winner(2)
    assert not filled_store.is_winner(1)
    assert filled_store.result_for(1).unit_price == pytest.approx(5.0)
    assert filled_store.result_for(99) is None


def test_result_for_is_empty_without_summary(filled_store):
    assert filled_store.result_for(1) is None
    assert not filled_store.is_winner(2)


def test_load_reuses_blank_rows_then_adds(store):
    rows = store.load(
        [
            {"name": "A1", "quantity": "1", "price": "1"},
            {"name": "B1", "quantity": "2", "price": "1"},
            {"name": "C1", "quantity": "3", "price": "x"},
        ]
    )

    assert [row.id for row in rows] == [1, 2, 3]
    assert len(store) == 3
    assert store.get(3).name == "C1"
    assert store.get(3).price == ""


def test_update_field_rejects_non_text_values(store):
    assert store.update_field(1, "name", 5) is False
    assert store.update_field(1, "quantity", 2) is False
    assert store.get(1).name == ""

    summary = store.calculate()

    assert summary.rows[0].label == "A"

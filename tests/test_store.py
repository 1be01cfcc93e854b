"""Tests for the expense store and id generation."""

import itertools
import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from moneymap.models.audit import AuditEventType
from moneymap.models.expense import BudgetSettings, FilterState
from moneymap.store import ExpenseStore, IdGenerator


@pytest.fixture
def filters():
    return FilterState.for_today(date(2024, 1, 20))


@pytest.fixture
def budget():
    return BudgetSettings()


@pytest.fixture
def store(adapter, filters, budget, audit_logger):
    return ExpenseStore(
        storage=adapter,
        filters=filters,
        budget=budget,
        id_generator=IdGenerator(clock=itertools.count(1_700_000_000_000).__next__),
        audit_logger=audit_logger,
    )


class TestIdGenerator:
    """Tests for timestamp ids."""

    def test_ids_follow_clock(self):
        ids = IdGenerator(clock=itertools.count(1000, 5).__next__)
        assert ids.next_id() == 1000
        assert ids.next_id() == 1005

    def test_same_millisecond_still_unique(self):
        ids = IdGenerator(clock=lambda: 1000)
        assert [ids.next_id() for _ in range(3)] == [1000, 1001, 1002]

    def test_clock_stepping_back_keeps_increasing(self):
        ids = IdGenerator(clock=lambda: 500)
        ids.observe(2000)
        assert ids.next_id() == 2001


class TestExpenseStore:
    """Tests for add/delete/clear with write-through persistence."""

    def test_add_persists_and_returns_expense(self, store, adapter):
        expense = store.add(Decimal("120"), date(2024, 1, 15), "Food", "Lunch")
        assert len(store) == 1
        assert store.get(expense.id) == expense
        assert adapter.load().expenses == [expense]

    def test_add_moves_filter_to_expense_month(self, store, filters):
        store.add(Decimal("10"), date(2023, 6, 5), "Food")
        assert filters.selected_month == 5
        assert filters.selected_year == 2023

    def test_add_keeps_category_filter(self, store, filters):
        filters.selected_category = "Bills"
        store.add(Decimal("10"), date(2024, 1, 5), "Food")
        assert filters.selected_category == "Bills"

    def test_blank_note_stored_as_none(self, store):
        expense = store.add(Decimal("10"), date(2024, 1, 5), "Food", "")
        assert expense.note is None

    def test_ids_unique_and_increasing(self, store):
        first = store.add(Decimal("1"), date(2024, 1, 5), "Food")
        second = store.add(Decimal("2"), date(2024, 1, 5), "Food")
        assert second.id > first.id

    def test_new_ids_exceed_restored_ones(self, adapter, filters, budget):
        store = ExpenseStore(
            storage=adapter,
            filters=filters,
            budget=budget,
            id_generator=IdGenerator(clock=lambda: 10),
        )
        restored = store.add(Decimal("1"), date(2024, 1, 5), "Food")
        reopened = ExpenseStore(
            storage=adapter,
            filters=filters,
            budget=budget,
            expenses=list(store.expenses),
            id_generator=IdGenerator(clock=lambda: 10),
        )
        assert reopened.add(Decimal("1"), date(2024, 1, 5), "Food").id > restored.id

    def test_negative_amount_rejected_by_model(self, store):
        with pytest.raises(ValidationError):
            store.add(Decimal("-1"), date(2024, 1, 5), "Food")

    def test_delete_removes_and_persists(self, store, adapter):
        keep = store.add(Decimal("1"), date(2024, 1, 5), "Food")
        gone = store.add(Decimal("2"), date(2024, 1, 6), "Bills")
        assert store.delete(gone.id) is True
        assert store.expenses == (keep,)
        assert adapter.load().expenses == [keep]

    def test_delete_unknown_id_is_noop(self, store, audit_logger):
        store.add(Decimal("1"), date(2024, 1, 5), "Food")
        assert store.delete(12345) is False
        assert len(store) == 1
        event = audit_logger.recent_events[0]
        assert event.event_type == AuditEventType.EXPENSE_DELETED
        assert event.details["found"] is False

    def test_clear_requires_confirmation(self, store, adapter):
        store.add(Decimal("1"), date(2024, 1, 5), "Food")
        assert store.clear(lambda: False) is False
        assert len(store) == 1

        assert store.clear(lambda: True) is True
        assert len(store) == 0
        assert adapter.load().expenses == []

    def test_persist_includes_budget(self, store, budget, adapter):
        budget.monthly_limit = Decimal("500")
        store.persist()
        assert adapter.load().monthly_limit == Decimal("500")

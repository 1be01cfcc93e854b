"""
Expense Store

The in-memory, ordered collection of expenses. It is the single source
of truth for everything the dashboard shows.

Every mutation (add, delete, clear) writes the whole state back through
the storage adapter before returning.
"""

import time
from datetime import date
from decimal import Decimal
from typing import Callable, Iterator, Optional

from moneymap.audit import AuditLogger
from moneymap.models.expense import (
    BudgetSettings,
    Expense,
    FilterState,
)
from moneymap.services.storage import StorageAdapter


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """
    Creation-timestamp ids that strictly increase.

    Ids are millisecond timestamps. When two expenses land in the same
    millisecond (or the clock steps back) the previous id + 1 is used
    instead, so ids stay unique and later additions still sort first.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms, last_id: int = 0):
        self._clock = clock
        self._last_id = last_id

    def observe(self, existing_id: int) -> None:
        """Make sure future ids are greater than an id already in use."""
        if existing_id > self._last_id:
            self._last_id = existing_id

    def next_id(self) -> int:
        candidate = self._clock()
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate


class ExpenseStore:
    """
    Ordered expense collection with write-through persistence.

    The store shares the BudgetSettings and FilterState objects owned by
    the controller: budget figures are saved alongside the expenses, and
    adding an expense moves the month filter to that expense's month.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        filters: FilterState,
        budget: BudgetSettings,
        expenses: Optional[list[Expense]] = None,
        id_generator: Optional[IdGenerator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._filters = filters
        self._budget = budget
        self._expenses: list[Expense] = list(expenses or [])
        self._ids = id_generator or IdGenerator()
        self._audit = audit_logger or AuditLogger()

        for expense in self._expenses:
            self._ids.observe(expense.id)

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(tuple(self._expenses))

    @property
    def expenses(self) -> tuple[Expense, ...]:
        """Snapshot of the collection in insertion order."""
        return tuple(self._expenses)

    def get(self, expense_id: int) -> Optional[Expense]:
        for expense in self._expenses:
            if expense.id == expense_id:
                return expense
        return None

    def add(
        self,
        amount: Decimal,
        expense_date: date,
        category: str,
        note: Optional[str] = None,
    ) -> Expense:
        """
        Append a new expense, persist, and focus the filter on its month.

        Input is expected to be validated already (amount > 0, category
        non-empty); the model still rejects negative amounts.
        """
        expense = Expense(
            id=self._ids.next_id(),
            amount=amount,
            date=expense_date,
            category=category,
            note=note or None,
        )
        self._expenses.append(expense)
        self.persist()

        self._filters.select_period(expense.month_index, expense.date.year)

        self._audit.log_expense_added(
            expense_id=expense.id,
            amount=str(expense.amount),
            category=expense.category,
            expense_date=expense.date.isoformat(),
        )
        return expense

    def delete(self, expense_id: int) -> bool:
        """
        Remove the expense with this id.

        Returns False (and changes nothing in memory) if no such id exists.
        """
        for index, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                del self._expenses[index]
                found = True
                break
        else:
            found = False

        self.persist()
        self._audit.log_expense_deleted(expense_id=expense_id, found=found)
        return found

    def clear(self, confirm: Callable[[], bool]) -> bool:
        """
        Remove every expense, but only if confirm() returns True.

        Returns:
            True if the collection was cleared
        """
        if not confirm():
            return False
        count = len(self._expenses)
        self._expenses.clear()
        self.persist()
        self._audit.log_expenses_cleared(count=count)
        return True

    def persist(self) -> bool:
        """Write the full state snapshot (expenses, limit, income)."""
        return self._storage.save(
            self._expenses,
            self._budget.monthly_limit,
            self._budget.monthly_income,
        )

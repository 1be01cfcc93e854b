"""Expense store package."""

from moneymap.store.expense_store import ExpenseStore, IdGenerator

__all__ = ["ExpenseStore", "IdGenerator"]

"""
Data Models Package

Pydantic models for expense records and the change events a store emits.
"""

from iexpense.models.change import ChangeType, StoreChange
from iexpense.models.expense import EXPENSE_TYPES, ExpenseItem

__all__ = [
    "EXPENSE_TYPES",
    "ChangeType",
    "ExpenseItem",
    "StoreChange",
]

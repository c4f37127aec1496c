"""
iExpense - Core Package

The reusable core of a personal expense tracker: expense records,
an observable store that mirrors itself to local storage, and the
codec and storage bindings behind it.
"""

from iexpense.store import ExpenseStore, create_store

__version__ = "1.0.0"
__author__ = "iExpense Team"

__all__ = ["ExpenseStore", "create_store"]

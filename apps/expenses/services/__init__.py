"""
Expenses app services layer.
"""

from .exceptions import (
    ExpensesServiceError,
    ExpenseNotFoundError,
    InvalidExpenseError,
)

from .expense_management import (
    create_expense,
    get_expense_by_id,
    list_expenses,
    update_expense,
    delete_expense,
)

from .expense_analytics import get_expense_analytics


__all__ = [
    # Exceptions
    'ExpensesServiceError',
    'ExpenseNotFoundError',
    'InvalidExpenseError',

    # Expense Management
    'create_expense',
    'get_expense_by_id',
    'list_expenses',
    'update_expense',
    'delete_expense',

    # Analytics
    'get_expense_analytics',
]

"""
Domain-specific exceptions for expenses app.
"""


class ExpensesServiceError(Exception):
    """Base exception for all expenses service errors."""
    pass


class ExpenseNotFoundError(ExpensesServiceError):
    """Raised when an expense does not exist."""
    pass


class InvalidExpenseError(ExpensesServiceError):
    """Raised when expense data is invalid."""
    pass

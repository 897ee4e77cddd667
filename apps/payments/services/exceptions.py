"""
Domain-specific exceptions for payments app.
"""


class PaymentsServiceError(Exception):
    """Base exception for all payments service errors."""
    pass


class PaymentCardNotFoundError(PaymentsServiceError):
    """Raised when a card does not exist or belongs to someone else."""
    pass


class InvalidCardError(PaymentsServiceError):
    """Raised when card details fail validation."""
    pass

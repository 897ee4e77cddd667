"""
Domain-specific exceptions for orders app.

Every one of these raised inside an order operation aborts the
enclosing transaction, so no partial stock change is ever committed.
"""

from apps.stock.services.exceptions import NoStockError, InsufficientStockError


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class OrderValidationError(OrdersServiceError):
    """Raised when ordered items are malformed."""
    pass


class OrderStateError(OrdersServiceError):
    """Raised when an order's status does not allow the operation."""
    pass


class NotFoundError(OrdersServiceError):
    """Raised when a referenced record does not exist."""
    pass


class OrderNotFoundError(NotFoundError):
    """Raised when an order does not exist."""
    pass


class OrderProductNotFoundError(NotFoundError):
    """Raised when an ordered product does not exist or is inactive."""
    pass


class InsufficientPermissionsError(OrdersServiceError):
    """Raised when a user is neither the customer nor shop staff."""
    pass


__all__ = [
    'OrdersServiceError',
    'OrderValidationError',
    'OrderStateError',
    'NotFoundError',
    'OrderNotFoundError',
    'OrderProductNotFoundError',
    'InsufficientPermissionsError',
    'NoStockError',
    'InsufficientStockError',
]

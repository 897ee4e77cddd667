"""
Domain-specific exceptions for stock services.

NoStockError and InsufficientStockError abort order settlement and
are re-exported by the orders services.
"""


class StockServiceError(Exception):
    """Base exception for all stock service errors."""
    pass


class NoStockError(StockServiceError):
    """Raised when a shop has no regular stock for the business day."""
    pass


class InsufficientStockError(StockServiceError):
    """Raised when daily stock and product stock cannot cover the demand."""

    def __init__(self, product_names):
        self.product_names = list(product_names)
        super().__init__(
            f"Insufficient stock for: {', '.join(self.product_names)}"
        )


class RegularStockNotFoundError(StockServiceError):
    """Raised when a regular stock batch does not exist."""
    pass


class InvalidStockLineError(StockServiceError):
    """Raised when stock lines are malformed."""
    pass


class StockInUseError(StockServiceError):
    """Raised when removing stock that orders already consumed."""
    pass


class InsufficientPermissionsError(StockServiceError):
    """Raised when a user is not staff of the stock's shop."""
    pass

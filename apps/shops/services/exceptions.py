"""
Domain-specific exceptions for shops app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ShopsServiceError(Exception):
    """Base exception for all shops service errors."""
    pass


class ShopNotFoundError(ShopsServiceError):
    """Raised when a shop does not exist or is inactive."""
    pass


class DuplicateShopError(ShopsServiceError):
    """Raised when a shop with the same name already exists."""
    pass


class InvalidTimeZoneError(ShopsServiceError):
    """Raised when a shop's time zone is not a known IANA zone."""
    pass


class StaffMemberNotFoundError(ShopsServiceError):
    """Raised when the user to be added as staff does not exist."""
    pass


class InsufficientPermissionsError(ShopsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass

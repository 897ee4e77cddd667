"""
Domain-specific exceptions for accounts services.

Views map them to HTTP responses: registration and password problems
to 400, bad credentials to 401, refused access to 403.
"""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when the email is already registered."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when a deactivated account tries to log in."""
    pass


class BackofficeAccessError(AccountsServiceError):
    """Raised when a non back-office account uses the admin login."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when the current password given for a change is wrong."""
    pass

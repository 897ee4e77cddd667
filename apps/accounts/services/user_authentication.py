"""Login for customers, shop staff and back-office accounts."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError, BackofficeAccessError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, email: str, password: str, backoffice: bool = False) -> User:
    """
    Check credentials and stamp ``last_login``.

    Args:
        email: Login email (case-insensitive)
        password: Plain password
        backoffice: Only accept accounts with ``is_staff`` (admin login)

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If email or password is wrong
        InactiveAccountError: If the account is deactivated
        BackofficeAccessError: If backoffice is set and the user is not is_staff
    """
    try:
        user = User.objects.select_for_update().get(email__iexact=email)
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid email or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid email or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    if backoffice and not user.is_staff:
        logger.warning("Admin login refused for %s", user.id)
        raise BackofficeAccessError("This account has no back-office access")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user

"""Profile and password changes for the logged-in user."""

import logging
from typing import Optional

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import PasswordConfirmationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def update_profile(
    *,
    user: User,
    display_name: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None
) -> User:
    """Update whichever contact fields were provided. Email cannot change."""
    update_fields = []
    if display_name is not None:
        user.display_name = display_name.strip()
        update_fields.append('display_name')
    if phone is not None:
        user.phone = phone.strip()
        update_fields.append('phone')
    if address is not None:
        user.address = address.strip()
        update_fields.append('address')

    if update_fields:
        user.save(update_fields=update_fields)
    return user


@transaction.atomic
def change_password(*, user: User, old_password: str, new_password: str) -> User:
    """
    Replace the user's password.

    Raises:
        PasswordConfirmationError: If old_password is wrong
    """
    if not user.check_password(old_password):
        raise PasswordConfirmationError("Current password is incorrect")

    user.set_password(new_password)
    user.save(update_fields=['password'])

    logger.info("Password changed for user %s", user.id)
    return user

"""
Shop management service.

Handles shop CRUD and staff assignment with transaction safety.
"""

import logging
from typing import Optional
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.db import transaction

from apps.accounts.models import User
from apps.shops.models import Shop

from .exceptions import (
    ShopNotFoundError,
    DuplicateShopError,
    InvalidTimeZoneError,
    StaffMemberNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def _validate_time_zone(time_zone: str) -> None:
    if not time_zone:
        return
    try:
        ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidTimeZoneError(f"Unknown time zone '{time_zone}'")


def _get_locked_shop(shop_id: UUID) -> Shop:
    try:
        return Shop.objects.select_for_update().get(id=shop_id)
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop with ID {shop_id} not found")


@transaction.atomic
def create_shop(
    *,
    name: str,
    address: str,
    created_by: User,
    time_zone: str = ''
) -> Shop:
    """
    Create a new shop and register its creator as staff.

    Args:
        name: Unique shop name
        address: Postal address
        created_by: User who will own the shop
        time_zone: Optional IANA time zone for business days

    Returns:
        Created Shop instance

    Raises:
        DuplicateShopError: If a shop with this name exists
        InvalidTimeZoneError: If time_zone is not a known zone
    """
    name = name.strip()
    if Shop.objects.filter(name__iexact=name).exists():
        raise DuplicateShopError(f"Shop '{name}' already exists")

    _validate_time_zone(time_zone)

    shop = Shop.objects.create(
        name=name,
        address=address.strip(),
        time_zone=time_zone,
        owner=created_by,
    )
    shop.staff.add(created_by)

    logger.info("Shop %s created by %s", shop.id, created_by.id)
    return shop


def get_shop_by_id(*, shop_id: UUID, include_inactive: bool = False) -> Shop:
    """
    Get a shop by ID.

    Raises:
        ShopNotFoundError: If shop doesn't exist (or is inactive)
    """
    queryset = Shop.objects.select_related('owner')
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    try:
        return queryset.get(id=shop_id)
    except Shop.DoesNotExist:
        raise ShopNotFoundError(f"Shop with ID {shop_id} not found")


def list_shops(*, name: Optional[str] = None):
    """Return active shops, optionally filtered by a case-insensitive name fragment."""
    queryset = Shop.objects.filter(is_active=True).select_related('owner')
    if name:
        queryset = queryset.filter(name__icontains=name)
    return queryset.order_by('name')


@transaction.atomic
def update_shop(
    *,
    shop_id: UUID,
    user: User,
    name: Optional[str] = None,
    address: Optional[str] = None,
    time_zone: Optional[str] = None
) -> Shop:
    """
    Update shop details (staff only).

    Args:
        shop_id: UUID of the shop
        user: User performing the update
        name: New name (optional)
        address: New address (optional)
        time_zone: New time zone (optional)

    Returns:
        Updated Shop instance

    Raises:
        ShopNotFoundError: If shop doesn't exist
        InsufficientPermissionsError: If user is not shop staff
        DuplicateShopError: If the new name is taken
        InvalidTimeZoneError: If time_zone is not a known zone
    """
    shop = _get_locked_shop(shop_id)

    if not shop.has_staff(user):
        raise InsufficientPermissionsError("Only shop staff can update the shop")

    update_fields = ['updated_at']

    if name is not None:
        name = name.strip()
        if Shop.objects.filter(name__iexact=name).exclude(id=shop.id).exists():
            raise DuplicateShopError(f"Shop '{name}' already exists")
        shop.name = name
        update_fields.append('name')

    if address is not None:
        shop.address = address.strip()
        update_fields.append('address')

    if time_zone is not None:
        _validate_time_zone(time_zone)
        shop.time_zone = time_zone
        update_fields.append('time_zone')

    shop.save(update_fields=update_fields)

    return shop


@transaction.atomic
def deactivate_shop(*, shop_id: UUID, user: User) -> Shop:
    """
    Soft-delete a shop (owner only).

    Orders and stock history stay intact; the shop just stops
    appearing in listings and accepting new orders.

    Raises:
        ShopNotFoundError: If shop doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    shop = _get_locked_shop(shop_id)

    if shop.owner_id != user.id and not user.is_superuser:
        raise InsufficientPermissionsError("Only the shop owner can delete the shop")

    shop.is_active = False
    shop.save(update_fields=['is_active', 'updated_at'])

    logger.info("Shop %s deactivated by %s", shop.id, user.id)
    return shop


@transaction.atomic
def add_staff_member(*, shop_id: UUID, user: User, member_email: str) -> Shop:
    """
    Add an existing user to the shop staff (owner only).

    Raises:
        ShopNotFoundError: If shop doesn't exist
        InsufficientPermissionsError: If user is not the owner
        StaffMemberNotFoundError: If no active user has this email
    """
    shop = _get_locked_shop(shop_id)

    if shop.owner_id != user.id and not user.is_superuser:
        raise InsufficientPermissionsError("Only the shop owner can add staff")

    try:
        member = User.objects.get(email__iexact=member_email, is_active=True)
    except User.DoesNotExist:
        raise StaffMemberNotFoundError(f"User with email {member_email} not found")

    shop.staff.add(member)
    return shop

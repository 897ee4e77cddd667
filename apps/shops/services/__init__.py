"""
Shops app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    ShopsServiceError,
    ShopNotFoundError,
    DuplicateShopError,
    InvalidTimeZoneError,
    StaffMemberNotFoundError,
    InsufficientPermissionsError,
)

from .shop_management import (
    create_shop,
    update_shop,
    deactivate_shop,
    add_staff_member,
    get_shop_by_id,
    list_shops,
)


__all__ = [
    # Exceptions
    'ShopsServiceError',
    'ShopNotFoundError',
    'DuplicateShopError',
    'InvalidTimeZoneError',
    'StaffMemberNotFoundError',
    'InsufficientPermissionsError',

    # Shop Management
    'create_shop',
    'update_shop',
    'deactivate_shop',
    'add_staff_member',
    'get_shop_by_id',
    'list_shops',
]

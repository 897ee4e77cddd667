import logging
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.catalog.models import Product
from apps.favourites.models import FavouriteItem

from .exceptions import FavouriteNotFoundError, FavouriteProductNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def toggle_favourite(*, user: User, product_id: UUID) -> bool:
    """
    Add the product to the user's favourites, or remove it if present.

    Returns:
        True if the product was added, False if it was removed

    Raises:
        FavouriteProductNotFoundError: If product doesn't exist
    """
    if not Product.objects.filter(id=product_id, is_active=True).exists():
        raise FavouriteProductNotFoundError(f"Product with ID {product_id} not found")

    deleted, _ = FavouriteItem.objects.filter(user=user, product_id=product_id).delete()
    if deleted:
        logger.debug("User %s unfavourited product %s", user.id, product_id)
        return False

    FavouriteItem.objects.create(user=user, product_id=product_id)
    logger.debug("User %s favourited product %s", user.id, product_id)
    return True


def list_favourites(*, user: User) -> QuerySet:
    return (
        FavouriteItem.objects
        .filter(user=user)
        .select_related('product', 'product__category')
    )


def delete_favourite(*, favourite_id: UUID, user: User) -> None:
    """
    Raises:
        FavouriteNotFoundError: If the favourite doesn't exist or isn't the user's
    """
    deleted, _ = FavouriteItem.objects.filter(id=favourite_id, user=user).delete()
    if not deleted:
        raise FavouriteNotFoundError(f"Favourite with ID {favourite_id} not found")

"""Read-side order queries."""

from typing import Optional
from uuid import UUID

from django.db.models import Prefetch, Q, QuerySet

from apps.accounts.models import User
from apps.orders.models import Order, OrderItem

from .exceptions import OrderNotFoundError, InsufficientPermissionsError


def _base_queryset() -> QuerySet:
    return (
        Order.objects
        .select_related('shop', 'customer')
        .prefetch_related(
            Prefetch('items', queryset=OrderItem.objects.order_by('position'))
        )
    )


def get_order_by_id(*, order_id: UUID, user: Optional[User] = None) -> Order:
    """
    Get an order with its items.

    Args:
        order_id: UUID of the order
        user: When given, must be the customer or shop staff

    Raises:
        OrderNotFoundError: If order doesn't exist
        InsufficientPermissionsError: If user may not see the order
    """
    try:
        order = _base_queryset().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    if user is not None and not order.can_access(user):
        raise InsufficientPermissionsError("You cannot view this order")

    return order


def list_orders(
    *,
    user: User,
    shop_id: Optional[UUID] = None,
    status: Optional[str] = None,
    order_number: Optional[str] = None,
    customer_only: bool = False
) -> QuerySet:
    """
    Orders visible to ``user``, newest first.

    Customers see their own orders; shop staff also see every order of
    their shops. ``customer_only`` restricts to the user's own orders.
    """
    queryset = _base_queryset()

    if customer_only:
        queryset = queryset.filter(customer=user)
    elif not user.is_superuser:
        queryset = queryset.filter(Q(customer=user) | Q(shop__staff=user))

    if shop_id:
        queryset = queryset.filter(shop_id=shop_id)
    if status:
        queryset = queryset.filter(status=status)
    if order_number:
        queryset = queryset.filter(order_number__icontains=order_number)

    return queryset.distinct().order_by('-created_at')

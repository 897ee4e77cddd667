"""
Order lifecycle service.

Create, update and cancel each run as one transaction covering the
stock batches, stock lines, product counters and the order itself:

- create: aggregate demand, lock the business day's batches,
  allocate, then persist order, items, stock and ledger
- update (items): revert the old consumption, then allocate the new
  items against the order's original business day
- cancel: revert, then mark cancelled

Any error raised on the way aborts the whole transaction.
"""

import logging
import secrets
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.catalog.models import Product
from apps.orders.models import Order, OrderItem, OrderStatus, StockAllocation
from apps.shops.services import get_shop_by_id
from apps.stock.models import StockLine
from apps.stock.services import business_date_for, find_batches

from .allocation import AllocationResult, allocate
from .demand import DemandItem, PlainDemand, aggregate_demand
from .reversal import revert_order_stock
from .exceptions import (
    OrderValidationError,
    OrderStateError,
    OrderNotFoundError,
    OrderProductNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def _generate_order_number(moment: datetime) -> str:
    return f"ORD-{moment:%Y%m%d}-{secrets.token_hex(4).upper()}"


def _validate_items(items: List[Dict[str, Any]]) -> None:
    """Structural checks done before touching the database."""
    if not items:
        raise OrderValidationError("An order needs at least one item")
    for item in items:
        if not item.get('product_id'):
            raise OrderValidationError("Every item needs a product id")
        quantity = item.get('quantity')
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise OrderValidationError(
                f"Quantity for product {item['product_id']} must be a positive integer"
            )


def _load_products(items: List[Dict[str, Any]]) -> Dict[str, Product]:
    ids = {str(item['product_id']) for item in items}
    products = (
        Product.objects
        .filter(id__in=ids, is_active=True)
        .prefetch_related('deal_components__product')
    )
    found = {str(product.id): product for product in products}
    missing = sorted(ids - set(found))
    if missing:
        raise OrderProductNotFoundError(f"Product(s) not found: {', '.join(missing)}")
    return found


def _lock_stock_products(demand) -> Dict[str, Product]:
    ids = [
        entry.product_id
        for entry in demand.values()
        if isinstance(entry, PlainDemand) and entry.is_stockable
    ]
    if not ids:
        return {}
    locked = Product.objects.select_for_update().filter(id__in=ids).order_by('id')
    return {str(product.id): product for product in locked}


def _settle(order: Order, items: List[Dict[str, Any]]) -> AllocationResult:
    """Allocate stock for ``items`` and store items, stock and ledger."""
    products = _load_products(items)
    demand_items = [
        DemandItem.from_product(products[str(item['product_id'])], item['quantity'])
        for item in items
    ]
    demand = aggregate_demand(demand_items)

    batches = find_batches(shop=order.shop, business_date=order.business_date, lock=True)
    result = allocate(batches, demand, _lock_stock_products(demand))

    StockLine.objects.bulk_update(
        result.modified_lines,
        ['consumed_quantity', 'full_plate_consumed_quantity', 'half_plate_consumed_quantity'],
    )
    Product.objects.bulk_update(result.modified_products, ['stock'])
    StockAllocation.objects.bulk_create([
        StockAllocation(
            order=order,
            stock_line=entry.stock_line,
            product_id=entry.product_id,
            quantity=entry.quantity,
            full_plate_quantity=entry.full_plate_quantity,
            half_plate_quantity=entry.half_plate_quantity,
        )
        for entry in result.ledger
    ])

    order_items = []
    total_amount = Decimal('0.00')
    total_items = 0
    for position, (item, demand_item) in enumerate(zip(items, demand_items)):
        product = products[str(item['product_id'])]
        order_items.append(OrderItem(
            order=order,
            position=position,
            product=product,
            name=product.name,
            unit_price=product.price,
            quantity=demand_item.quantity,
            image_url=product.image_url,
            is_stockable=product.is_stockable,
            parent_product_id=product.parent_product_id,
            plate_type=product.plate_type,
            deal_products=demand_item.deal_products,
        ))
        total_amount += product.price * demand_item.quantity
        total_items += demand_item.quantity
    OrderItem.objects.bulk_create(order_items)

    order.total_amount = total_amount
    order.total_items = total_items
    order.stock_settled = True
    order.save(update_fields=['total_amount', 'total_items', 'stock_settled', 'updated_at'])

    return result


def _get_locked_order(order_id: UUID) -> Order:
    try:
        return (
            Order.objects
            .select_for_update()
            .select_related('shop')
            .get(id=order_id)
        )
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


def _transition(order: Order, status: str) -> None:
    if not order.can_transition_to(status):
        raise OrderStateError(f"Cannot move order {order.order_number} from {order.status} to {status}")
    order.status = status


@transaction.atomic
def create_order(
    *,
    customer: User,
    shop_id: UUID,
    items: List[Dict[str, Any]],
    order_date: Optional[datetime] = None,
    payment_method: str = '',
    shipping_address: str = ''
) -> Tuple[Order, AllocationResult]:
    """
    Place an order and settle it against the shop's daily stock.

    Args:
        customer: Ordering user
        shop_id: Shop the order is placed at
        items: [{'product_id', 'quantity'}, ...]
        order_date: Effective date; selects the business day (default now)
        payment_method: Optional payment method
        shipping_address: Delivery address (default: the customer's address)

    Returns:
        (order, allocation) where allocation carries the low-stock signal

    Raises:
        OrderValidationError: If items are malformed
        ShopNotFoundError: If shop doesn't exist
        OrderProductNotFoundError: If a product doesn't exist
        NoStockError: If the shop has no stock for the business day
        InsufficientStockError: If stock cannot cover the demand
    """
    _validate_items(items)

    shop = get_shop_by_id(shop_id=shop_id)
    moment = order_date or timezone.now()

    order = Order.objects.create(
        order_number=_generate_order_number(moment),
        shop=shop,
        customer=customer,
        status=OrderStatus.PENDING,
        payment_method=payment_method,
        order_date=moment,
        business_date=business_date_for(moment, shop.get_time_zone()),
        shipping_address=shipping_address or customer.address,
    )
    allocation = _settle(order, items)

    logger.info(
        "Order %s created for shop %s: %d item(s), total %s",
        order.order_number, shop.id, order.total_items, order.total_amount
    )
    return order, allocation


@transaction.atomic
def update_order(
    *,
    order_id: UUID,
    user: User,
    items: Optional[List[Dict[str, Any]]] = None,
    payment_method: Optional[str] = None,
    shipping_address: Optional[str] = None
) -> Tuple[Order, Optional[AllocationResult]]:
    """
    Update an open order.

    Changing items gives back the old consumption and settles the new
    items against the order's original business day.

    Returns:
        (order, allocation) where allocation is None if items were not changed

    Raises:
        OrderNotFoundError: If order doesn't exist
        InsufficientPermissionsError: If user is neither customer nor shop staff
        OrderStateError: If the order is completed or cancelled
        OrderValidationError, OrderProductNotFoundError, NoStockError,
        InsufficientStockError: As for create_order
    """
    if items is not None:
        _validate_items(items)

    order = _get_locked_order(order_id)

    if not order.can_access(user):
        raise InsufficientPermissionsError("You cannot change this order")
    if not order.is_editable:
        raise OrderStateError(f"Order {order.order_number} is {order.status} and cannot be changed")

    allocation = None
    if items is not None:
        revert_order_stock(order)
        order.items.all().delete()
        allocation = _settle(order, items)

    update_fields = ['updated_at']
    if payment_method is not None:
        order.payment_method = payment_method
        update_fields.append('payment_method')
    if shipping_address is not None:
        order.shipping_address = shipping_address
        update_fields.append('shipping_address')
    order.save(update_fields=update_fields)

    logger.info("Order %s updated by %s", order.order_number, user.id)
    return order, allocation


@transaction.atomic
def cancel_order(*, order_id: UUID, user: User) -> Order:
    """
    Cancel an order and give its stock back.

    Raises:
        OrderNotFoundError: If order doesn't exist
        InsufficientPermissionsError: If user is neither customer nor shop staff
        OrderStateError: If the order is already completed or cancelled
    """
    order = _get_locked_order(order_id)

    if not order.can_access(user):
        raise InsufficientPermissionsError("You cannot cancel this order")

    _transition(order, OrderStatus.CANCELLED)
    revert_order_stock(order)

    order.cancelled_at = timezone.now()
    order.save(update_fields=['status', 'cancelled_at', 'updated_at'])

    logger.info("Order %s cancelled by %s", order.order_number, user.id)
    return order


@transaction.atomic
def mark_order_paid(*, order_id: UUID, user: User) -> Order:
    """
    Record payment for a pending order (shop staff only).

    Raises:
        OrderNotFoundError, InsufficientPermissionsError, OrderStateError
    """
    order = _get_locked_order(order_id)

    if not order.shop.has_staff(user):
        raise InsufficientPermissionsError("Only shop staff can record payments")

    _transition(order, OrderStatus.PAID)
    order.paid_at = timezone.now()
    order.save(update_fields=['status', 'paid_at', 'updated_at'])
    return order


@transaction.atomic
def complete_order(*, order_id: UUID, user: User) -> Order:
    """
    Mark a paid order as delivered (shop staff only).

    Raises:
        OrderNotFoundError, InsufficientPermissionsError, OrderStateError
    """
    order = _get_locked_order(order_id)

    if not order.shop.has_staff(user):
        raise InsufficientPermissionsError("Only shop staff can complete orders")

    _transition(order, OrderStatus.COMPLETED)
    order.completed_at = timezone.now()
    order.save(update_fields=['status', 'completed_at', 'updated_at'])
    return order

"""
Regular stock CRUD service.

Staff enter one or more batches per business day. Entering a batch with
plate lines retires the plate lines of the day's earlier batches, so
plate servings are always counted against the newest batch.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.accounts.models import User
from apps.catalog.models import Product
from apps.shops.models import Shop
from apps.shops.services import get_shop_by_id
from apps.stock.models import RegularStock, StockLine, StockLineKind

from .business_day import business_date_for, business_day_bounds
from .exceptions import (
    RegularStockNotFoundError,
    InvalidStockLineError,
    StockInUseError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def _check_staff(shop: Shop, user: User) -> None:
    if not shop.has_staff(user):
        raise InsufficientPermissionsError("Only shop staff can manage regular stock")


def _load_products(product_ids: List[Any]) -> Dict[str, Product]:
    products = Product.objects.filter(id__in=product_ids, is_active=True)
    found = {str(product.id): product for product in products}
    missing = [str(pid) for pid in product_ids if str(pid) not in found]
    if missing:
        raise InvalidStockLineError(f"Unknown product(s): {', '.join(missing)}")
    return found


def _default_kind(product: Product) -> str:
    if product.plate_variants.filter(is_active=True).exists():
        return StockLineKind.PLATE
    return StockLineKind.PLAIN


def _build_lines(lines: List[Dict[str, Any]], start_position: int = 0) -> List[StockLine]:
    """Validate raw line dicts and return unsaved StockLine objects."""
    if not lines:
        raise InvalidStockLineError("A regular stock needs at least one line")

    products = _load_products([line.get('product_id') for line in lines])
    built = []
    seen = set()

    for offset, line in enumerate(lines):
        product = products[str(line['product_id'])]
        if product.parent_product_id is not None:
            raise InvalidStockLineError(
                f"'{product.name}' is a plate variant; stock its parent product instead"
            )

        quantity = int(line.get('quantity', 0))
        if quantity < 0:
            raise InvalidStockLineError(f"Quantity for '{product.name}' cannot be negative")

        kind = line.get('kind') or _default_kind(product)
        if kind not in StockLineKind.values:
            raise InvalidStockLineError(f"Unknown stock line kind '{kind}'")

        key = (product.id, kind)
        if key in seen:
            raise InvalidStockLineError(f"'{product.name}' is listed twice")
        seen.add(key)

        built.append(StockLine(
            position=start_position + offset,
            product=product,
            kind=kind,
            quantity=quantity,
            is_available=line.get('is_available', True),
        ))

    return built


def _same_day_batches(shop: Shop, moment: datetime):
    start, end = business_day_bounds(
        business_date_for(moment, shop.get_time_zone()),
        shop.get_time_zone()
    )
    return RegularStock.objects.filter(shop=shop, created_at__gte=start, created_at__lt=end)


@transaction.atomic
def create_regular_stock(
    *,
    shop_id: UUID,
    created_by: User,
    lines: List[Dict[str, Any]],
    is_default: bool = False,
    created_at: Optional[datetime] = None
) -> RegularStock:
    """
    Enter a new stock batch for a shop.

    Args:
        shop_id: Shop the stock belongs to
        created_by: Staff member entering the stock
        lines: [{'product_id', 'quantity', 'kind'?, 'is_available'?}, ...]
        is_default: Mark as the shop's default batch
        created_at: Business-day anchor (defaults to now)

    Returns:
        Created RegularStock with its lines

    Raises:
        ShopNotFoundError: If shop doesn't exist
        InsufficientPermissionsError: If user is not shop staff
        InvalidStockLineError: If lines are malformed
    """
    shop = get_shop_by_id(shop_id=shop_id)
    _check_staff(shop, created_by)

    new_lines = _build_lines(lines)
    moment = created_at or timezone.now()

    if any(line.kind == StockLineKind.PLATE for line in new_lines):
        retired = StockLine.objects.filter(
            regular_stock__in=_same_day_batches(shop, moment),
            kind=StockLineKind.PLATE,
            is_available=True,
        ).update(is_available=False)
        if retired:
            logger.info("Retired %d plate line(s) for shop %s", retired, shop.id)

    if is_default:
        RegularStock.objects.filter(shop=shop, is_default=True).update(is_default=False)

    regular_stock = RegularStock.objects.create(
        shop=shop,
        created_by=created_by,
        is_default=is_default,
        created_at=moment,
    )
    for line in new_lines:
        line.regular_stock = regular_stock
    StockLine.objects.bulk_create(new_lines)

    logger.info(
        "Regular stock %s created for shop %s with %d line(s)",
        regular_stock.id, shop.id, len(new_lines)
    )
    return get_regular_stock_by_id(regular_stock_id=regular_stock.id)


def get_regular_stock_by_id(*, regular_stock_id: UUID) -> RegularStock:
    """
    Raises:
        RegularStockNotFoundError: If the batch doesn't exist
    """
    try:
        return (
            RegularStock.objects
            .select_related('shop', 'created_by')
            .prefetch_related('lines__product')
            .get(id=regular_stock_id)
        )
    except RegularStock.DoesNotExist:
        raise RegularStockNotFoundError(f"Regular stock with ID {regular_stock_id} not found")


def list_regular_stocks(
    *,
    user: User,
    shop_id: Optional[UUID] = None,
    business_date: Optional[date] = None
):
    """Batches of the shops the user works at, newest first."""
    queryset = (
        RegularStock.objects
        .select_related('shop', 'created_by')
        .prefetch_related('lines__product')
    )
    if not user.is_superuser:
        queryset = queryset.filter(shop__staff=user)
    if shop_id:
        queryset = queryset.filter(shop_id=shop_id)
        shop = Shop.objects.filter(id=shop_id).first()
        if shop is None:
            return queryset.none()
        if business_date:
            start, end = business_day_bounds(business_date, shop.get_time_zone())
            queryset = queryset.filter(created_at__gte=start, created_at__lt=end)
    return queryset.order_by('-created_at').distinct()


@transaction.atomic
def update_regular_stock(
    *,
    regular_stock_id: UUID,
    user: User,
    is_default: Optional[bool] = None,
    lines: Optional[List[Dict[str, Any]]] = None
) -> RegularStock:
    """
    Adjust a batch.

    Line entries with ``line_id`` change that line's quantity or
    availability; entries with ``product_id`` and no ``line_id`` are
    appended as new lines. A line's quantity can never drop below what
    orders already consumed from it.

    Raises:
        RegularStockNotFoundError: If the batch doesn't exist
        InsufficientPermissionsError: If user is not shop staff
        InvalidStockLineError: If an update is malformed or below consumption
    """
    try:
        regular_stock = (
            RegularStock.objects
            .select_for_update()
            .select_related('shop')
            .get(id=regular_stock_id)
        )
    except RegularStock.DoesNotExist:
        raise RegularStockNotFoundError(f"Regular stock with ID {regular_stock_id} not found")

    _check_staff(regular_stock.shop, user)

    if is_default is not None:
        if is_default:
            (
                RegularStock.objects
                .filter(shop=regular_stock.shop, is_default=True)
                .exclude(id=regular_stock.id)
                .update(is_default=False)
            )
        regular_stock.is_default = is_default
        regular_stock.save(update_fields=['is_default', 'updated_at'])

    if lines:
        existing = {
            str(line.id): line
            for line in StockLine.objects.select_for_update().filter(regular_stock=regular_stock)
        }
        additions = []

        for entry in lines:
            line_id = entry.get('line_id')
            if not line_id:
                additions.append(entry)
                continue

            line = existing.get(str(line_id))
            if line is None:
                raise InvalidStockLineError(f"Stock line {line_id} is not part of this batch")

            update_fields = []
            if entry.get('quantity') is not None:
                quantity = int(entry['quantity'])
                if quantity < line.consumed_quantity:
                    raise InvalidStockLineError(
                        f"Quantity for '{line.product.name}' cannot drop below "
                        f"the {line.consumed_quantity} already consumed"
                    )
                line.quantity = quantity
                update_fields.append('quantity')
            if entry.get('is_available') is not None:
                line.is_available = entry['is_available']
                update_fields.append('is_available')
            if update_fields:
                line.save(update_fields=update_fields)

        if additions:
            start = max((line.position for line in existing.values()), default=-1) + 1
            new_lines = _build_lines(additions, start_position=start)
            taken = {(line.product_id, line.kind) for line in existing.values()}
            for line in new_lines:
                if (line.product_id, line.kind) in taken:
                    raise InvalidStockLineError(f"'{line.product.name}' is already in this batch")
                line.regular_stock = regular_stock
            StockLine.objects.bulk_create(new_lines)

    return get_regular_stock_by_id(regular_stock_id=regular_stock.id)


@transaction.atomic
def delete_regular_stock(*, regular_stock_id: UUID, user: User) -> None:
    """
    Delete a batch that no order has drawn from.

    Raises:
        RegularStockNotFoundError: If the batch doesn't exist
        InsufficientPermissionsError: If user is not shop staff
        StockInUseError: If any line has recorded consumption
    """
    try:
        regular_stock = (
            RegularStock.objects
            .select_for_update()
            .select_related('shop')
            .get(id=regular_stock_id)
        )
    except RegularStock.DoesNotExist:
        raise RegularStockNotFoundError(f"Regular stock with ID {regular_stock_id} not found")

    _check_staff(regular_stock.shop, user)

    consumed = regular_stock.lines.filter(
        Q(consumed_quantity__gt=0)
        | Q(full_plate_consumed_quantity__gt=0)
        | Q(half_plate_consumed_quantity__gt=0)
    ).exists()
    if consumed:
        raise StockInUseError("Regular stock already consumed by orders cannot be deleted")

    regular_stock.delete()
    logger.info("Regular stock %s deleted by %s", regular_stock_id, user.id)

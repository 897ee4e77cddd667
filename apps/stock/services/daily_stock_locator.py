"""
Daily stock locator.

Finds the regular stock batches a shop entered for one business day,
oldest first, with their lines in entry order on ``ordered_lines``.
"""

import logging
from datetime import date
from typing import List

from django.db.models import Prefetch

from apps.shops.models import Shop
from apps.stock.models import RegularStock, StockLine

from .business_day import business_day_bounds
from .exceptions import NoStockError

logger = logging.getLogger(__name__)

# Row lock order shared with order reversal: batch age, then line position
LINE_LOCK_ORDER = ('regular_stock__created_at', 'regular_stock_id', 'position')


def query_batches(*, shop: Shop, business_date: date, lock: bool = False) -> List[RegularStock]:
    """
    Return the shop's batches for ``business_date``, possibly none.

    Args:
        shop: Shop whose stock is wanted
        business_date: Local calendar day in the shop's time zone
        lock: Lock batch and line rows for update; callers must be
            inside transaction.atomic

    Returns:
        Batches ordered by creation time (ties by id), each with
        ``ordered_lines`` sorted by position
    """
    start, end = business_day_bounds(business_date, shop.get_time_zone())

    lines = StockLine.objects.order_by(*LINE_LOCK_ORDER)
    batches = RegularStock.objects.filter(
        shop=shop,
        created_at__gte=start,
        created_at__lt=end,
    )
    if lock:
        lines = lines.select_for_update(of=('self',))
        batches = batches.select_for_update()
    else:
        lines = lines.select_related('product')

    return list(
        batches
        .prefetch_related(Prefetch('lines', queryset=lines, to_attr='ordered_lines'))
        .order_by('created_at', 'id')
    )


def find_batches(*, shop: Shop, business_date: date, lock: bool = False) -> List[RegularStock]:
    """
    Like query_batches, but a day without stock is an error.

    Raises:
        NoStockError: If the shop has no batch for the day
    """
    batches = query_batches(shop=shop, business_date=business_date, lock=lock)
    if not batches:
        logger.warning("No regular stock for shop %s on %s", shop.id, business_date)
        raise NoStockError(
            f"No regular stock found for shop '{shop.name}' on {business_date.isoformat()}"
        )
    return batches

"""Per-product view of a shop's stock for one business day."""

from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from apps.shops.services import get_shop_by_id
from apps.stock.models import StockLineKind

from .business_day import business_date_for
from .daily_stock_locator import query_batches


def get_daily_stock_summary(*, shop_id: UUID, business_date: Optional[date] = None) -> List[Dict]:
    """
    Merge the day's batches into one entry per product and line kind.

    Plain lines are summed across batches. For plate lines the currently
    available line wins (the newest one, since entering plate stock
    retires older plate lines) and ``batch_count`` says how many batches
    carried the product.

    Returns:
        Entries in first-seen order
    """
    shop = get_shop_by_id(shop_id=shop_id)
    if business_date is None:
        business_date = business_date_for(time_zone=shop.get_time_zone())

    summary: Dict[tuple, Dict] = {}

    for batch in query_batches(shop=shop, business_date=business_date):
        for line in batch.ordered_lines:
            key = (line.product_id, line.kind)
            entry = summary.get(key)

            if line.kind == StockLineKind.PLAIN:
                if entry is None:
                    entry = summary[key] = {
                        'product_id': line.product_id,
                        'product_name': line.product.name,
                        'kind': line.kind,
                        'quantity': 0,
                        'consumed_quantity': 0,
                        'batch_count': 0,
                    }
                entry['quantity'] += line.quantity
                entry['consumed_quantity'] += line.consumed_quantity
                entry['batch_count'] += 1
                continue

            if entry is None or line.is_available or not entry['is_available']:
                count = entry['batch_count'] if entry else 0
                entry = summary[key] = {
                    'product_id': line.product_id,
                    'product_name': line.product.name,
                    'kind': line.kind,
                    'line_id': line.id,
                    'quantity': line.quantity,
                    'consumed_quantity': line.consumed_quantity,
                    'full_plate_consumed_quantity': line.full_plate_consumed_quantity,
                    'half_plate_consumed_quantity': line.half_plate_consumed_quantity,
                    'is_available': line.is_available,
                    'batch_count': count,
                }
            entry['batch_count'] += 1

    for entry in summary.values():
        entry['available_quantity'] = max(0, entry['quantity'] - entry['consumed_quantity'])

    return list(summary.values())

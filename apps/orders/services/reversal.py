"""
Stock reversal.

Gives back what a settled order consumed. Orders settled by this
service carry a StockAllocation ledger and are reverted exactly from
it. Settled orders without a ledger are reverted from their stored
items: the demand is rebuilt and handed back greedily over the order's
business-day batches, with every counter clamped at zero.

Reverting an order whose stock is not settled does nothing, so a
second revert never gives stock back twice.
"""

import logging
from collections import defaultdict

from django.db.models import F

from apps.catalog.models import PlateType, Product
from apps.stock.models import StockLine
from apps.stock.services import LINE_LOCK_ORDER, query_batches

from .demand import DemandItem, PlainDemand, PlateGroup, aggregate_demand

logger = logging.getLogger(__name__)

_LINE_COUNTERS = [
    'consumed_quantity',
    'full_plate_consumed_quantity',
    'half_plate_consumed_quantity',
]


def _restore_product_stock(increments):
    for product_id, quantity in increments.items():
        if quantity > 0:
            Product.objects.filter(id=product_id).update(stock=F('stock') + quantity)


def _revert_from_ledger(allocations) -> None:
    per_line = defaultdict(lambda: [0, 0, 0])
    increments = defaultdict(int)

    for allocation in allocations:
        if allocation.stock_line_id is None:
            increments[allocation.product_id] += allocation.quantity
            continue
        totals = per_line[allocation.stock_line_id]
        totals[0] += allocation.quantity
        totals[1] += allocation.full_plate_quantity
        totals[2] += allocation.half_plate_quantity

    lines = list(
        StockLine.objects
        .select_for_update(of=('self',))
        .filter(id__in=list(per_line))
        .order_by(*LINE_LOCK_ORDER)
    )
    for line in lines:
        consumed, full, half = per_line[line.id]
        line.consumed_quantity = max(0, line.consumed_quantity - consumed)
        line.full_plate_consumed_quantity = max(0, line.full_plate_consumed_quantity - full)
        line.half_plate_consumed_quantity = max(0, line.half_plate_consumed_quantity - half)
    StockLine.objects.bulk_update(lines, _LINE_COUNTERS)

    _restore_product_stock(increments)


def _give_back_plates(line, group: PlateGroup) -> bool:
    changed = False
    for variant in group.variants:
        if variant.remaining_quantity <= 0:
            continue
        field = (
            'full_plate_consumed_quantity'
            if variant.plate_type == PlateType.FULL
            else 'half_plate_consumed_quantity'
        )
        current = getattr(line, field)
        returned = min(current, variant.remaining_quantity)
        if returned > 0:
            setattr(line, field, current - returned)
            variant.remaining_quantity -= returned
            changed = True
    return changed


def _revert_from_demand(order) -> None:
    demand = aggregate_demand([DemandItem.from_order_item(item) for item in order.items.all()])
    batches = query_batches(shop=order.shop, business_date=order.business_date, lock=True)

    modified = []
    for batch in batches:
        for line in batch.ordered_lines:
            entry = demand.get(str(line.product_id))
            if isinstance(entry, PlainDemand):
                returned = min(line.consumed_quantity, entry.remaining_quantity)
                if returned > 0:
                    line.consumed_quantity -= returned
                    entry.remaining_quantity -= returned
                    modified.append(line)
            elif isinstance(entry, PlateGroup):
                if line.is_plate and _give_back_plates(line, entry):
                    modified.append(line)
            elif entry is not None:
                raise TypeError(f"Unknown demand entry {type(entry).__name__}")

    StockLine.objects.bulk_update(modified, _LINE_COUNTERS)

    _restore_product_stock({
        entry.product_id: entry.quantity
        for entry in demand.values()
        if isinstance(entry, PlainDemand) and entry.is_stockable
    })


def revert_order_stock(order) -> bool:
    """
    Undo an order's stock consumption.

    Must run inside the transaction that also changes the order; the
    caller should hold a row lock on the order.

    Args:
        order: Order instance

    Returns:
        True if stock was given back, False if the order held none
    """
    if not order.stock_settled:
        logger.debug("Order %s holds no stock, nothing to revert", order.id)
        return False

    allocations = list(order.stock_allocations.all())
    if allocations:
        logger.info("Reverting order %s from %d ledger row(s)", order.id, len(allocations))
        _revert_from_ledger(allocations)
        order.stock_allocations.all().delete()
    else:
        logger.info("Reverting order %s from its items (no ledger)", order.id)
        _revert_from_demand(order)

    order.stock_settled = False
    order.save(update_fields=['stock_settled', 'updated_at'])
    return True

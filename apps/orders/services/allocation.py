"""
Stock allocation.

Walks a business day's batches oldest first and consumes them for a
demand map. Works on in-memory model instances only: nothing is saved
here, so a failed allocation leaves the database untouched and the
caller persists an AllocationResult only after success.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from apps.catalog.models import PlateType
from apps.stock.services import InsufficientStockError

from .demand import DemandEntry, PlainDemand, PlateGroup, iter_unfulfilled

logger = logging.getLogger(__name__)

# A plain line with this many units or fewer left when an order reaches
# it asks the client to refresh its stock view.
LOW_STOCK_THRESHOLD = 12


@dataclass
class LedgerEntry:
    """What one allocation took from one stock line or product counter."""

    product_id: str
    stock_line: Optional[object] = None
    quantity: int = 0
    full_plate_quantity: int = 0
    half_plate_quantity: int = 0


@dataclass
class AllocationResult:
    modified_batches: List[object] = field(default_factory=list)
    modified_lines: List[object] = field(default_factory=list)
    modified_products: List[object] = field(default_factory=list)
    stock_decrements: Dict[str, int] = field(default_factory=dict)
    refresh_required: bool = False
    low_stock_product_ids: List[str] = field(default_factory=list)
    ledger: List[LedgerEntry] = field(default_factory=list)


class _Tracker:
    """Collects touched lines and ledger rows without duplicates."""

    def __init__(self, result: AllocationResult):
        self.result = result
        self._batch_ids = set()
        self._line_entries: Dict[object, LedgerEntry] = {}

    def entry_for(self, batch, line) -> LedgerEntry:
        if batch.pk not in self._batch_ids:
            self._batch_ids.add(batch.pk)
            self.result.modified_batches.append(batch)
        entry = self._line_entries.get(line.pk)
        if entry is None:
            entry = LedgerEntry(product_id=str(line.product_id), stock_line=line)
            self._line_entries[line.pk] = entry
            self.result.modified_lines.append(line)
            self.result.ledger.append(entry)
        return entry

    def flag_low_stock(self, product_id: str) -> None:
        self.result.refresh_required = True
        if product_id not in self.result.low_stock_product_ids:
            self.result.low_stock_product_ids.append(product_id)


def _consume_plain(batch, line, entry: PlainDemand, tracker: _Tracker) -> None:
    if entry.remaining_quantity <= 0:
        return

    available = line.quantity - line.consumed_quantity
    consumed = min(entry.remaining_quantity, available)
    if consumed <= 0:
        return

    if available <= LOW_STOCK_THRESHOLD:
        tracker.flag_low_stock(entry.product_id)

    line.consumed_quantity += consumed
    entry.remaining_quantity -= consumed
    tracker.entry_for(batch, line).quantity += consumed


def _consume_plates(batch, line, group: PlateGroup, tracker: _Tracker) -> None:
    if not line.is_plate or not line.is_available:
        return

    for variant in group.variants:
        if variant.remaining_quantity <= 0:
            continue
        ledger = tracker.entry_for(batch, line)
        if variant.plate_type == PlateType.FULL:
            line.full_plate_consumed_quantity += variant.remaining_quantity
            ledger.full_plate_quantity += variant.remaining_quantity
        else:
            line.half_plate_consumed_quantity += variant.remaining_quantity
            ledger.half_plate_quantity += variant.remaining_quantity
        # plate servings are tracked, never capacity-limited
        variant.remaining_quantity = 0


def allocate(batches, demand: Dict[str, DemandEntry], stock_products: Dict[str, object]) -> AllocationResult:
    """
    Consume daily stock and product stock for a demand map.

    Args:
        batches: RegularStock instances oldest first, each with
            ``ordered_lines`` (see find_batches)
        demand: Output of aggregate_demand; remaining quantities are
            decremented in place
        stock_products: Stockable Product instances keyed by str(id),
            locked by the caller

    Returns:
        AllocationResult listing every mutated line and product

    Raises:
        InsufficientStockError: If any demand is left unfulfilled; the
            message names the products
    """
    result = AllocationResult()
    tracker = _Tracker(result)

    for batch in batches:
        for line in batch.ordered_lines:
            entry = demand.get(str(line.product_id))
            if entry is None:
                continue
            if isinstance(entry, PlainDemand):
                _consume_plain(batch, line, entry, tracker)
            elif isinstance(entry, PlateGroup):
                _consume_plates(batch, line, entry, tracker)
            else:
                raise TypeError(f"Unknown demand entry {type(entry).__name__}")

    short = []
    for entry in demand.values():
        if not isinstance(entry, PlainDemand) or not entry.is_stockable:
            continue
        product = stock_products.get(entry.product_id)
        if product is None or product.stock < entry.quantity:
            short.append(entry.name)
            continue
        product.stock -= entry.quantity
        entry.remaining_quantity = 0
        result.modified_products.append(product)
        result.stock_decrements[entry.product_id] = entry.quantity
        result.ledger.append(LedgerEntry(product_id=entry.product_id, quantity=entry.quantity))

    unfulfilled = list(dict.fromkeys(short + [entry.name for entry in iter_unfulfilled(demand)]))
    if unfulfilled:
        logger.warning("Insufficient stock for %s", ', '.join(unfulfilled))
        raise InsufficientStockError(unfulfilled)

    if result.refresh_required:
        logger.warning("Low stock for product(s) %s", ', '.join(result.low_stock_product_ids))

    return result

"""
Demand aggregation.

Turns ordered items into one demand entry per stock key:

- items without a parent product merge into a PlainDemand keyed by
  their own product id
- plate variants are collected into a PlateGroup keyed by the parent
  product id, one PlateDemand per ordered line
- deal components add ``component quantity * item quantity`` to the
  component's PlainDemand

A key holds either a PlainDemand or a PlateGroup, never both.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from apps.catalog.models import PlateType

from .exceptions import OrderValidationError


@dataclass
class DemandItem:
    """An ordered line as the aggregator sees it."""

    product_id: str
    quantity: int
    name: str = ''
    is_stockable: bool = False
    parent_product_id: Optional[str] = None
    plate_type: str = ''
    deal_products: List[dict] = field(default_factory=list)

    @classmethod
    def from_product(cls, product, quantity):
        """Build from a live catalog product (deal components prefetched)."""
        return cls(
            product_id=str(product.id),
            quantity=quantity,
            name=product.name,
            is_stockable=product.is_stockable,
            parent_product_id=str(product.parent_product_id) if product.parent_product_id else None,
            plate_type=product.plate_type,
            deal_products=[
                {
                    'product_id': str(component.product_id),
                    'name': component.product.name,
                    'quantity': component.quantity,
                    'is_stockable': component.product.is_stockable,
                }
                for component in product.deal_components.all()
            ],
        )

    @classmethod
    def from_order_item(cls, item):
        """Build from a stored OrderItem snapshot."""
        return cls(
            product_id=str(item.product_id),
            quantity=item.quantity,
            name=item.name,
            is_stockable=item.is_stockable,
            parent_product_id=str(item.parent_product_id) if item.parent_product_id else None,
            plate_type=item.plate_type,
            deal_products=list(item.deal_products or []),
        )


@dataclass
class PlainDemand:
    product_id: str
    name: str
    quantity: int
    remaining_quantity: int
    is_stockable: bool = False


@dataclass
class PlateDemand:
    product_id: str
    name: str
    plate_type: str
    quantity: int
    remaining_quantity: int


@dataclass
class PlateGroup:
    parent_product_id: str
    variants: List[PlateDemand] = field(default_factory=list)


DemandEntry = Union[PlainDemand, PlateGroup]


def _positive_quantity(value, label):
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise OrderValidationError(f"Quantity for {label} must be a positive integer")
    return value


def _add_plain(demand, product_id, name, quantity, is_stockable):
    entry = demand.get(product_id)
    if entry is None:
        demand[product_id] = PlainDemand(
            product_id=product_id,
            name=name,
            quantity=quantity,
            remaining_quantity=quantity,
            is_stockable=is_stockable,
        )
    elif isinstance(entry, PlainDemand):
        entry.quantity += quantity
        entry.remaining_quantity += quantity
        entry.is_stockable = entry.is_stockable or is_stockable
    else:
        raise OrderValidationError(
            f"'{name}' cannot be ordered both as a product and as plate servings"
        )


def _add_plate(demand, item, quantity):
    key = item.parent_product_id
    entry = demand.get(key)
    if entry is None:
        entry = demand[key] = PlateGroup(parent_product_id=key)
    elif not isinstance(entry, PlateGroup):
        raise OrderValidationError(
            f"'{item.name}' cannot be ordered both as a product and as plate servings"
        )
    entry.variants.append(PlateDemand(
        product_id=item.product_id,
        name=item.name,
        plate_type=item.plate_type,
        quantity=quantity,
        remaining_quantity=quantity,
    ))


def aggregate_demand(items: List[DemandItem]) -> Dict[str, DemandEntry]:
    """
    Aggregate ordered items into a demand map.

    Args:
        items: DemandItem list in order-line order

    Returns:
        Dict keyed by stock product id (str), in first-seen order.
        Entries are fresh objects; remaining quantities start at the
        full demanded quantity.

    Raises:
        OrderValidationError: On a missing product id, a non-positive
            quantity, a plate variant without a valid plate type, or a
            key demanded both as plain product and as plate servings
    """
    demand: Dict[str, DemandEntry] = {}

    for item in items:
        if not item.product_id:
            raise OrderValidationError("Every item needs a product id")
        label = item.name or item.product_id
        quantity = _positive_quantity(item.quantity, label)

        if item.parent_product_id:
            if item.plate_type not in PlateType.values:
                raise OrderValidationError(f"Plate variant '{label}' has no valid plate type")
            _add_plate(demand, item, quantity)
        else:
            _add_plain(demand, item.product_id, label, quantity, item.is_stockable)

        for component in item.deal_products or []:
            component_id = component.get('product_id')
            if not component_id:
                raise OrderValidationError(f"Deal '{label}' has a component without product id")
            component_name = component.get('name') or str(component_id)
            per_deal = _positive_quantity(component.get('quantity', 1), component_name)
            _add_plain(
                demand,
                str(component_id),
                component_name,
                per_deal * quantity,
                bool(component.get('is_stockable', False)),
            )

    return demand


def iter_unfulfilled(demand: Dict[str, DemandEntry]):
    """Yield every plain or plate entry with demand left over."""
    for entry in demand.values():
        if isinstance(entry, PlainDemand):
            if entry.remaining_quantity > 0:
                yield entry
        elif isinstance(entry, PlateGroup):
            for variant in entry.variants:
                if variant.remaining_quantity > 0:
                    yield variant
        else:
            raise TypeError(f"Unknown demand entry {type(entry).__name__}")

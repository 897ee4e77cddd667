"""
Unit tests for demand aggregation.

Pure functions over DemandItem values; no database needed.
"""

import pytest

from apps.catalog.models import PlateType
from apps.orders.services import (
    DemandItem,
    PlainDemand,
    PlateGroup,
    OrderValidationError,
    aggregate_demand,
    iter_unfulfilled,
)


def plain(product_id, quantity, **kwargs):
    return DemandItem(product_id=product_id, quantity=quantity, name=product_id.title(), **kwargs)


def plate(product_id, parent_id, plate_type, quantity):
    return DemandItem(
        product_id=product_id,
        quantity=quantity,
        name=product_id.title(),
        parent_product_id=parent_id,
        plate_type=plate_type,
    )


# =============================================================================
# Plain demand
# =============================================================================

class TestPlainDemand:

    def test_single_item(self):
        demand = aggregate_demand([plain('samosa', 3)])

        entry = demand['samosa']
        assert isinstance(entry, PlainDemand)
        assert entry.quantity == 3
        assert entry.remaining_quantity == 3

    def test_repeated_product_is_merged(self):
        demand = aggregate_demand([plain('samosa', 3), plain('samosa', 4)])

        assert list(demand) == ['samosa']
        assert demand['samosa'].quantity == 7
        assert demand['samosa'].remaining_quantity == 7

    def test_keeps_first_seen_order(self):
        demand = aggregate_demand([plain('tea', 1), plain('samosa', 1), plain('tea', 1)])

        assert list(demand) == ['tea', 'samosa']

    def test_stockable_flag_is_carried(self):
        demand = aggregate_demand([plain('juice', 2, is_stockable=True)])

        assert demand['juice'].is_stockable is True


# =============================================================================
# Plate demand
# =============================================================================

class TestPlateDemand:

    def test_variants_group_under_parent(self):
        demand = aggregate_demand([
            plate('biryani-full', 'biryani', PlateType.FULL, 3),
            plate('biryani-half', 'biryani', PlateType.HALF, 2),
        ])

        group = demand['biryani']
        assert isinstance(group, PlateGroup)
        assert [(v.plate_type, v.quantity) for v in group.variants] == [
            (PlateType.FULL, 3),
            (PlateType.HALF, 2),
        ]
        assert 'biryani-full' not in demand

    def test_variant_without_plate_type_is_rejected(self):
        with pytest.raises(OrderValidationError, match='plate type'):
            aggregate_demand([plate('biryani-full', 'biryani', '', 1)])

    def test_plain_and_plate_on_same_key_is_rejected(self):
        with pytest.raises(OrderValidationError, match='both as a product and as plate'):
            aggregate_demand([
                plain('biryani', 1),
                plate('biryani-full', 'biryani', PlateType.FULL, 1),
            ])

    def test_plate_then_plain_on_same_key_is_rejected(self):
        with pytest.raises(OrderValidationError):
            aggregate_demand([
                plate('biryani-full', 'biryani', PlateType.FULL, 1),
                plain('biryani', 1),
            ])


# =============================================================================
# Deals
# =============================================================================

class TestDealExpansion:

    def test_components_scale_with_deal_quantity(self):
        deal = plain('snack-deal', 3, deal_products=[
            {'product_id': 'samosa', 'name': 'Samosa', 'quantity': 2},
            {'product_id': 'juice', 'name': 'Juice', 'quantity': 1, 'is_stockable': True},
        ])

        demand = aggregate_demand([deal])

        assert demand['snack-deal'].quantity == 3
        assert demand['samosa'].quantity == 6
        assert demand['juice'].quantity == 3
        assert demand['juice'].is_stockable is True

    def test_components_merge_with_direct_items(self):
        deal = plain('snack-deal', 2, deal_products=[
            {'product_id': 'samosa', 'name': 'Samosa', 'quantity': 2},
        ])

        demand = aggregate_demand([plain('samosa', 1), deal])

        assert demand['samosa'].quantity == 5

    def test_component_without_product_id_is_rejected(self):
        deal = plain('snack-deal', 1, deal_products=[{'name': 'Mystery', 'quantity': 1}])

        with pytest.raises(OrderValidationError):
            aggregate_demand([deal])


# =============================================================================
# Validation
# =============================================================================

class TestValidation:

    @pytest.mark.parametrize('quantity', [0, -1, 1.5, '2', True, None])
    def test_quantity_must_be_positive_integer(self, quantity):
        with pytest.raises(OrderValidationError):
            aggregate_demand([plain('samosa', quantity)])

    def test_product_id_is_required(self):
        with pytest.raises(OrderValidationError):
            aggregate_demand([DemandItem(product_id='', quantity=1)])

    def test_empty_items_give_empty_demand(self):
        assert aggregate_demand([]) == {}


class TestIterUnfulfilled:

    def test_yields_plain_and_plate_leftovers(self):
        demand = aggregate_demand([
            plain('samosa', 2),
            plate('biryani-full', 'biryani', PlateType.FULL, 1),
            plain('tea', 1),
        ])
        demand['tea'].remaining_quantity = 0

        names = [entry.name for entry in iter_unfulfilled(demand)]

        assert names == ['Samosa', 'Biryani-Full']

    def test_unknown_entry_type_raises(self):
        with pytest.raises(TypeError):
            list(iter_unfulfilled({'x': object()}))

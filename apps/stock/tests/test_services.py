"""
Service layer tests for stock app.

Tests cover:
- Business day boundaries per shop time zone
- Batch lookup order
- Regular stock entry, adjustment and deletion rules
- Daily stock summary
"""

import pytest
from datetime import date, datetime, timedelta, timezone as dt_timezone
from uuid import uuid4
from zoneinfo import ZoneInfo

from apps.stock.models import RegularStock, StockLine, StockLineKind
from apps.stock.services import (
    business_day_bounds,
    business_date_for,
    find_batches,
    query_batches,
    create_regular_stock,
    update_regular_stock,
    delete_regular_stock,
    list_regular_stocks,
    get_daily_stock_summary,
    # Exceptions
    NoStockError,
    InvalidStockLineError,
    StockInUseError,
    InsufficientPermissionsError,
)


# =============================================================================
# Business day
# =============================================================================

class TestBusinessDay:

    def test_bounds_cover_local_midnight_to_midnight(self):
        start, end = business_day_bounds(date(2026, 3, 10), 'Asia/Kolkata')

        assert start == datetime(2026, 3, 9, 18, 30, tzinfo=dt_timezone.utc)
        assert end - start == timedelta(days=1)

    def test_dst_day_is_23_hours(self):
        start, end = business_day_bounds(date(2026, 3, 29), 'Europe/Prague')

        assert (end.astimezone(dt_timezone.utc) - start.astimezone(dt_timezone.utc)) == timedelta(hours=23)

    def test_date_for_uses_zone(self):
        moment = datetime(2026, 3, 9, 20, 0, tzinfo=dt_timezone.utc)

        assert business_date_for(moment, 'Asia/Kolkata') == date(2026, 3, 10)
        assert business_date_for(moment, ZoneInfo('UTC')) == date(2026, 3, 9)


# =============================================================================
# Daily stock locator
# =============================================================================

@pytest.mark.django_db
class TestDailyStockLocator:

    def test_batches_oldest_first(self, shop, samosa, make_stock, business_date):
        late = make_stock([(samosa, 1)], hour=15)
        early = make_stock([(samosa, 1)], hour=6)

        batches = find_batches(shop=shop, business_date=business_date)

        assert [batch.id for batch in batches] == [early.id, late.id]

    def test_lines_in_position_order(self, shop, samosa, juice, biryani, make_stock, business_date):
        make_stock([(biryani, 1), (samosa, 1), (juice, 1)])

        batch = find_batches(shop=shop, business_date=business_date)[0]

        assert [line.product_id for line in batch.ordered_lines] == [biryani.id, samosa.id, juice.id]

    def test_other_days_and_shops_are_excluded(self, shop, samosa, make_stock, business_date):
        make_stock([(samosa, 1)])

        assert query_batches(shop=shop, business_date=business_date + timedelta(days=1)) == []

    def test_no_batches_raises(self, shop, business_date):
        with pytest.raises(NoStockError):
            find_batches(shop=shop, business_date=business_date)


# =============================================================================
# Regular stock management
# =============================================================================

@pytest.mark.django_db
class TestRegularStockManagement:

    def test_create_with_lines(self, shop, staff_user, samosa, juice, at):
        regular_stock = create_regular_stock(
            shop_id=shop.id,
            created_by=staff_user,
            lines=[
                {'product_id': samosa.id, 'quantity': 30},
                {'product_id': juice.id, 'quantity': 10},
            ],
            created_at=at(8),
        )

        lines = list(regular_stock.lines.order_by('position'))
        assert [(line.product_id, line.quantity) for line in lines] == [(samosa.id, 30), (juice.id, 10)]
        assert all(line.kind == StockLineKind.PLAIN for line in lines)

    def test_parent_of_plate_variants_defaults_to_plate(self, shop, staff_user, biryani, biryani_full, at):
        regular_stock = create_regular_stock(
            shop_id=shop.id,
            created_by=staff_user,
            lines=[{'product_id': biryani.id, 'quantity': 20}],
            created_at=at(8),
        )

        assert regular_stock.lines.get().kind == StockLineKind.PLATE

    def test_new_plate_lines_retire_older_ones_same_day(self, shop, staff_user, biryani, at):
        first = create_regular_stock(
            shop_id=shop.id,
            created_by=staff_user,
            lines=[{'product_id': biryani.id, 'quantity': 20, 'kind': StockLineKind.PLATE}],
            created_at=at(8),
        )
        create_regular_stock(
            shop_id=shop.id,
            created_by=staff_user,
            lines=[{'product_id': biryani.id, 'quantity': 10, 'kind': StockLineKind.PLATE}],
            created_at=at(14),
        )
        yesterday = create_regular_stock(
            shop_id=shop.id,
            created_by=staff_user,
            lines=[{'product_id': biryani.id, 'quantity': 10, 'kind': StockLineKind.PLATE}],
            created_at=at(8) - timedelta(days=1),
        )

        assert first.lines.get().is_available is False
        assert yesterday.lines.get().is_available is True
        assert StockLine.objects.filter(is_available=True, kind=StockLineKind.PLATE).count() == 2

    def test_default_flag_is_exclusive(self, shop, staff_user, samosa, at):
        first = create_regular_stock(
            shop_id=shop.id, created_by=staff_user,
            lines=[{'product_id': samosa.id, 'quantity': 1}], is_default=True, created_at=at(8),
        )
        second = create_regular_stock(
            shop_id=shop.id, created_by=staff_user,
            lines=[{'product_id': samosa.id, 'quantity': 1}], is_default=True, created_at=at(9),
        )

        first.refresh_from_db()
        assert first.is_default is False
        assert second.is_default is True

    def test_plate_variant_cannot_be_stocked(self, shop, staff_user, biryani_full):
        with pytest.raises(InvalidStockLineError):
            create_regular_stock(
                shop_id=shop.id,
                created_by=staff_user,
                lines=[{'product_id': biryani_full.id, 'quantity': 5}],
            )

    def test_duplicate_product_rejected(self, shop, staff_user, samosa):
        with pytest.raises(InvalidStockLineError):
            create_regular_stock(
                shop_id=shop.id,
                created_by=staff_user,
                lines=[
                    {'product_id': samosa.id, 'quantity': 5},
                    {'product_id': samosa.id, 'quantity': 2},
                ],
            )

    def test_unknown_product_rejected(self, shop, staff_user):
        with pytest.raises(InvalidStockLineError):
            create_regular_stock(
                shop_id=shop.id,
                created_by=staff_user,
                lines=[{'product_id': uuid4(), 'quantity': 5}],
            )

    def test_non_staff_cannot_create(self, shop, user, samosa):
        with pytest.raises(InsufficientPermissionsError):
            create_regular_stock(
                shop_id=shop.id,
                created_by=user,
                lines=[{'product_id': samosa.id, 'quantity': 5}],
            )

    def test_update_quantity_not_below_consumed(self, staff_user, samosa, make_stock):
        batch = make_stock([(samosa, 10)])
        line = batch.lines.get()
        StockLine.objects.filter(id=line.id).update(consumed_quantity=6)

        with pytest.raises(InvalidStockLineError):
            update_regular_stock(
                regular_stock_id=batch.id,
                user=staff_user,
                lines=[{'line_id': line.id, 'quantity': 5}],
            )

        updated = update_regular_stock(
            regular_stock_id=batch.id,
            user=staff_user,
            lines=[{'line_id': line.id, 'quantity': 6}],
        )
        assert updated.lines.get().quantity == 6

    def test_update_appends_new_lines(self, staff_user, samosa, juice, make_stock):
        batch = make_stock([(samosa, 10)])

        updated = update_regular_stock(
            regular_stock_id=batch.id,
            user=staff_user,
            lines=[{'product_id': juice.id, 'quantity': 4}],
        )

        lines = list(updated.lines.order_by('position'))
        assert [line.product_id for line in lines] == [samosa.id, juice.id]
        assert lines[1].position == 1

    def test_delete_unconsumed(self, staff_user, samosa, make_stock):
        batch = make_stock([(samosa, 10)])

        delete_regular_stock(regular_stock_id=batch.id, user=staff_user)

        assert not RegularStock.objects.filter(id=batch.id).exists()

    def test_delete_consumed_is_refused(self, staff_user, samosa, make_stock):
        batch = make_stock([(samosa, 10)])
        StockLine.objects.filter(regular_stock=batch).update(half_plate_consumed_quantity=1)

        with pytest.raises(StockInUseError):
            delete_regular_stock(regular_stock_id=batch.id, user=staff_user)

    def test_list_only_own_shops(self, user, staff_user, shop, samosa, make_stock, business_date):
        make_stock([(samosa, 10)])

        assert list_regular_stocks(user=staff_user).count() == 1
        assert list_regular_stocks(user=user).count() == 0
        assert list_regular_stocks(
            user=staff_user,
            shop_id=shop.id,
            business_date=business_date + timedelta(days=1),
        ).count() == 0


# =============================================================================
# Daily summary
# =============================================================================

@pytest.mark.django_db
class TestDailySummary:

    def test_plain_lines_are_summed(self, shop, samosa, make_stock, business_date):
        make_stock([(samosa, 10)], hour=7)
        second = make_stock([(samosa, 5)], hour=9)
        StockLine.objects.filter(regular_stock=second).update(consumed_quantity=2)

        summary = get_daily_stock_summary(shop_id=shop.id, business_date=business_date)

        assert summary == [{
            'product_id': samosa.id,
            'product_name': 'Samosa',
            'kind': StockLineKind.PLAIN,
            'quantity': 15,
            'consumed_quantity': 2,
            'batch_count': 2,
            'available_quantity': 13,
        }]

    def test_available_plate_line_wins(self, shop, biryani, make_stock, business_date):
        make_stock([(biryani, 20, StockLineKind.PLATE)], hour=7)
        newer = make_stock([(biryani, 8, StockLineKind.PLATE)], hour=9)
        StockLine.objects.exclude(regular_stock=newer).update(is_available=False)

        entry = get_daily_stock_summary(shop_id=shop.id, business_date=business_date)[0]

        assert entry['quantity'] == 8
        assert entry['is_available'] is True
        assert entry['batch_count'] == 2
        assert entry['line_id'] == newer.lines.get().id

    def test_empty_day(self, shop, business_date):
        assert get_daily_stock_summary(shop_id=shop.id, business_date=business_date) == []

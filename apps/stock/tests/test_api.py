import pytest
from django.urls import reverse
from rest_framework import status

from apps.stock.models import RegularStock, StockLine


# =============================================================================
# Regular stock API
# =============================================================================

@pytest.mark.django_db
class TestRegularStockApi:
    """Tests for /api/stock/"""

    def test_staff_creates_batch(self, staff_client, shop, samosa):
        response = staff_client.post(
            reverse('stock:regular-stock-list'),
            {
                'shop_id': str(shop.id),
                'lines': [{'product_id': str(samosa.id), 'quantity': 25}],
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['lines'][0]['quantity'] == 25
        assert RegularStock.objects.filter(shop=shop).count() == 1

    def test_customer_cannot_create_batch(self, authenticated_client, shop, samosa):
        response = authenticated_client.post(
            reverse('stock:regular-stock-list'),
            {
                'shop_id': str(shop.id),
                'lines': [{'product_id': str(samosa.id), 'quantity': 25}],
            },
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_negative_quantity_rejected(self, staff_client, shop, samosa):
        response = staff_client.post(
            reverse('stock:regular-stock-list'),
            {
                'shop_id': str(shop.id),
                'lines': [{'product_id': str(samosa.id), 'quantity': -1}],
            },
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_filters_by_shop(self, staff_client, shop, samosa, make_stock):
        make_stock([(samosa, 5)])

        response = staff_client.get(reverse('stock:regular-stock-list'), {'shop': str(shop.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_list_rejects_bad_filter(self, staff_client):
        response = staff_client.get(reverse('stock:regular-stock-list'), {'shop': 'not-a-uuid'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_line(self, staff_client, samosa, make_stock):
        batch = make_stock([(samosa, 5)])
        line = batch.lines.get()

        response = staff_client.patch(
            reverse('stock:regular-stock-detail', kwargs={'pk': batch.id}),
            {'lines': [{'line_id': str(line.id), 'quantity': 9}]},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        line.refresh_from_db()
        assert line.quantity == 9

    def test_delete_consumed_batch(self, staff_client, samosa, make_stock):
        batch = make_stock([(samosa, 5)])
        StockLine.objects.filter(regular_stock=batch).update(consumed_quantity=1)

        response = staff_client.delete(reverse('stock:regular-stock-detail', kwargs={'pk': batch.id}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Daily stock API
# =============================================================================

@pytest.mark.django_db
class TestDailyStockApi:
    """Tests for GET /api/stock/today/<shop_id>/"""

    def test_public_summary(self, api_client, shop, samosa, make_stock, business_date):
        make_stock([(samosa, 5)])

        response = api_client.get(
            reverse('stock:daily-stock', kwargs={'shop_id': shop.id}),
            {'date': business_date.isoformat()},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['product_name'] == 'Samosa'
        assert response.data[0]['available_quantity'] == 5

    def test_bad_date(self, api_client, shop):
        response = api_client.get(
            reverse('stock:daily-stock', kwargs={'shop_id': shop.id}),
            {'date': '10/03/2026'},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

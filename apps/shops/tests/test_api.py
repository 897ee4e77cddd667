"""
Tests for shop API endpoints.
"""

import pytest
from django.urls import reverse
from rest_framework import status

from apps.shops.models import Shop


@pytest.mark.django_db
class TestShopAPI:

    def test_list_shops_public(self, api_client, shop):
        response = api_client.get(reverse('shops:shop-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == 'Corner Kitchen'
        assert response.data['results'][0]['staff_count'] == 1

    def test_create_shop(self, authenticated_client, user):
        response = authenticated_client.post(
            reverse('shops:shop-list'),
            {'name': 'Spice Hut', 'address': '2 High St', 'time_zone': 'Asia/Kolkata'},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['owner']['id'] == str(user.id)
        assert Shop.objects.get(name='Spice Hut').has_staff(user)

    def test_create_shop_unauthenticated(self, api_client):
        response = api_client.post(
            reverse('shops:shop-list'),
            {'name': 'Spice Hut', 'address': '2 High St'},
            format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_shop_bad_time_zone(self, authenticated_client):
        response = authenticated_client.post(
            reverse('shops:shop-list'),
            {'name': 'Spice Hut', 'address': '2 High St', 'time_zone': 'Nowhere/Land'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_staff_patch_shop(self, staff_client, shop):
        response = staff_client.patch(
            reverse('shops:shop-detail', kwargs={'pk': shop.id}),
            {'address': '3 New Road'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['address'] == '3 New Road'

    def test_customer_patch_shop_forbidden(self, authenticated_client, shop):
        response = authenticated_client.patch(
            reverse('shops:shop-detail', kwargs={'pk': shop.id}),
            {'address': '3 New Road'},
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_deletes_shop(self, staff_client, shop):
        response = staff_client.delete(reverse('shops:shop-detail', kwargs={'pk': shop.id}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        shop.refresh_from_db()
        assert shop.is_active is False

    def test_add_staff(self, staff_client, shop, user):
        response = staff_client.post(
            reverse('shops:shop-add-staff', kwargs={'pk': shop.id}),
            {'email': user.email},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['staff_count'] == 2

    def test_add_unknown_staff(self, staff_client, shop):
        response = staff_client.post(
            reverse('shops:shop-add-staff', kwargs={'pk': shop.id}),
            {'email': 'nobody@example.com'},
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

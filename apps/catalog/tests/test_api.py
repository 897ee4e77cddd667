"""
Tests for catalog API endpoints.
"""

import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status

from apps.catalog.models import Category, Product


@pytest.mark.django_db
class TestCategoryAPI:

    def test_list_categories_public(self, api_client, category):
        response = api_client.get(reverse('catalog:category-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['name'] == 'Mains'

    def test_create_category_requires_admin(self, authenticated_client):
        response = authenticated_client.post(
            reverse('catalog:category-list'), {'name': 'Drinks'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_category(self, backoffice_client):
        response = backoffice_client.post(
            reverse('catalog:category-list'),
            {'name': 'Drinks', 'sub_categories': ['Hot', 'Cold']},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['sub_categories'] == ['Hot', 'Cold']

    def test_create_duplicate_category(self, backoffice_client, category):
        response = backoffice_client.post(
            reverse('catalog:category-list'), {'name': 'Mains'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_patch_category(self, backoffice_client, category):
        response = backoffice_client.patch(
            reverse('catalog:category-detail', kwargs={'pk': category.id}),
            {'sub_categories': ['Rice']},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['sub_categories'] == ['Rice']

    def test_delete_category_in_use(self, backoffice_client, category, samosa):
        response = backoffice_client.delete(
            reverse('catalog:category-detail', kwargs={'pk': category.id})
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestProductAPI:

    def test_list_products_public(self, api_client, samosa, juice):
        response = api_client.get(reverse('catalog:product-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data['results']] == ['Juice', 'Samosa']

    def test_list_filters(self, api_client, biryani, biryani_full, biryani_half):
        response = api_client.get(reverse('catalog:product-list'), {'has_parent': 'true'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2

    def test_invalid_category_filter(self, api_client, samosa):
        response = api_client.get(reverse('catalog:product-list'), {'category': 'not-a-uuid'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve_deal_shows_components(self, api_client, snack_deal):
        response = api_client.get(reverse('catalog:product-detail', kwargs={'pk': snack_deal.id}))

        assert response.status_code == status.HTTP_200_OK
        components = {c['name']: c['quantity'] for c in response.data['deal_products']}
        assert components == {'Samosa': 2, 'Juice': 1}

    def test_create_product(self, backoffice_client, category):
        response = backoffice_client.post(
            reverse('catalog:product-list'),
            {
                'name': 'Tea',
                'category_id': str(category.id),
                'price': '1.20',
                'is_stockable': True,
                'stock': 30,
            },
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['category_name'] == 'Mains'
        assert response.data['stock'] == 30

    def test_create_product_forbidden_for_customer(self, authenticated_client, category):
        response = authenticated_client.post(
            reverse('catalog:product-list'),
            {'name': 'Tea', 'category_id': str(category.id), 'price': '1.20'},
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_variant_without_plate_type(self, backoffice_client, biryani):
        response = backoffice_client.post(
            reverse('catalog:product-list'),
            {
                'name': 'Biryani Mini',
                'category_id': str(biryani.category_id),
                'price': '2.00',
                'parent_product_id': str(biryani.id),
            },
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_product_unknown_category(self, backoffice_client):
        response = backoffice_client.post(
            reverse('catalog:product-list'),
            {'name': 'Tea', 'category_id': '00000000-0000-0000-0000-000000000000', 'price': '1.20'},
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_product_price(self, backoffice_client, samosa):
        response = backoffice_client.patch(
            reverse('catalog:product-detail', kwargs={'pk': samosa.id}),
            {'price': '3.00'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        samosa.refresh_from_db()
        assert samosa.price == Decimal('3.00')

    def test_delete_product(self, backoffice_client, samosa):
        response = backoffice_client.delete(
            reverse('catalog:product-detail', kwargs={'pk': samosa.id})
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Product.objects.filter(name='Samosa').exists()

    def test_showcase_by_category(self, api_client, samosa, category):
        Product.objects.filter(id=samosa.id).update(is_showcase=True)
        Category.objects.create(name='Empty')

        response = api_client.get(reverse('catalog:product-by-category'))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['category']['name'] == 'Mains'
        assert response.data[0]['products'][0]['name'] == 'Samosa'

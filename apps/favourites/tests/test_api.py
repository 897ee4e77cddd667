"""
Tests for favourites.
"""

import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status

from apps.favourites.models import FavouriteItem
from apps.favourites.services import (
    toggle_favourite,
    list_favourites,
    delete_favourite,
    FavouriteNotFoundError,
    FavouriteProductNotFoundError,
)


# =============================================================================
# Services
# =============================================================================

@pytest.mark.django_db
class TestFavouriteServices:

    def test_toggle_adds_then_removes(self, user, samosa):
        assert toggle_favourite(user=user, product_id=samosa.id) is True
        assert list_favourites(user=user).count() == 1

        assert toggle_favourite(user=user, product_id=samosa.id) is False
        assert list_favourites(user=user).count() == 0

    def test_toggle_unknown_product(self, user):
        with pytest.raises(FavouriteProductNotFoundError):
            toggle_favourite(user=user, product_id=uuid4())

    def test_toggle_inactive_product(self, user, samosa):
        samosa.is_active = False
        samosa.save(update_fields=['is_active'])

        with pytest.raises(FavouriteProductNotFoundError):
            toggle_favourite(user=user, product_id=samosa.id)

    def test_favourites_are_per_user(self, user, other_user, samosa):
        toggle_favourite(user=user, product_id=samosa.id)

        assert list_favourites(user=other_user).count() == 0

    def test_delete_other_users_favourite(self, user, other_user, samosa):
        toggle_favourite(user=user, product_id=samosa.id)
        favourite = FavouriteItem.objects.get(user=user)

        with pytest.raises(FavouriteNotFoundError):
            delete_favourite(favourite_id=favourite.id, user=other_user)

        delete_favourite(favourite_id=favourite.id, user=user)
        assert not FavouriteItem.objects.exists()


# =============================================================================
# API
# =============================================================================

@pytest.mark.django_db
class TestFavouriteAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('favourites:favourite-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_toggle_endpoint(self, authenticated_client, samosa):
        url = reverse('favourites:favourite-toggle')

        added = authenticated_client.post(url, {'product_id': str(samosa.id)}, format='json')
        removed = authenticated_client.post(url, {'product_id': str(samosa.id)}, format='json')

        assert added.status_code == status.HTTP_201_CREATED
        assert added.data == {'is_favourite': True}
        assert removed.status_code == status.HTTP_200_OK
        assert removed.data == {'is_favourite': False}

    def test_toggle_unknown_product(self, authenticated_client):
        response = authenticated_client.post(
            reverse('favourites:favourite-toggle'), {'product_id': str(uuid4())}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_includes_product(self, authenticated_client, user, samosa):
        FavouriteItem.objects.create(user=user, product=samosa)

        response = authenticated_client.get(reverse('favourites:favourite-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['product']['name'] == 'Samosa'

    def test_delete_favourite(self, authenticated_client, other_client, user, samosa):
        favourite = FavouriteItem.objects.create(user=user, product=samosa)
        url = reverse('favourites:favourite-detail', kwargs={'pk': favourite.id})

        assert other_client.delete(url).status_code == status.HTTP_404_NOT_FOUND
        assert authenticated_client.delete(url).status_code == status.HTTP_204_NO_CONTENT

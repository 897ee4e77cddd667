"""
Tests for payment card API endpoints.
"""

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.payments.models import PaymentCard


@pytest.fixture
def card_payload():
    return {
        'cardholder_name': 'Test User',
        'card_number': '4111111111111111',
        'expiry_month': 12,
        'expiry_year': timezone.now().year + 3,
        'cvv': '123',
        'card_type': 'Visa',
    }


@pytest.fixture
def card(user):
    return PaymentCard.objects.create(
        user=user,
        cardholder_name='Test User',
        card_number='************1111',
        expiry_month=12,
        expiry_year=timezone.now().year + 3,
        card_type='Visa',
    )


@pytest.mark.django_db
class TestPaymentCardAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('payments:card-list'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_add_card(self, authenticated_client, card_payload):
        response = authenticated_client.post(reverse('payments:card-list'), card_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['card_number'] == '************1111'
        assert 'cvv' not in response.data

    def test_add_card_bad_number(self, authenticated_client, card_payload):
        card_payload['card_number'] = '1234'

        response = authenticated_client.post(reverse('payments:card-list'), card_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_add_expired_card(self, authenticated_client, card_payload):
        card_payload['expiry_year'] = timezone.now().year - 1

        response = authenticated_client.post(reverse('payments:card-list'), card_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_list_own_cards(self, authenticated_client, other_client, card):
        own = authenticated_client.get(reverse('payments:card-list'))
        other = other_client.get(reverse('payments:card-list'))

        assert len(own.data) == 1
        assert len(other.data) == 0

    def test_other_user_cannot_read(self, other_client, card):
        response = other_client.get(reverse('payments:card-detail', kwargs={'pk': card.id}))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_card(self, authenticated_client, card):
        response = authenticated_client.patch(
            reverse('payments:card-detail', kwargs={'pk': card.id}),
            {'is_default': True},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_default'] is True

    def test_patch_empty_body(self, authenticated_client, card):
        response = authenticated_client.patch(
            reverse('payments:card-detail', kwargs={'pk': card.id}), {}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_card(self, authenticated_client, card):
        response = authenticated_client.delete(reverse('payments:card-detail', kwargs={'pk': card.id}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not PaymentCard.objects.filter(id=card.id).exists()

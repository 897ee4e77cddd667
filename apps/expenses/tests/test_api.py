"""
Tests for expenses and expense analytics.
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from uuid import uuid4
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.expenses.models import Expense
from apps.expenses.services import (
    create_expense,
    update_expense,
    list_expenses,
    delete_expense,
    get_expense_analytics,
    ExpenseNotFoundError,
    InvalidExpenseError,
)
from apps.shops.services import ShopNotFoundError


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def expense(backoffice_user, shop, today):
    return Expense.objects.create(
        name='Gas refill',
        amount=Decimal('40.00'),
        date=today,
        shop=shop,
        created_by=backoffice_user,
    )


# =============================================================================
# Services
# =============================================================================

@pytest.mark.django_db
class TestExpenseServices:

    def test_create_expense_for_shop(self, backoffice_user, shop, today):
        expense = create_expense(
            name=' Rent ', amount=Decimal('500.00'), date=today,
            created_by=backoffice_user, shop_id=shop.id
        )

        assert expense.name == 'Rent'
        assert expense.shop == shop

    def test_create_expense_unknown_shop(self, backoffice_user, today):
        with pytest.raises(ShopNotFoundError):
            create_expense(
                name='Rent', amount=Decimal('1.00'), date=today,
                created_by=backoffice_user, shop_id=uuid4()
            )

    def test_negative_amount(self, backoffice_user, today):
        with pytest.raises(InvalidExpenseError):
            create_expense(name='Refund', amount=Decimal('-1.00'), date=today, created_by=backoffice_user)

    def test_update_expense(self, expense):
        updated = update_expense(expense_id=expense.id, amount=Decimal('45.50'))

        assert updated.amount == Decimal('45.50')
        assert updated.name == 'Gas refill'

    def test_update_missing_expense(self):
        with pytest.raises(ExpenseNotFoundError):
            update_expense(expense_id=uuid4(), name='Nothing')

    def test_list_filters(self, expense, backoffice_user, today):
        create_expense(name='Stationery', amount=Decimal('5.00'), date=today, created_by=backoffice_user)

        assert [e.name for e in list_expenses(name='gas')] == ['Gas refill']
        assert [e.name for e in list_expenses(shop_id=expense.shop_id)] == ['Gas refill']

    def test_delete_expense(self, expense):
        delete_expense(expense_id=expense.id)

        with pytest.raises(ExpenseNotFoundError):
            delete_expense(expense_id=expense.id)


@pytest.mark.django_db
class TestExpenseAnalytics:

    def test_empty(self):
        data = get_expense_analytics()

        assert data == {
            'today': Decimal('0.00'),
            'yesterday': Decimal('0.00'),
            'last_7_days': Decimal('0.00'),
            'this_month': Decimal('0.00'),
            'total': Decimal('0.00'),
        }

    def test_windows(self, backoffice_user, today):
        for days_ago, amount in [(0, '10.00'), (1, '20.00'), (7, '30.00'), (8, '40.00')]:
            Expense.objects.create(
                name=f'Expense {days_ago}',
                amount=Decimal(amount),
                date=today - timedelta(days=days_ago),
                created_by=backoffice_user,
            )

        data = get_expense_analytics()

        assert data['today'] == Decimal('10.00')
        assert data['yesterday'] == Decimal('20.00')
        assert data['last_7_days'] == Decimal('60.00')
        assert data['total'] == Decimal('100.00')
        assert data['this_month'] >= Decimal('10.00')

    def test_restricted_to_shop(self, expense, backoffice_user, today):
        Expense.objects.create(name='Other', amount=Decimal('7.00'), date=today, created_by=backoffice_user)

        assert get_expense_analytics(shop_id=expense.shop_id)['total'] == Decimal('40.00')
        assert get_expense_analytics()['total'] == Decimal('47.00')


# =============================================================================
# API
# =============================================================================

@pytest.mark.django_db
class TestExpenseAPI:

    def test_customer_forbidden(self, authenticated_client):
        response = authenticated_client.get(reverse('expenses:expense-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_expense(self, backoffice_client, shop, today):
        response = backoffice_client.post(
            reverse('expenses:expense-list'),
            {'name': 'Rent', 'amount': '500.00', 'date': today.isoformat(), 'shop_id': str(shop.id)},
            format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['shop_name'] == 'Corner Kitchen'

    def test_create_expense_negative_amount(self, backoffice_client, today):
        response = backoffice_client.post(
            reverse('expenses:expense-list'),
            {'name': 'Rent', 'amount': '-5.00', 'date': today.isoformat()},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_and_bad_shop_filter(self, backoffice_client, expense):
        url = reverse('expenses:expense-list')

        listed = backoffice_client.get(url)
        bad = backoffice_client.get(url, {'shop': 'nope'})

        assert listed.data['count'] == 1
        assert bad.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_expense(self, backoffice_client, expense):
        response = backoffice_client.patch(
            reverse('expenses:expense-detail', kwargs={'pk': expense.id}),
            {'name': 'Gas bottle'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Gas bottle'

    def test_analytics(self, backoffice_client, expense):
        response = backoffice_client.get(reverse('expenses:expense-analytics'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['today'] == '40.00'
        assert response.data['total'] == '40.00'

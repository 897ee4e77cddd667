"""Shared fixtures for all app test suites."""

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.catalog.models import Category, DealComponent, PlateType, Product
from apps.shops.models import Shop
from apps.stock.models import RegularStock, StockLine, StockLineKind


BUSINESS_DATE = date(2026, 3, 10)


def _jwt_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Users and clients
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """A customer."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def other_user(db):
    """A second customer."""
    return User.objects.create_user(
        email='otheruser@example.com',
        password='OtherPass123!',
        display_name='Other User',
    )


@pytest.fixture
def staff_user(db):
    """Owner and staff member of ``shop``."""
    return User.objects.create_user(
        email='staff@example.com',
        password='TestPass123!',
        display_name='Shop Staff',
    )


@pytest.fixture
def backoffice_user(db):
    """A Django staff account (catalog and expense admin)."""
    return User.objects.create_user(
        email='backoffice@example.com',
        password='TestPass123!',
        display_name='Back Office',
        is_staff=True,
    )


@pytest.fixture
def authenticated_client(user):
    """Return an authenticated API client using JWT."""
    return _jwt_client(user)


@pytest.fixture
def other_client(other_user):
    return _jwt_client(other_user)


@pytest.fixture
def staff_client(staff_user):
    return _jwt_client(staff_user)


@pytest.fixture
def backoffice_client(backoffice_user):
    return _jwt_client(backoffice_user)


# =============================================================================
# Shop and catalog
# =============================================================================

@pytest.fixture
def shop(staff_user):
    shop = Shop.objects.create(
        name='Corner Kitchen',
        address='1 Main Street',
        time_zone='UTC',
        owner=staff_user,
    )
    shop.staff.add(staff_user)
    return shop


@pytest.fixture
def category(db):
    return Category.objects.create(name='Mains', sub_categories=['Rice', 'Curry'])


@pytest.fixture
def samosa(category):
    """Plain product served from daily stock."""
    return Product.objects.create(name='Samosa', category=category, price=Decimal('2.50'))


@pytest.fixture
def juice(category):
    """Stockable product with its own counter."""
    return Product.objects.create(
        name='Juice',
        category=category,
        price=Decimal('1.50'),
        is_stockable=True,
        stock=20,
    )


@pytest.fixture
def biryani(category):
    """Parent dish sold as full and half plates."""
    return Product.objects.create(name='Biryani', category=category, price=Decimal('8.00'))


@pytest.fixture
def biryani_full(biryani):
    return Product.objects.create(
        name='Biryani (Full)',
        category=biryani.category,
        price=Decimal('8.00'),
        parent_product=biryani,
        plate_type=PlateType.FULL,
    )


@pytest.fixture
def biryani_half(biryani):
    return Product.objects.create(
        name='Biryani (Half)',
        category=biryani.category,
        price=Decimal('4.50'),
        parent_product=biryani,
        plate_type=PlateType.HALF,
    )


@pytest.fixture
def snack_deal(category, samosa, juice):
    """Bundle of two samosas and one juice."""
    deal = Product.objects.create(name='Snack Deal', category=category, price=Decimal('6.00'))
    DealComponent.objects.create(deal=deal, product=samosa, quantity=2)
    DealComponent.objects.create(deal=deal, product=juice, quantity=1)
    return deal


# =============================================================================
# Daily stock
# =============================================================================

@pytest.fixture
def business_date():
    return BUSINESS_DATE


@pytest.fixture
def at():
    """Build a UTC moment on the test business day."""
    def _at(hour, minute=0):
        return datetime(
            BUSINESS_DATE.year, BUSINESS_DATE.month, BUSINESS_DATE.day,
            hour, minute, tzinfo=dt_timezone.utc
        )
    return _at


@pytest.fixture
def make_stock(shop, staff_user, at):
    """
    Create a stock batch directly.

    Lines are ``(product, quantity)`` or ``(product, quantity, kind)``.
    """
    def _make(lines, hour=8, minute=0):
        batch = RegularStock.objects.create(
            shop=shop,
            created_by=staff_user,
            created_at=at(hour, minute),
        )
        for position, line in enumerate(lines):
            product, quantity = line[0], line[1]
            kind = line[2] if len(line) > 2 else StockLineKind.PLAIN
            StockLine.objects.create(
                regular_stock=batch,
                position=position,
                product=product,
                kind=kind,
                quantity=quantity,
            )
        return batch
    return _make

import pytest
from apps.accounts.models import User


@pytest.fixture
def user_inactive(db):
    """A deactivated customer account."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        display_name='Former Customer',
        is_active=False,
    )

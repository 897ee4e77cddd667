import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# Registration
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """POST /api/auth/register/"""

    def test_register_success(self, api_client):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'NewCustomer@Example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New Customer',
            'address': '12 Market Lane',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['address'] == '12 Market Lane'
        assert response.data['user']['shop_ids'] == []
        assert User.objects.filter(email='newcustomer@example.com').exists()

    def test_register_minimal(self, api_client):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'minimal@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_201_CREATED

    def test_register_duplicate_email_any_case(self, api_client, user):
        response = api_client.post(reverse('accounts:register'), {
            'email': user.email.upper(),
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_register_password_mismatch(self, api_client):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'weak@example.com',
            'password': '123',
            'password_confirm': '123',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """POST /api/auth/login/ and /api/auth/admin/login/"""

    def test_login_success(self, api_client, user):
        response = api_client.post(reverse('accounts:login'), {
            'email': user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['email'] == user.email
        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_email_case_insensitive(self, api_client, user):
        response = api_client.post(reverse('accounts:login'), {
            'email': 'TestUser@Example.com',
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, api_client, user):
        response = api_client.post(reverse('accounts:login'), {
            'email': user.email,
            'password': 'WrongPassword123!',
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data

    def test_login_inactive_user(self, api_client, user_inactive):
        response = api_client.post(reverse('accounts:login'), {
            'email': user_inactive.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'Account is deactivated'

    def test_admin_login_backoffice_user(self, api_client, backoffice_user):
        response = api_client.post(reverse('accounts:admin-login'), {
            'email': backoffice_user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['is_staff'] is True

    def test_admin_login_refuses_customer(self, api_client, user):
        response = api_client.post(reverse('accounts:admin-login'), {
            'email': user.email,
            'password': 'TestPass123!',
        })

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Profile
# =============================================================================

@pytest.mark.django_db
class TestProfile:
    """GET /api/auth/user/, PATCH /api/auth/user/update/, POST /api/auth/user/password/"""

    def test_get_current_user(self, authenticated_client, user):
        response = authenticated_client.get(reverse('accounts:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['display_name'] == 'Test User'

    def test_shop_staff_sees_their_shops(self, staff_client, shop):
        response = staff_client.get(reverse('accounts:current-user'))

        assert response.data['shop_ids'] == [str(shop.id)]

    def test_get_current_user_unauthenticated(self, api_client):
        response = api_client.get(reverse('accounts:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_contact_details(self, authenticated_client, user):
        response = authenticated_client.patch(
            reverse('accounts:update-profile'),
            {'display_name': 'Updated Name', 'phone': '+420 777 123 456', 'address': '9 Bridge Road'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.display_name == 'Updated Name'
        assert user.phone == '+420 777 123 456'
        assert user.address == '9 Bridge Road'

    def test_email_is_not_updated(self, authenticated_client, user):
        authenticated_client.patch(
            reverse('accounts:update-profile'), {'email': 'newemail@example.com'}, format='json'
        )

        user.refresh_from_db()
        assert user.email == 'testuser@example.com'

    def test_change_password(self, authenticated_client, user):
        response = authenticated_client.post(
            reverse('accounts:change-password'),
            {'old_password': 'TestPass123!', 'new_password': 'FreshPass456!'},
            format='json'
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        user.refresh_from_db()
        assert user.check_password('FreshPass456!')

    def test_change_password_wrong_old_password(self, authenticated_client, user):
        response = authenticated_client.post(
            reverse('accounts:change-password'),
            {'old_password': 'Nope12345!', 'new_password': 'FreshPass456!'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        user.refresh_from_db()
        assert user.check_password('TestPass123!')


# =============================================================================
# User model
# =============================================================================

@pytest.mark.django_db
class TestUserModel:

    def test_create_user_lowercases_email(self):
        user = User.objects.create_user(email='Model@Example.COM', password='TestPass123!')

        assert user.email == 'model@example.com'
        assert user.check_password('TestPass123!')
        assert user.is_staff is False

    def test_create_superuser(self):
        user = User.objects.create_superuser(email='admin@example.com', password='AdminPass123!')

        assert user.is_staff is True
        assert user.is_superuser is True

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='x')

    def test_get_display_name(self, user):
        assert user.get_display_name() == 'Test User'

        user.display_name = ''
        assert user.get_display_name() == 'testuser'

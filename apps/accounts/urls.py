from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # POST  /api/auth/register/          - Customer sign-up
    # POST  /api/auth/login/             - JWT login
    # POST  /api/auth/admin/login/       - JWT login for back-office accounts
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('admin/login/', views.admin_login, name='admin-login'),

    # GET   /api/auth/user/              - Own profile
    # PATCH /api/auth/user/update/       - Update contact details
    # POST  /api/auth/user/password/     - Change password
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_profile, name='update-profile'),
    path('user/password/', views.change_password, name='change-password'),
]

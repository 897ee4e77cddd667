from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'cards', views.PaymentCardViewSet, basename='card')

urlpatterns = [
    # GET    /api/payments/cards/        - Own cards
    # POST   /api/payments/cards/        - Add card
    # GET    /api/payments/cards/{id}/   - Card detail
    # PATCH  /api/payments/cards/{id}/   - Update holder/expiry/default
    # DELETE /api/payments/cards/{id}/   - Remove card
    path('', include(router.urls)),
]

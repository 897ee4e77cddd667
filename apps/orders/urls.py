from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'orders'

router = DefaultRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # Order ViewSet routes
    # GET    /api/orders/                  - List visible orders
    # POST   /api/orders/                  - Place order
    # GET    /api/orders/{id}/             - Order detail
    # PATCH  /api/orders/{id}/             - Update items/details

    # Custom order actions
    # POST   /api/orders/{id}/cancel/      - Cancel and give stock back
    # POST   /api/orders/{id}/mark_paid/   - Record payment (staff)
    # POST   /api/orders/{id}/complete/    - Mark delivered (staff)
    # GET    /api/orders/my/               - Own orders

    path('', include(router.urls)),
]

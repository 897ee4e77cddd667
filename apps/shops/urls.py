from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ShopViewSet

app_name = 'shops'

router = DefaultRouter()
router.register(r'', ShopViewSet, basename='shop')

urlpatterns = [
    path('', include(router.urls)),
]

# Available endpoints:
# GET    /api/shops/                   - List active shops
# POST   /api/shops/                   - Create shop
# GET    /api/shops/{id}/              - Shop detail
# PUT    /api/shops/{id}/              - Update shop (staff)
# PATCH  /api/shops/{id}/              - Partial update (staff)
# DELETE /api/shops/{id}/              - Deactivate shop (owner)
# POST   /api/shops/{id}/add_staff/    - Add staff member (owner)

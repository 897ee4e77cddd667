from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'stock'

router = DefaultRouter()
router.register(r'', views.RegularStockViewSet, basename='regular-stock')

urlpatterns = [
    # Regular stock routes (shop staff)
    # GET    /api/stock/                 - List batches (?shop=&date=)
    # POST   /api/stock/                 - Enter a batch
    # GET    /api/stock/{id}/            - Batch detail
    # PATCH  /api/stock/{id}/            - Adjust batch
    # DELETE /api/stock/{id}/            - Delete unconsumed batch

    # Daily summary
    path('today/<uuid:shop_id>/', views.daily_stock, name='daily-stock'),

    path('', include(router.urls)),
]

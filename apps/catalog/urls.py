from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'catalog'

router = DefaultRouter()
router.register(r'categories', views.CategoryViewSet, basename='category')
router.register(r'products', views.ProductViewSet, basename='product')

urlpatterns = [
    # GET    /api/catalog/categories/               - List categories
    # POST   /api/catalog/categories/               - Create category (admin)
    # PATCH  /api/catalog/categories/{id}/          - Update category (admin)
    # DELETE /api/catalog/categories/{id}/          - Deactivate category (admin)
    # GET    /api/catalog/products/                 - List/filter products
    # POST   /api/catalog/products/                 - Create product (admin)
    # PATCH  /api/catalog/products/{id}/            - Update product (admin)
    # DELETE /api/catalog/products/{id}/            - Soft-delete product (admin)
    # GET    /api/catalog/products/by-category/     - Showcase products per category
    path('', include(router.urls)),
]

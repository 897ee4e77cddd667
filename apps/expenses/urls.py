from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

router = DefaultRouter()
router.register(r'', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # GET    /api/expenses/             - List expenses
    # POST   /api/expenses/             - Record expense
    # GET    /api/expenses/{id}/        - Expense detail
    # PATCH  /api/expenses/{id}/        - Update expense
    # DELETE /api/expenses/{id}/        - Delete expense
    # GET    /api/expenses/analytics/   - Dashboard totals
    path('', include(router.urls)),
]

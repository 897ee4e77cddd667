from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'favourites'

router = DefaultRouter()
router.register(r'', views.FavouriteViewSet, basename='favourite')

urlpatterns = [
    # GET    /api/favourites/           - Own favourites
    # GET    /api/favourites/{id}/      - Favourite detail
    # DELETE /api/favourites/{id}/      - Remove favourite
    # POST   /api/favourites/toggle/    - Add/remove product
    path('', include(router.urls)),
]

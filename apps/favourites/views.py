from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .models import FavouriteItem
from .serializers import FavouriteItemSerializer, ToggleFavouriteSerializer
from .services import (
    toggle_favourite,
    list_favourites,
    delete_favourite,
    FavouriteNotFoundError,
    FavouriteProductNotFoundError,
)


class FavouritePagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class FavouriteViewSet(viewsets.ReadOnlyModelViewSet):
    """
    The current user's favourite products.

    list: Favourites, newest first
    toggle: Add or remove a product
    destroy: Remove a favourite by id
    """

    queryset = FavouriteItem.objects.all()
    serializer_class = FavouriteItemSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = FavouritePagination

    def get_queryset(self):
        return list_favourites(user=self.request.user)

    def destroy(self, request, pk=None):
        try:
            delete_favourite(favourite_id=pk, user=request.user)
        except FavouriteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=ToggleFavouriteSerializer)
    @action(detail=False, methods=['post'])
    def toggle(self, request):
        serializer = ToggleFavouriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            added = toggle_favourite(
                user=request.user,
                product_id=serializer.validated_data['product_id']
            )
        except FavouriteProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(
            {'is_favourite': added},
            status=status.HTTP_201_CREATED if added else status.HTTP_200_OK
        )

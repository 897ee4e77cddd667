from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination

from .models import Shop
from .serializers import ShopSerializer, ShopCreateSerializer, AddStaffSerializer
from .services import (
    create_shop,
    update_shop,
    deactivate_shop,
    add_staff_member,
    list_shops,
    # Exceptions
    ShopNotFoundError,
    DuplicateShopError,
    InvalidTimeZoneError,
    StaffMemberNotFoundError,
    InsufficientPermissionsError,
)


class ShopPagination(PageNumberPagination):
    """Custom pagination for shops."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ShopViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Shop operations.

    list: Active shops (optional ?name= filter)
    create: Create a shop; creator becomes owner and staff
    retrieve: Get a shop
    update / partial_update: Update a shop (staff only)
    destroy: Deactivate a shop (owner only)
    add_staff: Add a user to the shop staff (owner only)
    """

    queryset = Shop.objects.filter(is_active=True).select_related('owner')
    serializer_class = ShopSerializer
    permission_classes = [IsAuthenticatedOrReadOnly]
    pagination_class = ShopPagination

    def get_queryset(self):
        return list_shops(name=self.request.query_params.get('name'))

    def create(self, request, *args, **kwargs):
        serializer = ShopCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            shop = create_shop(created_by=request.user, **serializer.validated_data)
        except (DuplicateShopError, InvalidTimeZoneError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ShopSerializer(shop).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = ShopCreateSerializer(data=request.data, partial=kwargs.pop('partial', False))
        serializer.is_valid(raise_exception=True)

        try:
            shop = update_shop(
                shop_id=self.kwargs['pk'],
                user=request.user,
                **serializer.validated_data
            )
        except ShopNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (DuplicateShopError, InvalidTimeZoneError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ShopSerializer(shop).data)

    def destroy(self, request, *args, **kwargs):
        try:
            deactivate_shop(shop_id=self.kwargs['pk'], user=request.user)
        except ShopNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated])
    def add_staff(self, request, pk=None):
        """Add a user to the shop staff (owner only)."""
        serializer = AddStaffSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            shop = add_staff_member(
                shop_id=pk,
                user=request.user,
                member_email=serializer.validated_data['email']
            )
        except (ShopNotFoundError, StaffMemberNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(ShopSerializer(shop).data)

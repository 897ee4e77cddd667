from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.utils.dateparse import parse_date
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.shops.services import ShopNotFoundError
from .models import RegularStock
from .permissions import IsStockShopStaff
from .serializers import (
    RegularStockSerializer,
    RegularStockCreateSerializer,
    RegularStockUpdateSerializer,
    RegularStockFilterSerializer,
    DailyStockEntrySerializer,
)
from .services import (
    create_regular_stock,
    update_regular_stock,
    delete_regular_stock,
    list_regular_stocks,
    get_daily_stock_summary,
    # Exceptions
    RegularStockNotFoundError,
    InvalidStockLineError,
    StockInUseError,
    InsufficientPermissionsError,
)


class RegularStockPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class RegularStockViewSet(viewsets.ModelViewSet):
    """
    ViewSet for regular (daily) stock batches.

    Only staff of the batch's shop can see or change it.
    list filters: ?shop=<id>&date=YYYY-MM-DD
    """

    queryset = RegularStock.objects.select_related('shop', 'created_by')
    serializer_class = RegularStockSerializer
    permission_classes = [IsAuthenticated, IsStockShopStaff]
    pagination_class = RegularStockPagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        filters = RegularStockFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_regular_stocks(
            user=self.request.user,
            shop_id=filters.validated_data.get('shop'),
            business_date=filters.validated_data.get('date'),
        )

    def create(self, request, *args, **kwargs):
        serializer = RegularStockCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            regular_stock = create_regular_stock(
                created_by=request.user,
                **serializer.validated_data
            )
        except ShopNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidStockLineError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RegularStockSerializer(regular_stock).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        serializer = RegularStockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            regular_stock = update_regular_stock(
                regular_stock_id=self.kwargs['pk'],
                user=request.user,
                **serializer.validated_data
            )
        except RegularStockNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidStockLineError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(RegularStockSerializer(regular_stock).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_regular_stock(regular_stock_id=self.kwargs['pk'], user=request.user)
        except RegularStockNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except StockInUseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    parameters=[
        OpenApiParameter('date', str, description='Business date (YYYY-MM-DD), default today'),
    ],
    responses={200: DailyStockEntrySerializer(many=True)},
    description="Per-product stock of a shop for one business day.",
    tags=['stock'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def daily_stock(request, shop_id):
    """Get the merged daily stock of a shop."""
    business_date = None
    if request.query_params.get('date'):
        business_date = parse_date(request.query_params['date'])
        if business_date is None:
            return Response(
                {'error': 'date must be YYYY-MM-DD'},
                status=status.HTTP_400_BAD_REQUEST
            )

    try:
        entries = get_daily_stock_summary(shop_id=shop_id, business_date=business_date)
    except ShopNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(DailyStockEntrySerializer(entries, many=True).data)

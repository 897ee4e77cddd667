from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.shops.services import ShopNotFoundError
from .models import Order
from .serializers import (
    OrderSerializer,
    OrderListSerializer,
    OrderCreateSerializer,
    OrderUpdateSerializer,
    OrderSettlementSerializer,
    OrderFilterSerializer,
)
from .services import (
    create_order,
    update_order,
    cancel_order,
    mark_order_paid,
    complete_order,
    get_order_by_id,
    list_orders,
    # Exceptions
    OrderValidationError,
    OrderStateError,
    NotFoundError,
    InsufficientPermissionsError,
    NoStockError,
    InsufficientStockError,
)


class OrderPagination(PageNumberPagination):
    """Custom pagination for orders."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _settlement_response(order, allocation, status_code=status.HTTP_200_OK):
    order = get_order_by_id(order_id=order.id)
    return Response({
        'order': OrderSerializer(order).data,
        'refresh_required': bool(allocation and allocation.refresh_required),
        'low_stock_product_ids': list(allocation.low_stock_product_ids) if allocation else [],
    }, status=status_code)


def _error(message, status_code, **extra):
    return Response({'error': message, **extra}, status=status_code)


class OrderViewSet(viewsets.ModelViewSet):
    """
    ViewSet for orders.

    All stock settlement happens in services; views translate errors:
    validation, state and stock errors -> 400, permissions -> 403,
    missing records -> 404.

    list: Orders visible to the user (?shop=&status=&order_number=)
    create: Place an order
    retrieve: Order detail (customer or shop staff)
    partial_update: Change items/payment method/address
    cancel / mark_paid / complete: Status transitions
    my: The user's own orders
    """

    queryset = Order.objects.select_related('shop', 'customer')
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = OrderPagination
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def get_queryset(self):
        filters = OrderFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        data = filters.validated_data
        return list_orders(
            user=self.request.user,
            shop_id=data.get('shop'),
            status=data.get('status'),
            order_number=data.get('order_number'),
        )

    def get_serializer_class(self):
        if self.action in ('list', 'my'):
            return OrderListSerializer
        return OrderSerializer

    def retrieve(self, request, *args, **kwargs):
        try:
            order = get_order_by_id(order_id=kwargs['pk'], user=request.user)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return _error(str(e), status.HTTP_403_FORBIDDEN)
        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderCreateSerializer, responses={201: OrderSettlementSerializer})
    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order, allocation = create_order(
                customer=request.user,
                shop_id=data['shop_id'],
                items=[dict(item) for item in data['items']],
                order_date=data.get('order_date'),
                payment_method=data.get('payment_method', ''),
                shipping_address=data.get('shipping_address', ''),
            )
        except InsufficientStockError as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST, products=e.product_names)
        except (OrderValidationError, NoStockError) as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST)
        except (NotFoundError, ShopNotFoundError) as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)

        return _settlement_response(order, allocation, status.HTTP_201_CREATED)

    @extend_schema(request=OrderUpdateSerializer, responses={200: OrderSettlementSerializer})
    def partial_update(self, request, *args, **kwargs):
        serializer = OrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        items = data.get('items')
        try:
            order, allocation = update_order(
                order_id=kwargs['pk'],
                user=request.user,
                items=[dict(item) for item in items] if items is not None else None,
                payment_method=data.get('payment_method'),
                shipping_address=data.get('shipping_address'),
            )
        except InsufficientStockError as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST, products=e.product_names)
        except (OrderValidationError, OrderStateError, NoStockError) as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST)
        except InsufficientPermissionsError as e:
            return _error(str(e), status.HTTP_403_FORBIDDEN)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)

        return _settlement_response(order, allocation)

    def _transition(self, service, request, pk):
        try:
            order = service(order_id=pk, user=request.user)
        except OrderStateError as e:
            return _error(str(e), status.HTTP_400_BAD_REQUEST)
        except InsufficientPermissionsError as e:
            return _error(str(e), status.HTTP_403_FORBIDDEN)
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(get_order_by_id(order_id=order.id)).data)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Cancel the order and give its stock back."""
        return self._transition(cancel_order, request, pk)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        """Record payment (shop staff)."""
        return self._transition(mark_order_paid, request, pk)

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        """Mark a paid order delivered (shop staff)."""
        return self._transition(complete_order, request, pk)

    @action(detail=False, methods=['get'])
    def my(self, request):
        """The current user's own orders."""
        orders = list_orders(user=request.user, customer_only=True)
        page = self.paginate_queryset(orders)
        if page is not None:
            return self.get_paginated_response(OrderListSerializer(page, many=True).data)
        return Response(OrderListSerializer(orders, many=True).data)

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.shops.services import ShopNotFoundError
from .models import Expense
from .serializers import (
    ExpenseSerializer,
    ExpenseCreateSerializer,
    ExpenseUpdateSerializer,
    ExpenseAnalyticsSerializer,
    ExpenseFilterSerializer,
)
from .services import (
    create_expense,
    get_expense_by_id,
    list_expenses,
    update_expense,
    delete_expense,
    get_expense_analytics,
    ExpenseNotFoundError,
    InvalidExpenseError,
)


class ExpensePagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ExpenseViewSet(viewsets.ModelViewSet):
    """
    Back-office expenses (staff accounts only).

    list: Expenses, newest date first (?name=&shop=)
    analytics: Totals for today, yesterday, last 7 days, this month, all time
    """

    queryset = Expense.objects.all()
    serializer_class = ExpenseSerializer
    permission_classes = [IsAdminUser]
    pagination_class = ExpensePagination
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        filters = ExpenseFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)
        return list_expenses(
            name=filters.validated_data.get('name'),
            shop_id=filters.validated_data.get('shop'),
        )

    def retrieve(self, request, *args, **kwargs):
        try:
            expense = get_expense_by_id(expense_id=kwargs['pk'])
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(ExpenseSerializer(expense).data)

    @extend_schema(request=ExpenseCreateSerializer, responses={201: ExpenseSerializer})
    def create(self, request, *args, **kwargs):
        serializer = ExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = create_expense(created_by=request.user, **serializer.validated_data)
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ShopNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ExpenseUpdateSerializer, responses={200: ExpenseSerializer})
    def partial_update(self, request, *args, **kwargs):
        serializer = ExpenseUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            expense = update_expense(expense_id=kwargs['pk'], **serializer.validated_data)
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ExpenseSerializer(expense).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_expense(expense_id=kwargs['pk'])
        except ExpenseNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[OpenApiParameter('shop', OpenApiTypes.UUID, description='Restrict to one shop')],
        responses={200: ExpenseAnalyticsSerializer},
    )
    @action(detail=False, methods=['get'])
    def analytics(self, request):
        filters = ExpenseFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        data = get_expense_analytics(shop_id=filters.validated_data.get('shop'))
        return Response(ExpenseAnalyticsSerializer(data).data)

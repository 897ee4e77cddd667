from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .models import Category, Product
from .permissions import IsCatalogAdminOrReadOnly
from .serializers import (
    CategorySerializer,
    CategoryInputSerializer,
    ProductSerializer,
    ProductInputSerializer,
    ShowcaseCategorySerializer,
    ProductFilterSerializer,
)
from .services import (
    create_category,
    update_category,
    delete_category,
    list_categories,
    create_product,
    update_product,
    delete_product,
    list_products,
    get_showcase_products_by_category,
    # Exceptions
    CategoryNotFoundError,
    ProductNotFoundError,
    DuplicateCategoryError,
    DuplicateProductError,
    CategoryInUseError,
    InvalidProductError,
)


def _parse_bool(value):
    if value is None or value == '':
        return None
    return value.lower() in ('1', 'true', 'yes')


class CatalogPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for categories.

    Reads are public, writes need an admin user.
    destroy deactivates the category and is refused while it has products.
    """

    queryset = Category.objects.filter(is_active=True)
    serializer_class = CategorySerializer
    permission_classes = [IsCatalogAdminOrReadOnly]
    pagination_class = CatalogPagination

    def get_queryset(self):
        return list_categories(name=self.request.query_params.get('name'))

    def create(self, request, *args, **kwargs):
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        data.pop('is_active', None)

        try:
            category = create_category(**data)
        except DuplicateCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = CategoryInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            category = update_category(category_id=self.kwargs['pk'], **serializer.validated_data)
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_category(category_id=self.kwargs['pk'])
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CategoryInUseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductViewSet(viewsets.ModelViewSet):
    """
    ViewSet for products.

    list filters: ?name=, ?category=, ?has_parent=true|false, ?is_showcase=true|false
    """

    queryset = Product.objects.filter(is_active=True)
    serializer_class = ProductSerializer
    permission_classes = [IsCatalogAdminOrReadOnly]
    pagination_class = CatalogPagination

    def get_queryset(self):
        params = self.request.query_params
        filters = ProductFilterSerializer(data=params)
        filters.is_valid(raise_exception=True)
        return list_products(
            name=filters.validated_data.get('name'),
            category_id=filters.validated_data.get('category'),
            has_parent=_parse_bool(params.get('has_parent')),
            is_showcase=_parse_bool(params.get('is_showcase')),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('name', str, description='Name contains'),
            OpenApiParameter('category', str, description='Category ID'),
            OpenApiParameter('has_parent', bool, description='Plate variants only'),
            OpenApiParameter('is_showcase', bool, description='Showcase flag'),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def create(self, request, *args, **kwargs):
        serializer = ProductInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            product = create_product(**serializer.validated_data)
        except (CategoryNotFoundError, ProductNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateProductError, InvalidProductError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = ProductInputSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            product = update_product(product_id=self.kwargs['pk'], **serializer.validated_data)
        except (CategoryNotFoundError, ProductNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (DuplicateProductError, InvalidProductError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_product(product_id=self.kwargs['pk'])
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: ShowcaseCategorySerializer(many=True)})
    @action(detail=False, methods=['get'], url_path='by-category')
    def by_category(self, request):
        """Showcase products grouped by category."""
        groups = get_showcase_products_by_category()
        return Response(ShowcaseCategorySerializer(groups, many=True).data)

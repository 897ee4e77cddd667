from rest_framework import serializers
from .models import Category, Product, DealComponent, PlateType


class CategorySerializer(serializers.ModelSerializer):

    class Meta:
        model = Category
        fields = [
            'id',
            'name',
            'sub_categories',
            'image_url',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    sub_categories = serializers.ListField(
        child=serializers.CharField(max_length=200),
        required=False
    )
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class DealComponentSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source='product.id', read_only=True)
    name = serializers.CharField(source='product.name', read_only=True)

    class Meta:
        model = DealComponent
        fields = ['product_id', 'name', 'quantity']


class ProductSerializer(serializers.ModelSerializer):
    """Main serializer for products."""

    category_name = serializers.CharField(source='category.name', read_only=True)
    parent_product_name = serializers.CharField(
        source='parent_product.name',
        read_only=True,
        default=None
    )
    deal_products = DealComponentSerializer(source='deal_components', many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'category',
            'category_name',
            'sub_category',
            'description',
            'price',
            'manufacturing_cost',
            'unit',
            'image_url',
            'parent_product',
            'parent_product_name',
            'plate_type',
            'is_stockable',
            'stock',
            'is_showcase',
            'is_active',
            'deal_products',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class DealProductInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class ProductInputSerializer(serializers.Serializer):
    """Input for product create and update."""

    name = serializers.CharField(max_length=200)
    category_id = serializers.UUIDField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    sub_category = serializers.CharField(max_length=200, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    manufacturing_cost = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False
    )
    unit = serializers.CharField(max_length=32, required=False, allow_blank=True)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    parent_product_id = serializers.UUIDField(required=False, allow_null=True)
    plate_type = serializers.ChoiceField(choices=PlateType.choices, required=False, allow_blank=True)
    is_stockable = serializers.BooleanField(required=False)
    stock = serializers.IntegerField(min_value=0, required=False)
    is_showcase = serializers.BooleanField(required=False)
    deal_products = DealProductInputSerializer(many=True, required=False)


class ShowcaseCategorySerializer(serializers.Serializer):
    category = CategorySerializer()
    products = ProductSerializer(many=True)


class ProductFilterSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True)
    category = serializers.UUIDField(required=False)

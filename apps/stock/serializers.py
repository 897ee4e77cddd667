from rest_framework import serializers
from .models import RegularStock, StockLine, StockLineKind


class StockLineSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    available_quantity = serializers.IntegerField(read_only=True)

    class Meta:
        model = StockLine
        fields = [
            'id',
            'position',
            'product',
            'product_name',
            'kind',
            'quantity',
            'consumed_quantity',
            'full_plate_consumed_quantity',
            'half_plate_consumed_quantity',
            'available_quantity',
            'is_available',
        ]
        read_only_fields = fields


class RegularStockSerializer(serializers.ModelSerializer):
    shop_name = serializers.CharField(source='shop.name', read_only=True)
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)
    lines = StockLineSerializer(many=True, read_only=True)

    class Meta:
        model = RegularStock
        fields = [
            'id',
            'shop',
            'shop_name',
            'created_by',
            'created_by_email',
            'is_default',
            'created_at',
            'updated_at',
            'lines',
        ]
        read_only_fields = fields


class StockLineInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=0)
    kind = serializers.ChoiceField(choices=StockLineKind.choices, required=False)
    is_available = serializers.BooleanField(required=False, default=True)


class RegularStockCreateSerializer(serializers.Serializer):
    shop_id = serializers.UUIDField()
    is_default = serializers.BooleanField(required=False, default=False)
    created_at = serializers.DateTimeField(required=False)
    lines = StockLineInputSerializer(many=True, allow_empty=False)


class StockLineUpdateSerializer(serializers.Serializer):
    line_id = serializers.UUIDField(required=False)
    product_id = serializers.UUIDField(required=False)
    quantity = serializers.IntegerField(min_value=0, required=False)
    kind = serializers.ChoiceField(choices=StockLineKind.choices, required=False)
    is_available = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs.get('line_id') and not attrs.get('product_id'):
            raise serializers.ValidationError('Either line_id or product_id is required')
        if not attrs.get('line_id') and attrs.get('quantity') is None:
            raise serializers.ValidationError({'quantity': 'Required for new lines'})
        return attrs


class RegularStockUpdateSerializer(serializers.Serializer):
    is_default = serializers.BooleanField(required=False)
    lines = StockLineUpdateSerializer(many=True, required=False)


class DailyStockEntrySerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_name = serializers.CharField()
    kind = serializers.CharField()
    quantity = serializers.IntegerField()
    consumed_quantity = serializers.IntegerField()
    available_quantity = serializers.IntegerField()
    full_plate_consumed_quantity = serializers.IntegerField(required=False)
    half_plate_consumed_quantity = serializers.IntegerField(required=False)
    is_available = serializers.BooleanField(required=False)
    batch_count = serializers.IntegerField()


class RegularStockFilterSerializer(serializers.Serializer):
    shop = serializers.UUIDField(required=False)
    date = serializers.DateField(required=False)

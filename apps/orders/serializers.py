from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Order, OrderItem, OrderStatus, PaymentMethod


class OrderItemSerializer(serializers.ModelSerializer):
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'position',
            'product',
            'name',
            'unit_price',
            'quantity',
            'line_total',
            'image_url',
            'is_stockable',
            'parent_product',
            'plate_type',
            'deal_products',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Full order with items."""

    shop_name = serializers.CharField(source='shop.name', read_only=True)
    customer = UserPublicSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'shop',
            'shop_name',
            'customer',
            'status',
            'payment_method',
            'total_amount',
            'total_items',
            'order_date',
            'business_date',
            'shipping_address',
            'stock_settled',
            'paid_at',
            'completed_at',
            'cancelled_at',
            'created_at',
            'updated_at',
            'items',
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight order row for lists."""

    shop_name = serializers.CharField(source='shop.name', read_only=True)
    customer_email = serializers.EmailField(source='customer.email', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'shop',
            'shop_name',
            'customer_email',
            'status',
            'total_amount',
            'total_items',
            'business_date',
            'created_at',
        ]
        read_only_fields = fields


class OrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(serializers.Serializer):
    shop_id = serializers.UUIDField()
    items = OrderItemInputSerializer(many=True, allow_empty=False)
    order_date = serializers.DateTimeField(required=False)
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        required=False,
        allow_blank=True
    )
    shipping_address = serializers.CharField(required=False, allow_blank=True)


class OrderUpdateSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, required=False, allow_empty=False)
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        required=False,
        allow_blank=True
    )
    shipping_address = serializers.CharField(required=False, allow_blank=True)


class OrderSettlementSerializer(serializers.Serializer):
    """Order plus the stock signal from settling it."""

    order = OrderSerializer()
    refresh_required = serializers.BooleanField()
    low_stock_product_ids = serializers.ListField(child=serializers.CharField())


class OrderFilterSerializer(serializers.Serializer):
    shop = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    order_number = serializers.CharField(required=False)

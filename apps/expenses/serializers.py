from rest_framework import serializers

from .models import Expense


class ExpenseSerializer(serializers.ModelSerializer):
    shop_name = serializers.CharField(source='shop.name', read_only=True, default=None)

    class Meta:
        model = Expense
        fields = ['id', 'name', 'amount', 'date', 'shop', 'shop_name', 'created_by', 'created_at', 'updated_at']
        read_only_fields = fields


class ExpenseCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    date = serializers.DateField()
    shop_id = serializers.UUIDField(required=False, allow_null=True)


class ExpenseUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    date = serializers.DateField(required=False)


class ExpenseAnalyticsSerializer(serializers.Serializer):
    today = serializers.DecimalField(max_digits=14, decimal_places=2)
    yesterday = serializers.DecimalField(max_digits=14, decimal_places=2)
    last_7_days = serializers.DecimalField(max_digits=14, decimal_places=2)
    this_month = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class ExpenseFilterSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True)
    shop = serializers.UUIDField(required=False)

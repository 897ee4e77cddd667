from rest_framework import serializers

from apps.catalog.serializers import ProductSerializer
from .models import FavouriteItem


class FavouriteItemSerializer(serializers.ModelSerializer):
    product = ProductSerializer(read_only=True)

    class Meta:
        model = FavouriteItem
        fields = ['id', 'product', 'created_at']
        read_only_fields = fields


class ToggleFavouriteSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()

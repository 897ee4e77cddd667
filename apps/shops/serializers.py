from rest_framework import serializers

from apps.accounts.serializers import UserPublicSerializer
from .models import Shop


class ShopSerializer(serializers.ModelSerializer):
    """Full shop serializer."""

    owner = UserPublicSerializer(read_only=True)
    staff_count = serializers.SerializerMethodField()

    class Meta:
        model = Shop
        fields = [
            'id',
            'name',
            'address',
            'time_zone',
            'is_active',
            'owner',
            'staff_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'owner', 'created_at', 'updated_at']

    def get_staff_count(self, obj):
        return obj.staff.count()


class ShopCreateSerializer(serializers.Serializer):
    """Serializer for creating and updating shops."""

    name = serializers.CharField(max_length=200)
    address = serializers.CharField(max_length=500)
    time_zone = serializers.CharField(max_length=64, required=False, allow_blank=True)


class AddStaffSerializer(serializers.Serializer):
    email = serializers.EmailField()

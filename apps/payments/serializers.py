from rest_framework import serializers

from .models import CardType, PaymentCard


class PaymentCardSerializer(serializers.ModelSerializer):

    class Meta:
        model = PaymentCard
        fields = [
            'id',
            'cardholder_name',
            'card_number',
            'expiry_month',
            'expiry_year',
            'card_type',
            'is_default',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class PaymentCardCreateSerializer(serializers.Serializer):
    cardholder_name = serializers.CharField(max_length=200)
    card_number = serializers.RegexField(r'^\d{16}$')
    expiry_month = serializers.IntegerField(min_value=1, max_value=12)
    expiry_year = serializers.IntegerField()
    cvv = serializers.RegexField(r'^\d{3,4}$', write_only=True)
    card_type = serializers.ChoiceField(choices=CardType.choices)
    is_default = serializers.BooleanField(required=False, default=False)


class PaymentCardUpdateSerializer(serializers.Serializer):
    cardholder_name = serializers.CharField(max_length=200, required=False)
    expiry_month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    expiry_year = serializers.IntegerField(required=False)
    is_default = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one field to update")
        return attrs

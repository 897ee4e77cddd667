from django.contrib import admin
from .models import PaymentCard


@admin.register(PaymentCard)
class PaymentCardAdmin(admin.ModelAdmin):
    list_display = ['card_number', 'card_type', 'user', 'cardholder_name', 'is_default', 'created_at']
    list_filter = ['card_type', 'is_default']
    search_fields = ['cardholder_name', 'user__email']
    readonly_fields = ['card_number', 'created_at', 'updated_at']

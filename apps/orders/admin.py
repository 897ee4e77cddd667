from django.contrib import admin
from .models import Order, OrderItem, StockAllocation


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    fields = ['position', 'product', 'name', 'unit_price', 'quantity', 'plate_type', 'is_stockable']
    readonly_fields = fields


class StockAllocationInline(admin.TabularInline):
    model = StockAllocation
    extra = 0
    can_delete = False
    fields = ['stock_line', 'product', 'quantity', 'full_plate_quantity', 'half_plate_quantity']
    readonly_fields = fields


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Orders are read-only here: changing items or status must go
    through the order services so stock stays consistent.
    """

    list_display = [
        'order_number',
        'shop',
        'customer',
        'status',
        'total_amount',
        'total_items',
        'business_date',
        'stock_settled',
        'created_at',
    ]
    list_filter = ['status', 'shop', 'stock_settled', 'business_date']
    search_fields = ['order_number', 'customer__email', 'shop__name']
    date_hierarchy = 'created_at'
    inlines = [OrderItemInline, StockAllocationInline]

    fieldsets = (
        ('Order', {
            'fields': ('order_number', 'shop', 'customer', 'status', 'payment_method')
        }),
        ('Totals', {
            'fields': ('total_amount', 'total_items')
        }),
        ('Dates', {
            'fields': ('order_date', 'business_date', 'paid_at', 'completed_at', 'cancelled_at')
        }),
        ('Delivery', {
            'fields': ('shipping_address',)
        }),
        ('Stock', {
            'fields': ('stock_settled',)
        }),
    )

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

from django.contrib import admin
from .models import RegularStock, StockLine


class StockLineInline(admin.TabularInline):
    model = StockLine
    extra = 0
    fields = [
        'position',
        'product',
        'kind',
        'quantity',
        'consumed_quantity',
        'full_plate_consumed_quantity',
        'half_plate_consumed_quantity',
        'is_available',
    ]
    readonly_fields = [
        'consumed_quantity',
        'full_plate_consumed_quantity',
        'half_plate_consumed_quantity',
    ]


@admin.register(RegularStock)
class RegularStockAdmin(admin.ModelAdmin):
    list_display = ['shop', 'created_at', 'created_by', 'is_default']
    list_filter = ['shop', 'is_default', 'created_at']
    search_fields = ['shop__name', 'created_by__email']
    date_hierarchy = 'created_at'
    readonly_fields = ['id', 'updated_at']
    inlines = [StockLineInline]

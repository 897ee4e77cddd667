from django.contrib import admin
from .models import Category, Product, DealComponent


class DealComponentInline(admin.TabularInline):
    model = DealComponent
    fk_name = 'deal'
    extra = 0
    autocomplete_fields = ['product']


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = [
        'name',
        'category',
        'price',
        'parent_product',
        'plate_type',
        'is_stockable',
        'stock',
        'is_showcase',
        'is_active',
    ]
    list_filter = ['category', 'plate_type', 'is_stockable', 'is_showcase', 'is_active']
    search_fields = ['name', 'sub_category']
    readonly_fields = ['id', 'created_at', 'updated_at']
    autocomplete_fields = ['parent_product']
    inlines = [DealComponentInline]

    fieldsets = (
        ('Product', {
            'fields': ('id', 'name', 'category', 'sub_category', 'description', 'image_url')
        }),
        ('Pricing', {
            'fields': ('price', 'manufacturing_cost', 'unit')
        }),
        ('Plate Variant', {
            'fields': ('parent_product', 'plate_type'),
            'classes': ('collapse',)
        }),
        ('Stock', {
            'fields': ('is_stockable', 'stock')
        }),
        ('Flags', {
            'fields': ('is_showcase', 'is_active')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

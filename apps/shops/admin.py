from django.contrib import admin
from .models import Shop


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ['name', 'address', 'time_zone', 'owner', 'is_active', 'created_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['name', 'address', 'owner__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    filter_horizontal = ['staff']

    fieldsets = (
        ('Shop', {
            'fields': ('id', 'name', 'address', 'time_zone', 'is_active')
        }),
        ('People', {
            'fields': ('owner', 'staff')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

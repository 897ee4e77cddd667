from django.contrib import admin
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['name', 'amount', 'date', 'shop', 'created_by']
    list_filter = ['shop', 'date']
    search_fields = ['name']
    date_hierarchy = 'date'

"""
Expense totals for the back-office dashboard.

All windows are computed on local calendar dates (``timezone.localdate``):
today, yesterday, the last 7 days (today and the 7 days before it), the
current month, and all time.
"""

from datetime import timedelta
from decimal import Decimal
from typing import Dict, Optional
from uuid import UUID

from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from apps.expenses.models import Expense


def _total(queryset) -> Decimal:
    return queryset.aggregate(
        total=Coalesce(
            Sum('amount'),
            Value(Decimal('0.00')),
            output_field=DecimalField(max_digits=14, decimal_places=2)
        )
    )['total']


def get_expense_analytics(*, shop_id: Optional[UUID] = None) -> Dict[str, Decimal]:
    """
    Sum expenses over the standard dashboard windows.

    Args:
        shop_id: Restrict to one shop's expenses

    Returns:
        {'today', 'yesterday', 'last_7_days', 'this_month', 'total'}
    """
    today = timezone.localdate()
    yesterday = today - timedelta(days=1)

    expenses = Expense.objects.all()
    if shop_id:
        expenses = expenses.filter(shop_id=shop_id)

    return {
        'today': _total(expenses.filter(date=today)),
        'yesterday': _total(expenses.filter(date=yesterday)),
        'last_7_days': _total(expenses.filter(date__gte=today - timedelta(days=7), date__lte=today)),
        'this_month': _total(expenses.filter(date__gte=today.replace(day=1), date__lte=today)),
        'total': _total(expenses),
    }

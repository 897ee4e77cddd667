import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.expenses.models import Expense
from apps.shops.services import get_shop_by_id

from .exceptions import ExpenseNotFoundError, InvalidExpenseError

logger = logging.getLogger(__name__)


def _check_amount(amount: Decimal) -> None:
    if amount < 0:
        raise InvalidExpenseError("Expense amount cannot be negative")


@transaction.atomic
def create_expense(
    *,
    name: str,
    amount: Decimal,
    date: date,
    created_by: User,
    shop_id: Optional[UUID] = None
) -> Expense:
    """
    Record an expense.

    Raises:
        InvalidExpenseError: If amount is negative
        ShopNotFoundError: If shop_id is given and the shop doesn't exist
    """
    _check_amount(amount)
    shop = get_shop_by_id(shop_id=shop_id) if shop_id else None

    expense = Expense.objects.create(
        name=name.strip(),
        amount=amount,
        date=date,
        shop=shop,
        created_by=created_by,
    )
    logger.info("Expense %s recorded: %s %s", expense.id, expense.name, expense.amount)
    return expense


def get_expense_by_id(*, expense_id: UUID) -> Expense:
    try:
        return Expense.objects.select_related('shop', 'created_by').get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")


def list_expenses(*, name: Optional[str] = None, shop_id: Optional[UUID] = None) -> QuerySet:
    queryset = Expense.objects.select_related('shop', 'created_by')
    if name:
        queryset = queryset.filter(name__icontains=name)
    if shop_id:
        queryset = queryset.filter(shop_id=shop_id)
    return queryset


@transaction.atomic
def update_expense(
    *,
    expense_id: UUID,
    name: Optional[str] = None,
    amount: Optional[Decimal] = None,
    date: Optional[date] = None
) -> Expense:
    """
    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        InvalidExpenseError: If amount is negative
    """
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")

    update_fields = ['updated_at']
    if name is not None:
        expense.name = name.strip()
        update_fields.append('name')
    if amount is not None:
        _check_amount(amount)
        expense.amount = amount
        update_fields.append('amount')
    if date is not None:
        expense.date = date
        update_fields.append('date')

    expense.save(update_fields=update_fields)
    return expense


def delete_expense(*, expense_id: UUID) -> None:
    deleted, _ = Expense.objects.filter(id=expense_id).delete()
    if not deleted:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")
    logger.info("Expense %s deleted", expense_id)

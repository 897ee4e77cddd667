import logging
import re
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.payments.models import CardType, PaymentCard, mask_card_number

from .exceptions import PaymentCardNotFoundError, InvalidCardError

logger = logging.getLogger(__name__)

CARD_NUMBER_PATTERN = re.compile(r'^\d{16}$')
CVV_PATTERN = re.compile(r'^\d{3,4}$')


def _validate_expiry(expiry_month: int, expiry_year: int) -> None:
    if not 1 <= expiry_month <= 12:
        raise InvalidCardError("Expiry month must be between 1 and 12")
    if expiry_year < timezone.now().year:
        raise InvalidCardError("Card has expired")


def _clear_defaults(user: User, exclude_id: Optional[UUID] = None) -> None:
    queryset = PaymentCard.objects.filter(user=user, is_default=True)
    if exclude_id:
        queryset = queryset.exclude(id=exclude_id)
    queryset.update(is_default=False)


def _get_own_card(card_id: UUID, user: User, lock: bool = False) -> PaymentCard:
    queryset = PaymentCard.objects.select_for_update() if lock else PaymentCard.objects
    try:
        return queryset.get(id=card_id, user=user)
    except PaymentCard.DoesNotExist:
        raise PaymentCardNotFoundError(f"Card with ID {card_id} not found")


@transaction.atomic
def create_card(
    *,
    user: User,
    cardholder_name: str,
    card_number: str,
    expiry_month: int,
    expiry_year: int,
    cvv: str,
    card_type: str = '',
    is_default: bool = False
) -> PaymentCard:
    """
    Save a card for the user.

    The number is masked before it is stored and the CVV is only
    checked for shape.

    Raises:
        InvalidCardError: If the number, CVV, expiry or type is invalid
    """
    card_number = card_number.replace(' ', '')
    if not CARD_NUMBER_PATTERN.match(card_number):
        raise InvalidCardError("Card number must be 16 digits")
    if not CVV_PATTERN.match(cvv or ''):
        raise InvalidCardError("CVV must be 3 or 4 digits")
    if card_type and card_type not in CardType.values:
        raise InvalidCardError(f"Unknown card type '{card_type}'")
    _validate_expiry(expiry_month, expiry_year)

    if is_default:
        _clear_defaults(user)

    card = PaymentCard.objects.create(
        user=user,
        cardholder_name=cardholder_name.strip(),
        card_number=mask_card_number(card_number),
        expiry_month=expiry_month,
        expiry_year=expiry_year,
        card_type=card_type,
        is_default=is_default,
    )

    logger.info("Payment card %s added for user %s", card.id, user.id)
    return card


def list_cards(*, user: User) -> QuerySet:
    return PaymentCard.objects.filter(user=user)


def get_card_by_id(*, card_id: UUID, user: User) -> PaymentCard:
    """
    Raises:
        PaymentCardNotFoundError: If the card doesn't exist or isn't the user's
    """
    return _get_own_card(card_id, user)


@transaction.atomic
def update_card(
    *,
    card_id: UUID,
    user: User,
    cardholder_name: Optional[str] = None,
    expiry_month: Optional[int] = None,
    expiry_year: Optional[int] = None,
    is_default: Optional[bool] = None
) -> PaymentCard:
    """
    Update the editable fields of a card. The number cannot change.

    Raises:
        PaymentCardNotFoundError: If the card doesn't exist or isn't the user's
        InvalidCardError: If the new expiry is invalid
    """
    card = _get_own_card(card_id, user, lock=True)

    update_fields = ['updated_at']
    if cardholder_name is not None:
        card.cardholder_name = cardholder_name.strip()
        update_fields.append('cardholder_name')
    if expiry_month is not None:
        card.expiry_month = expiry_month
        update_fields.append('expiry_month')
    if expiry_year is not None:
        card.expiry_year = expiry_year
        update_fields.append('expiry_year')
    _validate_expiry(card.expiry_month, card.expiry_year)

    if is_default is not None:
        if is_default:
            _clear_defaults(user, exclude_id=card.id)
        card.is_default = is_default
        update_fields.append('is_default')

    card.save(update_fields=update_fields)
    return card


@transaction.atomic
def delete_card(*, card_id: UUID, user: User) -> None:
    """
    Raises:
        PaymentCardNotFoundError: If the card doesn't exist or isn't the user's
    """
    card = _get_own_card(card_id, user, lock=True)
    card.delete()
    logger.info("Payment card %s removed for user %s", card_id, user.id)

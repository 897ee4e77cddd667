"""
Payments app services layer.
"""

from .exceptions import (
    PaymentsServiceError,
    PaymentCardNotFoundError,
    InvalidCardError,
)

from .card_management import (
    create_card,
    list_cards,
    get_card_by_id,
    update_card,
    delete_card,
)


__all__ = [
    # Exceptions
    'PaymentsServiceError',
    'PaymentCardNotFoundError',
    'InvalidCardError',

    # Card Management
    'create_card',
    'list_cards',
    'get_card_by_id',
    'update_card',
    'delete_card',
]

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
import uuid


class CardType(models.TextChoices):
    VISA = 'Visa', 'Visa'
    MASTERCARD = 'Mastercard', 'Mastercard'
    PAYPAL = 'PayPal', 'PayPal'
    BITCOIN = 'Bitcoin', 'Bitcoin'
    AMAZON = 'Amazon', 'Amazon'
    KLARNA = 'Klarna', 'Klarna'
    PIONEER = 'Pioneer', 'Pioneer'
    ETHEREUM = 'Ethereum', 'Ethereum'


def mask_card_number(card_number):
    """Keep the last four digits, padded to 16 characters with '*'."""
    return card_number[-4:].rjust(16, '*')


class PaymentCard(models.Model):
    """
    A saved payment card.

    Only the masked number is stored; the CVV is accepted for validation
    and never persisted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='payment_cards'
    )
    cardholder_name = models.CharField(max_length=200)
    card_number = models.CharField(max_length=16)
    expiry_month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)]
    )
    expiry_year = models.PositiveSmallIntegerField()
    card_type = models.CharField(max_length=20, choices=CardType.choices, blank=True)
    is_default = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_cards'
        indexes = [
            models.Index(fields=['user', 'is_default'], name='payment_cards_user_def_idx'),
        ]
        ordering = ['-is_default', '-created_at']

    def __str__(self):
        return f"{self.card_type or 'Card'} {self.card_number}"

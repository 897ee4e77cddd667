from django.db import models
from django.utils import timezone
import uuid


class StockLineKind(models.TextChoices):
    PLAIN = 'plain', 'Plain'
    PLATE = 'plate', 'Plate'


class RegularStock(models.Model):
    """
    One daily stock batch entered by shop staff.

    ``created_at`` anchors the batch to a business day in the shop's
    time zone. A shop may enter several batches per day; they are
    consumed oldest first.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey(
        'shops.Shop',
        on_delete=models.CASCADE,
        related_name='regular_stocks'
    )
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='regular_stocks'
    )
    is_default = models.BooleanField(default=False)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'regular_stocks'
        indexes = [
            models.Index(fields=['shop', 'created_at'], name='regular_stocks_shop_idx'),
        ]
        ordering = ['created_at', 'id']

    def __str__(self):
        return f"{self.shop.name} stock @ {self.created_at:%Y-%m-%d %H:%M}"


class StockLine(models.Model):
    """
    One product's allotment within a RegularStock batch.

    Plain lines are consumed through ``consumed_quantity`` only. Plate
    lines additionally count full and half plate servings of the
    product's plate variants while ``is_available`` is set.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    regular_stock = models.ForeignKey(
        RegularStock,
        on_delete=models.CASCADE,
        related_name='lines'
    )
    position = models.PositiveIntegerField(default=0)
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='stock_lines'
    )
    kind = models.CharField(max_length=10, choices=StockLineKind.choices, default=StockLineKind.PLAIN)

    quantity = models.PositiveIntegerField()
    consumed_quantity = models.PositiveIntegerField(default=0)
    full_plate_consumed_quantity = models.PositiveIntegerField(default=0)
    half_plate_consumed_quantity = models.PositiveIntegerField(default=0)
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = 'stock_lines'
        unique_together = [['regular_stock', 'position']]
        indexes = [
            models.Index(fields=['product'], name='stock_lines_product_idx'),
        ]
        ordering = ['regular_stock', 'position']

    def __str__(self):
        return f"{self.product.name}: {self.consumed_quantity}/{self.quantity}"

    @property
    def is_plate(self):
        return self.kind == StockLineKind.PLATE

    @property
    def available_quantity(self):
        return max(0, self.quantity - self.consumed_quantity)

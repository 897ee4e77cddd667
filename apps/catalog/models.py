from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class PlateType(models.TextChoices):
    FULL = 'full', 'Full plate'
    HALF = 'half', 'Half plate'


class Category(models.Model):
    """Product category with free-form sub-category labels."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, unique=True)
    sub_categories = models.JSONField(default=list, blank=True)
    image_url = models.URLField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'categories'
        verbose_name_plural = 'categories'
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(models.Model):
    """
    Sellable catalog item.

    A product with ``parent_product`` set is a plate variant (full or
    half serving) of the parent dish and is served from the parent's
    daily stock line. A product with deal components is a bundle whose
    sale consumes its components. Stockable products keep their own
    ``stock`` counter next to any daily stock.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, db_index=True)
    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name='products'
    )
    sub_category = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    manufacturing_cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    unit = models.CharField(max_length=32, blank=True)
    image_url = models.URLField(max_length=500, blank=True)

    # Plate variants
    parent_product = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='plate_variants'
    )
    plate_type = models.CharField(max_length=10, choices=PlateType.choices, blank=True)

    # Independent stock counter
    is_stockable = models.BooleanField(default=False)
    stock = models.PositiveIntegerField(default=0)

    is_showcase = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['category', 'is_active'], name='products_category_active_idx'),
            models.Index(fields=['parent_product'], name='products_parent_idx'),
            models.Index(fields=['is_showcase', 'is_active'], name='products_showcase_idx'),
            models.Index(fields=['price'], name='products_price_idx'),
        ]
        ordering = ['price', 'name']

    def __str__(self):
        return self.name

    @property
    def is_plate_variant(self):
        return self.parent_product_id is not None

    @property
    def is_deal(self):
        return self.deal_components.exists()


class DealComponent(models.Model):
    """One fixed component of a bundle (deal) product."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    deal = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='deal_components'
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name='included_in_deals'
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    class Meta:
        db_table = 'deal_components'
        unique_together = [['deal', 'product']]
        ordering = ['deal', 'product__name']

    def __str__(self):
        return f"{self.quantity} x {self.product.name} in {self.deal.name}"

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid

from apps.catalog.models import PlateType


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    CARD = 'card', 'Card'
    ONLINE = 'online', 'Online'


ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

EDITABLE_STATUSES = {OrderStatus.PENDING, OrderStatus.PAID}


class Order(models.Model):
    """
    Customer order settled against a shop's daily stock.

    ``stock_settled`` is True while the order's stock consumption is
    applied; ``business_date`` is the shop-local day whose stock it
    draws from.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=32, unique=True, db_index=True, editable=False)

    shop = models.ForeignKey(
        'shops.Shop',
        on_delete=models.PROTECT,
        related_name='orders'
    )
    customer = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='orders'
    )

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True)

    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    total_items = models.PositiveIntegerField(default=0)

    order_date = models.DateTimeField()
    business_date = models.DateField(db_index=True)
    shipping_address = models.TextField(blank=True)

    stock_settled = models.BooleanField(default=False)

    paid_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['shop', 'business_date'], name='orders_shop_bdate_idx'),
            models.Index(fields=['customer', 'created_at'], name='orders_customer_created_idx'),
            models.Index(fields=['status'], name='orders_status_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.order_number} ({self.status})"

    @property
    def is_terminal(self):
        return not ALLOWED_TRANSITIONS[self.status]

    @property
    def is_editable(self):
        return self.status in EDITABLE_STATUSES

    def can_transition_to(self, status):
        return status in ALLOWED_TRANSITIONS[self.status]

    def can_access(self, user):
        """Customers see their own orders, shop staff see the shop's orders."""
        return self.customer_id == user.id or self.shop.has_staff(user)


class OrderItem(models.Model):
    """
    One ordered line.

    Name, price and plate/deal details are copied from the product at
    order time so later catalog edits don't change history.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    position = models.PositiveIntegerField(default=0)

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='order_items'
    )
    name = models.CharField(max_length=200)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    image_url = models.URLField(max_length=500, blank=True)

    is_stockable = models.BooleanField(default=False)
    parent_product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='+'
    )
    plate_type = models.CharField(max_length=10, choices=PlateType.choices, blank=True)
    # [{'product_id', 'name', 'quantity', 'is_stockable'}, ...]
    deal_products = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = 'order_items'
        ordering = ['order', 'position']

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity


class StockAllocation(models.Model):
    """
    Ledger row recording what an order consumed.

    Rows with a stock line record batch consumption; rows without one
    record a stockable product's own stock decrement.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='stock_allocations')
    stock_line = models.ForeignKey(
        'stock.StockLine',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='allocations'
    )
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='+'
    )
    quantity = models.PositiveIntegerField(default=0)
    full_plate_quantity = models.PositiveIntegerField(default=0)
    half_plate_quantity = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'stock_allocations'
        indexes = [
            models.Index(fields=['order'], name='stock_alloc_order_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        source = 'product stock' if self.stock_line_id is None else f"line {self.stock_line_id}"
        return f"{self.order_id}: {self.product_id} from {source}"

from django.conf import settings
from django.db import models
from zoneinfo import ZoneInfo
import uuid


class Shop(models.Model):
    """A tenant shop that owns its own daily stock and orders."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, unique=True)
    address = models.CharField(max_length=500)

    # IANA zone name; empty means SHOP_DEFAULT_TIME_ZONE
    time_zone = models.CharField(max_length=64, blank=True)

    is_active = models.BooleanField(default=True)

    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='owned_shops'
    )
    staff = models.ManyToManyField(
        'accounts.User',
        related_name='shops',
        blank=True
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shops'
        indexes = [
            models.Index(fields=['is_active', 'name'], name='shops_active_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    def get_time_zone(self):
        """Return the zone that delimits this shop's business days."""
        return ZoneInfo(self.time_zone or settings.SHOP_DEFAULT_TIME_ZONE)

    def has_staff(self, user):
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        return self.staff.filter(pk=user.pk).exists()

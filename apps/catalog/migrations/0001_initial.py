# Generated manually for the shop orders catalog app

import uuid
from decimal import Decimal
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, unique=True)),
                ('sub_categories', models.JSONField(blank=True, default=list)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'categories',
                'verbose_name_plural': 'categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=200)),
                ('sub_category', models.CharField(blank=True, max_length=200)),
                ('description', models.TextField(blank=True)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('manufacturing_cost', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('unit', models.CharField(blank=True, max_length=32)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('plate_type', models.CharField(blank=True, choices=[('full', 'Full plate'), ('half', 'Half plate')], max_length=10)),
                ('is_stockable', models.BooleanField(default=False)),
                ('stock', models.PositiveIntegerField(default=0)),
                ('is_showcase', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.category')),
                ('parent_product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='plate_variants', to='catalog.product')),
            ],
            options={
                'db_table': 'products',
                'ordering': ['price', 'name'],
                'indexes': [
                    models.Index(fields=['category', 'is_active'], name='products_category_active_idx'),
                    models.Index(fields=['parent_product'], name='products_parent_idx'),
                    models.Index(fields=['is_showcase', 'is_active'], name='products_showcase_idx'),
                    models.Index(fields=['price'], name='products_price_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='DealComponent',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('deal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='deal_components', to='catalog.product')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='included_in_deals', to='catalog.product')),
            ],
            options={
                'db_table': 'deal_components',
                'ordering': ['deal', 'product__name'],
                'unique_together': {('deal', 'product')},
            },
        ),
    ]

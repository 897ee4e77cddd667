# Generated manually for the shop orders stock app

import uuid
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('catalog', '0001_initial'),
        ('shops', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='RegularStock',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('is_default', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='regular_stocks', to='accounts.user')),
                ('shop', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='regular_stocks', to='shops.shop')),
            ],
            options={
                'db_table': 'regular_stocks',
                'ordering': ['created_at', 'id'],
                'indexes': [
                    models.Index(fields=['shop', 'created_at'], name='regular_stocks_shop_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockLine',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('position', models.PositiveIntegerField(default=0)),
                ('kind', models.CharField(choices=[('plain', 'Plain'), ('plate', 'Plate')], default='plain', max_length=10)),
                ('quantity', models.PositiveIntegerField()),
                ('consumed_quantity', models.PositiveIntegerField(default=0)),
                ('full_plate_consumed_quantity', models.PositiveIntegerField(default=0)),
                ('half_plate_consumed_quantity', models.PositiveIntegerField(default=0)),
                ('is_available', models.BooleanField(default=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_lines', to='catalog.product')),
                ('regular_stock', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='stock.regularstock')),
            ],
            options={
                'db_table': 'stock_lines',
                'ordering': ['regular_stock', 'position'],
                'indexes': [
                    models.Index(fields=['product'], name='stock_lines_product_idx'),
                ],
                'unique_together': {('regular_stock', 'position')},
            },
        ),
    ]

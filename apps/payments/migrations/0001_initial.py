# Generated manually for the shop orders payments app

import uuid
import django.core.validators
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='PaymentCard',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('cardholder_name', models.CharField(max_length=200)),
                ('card_number', models.CharField(max_length=16)),
                ('expiry_month', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('expiry_year', models.PositiveSmallIntegerField()),
                ('card_type', models.CharField(blank=True, choices=[('Visa', 'Visa'), ('Mastercard', 'Mastercard'), ('PayPal', 'PayPal'), ('Bitcoin', 'Bitcoin'), ('Amazon', 'Amazon'), ('Klarna', 'Klarna'), ('Pioneer', 'Pioneer'), ('Ethereum', 'Ethereum')], max_length=20)),
                ('is_default', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='payment_cards', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'payment_cards',
                'ordering': ['-is_default', '-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'is_default'], name='payment_cards_user_def_idx'),
                ],
            },
        ),
    ]

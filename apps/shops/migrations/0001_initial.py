# Generated manually for the shop orders shops app

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Shop',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, unique=True)),
                ('address', models.CharField(max_length=500)),
                ('time_zone', models.CharField(blank=True, max_length=64)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='owned_shops', to='accounts.user')),
                ('staff', models.ManyToManyField(blank=True, related_name='shops', to='accounts.user')),
            ],
            options={
                'db_table': 'shops',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['is_active', 'name'], name='shops_active_name_idx'),
                ],
            },
        ),
    ]

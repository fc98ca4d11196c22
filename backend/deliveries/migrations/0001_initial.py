import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('fleet', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Delivery',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('client', models.CharField(max_length=255)),
                ('departure_location', models.CharField(max_length=255)),
                ('destination', models.CharField(max_length=255)),
                ('goods', models.CharField(max_length=255)),
                ('weight_kg', models.DecimalField(decimal_places=3, max_digits=12)),
                ('price_per_kg', models.DecimalField(decimal_places=4, max_digits=14)),
                ('total_ariary', models.DecimalField(decimal_places=2, max_digits=18)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('vehicle', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='deliveries', to='fleet.vehicle')),
            ],
            options={
                'verbose_name_plural': 'deliveries',
                'ordering': ['created_at'],
                'indexes': [models.Index(fields=['date', 'client'], name='delivery_date_client_idx')],
            },
        ),
    ]

import uuid

from django.db import models


class Delivery(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    client = models.CharField(max_length=255)
    departure_location = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    goods = models.CharField(max_length=255)
    weight_kg = models.DecimalField(max_digits=18, decimal_places=6)
    price_per_kg = models.DecimalField(max_digits=18, decimal_places=6)
    total_ariary = models.DecimalField(max_digits=26, decimal_places=2)
    # weak reference: capacity is only checked when the delivery is created
    vehicle = models.ForeignKey(
        'fleet.Vehicle',
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='deliveries',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['date', 'client'], name='delivery_date_client_idx'),
        ]
        ordering = ['created_at']
        verbose_name_plural = 'deliveries'

    def __str__(self):
        return f"{self.date} {self.client}: {self.departure_location} -> {self.destination}"

import uuid

from django.db import models


class Vehicle(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    brand = models.CharField(max_length=120)
    plate_number = models.CharField(max_length=32, unique=True)
    max_payload_kg = models.DecimalField(max_digits=12, decimal_places=3)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['brand', 'plate_number']

    @property
    def label(self) -> str:
        return f"{self.brand} ({self.plate_number})"

    def __str__(self):
        return self.label

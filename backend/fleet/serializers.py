from __future__ import annotations

from rest_framework import serializers

from .models import Vehicle


class VehicleSerializer(serializers.ModelSerializer):
    """Read shape of a vehicle: { id, brand, plateNumber, maxPayloadKg, createdAt, updatedAt }"""
    plateNumber = serializers.CharField(source="plate_number", read_only=True)
    maxPayloadKg = serializers.DecimalField(
        source="max_payload_kg", max_digits=12, decimal_places=3,
        coerce_to_string=False, read_only=True,
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Vehicle
        fields = ["id", "brand", "plateNumber", "maxPayloadKg", "createdAt", "updatedAt"]
        read_only_fields = fields

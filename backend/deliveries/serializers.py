from __future__ import annotations

from decimal import ROUND_HALF_UP

from rest_framework import serializers

from core.formatting import format_aggregates

from .models import Delivery


class DeliverySerializer(serializers.ModelSerializer):
    """
    Read shape of a delivery:
    { id, date, client, departureLocation, destination, goods,
      weightKg, pricePerKg, totalAriary, vehicleId, createdAt, updatedAt }
    """
    departureLocation = serializers.CharField(source="departure_location", read_only=True)
    weightKg = serializers.DecimalField(source="weight_kg", max_digits=18, decimal_places=6, coerce_to_string=False, read_only=True)
    pricePerKg = serializers.DecimalField(source="price_per_kg", max_digits=18, decimal_places=6, coerce_to_string=False, read_only=True)
    totalAriary = serializers.DecimalField(source="total_ariary", max_digits=26, decimal_places=2, coerce_to_string=False, read_only=True)
    vehicleId = serializers.UUIDField(source="vehicle_id", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Delivery
        fields = [
            "id", "date", "client", "departureLocation", "destination", "goods",
            "weightKg", "pricePerKg", "totalAriary", "vehicleId",
            "createdAt", "updatedAt",
        ]
        read_only_fields = fields


class AggregatesSerializer(serializers.Serializer):
    totalRevenue = serializers.DecimalField(source="total_revenue", max_digits=30, decimal_places=2, coerce_to_string=False)
    totalWeight = serializers.DecimalField(source="total_weight", max_digits=22, decimal_places=6, coerce_to_string=False)
    averagePricePerKg = serializers.DecimalField(
        source="average_price_per_kg", max_digits=30, decimal_places=2, coerce_to_string=False, rounding=ROUND_HALF_UP,
    )
    formatted = serializers.SerializerMethodField()

    def get_formatted(self, obj):
        return format_aggregates(obj.total_revenue, obj.total_weight, obj.average_price_per_kg)


class ViewResultSerializer(serializers.Serializer):
    items = DeliverySerializer(many=True)
    totalMatched = serializers.IntegerField(source="total_matched")
    totalPages = serializers.IntegerField(source="total_pages")
    page = serializers.IntegerField()
    aggregates = AggregatesSerializer()

from __future__ import annotations

from collections.abc import Mapping

from rest_framework import status, views
from rest_framework.response import Response

from .serializers import VehicleSerializer
from .services import registry


class VehicleListCreateView(views.APIView):
    def get(self, request):
        vehicles = registry.list_vehicles()
        return Response(
            {"success": True, "data": VehicleSerializer(vehicles, many=True).data},
            status=status.HTTP_200_OK,
        )

    def post(self, request):
        data = request.data
        if not isinstance(data, Mapping):
            return Response({"success": False, "detail": "Expected a JSON object"}, status=status.HTTP_400_BAD_REQUEST)
        # DuplicatePlateNumber / VehicleFieldError are rendered by the API exception handler
        vehicle = registry.create_vehicle(
            brand=data.get("brand"),
            plate_number=data.get("plateNumber"),
            max_payload_kg=data.get("maxPayloadKg"),
        )
        return Response(
            {"success": True, "data": VehicleSerializer(vehicle).data},
            status=status.HTTP_201_CREATED,
        )


class VehicleDetailView(views.APIView):
    def get(self, request, vehicle_id):
        vehicle = registry.require_vehicle(vehicle_id)
        return Response(VehicleSerializer(vehicle).data, status=status.HTTP_200_OK)

from __future__ import annotations

from collections.abc import Mapping

from rest_framework import status, views
from rest_framework.response import Response

from fleet.services.registry import get_vehicle_by_id

from .dataclasses import ReportFilters, SortSpec
from .serializers import DeliverySerializer, ViewResultSerializer
from .services import store
from .services.computation import parse_delivery_date, validate_and_prepare
from .services.reporting import build_view, direction_or_default, normalize_column


class DeliveryListCreateView(views.APIView):
    def get(self, request):
        deliveries = store.list_deliveries()
        return Response(DeliverySerializer(deliveries, many=True).data, status=status.HTTP_200_OK)

    def post(self, request):
        candidate = request.data
        if not isinstance(candidate, Mapping):
            return Response({"detail": "Expected a JSON object"}, status=status.HTTP_400_BAD_REQUEST)
        # the engine reports a missing vehicle itself, after the field checks
        vehicle = get_vehicle_by_id(candidate.get("vehicleId"))
        prepared = validate_and_prepare(candidate, vehicle)
        delivery = store.save_delivery(prepared)
        return Response(DeliverySerializer(delivery).data, status=status.HTTP_201_CREATED)


class DeliveryDetailView(views.APIView):
    def delete(self, request, delivery_id):
        store.delete_delivery(delivery_id)
        return Response({"detail": "Delivery deleted successfully"}, status=status.HTTP_200_OK)


class DeliveryDashboardView(views.APIView):
    def get(self, request):
        params = request.query_params

        def date_param(name: str):
            raw = (params.get(name) or "").strip()
            if not raw:
                return None
            value = parse_delivery_date(raw)
            if value is None:
                raise ValueError(f"{name} must be in YYYY-MM-DD format")
            return value

        try:
            filters = ReportFilters(
                start_date=date_param("start_date"),
                end_date=date_param("end_date"),
                search_term=params.get("search") or "",
            )
            sort = SortSpec(
                column=normalize_column(params.get("sort")),
                direction=direction_or_default(params.get("direction")),
            )
        except ValueError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            page = int(params.get("page") or 1)
        except ValueError:
            page = 1

        result = build_view(store.list_deliveries(), filters, sort, page)
        return Response(ViewResultSerializer(result).data, status=status.HTTP_200_OK)

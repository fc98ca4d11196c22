from __future__ import annotations

from collections.abc import Mapping

from django.conf import settings
from rest_framework import status, views
from rest_framework.response import Response

from core.money import d, to_positive_decimal
from deliveries.services.computation import apply_suggestion, can_suggest_price, get_field, preview_total

from .dataclasses import PriceSuggestionRequest
from .providers import load as load_provider


class SuggestPriceView(views.APIView):
    """
    Best-effort price per kg suggestion for a delivery form in progress.
    Failures come back as 502 and never block logging the delivery by hand.
    """

    def post(self, request):
        data = request.data
        if not isinstance(data, Mapping):
            return Response({"detail": "Expected a JSON object"}, status=status.HTTP_400_BAD_REQUEST)
        if not can_suggest_price(data):
            return Response(
                {"detail": "Goods, a positive weight, departure location and destination are required for a price suggestion."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        weight = to_positive_decimal(get_field(data, "weightKg"))
        suggestion_request = PriceSuggestionRequest(
            goods=str(get_field(data, "goods")).strip(),
            weight_kg=weight,
            departure_location=str(get_field(data, "departureLocation")).strip(),
            destination=str(get_field(data, "destination")).strip(),
        )
        provider_name = data.get("provider") or getattr(settings, "PRICE_SUGGESTION_PROVIDER", "gemini")
        # AIServiceError is rendered as 502 by the API exception handler
        suggestion = load_provider(provider_name).suggest(suggestion_request)

        price = apply_suggestion(get_field(data, "pricePerKg"), suggestion)
        total = preview_total(weight, price)
        return Response(
            {
                "suggestedPricePerKg": float(suggestion.suggested_price_per_kg) if suggestion.suggested_price_per_kg is not None else None,
                "reasoning": suggestion.reasoning,
                "source": suggestion.source,
                "pricePerKg": float(d(price)) if to_positive_decimal(price) is not None else None,
                "totalAriary": float(total) if total is not None else None,
            },
            status=status.HTTP_200_OK,
        )

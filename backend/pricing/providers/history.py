from __future__ import annotations

import logging

from core.errors import AIServiceError
from core.money import q2
from deliveries.services.reporting import aggregate
from deliveries.services.store import list_deliveries

from ..dataclasses import PriceSuggestion, PriceSuggestionRequest
from . import SuggestionProvider

logger = logging.getLogger(__name__)


class HistoryProvider(SuggestionProvider):
    """
    Offline suggestion from past deliveries: the average price per kg of
    deliveries on the same route, then of deliveries of the same goods,
    then of everything logged so far.
    """

    def __init__(self, deliveries=None):
        self._deliveries = deliveries

    def _history(self):
        if self._deliveries is None:
            self._deliveries = list_deliveries()
        return self._deliveries

    @staticmethod
    def _on_route(request: PriceSuggestionRequest):
        dep = request.departure_location.strip().lower()
        dest = request.destination.strip().lower()

        def match(r) -> bool:
            return r.departure_location.strip().lower() == dep and r.destination.strip().lower() == dest
        return match

    def suggest(self, request: PriceSuggestionRequest) -> PriceSuggestion:
        history = self._history()
        route_label = f"{request.departure_location} -> {request.destination}"
        on_route = self._on_route(request)
        goods = request.goods.strip().lower()
        candidates = (
            (f"deliveries on route {route_label}", [r for r in history if on_route(r)]),
            (f"deliveries of '{request.goods}'", [r for r in history if goods in r.goods.lower()]),
            ("all logged deliveries", list(history)),
        )
        for label, rows in candidates:
            totals = aggregate(rows)
            if totals.total_weight > 0:
                return PriceSuggestion(
                    suggested_price_per_kg=q2(totals.average_price_per_kg),
                    reasoning=(
                        f"Average price per kg across {len(rows)} {label} "
                        f"({totals.total_weight} kg for {totals.total_revenue} Ar)."
                    ),
                    source="history",
                )
        logger.warning("No delivery history to base a price suggestion on")
        raise AIServiceError("No delivery history available to suggest a price")

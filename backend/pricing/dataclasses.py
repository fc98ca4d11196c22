from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PriceSuggestionRequest:
    goods: str
    weight_kg: Decimal
    departure_location: str
    destination: str

    def prompt_vars(self) -> Dict[str, Any]:
        return {
            "goods": self.goods,
            "weight_kg": self.weight_kg,
            "departure_location": self.departure_location,
            "destination": self.destination,
        }


@dataclass(frozen=True)
class PriceSuggestion:
    """Transient; only lives between the request and the user accepting or discarding it."""
    suggested_price_per_kg: Optional[Decimal] = None
    reasoning: Optional[str] = None
    source: str = ""

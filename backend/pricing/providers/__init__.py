from __future__ import annotations

from typing import Optional

from ..dataclasses import PriceSuggestion, PriceSuggestionRequest


class SuggestionProvider:
    def suggest(self, request: PriceSuggestionRequest) -> PriceSuggestion:
        raise NotImplementedError


def load(name: Optional[str]):
    """
    Lazy-load a price suggestion provider by name.
    - 'gemini', 'ai', None -> GeminiProvider
    - 'history', 'local'   -> HistoryProvider (average over past deliveries)
    """
    key = (name or "gemini").strip().lower()
    if key in {"history", "local"}:
        from .history import HistoryProvider  # local import to avoid circulars
        return HistoryProvider()
    # Default to gemini if unknown
    from .gemini import GeminiProvider
    return GeminiProvider()

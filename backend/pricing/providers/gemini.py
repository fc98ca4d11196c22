from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from core.errors import AIServiceError
from core.money import q2, to_positive_decimal

from ..dataclasses import PriceSuggestion, PriceSuggestionRequest
from ..prompts import SUGGESTION_SCHEMA, render_suggest_price
from . import SuggestionProvider

logger = logging.getLogger(__name__)


class GeminiProvider(SuggestionProvider):
    """
    Asks a Gemini model for a price per kg through the generateContent REST
    endpoint, with the answer constrained to SUGGESTION_SCHEMA.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else getattr(settings, "GEMINI_API_KEY", "")
        self.model = model or getattr(settings, "GEMINI_MODEL", "gemini-2.0-flash")
        self.api_url = (api_url or getattr(
            settings, "GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta"
        )).rstrip("/")
        self.timeout = timeout or getattr(settings, "PRICE_SUGGESTION_TIMEOUT", 20)

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.api_url}/models/{self.model}:generateContent"
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        resp = requests.post(url, headers=headers, json=body, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _build_body(self, request: PriceSuggestionRequest) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": render_suggest_price(request)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": SUGGESTION_SCHEMA,
            },
        }

    @staticmethod
    def _parse(payload: Dict[str, Any]) -> PriceSuggestion:
        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
            data = json.loads(text)
        except (KeyError, IndexError, TypeError, json.JSONDecodeError) as e:
            raise AIServiceError(f"Unreadable price suggestion from AI service: {e}")
        if not isinstance(data, dict):
            raise AIServiceError("Unreadable price suggestion from AI service")

        price = to_positive_decimal(data.get("suggestedPricePerKg"))
        if price is None:
            raise AIServiceError("AI service did not return a usable price per kg")
        reasoning = data.get("reasoning")
        return PriceSuggestion(
            suggested_price_per_kg=q2(price),
            reasoning=str(reasoning) if reasoning is not None else None,
            source="gemini",
        )

    def suggest(self, request: PriceSuggestionRequest) -> PriceSuggestion:
        if not self.api_key:
            raise AIServiceError("GEMINI_API_KEY is not configured")
        try:
            payload = self._post(self._build_body(request))
        except (requests.RequestException, ValueError) as e:
            logger.warning("Gemini price suggestion failed: %s", e)
            raise AIServiceError(f"AI price suggestion failed: {e}")
        return self._parse(payload)

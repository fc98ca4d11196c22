import json
from decimal import Decimal
from types import SimpleNamespace
from unittest import mock

import pytest
import requests

from core.errors import AIServiceError
from pricing.dataclasses import PriceSuggestionRequest
from pricing.prompts import render_suggest_price
from pricing.providers import load
from pricing.providers.gemini import GeminiProvider
from pricing.providers.history import HistoryProvider


REQUEST = PriceSuggestionRequest(
    goods="White Rice",
    weight_kg=Decimal("250"),
    departure_location="Antananarivo",
    destination="Toamasina",
)


def _gemini_payload(answer):
    text = answer if isinstance(answer, str) else json.dumps(answer)
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _row(dep, dest, goods, weight, price):
    weight, price = Decimal(weight), Decimal(price)
    return SimpleNamespace(
        departure_location=dep, destination=dest, goods=goods,
        weight_kg=weight, price_per_kg=price, total_ariary=weight * price,
    )


def test_prompt_mentions_every_factor():
    text = render_suggest_price(REQUEST)
    for part in ("White Rice", "250", "Antananarivo", "Toamasina", "Ariary"):
        assert part in text


def test_load_by_name():
    assert isinstance(load("history"), HistoryProvider)
    assert isinstance(load("LOCAL"), HistoryProvider)
    assert isinstance(load("gemini"), GeminiProvider)
    assert isinstance(load(None), GeminiProvider)


class TestGeminiProvider:
    def test_parses_structured_answer(self):
        provider = GeminiProvider(api_key="k", model="gemini-test")
        answer = {"suggestedPricePerKg": 612.345, "reasoning": "Rice on the RN2 runs about 600 Ar/kg."}
        with mock.patch.object(GeminiProvider, "_post", return_value=_gemini_payload(answer)) as post:
            suggestion = provider.suggest(REQUEST)
        assert suggestion.suggested_price_per_kg == Decimal("612.35")
        assert suggestion.reasoning.startswith("Rice on the RN2")
        assert suggestion.source == "gemini"
        body = post.call_args[0][0]
        assert body["generationConfig"]["responseMimeType"] == "application/json"
        assert "White Rice" in body["contents"][0]["parts"][0]["text"]

    def test_posts_to_generate_content(self):
        provider = GeminiProvider(api_key="secret", model="gemini-test", api_url="https://example.test/v1beta/")
        response = mock.Mock()
        response.json.return_value = _gemini_payload({"suggestedPricePerKg": 500, "reasoning": "ok"})
        with mock.patch("pricing.providers.gemini.requests.post", return_value=response) as post:
            provider.suggest(REQUEST)
        url = post.call_args[0][0]
        assert url == "https://example.test/v1beta/models/gemini-test:generateContent"
        assert post.call_args[1]["headers"]["x-goog-api-key"] == "secret"
        response.raise_for_status.assert_called_once()

    def test_missing_api_key(self):
        with pytest.raises(AIServiceError):
            GeminiProvider(api_key="").suggest(REQUEST)

    def test_transport_failure_is_ai_service_error(self):
        provider = GeminiProvider(api_key="k")
        with mock.patch.object(GeminiProvider, "_post", side_effect=requests.ConnectionError("down")):
            with pytest.raises(AIServiceError):
                provider.suggest(REQUEST)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"candidates": []},
            _gemini_payload("not json at all"),
            _gemini_payload(["a", "list"]),
            _gemini_payload({"reasoning": "no price"}),
            _gemini_payload({"suggestedPricePerKg": -4, "reasoning": "negative"}),
            _gemini_payload({"suggestedPricePerKg": "cheap", "reasoning": "words"}),
        ],
    )
    def test_unusable_answers(self, payload):
        provider = GeminiProvider(api_key="k")
        with mock.patch.object(GeminiProvider, "_post", return_value=payload):
            with pytest.raises(AIServiceError):
                provider.suggest(REQUEST)


class TestHistoryProvider:
    def test_prefers_same_route(self):
        history = [
            _row("Antananarivo", "Toamasina", "Cement", "100", "400"),
            _row("antananarivo ", "TOAMASINA", "Sugar", "300", "800"),
            _row("Antsirabe", "Toliara", "White Rice", "1000", "50"),
        ]
        suggestion = HistoryProvider(history).suggest(REQUEST)
        # (40000 + 240000) / 400
        assert suggestion.suggested_price_per_kg == Decimal("700.00")
        assert suggestion.source == "history"
        assert "route" in suggestion.reasoning

    def test_falls_back_to_same_goods(self):
        history = [
            _row("Antsirabe", "Toliara", "white rice (bags)", "10", "90"),
            _row("Antsirabe", "Toliara", "Cement", "10", "10"),
        ]
        suggestion = HistoryProvider(history).suggest(REQUEST)
        assert suggestion.suggested_price_per_kg == Decimal("90.00")
        assert "White Rice" in suggestion.reasoning

    def test_falls_back_to_everything(self):
        history = [_row("A", "B", "Cement", "10", "30"), _row("C", "D", "Sand", "30", "10")]
        assert HistoryProvider(history).suggest(REQUEST).suggested_price_per_kg == Decimal("15.00")

    def test_no_history(self):
        with pytest.raises(AIServiceError):
            HistoryProvider([]).suggest(REQUEST)

"""
Unit tests for the delivery validation and computation engine.

These run without a database: vehicles are plain stand-in objects carrying the
attributes the engine reads.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from core.errors import (
    InvalidDateFormat,
    InvalidPrice,
    InvalidTotal,
    InvalidWeight,
    PayloadExceeded,
    RequiredFieldMissing,
    VehicleNotFound,
)
from pricing.dataclasses import PriceSuggestion

from ..services.computation import (
    apply_suggestion,
    can_suggest_price,
    compute_total,
    parse_delivery_date,
    preview_total,
    validate_and_prepare,
)


def _vehicle(max_payload="1000", brand="Toyota", plate="1234 TBA"):
    return SimpleNamespace(pk="veh-1", brand=brand, plate_number=plate, max_payload_kg=Decimal(max_payload))


def _candidate(**overrides):
    base = {
        "date": "2024-03-15",
        "client": "Société Rizière",
        "departureLocation": "Antananarivo",
        "destination": "Toamasina",
        "goods": "White Rice",
        "weightKg": "250",
        "pricePerKg": "480",
        "vehicleId": "veh-1",
    }
    base.update(overrides)
    return base


class TestValidateAndPrepare:
    """Field rules, their order, and the derived total"""

    def test_valid_candidate_is_prepared(self):
        prepared = validate_and_prepare(_candidate(), _vehicle())
        assert prepared.date == date(2024, 3, 15)
        assert prepared.client == "Société Rizière"
        assert prepared.departure_location == "Antananarivo"
        assert prepared.destination == "Toamasina"
        assert prepared.goods == "White Rice"
        assert prepared.weight_kg == Decimal("250")
        assert prepared.price_per_kg == Decimal("480")
        assert prepared.total_ariary == Decimal("120000.00")
        assert prepared.vehicle_id == "veh-1"

    def test_text_fields_are_trimmed(self):
        prepared = validate_and_prepare(_candidate(client="  Jirama  ", goods="\tCement "), _vehicle())
        assert prepared.client == "Jirama"
        assert prepared.goods == "Cement"

    def test_numbers_accept_numeric_types(self):
        prepared = validate_and_prepare(_candidate(weightKg=12.5, pricePerKg=Decimal("99.99")), _vehicle())
        assert prepared.total_ariary == Decimal("1249.88")

    def test_snake_case_keys_are_accepted(self):
        candidate = {
            "date": "2024-03-15",
            "client": "Jirama",
            "departure_location": "Antsirabe",
            "destination": "Fianarantsoa",
            "goods": "Cement",
            "weight_kg": "10",
            "price_per_kg": "300",
        }
        prepared = validate_and_prepare(candidate, _vehicle())
        assert prepared.departure_location == "Antsirabe"
        assert prepared.total_ariary == Decimal("3000.00")

    @pytest.mark.parametrize("value", ["2024/03/15", "15-03-2024", "2024-3-5", "2024-02-30", "2023-13-01", "", None, "2024-03-15T10:00"])
    def test_bad_dates_are_rejected(self, value):
        with pytest.raises(InvalidDateFormat) as exc:
            validate_and_prepare(_candidate(date=value), _vehicle())
        assert exc.value.field == "date"

    def test_leap_day_is_a_real_date(self):
        prepared = validate_and_prepare(_candidate(date="2024-02-29"), _vehicle())
        assert prepared.date == date(2024, 2, 29)

    @pytest.mark.parametrize("field", ["client", "departureLocation", "destination", "goods"])
    def test_blank_text_fields_are_required(self, field):
        with pytest.raises(RequiredFieldMissing) as exc:
            validate_and_prepare(_candidate(**{field: "   "}), _vehicle())
        assert exc.value.field == field

    @pytest.mark.parametrize("value", ["0", "-5", "abc", "", None, "NaN", "Infinity", True])
    def test_weight_must_be_positive_number(self, value):
        with pytest.raises(InvalidWeight):
            validate_and_prepare(_candidate(weightKg=value), _vehicle())

    @pytest.mark.parametrize("value", ["0", "-1", "ten", "", None, "-Infinity"])
    def test_price_must_be_positive_number(self, value):
        with pytest.raises(InvalidPrice):
            validate_and_prepare(_candidate(pricePerKg=value), _vehicle())

    def test_missing_vehicle(self):
        with pytest.raises(VehicleNotFound) as exc:
            validate_and_prepare(_candidate(), None)
        assert exc.value.field == "vehicleId"

    def test_first_failing_rule_wins(self):
        # bad date, blank client and bad weight: only the date is reported
        with pytest.raises(InvalidDateFormat):
            validate_and_prepare(_candidate(date="nope", client="", weightKg="0"), None)
        # blank client beats bad weight and missing vehicle
        with pytest.raises(RequiredFieldMissing):
            validate_and_prepare(_candidate(client="", weightKg="0"), None)
        # bad price beats missing vehicle
        with pytest.raises(InvalidPrice):
            validate_and_prepare(_candidate(pricePerKg="x"), None)


class TestPayloadCapacity:
    """Weight versus the selected vehicle's maximum payload"""

    def test_weight_at_capacity_is_accepted(self):
        prepared = validate_and_prepare(_candidate(weightKg="1000", pricePerKg="500"), _vehicle("1000"))
        assert prepared.total_ariary == Decimal("500000.00")

    def test_weight_over_capacity_is_rejected(self):
        with pytest.raises(PayloadExceeded) as exc:
            validate_and_prepare(_candidate(weightKg="1001", pricePerKg="500"), _vehicle("1000"))
        err = exc.value
        assert err.field == "weightKg"
        assert err.weight_kg == Decimal("1001")
        assert err.max_payload_kg == Decimal("1000")
        assert err.vehicle_label == "Toyota (1234 TBA)"
        assert "Toyota (1234 TBA)" in err.message

    def test_fraction_over_capacity_is_rejected(self):
        with pytest.raises(PayloadExceeded):
            validate_and_prepare(_candidate(weightKg="1000.001"), _vehicle("1000"))

    def test_sub_gram_excess_is_rejected(self):
        with pytest.raises(PayloadExceeded) as exc:
            validate_and_prepare(_candidate(weightKg="1000.0004"), _vehicle("1000"))
        assert exc.value.weight_kg == Decimal("1000.0004")

    def test_zero_payload_vehicle_accepts_nothing(self):
        with pytest.raises(PayloadExceeded):
            validate_and_prepare(_candidate(weightKg="0.5"), _vehicle("0"))

    def test_payload_error_serialises_details(self):
        with pytest.raises(PayloadExceeded) as exc:
            validate_and_prepare(_candidate(weightKg="1200"), _vehicle("1000"))
        data = exc.value.as_dict()
        assert data["code"] == "payload_exceeded"
        assert data["field"] == "weightKg"
        assert data["maxPayloadKg"] == 1000.0
        assert data["vehicle"] == "Toyota (1234 TBA)"


class TestTotals:
    """The total is always derived from weight x price"""

    @pytest.mark.parametrize(
        "weight, price, expected",
        [
            ("1", "1", "1.00"),
            ("2.5", "3.3333", "8.33"),
            ("0.125", "0.1", "0.01"),
            ("999.999", "1234.5678", "1234566.57"),
            ("10", "0.005", "0.05"),
        ],
    )
    def test_total_is_rounded_product(self, weight, price, expected):
        prepared = validate_and_prepare(_candidate(weightKg=weight, pricePerKg=price), _vehicle("5000"))
        assert prepared.total_ariary == Decimal(expected)
        assert prepared.total_ariary == compute_total(prepared.weight_kg, prepared.price_per_kg)

    def test_supplied_total_is_ignored(self):
        for supplied in ("1", "999999999", "-3", "not a number", None):
            prepared = validate_and_prepare(
                _candidate(weightKg="20", pricePerKg="100", totalAriary=supplied), _vehicle()
            )
            assert prepared.total_ariary == Decimal("2000.00")

    @pytest.mark.parametrize(
        "weight, price, expected",
        [
            ("2.0045", "1", "2.00"),
            ("1.23456", "2.123456", "2.62"),
            ("0.333333", "3", "1.00"),
            ("0.000125", "40", "0.01"),
        ],
    )
    def test_total_uses_weight_and_price_as_entered(self, weight, price, expected):
        prepared = validate_and_prepare(_candidate(weightKg=weight, pricePerKg=price), _vehicle())
        assert prepared.weight_kg == Decimal(weight)
        assert prepared.price_per_kg == Decimal(price)
        assert prepared.total_ariary == Decimal(expected)

    def test_tiny_positive_weight_is_accepted(self):
        prepared = validate_and_prepare(_candidate(weightKg="0.0004", pricePerKg="100000"), _vehicle())
        assert prepared.weight_kg == Decimal("0.0004")
        assert prepared.total_ariary == Decimal("40.00")

    def test_total_rounding_to_zero_is_rejected(self):
        with pytest.raises(InvalidTotal) as exc:
            validate_and_prepare(_candidate(weightKg="0.001", pricePerKg="0.001"), _vehicle())
        assert exc.value.field == "totalAriary"
        assert exc.value.as_dict()["code"] == "invalid_total"

    def test_total_is_always_positive(self):
        for weight, price in [("0.01", "0.5"), ("0.005", "1"), ("1", "0.005"), ("999", "0.01")]:
            prepared = validate_and_prepare(_candidate(weightKg=weight, pricePerKg=price), _vehicle())
            assert prepared.total_ariary > 0

    @pytest.mark.parametrize("weight", ["1.0000001", "1234567890123"])
    def test_weight_beyond_column_precision_is_rejected(self, weight):
        with pytest.raises(InvalidWeight) as exc:
            validate_and_prepare(_candidate(weightKg=weight), _vehicle("10000000000000"))
        assert "6 after the decimal point" in exc.value.message

    def test_price_beyond_column_precision_is_rejected(self):
        with pytest.raises(InvalidPrice):
            validate_and_prepare(_candidate(pricePerKg="0.0000001"), _vehicle())

    def test_candidate_is_not_mutated(self):
        candidate = _candidate(totalAriary="5")
        snapshot = dict(candidate)
        validate_and_prepare(candidate, _vehicle())
        assert candidate == snapshot


class TestSuggestionHelpers:
    def test_apply_suggestion_overwrites_price(self):
        suggestion = PriceSuggestion(suggested_price_per_kg=Decimal("650"), reasoning="rice is cheap")
        assert apply_suggestion("500", suggestion) == Decimal("650")

    def test_apply_suggestion_without_price_keeps_current(self):
        assert apply_suggestion("500", PriceSuggestion(reasoning="no idea")) == "500"
        assert apply_suggestion("500", None) == "500"

    def test_apply_suggestion_accepts_wire_mapping(self):
        assert apply_suggestion(None, {"suggestedPricePerKg": 720, "reasoning": "x"}) == 720

    def test_applied_price_recomputes_total(self):
        price = apply_suggestion("500", PriceSuggestion(suggested_price_per_kg=Decimal("650")))
        assert preview_total("100", price) == Decimal("65000.00")

    def test_preview_total_needs_both_numbers(self):
        assert preview_total("", "500") is None
        assert preview_total("10", "abc") is None
        assert preview_total("10", "0") is None
        assert preview_total("10", "12.5") == Decimal("125.00")

    def test_can_suggest_price(self):
        assert can_suggest_price(_candidate()) is True
        assert can_suggest_price(_candidate(goods=" ")) is False
        assert can_suggest_price(_candidate(weightKg="0")) is False
        assert can_suggest_price(_candidate(weightKg="heavy")) is False
        assert can_suggest_price(_candidate(departureLocation="")) is False
        assert can_suggest_price(_candidate(destination=None)) is False
        # client and price are not needed for a suggestion
        assert can_suggest_price(_candidate(client="", pricePerKg="")) is True


def test_parse_delivery_date():
    assert parse_delivery_date("2024-01-31") == date(2024, 1, 31)
    assert parse_delivery_date(date(2024, 1, 31)) == date(2024, 1, 31)
    assert parse_delivery_date(" 2024-01-31 ") == date(2024, 1, 31)
    assert parse_delivery_date("2024-1-31") is None
    assert parse_delivery_date(20240131) is None

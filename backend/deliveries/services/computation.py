"""
Delivery validation and computation engine.

Checks a candidate delivery (raw form input) against the field rules and the
selected vehicle's payload capacity, then derives the total charge. The total
is always recomputed here from weight and price; whatever total the caller
sends along is ignored.

Rules are checked in a fixed order and the first failure is raised:

    1. date          YYYY-MM-DD and a real calendar date
    2. client, departureLocation, destination, goods   non-empty after trim
    3. weightKg      finite number > 0 that the weight column holds exactly
    4. pricePerKg    finite number > 0 that the price column holds exactly
    5. vehicleId     resolved to a vehicle by the caller
    6. weightKg      <= vehicle.max_payload_kg (boundary allowed)
    7. totalAriary   weight x price rounded to 2 places must stay > 0

Weight and price are never rounded: the payload check and the total use the
values as entered, and those are the values stored.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from core.errors import (
    InvalidDateFormat,
    InvalidPrice,
    InvalidTotal,
    InvalidWeight,
    PayloadExceeded,
    RequiredFieldMissing,
    VehicleNotFound,
)
from core.money import ZERO, d, fits_digits, q2, to_positive_decimal

from ..dataclasses import PreparedDelivery

# column sizes of Delivery.weight_kg and Delivery.price_per_kg
WEIGHT_DIGITS, WEIGHT_PLACES = 18, 6
PRICE_DIGITS, PRICE_PLACES = 18, 6

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

REQUIRED_TEXT_FIELDS = ("client", "departureLocation", "destination", "goods")

# wire name -> model attribute name
SNAKE_NAMES = {
    "date": "date",
    "client": "client",
    "departureLocation": "departure_location",
    "destination": "destination",
    "goods": "goods",
    "weightKg": "weight_kg",
    "pricePerKg": "price_per_kg",
    "totalAriary": "total_ariary",
    "vehicleId": "vehicle_id",
}


def get_field(candidate: Mapping[str, Any], name: str) -> Any:
    """Read a candidate field by its wire name, falling back to the snake_case name."""
    if name in candidate:
        return candidate.get(name)
    return candidate.get(SNAKE_NAMES.get(name, name))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_delivery_date(value: Any) -> Optional[date]:
    """Parse a strict YYYY-MM-DD date; None when the value is not one."""
    if isinstance(value, datetime):
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_RE.fullmatch(value.strip()):
        return None
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def compute_total(weight_kg, price_per_kg) -> Decimal:
    """total = weight x price, rounded half-up to 2 decimal places."""
    return q2(d(weight_kg) * d(price_per_kg))


def validate_and_prepare(candidate: Mapping[str, Any], vehicle) -> PreparedDelivery:
    """
    Validate a candidate delivery against the selected vehicle and return it
    ready for persistence.

    Args:
        candidate: raw field values keyed by wire name (camelCase); snake_case
            keys are accepted too. Numbers may be numeric strings.
        vehicle: the vehicle referenced by candidate["vehicleId"], already looked
            up by the caller, or None when the lookup found nothing.

    Raises:
        FieldValidationError: the first rule that fails (see module docstring)
    """
    delivery_date = parse_delivery_date(get_field(candidate, "date"))
    if delivery_date is None:
        raise InvalidDateFormat(get_field(candidate, "date"))

    texts = {}
    for name in REQUIRED_TEXT_FIELDS:
        texts[name] = _text(get_field(candidate, name))
        if not texts[name]:
            raise RequiredFieldMissing(name)

    weight = to_positive_decimal(get_field(candidate, "weightKg"))
    if weight is None:
        raise InvalidWeight()
    if not fits_digits(weight, WEIGHT_DIGITS, WEIGHT_PLACES):
        raise InvalidWeight(
            f"Weight must have at most {WEIGHT_DIGITS - WEIGHT_PLACES} digits before and {WEIGHT_PLACES} after the decimal point."
        )

    price = to_positive_decimal(get_field(candidate, "pricePerKg"))
    if price is None:
        raise InvalidPrice()
    if not fits_digits(price, PRICE_DIGITS, PRICE_PLACES):
        raise InvalidPrice(
            f"Price per kg must have at most {PRICE_DIGITS - PRICE_PLACES} digits before and {PRICE_PLACES} after the decimal point."
        )

    if vehicle is None:
        raise VehicleNotFound(get_field(candidate, "vehicleId"))

    max_payload = d(vehicle.max_payload_kg)
    if weight > max_payload:
        raise PayloadExceeded(weight, max_payload, f"{vehicle.brand} ({vehicle.plate_number})")

    total = compute_total(weight, price)
    if total <= ZERO:
        raise InvalidTotal()

    return PreparedDelivery(
        date=delivery_date,
        client=texts["client"],
        departure_location=texts["departureLocation"],
        destination=texts["destination"],
        goods=texts["goods"],
        weight_kg=weight,
        price_per_kg=price,
        total_ariary=total,
        vehicle_id=vehicle.pk,
    )


def preview_total(weight_kg, price_per_kg) -> Optional[Decimal]:
    """Live total for a form in progress; None until both inputs are positive numbers."""
    weight = to_positive_decimal(weight_kg)
    price = to_positive_decimal(price_per_kg)
    if weight is None or price is None:
        return None
    return compute_total(weight, price)


def apply_suggestion(current_price, suggestion):
    """
    Return the price per kg the form should show once a suggestion arrives.
    A suggestion without a price leaves the current price alone. Nothing is
    submitted; the user still confirms the form.
    """
    if suggestion is None:
        return current_price
    if isinstance(suggestion, Mapping):
        suggested = suggestion.get("suggestedPricePerKg", suggestion.get("suggested_price_per_kg"))
    else:
        suggested = getattr(suggestion, "suggested_price_per_kg", None)
    if suggested is None:
        return current_price
    return suggested


def can_suggest_price(candidate: Mapping[str, Any]) -> bool:
    """A price suggestion needs goods, a positive weight and both route ends."""
    return bool(
        _text(get_field(candidate, "goods"))
        and to_positive_decimal(get_field(candidate, "weightKg")) is not None
        and _text(get_field(candidate, "departureLocation"))
        and _text(get_field(candidate, "destination"))
    )

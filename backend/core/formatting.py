# core/formatting.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from .money import d, q2

CURRENCY_SUFFIX = "Ar"


def _group(integer_part: str) -> str:
    # de-DE grouping: '.' every three digits
    out = []
    while len(integer_part) > 3:
        out.insert(0, integer_part[-3:])
        integer_part = integer_part[:-3]
    out.insert(0, integer_part)
    return ".".join(out)


def format_number(amount, places: int = 0) -> str:
    """
    Format a number the way the dashboard cards do (German locale grouping):
      1234567   -> '1.234.567'
      12.5, 2   -> '12,50'
    """
    value = d(amount)
    sign = "-" if value < 0 else ""
    value = abs(value)
    quantum = Decimal(1).scaleb(-places) if places else Decimal(1)
    text = str(d(value).quantize(quantum, rounding=ROUND_HALF_UP))
    if "." in text:
        integer_part, frac = text.split(".", 1)
    else:
        integer_part, frac = text, ""
    grouped = _group(integer_part)
    return f"{sign}{grouped},{frac}" if frac else f"{sign}{grouped}"


def format_ariary(amount, places: int = 0) -> str:
    return f"{format_number(amount, places)} {CURRENCY_SUFFIX}"


def format_weight(weight_kg) -> str:
    value = d(weight_kg)
    # show decimals only when they carry information
    places = 0 if value == value.to_integral_value() else 6
    text = format_number(value, places)
    if places:
        text = text.rstrip("0").rstrip(",")
    return f"{text} kg"


def format_aggregates(total_revenue, total_weight, average_price_per_kg) -> dict:
    return {
        "totalRevenue": format_ariary(total_revenue),
        "totalWeight": format_weight(total_weight),
        "averagePricePerKg": format_ariary(q2(average_price_per_kg), places=2),
    }

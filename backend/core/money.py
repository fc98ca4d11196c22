from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

TWOPLACES = Decimal("0.01")
THREEPLACES = Decimal("0.001")
ZERO = Decimal("0")


def d(val) -> Decimal:
    """Coerce incoming values to Decimal safely."""
    if isinstance(val, Decimal):
        return val
    return Decimal(str(val))


def _quant(x, q: Decimal) -> Decimal:
    return d(x).quantize(q, rounding=ROUND_HALF_UP)


def q2(x) -> Decimal:
    return _quant(x, TWOPLACES)


def q3(x) -> Decimal:
    return _quant(x, THREEPLACES)


def to_positive_decimal(val) -> Optional[Decimal]:
    """
    Coerce a user-entered number (int, float, Decimal or numeric string) to a
    finite Decimal strictly greater than zero. Returns None when that is not
    possible instead of raising.
    """
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, str):
        val = val.strip()
        if not val:
            return None
    try:
        num = d(val)
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not num.is_finite() or num <= ZERO:
        return None
    return num


def fits_digits(val: Decimal, max_digits: int, decimal_places: int) -> bool:
    """
    True when val can be stored in a DecimalField(max_digits, decimal_places)
    without rounding.
    """
    _, digits, exponent = val.normalize().as_tuple()
    places = max(-exponent, 0)
    integer_digits = max(len(digits) + exponent, 0)
    return places <= decimal_places and integer_digits <= max_digits - decimal_places

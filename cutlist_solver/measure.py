# cutlist_solver/measure.py
# Exact measurement and pricing model.
# - lengths are fractions.Fraction (base unit, meters by convention)
# - prices are decimal.Decimal
#
# Floats are accepted for convenience but always go through str() first,
# so 1.5 stays 3/2 and 0.1 becomes 1/10 instead of a binary approximation.

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Union

LengthLike = Union[int, float, str, Decimal, Fraction]
PriceLike = Union[int, float, str, Decimal]

ZERO_LENGTH = Fraction(0)
ZERO_PRICE = Decimal(0)


def _parse_fraction_text(text: str) -> Fraction:
    """
    Parse '3', '1.5', '3/8', '3 1/2' or '-1/4' into a Fraction.
    """
    s = text.strip()
    if not s:
        raise ValueError("Empty length value")

    bits = s.split()
    if len(bits) == 1:
        return Fraction(bits[0])
    if len(bits) == 2 and "/" in bits[1] and "/" not in bits[0]:
        whole = Fraction(bits[0])
        frac = Fraction(bits[1])
        if frac < 0:
            raise ValueError(f"Invalid mixed number: {text!r}")
        sign = -1 if bits[0].startswith("-") else 1
        return whole + sign * frac
    raise ValueError(f"Invalid length value: {text!r}")


def to_length(value: LengthLike) -> Fraction:
    """Coerce a user/JSON value into an exact Fraction length."""
    if isinstance(value, bool):
        raise TypeError("Length cannot be a bool")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Length must be finite, got {value}")
        return Fraction(value)
    if isinstance(value, float):
        return _parse_fraction_text(str(value))
    if isinstance(value, str):
        try:
            return _parse_fraction_text(value)
        except ZeroDivisionError as e:
            raise ValueError(f"Invalid length value: {value!r}") from e
    raise TypeError(f"Unsupported length type: {type(value).__name__}")


def to_price(value: PriceLike) -> Decimal:
    """Coerce a user/JSON value into an exact Decimal price."""
    if isinstance(value, bool):
        raise TypeError("Price cannot be a bool")
    if isinstance(value, Decimal):
        out = value
    elif isinstance(value, int):
        out = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            out = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid price value: {value!r}") from e
    else:
        raise TypeError(f"Unsupported price type: {type(value).__name__}")

    if not out.is_finite():
        raise ValueError(f"Price must be finite, got {value!r}")
    return out


def price_scale(prices) -> int:
    """
    Smallest power of ten that turns every given price into an integer.
    Used by integer solvers (CP-SAT) that cannot take Decimal coefficients.
    """
    digits = 0
    for p in prices:
        exp = p.normalize().as_tuple().exponent
        if isinstance(exp, int) and exp < 0:
            digits = max(digits, -exp)
    return 10 ** digits

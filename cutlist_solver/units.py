# cutlist_solver/units.py
# Length units and human-readable formatting.
# The engine works in one base unit (meters); this module converts user-facing
# sizes (feet + inches, inches, centimeters) to and from it, exactly.
#
# Formats:
#   FractionFormat.decimal(3)  -> "2.438"
#   FractionFormat.mixed()     -> "7 1/2"
#   FractionFormat.fraction()  -> "15/2"

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from fractions import Fraction
from typing import Tuple

from .measure import LengthLike, to_length
from .types import UNLIMITED

# 1 ft = 0.3048 m exactly
FEET_TO_METERS = Fraction(3048, 10000)


class LengthUnit(Enum):
    FEET_INCHES = "feet_inches"
    INCHES = "inches"
    METERS = "meters"
    CENTIMETERS = "centimeters"

    @property
    def has_minor(self) -> bool:
        return self is LengthUnit.FEET_INCHES

    @property
    def major_symbol(self) -> str:
        return {
            LengthUnit.FEET_INCHES: "ft",
            LengthUnit.INCHES: "in",
            LengthUnit.METERS: "m",
            LengthUnit.CENTIMETERS: "cm",
        }[self]

    @property
    def minor_symbol(self) -> str:
        return "in" if self.has_minor else ""


def to_meters(major: LengthLike, minor: LengthLike = 0, unit: LengthUnit = LengthUnit.METERS) -> Fraction:
    """Convert a (major, minor) size, e.g. (8 ft, 3 1/2 in), into meters."""
    major_f = to_length(major)
    minor_f = to_length(minor)
    if unit is LengthUnit.FEET_INCHES:
        return FEET_TO_METERS * (major_f + minor_f / 12)
    if minor_f != 0:
        raise ValueError(f"Unit {unit.value} has no minor component (got {minor})")
    if unit is LengthUnit.INCHES:
        return FEET_TO_METERS * (major_f / 12)
    if unit is LengthUnit.CENTIMETERS:
        return major_f / 100
    return major_f


def from_meters(meters: Fraction, unit: LengthUnit) -> Tuple[Fraction, Fraction]:
    """Inverse of to_meters: meters -> (major, minor) in `unit`."""
    if unit is LengthUnit.FEET_INCHES:
        feet = meters / FEET_TO_METERS
        whole = Fraction(math.floor(feet))
        return whole, (feet - whole) * 12
    if unit is LengthUnit.INCHES:
        return meters / FEET_TO_METERS * 12, Fraction(0)
    if unit is LengthUnit.CENTIMETERS:
        return meters * 100, Fraction(0)
    return meters, Fraction(0)


@dataclass(frozen=True)
class FractionFormat:
    style: str = "decimal"  # "decimal", "mixed" or "fraction"
    precision: int = 3      # digits after the point, decimal style only

    def __post_init__(self):
        if self.style not in ("decimal", "mixed", "fraction"):
            raise ValueError(f"Unknown fraction style {self.style!r}")
        if self.precision < 0:
            raise ValueError("precision must be >= 0")

    @classmethod
    def decimal(cls, precision: int = 3) -> "FractionFormat":
        return cls("decimal", precision)

    @classmethod
    def mixed(cls) -> "FractionFormat":
        return cls("mixed")

    @classmethod
    def fraction(cls) -> "FractionFormat":
        return cls("fraction")

    def format(self, value: Fraction) -> str:
        if self.style == "mixed":
            return _format_mixed(value)
        if self.style == "fraction":
            return str(value)
        return _format_decimal(value, self.precision)


def _format_decimal(value: Fraction, precision: int) -> str:
    whole_digits = len(str(abs(value.numerator) // value.denominator))
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, whole_digits + precision + 2)
        d = Decimal(value.numerator) / Decimal(value.denominator)
        q = d.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    text = f"{q:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def _format_mixed(value: Fraction) -> str:
    sign = "-" if value < 0 else ""
    v = abs(value)
    whole = v.numerator // v.denominator
    rest = v - whole
    if whole == 0 and rest == 0:
        return "0"
    if whole == 0:
        return f"{sign}{rest}"
    if rest == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole} {rest}"


def format_length(
    meters: Fraction,
    unit: LengthUnit = LengthUnit.METERS,
    fmt: FractionFormat = FractionFormat(),
) -> str:
    """Render a base-unit length, e.g. '8 ft, 3 1/2 in' or '2.4 m'."""
    major, minor = from_meters(meters, unit)
    out = f"{fmt.format(major)} {unit.major_symbol}"
    if unit.has_minor:
        out += f", {fmt.format(minor)} {unit.minor_symbol}"
    return out


def format_price(price: Decimal, precision: int = 2) -> str:
    if price == 0:
        return "Free"
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, price.adjusted() + precision + 2)
        q = price.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    return f"${q:f}"


def format_quantity(quantity: int) -> str:
    return "Unlimited" if quantity == UNLIMITED else str(quantity)

# cutlist_solver/config.py
# Centralized defaults and configuration helpers.
# Keeps "magic numbers" (kerf, solver limits, display precision) in one place.

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Optional

from .measure import to_length, to_price
from .types import UNLIMITED
from .units import FractionFormat, LengthUnit


@dataclass(frozen=True)
class Defaults:
    # Kerf in base units (meters); 0 = ideal blade
    default_blade_width: Fraction = Fraction(0)

    # Supply availability when a job does not specify one
    default_max_quantity: int = UNLIMITED

    # Unit used to read job files and print results
    default_unit: LengthUnit = LengthUnit.METERS

    # Exact pattern solver budgets
    pattern_time_limit_s: float = 10.0
    max_patterns: int = 20000
    num_workers: int = 8

    # Display
    price_precision: int = 2
    length_precision: int = 3


DEFAULTS = Defaults()


def default_fraction_format(precision: Optional[int] = None) -> FractionFormat:
    return FractionFormat.decimal(DEFAULTS.length_precision if precision is None else precision)


def parse_unit_text(unit_text: str) -> LengthUnit:
    """
    Parse 'm', 'meters', 'cm', 'in', 'inches', 'ft', 'feet_inches' -> LengthUnit
    """
    s = unit_text.strip().lower().replace("-", "_").replace(" ", "_")
    aliases = {
        "m": LengthUnit.METERS,
        "meter": LengthUnit.METERS,
        "meters": LengthUnit.METERS,
        "cm": LengthUnit.CENTIMETERS,
        "centimeter": LengthUnit.CENTIMETERS,
        "centimeters": LengthUnit.CENTIMETERS,
        "in": LengthUnit.INCHES,
        "inch": LengthUnit.INCHES,
        "inches": LengthUnit.INCHES,
        "ft": LengthUnit.FEET_INCHES,
        "feet": LengthUnit.FEET_INCHES,
        "ft_in": LengthUnit.FEET_INCHES,
        "feet_inches": LengthUnit.FEET_INCHES,
    }
    if s not in aliases:
        raise ValueError(f"Unknown length unit {unit_text!r} (use m, cm, in or ft)")
    return aliases[s]


def parse_length_text(length_text: str) -> Fraction:
    """
    Parse '2.4', '3/8' or '7 1/2' -> Fraction (no unit conversion)
    """
    return to_length(length_text)


def parse_price_text(price_text: str) -> Decimal:
    """
    Parse '3.50' or '$3.50' -> Decimal('3.50'); 'free' -> 0
    """
    s = price_text.strip().lower().lstrip("$").replace(",", "")
    if s in ("", "free"):
        return Decimal(0)
    return to_price(s)


def parse_max_quantity_text(text: str) -> int:
    """
    Parse '5' -> 5; '', 'unlimited', '-1' -> UNLIMITED
    """
    s = text.strip().lower()
    if s in ("", "unlimited", "inf", "-1"):
        return UNLIMITED
    n = int(s)
    if n < 0:
        raise ValueError(f"max_quantity must be >= 0 or unlimited, got {text!r}")
    return n

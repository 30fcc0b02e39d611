# cutlist_solver/io_csv.py
# CSV import/export helpers:
# - read supplies / parts from flat CSV files (one `material` column)
# - export cut lists (one row per pattern) for the workshop
# - export the shopping list for the store
#
# Lengths in the files are in the chosen LengthUnit; the feet_inches unit uses
# an extra `minor` column for the inches.

from __future__ import annotations

import csv
from fractions import Fraction
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .config import DEFAULTS, parse_max_quantity_text, parse_price_text
from .costing import shopping_list
from .metrics import offcut_length
from .types import Part, Problem, Solution, Supply, build_problem
from .units import FractionFormat, LengthUnit, format_length, format_price, to_meters


def _row_length(row: Dict[str, str], unit: LengthUnit) -> Fraction:
    minor = (row.get("minor") or "").strip() or "0"
    return to_meters(row["length"].strip(), minor, unit)


def read_supplies_csv(path: str | Path, unit: LengthUnit = LengthUnit.METERS) -> List[Tuple[str, Supply]]:
    """Columns: material, name, length[, minor], price, max_quantity"""
    rows: List[Tuple[str, Supply]] = []
    with Path(path).open("r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            rows.append(
                (
                    row["material"].strip(),
                    Supply(
                        name=row["name"].strip(),
                        length=_row_length(row, unit),
                        price=parse_price_text(row.get("price") or ""),
                        max_quantity=parse_max_quantity_text(row.get("max_quantity") or ""),
                    ),
                )
            )
    return rows


def read_parts_csv(path: str | Path, unit: LengthUnit = LengthUnit.METERS) -> List[Tuple[str, Part]]:
    """Columns: material, name, length[, minor], quantity"""
    rows: List[Tuple[str, Part]] = []
    with Path(path).open("r", newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            rows.append(
                (
                    row["material"].strip(),
                    Part(
                        name=row["name"].strip(),
                        length=_row_length(row, unit),
                        quantity=int((row.get("quantity") or "1").strip()),
                    ),
                )
            )
    return rows


def load_problem_csv(
    supplies_path: str | Path,
    parts_path: str | Path,
    unit: LengthUnit = LengthUnit.METERS,
    blade_width=None,
) -> Problem:
    """Build a Problem from a supplies CSV and a parts CSV (blade_width in meters)."""
    return build_problem(
        read_supplies_csv(supplies_path, unit),
        read_parts_csv(parts_path, unit),
        DEFAULTS.default_blade_width if blade_width is None else blade_width,
    )


def export_cut_lists_csv(
    solution: Solution,
    path: str | Path,
    unit: LengthUnit = LengthUnit.METERS,
    fmt: Optional[FractionFormat] = None,
) -> None:
    """
    One row per cut list: which supply to take, how many times, and the parts
    to cut from each piece (in cutting order, separated by ' | ').
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fmt = fmt or FractionFormat.decimal(DEFAULTS.length_precision)

    fieldnames = ["material", "cut_list", "supply", "supply_length", "quantity", "parts", "offcut"]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for material, sub in solution.items():
            for k, cl in enumerate(sub.cut_lists):
                supply = sub.supply_of(cl)
                w.writerow(
                    {
                        "material": material.name,
                        "cut_list": k + 1,
                        "supply": supply.name,
                        "supply_length": format_length(supply.length, unit, fmt),
                        "quantity": cl.quantity,
                        "parts": " | ".join(f"{p.name} ({format_length(p.length, unit, fmt)})" for p in sub.parts_of(cl)),
                        "offcut": format_length(offcut_length(sub, cl), unit, fmt),
                    }
                )


def export_shopping_list_csv(solution: Solution, path: str | Path, include_free: bool = False) -> None:
    """
    One row per supply that has to be bought (or taken from stock with include_free).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["material", "supply", "count", "unit_price", "subtotal"]

    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for item in shopping_list(solution, include_free=include_free):
            w.writerow(
                {
                    "material": item.material.name,
                    "supply": item.supply.name,
                    "count": item.count,
                    "unit_price": format_price(item.supply.price, DEFAULTS.price_precision),
                    "subtotal": format_price(item.subtotal, DEFAULTS.price_precision),
                }
            )


def export_all(
    solution: Solution,
    out_dir: str | Path,
    prefix: str = "cutlist",
    unit: LengthUnit = LengthUnit.METERS,
    fmt: Optional[FractionFormat] = None,
) -> List[Path]:
    """
    Export cut lists and shopping list into out_dir; returns written paths.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    cut_path = out_dir / f"{prefix}_cut_lists.csv"
    shop_path = out_dir / f"{prefix}_shopping_list.csv"
    export_cut_lists_csv(solution, cut_path, unit, fmt)
    export_shopping_list_csv(solution, shop_path)
    return [cut_path, shop_path]

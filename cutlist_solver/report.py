# cutlist_solver/report.py
# Text rendering of a solution:
# - per material: "cut this pattern xN" lines with parts and offcut
# - consumption and cost per supply
# - totals (pieces, price, utilization)
#
# Everything is returned as a string first so tests and the CLI share it.

from __future__ import annotations

from typing import List, Optional

from .config import DEFAULTS, default_fraction_format
from .costing import compute_solution_cost, sub_solution_consumption
from .metrics import compute_solution_metrics, compute_sub_solution_metrics, offcut_length
from .types import CutList, Material, Solution, SubSolution
from .units import FractionFormat, LengthUnit, format_length, format_price, format_quantity


def format_cut_list(
    sub: SubSolution,
    cut_list: CutList,
    unit: LengthUnit = LengthUnit.METERS,
    fmt: Optional[FractionFormat] = None,
) -> str:
    fmt = fmt or default_fraction_format()
    supply = sub.supply_of(cut_list)
    parts = ", ".join(f"{p.name} [{format_length(p.length, unit, fmt)}]" for p in sub.parts_of(cut_list))
    return (
        f"{cut_list.quantity:3d} x {supply.name} ({format_length(supply.length, unit, fmt)}): "
        f"{parts or '-'}  | offcut {format_length(offcut_length(sub, cut_list), unit, fmt)}"
    )


def format_sub_solution(
    material: Material,
    sub: SubSolution,
    unit: LengthUnit = LengthUnit.METERS,
    fmt: Optional[FractionFormat] = None,
) -> List[str]:
    fmt = fmt or default_fraction_format()
    lines = [f"=== {material.name} ==="]
    if sub.blade_width:
        lines.append(f"Blade width: {format_length(sub.blade_width, unit, fmt)}")

    lines.append("-- Cut lists --")
    for cl in sub.cut_lists:
        lines.append(format_cut_list(sub, cl, unit, fmt))
    if not sub.cut_lists:
        lines.append("(nothing to cut)")

    lines.append("-- Supplies used --")
    for supply, used in zip(sub.supplies, sub_solution_consumption(sub)):
        if used == 0:
            continue
        lines.append(
            f"{supply.name}: {used} of {format_quantity(supply.max_quantity)} "
            f"@ {format_price(supply.price, DEFAULTS.price_precision)}"
        )

    m = compute_sub_solution_metrics(sub)
    lines.append(
        f"Offcut: {format_length(m.offcut_length, unit, fmt)}  "
        f"Kerf: {format_length(m.kerf_length, unit, fmt)}  "
        f"Utilization: {m.utilization:.1%}"
    )
    return lines


def format_solution(
    sol: Solution,
    unit: LengthUnit = LengthUnit.METERS,
    fmt: Optional[FractionFormat] = None,
) -> str:
    fmt = fmt or default_fraction_format()
    lines: List[str] = [f"Materials: {len(sol)}"]
    for material, sub in sol.items():
        lines.extend(format_sub_solution(material, sub, unit, fmt))

    cost = compute_solution_cost(sol)
    totals = compute_solution_metrics(sol)
    lines.append("=== Totals ===")
    lines.append(f"Pieces: {cost.total_pieces} ({cost.total_pieces_purchased} purchased)")
    lines.append(f"Price: {format_price(cost.total_cost, DEFAULTS.price_precision)}")
    lines.append(f"Offcut: {format_length(totals.offcut_length, unit, fmt)}")
    lines.append(f"Utilization: {totals.utilization:.1%}")
    return "\n".join(lines)


def print_solution(
    sol: Solution,
    unit: LengthUnit = LengthUnit.METERS,
    fmt: Optional[FractionFormat] = None,
) -> None:
    print(format_solution(sol, unit, fmt))

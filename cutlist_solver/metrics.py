# cutlist_solver/metrics.py
# Length metrics for cut lists:
# - used length (parts + one kerf per cut boundary)
# - offcut length (what is left of the supply piece)
# - kerf loss and utilization
#
# These metrics are solver-agnostic: they work for any strategy's output.

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict

from .types import CutList, Material, Solution, SubSolution, pattern_length


@dataclass(frozen=True)
class Metrics:
    stock_length: Fraction   # total length of supply pieces cut
    parts_length: Fraction   # total length of finished parts
    kerf_length: Fraction    # material lost to the blade
    pieces: int

    @property
    def offcut_length(self) -> Fraction:
        return self.stock_length - self.parts_length - self.kerf_length

    @property
    def utilization(self) -> float:
        if self.stock_length == 0:
            return 0.0
        return float(self.parts_length / self.stock_length)

    def __add__(self, other: "Metrics") -> "Metrics":
        return Metrics(
            stock_length=self.stock_length + other.stock_length,
            parts_length=self.parts_length + other.parts_length,
            kerf_length=self.kerf_length + other.kerf_length,
            pieces=self.pieces + other.pieces,
        )


EMPTY_METRICS = Metrics(Fraction(0), Fraction(0), Fraction(0), 0)


def used_length(sub: SubSolution, cut_list: CutList) -> Fraction:
    """Parts plus kerf for ONE piece cut with this pattern."""
    return pattern_length(sub.parts_of(cut_list), sub.blade_width)


def offcut_length(sub: SubSolution, cut_list: CutList) -> Fraction:
    """Leftover of ONE piece cut with this pattern (may be a usable remnant)."""
    return sub.supply_of(cut_list).length - used_length(sub, cut_list)


def compute_cut_list_metrics(sub: SubSolution, cut_list: CutList) -> Metrics:
    """Metrics for all `cut_list.quantity` pieces of the pattern."""
    q = cut_list.quantity
    parts = sum((p.length for p in sub.parts_of(cut_list)), Fraction(0))
    kerf = max(0, cut_list.num_parts - 1) * sub.blade_width
    return Metrics(
        stock_length=sub.supply_of(cut_list).length * q,
        parts_length=parts * q,
        kerf_length=kerf * q,
        pieces=q,
    )


def compute_sub_solution_metrics(sub: SubSolution) -> Metrics:
    total = EMPTY_METRICS
    for cl in sub.cut_lists:
        total = total + compute_cut_list_metrics(sub, cl)
    return total


def compute_material_metrics(solution: Solution) -> Dict[Material, Metrics]:
    return {material: compute_sub_solution_metrics(sub) for material, sub in solution.items()}


def compute_solution_metrics(solution: Solution) -> Metrics:
    """Aggregate metrics across materials (sum)."""
    total = EMPTY_METRICS
    for m in compute_material_metrics(solution).values():
        total = total + m
    return total

# cutlist_solver/solver_greedy.py
# Greedy reference heuristic for one material:
# - parts are placed one unit at a time, in input order
# - first-fit into an already opened piece (in creation order), else
# - open the cheapest supply that is long enough and still available
#
# First-fit (not best-fit) and the fixed part order are part of the observable
# output. The heuristic can fail although a feasible plan exists; that case is
# reported as InsufficientSupplyError, not as proven infeasibility.

from __future__ import annotations

from fractions import Fraction
from typing import List, Optional

from .errors import InsufficientSupplyError
from .messages import ProgressReporter
from .solver import SolverStrategy
from .types import CutList, Part, SubProblem, SubSolution, Supply


def _cheapest_eligible_supply(
    supplies: List[Supply],
    consumption: List[int],
    part: Part,
) -> Optional[int]:
    """Index of the cheapest supply that fits `part` and is not used up (first wins ties)."""
    best: Optional[int] = None
    for i, supply in enumerate(supplies):
        if part.length > supply.length or not supply.allows(consumption[i]):
            continue
        if best is None or supply.price < supplies[best].price:
            best = i
    return best


class GreedyStrategy(SolverStrategy):
    name = "greedy"

    def solve_sub_problem(self, sub_problem: SubProblem, reporter: ProgressReporter) -> SubSolution:
        supplies = list(sub_problem.supplies)
        blade = sub_problem.blade_width

        # Parallel lists: one entry per opened piece
        patterns: List[List[int]] = []
        pattern_supply: List[int] = []
        remaining: List[Fraction] = []

        consumption = [0] * len(supplies)

        total_units = sub_problem.total_units
        placed = 0

        for part_index, part in enumerate(sub_problem.parts):
            for _ in range(part.quantity):
                # Reuse pass: first opened piece with enough length left
                for j, left in enumerate(remaining):
                    if part.length <= left:
                        patterns[j].append(part_index)
                        remaining[j] = left - part.length - blade
                        break
                else:
                    best = _cheapest_eligible_supply(supplies, consumption, part)
                    if best is None:
                        raise InsufficientSupplyError(
                            f"No supply available with sufficient size for part "
                            f"{part.name!r} (length {part.length})",
                            part=part,
                        )
                    patterns.append([part_index])
                    pattern_supply.append(best)
                    remaining.append(supplies[best].length - part.length - blade)
                    consumption[best] += 1

                placed += 1
                reporter.sub_progress(placed / total_units)

        cut_lists = [
            CutList(supply_index=s, part_indices=tuple(p), quantity=1)
            for s, p in zip(pattern_supply, patterns)
        ]
        return SubSolution(
            cut_lists=tuple(cut_lists),
            supplies=sub_problem.supplies,
            parts=sub_problem.parts,
            blade_width=blade,
        )

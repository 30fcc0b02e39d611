# cutlist_solver/solver_patterns_cp_sat.py
# Exact pattern-based solver (OR-Tools CP-SAT) for one material:
# 1) For each distinct supply length enumerate every cut pattern that fits
#    (multiset of parts, counts bounded by demand, one kerf per boundary).
# 2) Integer variable x[s,k] = how many pieces of supply s are cut with pattern k.
# 3) Constraints: every part's demand met exactly, supply availability respected.
# 4) Objective: minimize total price, then number of pieces.
#
# Unlike the greedy strategy, an INFEASIBLE status here is a proof that no plan
# exists. Hitting the time limit or the pattern cap is reported separately.

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, List, Tuple

from ortools.sat.python import cp_model

from .config import DEFAULTS
from .errors import InfeasibleProblemError, SolverLimitError
from .logger import get_logger
from .measure import price_scale
from .messages import ProgressReporter
from .solver import SolverStrategy
from .types import CutList, Part, SubProblem, SubSolution

# A pattern is a tuple of counts, one per part (same order as SubProblem.parts)
Pattern = Tuple[int, ...]


@dataclass(frozen=True)
class PatternParams:
    time_limit_s: float = DEFAULTS.pattern_time_limit_s
    max_patterns: int = DEFAULTS.max_patterns
    num_workers: int = DEFAULTS.num_workers

    def __post_init__(self):
        if self.time_limit_s <= 0:
            raise ValueError("time_limit_s must be > 0")
        if self.max_patterns < 1:
            raise ValueError("max_patterns must be >= 1")
        if self.num_workers < 1:
            raise ValueError("num_workers must be >= 1")


def enumerate_patterns(
    parts: Tuple[Part, ...],
    capacity: Fraction,
    blade_width: Fraction,
    limit: int,
) -> List[Pattern]:
    """
    All non-empty part multisets that fit one piece of length `capacity`.
    n parts fit when sum(lengths) + (n-1)*blade <= capacity, i.e.
    sum(length + blade) <= capacity + blade.
    Raises SolverLimitError once more than `limit` patterns are found.
    """
    budget = capacity + blade_width
    n = len(parts)
    out: List[Pattern] = []
    counts = [0] * n

    def extend(start: int, used: Fraction) -> None:
        for i in range(start, n):
            part = parts[i]
            step = part.length + blade_width
            if counts[i] >= part.quantity or used + step > budget:
                continue
            counts[i] += 1
            out.append(tuple(counts))
            if len(out) > limit:
                raise SolverLimitError(
                    f"Cut pattern limit ({limit}) exceeded for supply length {capacity}; "
                    f"raise max_patterns or use the greedy solver"
                )
            extend(i, used + step)
            counts[i] -= 1

    extend(0, Fraction(0))
    return out


def _pattern_part_indices(pattern: Pattern) -> Tuple[int, ...]:
    out: List[int] = []
    for i, c in enumerate(pattern):
        out.extend([i] * c)
    return tuple(out)


class PatternStrategy(SolverStrategy):
    name = "patterns"

    def __init__(self, params: PatternParams = PatternParams()) -> None:
        self.params = params

    def solve_sub_problem(self, sub_problem: SubProblem, reporter: ProgressReporter) -> SubSolution:
        log = get_logger()
        supplies = sub_problem.supplies
        parts = sub_problem.parts
        blade = sub_problem.blade_width
        total_units = sub_problem.total_units

        def result(cut_lists: List[CutList]) -> SubSolution:
            return SubSolution(cut_lists=tuple(cut_lists), supplies=supplies, parts=parts, blade_width=blade)

        if total_units == 0:
            reporter.sub_progress(1.0)
            return result([])

        usable = [i for i, s in enumerate(supplies) if s.allows(0)]
        longest = max((supplies[i].length for i in usable), default=Fraction(0))
        for part in parts:
            if part.quantity > 0 and part.length > longest:
                raise InfeasibleProblemError(
                    f"Part {part.name!r} (length {part.length}) is longer than every available supply"
                )

        # Patterns depend only on the supply length
        patterns_by_length: Dict[Fraction, List[Pattern]] = {}
        n_patterns = 0
        for k, i in enumerate(usable, start=1):
            length = supplies[i].length
            if length not in patterns_by_length:
                pats = enumerate_patterns(parts, length, blade, self.params.max_patterns - n_patterns)
                patterns_by_length[length] = pats
                n_patterns += len(pats)
            reporter.sub_progress(0.5 * k / len(usable))
        log.debug(f"patterns: {n_patterns} patterns over {len(patterns_by_length)} supply lengths")

        scale = price_scale(s.price for s in supplies)
        # Lexicographic objective: price first, then piece count (bounded by total_units)
        piece_weight = total_units + 1

        m = cp_model.CpModel()
        x: Dict[Tuple[int, int], cp_model.IntVar] = {}
        for i in usable:
            supply = supplies[i]
            ub = total_units if supply.is_unlimited else min(supply.max_quantity, total_units)
            pieces = []
            for k, _ in enumerate(patterns_by_length[supply.length]):
                x[i, k] = m.NewIntVar(0, ub, f"x[{i},{k}]")
                pieces.append(x[i, k])
            if pieces and not supply.is_unlimited:
                m.Add(sum(pieces) <= supply.max_quantity)

        for p, part in enumerate(parts):
            terms = []
            for (i, k), var in x.items():
                c = patterns_by_length[supplies[i].length][k][p]
                if c:
                    terms.append(c * var)
            if terms:
                m.Add(sum(terms) == part.quantity)

        m.Minimize(
            sum(
                (int(supplies[i].price * scale) * piece_weight + 1) * var
                for (i, _), var in x.items()
            )
        )

        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = float(self.params.time_limit_s)
        solver.parameters.num_workers = int(self.params.num_workers)

        reporter.check_cancelled()
        status = solver.Solve(m)
        log.debug(f"patterns: CP-SAT status {solver.StatusName(status)}")

        if status == cp_model.INFEASIBLE:
            raise InfeasibleProblemError("No combination of supplies can satisfy every part")
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            raise SolverLimitError(
                f"No plan found within {self.params.time_limit_s:g} s "
                f"(CP-SAT status {solver.StatusName(status)})"
            )
        if status == cp_model.FEASIBLE:
            log.warn("patterns: time limit reached, plan is feasible but may not be cheapest")

        cut_lists: List[CutList] = []
        for (i, k), var in x.items():
            qty = int(solver.Value(var))
            if qty > 0:
                pattern = patterns_by_length[supplies[i].length][k]
                cut_lists.append(
                    CutList(supply_index=i, part_indices=_pattern_part_indices(pattern), quantity=qty)
                )

        reporter.sub_progress(1.0)
        return result(cut_lists)

# cutlist_solver/solver.py
# Solver orchestration shared by every algorithm:
# - iterate materials, delegate each SubProblem to a pluggable strategy
# - fail fast on the first material that cannot be solved
# - group duplicate cut patterns ("cut this pattern xN")
# - report Progress / Results on an optional sink
#
# Strategies only implement solve_sub_problem(); see solver_greedy.py and
# solver_patterns_cp_sat.py.

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import SolveError
from .logger import get_logger
from .messages import NULL_REPORTER, Progress, ProgressReporter, Results
from .types import CutList, Material, Problem, Solution, SubProblem, SubSolution


class SolverStrategy:
    """Base class for cut-list algorithms. Subclasses solve one material."""

    name = "abstract"

    def solve_sub_problem(self, sub_problem: SubProblem, reporter: ProgressReporter) -> SubSolution:
        """
        Return a SubSolution embedding sub_problem's supplies and parts.
        Raise a SolveError subclass if the material cannot be planned.
        Cut lists do not need to be grouped.
        """
        raise NotImplementedError


def group_cut_lists(cut_lists: Iterable[CutList]) -> Tuple[CutList, ...]:
    """
    Merge cut lists with identical (supply_index, part_indices), summing quantity.
    Part order matters: (0, 1) and (1, 0) stay separate patterns.
    Output keeps the order in which each pattern was first seen.
    """
    counts: Dict[Tuple[int, Tuple[int, ...]], int] = {}
    for cl in cut_lists:
        counts[cl.key()] = counts.get(cl.key(), 0) + cl.quantity
    return tuple(
        CutList(supply_index=supply_index, part_indices=part_indices, quantity=qty)
        for (supply_index, part_indices), qty in counts.items()
    )


def group_sub_solution(sub: SubSolution) -> SubSolution:
    return SubSolution(
        cut_lists=group_cut_lists(sub.cut_lists),
        supplies=sub.supplies,
        parts=sub.parts,
        blade_width=sub.blade_width,
    )


class Solver:
    """
    Runs a strategy over every material of a Problem.

    Usage:
      solver = Solver(GreedyStrategy())
      solution = solver.solve(problem)                  # synchronous
      solution = solver.solve(problem, sink=channel)    # with progress messages
    """

    def __init__(self, strategy: SolverStrategy) -> None:
        self.strategy = strategy

    @property
    def name(self) -> str:
        return self.strategy.name

    def solve(
        self,
        problem: Problem,
        sink=None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Solution:
        log = get_logger()
        reporter = NULL_REPORTER
        if sink is not None or cancel_event is not None:
            reporter = ProgressReporter(sink, cancel_event)

        total = len(problem)
        solved: Dict[Material, SubSolution] = {}

        for done, (material, sub_problem) in enumerate(problem.items(), start=1):
            log.debug(
                f"{self.name}: solving {material.name} "
                f"({len(sub_problem.supplies)} supplies, {sub_problem.total_units} part units)"
            )
            try:
                reporter.check_cancelled()
                sub = self.strategy.solve_sub_problem(sub_problem, reporter)
            except SolveError as e:
                e.material = material
                log.warn(f"{self.name}: {e}")
                if sink is not None:
                    sink.send(Results(error=e))
                raise

            solved[material] = group_sub_solution(sub)
            log.debug(f"{self.name}: {material.name} -> {len(solved[material].cut_lists)} patterns")

            if sink is not None and done < total:
                sink.send(Progress(done / total))

        solution = Solution(solved)
        if sink is not None:
            sink.send(Progress(1.0))
            sink.send(Results(solution=solution))
        return solution


def make_solver(name: str = "greedy", **params) -> Solver:
    """
    Build a Solver by algorithm name.
      - "greedy":   first-fit reuse, else cheapest new supply
      - "patterns": exact pattern model on OR-Tools CP-SAT (params: time_limit_s,
                    max_patterns, num_workers)
    """
    key = name.strip().lower()
    if key == "greedy":
        from .solver_greedy import GreedyStrategy

        if params:
            raise ValueError(f"greedy solver takes no parameters, got {sorted(params)}")
        return Solver(GreedyStrategy())
    if key == "patterns":
        from .solver_patterns_cp_sat import PatternParams, PatternStrategy

        return Solver(PatternStrategy(PatternParams(**params)))
    raise ValueError(f"Unknown solver {name!r} (choose from: {', '.join(SOLVER_NAMES)})")


SOLVER_NAMES: List[str] = ["greedy", "patterns"]

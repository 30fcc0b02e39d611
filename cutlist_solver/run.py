# cutlist_solver/run.py
# High-level convenience runner that ties together:
# - solver (greedy or exact patterns)
# - validation
# - metrics + cost summary
# - optional CSV / JSON export and PNG diagram
#
# This is meant to be called from your own scripts or the CLI.
# Example:
#   from cutlist_solver.run import run_job
#   res = run_job(problem, solver="patterns", time_limit_s=5, out_dir="out")

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .costing import SolutionCost, compute_solution_cost
from .io_csv import export_all
from .logger import get_logger
from .metrics import Metrics, compute_solution_metrics
from .solver import make_solver
from .types import Problem, Solution
from .units import FractionFormat, LengthUnit
from .utils import save_solution_json, timer
from .validate import ValidationIssue, raise_on_errors, validate_solution


@dataclass(frozen=True)
class RunResult:
    solution: Solution
    cost: SolutionCost
    metrics: Metrics
    seconds: float
    issues: List[ValidationIssue] = field(default_factory=list)
    exported: List[Path] = field(default_factory=list)


def run_job(
    problem: Problem,
    *,
    solver: str = "greedy",
    time_limit_s: Optional[float] = None,
    max_patterns: Optional[int] = None,
    validate: bool = True,
    out_dir: Optional[str | Path] = None,
    export_prefix: str = "cutlist",
    unit: LengthUnit = LengthUnit.METERS,
    fmt: Optional[FractionFormat] = None,
    png_path: Optional[str | Path] = None,
    plot_style=None,
) -> RunResult:
    """
    Solve `problem` end-to-end. SolveError propagates to the caller.
    Validation errors raise ValueError when validate=True.
    """
    log = get_logger()

    params = {}
    if solver == "patterns":
        if time_limit_s is not None:
            params["time_limit_s"] = float(time_limit_s)
        if max_patterns is not None:
            params["max_patterns"] = int(max_patterns)

    with timer("solve") as t:
        sol = make_solver(solver, **params).solve(problem)
    log.info(f"{solver}: solved {len(sol)} materials in {t['seconds']:.2f}s")

    issues: List[ValidationIssue] = []
    if validate:
        issues = validate_solution(sol)
        for issue in issues:
            if issue.level != "ERROR":
                log.warn(f"{issue.material}: {issue.message}")
        raise_on_errors(issues)

    exported: List[Path] = []
    if out_dir is not None:
        outp = Path(out_dir)
        exported.extend(export_all(sol, out_dir=outp, prefix=export_prefix, unit=unit, fmt=fmt))
        json_path = outp / f"{export_prefix}.json"
        save_solution_json(sol, json_path)
        exported.append(json_path)
        log.info(f"Exported CSV + JSON to: {outp}")

    if png_path is not None and sol.num_pieces() > 0:
        from .plotting import PlotStyle, save_solution_png

        save_solution_png(sol, str(png_path), style=plot_style or PlotStyle(unit=unit, fmt=fmt or PlotStyle.fmt))
        exported.append(Path(png_path))
        log.info(f"Cut diagram saved to: {png_path}")

    return RunResult(
        solution=sol,
        cost=compute_solution_cost(sol),
        metrics=compute_solution_metrics(sol),
        seconds=t["seconds"],
        issues=issues,
        exported=exported,
    )

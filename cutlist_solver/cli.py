# cutlist_solver/cli.py
# Command line runner for JSON jobs:
# - loads a job (see io_json.py for the format)
# - solves with the greedy or the exact pattern solver
# - prints the cut lists, shopping totals and utilization
# - optional CSV + JSON export folder, PNG diagram and matplotlib window
#
# Run:
#   python -m cutlist_solver --job job.json
#   python -m cutlist_solver --job job.json --solver patterns --time 30 --out out/ --no_plot
#   python -m cutlist_solver --job job.json --format mixed --png plan.png

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from .config import DEFAULTS, parse_unit_text
from .errors import SolveError
from .io_json import load_job_json
from .logger import get_logger, set_enabled, set_verbose
from .report import format_solution
from .run import run_job
from .solver import SOLVER_NAMES
from .units import FractionFormat


def _fraction_format(style: str, precision: int) -> FractionFormat:
    if style == "mixed":
        return FractionFormat.mixed()
    if style == "fraction":
        return FractionFormat.fraction()
    return FractionFormat.decimal(precision)


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="1D cut list planner (lumber, pipe, rail...)")
    p.add_argument("--job", type=str, required=True, help="Path to job JSON (materials/supplies/parts)")
    p.add_argument("--solver", type=str, default="greedy", choices=SOLVER_NAMES, help="Solver algorithm")

    # Pattern solver controls
    p.add_argument("--time", type=float, default=DEFAULTS.pattern_time_limit_s, help="patterns: time limit per material (seconds)")
    p.add_argument("--max_patterns", type=int, default=DEFAULTS.max_patterns, help="patterns: cap on enumerated patterns per supply length")

    # Display
    p.add_argument("--unit", type=str, default="", help="Display unit (m, cm, in, ft). Default: the job's unit")
    p.add_argument("--format", type=str, default="decimal", choices=["decimal", "mixed", "fraction"], help="How to print lengths")
    p.add_argument("--precision", type=int, default=DEFAULTS.length_precision, help="Digits after the point for --format decimal")

    # Output
    p.add_argument("--out", type=str, default="", help="Output directory for CSV + JSON exports (optional)")
    p.add_argument("--prefix", type=str, default="cutlist", help="Export filename prefix")
    p.add_argument("--png", type=str, default="", help="Save cut diagram as PNG file (optional)")
    p.add_argument("--no_plot", action="store_true", help="Do not show matplotlib plot")

    # Logging
    p.add_argument("--quiet", action="store_true", help="Only print the report and errors")
    p.add_argument("--verbose", action="store_true", help="Print per-material solver diagnostics")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)
    set_enabled(not args.quiet)
    set_verbose(args.verbose)
    log = get_logger()

    job_path = Path(args.job)
    if not job_path.exists():
        raise SystemExit(f"Job JSON not found: {job_path}")

    loaded = load_job_json(job_path)
    unit = parse_unit_text(args.unit) if args.unit.strip() else loaded.unit
    fmt = _fraction_format(args.format, args.precision)

    try:
        res = run_job(
            loaded.problem,
            solver=args.solver,
            time_limit_s=args.time,
            max_patterns=args.max_patterns,
            out_dir=args.out.strip() or None,
            export_prefix=args.prefix,
            unit=unit,
            fmt=fmt,
            png_path=args.png.strip() or None,
        )
    except SolveError as e:
        log.error(str(e))
        return 1

    print(f"Solver: {args.solver}")
    print(format_solution(res.solution, unit, fmt))

    if not args.no_plot and res.solution.num_pieces() > 0:
        from .plotting import PlotStyle, show_solution

        show_solution(res.solution, style=PlotStyle(unit=unit, fmt=fmt))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

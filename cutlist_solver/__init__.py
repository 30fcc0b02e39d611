# cutlist_solver/__init__.py
"""
Cut list planner for one-dimensional stock (lumber, pipe, rail, tubing).

Current state:
- Exact lengths (fractions) and prices (decimals) throughout
- Greedy reference solver: first-fit reuse, else cheapest eligible supply
- Exact pattern solver on OR-Tools CP-SAT (minimum cost, then fewest pieces)
  - kerf-aware pattern enumeration per supply length
  - limited / unlimited supply availability
- Duplicate patterns grouped into "cut this xN" cut lists
- Progress / result messages over a thread-safe channel, background worker
  with cooperative cancellation
- Cost, consumption and utilization summaries; CSV / JSON export;
  matplotlib cut diagrams
"""

from .types import (
    UNLIMITED,
    Material,
    Supply,
    Part,
    SubProblem,
    Problem,
    CutList,
    SubSolution,
    Solution,
    pattern_length,
    build_problem,
)

from .errors import (
    SolveError,
    InsufficientSupplyError,
    InfeasibleProblemError,
    SolverLimitError,
    SolveCancelledError,
    ChannelClosedError,
)

from .messages import (
    Progress,
    SubProgress,
    Results,
    MessageChannel,
    CallbackSink,
    ProgressReporter,
)

from .solver import (
    SolverStrategy,
    Solver,
    group_cut_lists,
    make_solver,
)

from .solver_greedy import GreedyStrategy

from .solver_patterns_cp_sat import (
    PatternParams,
    PatternStrategy,
)

from .costing import (
    total_price,
    supply_consumption,
    shopping_list,
    compute_solution_cost,
)

from .metrics import (
    Metrics,
    compute_solution_metrics,
)

from .units import (
    LengthUnit,
    FractionFormat,
    to_meters,
    from_meters,
    format_length,
    format_price,
)

from .worker import (
    SolveHandle,
    solve_in_background,
)

__all__ = [
    # types
    "UNLIMITED",
    "Material",
    "Supply",
    "Part",
    "SubProblem",
    "Problem",
    "CutList",
    "SubSolution",
    "Solution",
    "pattern_length",
    "build_problem",
    # errors
    "SolveError",
    "InsufficientSupplyError",
    "InfeasibleProblemError",
    "SolverLimitError",
    "SolveCancelledError",
    "ChannelClosedError",
    # messages
    "Progress",
    "SubProgress",
    "Results",
    "MessageChannel",
    "CallbackSink",
    "ProgressReporter",
    # solver
    "SolverStrategy",
    "Solver",
    "group_cut_lists",
    "make_solver",
    "GreedyStrategy",
    "PatternParams",
    "PatternStrategy",
    # costing / metrics
    "total_price",
    "supply_consumption",
    "shopping_list",
    "compute_solution_cost",
    "Metrics",
    "compute_solution_metrics",
    # units
    "LengthUnit",
    "FractionFormat",
    "to_meters",
    "from_meters",
    "format_length",
    "format_price",
    # worker
    "SolveHandle",
    "solve_in_background",
]

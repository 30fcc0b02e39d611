# cutlist_solver/test_worker.py
# Background solving + cancellation:
#   pytest cutlist_solver/test_worker.py

from __future__ import annotations

import pytest

from cutlist_solver.errors import InsufficientSupplyError, SolveCancelledError
from cutlist_solver.messages import Progress, Results
from cutlist_solver.solver import make_solver
from cutlist_solver.types import Material, Part, SubProblem, Supply
from cutlist_solver.worker import SolveHandle, solve_in_background


def _problem(part_length=2):
    return {
        Material("pine"): SubProblem(supplies=(Supply("s", 8, "3"),), parts=(Part("p", part_length, 20),)),
        Material("oak"): SubProblem(supplies=(Supply("t", 6, "5"),), parts=(Part("q", 1, 10),)),
    }


def test_background_solve_delivers_results() -> None:
    handle = solve_in_background(make_solver("greedy"), _problem())
    msgs = list(handle.channel)

    assert isinstance(msgs[-1], Results)
    assert msgs[-1].ok
    assert any(isinstance(m, Progress) and m.fraction == 1.0 for m in msgs)

    sol = handle.result(timeout=10)
    assert sol is msgs[-1].solution
    assert sol.num_pieces() == 5 + 2
    assert not handle.is_running()


def test_background_failure_is_raised_from_result() -> None:
    handle = solve_in_background(make_solver("greedy"), _problem(part_length=9))
    final = list(handle.channel)[-1]
    assert isinstance(final.error, InsufficientSupplyError)
    with pytest.raises(InsufficientSupplyError):
        handle.result(timeout=10)


def test_cancel_before_start() -> None:
    handle = SolveHandle(make_solver("greedy"), _problem())
    handle.cancel()
    handle.start()

    assert handle.join(timeout=10)
    with pytest.raises(SolveCancelledError):
        handle.result()
    final = list(handle.channel)[-1]
    assert isinstance(final.error, SolveCancelledError)
    assert final.error.material == Material("pine")


def test_worker_thread_is_named_after_solver() -> None:
    handle = SolveHandle(make_solver("greedy"), _problem())
    assert handle._thread.name == "cutlist-greedy"
    assert handle._thread.daemon

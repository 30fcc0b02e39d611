# cutlist_solver/test_solver_greedy.py
# Greedy solver + orchestration tests:
#   pytest cutlist_solver/test_solver_greedy.py

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from cutlist_solver.costing import supply_consumption, total_price
from cutlist_solver.errors import InsufficientSupplyError, SolveError
from cutlist_solver.solver import SOLVER_NAMES, Solver, group_cut_lists, make_solver
from cutlist_solver.solver_greedy import GreedyStrategy
from cutlist_solver.types import UNLIMITED, CutList, Material, Part, SubProblem, Supply
from cutlist_solver.validate import validate_solution

PINE = Material("pine")


def _solve(sub: SubProblem):
    return make_solver("greedy").solve({PINE: sub})


def _scenario_a() -> SubProblem:
    return SubProblem(
        supplies=(
            Supply("on hand", 8, price=0, max_quantity=1),
            Supply("store", 8, price="3.5", max_quantity=UNLIMITED),
        ),
        parts=(Part("long", 3, 3), Part("short", "1.5", 1)),
    )


def test_scenario_free_supply_used_first() -> None:
    sol = _solve(_scenario_a())

    assert total_price(sol) == Decimal("3.5")
    assert supply_consumption(sol) == {PINE: [1, 1]}
    # short part goes back into the first (free) piece
    assert sol[PINE].cut_lists == (CutList(0, (0, 0, 1), 1), CutList(1, (0,), 1))
    assert validate_solution(sol) == []


def test_scenario_part_longer_than_every_supply_fails() -> None:
    sub = SubProblem(supplies=(Supply("s", 2), Supply("t", 3)), parts=(Part("beam", 4),))
    with pytest.raises(InsufficientSupplyError) as ei:
        _solve(sub)
    assert ei.value.material == PINE
    assert ei.value.part.name == "beam"
    assert str(ei.value).startswith("pine: ")
    assert "'beam'" in str(ei.value)


def test_scenario_zero_quantity_part_solves_trivially() -> None:
    for supply in (Supply("none left", 8, max_quantity=0), Supply("any", 8)):
        sol = _solve(SubProblem(supplies=(supply,), parts=(Part("nothing", 3, 0),)))
        assert sol[PINE].cut_lists == ()
        assert total_price(sol) == 0


def test_scenario_two_parts_exactly_fill_one_supply() -> None:
    blade = Fraction(1, 10)
    sub = SubProblem(
        supplies=(Supply("s", 8),),
        parts=(Part("a", "3.95"), Part("b", "3.95")),
        blade_width=blade,
    )
    sol = _solve(sub)
    assert sol[PINE].cut_lists == (CutList(0, (0, 1), 1),)

    same_part = SubProblem(supplies=(Supply("s", 8),), parts=(Part("a", "3.95", 2),), blade_width=blade)
    assert _solve(same_part)[PINE].cut_lists == (CutList(0, (0, 0), 1),)


def test_fractional_kerf_stays_exact() -> None:
    # 3 x 0.3 + 2 x 0.1 == 1.1 exactly; float arithmetic would drift
    sub = SubProblem(supplies=(Supply("s", "1.1"),), parts=(Part("slat", "0.3", 30),), blade_width="0.1")
    sol = _solve(sub)
    assert sol[PINE].cut_lists == (CutList(0, (0, 0, 0), 10),)
    assert validate_solution(sol) == []


def test_first_fit_not_best_fit() -> None:
    sub = SubProblem(supplies=(Supply("s", 10),), parts=(Part("a", 6), Part("b", 7), Part("c", 3)))
    sol = _solve(sub)
    # c fits exactly into the second piece, but the first piece is tried first
    assert sol[PINE].cut_lists == (CutList(0, (0, 2), 1), CutList(0, (1,), 1))


def test_cheapest_supply_wins_and_first_index_breaks_ties() -> None:
    sub = SubProblem(supplies=(Supply("a", 10, "5"), Supply("b", 10, "2"), Supply("c", 10, "2")), parts=(Part("p", 9),))
    assert _solve(sub)[PINE].cut_lists[0].supply_index == 1

    too_short = SubProblem(supplies=(Supply("cheap", 5, "1"), Supply("dear", 10, "9")), parts=(Part("p", 6),))
    assert _solve(too_short)[PINE].cut_lists[0].supply_index == 1


def test_greedy_can_fail_on_feasible_problem() -> None:
    # feasible: short part in "b", long part in "a"; greedy puts the short part in "a" first
    sub = SubProblem(
        supplies=(Supply("a", 5, max_quantity=1), Supply("b", 3, max_quantity=1)),
        parts=(Part("short", 3), Part("long", 5)),
    )
    with pytest.raises(InsufficientSupplyError):
        _solve(sub)


def test_availability_limit_moves_to_next_supply() -> None:
    sub = SubProblem(
        supplies=(Supply("cheap", 4, "1", max_quantity=2), Supply("dear", 4, "2")),
        parts=(Part("p", 4, 5),),
    )
    sol = _solve(sub)
    assert supply_consumption(sol) == {PINE: [2, 3]}
    assert sol[PINE].cut_lists == (CutList(0, (0,), 2), CutList(1, (0,), 3))


def test_grouping_merges_identical_patterns() -> None:
    sub = SubProblem(supplies=(Supply("s", 3),), parts=(Part("p", 1, 6),))
    assert _solve(sub)[PINE].cut_lists == (CutList(0, (0, 0, 0), 2),)


def test_grouping_is_idempotent_and_order_sensitive() -> None:
    raw = [CutList(0, (0, 1)), CutList(0, (1, 0)), CutList(0, (0, 1), 2), CutList(1, (0, 1))]
    once = group_cut_lists(raw)
    assert once == (CutList(0, (0, 1), 3), CutList(0, (1, 0), 1), CutList(1, (0, 1), 1))
    assert group_cut_lists(once) == once


def test_greedy_is_deterministic() -> None:
    problem = {
        Material("pine"): _scenario_a(),
        Material("oak"): SubProblem(
            supplies=(Supply("6ft", 6, "4"), Supply("8ft", 8, "5")),
            parts=(Part("a", "2.5", 5), Part("b", "1.25", 7), Part("c", 4, 2)),
            blade_width="1/8",
        ),
    }
    first = make_solver("greedy").solve(problem)
    for _ in range(3):
        again = make_solver("greedy").solve(problem)
        assert dict(again.items()) == dict(first.items())
        assert list(again) == list(first)


def test_fail_fast_across_materials() -> None:
    problem = {
        Material("ok"): _scenario_a(),
        Material("broken"): SubProblem(supplies=(), parts=(Part("p", 1),)),
        Material("never"): _scenario_a(),
    }
    with pytest.raises(SolveError) as ei:
        Solver(GreedyStrategy()).solve(problem)
    assert ei.value.material == Material("broken")


def test_empty_problem_gives_empty_solution() -> None:
    sol = make_solver("greedy").solve({})
    assert len(sol) == 0


def test_make_solver_by_name() -> None:
    assert SOLVER_NAMES == ["greedy", "patterns"]
    assert make_solver("greedy").name == "greedy"
    assert make_solver(" Patterns ", time_limit_s=1.0).name == "patterns"
    with pytest.raises(ValueError):
        make_solver("greedy", time_limit_s=1.0)
    with pytest.raises(ValueError):
        make_solver("simplex")

# cutlist_solver/test_types.py
# Data model and exact measurement tests:
#   pytest cutlist_solver/test_types.py

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

import pytest

from cutlist_solver.measure import price_scale, to_length, to_price
from cutlist_solver.types import (
    UNLIMITED,
    CutList,
    Material,
    Part,
    Solution,
    SubProblem,
    SubSolution,
    Supply,
    build_problem,
    pattern_length,
)


def test_to_length_exact_forms() -> None:
    assert to_length(3) == Fraction(3)
    assert to_length("1.5") == Fraction(3, 2)
    assert to_length("3/8") == Fraction(3, 8)
    assert to_length("3 1/2") == Fraction(7, 2)
    assert to_length("-1 1/2") == Fraction(-3, 2)
    assert to_length(Decimal("2.25")) == Fraction(9, 4)


def test_to_length_floats_go_through_str() -> None:
    assert to_length(0.1) == Fraction(1, 10)
    assert to_length(1.5) == Fraction(3, 2)


def test_to_length_rejects_bad_values() -> None:
    with pytest.raises(TypeError):
        to_length(True)
    with pytest.raises(TypeError):
        to_length(None)
    with pytest.raises(ValueError):
        to_length("abc")
    with pytest.raises(ValueError):
        to_length("1/0")
    with pytest.raises(ValueError):
        to_length("")


def test_to_price_and_scale() -> None:
    assert to_price("3.50") == Decimal("3.50")
    assert to_price(3.5) == Decimal("3.5")
    assert to_price(2) == Decimal(2)
    with pytest.raises(ValueError):
        to_price("NaN")
    with pytest.raises(ValueError):
        to_price("three")

    assert price_scale([Decimal("3.5"), Decimal("1.25"), Decimal(0)]) == 100
    assert price_scale([Decimal("100"), Decimal(4)]) == 1


def test_supply_validation() -> None:
    s = Supply("8ft", "2.4384", "3.50")
    assert s.length == Fraction(24384, 10000)
    assert s.price == Decimal("3.50")
    assert s.is_unlimited
    assert s.allows(1000)

    limited = Supply("offcut", 1, max_quantity=2)
    assert limited.allows(1)
    assert not limited.allows(2)

    with pytest.raises(ValueError):
        Supply("bad", 0)
    with pytest.raises(ValueError):
        Supply("bad", 1, price=-1)
    with pytest.raises(ValueError):
        Supply("bad", 1, max_quantity=-2)
    with pytest.raises(ValueError):
        Supply("bad", 1, max_quantity=1.5)
    with pytest.raises(ValueError):
        Supply("bad", 1, max_quantity=True)


def test_part_validation() -> None:
    assert Part("leg", "0.75").length == Fraction(3, 4)
    assert Part("none", 1, quantity=0).quantity == 0
    with pytest.raises(ValueError):
        Part("bad", -1)
    with pytest.raises(ValueError):
        Part("bad", 1, quantity=-1)
    with pytest.raises(ValueError):
        Part("bad", 1, quantity=2.5)
    with pytest.raises(ValueError):
        Part("bad", 1, quantity=True)


def test_sub_problem_coerces_and_counts() -> None:
    sp = SubProblem(supplies=[Supply("s", 8)], parts=[Part("a", 3, 2), Part("b", 1, 3)], blade_width="1/8")
    assert isinstance(sp.supplies, tuple)
    assert sp.blade_width == Fraction(1, 8)
    assert sp.total_units == 5
    with pytest.raises(ValueError):
        SubProblem(supplies=(), parts=(), blade_width=-1)


def test_cut_list_quantity_must_be_positive() -> None:
    cl = CutList(0, [1, 0, 1])
    assert cl.part_indices == (1, 0, 1)
    assert cl.num_parts == 3
    assert cl.key() == (0, (1, 0, 1))
    with pytest.raises(ValueError):
        CutList(0, (0,), quantity=0)


def test_pattern_length_counts_kerf_between_parts() -> None:
    parts = [Part("a", 3), Part("b", "1.5")]
    assert pattern_length(parts, Fraction(1, 8)) == Fraction(9, 2) + Fraction(1, 8)
    assert pattern_length(parts[:1], Fraction(1, 8)) == 3
    assert pattern_length([], Fraction(1, 8)) == 0


def test_solution_is_read_only_mapping() -> None:
    m = Material("pine")
    sub = SubSolution(cut_lists=[CutList(0, (0,), 2)], supplies=[Supply("s", 8)], parts=[Part("a", 3, 2)])
    source = {m: sub}
    sol = Solution(source)
    source.clear()

    assert len(sol) == 1
    assert sol[m] is sub
    assert list(sol) == [m]
    assert sol.num_pieces() == 2
    with pytest.raises(TypeError):
        sol._sub_solutions[Material("oak")] = sub


def test_build_problem_groups_rows_by_material() -> None:
    problem = build_problem(
        [("pine", Supply("8ft", 8)), ("oak", Supply("6ft", 6)), ("pine", Supply("10ft", 10))],
        [("oak", Part("shelf", 2, 3)), ("pine", Part("leg", 3, 4)), ("steel", Part("rail", 1))],
        blade_width="1/8",
    )
    assert [m.name for m in problem] == ["pine", "oak", "steel"]
    pine = problem[Material("pine")]
    assert [s.name for s in pine.supplies] == ["8ft", "10ft"]
    assert [p.name for p in pine.parts] == ["leg"]
    assert pine.blade_width == Fraction(1, 8)
    assert problem[Material("steel")].supplies == ()
    assert problem[Material("oak")].parts[0].quantity == 3


def test_unlimited_sentinel_value() -> None:
    assert UNLIMITED == -1

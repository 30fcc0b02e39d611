# cutlist_solver/test_sample_data.py
# Random problems: reproducible, always solvable, exact solver never costs more.
#   pytest cutlist_solver/test_sample_data.py

from __future__ import annotations

from cutlist_solver.costing import total_price
from cutlist_solver.logger import muted
from cutlist_solver.sample_data import RandomProblemConfig, generate_random_problem, merge_problems
from cutlist_solver.solver import make_solver
from cutlist_solver.types import Material
from cutlist_solver.validate import validate_solution

SMALL = RandomProblemConfig(seed=7, n_materials=3, n_parts=(2, 3), qty_range=(1, 3), part_cm_range=(60, 170))


def test_same_seed_same_problem() -> None:
    assert generate_random_problem(SMALL) == generate_random_problem(SMALL)
    assert generate_random_problem(SMALL) != generate_random_problem(RandomProblemConfig(seed=8))


def test_every_material_has_an_unlimited_long_supply() -> None:
    for sub in generate_random_problem(SMALL).values():
        longest = max(sub.supplies, key=lambda s: s.length)
        assert longest.is_unlimited
        assert all(p.length <= longest.length for p in sub.parts)


def test_greedy_and_patterns_agree_on_validity() -> None:
    problem = generate_random_problem(SMALL)
    with muted():
        greedy = make_solver("greedy").solve(problem)
        exact = make_solver("patterns", time_limit_s=10.0).solve(problem)

    assert validate_solution(greedy) == []
    assert validate_solution(exact) == []
    assert total_price(exact) <= total_price(greedy)


def test_merge_problems_concatenates_same_material() -> None:
    a = generate_random_problem(RandomProblemConfig(seed=1, n_materials=1))
    b = generate_random_problem(RandomProblemConfig(seed=2, n_materials=2))
    merged = merge_problems(a, b)

    m1 = Material("M1")
    assert list(merged) == [m1, Material("M2")]
    assert merged[m1].parts == a[m1].parts + b[m1].parts
    assert merged[m1].supplies == a[m1].supplies + b[m1].supplies

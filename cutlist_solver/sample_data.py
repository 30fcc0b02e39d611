# cutlist_solver/sample_data.py
# Generate random cut-list problems for quick benchmarking and solver comparison.
# Lengths are whole centimeters so results stay readable; everything is seeded.

from __future__ import annotations

import random
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import List, Tuple

from .types import UNLIMITED, Material, Part, Problem, SubProblem, Supply


@dataclass(frozen=True)
class RandomProblemConfig:
    seed: int = 123
    n_materials: int = 2
    n_supplies: Tuple[int, int] = (1, 3)
    n_parts: Tuple[int, int] = (3, 8)
    qty_range: Tuple[int, int] = (1, 6)

    # lengths in centimeters
    supply_cm_range: Tuple[int, int] = (180, 600)
    part_cm_range: Tuple[int, int] = (20, 170)

    # price per meter, in cents
    price_cents_per_m: Tuple[int, int] = (80, 400)

    # probability a supply is limited (otherwise unlimited)
    p_limited: float = 0.3
    limited_range: Tuple[int, int] = (1, 4)

    # probability a supply is on hand (free)
    p_free: float = 0.15

    blade_width_mm: int = 3


def _random_supplies(rnd: random.Random, cfg: RandomProblemConfig) -> List[Supply]:
    supplies: List[Supply] = []
    for k in range(rnd.randint(*cfg.n_supplies)):
        cm = rnd.randint(*cfg.supply_cm_range)
        length = Fraction(cm, 100)
        if rnd.random() < cfg.p_free:
            price = Decimal(0)
        else:
            price = Decimal(rnd.randint(*cfg.price_cents_per_m) * cm) / Decimal(10000)
            price = price.quantize(Decimal("0.01"))
        max_q = rnd.randint(*cfg.limited_range) if rnd.random() < cfg.p_limited else UNLIMITED
        supplies.append(Supply(name=f"S{k + 1}-{cm}cm", length=length, price=price, max_quantity=max_q))
    return supplies


def generate_random_problem(cfg: RandomProblemConfig = RandomProblemConfig()) -> Problem:
    """
    Build a Problem with cfg.n_materials materials.
    At least one supply per material is unlimited and longer than every part,
    so the problem is always solvable.
    """
    rnd = random.Random(cfg.seed)
    blade = Fraction(cfg.blade_width_mm, 1000)
    problem: Problem = {}

    for m in range(cfg.n_materials):
        supplies = _random_supplies(rnd, cfg)
        longest = max(supplies, key=lambda s: s.length)
        if not longest.is_unlimited:
            supplies[supplies.index(longest)] = Supply(
                name=longest.name, length=longest.length, price=longest.price, max_quantity=UNLIMITED
            )

        max_part_cm = min(cfg.part_cm_range[1], int(longest.length * 100))
        parts = [
            Part(
                name=f"P{i + 1:02d}",
                length=Fraction(rnd.randint(cfg.part_cm_range[0], max_part_cm), 100),
                quantity=rnd.randint(*cfg.qty_range),
            )
            for i in range(rnd.randint(*cfg.n_parts))
        ]

        problem[Material(f"M{m + 1}")] = SubProblem(supplies=tuple(supplies), parts=tuple(parts), blade_width=blade)

    return problem


def merge_problems(*problems: Problem) -> Problem:
    """
    Merge problems; materials with the same name are concatenated
    (blade width of the first occurrence wins).
    """
    out: Problem = {}
    for problem in problems:
        for material, sub in problem.items():
            if material not in out:
                out[material] = sub
                continue
            prev = out[material]
            out[material] = SubProblem(
                supplies=prev.supplies + sub.supplies,
                parts=prev.parts + sub.parts,
                blade_width=prev.blade_width,
            )
    return out

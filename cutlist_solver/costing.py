# cutlist_solver/costing.py
# Material cost utilities:
# - total price of a solution (sum of supply price x pieces cut)
# - per-supply consumption counts ("how many of each did we use")
# - shopping list / per-material cost summary for reporting
#
# Notes:
# - A supply with price 0 is on hand; it counts towards consumption but not cost.
# - These functions assume a consistent Solution (indices in range). An
#   IndexError here means the solver produced a broken plan.

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List

from .types import Material, Solution, SubSolution, Supply


@dataclass(frozen=True)
class ShoppingItem:
    material: Material
    supply_index: int
    supply: Supply
    count: int

    @property
    def subtotal(self) -> Decimal:
        return self.supply.price * self.count


@dataclass(frozen=True)
class MaterialCost:
    material: Material
    pieces: int
    pieces_purchased: int
    cost: Decimal


@dataclass(frozen=True)
class SolutionCost:
    materials: List[MaterialCost]
    total_pieces: int
    total_pieces_purchased: int
    total_cost: Decimal


def sub_solution_price(sub: SubSolution) -> Decimal:
    total = Decimal(0)
    for cl in sub.cut_lists:
        total += sub.supplies[cl.supply_index].price * cl.quantity
    return total


def total_price(solution: Solution) -> Decimal:
    """Sum over every cut list of supply.price * cut_list.quantity."""
    total = Decimal(0)
    for sub in solution.values():
        total += sub_solution_price(sub)
    return total


def sub_solution_consumption(sub: SubSolution) -> List[int]:
    counts = [0] * len(sub.supplies)
    for cl in sub.cut_lists:
        counts[cl.supply_index] += cl.quantity
    return counts


def supply_consumption(solution: Solution) -> Dict[Material, List[int]]:
    """Per material, how many pieces of each supply (by index) the plan uses."""
    return {material: sub_solution_consumption(sub) for material, sub in solution.items()}


def shopping_list(solution: Solution, include_free: bool = False) -> List[ShoppingItem]:
    """
    One line per used supply, in material / supply order.
    On-hand (free) supplies are skipped unless include_free=True.
    """
    items: List[ShoppingItem] = []
    for material, sub in solution.items():
        for i, count in enumerate(sub_solution_consumption(sub)):
            if count == 0:
                continue
            supply = sub.supplies[i]
            if supply.price == 0 and not include_free:
                continue
            items.append(ShoppingItem(material=material, supply_index=i, supply=supply, count=count))
    return items


def compute_solution_cost(solution: Solution) -> SolutionCost:
    materials: List[MaterialCost] = []
    t_pieces = 0
    t_bought = 0
    t_cost = Decimal(0)

    for material, sub in solution.items():
        counts = sub_solution_consumption(sub)
        pieces = sum(counts)
        bought = sum(c for i, c in enumerate(counts) if sub.supplies[i].price > 0)
        cost = sub_solution_price(sub)
        materials.append(MaterialCost(material=material, pieces=pieces, pieces_purchased=bought, cost=cost))
        t_pieces += pieces
        t_bought += bought
        t_cost += cost

    return SolutionCost(
        materials=materials,
        total_pieces=t_pieces,
        total_pieces_purchased=t_bought,
        total_cost=t_cost,
    )

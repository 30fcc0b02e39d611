# cutlist_solver/utils.py
# Small utilities used across the project:
# - timing context manager
# - JSON export for solutions (cut lists + consumption + totals)
#
# Exact numbers are written as strings ("3/8", "3.50") so nothing is rounded
# on the way out.

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from .costing import sub_solution_consumption, sub_solution_price, total_price
from .metrics import compute_solution_metrics, compute_sub_solution_metrics, used_length
from .types import Solution


@contextmanager
def timer(label: str = "timer") -> Iterator[Dict[str, float]]:
    """
    Usage:
      with timer("solve") as t:
          ...
      print(t["seconds"])
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["seconds"] = time.perf_counter() - t0


def solution_to_dict(sol: Solution) -> Dict[str, Any]:
    """
    Convert Solution to a JSON-friendly dict.
    Lengths are meters as exact fraction strings, prices are decimal strings.
    """
    materials = []
    for material, sub in sol.items():
        m = compute_sub_solution_metrics(sub)
        materials.append(
            {
                "material": material.name,
                "blade_width": str(sub.blade_width),
                "cut_lists": [
                    {
                        "supply_index": cl.supply_index,
                        "supply": sub.supply_of(cl).name,
                        "quantity": cl.quantity,
                        "part_indices": list(cl.part_indices),
                        "parts": [p.name for p in sub.parts_of(cl)],
                        "used_length": str(used_length(sub, cl)),
                    }
                    for cl in sub.cut_lists
                ],
                "consumption": [
                    {"supply_index": i, "supply": s.name, "count": n}
                    for i, (s, n) in enumerate(zip(sub.supplies, sub_solution_consumption(sub)))
                    if n
                ],
                "price": str(sub_solution_price(sub)),
                "offcut_length": str(m.offcut_length),
            }
        )

    t = compute_solution_metrics(sol)
    return {
        "materials": materials,
        "totals": {
            "pieces": sol.num_pieces(),
            "price": str(total_price(sol)),
            "stock_length": str(t.stock_length),
            "parts_length": str(t.parts_length),
            "offcut_length": str(t.offcut_length),
            "utilization": round(t.utilization, 4),
        },
    }


def save_solution_json(sol: Solution, path: str | Path, *, indent: int = 2) -> None:
    """Save the plan into JSON for integration with other tools."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(solution_to_dict(sol), f, ensure_ascii=False, indent=indent)

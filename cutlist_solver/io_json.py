# cutlist_solver/io_json.py
# Load / save cut-list jobs as JSON.
#
# Expected JSON shape:
# {
#   "unit": "feet_inches",                  # optional, default meters
#   "blade_width": [0, "1/8"],              # optional, default for every material
#   "materials": [
#     {
#       "name": "Pine 2x4",
#       "blade_width": [0, "1/8"],          # optional override
#       "supplies": [{"name": "8ft stud", "length": 8, "price": "3.50", "max_quantity": null}],
#       "parts":    [{"name": "Leg", "length": [2, "7 1/2"], "quantity": 4}]
#     }
#   ]
# }
#
# Lengths are numbers, strings ("3/8", "7 1/2") or [major, minor] pairs in the
# job unit; they are converted to meters. max_quantity null/absent = unlimited.

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from .config import DEFAULTS, parse_unit_text
from .measure import to_price
from .types import UNLIMITED, Material, Part, Problem, SubProblem, Supply
from .units import LengthUnit, from_meters, to_meters


@dataclass(frozen=True)
class JsonLoadResult:
    problem: Problem
    unit: LengthUnit


def _length(value: Any, unit: LengthUnit, what: str):
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ValueError(f"{what}: [major, minor] pair expected, got {value!r}")
        return to_meters(value[0], value[1], unit)
    if value is None:
        raise ValueError(f"{what}: missing length")
    return to_meters(value, 0, unit)


def _count(value: Any, what: str) -> int:
    # whole numbers only; 2.7 or true must not turn into a smaller demand
    if isinstance(value, bool):
        raise ValueError(f"{what}: integer expected, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise ValueError(f"{what}: integer expected, got {value!r}")


def _max_quantity(value: Any, what: str) -> int:
    if value is None:
        return UNLIMITED
    return _count(value, what)


def problem_from_dict(data: Dict[str, Any]) -> JsonLoadResult:
    unit = parse_unit_text(data["unit"]) if data.get("unit") else DEFAULTS.default_unit

    default_blade = data.get("blade_width")
    materials = data.get("materials") or []
    if not materials:
        raise ValueError("JSON missing 'materials'.")

    problem: Problem = {}
    for md in materials:
        name = str(md.get("name") or "").strip()
        if not name:
            raise ValueError(f"Material missing name: {md}")
        material = Material(name)
        if material in problem:
            raise ValueError(f"Duplicate material {name!r}")

        blade_raw = md.get("blade_width", default_blade)
        blade = (
            _length(blade_raw, unit, f"{name}.blade_width")
            if blade_raw is not None
            else DEFAULTS.default_blade_width
        )

        supplies: List[Supply] = []
        for k, sd in enumerate(md.get("supplies") or []):
            supplies.append(
                Supply(
                    name=str(sd.get("name") or f"Supply {k + 1}"),
                    length=_length(sd.get("length"), unit, f"{name}.supplies[{k}]"),
                    price=to_price(sd.get("price", 0)),
                    max_quantity=_max_quantity(sd.get("max_quantity"), f"{name}.supplies[{k}].max_quantity"),
                )
            )

        parts: List[Part] = []
        for k, pd in enumerate(md.get("parts") or []):
            parts.append(
                Part(
                    name=str(pd.get("name") or f"Part {k + 1}"),
                    length=_length(pd.get("length"), unit, f"{name}.parts[{k}]"),
                    quantity=_count(pd.get("quantity", pd.get("qty", 1)), f"{name}.parts[{k}].quantity"),
                )
            )

        problem[material] = SubProblem(supplies=tuple(supplies), parts=tuple(parts), blade_width=blade)

    return JsonLoadResult(problem=problem, unit=unit)


def load_job_json(path: str | Path) -> JsonLoadResult:
    """Load a job file and convert it to a Problem (lengths in meters)."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return problem_from_dict(data)


def _length_out(meters, unit: LengthUnit):
    major, minor = from_meters(meters, unit)
    if unit.has_minor:
        return [str(major), str(minor)]
    return str(major)


def problem_to_dict(problem: Problem, unit: LengthUnit = LengthUnit.METERS) -> Dict[str, Any]:
    """Inverse of problem_from_dict; lengths are written as exact fraction strings."""
    return {
        "unit": unit.value,
        "materials": [
            {
                "name": material.name,
                "blade_width": _length_out(sub.blade_width, unit),
                "supplies": [
                    {
                        "name": s.name,
                        "length": _length_out(s.length, unit),
                        "price": str(s.price),
                        "max_quantity": None if s.is_unlimited else s.max_quantity,
                    }
                    for s in sub.supplies
                ],
                "parts": [
                    {"name": p.name, "length": _length_out(p.length, unit), "quantity": p.quantity}
                    for p in sub.parts
                ],
            }
            for material, sub in problem.items()
        ],
    }


def save_job_json(problem: Problem, path: str | Path, unit: LengthUnit = LengthUnit.METERS) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(problem_to_dict(problem, unit), f, ensure_ascii=False, indent=2)

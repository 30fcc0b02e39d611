# cutlist_solver/validate.py
# Validation utilities:
# - cut list indices point at existing supplies / parts
# - every part's demand is met exactly
# - every pattern fits its supply piece (parts + kerf)
# - limited supplies are not over-consumed
#
# Useful both during development and to sanity-check solver output.

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .costing import sub_solution_consumption
from .types import SubSolution, Solution, pattern_length


@dataclass(frozen=True)
class ValidationIssue:
    level: str   # "ERROR" or "WARN"
    message: str
    material: Optional[str] = None
    cut_list_index: Optional[int] = None


def validate_indices(sub: SubSolution, material: Optional[str] = None) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for k, cl in enumerate(sub.cut_lists):
        if not (0 <= cl.supply_index < len(sub.supplies)):
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"supply_index {cl.supply_index} out of range [0,{len(sub.supplies)})",
                    material=material,
                    cut_list_index=k,
                )
            )
        bad = [i for i in cl.part_indices if not (0 <= i < len(sub.parts))]
        if bad:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"part indices {bad} out of range [0,{len(sub.parts)})",
                    material=material,
                    cut_list_index=k,
                )
            )
    return issues


def validate_demand(sub: SubSolution, material: Optional[str] = None) -> List[ValidationIssue]:
    cut = [0] * len(sub.parts)
    for cl in sub.cut_lists:
        for i in cl.part_indices:
            cut[i] += cl.quantity

    issues: List[ValidationIssue] = []
    for part, n in zip(sub.parts, cut):
        if n != part.quantity:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Part {part.name!r}: {n} cut, {part.quantity} required",
                    material=material,
                )
            )
    return issues


def validate_capacity(sub: SubSolution, material: Optional[str] = None) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for k, cl in enumerate(sub.cut_lists):
        supply = sub.supply_of(cl)
        used = pattern_length(sub.parts_of(cl), sub.blade_width)
        if used > supply.length:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Pattern needs {used} but supply {supply.name!r} is {supply.length} long",
                    material=material,
                    cut_list_index=k,
                )
            )
        if not cl.part_indices:
            issues.append(
                ValidationIssue(
                    level="WARN",
                    message="Cut list has no parts",
                    material=material,
                    cut_list_index=k,
                )
            )
    return issues


def validate_availability(sub: SubSolution, material: Optional[str] = None) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for supply, used in zip(sub.supplies, sub_solution_consumption(sub)):
        if not supply.is_unlimited and used > supply.max_quantity:
            issues.append(
                ValidationIssue(
                    level="ERROR",
                    message=f"Supply {supply.name!r}: {used} used, only {supply.max_quantity} available",
                    material=material,
                )
            )
    return issues


def validate_solution(sol: Solution) -> List[ValidationIssue]:
    """
    Validate entire solution across materials.
    Returns a list of issues (empty if OK).
    """
    issues: List[ValidationIssue] = []

    for material, sub in sol.items():
        index_issues = validate_indices(sub, material.name)
        issues.extend(index_issues)
        if index_issues:
            # remaining checks would index out of range
            continue
        issues.extend(validate_demand(sub, material.name))
        issues.extend(validate_capacity(sub, material.name))
        issues.extend(validate_availability(sub, material.name))

    if len(sol) == 0:
        issues.append(ValidationIssue(level="WARN", message="Solution has 0 materials."))

    return issues


def raise_on_errors(issues: Iterable[ValidationIssue]) -> None:
    errs = [i for i in issues if i.level.upper() == "ERROR"]
    if errs:
        msg = "\n".join(
            f"[{e.level}] material={e.material} cut_list={e.cut_list_index} :: {e.message}" for e in errs
        )
        raise ValueError("Validation failed:\n" + msg)
